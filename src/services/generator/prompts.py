"""Prompt construction for README generation."""

from src.constants import MAX_ROOT_FILES
from src.models.repository import RepositoryDescriptor

README_SECTIONS = (
    "Project Title with badges (including a \"Private\" badge if applicable)",
    "Description (comprehensive and detailed)",
    "Access & Security Notice",
    "Key Features",
    "Tech Stack",
    "Prerequisites",
    "Installation Guide",
    "Configuration (if applicable)",
    "Usage Examples",
    "Project Structure",
    "Contributing Guidelines",
    "License Information",
    "Contact/Support",
)

PRIVATE_INSTRUCTION = (
    "Since this is a PRIVATE repository, ensure the README includes appropriate "
    "security notices and access instructions."
)
PUBLIC_NOTICE_INSTRUCTION = (
    "This is a public repository: keep the Access & Security Notice section short and "
    "state that the code is publicly available."
)


def _join(values: tuple[str, ...] | list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def build_prompt(descriptor: RepositoryDescriptor) -> str:
    """Build the single prompt sent to the generative backend.

    Every descriptor field is embedded and the model is asked for the thirteen
    README sections in a fixed order.
    """
    visibility = descriptor.visibility.upper()
    sections = "\n".join(f"{i}. {title}" for i, title in enumerate(README_SECTIONS, start=1))

    lines = [
        f"Generate a professional and comprehensive README.md file for a {visibility} "
        "GitHub repository with the following information:",
        "",
        f"Repository Name: {descriptor.name}",
        f"Description: {descriptor.description or 'No description provided'}",
        f"Private Repository: {'Yes' if descriptor.private else 'No'}",
        f"Repository URL: {descriptor.url or 'Not available'}",
        f"Main Language: {descriptor.language or 'Not specified'}",
        f"All Languages: {_join(descriptor.languages, 'Not specified')}",
        f"Topics/Tags: {_join(descriptor.topics, 'None')}",
        f"Files in root directory: {_join(descriptor.root_files[:MAX_ROOT_FILES], 'None')}",
        f"License: {descriptor.license or 'No license'}",
        f"Stars: {descriptor.stars}",
        f"Forks: {descriptor.forks}",
        f"Watchers: {descriptor.watchers}",
        f"Open Issues: {descriptor.open_issues}",
        f"Default Branch: {descriptor.default_branch or 'Not specified'}",
        f"Created At: {descriptor.created_at or 'Unknown'}",
        f"Last Updated: {descriptor.updated_at or 'Unknown'}",
        f"Last Commit: {descriptor.last_commit_message}",
        "",
        PRIVATE_INSTRUCTION if descriptor.private else PUBLIC_NOTICE_INSTRUCTION,
        "",
        "Please generate a complete, professional README with ALL of these sections, "
        "in this order:",
        sections,
        "",
        "Use proper markdown formatting, emojis, and shields.io badges. "
        "Return only the README content.",
    ]
    return "\n".join(lines)
