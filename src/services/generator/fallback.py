"""Template README used when the generative backend is unavailable.

``synthesize`` is a pure function of the descriptor: the same descriptor
always yields byte-identical output. All thirteen sections are emitted in a
fixed order; fields the repository does not have are left out of their
section rather than replaced with placeholder values.
"""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote

from src.models.repository import RepositoryDescriptor

SECTION_HEADINGS = (
    "## 📝 Description",
    "## 🔒 Access & Security",
    "## ✨ Features",
    "## 🛠️ Tech Stack",
    "## 📋 Prerequisites",
    "## 🚀 Installation",
    "## ⚙️ Configuration",
    "## 💻 Usage",
    "## 📁 Project Structure",
    "## 🤝 Contributing",
    "## 📄 License",
    "## 📧 Contact",
)

(
    DESCRIPTION,
    ACCESS,
    FEATURES,
    TECH_STACK,
    PREREQUISITES,
    INSTALLATION,
    CONFIGURATION,
    USAGE,
    STRUCTURE,
    CONTRIBUTING,
    LICENSE,
    CONTACT,
) = SECTION_HEADINGS

CONFIG_FILES = (".env.example", ".env.sample", "config.json", "config.yml", "config.yaml", "settings.py")
CONTAINER_FILES = ("Dockerfile", "docker-compose.yml", "docker-compose.yaml", "compose.yaml")


@dataclass(frozen=True)
class Toolchain:
    prerequisite: str
    install: str
    run: str


# Order matters: it fixes the order of generated commands
TOOLCHAINS = (
    ("JavaScript", Toolchain("Node.js and npm installed", "npm install", "npm start")),
    ("TypeScript", Toolchain("Node.js and npm installed", "npm install", "npm start")),
    ("Python", Toolchain("Python 3.x installed", "pip install -r requirements.txt", "python main.py")),
    ("Java", Toolchain("Java JDK installed", "mvn install", "java -jar target/app.jar")),
    ("Go", Toolchain("Go installed", "go mod download", "go run .")),
    ("Rust", Toolchain("Rust and Cargo installed", "cargo build --release", "cargo run")),
    ("Ruby", Toolchain("Ruby and Bundler installed", "bundle install", "ruby main.rb")),
)


def _toolchains(descriptor: RepositoryDescriptor) -> list[Toolchain]:
    found: list[Toolchain] = []
    for language, toolchain in TOOLCHAINS:
        if descriptor.uses(language) and toolchain not in found:
            found.append(toolchain)
    return found


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _badge(label: str, message: str | int, color: str) -> str:
    # shields.io static badges escape '-' and '_' by doubling them
    escaped = str(message).replace("-", "--").replace("_", "__")
    return f"![{label}](https://img.shields.io/badge/{quote(label)}-{quote(escaped)}-{color})"


def _format_date(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return None


def _block(heading: str, *lines: str) -> str:
    return "\n".join([heading, "", *lines]).rstrip()


def _title(d: RepositoryDescriptor) -> str:
    badges = [
        _badge("Repository", "Private", "red") if d.private else None,
        _badge("stars", d.stars, "yellow"),
        _badge("forks", d.forks, "blue"),
        _badge("language", d.language, "green") if d.language else None,
        _badge("issues", d.open_issues, "orange"),
        _badge("license", d.license, "lightgrey") if d.license else None,
    ]
    title = f"# {d.name} 🔒" if d.private else f"# {d.name}"
    return "\n".join([title, "", *(badge for badge in badges if badge)])


def _description(d: RepositoryDescriptor) -> str:
    return _block(DESCRIPTION, d.description or "")


def _access(d: RepositoryDescriptor) -> str:
    if d.private:
        return _block(
            ACCESS,
            "This is a private repository. Access is restricted to authorized collaborators only.",
            "",
            "- Do not share the source code or credentials outside the team.",
            "- Request access from the repository owner before cloning.",
        )
    return _block(ACCESS, "This is a public repository. Anyone can view and clone the source code.")


def _features(d: RepositoryDescriptor) -> str:
    updated = _format_date(d.updated_at)
    items = [
        f"- Built with {d.language}" if d.language else None,
        f"- {d.stars} stars on GitHub",
        f"- Active development with {d.forks} forks",
        f"- {d.open_issues} open issues",
        f"- Last updated: {updated}" if updated else None,
        f"- Topics: {', '.join(f'`{topic}`' for topic in d.topics)}" if d.topics else None,
    ]
    return _block(FEATURES, *(item for item in items if item))


def _tech_stack(d: RepositoryDescriptor) -> str:
    languages = list(d.languages) or ([d.language] if d.language else [])
    return _block(TECH_STACK, *(f"- {language}" for language in languages))


def _prerequisites(d: RepositoryDescriptor) -> str:
    items = ["- Git installed on your machine"]
    items += _unique([f"- {toolchain.prerequisite}" for toolchain in _toolchains(d)])
    if d.private:
        items.append("- Access permissions to this private repository")
    return _block(
        PREREQUISITES,
        "Before you begin, ensure you have met the following requirements:",
        *items,
    )


def _installation(d: RepositoryDescriptor) -> str:
    commands = _unique([toolchain.install for toolchain in _toolchains(d)])
    if not commands:
        commands = ["# Install dependencies based on your project type"]
    return _block(
        INSTALLATION,
        "1. Clone the repository:",
        "```bash",
        f"git clone {d.url}" if d.url else "",
        f"cd {d.name}",
        "```",
        "",
        "2. Install dependencies:",
        "```bash",
        *commands,
        "```",
    )


def _configuration(d: RepositoryDescriptor) -> str:
    lines = []
    for name in CONFIG_FILES:
        if name in d.root_files:
            lines.append(f"- Review `{name}` and adjust the values for your environment.")
    if any(name.startswith(".env") for name in d.root_files):
        lines.append("- Copy the example environment file to `.env` before running the project.")
    for name in CONTAINER_FILES:
        if name in d.root_files:
            lines.append(f"- Container setup is described in `{name}`.")
    if not lines:
        lines.append("No additional configuration is required beyond installing dependencies.")
    return _block(CONFIGURATION, *lines)


def _usage(d: RepositoryDescriptor) -> str:
    commands = _unique([toolchain.run for toolchain in _toolchains(d)])
    if not commands:
        commands = ["# Run the project based on your setup"]
    return _block(USAGE, "```bash", *commands, "```")


def _structure(d: RepositoryDescriptor) -> str:
    entries = list(d.root_files)
    hidden = d.hidden_root_entries
    tree = [f"{d.name}/"]
    for index, name in enumerate(entries):
        last = index == len(entries) - 1 and not hidden
        tree.append(f"{'└──' if last else '├──'} {name}")
    if hidden:
        tree.append(f"└── ... and {hidden} more files")
    return _block(STRUCTURE, "```", *tree, "```")


def _contributing(d: RepositoryDescriptor) -> str:
    return _block(
        CONTRIBUTING,
        "Contributions are welcome! Please follow these steps:",
        "",
        "1. Fork the repository",
        "2. Create your feature branch (`git checkout -b feature/AmazingFeature`)",
        "3. Commit your changes (`git commit -m 'Add some AmazingFeature'`)",
        "4. Push to the branch (`git push origin feature/AmazingFeature`)",
        "5. Open a Pull Request",
    )


def _license(d: RepositoryDescriptor) -> str:
    if d.license:
        return _block(LICENSE, f"This project is licensed under the {d.license}.")
    return _block(LICENSE, "This project is not currently licensed.")


def _contact(d: RepositoryDescriptor) -> str:
    lines = [f"- Repository: [{d.name}]({d.url})" if d.url else f"- Repository: {d.name}"]
    if d.private:
        lines.append("- This is a private repository. Contact the repository owner for access.")
    lines += [
        "",
        "---",
        "",
        '<div align="center">',
        "Generated with ❤️ by GitHub README Generator",
        "</div>",
    ]
    return _block(CONTACT, *lines)


SECTION_BUILDERS = (
    _title,
    _description,
    _access,
    _features,
    _tech_stack,
    _prerequisites,
    _installation,
    _configuration,
    _usage,
    _structure,
    _contributing,
    _license,
    _contact,
)


def synthesize(descriptor: RepositoryDescriptor) -> str:
    """Render a complete README from the descriptor alone."""
    return "\n\n".join(build(descriptor) for build in SECTION_BUILDERS) + "\n"
