"""Normalized repository metadata and generated documents."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from src.constants import MAX_ROOT_FILES, NO_COMMITS_MESSAGE


@dataclass(frozen=True)
class RepositoryDescriptor:
    """Canonical view of a GitHub repository used for README generation."""

    name: str
    description: str | None = None
    private: bool = False
    stars: int = 0
    forks: int = 0
    language: str | None = None
    languages: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    license: str | None = None
    root_files: tuple[str, ...] = ()
    root_entry_count: int = 0
    url: str = ""
    created_at: str | None = None
    updated_at: str | None = None
    open_issues: int = 0
    watchers: int = 0
    default_branch: str | None = None
    last_commit_message: str = NO_COMMITS_MESSAGE

    @property
    def visibility(self) -> Literal["private", "public"]:
        return "private" if self.private else "public"

    @property
    def hidden_root_entries(self) -> int:
        """Number of root entries not listed in ``root_files``."""
        return max(self.root_entry_count - len(self.root_files), 0)

    def uses(self, language: str) -> bool:
        """Check whether the repository is written (partly) in ``language``."""
        return self.language == language or language in self.languages

    @classmethod
    def from_github(
        cls,
        profile: dict[str, Any],
        languages: dict[str, int],
        contents: list[dict[str, Any]],
        commits: list[dict[str, Any]],
    ) -> "RepositoryDescriptor":
        """Build a descriptor from raw GitHub REST payloads."""
        license_info = profile.get("license") or {}
        names = [item["name"] for item in contents if item.get("name")]
        last_commit = NO_COMMITS_MESSAGE
        if commits:
            last_commit = (commits[0].get("commit") or {}).get("message") or NO_COMMITS_MESSAGE

        return cls(
            name=profile["name"],
            description=profile.get("description"),
            private=bool(profile.get("private")),
            stars=profile.get("stargazers_count") or 0,
            forks=profile.get("forks_count") or 0,
            language=profile.get("language"),
            languages=tuple(languages),
            topics=tuple(profile.get("topics") or ()),
            license=license_info.get("name"),
            root_files=tuple(names[:MAX_ROOT_FILES]),
            root_entry_count=len(names),
            url=profile.get("html_url") or "",
            created_at=profile.get("created_at"),
            updated_at=profile.get("updated_at"),
            open_issues=profile.get("open_issues_count") or 0,
            watchers=profile.get("watchers_count") or 0,
            default_branch=profile.get("default_branch"),
            last_commit_message=last_commit,
        )


@dataclass(frozen=True)
class RepositorySummary:
    """Entry in the authenticated user's repository listing."""

    name: str
    full_name: str
    description: str | None
    private: bool
    url: str
    language: str | None
    stars: int
    updated_at: str | None

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> "RepositorySummary":
        return cls(
            name=payload["name"],
            full_name=payload.get("full_name") or payload["name"],
            description=payload.get("description"),
            private=bool(payload.get("private")),
            url=payload.get("html_url") or "",
            language=payload.get("language"),
            stars=payload.get("stargazers_count") or 0,
            updated_at=payload.get("updated_at"),
        )


@dataclass(frozen=True)
class RepositoryPage:
    """One page of the user's repositories."""

    repositories: list[RepositorySummary] = field(default_factory=list)
    page: int = 1
    page_size: int = 30

    @property
    def total(self) -> int:
        return len(self.repositories)

    @property
    def has_more(self) -> bool:
        return len(self.repositories) == self.page_size


class DocumentSource(str, Enum):
    """Where a generated README came from."""

    AI = "ai"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class GeneratedDocument:
    """A README body and its provenance."""

    body: str
    source: DocumentSource

    @property
    def length(self) -> int:
        return len(self.body)
