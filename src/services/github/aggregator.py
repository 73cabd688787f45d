"""Repository metadata aggregation.

Fetches the four GitHub resources a README needs in parallel and folds them
into a ``RepositoryDescriptor``. The profile and language calls are required;
the root listing and latest commit are best-effort and degrade to empty
values when they fail.
"""

import asyncio
import re
from typing import Any

import httpx

from src.constants import (
    DEFAULT_REPO_SORT,
    DEFAULT_REPO_TYPE,
    DEFAULT_REPOS_PAGE_SIZE,
    MAX_REPOS_PAGE_SIZE,
    VALID_REPO_SORTS,
    VALID_REPO_TYPES,
)
from src.errors import (
    AppError,
    AuthExpiredError,
    AuthRequiredError,
    ForbiddenError,
    InvalidRepositoryUrlError,
    NotFoundError,
    RateLimitError,
    UnknownFetchError,
)
from src.models.repository import RepositoryDescriptor, RepositoryPage, RepositorySummary
from src.services.github.client import GitHubAPIError, GitHubClient
from src.utils.logging import get_logger, LogContext

logger = get_logger(__name__)

GITHUB_REPO_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)"
)


def parse_repository_url(url: str | None) -> tuple[str, str]:
    """Extract ``(owner, repo)`` from a GitHub repository URL.

    Accepts ``https://github.com/owner/repo`` with optional ``.git`` suffix,
    trailing path, query string or fragment.

    Raises:
        InvalidRepositoryUrlError: If the URL does not point at a repository
    """
    if not url or not url.strip():
        raise InvalidRepositoryUrlError("Repository URL is required.")

    match = GITHUB_REPO_URL_PATTERN.match(url.strip())
    if not match:
        raise InvalidRepositoryUrlError()

    owner, repo = match.groups()
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo or repo in (".", ".."):
        raise InvalidRepositoryUrlError()
    return owner, repo


def classify_fetch_error(error: BaseException) -> AppError:
    """Map a failed required GitHub call onto the application error taxonomy."""
    if isinstance(error, AppError):
        return error
    if isinstance(error, GitHubAPIError):
        if error.status_code == 401:
            return AuthExpiredError()
        if error.rate_limited and error.status_code in (403, 429):
            return RateLimitError()
        if error.status_code == 403:
            return ForbiddenError()
        if error.status_code == 404:
            return NotFoundError()
    if isinstance(error, httpx.TimeoutException):
        return UnknownFetchError("GitHub did not respond in time. Please try again.")
    return UnknownFetchError()


class RepositoryAggregator:
    """Builds repository descriptors and listings from the GitHub API."""

    def __init__(self, github: GitHubClient) -> None:
        self._github = github

    async def fetch(
        self, owner: str, repo: str, credential: str | None = None
    ) -> RepositoryDescriptor:
        """Fetch and normalize everything known about ``owner/repo``.

        All four calls run concurrently and are joined only once every one of
        them has settled.

        Raises:
            AuthExpiredError, RateLimitError, ForbiddenError, NotFoundError,
            UnknownFetchError: When the profile or language call fails
        """
        log = LogContext(logger, owner=owner, repo=repo)
        log.info(f"Fetching repository data ({'authenticated' if credential else 'anonymous'})")

        profile, languages, contents, commits = await asyncio.gather(
            self._github.get_repository(owner, repo, credential),
            self._github.get_languages(owner, repo, credential),
            self._github.get_root_contents(owner, repo, credential),
            self._github.get_latest_commits(owner, repo, credential),
            return_exceptions=True,
        )

        for outcome in (profile, languages):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                error = classify_fetch_error(outcome)
                log.warning(f"Required call failed: {outcome!r} -> {error.kind.name}")
                raise error from outcome

        contents = self._best_effort(log, "root listing", contents, [])
        commits = self._best_effort(log, "latest commit", commits, [])

        try:
            return RepositoryDescriptor.from_github(profile, languages, contents, commits)
        except (KeyError, TypeError, AttributeError) as e:
            log.error(f"Unexpected repository payload: {e!r}")
            raise UnknownFetchError() from e

    @staticmethod
    def _best_effort(log: LogContext, label: str, outcome: Any, default: Any) -> Any:
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            log.info(f"Ignoring failed {label}: {outcome!r}")
            return default
        return outcome

    async def list_repositories(
        self,
        credential: str | None,
        visibility: str = DEFAULT_REPO_TYPE,
        sort: str = DEFAULT_REPO_SORT,
        page_size: int = DEFAULT_REPOS_PAGE_SIZE,
        page: int = 1,
    ) -> RepositoryPage:
        """List the authenticated user's repositories.

        Raises:
            AuthRequiredError: If no credential is available
            AuthExpiredError: If GitHub rejects the credential
            UnknownFetchError: On any other failure
        """
        if not credential:
            raise AuthRequiredError()

        if visibility not in VALID_REPO_TYPES:
            visibility = DEFAULT_REPO_TYPE
        if sort not in VALID_REPO_SORTS:
            sort = DEFAULT_REPO_SORT
        page_size = min(max(page_size, 1), MAX_REPOS_PAGE_SIZE)
        page = max(page, 1)

        try:
            payload = await self._github.list_user_repositories(
                credential, repo_type=visibility, sort=sort, per_page=page_size, page=page
            )
        except GitHubAPIError as e:
            if e.status_code == 401:
                raise AuthExpiredError("Authentication expired. Please login again.") from e
            logger.error(f"Error fetching repositories: {e}")
            raise UnknownFetchError("Failed to fetch repositories.") from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching repositories: {e!r}")
            raise UnknownFetchError("Failed to fetch repositories.") from e

        return RepositoryPage(
            repositories=[RepositorySummary.from_github(item) for item in payload],
            page=page,
            page_size=page_size,
        )
