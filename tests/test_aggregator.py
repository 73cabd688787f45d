"""Tests for repository URL parsing and metadata aggregation."""

import httpx
import pytest

from src.constants import MAX_ROOT_FILES, NO_COMMITS_MESSAGE
from src.errors import (
    AuthExpiredError,
    AuthRequiredError,
    ForbiddenError,
    InvalidRepositoryUrlError,
    NotFoundError,
    RateLimitError,
    UnknownFetchError,
)
from src.services.github.aggregator import classify_fetch_error, parse_repository_url
from src.services.github.client import GitHubAPIError
from tests.conftest import ACCESS_TOKEN, OWNER, REPO

REPO_PATH = f"/repos/{OWNER}/{REPO}"


class TestParseRepositoryUrl:
    """Tests for extracting owner and repository from a URL."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octocat/hello-world",
            "https://github.com/octocat/hello-world.git",
            "https://github.com/octocat/hello-world/tree/main/src",
            "https://www.github.com/octocat/hello-world?tab=readme",
            "http://github.com/octocat/hello-world#install",
            "github.com/octocat/hello-world",
            "  https://github.com/octocat/hello-world  ",
        ],
    )
    def test_valid_urls(self, url):
        assert parse_repository_url(url) == ("octocat", "hello-world")

    def test_dotted_names(self):
        assert parse_repository_url("https://github.com/my.org/my.lib") == ("my.org", "my.lib")

    @pytest.mark.parametrize(
        "url",
        [
            "not-a-url",
            "https://gitlab.com/octocat/hello-world",
            "https://github.com/octocat",
            "https://github.com/",
            "https://example.com/github.com/octocat/hello-world",
        ],
    )
    def test_invalid_urls(self, url):
        with pytest.raises(InvalidRepositoryUrlError):
            parse_repository_url(url)

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing_url(self, url):
        with pytest.raises(InvalidRepositoryUrlError, match="required"):
            parse_repository_url(url)


class TestClassifyFetchError:
    """Tests for mapping GitHub failures onto error kinds."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (GitHubAPIError(401), AuthExpiredError),
            (GitHubAPIError(403, rate_limited=True), RateLimitError),
            (GitHubAPIError(429, rate_limited=True), RateLimitError),
            (GitHubAPIError(403), ForbiddenError),
            (GitHubAPIError(404), NotFoundError),
            (GitHubAPIError(502), UnknownFetchError),
            (httpx.ReadTimeout("slow"), UnknownFetchError),
            (ValueError("bad json"), UnknownFetchError),
        ],
    )
    def test_classification(self, error, expected):
        assert isinstance(classify_fetch_error(error), expected)

    def test_requires_auth_hints(self):
        assert classify_fetch_error(GitHubAPIError(404)).requires_auth is True
        assert classify_fetch_error(GitHubAPIError(401)).requires_auth is True
        assert classify_fetch_error(GitHubAPIError(403, rate_limited=True)).requires_auth is False
        assert classify_fetch_error(GitHubAPIError(500)).requires_auth is False


class TestFetch:
    """Tests for building a repository descriptor."""

    @pytest.mark.asyncio
    async def test_descriptor_from_all_four_calls(self, aggregator):
        descriptor = await aggregator.fetch(OWNER, REPO)

        assert descriptor.name == REPO
        assert descriptor.description == "My first repository on GitHub!"
        assert descriptor.private is False
        assert descriptor.visibility == "public"
        assert descriptor.stars == 80
        assert descriptor.forks == 9
        assert descriptor.language == "Python"
        assert descriptor.languages == ("Python", "Shell")
        assert descriptor.topics == ("octocat", "api")
        assert descriptor.license == "MIT License"
        assert descriptor.root_files == ("README.md", "main.py", "requirements.txt")
        assert descriptor.url == f"https://github.com/{OWNER}/{REPO}"
        assert descriptor.default_branch == "main"
        assert descriptor.last_commit_message == "Initial commit"

    @pytest.mark.asyncio
    async def test_anonymous_fetch_sends_no_credential(self, aggregator, fake_github):
        await aggregator.fetch(OWNER, REPO)

        assert len(fake_github.calls) == 4
        assert all("Authorization" not in request.headers for request in fake_github.calls)

    @pytest.mark.asyncio
    async def test_credential_is_sent_on_every_call(self, aggregator, fake_github):
        await aggregator.fetch(OWNER, REPO, credential=ACCESS_TOKEN)

        assert len(fake_github.calls) == 4
        assert all(
            request.headers["Authorization"] == f"Bearer {ACCESS_TOKEN}" for request in fake_github.calls
        )

    @pytest.mark.asyncio
    async def test_root_listing_is_truncated(self, aggregator, fake_github):
        entries = [{"name": f"file{i}.txt", "type": "file"} for i in range(15)]
        fake_github.add("GET", f"{REPO_PATH}/contents", json=entries)

        descriptor = await aggregator.fetch(OWNER, REPO)

        assert len(descriptor.root_files) == MAX_ROOT_FILES
        assert descriptor.root_files[0] == "file0.txt"
        assert descriptor.hidden_root_entries == 5

    @pytest.mark.asyncio
    async def test_best_effort_failures_degrade(self, aggregator, fake_github):
        fake_github.add("GET", f"{REPO_PATH}/contents", status=500, json={"message": "boom"})
        fake_github.add("GET", f"{REPO_PATH}/commits", status=409, json={"message": "Git Repository is empty."})

        descriptor = await aggregator.fetch(OWNER, REPO)

        assert descriptor.root_files == ()
        assert descriptor.last_commit_message == NO_COMMITS_MESSAGE
        assert descriptor.name == REPO

    @pytest.mark.asyncio
    async def test_empty_commit_list(self, aggregator, fake_github):
        fake_github.add("GET", f"{REPO_PATH}/commits", json=[])

        descriptor = await aggregator.fetch(OWNER, REPO)

        assert descriptor.last_commit_message == NO_COMMITS_MESSAGE

    @pytest.mark.asyncio
    async def test_missing_optional_profile_fields(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, json={"name": REPO, "private": True, "license": None})

        descriptor = await aggregator.fetch(OWNER, REPO)

        assert descriptor.visibility == "private"
        assert descriptor.description is None
        assert descriptor.license is None
        assert descriptor.topics == ()
        assert descriptor.stars == 0

    @pytest.mark.asyncio
    async def test_profile_not_found(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, status=404, json={"message": "Not Found"})

        with pytest.raises(NotFoundError) as exc_info:
            await aggregator.fetch(OWNER, REPO)

        assert exc_info.value.requires_auth is True

    @pytest.mark.asyncio
    async def test_languages_failure_is_fatal(self, aggregator, fake_github):
        fake_github.add("GET", f"{REPO_PATH}/languages", status=500, json={"message": "boom"})

        with pytest.raises(UnknownFetchError):
            await aggregator.fetch(OWNER, REPO)

    @pytest.mark.asyncio
    async def test_all_calls_settle_before_failing(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, status=404, json={"message": "Not Found"})

        with pytest.raises(NotFoundError):
            await aggregator.fetch(OWNER, REPO)

        assert len(fake_github.calls) == 4

    @pytest.mark.asyncio
    async def test_expired_credential(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, status=401, json={"message": "Bad credentials"})

        with pytest.raises(AuthExpiredError):
            await aggregator.fetch(OWNER, REPO, credential=ACCESS_TOKEN)

    @pytest.mark.asyncio
    async def test_rate_limit_by_header(self, aggregator, fake_github):
        fake_github.add(
            "GET",
            REPO_PATH,
            status=403,
            json={"message": "Forbidden"},
            headers={"x-ratelimit-remaining": "0"},
        )

        with pytest.raises(RateLimitError):
            await aggregator.fetch(OWNER, REPO)

    @pytest.mark.asyncio
    async def test_rate_limit_by_message(self, aggregator, fake_github):
        fake_github.add(
            "GET", REPO_PATH, status=403, json={"message": "API rate limit exceeded for 1.2.3.4."}
        )

        with pytest.raises(RateLimitError):
            await aggregator.fetch(OWNER, REPO)

    @pytest.mark.asyncio
    async def test_plain_forbidden(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, status=403, json={"message": "Resource not accessible"})

        with pytest.raises(ForbiddenError):
            await aggregator.fetch(OWNER, REPO)

    @pytest.mark.asyncio
    async def test_malformed_profile(self, aggregator, fake_github):
        fake_github.add("GET", REPO_PATH, json={"description": "no name"})

        with pytest.raises(UnknownFetchError):
            await aggregator.fetch(OWNER, REPO)


class TestListRepositories:
    """Tests for listing the authenticated user's repositories."""

    @staticmethod
    def repo_payload(index: int) -> dict:
        return {
            "name": f"repo-{index}",
            "full_name": f"{OWNER}/repo-{index}",
            "private": index % 2 == 0,
            "html_url": f"https://github.com/{OWNER}/repo-{index}",
            "language": "Python",
            "stargazers_count": index,
            "updated_at": "2024-05-01T10:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_requires_credential(self, aggregator, fake_github):
        with pytest.raises(AuthRequiredError):
            await aggregator.list_repositories(None)
        assert fake_github.calls == []

    @pytest.mark.asyncio
    async def test_lists_page(self, aggregator, fake_github):
        fake_github.add("GET", "/user/repos", json=[self.repo_payload(i) for i in range(2)])

        page = await aggregator.list_repositories(ACCESS_TOKEN, page_size=2, page=3)

        assert [repo.full_name for repo in page.repositories] == [f"{OWNER}/repo-0", f"{OWNER}/repo-1"]
        assert page.repositories[0].private is True
        assert page.total == 2
        assert page.page == 3
        assert page.has_more is True
        (request,) = fake_github.calls_to("/user/repos")
        assert request.url.params["per_page"] == "2"
        assert request.url.params["page"] == "3"

    @pytest.mark.asyncio
    async def test_short_page_has_no_more(self, aggregator, fake_github):
        fake_github.add("GET", "/user/repos", json=[self.repo_payload(0)])

        page = await aggregator.list_repositories(ACCESS_TOKEN)

        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_invalid_filters_fall_back_to_defaults(self, aggregator, fake_github):
        fake_github.add("GET", "/user/repos", json=[])

        await aggregator.list_repositories(ACCESS_TOKEN, visibility="secret", sort="random", page_size=500)

        (request,) = fake_github.calls_to("/user/repos")
        assert request.url.params["type"] == "all"
        assert request.url.params["sort"] == "updated"
        assert request.url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_expired_credential(self, aggregator, fake_github):
        fake_github.add("GET", "/user/repos", status=401, json={"message": "Bad credentials"})

        with pytest.raises(AuthExpiredError):
            await aggregator.list_repositories(ACCESS_TOKEN)

    @pytest.mark.asyncio
    async def test_other_failures(self, aggregator, fake_github):
        fake_github.add("GET", "/user/repos", status=500, json={"message": "boom"})

        with pytest.raises(UnknownFetchError, match="Failed to fetch repositories"):
            await aggregator.list_repositories(ACCESS_TOKEN)
