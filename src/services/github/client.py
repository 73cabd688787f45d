"""GitHub OAuth and REST API client.

Documentation: https://docs.github.com/en/rest
"""

from typing import Any

import httpx

from src.constants import GITHUB_API_ACCEPT, GITHUB_API_BASE_URL, GITHUB_TOKEN_URL
from src.utils.logging import get_logger

logger = get_logger(__name__)


class GitHubAPIError(Exception):
    """Non-success response from GitHub."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        rate_limited: bool = False,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.rate_limited = rate_limited
        super().__init__(f"GitHub returned {status_code}: {message or 'no message'}")


def _is_rate_limited(response: httpx.Response, message: str | None) -> bool:
    if response.status_code == 429:
        return True
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return bool(message and "rate limit" in message.lower())


class GitHubClient:
    """Thin async client for the GitHub endpoints the generator needs.

    Usage:
        client = GitHubClient(http_client, client_id="...", client_secret="...")

        token = await client.exchange_code(code, redirect_uri)
        user = await client.get_authenticated_user(token)
        profile = await client.get_repository("octocat", "hello-world", token)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str = "",
        client_secret: str = "",
        api_base_url: str = GITHUB_API_BASE_URL,
        token_url: str = GITHUB_TOKEN_URL,
    ) -> None:
        self._http = http_client
        self.client_id = client_id
        self._client_secret = client_secret
        self.api_base_url = api_base_url.rstrip("/")
        self.token_url = token_url

    def _get_headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get(
        self,
        endpoint: str,
        token: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET a REST endpoint and return the decoded JSON body.

        Raises:
            GitHubAPIError: On any non-2xx response
            httpx.HTTPError: On transport errors and timeouts
        """
        response = await self._http.get(
            f"{self.api_base_url}{endpoint}",
            headers=self._get_headers(token),
            params=params,
        )
        if response.is_success:
            return response.json()

        message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message")
        except ValueError:
            pass
        logger.debug(f"GitHub GET {endpoint} failed with {response.status_code}: {message}")
        raise GitHubAPIError(
            response.status_code,
            message=message,
            rate_limited=_is_rate_limited(response, message),
        )

    # ============== OAuth ==============

    async def exchange_code(self, code: str, redirect_uri: str) -> str | None:
        """Exchange an OAuth authorization code for an access token.

        Returns:
            The access token, or None when GitHub answered without one
            (expired or reused code, wrong redirect URI)

        Raises:
            GitHubAPIError: When the token endpoint does not answer 200
        """
        response = await self._http.post(
            self.token_url,
            data={
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
            headers={"Accept": "application/json"},
        )
        if response.status_code != 200:
            raise GitHubAPIError(response.status_code, message="Token exchange failed")

        payload = response.json()
        if "error" in payload:
            logger.warning(f"GitHub refused code exchange: {payload.get('error')}")
        return payload.get("access_token") or None

    async def get_authenticated_user(self, token: str) -> dict[str, Any]:
        """Get the profile of the account that owns ``token``."""
        return await self._get("/user", token)

    # ============== Repositories ==============

    async def get_repository(self, owner: str, repo: str, token: str | None = None) -> dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}", token)

    async def get_languages(self, owner: str, repo: str, token: str | None = None) -> dict[str, int]:
        """Get the language byte-share breakdown, largest first."""
        return await self._get(f"/repos/{owner}/{repo}/languages", token)

    async def get_root_contents(
        self, owner: str, repo: str, token: str | None = None
    ) -> list[dict[str, Any]]:
        contents = await self._get(f"/repos/{owner}/{repo}/contents", token)
        # A file path returns a single object rather than a listing
        return contents if isinstance(contents, list) else []

    async def get_latest_commits(
        self, owner: str, repo: str, token: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._get(f"/repos/{owner}/{repo}/commits", token, params={"per_page": 1})

    async def list_user_repositories(
        self,
        token: str,
        repo_type: str,
        sort: str,
        per_page: int,
        page: int,
    ) -> list[dict[str, Any]]:
        """List repositories the token's owner can access."""
        return await self._get(
            "/user/repos",
            token,
            params={"type": repo_type, "sort": sort, "per_page": per_page, "page": page},
        )
