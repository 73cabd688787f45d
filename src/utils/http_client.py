"""Shared httpx client for GitHub API calls.

One pooled client is created at startup and injected into the services that
talk to GitHub, avoiding a new TCP connection + TLS handshake per request.
"""

import httpx

from src.constants import GITHUB_API_TIMEOUT

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)


def create_http_client(
    timeout: float = GITHUB_API_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the pooled client used for GitHub OAuth and REST calls.

    Args:
        timeout: Per-request timeout in seconds
        transport: Optional transport override (used by tests)
    """
    return httpx.AsyncClient(
        timeout=timeout,
        limits=_POOL_LIMITS,
        http2=False,
        transport=transport,
    )
