"""Authentication module."""

from src.auth.dependencies import (
    get_access_token,
    get_oauth_controller,
    get_session,
    get_session_store,
    require_access_token,
)
from src.auth.flow import OAuthFlowController
from src.auth.session import (
    create_session_store,
    GitHubUser,
    MemorySessionStore,
    RedisSessionStore,
    Session,
    SessionStore,
)

__all__ = [
    "create_session_store",
    "get_access_token",
    "get_oauth_controller",
    "get_session",
    "get_session_store",
    "GitHubUser",
    "MemorySessionStore",
    "OAuthFlowController",
    "RedisSessionStore",
    "require_access_token",
    "Session",
    "SessionStore",
]
