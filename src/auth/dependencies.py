"""Session and authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request, Response

from src.auth.flow import OAuthFlowController
from src.auth.session import Session, SessionStore
from src.config import Settings, get_settings
from src.constants import SESSION_COOKIE_NAME
from src.errors import AuthRequiredError, StorageError
from src.utils.logging import get_logger

logger = get_logger(__name__)


def get_session_store(request: Request) -> SessionStore:
    """Session backend built at startup."""
    return request.app.state.session_store


def get_oauth_controller(request: Request) -> OAuthFlowController:
    return request.app.state.oauth_controller


async def get_session(
    request: Request,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> Session:
    """Load the caller's session, or start a fresh unsaved one.

    Unknown or expired session ids are not reused; a new id is issued so a
    client cannot choose its own session identifier.
    """
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if session_id:
        session = await store.get(session_id)
        if session is not None:
            return session
    return Session.new()


async def get_session_or_anonymous(
    request: Request,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> Session:
    """Like ``get_session`` but degrades to an anonymous session on backend errors."""
    try:
        return await get_session(request, store)
    except StorageError as e:
        logger.warning(f"Session backend unavailable, treating caller as anonymous: {e}")
        return Session.new()


async def get_access_token(
    session: Annotated[Session, Depends(get_session_or_anonymous)],
) -> str | None:
    """GitHub token of the logged-in user, if any.

    Public repositories stay reachable when the session backend is down.
    """
    return session.access_token if session.is_authenticated else None


async def require_access_token(
    token: Annotated[str | None, Depends(get_access_token)],
) -> str:
    """GitHub token of the logged-in user, raising 401 if not authenticated."""
    if not token:
        raise AuthRequiredError()
    return token


def set_session_cookie(
    response: Response,
    session: Session,
    settings: Settings | None = None,
) -> None:
    """Attach the opaque session id cookie to ``response``."""
    settings = settings or get_settings()
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax")

