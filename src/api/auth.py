"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from src.auth.dependencies import (
    clear_session_cookie,
    get_oauth_controller,
    get_session,
    get_session_or_anonymous,
    set_session_cookie,
)
from src.auth.flow import OAuthFlowController
from src.auth.session import Session
from src.constants import (
    AUTH_FAILED_REDIRECT,
    AUTH_INVALID_STATE_REDIRECT,
    AUTH_SUCCESS_REDIRECT,
)
from src.errors import InvalidStateError, TokenExchangeError
from src.models.schemas import AuthStatus, LogoutResponse
from src.utils.sanitizer import SanitizedJSONResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/github")
async def github_login(
    session: Annotated[Session, Depends(get_session)],
    oauth: Annotated[OAuthFlowController, Depends(get_oauth_controller)],
) -> RedirectResponse:
    """Initiate GitHub OAuth login."""
    url = await oauth.start(session)
    response = RedirectResponse(url=url, status_code=302)
    set_session_cookie(response, session)
    return response


@router.get("/github/callback")
async def github_callback(
    session: Annotated[Session, Depends(get_session)],
    oauth: Annotated[OAuthFlowController, Depends(get_oauth_controller)],
    code: str | None = None,
    state: str | None = None,
) -> RedirectResponse:
    """Handle GitHub OAuth callback."""
    try:
        session = await oauth.callback(session, code, state)
    except InvalidStateError:
        logger.info("OAuth callback rejected, redirecting with invalid_state")
        return RedirectResponse(url=AUTH_INVALID_STATE_REDIRECT, status_code=302)
    except TokenExchangeError:
        logger.info("OAuth callback failed, redirecting with auth_failed")
        return RedirectResponse(url=AUTH_FAILED_REDIRECT, status_code=302)

    response = RedirectResponse(url=AUTH_SUCCESS_REDIRECT, status_code=302)
    set_session_cookie(response, session)
    return response


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    session: Annotated[Session, Depends(get_session)],
    oauth: Annotated[OAuthFlowController, Depends(get_oauth_controller)],
) -> SanitizedJSONResponse:
    """Destroy the server-side session."""
    await oauth.logout(session)
    response = SanitizedJSONResponse(LogoutResponse().model_dump())
    clear_session_cookie(response)
    return response


@router.get("/status", response_model=AuthStatus)
async def auth_status(
    session: Annotated[Session, Depends(get_session_or_anonymous)],
    oauth: Annotated[OAuthFlowController, Depends(get_oauth_controller)],
) -> AuthStatus:
    """Check whether the current session is logged in."""
    return oauth.status(session)
