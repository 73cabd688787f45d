"""GitHub OAuth web flow.

    start     -> nonce stored in session, browser sent to GitHub
    callback  -> nonce checked and consumed, code exchanged, identity fetched
    logout    -> session record destroyed
    status    -> read-only view of the session

The session only ever gains an access token together with the user it
belongs to; any failure during the callback leaves it unauthenticated.
"""

from urllib.parse import urlencode

import httpx

from src.auth.session import GitHubUser, Session, SessionStore
from src.config import Settings
from src.constants import GITHUB_AUTHORIZE_URL
from src.errors import ConfigurationError, InvalidStateError, TokenExchangeError
from src.models.schemas import AuthStatus, UserInfo
from src.services.github.client import GitHubAPIError, GitHubClient
from src.utils.logging import get_logger
from src.utils.secrets import generate_oauth_state, states_match

logger = get_logger(__name__)


class OAuthFlowController:
    """Drives the state-verified GitHub OAuth handshake for one session."""

    def __init__(self, settings: Settings, github: GitHubClient, store: SessionStore) -> None:
        self._settings = settings
        self._github = github
        self._store = store

    def _require_redirect_uri(self) -> str:
        redirect_uri = self._settings.github_redirect_uri
        if not redirect_uri:
            logger.critical(
                "GITHUB_REDIRECT_URI is not set. Check your .env file or deployment environment."
            )
            raise ConfigurationError("Server configuration error: Missing GITHUB_REDIRECT_URI.")
        return redirect_uri

    async def start(self, session: Session) -> str:
        """Begin the OAuth flow.

        Returns:
            The GitHub authorize URL carrying the new nonce as ``state``

        Raises:
            ConfigurationError: If the redirect URI is unset (session untouched)
        """
        redirect_uri = self._require_redirect_uri()

        state = generate_oauth_state()
        pending = session.with_pending_state(state)
        await self._store.set(pending)

        params = {
            "client_id": self._settings.github_client_id,
            "redirect_uri": redirect_uri,
            "scope": self._settings.github_oauth_scope,
            "state": state,
        }
        return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"

    async def callback(self, session: Session, code: str | None, state: str | None) -> Session:
        """Complete the OAuth flow.

        Returns:
            The persisted, authenticated session

        Raises:
            InvalidStateError: If ``state`` does not match a live pending nonce
            ConfigurationError: If the redirect URI is unset
            TokenExchangeError: If the code or identity lookup fails
        """
        if not states_match(session.oauth_state, state) or session.oauth_state_expired():
            logger.warning("OAuth callback rejected: state mismatch or expired")
            raise InvalidStateError()

        # The nonce is spent before any network call so a replay cannot reuse it
        consumed = session.without_pending_state()
        await self._store.set(consumed)

        redirect_uri = self._require_redirect_uri()
        if not code:
            raise TokenExchangeError("Missing authorization code.")

        try:
            access_token = await self._github.exchange_code(code, redirect_uri)
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.error(f"OAuth token exchange failed: {e!r}")
            raise TokenExchangeError() from e
        if not access_token:
            logger.error("OAuth token exchange returned no access token")
            raise TokenExchangeError("No access token received.")

        try:
            profile = await self._github.get_authenticated_user(access_token)
            user = GitHubUser(
                login=profile["login"],
                name=profile.get("name"),
                avatar_url=profile.get("avatar_url"),
            )
        except (GitHubAPIError, httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Fetching GitHub identity failed: {e!r}")
            raise TokenExchangeError() from e

        # A new id is issued on login so a pre-login cookie never becomes authenticated
        authenticated = consumed.authenticated_as(access_token, user).with_new_id()
        await self._store.set(authenticated)
        await self._store.destroy(consumed.session_id)
        logger.info(f"User authenticated: {user.login}")
        return authenticated

    async def logout(self, session: Session) -> None:
        """Destroy the session server-side.

        Raises:
            StorageError: If the backend cannot delete the record
        """
        await self._store.destroy(session.session_id)
        if session.user:
            logger.info(f"User logged out: {session.user.login}")

    @staticmethod
    def status(session: Session) -> AuthStatus:
        """Report whether the session holds a completed login."""
        if not session.is_authenticated:
            return AuthStatus(authenticated=False, user=None)
        return AuthStatus(authenticated=True, user=UserInfo.model_validate(session.user))
