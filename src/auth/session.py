"""Server-side session state and its storage backends.

The browser only ever holds an opaque session id. The OAuth nonce, the GitHub
access token and the user identity live in a ``SessionStore``: an in-memory
dict for development, or Redis for deployments with more than one process.
The backend is chosen once at startup by ``create_session_store``.
"""

import json
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from src.config import Settings
from src.constants import OAUTH_STATE_TTL_SECONDS, SESSION_KEY_PREFIX
from src.errors import ConfigurationError, StorageError
from src.utils.logging import get_logger
from src.utils.secrets import generate_session_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class GitHubUser:
    """Identity of the GitHub account that completed the OAuth flow."""

    login: str
    name: str | None = None
    avatar_url: str | None = None


@dataclass
class Session:
    """Per-browser authentication state."""

    session_id: str
    oauth_state: str | None = None
    oauth_state_issued_at: float | None = None
    access_token: str | None = None
    user: GitHubUser | None = None

    @classmethod
    def new(cls) -> "Session":
        return cls(session_id=generate_session_id())

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None and self.user is not None

    def oauth_state_expired(self, now: float | None = None) -> bool:
        """Check whether the pending OAuth nonce is too old to accept."""
        if self.oauth_state_issued_at is None:
            return True
        now = time.time() if now is None else now
        return now - self.oauth_state_issued_at > OAUTH_STATE_TTL_SECONDS

    def with_pending_state(self, state: str) -> "Session":
        return replace(self, oauth_state=state, oauth_state_issued_at=time.time())

    def without_pending_state(self) -> "Session":
        return replace(self, oauth_state=None, oauth_state_issued_at=None)

    def authenticated_as(self, access_token: str, user: GitHubUser) -> "Session":
        return replace(self, access_token=access_token, user=user)

    def with_new_id(self) -> "Session":
        """Copy of this session under a freshly generated id."""
        return replace(self, session_id=generate_session_id())

    def to_record(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Session":
        user = record.get("user")
        return cls(
            session_id=record["session_id"],
            oauth_state=record.get("oauth_state"),
            oauth_state_issued_at=record.get("oauth_state_issued_at"),
            access_token=record.get("access_token"),
            user=GitHubUser(**user) if user else None,
        )


class SessionStore(Protocol):
    """Capability interface implemented by every session backend."""

    name: str

    async def get(self, session_id: str) -> Session | None: ...

    async def set(self, session: Session) -> None: ...

    async def destroy(self, session_id: str) -> None: ...

    async def close(self) -> None: ...


class MemorySessionStore:
    """Process-local session store with TTL expiry.

    Records are stored serialized so that callers mutating a loaded
    ``Session`` never change stored state without calling ``set``. Expired
    records are dropped on read and swept on every write, so abandoned
    sessions do not accumulate.
    """

    name = "memory"

    def __init__(self, ttl_seconds: int) -> None:
        self._ttl = ttl_seconds
        self._records: dict[str, tuple[float, dict[str, Any]]] = {}

    async def get(self, session_id: str) -> Session | None:
        entry = self._records.get(session_id)
        if entry is None:
            return None
        expires_at, record = entry
        if time.monotonic() >= expires_at:
            del self._records[session_id]
            return None
        return Session.from_record(record)

    async def set(self, session: Session) -> None:
        now = time.monotonic()
        self._purge_expired(now)
        self._records[session.session_id] = (now + self._ttl, session.to_record())

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._records.items() if expires_at <= now]
        for key in expired:
            del self._records[key]

    async def destroy(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    async def close(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class RedisSessionStore:
    """Redis-backed session store; records expire via Redis TTLs."""

    name = "redis"

    def __init__(
        self,
        client: redis.Redis,
        ttl_seconds: int,
        prefix: str = SESSION_KEY_PREFIX,
    ) -> None:
        self._client = client
        self._ttl = ttl_seconds
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int) -> "RedisSessionStore":
        client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client, ttl_seconds)

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> Session | None:
        try:
            raw = await self._client.get(self._key(session_id))
        except RedisError as e:
            logger.error(f"Session read failed: {e}")
            raise StorageError("Could not load session.") from e
        if raw is None:
            return None
        try:
            return Session.from_record(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding corrupt session record: {e}")
            return None

    async def set(self, session: Session) -> None:
        try:
            await self._client.set(
                self._key(session.session_id),
                json.dumps(session.to_record()),
                ex=self._ttl,
            )
        except RedisError as e:
            logger.error(f"Session write failed: {e}")
            raise StorageError("Could not save session.") from e

    async def destroy(self, session_id: str) -> None:
        try:
            await self._client.delete(self._key(session_id))
        except RedisError as e:
            logger.error(f"Session delete failed: {e}")
            raise StorageError("Logout failed.") from e

    async def close(self) -> None:
        await self._client.aclose()


def create_session_store(settings: Settings) -> SessionStore:
    """Build the session backend selected by configuration."""
    backend = settings.resolved_session_backend
    if backend == "redis":
        if not settings.redis_url:
            raise ConfigurationError("REDIS_URL must be set to use the redis session backend.")
        logger.info("Using Redis for session storage")
        return RedisSessionStore.from_url(settings.redis_url, settings.session_ttl_seconds)

    logger.info("Using in-memory session storage")
    return MemorySessionStore(settings.session_ttl_seconds)
