"""Application error taxonomy.

Every failure the API surface can report is an ``AppError`` carrying an
``ErrorKind``. The kind owns the HTTP status and the ``requiresAuth`` hint,
so handlers never inspect message text to decide how to respond.
"""

from enum import Enum


class ErrorKind(Enum):
    """Error kinds with their HTTP status and whether logging in may help."""

    CONFIGURATION = (500, False)
    INVALID_STATE = (400, False)
    TOKEN_EXCHANGE = (400, False)
    AUTH_EXPIRED = (401, True)
    AUTH_REQUIRED = (401, True)
    RATE_LIMITED = (429, False)
    FORBIDDEN = (403, True)
    NOT_FOUND = (404, True)
    UNKNOWN_FETCH = (500, False)
    STORAGE = (500, False)
    INVALID_INPUT = (400, False)

    def __init__(self, status_code: int, requires_auth: bool) -> None:
        self.status_code = status_code
        self.requires_auth = requires_auth


class AppError(Exception):
    """Base exception for errors reported to API clients."""

    kind: ErrorKind = ErrorKind.UNKNOWN_FETCH
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def requires_auth(self) -> bool:
        return self.kind.requires_auth


class ConfigurationError(AppError):
    """Server is missing required configuration."""

    kind = ErrorKind.CONFIGURATION
    default_message = "Server configuration error."


class InvalidStateError(AppError):
    """OAuth state did not match the pending nonce (possible CSRF)."""

    kind = ErrorKind.INVALID_STATE
    default_message = "Invalid OAuth state."


class TokenExchangeError(AppError):
    """Authorization code could not be turned into an identity."""

    kind = ErrorKind.TOKEN_EXCHANGE
    default_message = "GitHub authentication failed."


class AuthExpiredError(AppError):
    kind = ErrorKind.AUTH_EXPIRED
    default_message = "Authentication expired. Please login again to access this repository."


class AuthRequiredError(AppError):
    kind = ErrorKind.AUTH_REQUIRED
    default_message = "Authentication required."


class RateLimitError(AppError):
    kind = ErrorKind.RATE_LIMITED
    default_message = "GitHub API rate limit exceeded. Please try again later."


class ForbiddenError(AppError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You do not have permission to access this repository."


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = (
        "Repository not found. If this is a private repository, please login with GitHub."
    )


class UnknownFetchError(AppError):
    kind = ErrorKind.UNKNOWN_FETCH
    default_message = "Failed to fetch repository data from GitHub."


class StorageError(AppError):
    """Session backend could not complete an operation."""

    kind = ErrorKind.STORAGE
    default_message = "Session storage failure."


class InvalidRepositoryUrlError(AppError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid GitHub repository URL."
