"""Utility modules for the README generator."""

from src.utils.http_client import create_http_client
from src.utils.logging import get_logger, LogContext, setup_logging
from src.utils.sanitizer import is_secret, redact, RedactingFilter, SanitizedJSONResponse
from src.utils.secrets import (
    generate_oauth_state,
    generate_session_id,
    states_match,
)

__all__ = [
    # HTTP
    "create_http_client",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Redaction
    "is_secret",
    "redact",
    "RedactingFilter",
    "SanitizedJSONResponse",
    # Secrets
    "generate_oauth_state",
    "generate_session_id",
    "states_match",
]
