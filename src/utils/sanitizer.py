"""Outgoing payload redaction.

Every structured response is walked before serialization and any value that
looks like a credential is replaced with a fixed marker. Route handlers must
still keep secrets out of their payloads; this is the last line of defense.
"""

import logging
import re
from collections.abc import Mapping
from functools import singledispatch
from typing import Any

from fastapi.responses import JSONResponse

from src.constants import GITHUB_TOKEN_PREFIXES, REDACTION_MARKER, SECRET_KEY_MARKERS

TOKEN_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(prefix) for prefix in GITHUB_TOKEN_PREFIXES) + r")[A-Za-z0-9_]+"
)


def is_secret_key(key: Any) -> bool:
    """Check whether a mapping key names a credential field."""
    if not isinstance(key, str):
        return False
    lowered = key.lower()
    return any(marker in lowered for marker in SECRET_KEY_MARKERS)


def contains_token(value: Any) -> bool:
    """Check whether a value is a string carrying a GitHub token."""
    return isinstance(value, str) and TOKEN_PATTERN.search(value) is not None


def is_secret(key: Any, value: Any) -> bool:
    """Decide whether the value stored under ``key`` must be redacted."""
    return is_secret_key(key) or contains_token(value)


@singledispatch
def redact(value: Any) -> Any:
    """Return a redacted copy of a JSON-like value.

    Values under credential-named keys are replaced whole; token shapes inside
    other strings are replaced in place. Numbers, booleans and ``None`` pass through untouched.
    """
    return value


@redact.register
def _(value: str) -> str:
    # Only the token itself is replaced so surrounding free text survives
    return TOKEN_PATTERN.sub(REDACTION_MARKER, value)


@redact.register(Mapping)
def _(value: Mapping) -> dict:
    return {
        key: REDACTION_MARKER if is_secret_key(key) else redact(item)
        for key, item in value.items()
    }


@redact.register(list)
@redact.register(tuple)
def _(value: list | tuple) -> list:
    return [redact(item) for item in value]


class SanitizedJSONResponse(JSONResponse):
    """JSON response that redacts secrets before rendering."""

    def render(self, content: Any) -> bytes:
        return super().render(redact(content))


class RedactingFilter(logging.Filter):
    """Scrub GitHub tokens from log records before they are emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if contains_token(message):
            record.msg = TOKEN_PATTERN.sub(REDACTION_MARKER, message)
            record.args = None
        return True
