"""Random identifiers and nonce comparison."""

import hmac
import secrets


def generate_session_id() -> str:
    """Generate an opaque, unguessable session identifier."""
    return secrets.token_urlsafe(32)


def generate_oauth_state() -> str:
    """Generate a one-time nonce for the OAuth ``state`` parameter."""
    return secrets.token_hex(16)


def states_match(expected: str | None, received: str | None) -> bool:
    """Compare a pending OAuth state with the one returned by the provider.

    Both values must be present. Comparison runs in constant time.
    """
    if not expected or not received:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))

