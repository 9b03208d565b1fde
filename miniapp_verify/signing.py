"""HMAC-SHA256 signing and verification of initData.

The per-bot secret key is HMAC-SHA256(key=bot_token, msg="WebAppData").
The expected hash is HMAC-SHA256(key=secret_key, msg=data_check_string).
"""

import hashlib
import hmac
from functools import lru_cache

from .errors import InvalidSignature, ServerConfigError
from .init_data import CanonicalPayload


WEBAPP_DATA_MESSAGE = b"WebAppData"


def derive_secret_key(bot_token: str | None) -> bytes:
    """Derive the 32-byte secret key from the bot token."""
    if not bot_token:
        raise ServerConfigError("bot token is not configured")
    return _derive_cached(bot_token)


@lru_cache(maxsize=8)
def _derive_cached(bot_token: str) -> bytes:
    return hmac.new(bot_token.encode(), WEBAPP_DATA_MESSAGE, hashlib.sha256).digest()


def compute_signature(secret_key: bytes, data_check_string: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of the data-check-string."""
    return hmac.new(
        secret_key, data_check_string.encode(), hashlib.sha256,
    ).hexdigest()


def timing_safe_equal(a: str, b: str) -> bool:
    """Compare two strings in time independent of where they differ.

    Compares UTF-8 bytes so non-ASCII input from the client cannot raise.
    """
    return hmac.compare_digest(a.encode(), b.encode())


def check_signature(bot_token: str | None, payload: CanonicalPayload) -> None:
    """Raise InvalidSignature unless the payload hash matches the expected one."""
    secret_key = derive_secret_key(bot_token)
    expected = compute_signature(secret_key, payload.data_check_string)
    if not timing_safe_equal(payload.received_hash, expected):
        raise InvalidSignature("invalid signature")
