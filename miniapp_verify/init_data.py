"""Canonicalization of Telegram Mini App initData.

The initData string is a query string produced by the Telegram WebApp SDK.
Its signature covers every field except ``hash``, rendered as sorted
``key=value`` lines. Pure functions, no I/O.

Reference: https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app
"""

from dataclasses import dataclass
from urllib.parse import parse_qsl

from .errors import HashMissing, MalformedPayload


HASH_FIELD = "hash"


@dataclass(frozen=True)
class CanonicalPayload:
    data_check_string: str
    received_hash: str
    params: dict[str, str]  # decoded fields, hash excluded


def parse_init_data(init_data: str) -> dict[str, str]:
    """Parse the initData query string into a flat dict of decoded values.

    Raises MalformedPayload if a field is not a ``key=value`` pair or a key
    appears more than once.
    """
    if not init_data:
        return {}
    try:
        pairs = parse_qsl(init_data, keep_blank_values=True, strict_parsing=True)
    except ValueError as e:
        raise MalformedPayload("not a key=value query string") from e

    result: dict[str, str] = {}
    for key, value in pairs:
        if key in result:
            raise MalformedPayload(f"duplicate field '{key}'")
        result[key] = value
    return result


def split_hash(params: dict[str, str]) -> tuple[str, dict[str, str]]:
    """Return (hash, remaining fields) without mutating params."""
    remaining = dict(params)
    received_hash = remaining.pop(HASH_FIELD, "")
    if not received_hash:
        raise HashMissing("missing hash")
    return received_hash, remaining


def build_data_check_string(params: dict[str, str]) -> str:
    """Build the sorted newline-separated data-check-string for HMAC."""
    return "\n".join(f"{k}={v}" for k, v in sorted(params.items()))


def canonicalize(init_data: str) -> CanonicalPayload:
    """Parse initData and produce its data-check-string and received hash."""
    params = parse_init_data(init_data)
    received_hash, remaining = split_hash(params)
    return CanonicalPayload(
        data_check_string=build_data_check_string(remaining),
        received_hash=received_hash,
        params=remaining,
    )
