"""Freshness check and user-claims extraction for verified initData."""

import json
import time
from dataclasses import asdict, dataclass

from .errors import DataExpired


DEFAULT_MAX_AGE_SECONDS = 300


@dataclass(frozen=True)
class Claims:
    id: int
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def parse_auth_date(params: dict[str, str]) -> int:
    """Return auth_date as an int.

    A payload without a usable auth_date cannot prove it is fresh, so it is
    rejected as expired.
    """
    raw = params.get("auth_date", "")
    if not (raw.isascii() and raw.isdigit()):
        raise DataExpired("missing or invalid auth_date")
    return int(raw)


def check_freshness(auth_date: int, max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
                    now: int | None = None) -> None:
    """Raise DataExpired if auth_date is more than max_age_seconds old."""
    if now is None:
        now = int(time.time())
    if now - auth_date > max_age_seconds:
        raise DataExpired(f"auth_date is {now - auth_date}s old")


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def parse_user_claims(raw: str | None) -> Claims | None:
    """Parse the JSON-encoded ``user`` field into Claims.

    Returns None instead of raising when the field is absent, is not a JSON
    object, or has no integer id.
    """
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(data, dict):
        return None

    user_id = data.get("id")
    # bool is an int subclass
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None

    return Claims(
        id=user_id,
        first_name=_optional_str(data, "first_name") or "",
        last_name=_optional_str(data, "last_name"),
        username=_optional_str(data, "username"),
        language_code=_optional_str(data, "language_code"),
    )
