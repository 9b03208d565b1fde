"""End-to-end verification of a Telegram Mini App initData string.

    canonicalize -> derive key -> sign -> compare -> freshness -> claims

Nothing extracted from the payload is trusted before the signature check
passes. The bot token is passed in explicitly by the caller.
"""

from dataclasses import dataclass

from .claims import (
    DEFAULT_MAX_AGE_SECONDS, Claims, check_freshness, parse_auth_date, parse_user_claims,
)
from .errors import ErrorKind, InitDataRequired, ServerConfigError, VerificationError
from .init_data import canonicalize
from .signing import check_signature, derive_secret_key


@dataclass
class VerificationResult:
    ok: bool
    user: Claims | None = None
    auth_date: int | None = None
    error: ErrorKind | None = None  # set if ok is False

    @classmethod
    def accepted(cls, user: Claims | None, auth_date: int) -> "VerificationResult":
        return cls(ok=True, user=user, auth_date=auth_date)

    @classmethod
    def rejected(cls, kind: ErrorKind) -> "VerificationResult":
        return cls(ok=False, error=kind)

    def to_dict(self) -> dict:
        """Render the JSON body returned to the Mini App."""
        if not self.ok:
            return {"ok": False, "error": self.error.value}
        return {
            "ok": True,
            "user": self.user.to_dict() if self.user else None,
            "auth_date": self.auth_date,
        }


def verify_init_data(
    init_data: str, bot_token: str | None,
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS, now: int | None = None,
) -> VerificationResult:
    """Verify initData against bot_token and return the outcome.

    Every rejection is reported through the result; only unexpected
    exceptions propagate.
    """
    try:
        # Fail on a missing secret before touching client input
        derive_secret_key(bot_token)

        if not init_data or not init_data.strip():
            raise InitDataRequired("initData is required")

        payload = canonicalize(init_data)
        check_signature(bot_token, payload)

        auth_date = parse_auth_date(payload.params)
        check_freshness(auth_date, max_age_seconds, now=now)
    except ServerConfigError:
        print("[Config] bot_token is not set, cannot verify initData")
        return VerificationResult.rejected(ErrorKind.SERVER_CONFIG_ERROR)
    except VerificationError as e:
        print(f"[Verify] rejected: {e.kind.value} ({e})")
        return VerificationResult.rejected(e.kind)

    user = parse_user_claims(payload.params.get("user"))
    return VerificationResult.accepted(user, auth_date)
