from dataclasses import dataclass

from .claims import DEFAULT_MAX_AGE_SECONDS


@dataclass
class Config:
    bot_token: str
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
    webapp_url: str = ""
    notify_chat_id: int | None = None
    api_host: str = "0.0.0.0"
    api_port: int = 0
    cors_origin: str = "*"

    def __repr__(self) -> str:
        # Keep the bot token out of logs and tracebacks
        return (
            f"Config(bot_token={'<set>' if self.bot_token else '<unset>'}, "
            f"max_age_seconds={self.max_age_seconds}, webapp_url={self.webapp_url!r}, "
            f"notify_chat_id={self.notify_chat_id!r}, api_host={self.api_host!r}, "
            f"api_port={self.api_port}, cors_origin={self.cors_origin!r})"
        )


def _parse_max_age(raw: str) -> int:
    """Parse max_age_seconds, which must be a positive integer."""
    value = int(raw)
    if value <= 0:
        raise ValueError(f"max_age_seconds must be positive, got {value}")
    return value


def load_config(config) -> Config:
    """Build a Config from a parsed configparser object.

    A missing bot_token is not fatal here: the API still starts and every
    verification answers SERVER_CONFIG_ERROR.
    """
    telegram = config["TELEGRAM"] if config.has_section("TELEGRAM") else {}
    api = config["API"] if config.has_section("API") else {}

    bot_token = telegram.get("bot_token", "").strip()

    max_age = telegram.get("max_age_seconds", "").strip()
    max_age_seconds = _parse_max_age(max_age) if max_age else DEFAULT_MAX_AGE_SECONDS

    notify = telegram.get("notify_chat_id", "").strip()
    notify_chat_id = int(notify) if notify else None

    return Config(
        bot_token=bot_token,
        max_age_seconds=max_age_seconds,
        webapp_url=telegram.get("webapp_url", "").strip(),
        notify_chat_id=notify_chat_id,
        api_host=api.get("host", "").strip() or "0.0.0.0",
        api_port=int(api.get("port", "0").strip() or "0"),
        cors_origin=api.get("cors_origin", "").strip() or "*",
    )
