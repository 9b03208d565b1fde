"""Tests for config.ini loading."""

import configparser

import pytest

from miniapp_verify.config import Config, load_config


def _parse(text: str) -> configparser.ConfigParser:
    c = configparser.ConfigParser()
    c.read_string(text)
    return c


class TestLoadConfig:
    def test_full(self):
        config = load_config(_parse("""
[TELEGRAM]
bot_token = 123:abc
max_age_seconds = 600
webapp_url = https://example.org/app/
notify_chat_id = -100123

[API]
host = 127.0.0.1
port = 8080
cors_origin = https://example.org
"""))
        assert config == Config(
            bot_token="123:abc",
            max_age_seconds=600,
            webapp_url="https://example.org/app/",
            notify_chat_id=-100123,
            api_host="127.0.0.1",
            api_port=8080,
            cors_origin="https://example.org",
        )

    def test_defaults(self):
        config = load_config(_parse("[TELEGRAM]\nbot_token = 123:abc\n"))
        assert config.max_age_seconds == 300
        assert config.webapp_url == ""
        assert config.notify_chat_id is None
        assert config.api_host == "0.0.0.0"
        assert config.api_port == 0
        assert config.cors_origin == "*"

    def test_missing_token_is_loaded_as_empty(self):
        config = load_config(_parse("[API]\nport = 9000\n"))
        assert config.bot_token == ""
        assert config.api_port == 9000

    def test_blank_values_use_defaults(self):
        config = load_config(_parse("[TELEGRAM]\nbot_token = x\nmax_age_seconds =\n[API]\nport =\n"))
        assert config.max_age_seconds == 300
        assert config.api_port == 0

    @pytest.mark.parametrize("raw", ["0", "-5", "abc"])
    def test_invalid_max_age(self, raw):
        with pytest.raises(ValueError):
            load_config(_parse(f"[TELEGRAM]\nbot_token = x\nmax_age_seconds = {raw}\n"))


class TestConfigRepr:
    def test_token_hidden(self):
        config = Config(bot_token="123456:SECRET")
        assert "SECRET" not in repr(config)
        assert "<set>" in repr(config)

    def test_other_fields_shown(self):
        config = Config(
            bot_token="123456:SECRET", notify_chat_id=-100, api_host="127.0.0.1",
            api_port=8080, cors_origin="https://example.org",
        )
        text = repr(config)
        assert "notify_chat_id=-100" in text
        assert "api_host='127.0.0.1'" in text
        assert "api_port=8080" in text
        assert "cors_origin='https://example.org'" in text

    def test_unset_token(self):
        assert "<unset>" in repr(Config(bot_token=""))
