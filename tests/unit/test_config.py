"""Unit tests for UpstreamConfig."""

import os
from unittest.mock import patch

import pytest
import pytest_check as check
from pydantic import ValidationError

from coze_relay.upstream.config import DEFAULT_API_BASE, UpstreamConfig, get_upstream_config


class TestUpstreamConfig:
    """Tests for UpstreamConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts explicit values for all fields."""
        config = UpstreamConfig(
            api_key="pat_abc",
            bot_id="7300000000",
            base_url="https://api.coze.com",
            default_user_id="guest",
            timeout=30.0,
        )

        check.equal(config.api_key, "pat_abc")
        check.equal(config.bot_id, "7300000000")
        check.equal(config.upload_url, "https://api.coze.com/v1/files/upload")
        check.equal(config.chat_url, "https://api.coze.com/v3/chat")
        check.equal(config.default_user_id, "guest")
        check.equal(config.timeout, 30.0)

    def test_missing_credentials_are_accepted(self) -> None:
        """An empty key is allowed; the platform rejects it at request time."""
        with patch.dict(os.environ, {}, clear=True):
            config = UpstreamConfig()

        check.equal(config.api_key, "")
        check.equal(config.bot_id, "")
        check.equal(config.base_url, DEFAULT_API_BASE)
        check.equal(config.default_user_id, "user_123")
        check.equal(config.timeout, 120.0)

    def test_strips_credentials(self) -> None:
        """Whitespace around key and bot id is removed."""
        config = UpstreamConfig(api_key="  pat_abc \n", bot_id=" 73 ")

        check.equal(config.api_key, "pat_abc")
        check.equal(config.bot_id, "73")

    def test_trailing_slash_removed_from_base_url(self) -> None:
        """Endpoint URLs never contain a double slash."""
        config = UpstreamConfig(base_url="https://coze.test/")

        check.equal(config.chat_url, "https://coze.test/v3/chat")

    def test_rejects_empty_base_url(self) -> None:
        """A blank base URL is a configuration error."""
        with pytest.raises(ValidationError) as exc_info:
            UpstreamConfig(base_url="  ")

        assert "COZE_API_BASE" in str(exc_info.value)

    def test_rejects_non_positive_timeout(self) -> None:
        """Timeout must be greater than zero."""
        with pytest.raises(ValidationError) as exc_info:
            UpstreamConfig(timeout=0)

        assert "timeout" in str(exc_info.value).lower()


class TestGetUpstreamConfig:
    """Tests for get_upstream_config factory function."""

    def test_reads_environment(self) -> None:
        """Values come from COZE_* environment variables."""
        env = {
            "COZE_API_KEY": "pat_env",
            "COZE_BOT_ID": "bot_env",
            "COZE_API_BASE": "https://api.coze.com",
            "COZE_DEFAULT_USER": "anon",
            "COZE_TIMEOUT": "15",
        }
        with patch.dict(os.environ, env, clear=True):
            config = get_upstream_config()

        check.equal(config.api_key, "pat_env")
        check.equal(config.bot_id, "bot_env")
        check.equal(config.base_url, "https://api.coze.com")
        check.equal(config.default_user_id, "anon")
        check.equal(config.timeout, 15.0)
