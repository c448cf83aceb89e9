"""Tests for client configuration loading."""

import logging

import pytest

from config import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    ConfigError,
    get_log_path,
    load_client_config,
    setup_logging,
)


class TestLoadClientConfig:
    """Tests for load_client_config()."""

    def test_defaults(self):
        config = load_client_config({})

        assert config.api_url == DEFAULT_API_URL
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.token is None
        assert config.log_level == "DEBUG"

    def test_environment(self):
        config = load_client_config(
            {
                "CMSEDIT_API_URL": "https://cms.example.com/api",
                "CMSEDIT_TIMEOUT": "5",
                "CMSEDIT_TOKEN": "abc",
                "CMSEDIT_LOG_LEVEL": "info",
            }
        )

        assert config.api_url == "https://cms.example.com/api"
        assert config.timeout == 5.0
        assert config.token == "abc"
        assert config.log_level == "INFO"

    def test_overrides_win(self):
        config = load_client_config(
            {"CMSEDIT_API_URL": "https://a.example.com"}, api_url="https://b.example.com", timeout="2.5"
        )
        assert config.api_url == "https://b.example.com"
        assert config.timeout == 2.5

    def test_none_overrides_are_ignored(self):
        config = load_client_config({"CMSEDIT_TOKEN": "abc"}, token=None)
        assert config.token == "abc"

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value):
        with pytest.raises(ConfigError):
            load_client_config({"CMSEDIT_TIMEOUT": value})

    def test_invalid_url(self):
        with pytest.raises(ConfigError):
            load_client_config({}, api_url="cms.example.com")


class TestLogging:
    """Tests for the log file location."""

    def test_log_path_uses_xdg_state_home(self, tmp_path):
        path = get_log_path({"XDG_STATE_HOME": str(tmp_path)})

        assert path == tmp_path / "cmsedit" / "cmsedit.log"
        assert path.parent.is_dir()

    def test_setup_logging_writes_to_state_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("warning")

        assert calls[0]["filename"] == str(tmp_path / "cmsedit" / "cmsedit.log")
        assert calls[0]["level"] == logging.WARNING
