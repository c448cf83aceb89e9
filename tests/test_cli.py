"""Tests for CLI argument parsing."""

import pytest

from cli import CMSEDIT_VERSION, create_parser, parse_args


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults_open_layout_list(self):
        args = parse_args([], environ={})

        assert args.start_path == "/layouts"
        assert args.config.api_url == "http://localhost:3000/api"

    def test_layout(self):
        assert parse_args(["--layout", "42"], environ={}).start_path == "/layouts/42"

    def test_new_layout(self):
        assert parse_args(["--new-layout"], environ={}).start_path == "/layouts/NEW"

    def test_settings(self):
        assert parse_args(["--settings"], environ={}).start_path == "/settings"

    def test_connection_options(self):
        args = parse_args(
            ["--api", "https://cms.example.com/api", "--timeout", "3", "--token", "t"],
            environ={"CMSEDIT_API_URL": "http://ignored"},
        )

        assert args.config.api_url == "https://cms.example.com/api"
        assert args.config.timeout == 3.0
        assert args.config.token == "t"

    def test_start_options_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--settings", "--new-layout"], environ={})

    def test_invalid_config_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--timeout", "never"], environ={})

        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"], environ={})

        assert exc_info.value.code == 0
        assert CMSEDIT_VERSION in capsys.readouterr().out


class TestHelp:
    """Tests for the custom help text."""

    def test_help_lists_options(self):
        text = create_parser().format_help()

        for option in ("--layout", "--new-layout", "--settings", "--api", "--timeout", "--token"):
            assert option in text
