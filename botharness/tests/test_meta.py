"""
Tests for bot metadata and settings loading.
"""

import codecs
import json

import pytest

from ..config import HarnessSettings
from ..errors import BotMetaError, ConfigurationError
from ..meta import BotMeta, BotType, load_bot_meta


def write_meta(bot_dir, data, bom=False):
    raw = json.dumps(data).encode("utf-8")
    if bom:
        raw = codecs.BOM_UTF8 + raw
    (bot_dir / "bot.json").write_bytes(raw)


class TestBotMeta:
    """Tests for bot.json parsing."""

    def test_load_camel_case(self, tmp_path):
        """bot.json keys in camel case are read."""
        write_meta(tmp_path, {
            "Author": "Jane",
            "Email": "jane@example.com",
            "NickName": "Sinker",
            "BotType": "CSharp",
            "BotLocation": "bin/Release",
            "BotFileName": "Bot.exe",
        })

        meta = load_bot_meta(tmp_path)

        assert meta.bot_type == BotType.CSHARP
        assert meta.display_name == "Sinker"
        assert meta.runnable_path(tmp_path) == (tmp_path / "bin/Release/Bot.exe").resolve()

    def test_load_with_bom(self, tmp_path):
        """Editors that add a BOM to bot.json are tolerated."""
        write_meta(tmp_path, {"Email": "x@y.z", "BotType": "JavaScript", "BotFileName": "bot.js"}, bom=True)
        meta = load_bot_meta(tmp_path)
        assert meta.bot_type == BotType.JAVASCRIPT

    @pytest.mark.parametrize("nick,author,email,expected", [
        ("Nick", "Author", "e@x", "Nick"),
        (None, "Author", "e@x", "Author"),
        (None, None, "e@x", "e@x"),
    ])
    def test_display_name_fallback(self, nick, author, email, expected):
        """Nick name, then author, then email name the bot."""
        meta = BotMeta(
            nick_name=nick, author=author, email=email,
            bot_type=BotType.JAVA, bot_file_name="bot.jar",
        )
        assert meta.display_name == expected

    def test_meta_is_immutable(self, python_meta):
        """Loaded meta cannot be changed."""
        with pytest.raises(Exception):
            python_meta.nick_name = "Other"

    def test_missing_file(self, tmp_path):
        """A missing bot.json is reported."""
        with pytest.raises(BotMetaError) as exc_info:
            load_bot_meta(tmp_path)
        assert "file not found" in exc_info.value.errors

    def test_unknown_bot_type(self, tmp_path):
        """An unsupported language is a configuration error."""
        write_meta(tmp_path, {"NickName": "X", "BotType": "Cobol", "BotFileName": "bot.cbl"})
        with pytest.raises(ConfigurationError):
            load_bot_meta(tmp_path)

    def test_missing_run_file(self, tmp_path):
        """BotFileName is required."""
        write_meta(tmp_path, {"NickName": "X", "BotType": "Python3"})
        with pytest.raises(BotMetaError) as exc_info:
            load_bot_meta(tmp_path)
        assert any("BotFileName" in e for e in exc_info.value.errors)


class TestHarnessSettings:
    """Tests for settings loading."""

    def test_defaults(self):
        """Default file names and thresholds."""
        settings = HarnessSettings()
        assert settings.state_file_name == "state.json"
        assert settings.command_file_name == "command.txt"
        assert settings.do_nothing_warning_threshold == 10
        assert settings.do_nothing_kill_threshold == 20
        assert settings.failed_first_phase_kill_count == 5

    def test_from_file(self, tmp_path):
        """Settings load from a JSON file."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_runtime_seconds": 3.5, "log_file_name": "bot.log"}))

        settings = HarnessSettings.from_file(path)

        assert settings.max_runtime_seconds == 3.5
        assert settings.log_file_name == "bot.log"

    def test_from_file_invalid(self, tmp_path):
        """Out-of-range values are a configuration error."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_runtime_seconds": -1}))
        with pytest.raises(ConfigurationError):
            HarnessSettings.from_file(path)

    def test_from_file_missing(self, tmp_path):
        """A missing settings file is a configuration error."""
        with pytest.raises(ConfigurationError):
            HarnessSettings.from_file(tmp_path / "nope.json")

    def test_env_overrides(self):
        """Environment variables override selected settings."""
        base = HarnessSettings(log_file_name="bot.log")
        settings = HarnessSettings.from_env(base, environ={
            "BOTHARNESS_MAX_RUNTIME": "4",
            "BOTHARNESS_NODE": "/opt/node/bin/node",
        })
        assert settings.max_runtime_seconds == 4.0
        assert settings.node_executable == "/opt/node/bin/node"
        assert settings.log_file_name == "bot.log"

    def test_env_invalid_value(self):
        """Unparseable environment values are a configuration error."""
        with pytest.raises(ConfigurationError):
            HarnessSettings.from_env(environ={"BOTHARNESS_MAX_RUNTIME": "soon"})
