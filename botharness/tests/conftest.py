"""
Pytest fixtures for Botharness tests.
"""

import json
import sys
import textwrap
from pathlib import Path

import pytest

from ..commands import DoNothingCommand
from ..config import HarnessSettings
from ..game import GamePlayer, GameSnapshot, PlayerType
from ..meta import BotMeta, BotType
from ..protocol import CommandArtifact
from ..runners import BotRunner, RunOutcome


@pytest.fixture
def settings() -> HarnessSettings:
    """Settings with short deadlines and this interpreter as python3."""
    return HarnessSettings(
        max_runtime_seconds=5.0,
        calibration_runtime_seconds=10.0,
        python3_executable=sys.executable,
    )


@pytest.fixture
def python_meta() -> BotMeta:
    return BotMeta(nick_name="Tester", bot_type=BotType.PYTHON3, bot_file_name="bot.py")


@pytest.fixture
def make_python_bot(tmp_path):
    """Factory writing a bot.json and bot.py into a fresh bot directory."""

    def _make(source: str, name: str = "bot") -> Path:
        bot_dir = tmp_path / name
        bot_dir.mkdir()
        (bot_dir / "bot.json").write_text(json.dumps({
            "Author": "Test Author",
            "NickName": "Tester",
            "BotType": "Python3",
            "BotFileName": "bot.py",
        }), encoding="utf-8")
        (bot_dir / "bot.py").write_text(textwrap.dedent(source), encoding="utf-8")
        return bot_dir

    return _make


@pytest.fixture
def player() -> GamePlayer:
    return GamePlayer(name="Tester", key="A", player_type=PlayerType.ONE)


@pytest.fixture
def make_state(player):
    """Factory for snapshots that include the test player."""

    def _make(round_number: int = 0, phase: int = 2) -> GameSnapshot:
        return GameSnapshot(
            phase=phase,
            current_round=round_number,
            registered_players=[player],
            payload={"round": round_number},
        )

    return _make


class ScriptedRunner(BotRunner):
    """
    Runner that plays back a script instead of launching a process.

    Each step is (outcome, command text or None). Text is written to the
    phase's artifact file exactly like a real bot would.
    """

    def __init__(self, meta, steps=None, calibration_text="1,9,9", **kwargs):
        super().__init__(meta, ".", **kwargs)
        self.steps = list(steps or [])
        self.calibration_text = calibration_text
        self.calibrations = 0
        self.runs = 0
        self.parsed = 0
        self.seen_files: list[list[str]] = []

    def calibrate(self):
        self.calibrations += 1
        if self.calibration_text is not None:
            self._write(CommandArtifact.ROUND_COMMAND, self.calibration_text)

    def run_round(self) -> RunOutcome:
        target = self._require_target()
        self.seen_files.append(sorted(p.name for p in target.directory.iterdir()))
        self.runs += 1
        outcome, text = self.steps.pop(0) if self.steps else (RunOutcome.OK, None)
        if text is not None:
            self._write(self.reader.artifact_for_phase(target.phase), text)
        return outcome

    def get_bot_command(self):
        self.parsed += 1
        return super().get_bot_command()

    def _write(self, artifact, text):
        target = self._require_target()
        self.reader.path(target.directory, artifact).write_text(text, encoding="utf-8")


@pytest.fixture
def scripted_runner(python_meta, settings):
    def _make(steps=None, **kwargs) -> ScriptedRunner:
        return ScriptedRunner(python_meta, steps, settings=settings, **kwargs)

    return _make


@pytest.fixture
def do_nothing() -> DoNothingCommand:
    return DoNothingCommand()
