"""
Tests for the command-line interface.
"""

import json
import sys

import pytest

from ..cli import main


FIRE_BOT = """
    import os, sys
    with open(os.path.join(sys.argv[2], "command.txt"), "w") as f:
        f.write("1,4,2")
"""


@pytest.fixture(autouse=True)
def use_this_interpreter(monkeypatch):
    monkeypatch.setenv("BOTHARNESS_PYTHON3", sys.executable)


class TestValidate:
    """Tests for `botharness validate`."""

    def test_valid_bot(self, make_python_bot, capsys):
        """A valid bot reports its name and runner."""
        bot_dir = make_python_bot(FIRE_BOT)
        main(["validate", str(bot_dir)])

        out = capsys.readouterr().out
        assert "Bot: Tester" in out
        assert "Runner: ScriptRunner" in out
        assert "Warning" not in out

    def test_missing_meta_exits(self, tmp_path, capsys):
        """A directory without bot.json exits with an error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out


class TestRunRound:
    """Tests for `botharness run-round`."""

    def test_runs_one_round(self, make_python_bot, tmp_path, capsys):
        """One round runs against a state file and leaves the round log."""
        bot_dir = make_python_bot(FIRE_BOT)
        state_file = tmp_path / "state.json"
        state_file.write_text(json.dumps({"board": []}))
        work_dir = tmp_path / "work"

        main([
            "run-round", str(bot_dir), str(state_file),
            "--phase", "2", "--round", "3", "--work-dir", str(work_dir),
        ])

        out = capsys.readouterr().out
        assert "Command: FireShot(code=1, x=4, y=2)" in out
        round_dir = work_dir / "Phase 2 - Round 3" / "A"
        assert (round_dir / "command.txt").read_text() == "1,4,2"
        assert (round_dir / "log.txt").exists()

    def test_missing_state_file(self, make_python_bot, tmp_path, capsys):
        """A missing state file is reported and exits."""
        bot_dir = make_python_bot(FIRE_BOT)
        with pytest.raises(SystemExit):
            main(["run-round", str(bot_dir), str(tmp_path / "missing.json")])
        assert "File not found" in capsys.readouterr().out


class TestCalibrate:
    """Tests for `botharness calibrate`."""

    def test_calibrate_leaves_no_artifact(self, make_python_bot, tmp_path, capsys):
        """Calibration output is discarded."""
        bot_dir = make_python_bot(FIRE_BOT)
        work_dir = tmp_path / "work"

        main(["calibrate", str(bot_dir), "--work-dir", str(work_dir)])

        assert "Calibration took" in capsys.readouterr().out
        assert not (work_dir / "Phase 1 - Round 0" / "A" / "command.txt").exists()


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit):
        main([])
    assert "usage" in capsys.readouterr().out.lower()
