"""
Process Runner - Runs a bot as a subprocess under a wall-clock deadline.

Every launch:
- Starts the bot in its own directory with "<player key> <round dir>"
- Captures stdout/stderr into the harness log
- Kills the whole process group when the deadline passes, and waits
  for it, so a slow bot cannot write into the next round's files

Language-specific subclasses only decide the command line.
"""

from __future__ import annotations
import os
import signal
import subprocess
import tempfile
import time
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..errors import BotExecutionError
from .base import BotRunner, RunOutcome

POSIX = os.name == "posix"


@dataclass
class ProcessResult:
    """What happened to one launched process."""
    outcome: RunOutcome
    return_code: int | None
    elapsed: float
    stdout: str = ""
    stderr: str = ""


class ProcessBotRunner(BotRunner):
    """Base class for runners that launch the bot as a subprocess."""

    calibration_seconds: float | None = None

    @abstractmethod
    def build_command(self, run_file: Path) -> list[str]:
        """Command line (without harness arguments) that starts the bot."""
        pass

    def calibrate(self):
        result = self._execute(self.settings.calibration_runtime_seconds)
        self.calibration_seconds = result.elapsed
        if result.outcome == RunOutcome.TIMED_OUT:
            self.logger.warning(
                "Calibration did not finish within %.1fs",
                self.settings.calibration_runtime_seconds,
            )
        elif result.outcome == RunOutcome.OK:
            self.logger.info("Calibration completed in %.3fs", result.elapsed)

    def run_round(self) -> RunOutcome:
        timeout = self.settings.max_runtime_seconds if self.enforce_time_limit else None
        result = self._execute(timeout)

        if result.outcome == RunOutcome.TIMED_OUT:
            self.logger.warning("Bot exceeded the time limit of %.1fs", timeout)
            return result.outcome
        if result.outcome == RunOutcome.FAILED:
            return result.outcome

        self.logger.info("Bot completed in %.3fs", result.elapsed)
        if result.return_code:
            message = f"Bot process exited with code {result.return_code}"
            if self.halt_on_error:
                raise BotExecutionError(message, return_code=result.return_code)
            self.logger.warning(message)
        return result.outcome

    def _execute(self, timeout: float | None) -> ProcessResult:
        target = self._require_target()
        run_file = self.meta.runnable_path(self.bot_dir)
        args = self.build_command(run_file) + [str(target.player_key), str(target.directory)]

        self.logger.debug("Launching %s", " ".join(args))
        started = time.monotonic()

        # Output goes to files, not pipes: a descendant that escaped the
        # process group may keep them open long after the bot is killed.
        with tempfile.TemporaryFile() as stdout_file, tempfile.TemporaryFile() as stderr_file:
            try:
                process = subprocess.Popen(
                    args,
                    cwd=str(run_file.parent),
                    stdin=subprocess.DEVNULL,
                    stdout=stdout_file,
                    stderr=stderr_file,
                    start_new_session=POSIX,
                )
            except OSError as e:
                message = f"Could not start bot {args[0]}: {e}"
                if self.halt_on_error:
                    raise BotExecutionError(message)
                self.logger.error(message)
                return ProcessResult(
                    outcome=RunOutcome.FAILED,
                    return_code=None,
                    elapsed=time.monotonic() - started,
                )

            try:
                process.wait(timeout=timeout)
                outcome = RunOutcome.OK
            except subprocess.TimeoutExpired:
                self._kill(process)
                process.wait()
                outcome = RunOutcome.TIMED_OUT

            result = ProcessResult(
                outcome=outcome,
                return_code=process.returncode,
                elapsed=time.monotonic() - started,
                stdout=_read_output(stdout_file),
                stderr=_read_output(stderr_file),
            )

        if result.stdout.strip():
            self.logger.debug("Bot stdout:\n%s", result.stdout.rstrip())
        if result.stderr.strip():
            self.logger.debug("Bot stderr:\n%s", result.stderr.rstrip())
        return result

    @staticmethod
    def _kill(process: subprocess.Popen):
        """Kill the process and everything it spawned."""
        if POSIX:
            try:
                os.killpg(process.pid, signal.SIGKILL)
                return
            except ProcessLookupError:
                return
            except PermissionError:
                pass
        process.kill()


def _read_output(output_file) -> str:
    output_file.seek(0)
    return output_file.read().decode("utf-8", errors="replace")
