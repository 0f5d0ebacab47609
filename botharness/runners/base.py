"""
Bot Runner - Interface for executing a bot once.

A runner knows how to launch one bot program. Per round it:
1. Runs the bot against the current round directory
2. Reports whether it finished in time
3. Parses the command the bot left behind

Runners never decide policy; timeouts are reported, not punished.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..commands import (
    Command,
    DoNothingCommand,
    parse_round_command,
    parse_ship_placement,
)
from ..config import HarnessSettings
from ..meta import BotMeta
from ..protocol import CommandArtifact, CommandReader


class RunOutcome(Enum):
    """Result of a single bot execution."""
    OK = "ok"
    TIMED_OUT = "timed_out"
    FAILED = "failed"  # could not be launched


@dataclass(frozen=True)
class RoundTarget:
    """Where and as whom the bot runs next."""
    directory: Path
    player_key: str
    phase: int


class BotRunner(ABC):
    """
    Abstract base class for bot runners.

    The harness sets `target` before every calibrate()/run_round().
    """

    def __init__(
        self,
        meta: BotMeta,
        bot_dir: str | Path,
        settings: HarnessSettings | None = None,
        logger: logging.Logger | None = None,
        enforce_time_limit: bool = True,
        halt_on_error: bool = False,
    ):
        self.meta = meta
        self.bot_dir = Path(bot_dir).resolve()
        self.settings = settings or HarnessSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.enforce_time_limit = enforce_time_limit
        self.halt_on_error = halt_on_error
        self.reader = CommandReader(self.settings)
        self.target: RoundTarget | None = None

    @abstractmethod
    def calibrate(self):
        """Single warm-up execution; its artifact is discarded by the caller."""
        pass

    @abstractmethod
    def run_round(self) -> RunOutcome:
        """Execute the bot once against the current target."""
        pass

    def get_bot_command(self) -> Command:
        """
        Parse the artifact produced by the last run_round().

        Missing or malformed artifacts fall back to DoNothingCommand.
        """
        target = self._require_target()
        artifact = self.reader.artifact_for_phase(target.phase)
        path = self.reader.path(target.directory, artifact)
        text = self.reader.read_text(target.directory, artifact)

        if text is None:
            self.logger.info("No command file found at %s", path.name)
            return DoNothingCommand()

        try:
            if artifact == CommandArtifact.SHIP_PLACEMENT:
                return parse_ship_placement(text)
            return parse_round_command(text)
        except ValueError as e:
            self.logger.info("Could not parse %s: %s", path.name, e)
            return DoNothingCommand()

    def close(self):
        """Release any resources held by the runner."""

    def get_name(self) -> str:
        return self.__class__.__name__

    def _require_target(self) -> RoundTarget:
        if self.target is None:
            raise RuntimeError(f"{self.get_name()} has no round target")
        return self.target
