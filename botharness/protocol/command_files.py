"""
Command Files - Artifacts written by the bot.

The bot answers a round by writing one of:
- The ship placement file (phase 1)
- The command file (every later round)

Artifacts are read once and removed straight away, so a file left
over from one execution can never be read as the next one's answer.
On request the same text is written back for audit; that copy lives
in the finished round's directory only.
"""

from __future__ import annotations
import logging
from enum import Enum
from pathlib import Path

from ..config import HarnessSettings

logger = logging.getLogger(__name__)


class CommandArtifact(Enum):
    """Files a bot may produce."""
    SHIP_PLACEMENT = "ship_placement"
    ROUND_COMMAND = "round_command"


class CommandReader:
    """Reads and removes command artifacts in a round directory."""

    def __init__(self, settings: HarnessSettings | None = None):
        self.settings = settings or HarnessSettings()

    def path(self, directory: Path, artifact: CommandArtifact) -> Path:
        if artifact == CommandArtifact.SHIP_PLACEMENT:
            return directory / self.settings.ship_placement_file_name
        return directory / self.settings.command_file_name

    @staticmethod
    def artifact_for_phase(phase: int) -> CommandArtifact:
        """Phase 1 is ship placement; every other phase uses the command file."""
        return CommandArtifact.SHIP_PLACEMENT if phase == 1 else CommandArtifact.ROUND_COMMAND

    def read_text(self, directory: Path, artifact: CommandArtifact) -> str | None:
        """Full text of an artifact, or None if the bot did not write it."""
        path = self.path(directory, artifact)
        try:
            return path.read_bytes().decode("utf-8-sig", errors="replace")
        except FileNotFoundError:
            return None

    def remove(self, directory: Path, restore: bool = False) -> dict[CommandArtifact, str]:
        """
        Read and delete every artifact present.

        Args:
            directory: Round directory
            restore: Write the same text back after deleting (audit copy)

        Returns:
            Text of each artifact that was found
        """
        removed: dict[CommandArtifact, str] = {}
        for artifact in CommandArtifact:
            path = self.path(directory, artifact)
            content = self.read_text(directory, artifact)
            if content is None:
                continue

            path.unlink(missing_ok=True)
            removed[artifact] = content

            if restore:
                path.write_text(content, encoding="utf-8")
                logger.debug("Restored %s for audit", path)

        return removed
