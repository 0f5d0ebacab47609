"""
State Exchange - Per-round game state files for the bot.

Before each execution the harness writes:
1. The state file (machine-readable rendering)
2. The map file (human-readable rendering)

Both are UTF-8 without a byte-order mark and fully overwrite any
previous content. After the round's command is obtained both files
are removed; removing a file that is already gone is a no-op.
"""

from __future__ import annotations
import codecs
import logging
from pathlib import Path

from ..config import HarnessSettings
from ..game import GameSnapshot, PlayerType, StateRenderer

logger = logging.getLogger(__name__)


class StateExchange:
    """
    Writes and clears state files in a round directory.

    Usage:
        exchange = StateExchange(renderer, settings)
        exchange.write_round_files(directory, state, PlayerType.ONE)
        ... run the bot ...
        exchange.clear_round_files(directory)
    """

    def __init__(self, renderer: StateRenderer, settings: HarnessSettings | None = None):
        self.renderer = renderer
        self.settings = settings or HarnessSettings()

    def state_file(self, directory: Path) -> Path:
        return directory / self.settings.state_file_name

    def map_file(self, directory: Path) -> Path:
        return directory / self.settings.map_file_name

    def write_round_files(
        self,
        directory: Path,
        state: GameSnapshot,
        perspective: PlayerType,
    ):
        """Create the directory if needed, then write state and map files."""
        directory.mkdir(parents=True, exist_ok=True)

        _write_utf8(self.state_file(directory), self.renderer.render_json(state, perspective))
        _write_utf8(self.map_file(directory), self.renderer.render_text(state, perspective))

        logger.debug("Wrote round files in %s", directory)

    def clear_round_files(self, directory: Path):
        """Remove state and map files. Missing files are ignored."""
        self.state_file(directory).unlink(missing_ok=True)
        self.map_file(directory).unlink(missing_ok=True)


def _write_utf8(path: Path, content: bytes):
    """Overwrite path with content, dropping any leading BOM."""
    if content.startswith(codecs.BOM_UTF8):
        content = content[len(codecs.BOM_UTF8):]
    path.write_bytes(content)
