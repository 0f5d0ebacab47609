"""
Player Logs - Per-harness log capture.

Each harness logs through its own logger. Records are:
- Propagated to the normal logging tree (console, files, ...)
- Buffered in memory by a RoundLogHandler

After each executed round the buffer is appended to the round
directory's log file, so every bot can read what happened to it.
"""

from __future__ import annotations
import logging
import threading
from pathlib import Path

PLAYER_LOGGER_NAME = "botharness.player"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class RoundLogHandler(logging.Handler):
    """Buffers formatted records until the next drain()."""

    def __init__(self, level: int = logging.INFO):
        super().__init__(level)
        self.setFormatter(logging.Formatter(LOG_FORMAT))
        self._lines: list[str] = []
        self._buffer_lock = threading.Lock()

    def emit(self, record: logging.LogRecord):
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._buffer_lock:
            self._lines.append(line)

    def peek(self) -> str:
        """Buffered text without clearing it."""
        with self._buffer_lock:
            return "".join(f"{line}\n" for line in self._lines)

    def drain(self) -> str:
        """Return buffered text and clear the buffer."""
        with self._buffer_lock:
            text = "".join(f"{line}\n" for line in self._lines)
            self._lines.clear()
        return text

    def flush_to(self, path: Path):
        """Append buffered text to path and clear the buffer."""
        text = self.drain()
        if not text:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)


def create_player_logger(player_name: str) -> tuple[logging.Logger, RoundLogHandler]:
    """
    Create a logger private to one harness instance.

    The logger is not registered with the logging manager: two harnesses
    for the same player name never share a handler, and a released
    logger leaves nothing behind. Records still propagate to the
    "botharness.player" logger and up the normal tree.
    """
    logger = logging.Logger(f"{PLAYER_LOGGER_NAME}.{player_name or 'player'}")
    logger.parent = logging.getLogger(PLAYER_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    handler = RoundLogHandler()
    logger.addHandler(handler)
    return logger, handler


def release_player_logger(logger: logging.Logger, handler: RoundLogHandler):
    """Detach the round handler from a harness logger."""
    logger.removeHandler(handler)
    handler.close()
