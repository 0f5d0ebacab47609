"""
Protocol Module - File-based exchange with the bot process.

Each round the harness and the bot meet in a round directory:
- Harness writes the state and map files
- Bot writes its command (or ship placement) file
- Harness reads and removes the command, then clears the state files

Provides:
- RoundContext: (phase, round, player key) -> round directory
- StateExchange: writes and clears the per-round state files
- CommandReader: reads, removes and restores command artifacts
"""

from .paths import RoundContext, round_path
from .state_files import StateExchange
from .command_files import CommandReader, CommandArtifact

__all__ = [
    "RoundContext",
    "round_path",
    "StateExchange",
    "CommandReader",
    "CommandArtifact",
]
