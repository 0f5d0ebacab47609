"""
Round Paths - Maps a round and player to a working directory.

Layout:
    {work_dir}/Phase {phase} - Round {round}/{player_key}/

Distinct (phase, round, player key) triples never share a directory.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


def round_path(phase: int, round_number: int) -> str:
    """Directory name shared by all players for one round."""
    return f"Phase {phase} - Round {round_number}"


@dataclass(frozen=True)
class RoundContext:
    """Identity of one player's round."""
    phase: int
    round_number: int
    player_key: str

    def __post_init__(self):
        key = str(self.player_key)
        if not key or key in {".", ".."} or "/" in key or "\\" in key:
            raise ValueError(f"Invalid player key: {self.player_key!r}")

    def directory(self, work_dir: str | Path) -> Path:
        """Working directory for this round and player."""
        return Path(work_dir) / round_path(self.phase, self.round_number) / str(self.player_key)
