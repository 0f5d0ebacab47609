"""
Game Contract - What the harness needs from the enclosing engine.

The engine owns the real game state and rules. The harness only sees:
- The round identity (phase, round number)
- The registered players and their kill/failure bookkeeping
- An opaque payload that a renderer turns into bytes

Renderers produce the two per-round views written for the bot.
"""

from __future__ import annotations
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PlayerType(Enum):
    """Seat of a player; used as the rendering perspective."""
    ONE = "one"
    TWO = "two"


@dataclass
class GamePlayer:
    """
    Engine-side record of one player.

    failed_first_phase_commands is maintained by the engine;
    the harness only reads it.
    """
    name: str
    key: str
    player_type: PlayerType = PlayerType.ONE
    killed: bool = False
    failed_first_phase_commands: int = 0

    def kill_off(self):
        """Mark the player as eliminated."""
        self.killed = True


@dataclass
class GameSnapshot:
    """State delivered to players at each round boundary."""
    phase: int
    current_round: int
    registered_players: list[GamePlayer] = field(default_factory=list)
    payload: Any = None

    def get_player(self, name: str) -> GamePlayer:
        """Get a registered player by name."""
        for player in self.registered_players:
            if player.name == name:
                return player
        raise KeyError(f"Player not registered: {name}")


class StateRenderer(ABC):
    """
    Renders a snapshot for one player's perspective.

    Both methods must be pure: same input, same bytes.
    """

    @abstractmethod
    def render_json(self, state: GameSnapshot, perspective: PlayerType) -> bytes:
        """Machine-readable rendering (written to the state file)."""
        pass

    @abstractmethod
    def render_text(self, state: GameSnapshot, perspective: PlayerType) -> bytes:
        """Human-readable rendering (written to the map file)."""
        pass


class JsonStateRenderer(StateRenderer):
    """
    Renderer for JSON-serializable payloads.

    Used by the CLI and tests; real games plug in their own renderer.
    """

    def render_json(self, state: GameSnapshot, perspective: PlayerType) -> bytes:
        document = {
            "phase": state.phase,
            "round": state.current_round,
            "perspective": perspective.value,
            "players": [
                {"name": p.name, "key": p.key, "killed": p.killed}
                for p in state.registered_players
            ],
            "state": state.payload,
        }
        return json.dumps(document, indent=2, sort_keys=True).encode("utf-8")

    def render_text(self, state: GameSnapshot, perspective: PlayerType) -> bytes:
        lines = [
            f"Phase {state.phase} - Round {state.current_round}",
            f"Perspective: player {perspective.value}",
        ]
        for player in state.registered_players:
            status = "killed" if player.killed else "alive"
            lines.append(f"{player.key}: {player.name} ({status})")
        if state.payload is not None:
            lines.append(json.dumps(state.payload, indent=2, sort_keys=True))
        return ("\n".join(lines) + "\n").encode("utf-8")
