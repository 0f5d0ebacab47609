"""
Player - Engine-facing interface of a participant.

The engine drives players through lifecycle callbacks:
- start_game, new_round_started, game_ended
- player_killed, first_round_failed, player_command_failed

and receives each player's decision through publish_command().
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Callable

from .commands import Command
from .game import GamePlayer, GameSnapshot

CommandListener = Callable[["Player", Command], None]


class Player(ABC):
    """
    Abstract base class for players.

    The engine attaches its player record (key, kill state) with
    attach() or lets start_game() look it up by name.
    """

    def __init__(self, name: str):
        self.name = name
        self.game_player: GamePlayer | None = None
        self.logger = logging.getLogger(__name__)
        self._listeners: list[CommandListener] = []

    def attach(self, game_player: GamePlayer):
        """Bind the engine's record for this player."""
        self.game_player = game_player

    def on_command(self, listener: CommandListener):
        """Register an engine callback for published commands."""
        self._listeners.append(listener)

    def publish_command(self, command: Command):
        """Hand a command to every registered listener."""
        for listener in self._listeners:
            listener(self, command)

    @abstractmethod
    def start_game(self, state: GameSnapshot):
        pass

    @abstractmethod
    def new_round_started(self, state: GameSnapshot):
        pass

    @abstractmethod
    def game_ended(self, state: GameSnapshot):
        pass

    def player_killed(self, state: GameSnapshot):
        self.logger.info("Player has been killed")

    def first_round_failed(self, state: GameSnapshot):
        self.logger.info("The first round has failed due to a bot's ships not all being placed")

    def player_command_failed(self, command: Command, reason: str):
        self.logger.info("Player command %s failed because %s", command, reason)

    def close(self):
        """Release resources; safe to call more than once."""
