"""
Bot Harness - Drives one external bot through a game.

Lifecycle:
    CREATED -> AWAITING_CALIBRATION -> ROUND_ACTIVE (repeats) -> ENDED

Per round:
1. Resolve the round directory and write the state and map files
2. Check the failure policy (a crossed threshold skips execution)
3. Run the bot under its deadline; a timeout becomes "do nothing"
4. Count the command, append the round log, remove the command file
   (keeping an audit copy), publish the command
5. Remove the state and map files

One harness serializes all work for its player. Harnesses for
different players share nothing and may run concurrently.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .commands import Command, DoNothingCommand
from .config import HarnessSettings
from .errors import HarnessStateError
from .failure_policy import FailurePolicy, FailureThresholds, PolicyDecision
from .game import GamePlayer, GameSnapshot, JsonStateRenderer, PlayerType, StateRenderer
from .logs import create_player_logger, release_player_logger
from .meta import BotMeta
from .player import Player
from .protocol import CommandReader, RoundContext, StateExchange
from .runners import BotRunner, RoundTarget, RunOutcome, create_runner, runner_class_for


class HarnessState(Enum):
    """State of a harness."""
    CREATED = "created"
    AWAITING_CALIBRATION = "awaiting_calibration"
    ROUND_ACTIVE = "round_active"
    ENDED = "ended"


@dataclass
class RoundResult:
    """What happened to the player in one round."""
    round_number: int
    executed: bool = False
    timed_out: bool = False
    eliminated: bool = False
    command: Command | None = None


class BotHarness(Player):
    """
    Player backed by an external bot program.

    Usage:
        harness = BotHarness(meta, bot_dir="bots/mine", work_dir="match/1")
        harness.on_command(engine.receive_command)

        harness.start_game(state)          # calibration + round 0
        harness.new_round_started(state)   # every later round
        harness.game_ended(state)
    """

    def __init__(
        self,
        meta: BotMeta,
        bot_dir: str | Path,
        work_dir: str | Path,
        no_time_limit: bool = False,
        halt_on_error: bool = False,
        settings: HarnessSettings | None = None,
        renderer: StateRenderer | None = None,
        runner: BotRunner | None = None,
    ):
        super().__init__(meta.display_name)
        self.meta = meta
        self.bot_dir = Path(bot_dir)
        self.work_dir = Path(work_dir)
        self.enforce_time_limit = not no_time_limit
        self.halt_on_error = halt_on_error
        self.settings = settings or HarnessSettings()

        # Fail fast on unknown languages, even with an injected runner
        runner_class_for(meta.bot_type)

        self.logger, self._log_handler = create_player_logger(self.name)
        self.runner = runner or create_runner(
            meta,
            bot_dir,
            settings=self.settings,
            logger=self.logger,
            enforce_time_limit=self.enforce_time_limit,
            halt_on_error=halt_on_error,
        )

        self.exchange = StateExchange(renderer or JsonStateRenderer(), self.settings)
        self.reader = CommandReader(self.settings)
        self.policy = FailurePolicy(FailureThresholds.from_settings(self.settings))

        self.state = HarnessState.CREATED
        self.current_round = 0
        self.current_directory: Path | None = None
        self._perspective = PlayerType.ONE
        self._closed = False

    @property
    def do_nothing_count(self) -> int:
        return self.policy.do_nothing_count

    # ------------------------------------------------------------------
    # Engine callbacks
    # ------------------------------------------------------------------

    def start_game(self, state: GameSnapshot) -> RoundResult:
        """Calibrate the bot, then play the first round."""
        if self.state != HarnessState.CREATED:
            raise HarnessStateError(f"Game already started (state={self.state.value})")

        player = self.game_player or state.get_player(self.name)
        self.attach(player)
        self._perspective = player.player_type

        self.state = HarnessState.AWAITING_CALIBRATION
        directory = self._enter_round(state)
        self.exchange.write_round_files(directory, state, self._perspective)

        self.runner.calibrate()
        # Whatever the warm-up wrote must not count as round 0's answer
        self.reader.remove(directory)

        self.state = HarnessState.ROUND_ACTIVE
        return self.new_round_started(state)

    def new_round_started(self, state: GameSnapshot) -> RoundResult:
        """Play one round: write state, run the bot, publish one command."""
        if self.state == HarnessState.ENDED:
            raise HarnessStateError("Game has ended; no further rounds accepted")
        if self.state == HarnessState.CREATED:
            raise HarnessStateError("start_game must be called before the first round")

        player = self._require_player()
        directory = self._enter_round(state)
        self.exchange.write_round_files(directory, state, self._perspective)

        try:
            if player.killed:
                return RoundResult(round_number=self.current_round)
            return self._run_bot_and_get_next_move(player, directory)
        finally:
            self.exchange.clear_round_files(directory)

    def game_ended(self, state: GameSnapshot):
        """Write the final state for audit; nothing is executed."""
        self.logger.info("Game has ended")
        if self.game_player is None:
            self.attach(state.get_player(self.name))
        directory = self._enter_round(state)
        self.exchange.write_round_files(directory, state, self._perspective)
        self._log_handler.flush_to(directory / self.settings.log_file_name)
        self.state = HarnessState.ENDED

    def close(self):
        if self._closed:
            return
        self._closed = True
        self.runner.close()
        release_player_logger(self.logger, self._log_handler)

    # ------------------------------------------------------------------
    # Round internals
    # ------------------------------------------------------------------

    def _run_bot_and_get_next_move(self, player: GamePlayer, directory: Path) -> RoundResult:
        result = RoundResult(round_number=self.current_round)

        decision = self.policy.check(player.failed_first_phase_commands)
        for warning in decision.warnings:
            self.logger.warning(warning)
        if decision.eliminate:
            self._kill_off(player, decision)
            self._flush_log(directory)
            result.eliminated = True
            return result

        result.executed = True
        if self.runner.run_round() == RunOutcome.TIMED_OUT:
            self.logger.warning("Bot time limit exceeded, using do nothing command")
            command: Command = DoNothingCommand()
            result.timed_out = True
        else:
            command = self.runner.get_bot_command()

        count = self.policy.record(command)
        self.logger.info("Round %d command: %s (do nothing streak: %d)", self.current_round, command, count)

        after = self.policy.check_after_command()
        if after.eliminate:
            self._kill_off(player, after)
            result.eliminated = True

        self._flush_log(directory)
        self.reader.remove(directory, restore=True)

        result.command = command
        self.publish_command(command)
        return result

    def _kill_off(self, player: GamePlayer, decision: PolicyDecision):
        if player.killed:
            return
        for reason in decision.reasons:
            self.logger.warning(reason)
        player.kill_off()

    def _enter_round(self, state: GameSnapshot) -> Path:
        """Point the harness and runner at this round's directory."""
        player = self._require_player()
        self.current_round = state.current_round
        context = RoundContext(state.phase, state.current_round, player.key)
        self.current_directory = context.directory(self.work_dir)
        self.runner.target = RoundTarget(
            directory=self.current_directory,
            player_key=player.key,
            phase=state.phase,
        )
        return self.current_directory

    def _flush_log(self, directory: Path):
        self._log_handler.flush_to(directory / self.settings.log_file_name)

    def _require_player(self) -> GamePlayer:
        if self.game_player is None:
            raise HarnessStateError(f"No engine player attached for {self.name}")
        return self.game_player
