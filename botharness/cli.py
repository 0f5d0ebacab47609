"""
Botharness CLI - Command-line interface for checking bots.

Usage:
    botharness validate <bot_dir>                 Validate bot.json
    botharness calibrate <bot_dir>                Run one calibration
    botharness run-round <bot_dir> <state_file>   Run one round against a state
"""

import argparse
import contextlib
import json
import logging
import sys
import tempfile
from pathlib import Path


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Botharness - Bot execution harness",
        prog="botharness",
    )
    parser.add_argument("--settings", help="Path to a JSON settings file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a bot's bot.json")
    validate_parser.add_argument("bot_dir", help="Path to the bot directory")

    # Calibrate command
    calibrate_parser = subparsers.add_parser("calibrate", help="Run the bot's calibration once")
    calibrate_parser.add_argument("bot_dir", help="Path to the bot directory")
    calibrate_parser.add_argument("--work-dir", help="Working directory (default: temporary)")
    calibrate_parser.add_argument("--key", default="A", help="Player key")

    # Run-round command
    round_parser = subparsers.add_parser("run-round", help="Run the bot for one round")
    round_parser.add_argument("bot_dir", help="Path to the bot directory")
    round_parser.add_argument("state_file", help="JSON game state to hand to the bot")
    round_parser.add_argument("--work-dir", help="Working directory (default: temporary)")
    round_parser.add_argument("--key", default="A", help="Player key")
    round_parser.add_argument("--phase", type=int, default=1, help="Game phase")
    round_parser.add_argument("--round", type=int, default=0, help="Round number")
    round_parser.add_argument("--no-time-limit", action="store_true", help="Disable the deadline")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    from .errors import HarnessError

    try:
        if args.command == "validate":
            cmd_validate(args)
        elif args.command == "calibrate":
            cmd_calibrate(args)
        elif args.command == "run-round":
            cmd_run_round(args)
        else:
            parser.print_help()
            sys.exit(1)
    except HarnessError as e:
        print(f"Error: {e}")
        sys.exit(1)


def load_settings(args):
    """Settings from --settings (if given) plus environment overrides."""
    from .config import HarnessSettings

    base = HarnessSettings.from_file(args.settings) if args.settings else None
    return HarnessSettings.from_env(base)


def cmd_validate(args):
    """Validate bot.json and show the runner it maps to."""
    from .meta import load_bot_meta
    from .runners import runner_class_for

    settings = load_settings(args)
    meta = load_bot_meta(args.bot_dir, settings.bot_meta_file_name)
    runner_cls = runner_class_for(meta.bot_type)

    print(f"Bot: {meta.display_name}")
    print(f"Language: {meta.bot_type.value}")
    print(f"Runner: {runner_cls.__name__}")
    print(f"Run file: {meta.runnable_path(args.bot_dir)}")
    if not meta.runnable_path(args.bot_dir).exists():
        print("Warning: run file does not exist")


def cmd_calibrate(args):
    """Run a single calibration in a scratch round directory."""
    from .meta import load_bot_meta
    from .protocol import CommandReader, RoundContext
    from .runners import RoundTarget, create_runner

    settings = load_settings(args)
    meta = load_bot_meta(args.bot_dir, settings.bot_meta_file_name)
    runner = create_runner(meta, args.bot_dir, settings=settings)

    with _work_dir(args.work_dir) as work_dir:
        directory = RoundContext(1, 0, args.key).directory(work_dir)
        directory.mkdir(parents=True, exist_ok=True)
        runner.target = RoundTarget(directory=directory, player_key=args.key, phase=1)
        runner.calibrate()
        CommandReader(settings).remove(directory)

    seconds = getattr(runner, "calibration_seconds", None)
    if seconds is not None:
        print(f"Calibration took {seconds:.3f}s")


def cmd_run_round(args):
    """Write a state, run calibration plus one round, print the command."""
    from .game import GamePlayer, GameSnapshot
    from .harness import BotHarness
    from .meta import load_bot_meta

    settings = load_settings(args)
    meta = load_bot_meta(args.bot_dir, settings.bot_meta_file_name)

    try:
        with open(args.state_file, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.state_file}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.state_file}: {e}")
        sys.exit(1)

    player = GamePlayer(name=meta.display_name, key=args.key)
    state = GameSnapshot(
        phase=args.phase,
        current_round=args.round,
        registered_players=[player],
        payload=payload,
    )

    with _work_dir(args.work_dir) as work_dir:
        harness = BotHarness(
            meta,
            args.bot_dir,
            work_dir,
            no_time_limit=args.no_time_limit,
            settings=settings,
        )
        harness.on_command(lambda _player, command: print(f"Command: {command}"))
        try:
            result = harness.start_game(state)
        finally:
            harness.close()

    if result.timed_out:
        print("Bot timed out")
    if args.work_dir:
        print(f"Round files: {harness.current_directory}")


@contextlib.contextmanager
def _work_dir(path):
    """Use the given directory, or a temporary one removed afterwards."""
    if path:
        yield Path(path)
        return
    with tempfile.TemporaryDirectory(prefix="botharness-") as tmp:
        yield Path(tmp)


if __name__ == "__main__":
    main()
