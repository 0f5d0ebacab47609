"""
Runner Registry - Closed mapping from bot language to runner.

Resolved once when a harness is built. A language without a runner
is a configuration error; the player is never created.
"""

from __future__ import annotations
import logging
from pathlib import Path

from ..config import HarnessSettings
from ..errors import InvalidBotTypeError
from ..meta import BotMeta, BotType
from .base import BotRunner
from .languages import ManagedRuntimeRunner, NativeRunner, ScriptEngineRunner, ScriptRunner


RUNNERS: dict[BotType, type[BotRunner]] = {
    BotType.CSHARP: NativeRunner,
    BotType.CPLUSPLUS: NativeRunner,
    BotType.FSHARP: NativeRunner,
    BotType.PYTHON2: ScriptRunner,
    BotType.PYTHON3: ScriptRunner,
    BotType.JAVA: ManagedRuntimeRunner,
    BotType.JAVASCRIPT: ScriptEngineRunner,
}


def runner_class_for(bot_type: object) -> type[BotRunner]:
    """
    Look up the runner class for a bot type.

    Raises:
        InvalidBotTypeError: no runner is registered for bot_type
    """
    try:
        return RUNNERS[BotType(bot_type)]
    except (ValueError, KeyError):
        raise InvalidBotTypeError(bot_type)


def create_runner(
    meta: BotMeta,
    bot_dir: str | Path,
    settings: HarnessSettings | None = None,
    logger: logging.Logger | None = None,
    enforce_time_limit: bool = True,
    halt_on_error: bool = False,
) -> BotRunner:
    """Build the runner for a bot's declared language."""
    runner_cls = runner_class_for(meta.bot_type)
    return runner_cls(
        meta,
        bot_dir,
        settings=settings,
        logger=logger,
        enforce_time_limit=enforce_time_limit,
        halt_on_error=halt_on_error,
    )
