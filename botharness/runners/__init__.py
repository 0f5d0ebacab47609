"""
Runners module - Launching bots per language.

Provides:
- BotRunner: Interface every runner implements
- ProcessBotRunner: Subprocess execution with a wall-clock deadline
- NativeRunner, ScriptRunner, ManagedRuntimeRunner, ScriptEngineRunner
- create_runner: Closed registry lookup by bot language
"""

from .base import BotRunner, RunOutcome, RoundTarget
from .process import ProcessBotRunner, ProcessResult
from .languages import NativeRunner, ScriptRunner, ManagedRuntimeRunner, ScriptEngineRunner
from .registry import RUNNERS, create_runner, runner_class_for

__all__ = [
    "BotRunner",
    "RunOutcome",
    "RoundTarget",
    "ProcessBotRunner",
    "ProcessResult",
    "NativeRunner",
    "ScriptRunner",
    "ManagedRuntimeRunner",
    "ScriptEngineRunner",
    "RUNNERS",
    "create_runner",
    "runner_class_for",
]
