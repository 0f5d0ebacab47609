"""
Language Runners - Command lines per language family.

- NativeRunner: compiled executables (C#, C++, F# builds)
- ScriptRunner: interpreted scripts (Python 2 and 3)
- ManagedRuntimeRunner: JVM jars (Java)
- ScriptEngineRunner: script engine programs (JavaScript on node)
"""

from __future__ import annotations
from pathlib import Path

from ..meta import BotType
from .process import ProcessBotRunner


class NativeRunner(ProcessBotRunner):
    """Runs the bot's built executable directly."""

    def build_command(self, run_file: Path) -> list[str]:
        return [str(run_file)]


class ScriptRunner(ProcessBotRunner):
    """Runs a script with the interpreter matching its declared version."""

    def build_command(self, run_file: Path) -> list[str]:
        if self.meta.bot_type == BotType.PYTHON2:
            interpreter = self.settings.python2_executable
        else:
            interpreter = self.settings.python3_executable
        return [interpreter, str(run_file)]


class ManagedRuntimeRunner(ProcessBotRunner):
    """Runs a jar on the JVM."""

    def build_command(self, run_file: Path) -> list[str]:
        return [self.settings.java_executable, "-jar", str(run_file)]


class ScriptEngineRunner(ProcessBotRunner):
    """Runs a JavaScript program on node."""

    def build_command(self, run_file: Path) -> list[str]:
        return [self.settings.node_executable, str(run_file)]
