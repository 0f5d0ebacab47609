"""
Errors - Exception hierarchy for the harness.

Only configuration and lifecycle problems are raised to callers.
Timeouts and misbehaving bots are handled inside the round loop.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for all harness errors."""


class ConfigurationError(HarnessError):
    """Raised when a harness cannot be built from its configuration."""


class InvalidBotTypeError(ConfigurationError):
    """Raised when a bot declares a language with no registered runner."""

    def __init__(self, bot_type: object):
        self.bot_type = bot_type
        super().__init__(f"Invalid bot type {bot_type!r}")


class BotMetaError(ConfigurationError):
    """Raised when bot.json is missing or invalid."""

    def __init__(self, path: str, errors: list[str]):
        self.path = path
        self.errors = errors
        super().__init__(f"Invalid bot meta {path}: {'; '.join(errors)}")


class BotExecutionError(HarnessError):
    """Raised when a bot process cannot be launched or fails with halt_on_error."""

    def __init__(self, message: str, return_code: int | None = None):
        self.return_code = return_code
        super().__init__(message)


class HarnessStateError(HarnessError):
    """Raised when a lifecycle callback arrives in the wrong state."""
