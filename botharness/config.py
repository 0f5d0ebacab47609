"""
Harness Settings - Tunable configuration for the bot harness.

Settings cover:
- Well-known file names inside a round directory
- Wall-clock limits for calibration and round execution
- Failure policy thresholds
- Interpreter executables per language family

Settings can be loaded from a JSON file and overridden by
BOTHARNESS_* environment variables.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError


# Environment variable -> settings field
ENV_OVERRIDES = {
    "BOTHARNESS_MAX_RUNTIME": "max_runtime_seconds",
    "BOTHARNESS_PYTHON2": "python2_executable",
    "BOTHARNESS_PYTHON3": "python3_executable",
    "BOTHARNESS_JAVA": "java_executable",
    "BOTHARNESS_NODE": "node_executable",
}


class HarnessSettings(BaseModel):
    """Configuration shared by every harness in a match."""

    # Round directory file names
    state_file_name: str = "state.json"
    map_file_name: str = "map.txt"
    ship_placement_file_name: str = "place.txt"
    command_file_name: str = "command.txt"
    log_file_name: str = "log.txt"
    bot_meta_file_name: str = "bot.json"

    # Wall-clock limits
    max_runtime_seconds: float = Field(default=2.0, gt=0)
    calibration_runtime_seconds: float = Field(default=10.0, gt=0)

    # Failure policy
    do_nothing_warning_threshold: int = Field(default=10, ge=1)
    do_nothing_kill_threshold: int = Field(default=20, ge=1)
    failed_first_phase_kill_count: int = Field(default=5, ge=1)

    # Executables
    python2_executable: str = "python2"
    python3_executable: str = "python3"
    java_executable: str = "java"
    node_executable: str = "node"

    model_config = {"frozen": True}

    @classmethod
    def from_file(cls, path: str | Path) -> HarnessSettings:
        """Load settings from a JSON file."""
        path = Path(path)
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ConfigurationError(f"Settings file not found: {path}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings file {path}: {e}")

    @classmethod
    def from_env(
        cls,
        base: HarnessSettings | None = None,
        environ: dict[str, str] | None = None,
    ) -> HarnessSettings:
        """Apply BOTHARNESS_* overrides on top of base (or defaults)."""
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = (base or cls()).model_dump()
        for env_name, field_name in ENV_OVERRIDES.items():
            if env_name in environ:
                values[field_name] = environ[env_name]
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment settings: {e}")
