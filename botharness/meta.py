"""
Bot Meta - Identity and language of a submitted bot.

Every bot directory carries a bot.json describing:
- Who wrote it (nick name, author, email)
- Which language it is written in
- Where the runnable file lives

The meta is immutable once loaded.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import BotMetaError


class BotType(str, Enum):
    """Supported bot languages."""
    CSHARP = "csharp"
    CPLUSPLUS = "cplusplus"
    FSHARP = "fsharp"
    PYTHON2 = "python2"
    PYTHON3 = "python3"
    JAVA = "java"
    JAVASCRIPT = "javascript"


class BotMeta(BaseModel):
    """
    Contents of a bot's bot.json.

    Keys use the camel-case layout of bot.json (NickName, BotType, ...);
    snake_case names are accepted too.
    """
    author: str | None = Field(default=None, alias="Author")
    email: str | None = Field(default=None, alias="Email")
    nick_name: str | None = Field(default=None, alias="NickName")
    bot_type: BotType = Field(alias="BotType")
    bot_location: str = Field(default="", alias="BotLocation")
    bot_file_name: str = Field(alias="BotFileName")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("bot_type", mode="before")
    @classmethod
    def _normalize_bot_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace(" ", "")
        return value

    @property
    def display_name(self) -> str:
        """First non-empty of nick name, author and email."""
        return self.nick_name or self.author or self.email or "unnamed bot"

    def runnable_path(self, bot_dir: str | Path) -> Path:
        """Absolute path of the file the runner should launch."""
        return (Path(bot_dir) / self.bot_location / self.bot_file_name).resolve()


def load_bot_meta(bot_dir: str | Path, file_name: str = "bot.json") -> BotMeta:
    """
    Load and validate bot.json from a bot directory.

    Raises:
        BotMetaError: file missing, not JSON, or failing validation
    """
    path = Path(bot_dir) / file_name
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise BotMetaError(str(path), ["file not found"])

    try:
        return BotMeta.model_validate_json(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'document'}: {err['msg']}"
            for err in e.errors()
        ]
        raise BotMetaError(str(path), errors)
