"""
Commands - Decisions a bot can hand back to the engine.

Commands are:
- Parsed from the bot's command artifact each round
- Published to the engine exactly once per round
- Executed by the engine (outside this package)

DoNothingCommand is the fallback whenever no real decision is available.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class CommandType(Enum):
    """Kinds of commands."""
    DO_NOTHING = "do_nothing"
    FIRE_SHOT = "fire_shot"
    PLACE_SHIPS = "place_ships"


class Direction(Enum):
    """Orientation of a placed ship."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""

    @property
    def command_type(self) -> CommandType:
        raise NotImplementedError

    @property
    def is_do_nothing(self) -> bool:
        return self.command_type == CommandType.DO_NOTHING


@dataclass(frozen=True)
class DoNothingCommand(Command):
    """The bot passes this round."""

    @property
    def command_type(self) -> CommandType:
        return CommandType.DO_NOTHING

    def __str__(self) -> str:
        return "DoNothing"


@dataclass(frozen=True)
class FireShotCommand(Command):
    """
    A shooting-phase command.

    The code selects the shot kind; its meaning belongs to the engine.
    """
    code: int
    x: int
    y: int

    @property
    def command_type(self) -> CommandType:
        return CommandType.FIRE_SHOT

    def __str__(self) -> str:
        return f"FireShot(code={self.code}, x={self.x}, y={self.y})"


@dataclass(frozen=True)
class ShipPlacement:
    """One ship on the board."""
    ship_type: str
    x: int
    y: int
    direction: Direction


@dataclass(frozen=True)
class PlaceShipsCommand(Command):
    """A placement-phase command covering every ship the bot placed."""
    placements: tuple[ShipPlacement, ...] = field(default_factory=tuple)

    @property
    def command_type(self) -> CommandType:
        return CommandType.PLACE_SHIPS

    def __str__(self) -> str:
        ships = ", ".join(
            f"{p.ship_type}@{p.x},{p.y} {p.direction.value}" for p in self.placements
        )
        return f"PlaceShips({ships})"


def parse_round_command(text: str) -> Command:
    """
    Parse a shooting-phase command file.

    Format: a single line "code,x,y". Code 0 means do nothing.

    Raises:
        ValueError: text is empty or malformed
    """
    line = text.strip()
    if not line:
        raise ValueError("Command file is empty")

    parts = [p.strip() for p in line.splitlines()[0].split(",")]
    if len(parts) != 3:
        raise ValueError(f"Expected 'code,x,y', got {line!r}")

    try:
        code, x, y = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Non-integer value in command {line!r}")

    if code == 0:
        return DoNothingCommand()
    return FireShotCommand(code=code, x=x, y=y)


def parse_ship_placement(text: str) -> Command:
    """
    Parse a placement-phase file.

    Format: one ship per line, "ShipType x y Direction".

    Raises:
        ValueError: no placements, or a line is malformed
    """
    placements: list[ShipPlacement] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) != 4:
            raise ValueError(f"Line {line_no}: expected 'ShipType x y Direction'")

        ship_type, x, y, direction = parts
        try:
            placements.append(ShipPlacement(
                ship_type=ship_type,
                x=int(x),
                y=int(y),
                direction=Direction(direction.lower()),
            ))
        except ValueError:
            raise ValueError(f"Line {line_no}: invalid placement {line!r}")

    if not placements:
        raise ValueError("Placement file is empty")
    return PlaceShipsCommand(placements=tuple(placements))
