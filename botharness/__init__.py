"""
Botharness - Bot execution harness for turn-based board games.

Drives an external, language-agnostic bot program once per game round.
The harness provides:
- Round lifecycle (calibration, rounds, game end)
- File-based exchange of game state and bot commands
- Per-language process runners with a wall-clock deadline
- Failure policy that kills off misbehaving bots
"""

__version__ = "0.1.0"
