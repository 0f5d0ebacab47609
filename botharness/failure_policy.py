"""
Failure Policy - Detects misbehaving bots and decides when to kill them off.

Rules (thresholds are tunable):
- Too many consecutive do-nothing commands -> warning
- Even more consecutive do-nothing commands -> eliminate
- Repeated failed ship placement in phase 1 -> eliminate

Thresholds are checked before a bot runs, so a crossed threshold never
costs an extra execution, and again after the command is counted so a
player that just reached the limit is removed in the same round.

Counters belong to one harness (one player); nothing here is shared.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .commands import Command
from .config import HarnessSettings


@dataclass(frozen=True)
class FailureThresholds:
    """When to warn and when to eliminate."""
    do_nothing_warning: int = 10
    do_nothing_kill: int = 20
    failed_first_phase_kill: int = 5

    @classmethod
    def from_settings(cls, settings: HarnessSettings) -> FailureThresholds:
        return cls(
            do_nothing_warning=settings.do_nothing_warning_threshold,
            do_nothing_kill=settings.do_nothing_kill_threshold,
            failed_first_phase_kill=settings.failed_first_phase_kill_count,
        )


@dataclass
class FailureCounters:
    """Per-player failure bookkeeping."""
    do_nothing_count: int = 0


@dataclass
class PolicyDecision:
    """Outcome of a policy check."""
    eliminate: bool = False
    warnings: list[str] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)


DO_NOTHING_WARNING = (
    "Bot is sending too many do nothing commands, "
    "if this continues the bot will be killed off"
)
DO_NOTHING_KILL = (
    "Bot sent too many do nothing commands, something is most likely going wrong, "
    "please fix your bot. The player's ships will all be marked as destroyed and killed off."
)
FIRST_PHASE_KILL = "Bot has failed to place ships in the last {count} rounds and will be killed off"


class FailurePolicy:
    """
    Escalation policy for one player.

    Usage:
        policy = FailurePolicy(thresholds)

        decision = policy.check(player.failed_first_phase_commands)
        if decision.eliminate:
            ...kill off, skip execution...

        policy.record(command)
        if policy.check_after_command().eliminate:
            ...kill off...
    """

    def __init__(self, thresholds: FailureThresholds | None = None):
        self.thresholds = thresholds or FailureThresholds()
        self.counters = FailureCounters()

    @property
    def do_nothing_count(self) -> int:
        return self.counters.do_nothing_count

    def check(self, failed_first_phase_commands: int = 0) -> PolicyDecision:
        """Pre-execution check of every threshold."""
        decision = PolicyDecision()
        count = self.counters.do_nothing_count

        if count >= self.thresholds.do_nothing_warning:
            decision.warnings.append(DO_NOTHING_WARNING)

        if count >= self.thresholds.do_nothing_kill:
            decision.eliminate = True
            decision.reasons.append(DO_NOTHING_KILL)

        if failed_first_phase_commands == self.thresholds.failed_first_phase_kill:
            decision.eliminate = True
            decision.reasons.append(
                FIRST_PHASE_KILL.format(count=self.thresholds.failed_first_phase_kill)
            )

        return decision

    def record(self, command: Command) -> int:
        """Count a produced command; returns the new do-nothing count."""
        if command.is_do_nothing:
            self.counters.do_nothing_count += 1
        else:
            self.counters.do_nothing_count = 0
        return self.counters.do_nothing_count

    def check_after_command(self) -> PolicyDecision:
        """Post-execution check; only the do-nothing limit can trip here."""
        decision = PolicyDecision()
        if self.counters.do_nothing_count >= self.thresholds.do_nothing_kill:
            decision.eliminate = True
            decision.reasons.append(DO_NOTHING_KILL)
        return decision
