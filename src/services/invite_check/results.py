"""
Sakura - Invite Check Results
=============================

Accumulators for one invite check and the rules that classify invites.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.core.database.models import InviteRecord


# =============================================================================
# Classification
# =============================================================================

def is_good(
    is_valid: Optional[bool],
    is_permanent: Optional[bool],
    expires_at: Optional[float],
    now: float,
) -> bool:
    """
    An invite is good if it is valid and either permanent or unexpired.

    An invite with no expiry counts as unexpired.
    """
    if not is_valid:
        return False
    if is_permanent:
        return True
    return expires_at is None or expires_at > now


def classify(record: InviteRecord, now: float) -> bool:
    """Classify a checked record. True means good."""
    return is_good(record.is_valid, record.is_permanent, record.expires_at, now)


def percentages(good: int, bad: int) -> Tuple[int, float, float]:
    """
    Return (total, bad %, good %).

    The total is floored at 1 so an empty check reports 0% / 0%.
    """
    total = max(good + bad, 1)
    return total, bad * 100 / total, good * 100 / total


# =============================================================================
# Accumulators
# =============================================================================

@dataclass
class ChannelResult:
    channel_id: int
    good: int = 0
    bad: int = 0

    @property
    def total(self) -> int:
        return self.good + self.bad

    def add(self, good: bool) -> None:
        if good:
            self.good += 1
        else:
            self.bad += 1

    def __str__(self) -> str:
        if self.bad > 0:
            return f"🔴 <#{self.channel_id}> - **{self.total}** total (**{self.bad}** bad)"
        return f"🟢 <#{self.channel_id}> - **{self.total}** total"


@dataclass
class CategoryResult:
    """
    Outcome for one category.

    issues counts channels that vanished mid-check. manual lists channels
    the bot could not read and a human has to look at.
    """
    name: str
    channel_results: List[ChannelResult] = field(default_factory=list)
    issues: int = 0
    manual: List[int] = field(default_factory=list)

    @property
    def total_channels(self) -> int:
        return len(self.channel_results) + self.issues + len(self.manual)

    @property
    def good(self) -> int:
        return sum(r.good for r in self.channel_results)

    @property
    def bad(self) -> int:
        return sum(r.bad for r in self.channel_results)


@dataclass
class InviteCheck:
    """Whole-check accumulator."""
    started_at: float = field(default_factory=time.monotonic)
    category_results: List[CategoryResult] = field(default_factory=list)

    @property
    def total_channels(self) -> int:
        return sum(c.total_channels for c in self.category_results)

    @property
    def good(self) -> int:
        return sum(c.good for c in self.category_results)

    @property
    def bad(self) -> int:
        return sum(c.bad for c in self.category_results)

    @property
    def total_invites(self) -> int:
        return self.good + self.bad

    def elapsed_ms(self, now: Optional[float] = None) -> int:
        now = time.monotonic() if now is None else now
        return int((now - self.started_at) * 1000)


__all__ = [
    "is_good",
    "classify",
    "percentages",
    "ChannelResult",
    "CategoryResult",
    "InviteCheck",
]
