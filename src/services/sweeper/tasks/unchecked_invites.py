"""
Sakura - Unchecked Invite Sweep
===============================

Validates invites that have been seen in messages but never looked up.
"""

from typing import List

from src.core.database.models import InviteRecord

from ..base import SweepTask


class UncheckedInviteSweep(SweepTask):
    """Oldest never-checked invites first, across all guilds."""

    name = "Unchecked Invites"

    def select(self) -> List[InviteRecord]:
        return self.db.get_unchecked_invites(self.batch_size)


__all__ = ["UncheckedInviteSweep"]
