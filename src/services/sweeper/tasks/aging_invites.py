"""
Sakura - Aging Invite Sweep
===========================

Revalidates valid invites, least recently checked first, so a guild's
next invite check sees fresh data.

Invalid invites are never picked up again.
"""

from typing import List

from src.core.database.models import InviteRecord

from ..base import SweepTask


class AgingInviteSweep(SweepTask):
    """Checked, valid invites ordered by last update, across all guilds."""

    name = "Aging Invites"

    def select(self) -> List[InviteRecord]:
        return self.db.get_aging_invites(self.batch_size)


__all__ = ["AgingInviteSweep"]
