"""
Sakura - Sweep Tasks Package
============================

Individual sweep task implementations.
"""

from .unchecked_invites import UncheckedInviteSweep
from .aging_invites import AgingInviteSweep

__all__ = [
    "UncheckedInviteSweep",
    "AgingInviteSweep",
]
