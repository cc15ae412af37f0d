"""
Sakura - Services Package
=========================

Long-lived services held by the bot.

DESIGN:
    Services are standalone classes built once in bot.py. They receive
    the bot, the config and the database explicitly and should:
    - Be async-compatible for non-blocking I/O
    - Handle their own error cases and log them

Available Services:
    InviteCheckService: /check, category seeding, message recording
    InviteSweeper: Background revalidation of stored invites
"""

# =============================================================================
# Service Imports
# =============================================================================

from .invite_check import InviteCheckService
from .sweeper import InviteSweeper


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "InviteCheckService",
    "InviteSweeper",
]
