"""
Sakura - Invite Check Eligibility
=================================

Preconditions for starting an invite check. Each failed precondition
maps to one rejection shown to the user; nothing is written.

Order matters: the first failing rule is the one reported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import discord

from src.core.database.models import GuildSettings, InviteRecord


class RejectionReason(Enum):
    NO_SETTINGS = "no_settings"
    COOLDOWN = "cooldown"
    NO_RESULTS_CHANNEL = "no_results_channel"
    RESULTS_CHANNEL_UNREACHABLE = "results_channel_unreachable"
    WRONG_CHANNEL = "wrong_channel"
    NO_CATEGORIES = "no_categories"
    IN_PROGRESS = "in_progress"
    NO_CODES = "no_codes"
    STILL_REFRESHING = "still_refreshing"


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    message: str


def _reject(reason: RejectionReason, message: str) -> Rejection:
    return Rejection(reason=reason, message=message)


def check_settings(
    settings: Optional[GuildSettings],
    guild: discord.Guild,
    invoking_channel_id: int,
    now: float,
    cooldown: int,
    lease_seconds: int,
) -> Optional[Rejection]:
    """
    Validate guild settings for a new invite check.

    Returns:
        The first rejection that applies, or None if the check may start.
    """
    if settings is None:
        return _reject(
            RejectionReason.NO_SETTINGS,
            "No settings found. Please kick and reinvite Sakura.",
        )

    if settings.last_check is not None and now < settings.last_check + cooldown:
        retry_at = int(settings.last_check + cooldown)
        return _reject(
            RejectionReason.COOLDOWN,
            f"You may run an invite check at <t:{retry_at}> (<t:{retry_at}:R>)",
        )

    if settings.results_channel_id is None:
        return _reject(
            RejectionReason.NO_RESULTS_CHANNEL,
            "No results channel has been set for this guild. Please set one before running an invite check.",
        )

    results_channel = guild.get_channel(settings.results_channel_id)
    if results_channel is None:
        return _reject(
            RejectionReason.RESULTS_CHANNEL_UNREACHABLE,
            "Your current results channel may have been deleted. Please set a new one.",
        )

    if settings.results_channel_id != invoking_channel_id:
        return _reject(
            RejectionReason.WRONG_CHANNEL,
            f"This command can only be run in <#{settings.results_channel_id}>.",
        )

    permissions = results_channel.permissions_for(guild.me)
    if not (permissions.view_channel and permissions.send_messages and permissions.embed_links):
        return _reject(
            RejectionReason.RESULTS_CHANNEL_UNREACHABLE,
            f"Sakura cannot post results in <#{settings.results_channel_id}>. "
            "Please give it the View Channel, Send Messages and Embed Links permissions.",
        )

    if not settings.category_channel_ids:
        return _reject(
            RejectionReason.NO_CATEGORIES,
            "There are no categories to check. Please add some before running an invite check.",
        )

    if settings.check_in_progress(now, lease_seconds):
        return in_progress_rejection()

    return None


def check_invites(
    settings: GuildSettings,
    invites: Optional[Dict[str, InviteRecord]],
) -> Optional[Rejection]:
    """
    Validate the guild's stored invites for a new invite check.

    A check is deferred while any valid invite has not been revalidated
    since the previous check.
    """
    if invites is None:
        return _reject(RejectionReason.NO_CODES, "There are no codes to check.")

    if settings.last_check is not None and any(
        record.is_checked and record.is_valid and record.updated_at < settings.last_check
        for record in invites.values()
    ):
        return _reject(
            RejectionReason.STILL_REFRESHING,
            "All invites have not been updated since your last invite check. Please try again at a later time.",
        )

    return None


def in_progress_rejection() -> Rejection:
    """Rejection for losing the race to start a check."""
    return _reject(
        RejectionReason.IN_PROGRESS,
        "Sakura is still checking categories for this guild. Please try again at a later time.",
    )


__all__ = [
    "RejectionReason",
    "Rejection",
    "check_settings",
    "check_invites",
    "in_progress_rejection",
]
