"""
Sakura - Guild Topology Reader
==============================

Read-only view of the categories and channels an invite check walks,
taken from discord.py's guild cache.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

import discord


# Channel types that carry messages and can hold invite links.
MESSAGE_CHANNEL_TYPES = (discord.ChannelType.text, discord.ChannelType.news)


@dataclass
class ChannelEntry:
    """A channel scheduled for checking."""
    channel_id: int
    position: int
    last_message_id: Optional[int]

    @property
    def has_history(self) -> bool:
        return self.last_message_id is not None


@dataclass
class CategoryEntry:
    """A configured category with its eligible channels in display order."""
    category_id: int
    name: str
    position: int
    channels: List[ChannelEntry] = field(default_factory=list)


def _is_message_channel(channel) -> bool:
    return channel.type in MESSAGE_CHANNEL_TYPES


def build_snapshot(
    guild: discord.Guild,
    category_ids: Iterable[int],
    ignored_ids: Iterable[int],
) -> List[CategoryEntry]:
    """
    Build the ordered work list for an invite check.

    Categories come back sorted by position, and so do the channels in
    each one. Sorting is stable so equal positions keep cache order.
    Configured categories that no longer exist are skipped.
    """
    wanted: Set[int] = set(category_ids)
    ignored: Set[int] = set(ignored_ids)

    categories = {}
    children = {}
    for channel in guild.channels:
        if channel.type == discord.ChannelType.category:
            if channel.id in wanted:
                categories[channel.id] = CategoryEntry(
                    category_id=channel.id,
                    name=channel.name,
                    position=channel.position,
                )
        elif _is_message_channel(channel):
            parent_id = channel.category_id
            if parent_id in wanted and channel.id not in ignored:
                children.setdefault(parent_id, []).append(ChannelEntry(
                    channel_id=channel.id,
                    position=channel.position,
                    last_message_id=channel.last_message_id,
                ))

    snapshot = sorted(categories.values(), key=lambda c: c.position)
    for category in snapshot:
        category.channels = sorted(children.get(category.category_id, []), key=lambda c: c.position)
    return snapshot


def category_text_channels(guild: discord.Guild, category_id: int) -> list:
    """Message channels under a category that have been posted in."""
    return [
        channel for channel in guild.channels
        if _is_message_channel(channel)
        and channel.category_id == category_id
        and channel.last_message_id is not None
    ]


__all__ = [
    "MESSAGE_CHANNEL_TYPES",
    "ChannelEntry",
    "CategoryEntry",
    "build_snapshot",
    "category_text_channels",
]
