"""
Sakura - Recent Message Window
==============================

Cache-then-fetch read of a channel's most recent messages.

Rule: if the client's message cache already holds at least `limit`
messages for the channel, those are the window and no request is made.
Otherwise the window is fetched from the API.
"""

from typing import List

import discord


def cached_channel_messages(client: discord.Client, channel_id: int) -> List[discord.Message]:
    """Messages the client has cached for a channel, oldest first."""
    return [m for m in client.cached_messages if m.channel.id == channel_id]


async def recent_messages(
    client: discord.Client,
    channel: discord.abc.Messageable,
    limit: int,
) -> List[discord.Message]:
    """
    Return up to `limit` of the channel's most recent messages.

    Raises:
        discord.HTTPException: If the fetch was needed and failed.
    """
    cached = cached_channel_messages(client, channel.id)
    if len(cached) >= limit:
        return cached[-limit:]

    return [message async for message in channel.history(limit=limit)]


__all__ = ["cached_channel_messages", "recent_messages"]
