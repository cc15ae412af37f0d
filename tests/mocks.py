"""
Sakura - Discord Test Doubles
=============================

Factories for the discord.py objects the services read from.
"""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import discord


GUILD_ID = 987654321
RESULTS_CHANNEL_ID = 900

ALL_PERMISSIONS = discord.Permissions(
    view_channel=True,
    read_message_history=True,
    send_messages=True,
    embed_links=True,
)


def history_of(messages: List[MagicMock]):
    """Build a channel.history() replacement yielding the given messages."""
    def history(limit: Optional[int] = None):
        async def generate():
            for message in messages[:limit]:
                yield message
        return generate()
    return history


def make_message(content: str, channel_id: int, guild_id: int = GUILD_ID) -> MagicMock:
    message = MagicMock()
    message.content = content
    message.channel.id = channel_id
    message.guild.id = guild_id
    return message


def make_channel(
    channel_id: int,
    position: int = 0,
    category_id: Optional[int] = None,
    last_message_id: Optional[int] = 1,
    channel_type: discord.ChannelType = discord.ChannelType.text,
    name: Optional[str] = None,
    permissions: discord.Permissions = ALL_PERMISSIONS,
    messages: Optional[List[MagicMock]] = None,
) -> MagicMock:
    """Create a mock guild channel."""
    channel = MagicMock()
    channel.id = channel_id
    channel.name = name or f"channel-{channel_id}"
    channel.type = channel_type
    channel.position = position
    channel.category_id = category_id
    channel.last_message_id = last_message_id
    channel.permissions_for = MagicMock(return_value=permissions)
    channel.history = MagicMock(side_effect=history_of(messages or []))
    channel.send = AsyncMock(return_value=MagicMock(id=111222333))
    return channel


def make_category(category_id: int, name: str, position: int = 0) -> MagicMock:
    return make_channel(
        category_id,
        position=position,
        last_message_id=None,
        channel_type=discord.ChannelType.category,
        name=name,
    )


def make_guild(channels: List[MagicMock], guild_id: int = GUILD_ID) -> MagicMock:
    """Create a mock guild whose cache holds the given channels."""
    by_id: Dict[int, MagicMock] = {c.id: c for c in channels}
    guild = MagicMock()
    guild.id = guild_id
    guild.name = "Test Server"
    guild.channels = channels
    guild.get_channel = MagicMock(side_effect=by_id.get)
    guild.me = MagicMock()
    guild.me.id = 999888777
    guild.shard_id = 0
    return guild


def make_interaction(guild: Optional[MagicMock], channel_id: int) -> MagicMock:
    """Create a mock slash command interaction."""
    interaction = MagicMock()
    interaction.guild = guild
    interaction.guild_id = guild.id if guild else None
    interaction.channel_id = channel_id
    interaction.user = MagicMock()
    interaction.user.id = 123456789
    interaction.command = None
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.original_response = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


def make_invite(expires_at=None, max_age: int = 0, max_uses: int = 0) -> MagicMock:
    invite = MagicMock()
    invite.expires_at = expires_at
    invite.max_age = max_age
    invite.max_uses = max_uses
    return invite


def http_error(status: int, message: str = "error") -> discord.HTTPException:
    """Build the HTTPException subclass discord.py raises for a status."""
    response = MagicMock(status=status, reason=message)
    error_types = {403: discord.Forbidden, 404: discord.NotFound}
    return error_types.get(status, discord.HTTPException)(response, message)
