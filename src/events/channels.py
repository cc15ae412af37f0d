"""
Sakura - Channel Events
=======================

Keeps guild settings free of channels that no longer exist.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from src.core.logger import logger

if TYPE_CHECKING:
    from src.bot import SakuraBot


class ChannelEvents(commands.Cog):
    """Channel event handlers."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        """Drop a deleted channel from categories, ignored and results channel."""
        if self.bot.db.remove_channel(channel.guild.id, channel.id):
            logger.tree("Deleted Channel Removed From Settings", [
                ("Guild", f"{channel.guild.name} ({channel.guild.id})"),
                ("Channel", f"{channel.name} ({channel.id})"),
            ], emoji="🧽")


async def setup(bot: "SakuraBot") -> None:
    """Load the ChannelEvents cog."""
    await bot.add_cog(ChannelEvents(bot))
