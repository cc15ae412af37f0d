"""
Sakura - Guild Events
=====================

Settings rows follow the bot's guild membership: created on join,
removed with all of the guild's invites on leave.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from src.core.logger import logger

if TYPE_CHECKING:
    from src.bot import SakuraBot


class GuildEvents(commands.Cog):
    """Guild join/leave handlers."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_guild_join(self, guild: discord.Guild) -> None:
        created = self.bot.db.create_settings(guild.id)
        logger.tree("Guild Joined", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Members", str(guild.member_count)),
            ("Settings", "Created" if created else "Already existed"),
        ], emoji="🌸")

    @commands.Cog.listener()
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        self.bot.db.delete_guild_data(guild.id)
        logger.tree("Guild Left", [
            ("Guild", f"{guild.name} ({guild.id})"),
        ], emoji="👋")


async def setup(bot: "SakuraBot") -> None:
    """Load the GuildEvents cog."""
    await bot.add_cog(GuildEvents(bot))
