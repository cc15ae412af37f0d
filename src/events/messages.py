"""
Sakura - Message Events
=======================

Records invites as they are posted so the sweeper can validate them
ahead of the next invite check.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from src.core.logger import logger

if TYPE_CHECKING:
    from src.bot import SakuraBot


class MessageEvents(commands.Cog):
    """Message event handlers."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.guild is None:
            return

        created = self.bot.invite_check.record_message(message)
        if created:
            logger.debug("Invites Recorded", [
                ("Guild ID", str(message.guild.id)),
                ("Channel ID", str(message.channel.id)),
                ("New", str(created)),
            ])


async def setup(bot: "SakuraBot") -> None:
    """Load the MessageEvents cog."""
    await bot.add_cog(MessageEvents(bot))
