"""
Sakura - Check Command Cog
==========================

/check: run an invite check for this guild. The work happens in
InviteCheckService; this cog only wires the command to it.
"""

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from .checks import admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


class CheckCog(commands.Cog):
    """Invite check command."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @app_commands.command(name="check", description="Runs an invite check")
    @app_commands.guild_only()
    async def check(self, interaction: discord.Interaction) -> None:
        await self.bot.invite_check.handle_check_command(interaction)


async def setup(bot: "SakuraBot") -> None:
    """Load the CheckCog."""
    await bot.add_cog(CheckCog(bot))
