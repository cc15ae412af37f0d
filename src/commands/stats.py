"""
Sakura - Stats Command Cog
==========================

/stats: guild count, process memory and uptime.
"""

import time
from typing import TYPE_CHECKING

import discord
import psutil
from discord import app_commands
from discord.ext import commands

from src.core.config import EmbedColors
from src.utils.time_format import add_commas, humanize

from .checks import admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


def process_stats() -> tuple:
    """Return (memory in MB, uptime in ms) for this process."""
    process = psutil.Process()
    memory_mb = process.memory_info().rss / (1024 * 1024)
    uptime_ms = int((time.time() - process.create_time()) * 1000)
    return memory_mb, uptime_ms


class StatsCog(commands.Cog):
    """Process metrics."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @app_commands.command(name="stats", description="Displays random metrics of interest")
    @app_commands.guild_only()
    async def stats(self, interaction: discord.Interaction) -> None:
        memory_mb, uptime_ms = process_stats()
        description = "\n".join([
            f"**Guild(s):** {add_commas(len(self.bot.guilds))}",
            f"**Memory used:** {memory_mb:,.2f} MB",
            f"**Uptime:** {humanize(uptime_ms)}",
        ])
        embed = discord.Embed(description=description, color=EmbedColors.DEFAULT)
        await interaction.response.send_message(embed=embed)


async def setup(bot: "SakuraBot") -> None:
    """Load the StatsCog."""
    await bot.add_cog(StatsCog(bot))
