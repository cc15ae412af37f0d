"""
Sakura - Ping Command Cog
=========================

/ping: gateway latency and interaction round trip.
"""

import math
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import EmbedColors

from .checks import admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


def round_trip_ms(request_id: int, response_id: int) -> int:
    """Milliseconds between two snowflakes."""
    request_at = discord.utils.snowflake_time(request_id)
    response_at = discord.utils.snowflake_time(response_id)
    return int((response_at - request_at).total_seconds() * 1000)


class PingCog(commands.Cog):
    """Latency check."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @app_commands.command(name="ping", description="Checks the bot's latency")
    @app_commands.guild_only()
    async def ping(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer()
        response = await interaction.original_response()
        rtt = round_trip_ms(interaction.id, response.id)

        lines = []
        latency = self.bot.latency
        if not math.isnan(latency) and not math.isinf(latency):
            lines.append(f"🏓 **Latency**: {int(latency * 1000)} ms")
        lines.append(f"🔂 **RTT**: {rtt} ms")

        embed = discord.Embed(description="\n".join(lines), color=EmbedColors.DEFAULT)
        shard_id = interaction.guild.shard_id if interaction.guild else 0
        embed.set_footer(text=f"Shard {shard_id} stats")
        await interaction.edit_original_response(embed=embed)


async def setup(bot: "SakuraBot") -> None:
    """Load the PingCog."""
    await bot.add_cog(PingCog(bot))
