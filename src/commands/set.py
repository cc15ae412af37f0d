"""
Sakura - Set Command Cog
========================

/set results-channel and /set embed-color.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import EmbedColors
from src.core.logger import logger
from src.services.invite_check.embeds import notice_embed
from src.utils.time_format import parse_hex_color

from .checks import NO_SETTINGS_MESSAGE, admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


class SetCog(commands.Cog):
    """Scalar guild settings."""

    set_group = app_commands.Group(
        name="set",
        description="Sets values for invite checks",
        guild_only=True,
    )

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @set_group.command(name="results-channel", description="Sets the channel invite check results are sent to")
    @app_commands.describe(channel="The results channel (leave empty to unset)")
    async def results_channel(
        self,
        interaction: discord.Interaction,
        channel: Optional[discord.TextChannel] = None,
    ) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            await interaction.response.send_message(embed=notice_embed(NO_SETTINGS_MESSAGE, EmbedColors.DEFAULT))
            return

        channel_id = channel.id if channel else None
        self.bot.db.set_results_channel(interaction.guild_id, channel_id)

        if channel_id is None:
            description = "This server no longer has a results channel."
        else:
            description = f"Invite check results will now be sent in <#{channel_id}>."

        logger.tree("Results Channel Set", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("Channel", f"{channel.name} ({channel.id})" if channel else "None"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="📌")
        await interaction.response.send_message(embed=notice_embed(description, settings.embed_color))

    @set_group.command(name="embed-color", description="Sets the color of invite check embeds")
    @app_commands.describe(color="A hex color such as #F8F8FF or F8F")
    async def embed_color(self, interaction: discord.Interaction, color: str) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            await interaction.response.send_message(embed=notice_embed(NO_SETTINGS_MESSAGE, EmbedColors.DEFAULT))
            return

        parsed = parse_hex_color(color)
        if parsed is None:
            await interaction.response.send_message(embed=notice_embed("No valid color provided.", settings.embed_color))
            return

        self.bot.db.set_embed_color(interaction.guild_id, parsed)

        logger.tree("Embed Color Set", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("Color", f"#{parsed:06X}"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="🎨")
        await interaction.response.send_message(embed=notice_embed(
            f"The embed color for invite check embeds is now **#{parsed:06X}**.",
            parsed,
        ))


async def setup(bot: "SakuraBot") -> None:
    """Load the SetCog."""
    await bot.add_cog(SetCog(bot))
