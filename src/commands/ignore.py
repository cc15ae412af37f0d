"""
Sakura - Ignore Command Cog
===========================

/ignore add|remove: channels inside checked categories that an invite
check skips.
"""

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import EmbedColors
from src.core.logger import logger
from src.services.invite_check.embeds import notice_embed

from .checks import NO_SETTINGS_MESSAGE, admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


class IgnoreCog(commands.Cog):
    """Manage the guild's ignored channel list."""

    ignore = app_commands.Group(
        name="ignore",
        description="Modifies the list of channels to ignore during invite checks",
        guild_only=True,
    )

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    async def _respond(self, interaction: discord.Interaction, description: str, color: int) -> None:
        await interaction.response.send_message(embed=notice_embed(description, color))

    @ignore.command(name="add", description="Adds a channel to the ignore list")
    @app_commands.describe(channel="The channel to ignore")
    async def add(self, interaction: discord.Interaction, channel: discord.TextChannel) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            await self._respond(interaction, NO_SETTINGS_MESSAGE, EmbedColors.DEFAULT)
            return

        if not self.bot.db.add_ignored_channel(interaction.guild_id, channel.id):
            await self._respond(interaction, "This channel is already ignored.", settings.embed_color)
            return

        logger.tree("Channel Ignored", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("Channel", f"{channel.name} ({channel.id})"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="🙈")
        await self._respond(
            interaction,
            f"<#{channel.id}> will now be ignored during invite checks.",
            settings.embed_color,
        )

    @ignore.command(name="remove", description="Removes a channel from the ignore list")
    @app_commands.describe(channel="The channel to stop ignoring")
    async def remove(self, interaction: discord.Interaction, channel: discord.TextChannel) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            await self._respond(interaction, NO_SETTINGS_MESSAGE, EmbedColors.DEFAULT)
            return

        if not self.bot.db.remove_ignored_channel(interaction.guild_id, channel.id):
            await self._respond(interaction, "This channel is not in the \"ignored\" list.", settings.embed_color)
            return

        logger.tree("Channel Unignored", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("Channel", f"{channel.name} ({channel.id})"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="👀")
        await self._respond(
            interaction,
            f"<#{channel.id}> will no longer be ignored during invite checks.",
            settings.embed_color,
        )


async def setup(bot: "SakuraBot") -> None:
    """Load the IgnoreCog."""
    await bot.add_cog(IgnoreCog(bot))
