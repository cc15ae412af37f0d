"""
Sakura - Category Command Cog
=============================

/category add|remove: which categories an invite check walks.

Adding a category also stores the invites currently visible in its
channels so the sweeper can start validating them before the first check.
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


class CategoryCog(commands.Cog):
    """Manage the guild's category list."""

    category = app_commands.Group(
        name="category",
        description="Modifies the list of category channels to check",
        guild_only=True,
    )

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @category.command(name="add", description="Adds a category channel to the list")
    @app_commands.describe(category="The category to add")
    async def add(self, interaction: discord.Interaction, category: discord.CategoryChannel) -> None:
        await interaction.response.defer()

        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            description = NO_SETTINGS_MESSAGE
        elif not self.bot.db.add_category(interaction.guild_id, category.id):
            description = "This category has already been added."
        else:
            await self.bot.invite_check.seed_category(interaction.guild, category.id)
            description = f"<#{category.id}> will now be checked during invite checks."

            logger.tree("Category Added", [
                ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
                ("Category", f"{category.name} ({category.id})"),
                ("By", f"{interaction.user} ({interaction.user.id})"),
            ], emoji="📂")

        color = settings.embed_color if settings else EmbedColors.DEFAULT
        await interaction.followup.send(embed=notice_embed(description, color))

    @category.command(name="remove", description="Removes a category channel from the list")
    @app_commands.describe(category="The category to not check anymore")
    async def remove(self, interaction: discord.Interaction, category: discord.CategoryChannel) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            description = NO_SETTINGS_MESSAGE
        elif not self.bot.db.remove_category(interaction.guild_id, category.id):
            description = "This channel is not in the \"category\" list."
        else:
            description = f"<#{category.id}> will no longer be checked during invite checks."
            logger.tree("Category Removed", [
                ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
                ("Category", f"{category.name} ({category.id})"),
                ("By", f"{interaction.user} ({interaction.user.id})"),
            ], emoji="📁")

        color = settings.embed_color if settings else EmbedColors.DEFAULT
        await interaction.response.send_message(embed=notice_embed(description, color))


async def setup(bot: "SakuraBot") -> None:
    """Load the CategoryCog."""
    await bot.add_cog(CategoryCog(bot))
