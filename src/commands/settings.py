"""
Sakura - Settings Command Cog
=============================

/settings: show the guild's invite check configuration.
"""

from typing import TYPE_CHECKING, Iterable

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import EmbedColors
from src.core.constants import EMBED_FIELD_VALUE_LIMIT
from src.core.database.models import GuildSettings
from src.services.invite_check.embeds import notice_embed

from .checks import NO_SETTINGS_MESSAGE, admin_interaction_check

if TYPE_CHECKING:
    from src.bot import SakuraBot


def _channel_lines(guild: discord.Guild, channel_ids: Iterable[int], empty: str) -> str:
    lines = [
        f"<#{channel_id}>" if guild.get_channel(channel_id) else f"{channel_id} **(no longer exists)**"
        for channel_id in sorted(channel_ids)
    ]
    text = "\n".join(lines) if lines else empty
    if len(text) > EMBED_FIELD_VALUE_LIMIT:
        text = text[:EMBED_FIELD_VALUE_LIMIT - 3] + "..."
    return text


def settings_embed(guild: discord.Guild, settings: GuildSettings) -> discord.Embed:
    """Render a guild's settings as embed fields."""
    if settings.results_channel_id is None:
        results_text = "No results channel set"
    else:
        results_text = _channel_lines(guild, [settings.results_channel_id], "")

    embed = discord.Embed(color=settings.embed_color)
    embed.add_field(
        name="Categories",
        value=_channel_lines(guild, settings.category_channel_ids, "No categories added"),
        inline=False,
    )
    embed.add_field(name="Embed color", value=f"#{settings.embed_color:06X}", inline=False)
    embed.add_field(
        name="Ignored",
        value=_channel_lines(guild, settings.ignored_channel_ids, "No channels ignored"),
        inline=False,
    )
    embed.add_field(name="Results channel", value=results_text, inline=False)
    return embed


class SettingsCog(commands.Cog):
    """Read-only view of guild settings."""

    def __init__(self, bot: "SakuraBot") -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return await admin_interaction_check(interaction)

    @app_commands.command(name="settings", description="Displays the settings for invite checks")
    @app_commands.guild_only()
    async def settings(self, interaction: discord.Interaction) -> None:
        settings = self.bot.db.get_settings(interaction.guild_id)
        if settings is None:
            embed = notice_embed(NO_SETTINGS_MESSAGE, EmbedColors.DEFAULT)
        else:
            embed = settings_embed(interaction.guild, settings)
        await interaction.response.send_message(embed=embed)


async def setup(bot: "SakuraBot") -> None:
    """Load the SettingsCog."""
    await bot.add_cog(SettingsCog(bot))
