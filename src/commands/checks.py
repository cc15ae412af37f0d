"""
Sakura - Command Access Checks
==============================

Every Sakura command is for server administrators only, and needs the
bot to be able to see and answer in the channel it is used in.
"""

import discord

from src.core.config import EmbedColors
from src.core.logger import logger
from src.utils.interaction import safe_respond


NO_SETTINGS_MESSAGE = "No settings found. Please kick and reinvite Sakura."

REQUIRED_BOT_PERMISSIONS = discord.Permissions(
    embed_links=True,
    read_message_history=True,
    send_messages=True,
    use_application_commands=True,
    view_channel=True,
)
"""Permissions the bot needs in the invoking channel."""


async def admin_interaction_check(interaction: discord.Interaction) -> bool:
    """
    Allow the command only for administrators in channels the bot can use.

    Denied interactions get an ephemeral explanation.
    """
    if interaction.guild is None:
        await _deny(interaction, "Sakura's commands can only be used in a server.")
        return False

    member = interaction.user
    if not isinstance(member, discord.Member) or not member.guild_permissions.administrator:
        await _deny(interaction, "You need the **Administrator** permission to use Sakura's commands.")
        return False

    if not interaction.app_permissions.is_superset(REQUIRED_BOT_PERMISSIONS):
        await _deny(
            interaction,
            "Sakura needs the **View Channel**, **Send Messages**, **Embed Links**, "
            "**Read Message History** and **Use Application Commands** permissions in this channel.",
        )
        return False

    return True


async def _deny(interaction: discord.Interaction, message: str) -> None:
    logger.tree("Command Denied", [
        ("Command", interaction.command.qualified_name if interaction.command else "Unknown"),
        ("User", f"{interaction.user} ({interaction.user.id})"),
        ("Guild", str(interaction.guild_id)),
        ("Reason", message[:60]),
    ], emoji="🚫")
    await safe_respond(
        interaction,
        embed=discord.Embed(description=message, color=EmbedColors.ERROR),
        ephemeral=True,
    )


__all__ = ["NO_SETTINGS_MESSAGE", "REQUIRED_BOT_PERMISSIONS", "admin_interaction_check"]
