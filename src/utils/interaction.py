"""
Sakura - Interaction Utilities
==============================

Shared helpers for slash command responses.

safe_respond() picks response.send_message() or followup.send()
depending on whether the interaction was already answered, and logs
instead of raising when the interaction has expired.
"""

from typing import Any, Optional, Union

import discord

from src.core.logger import logger


async def safe_respond(
    interaction: discord.Interaction,
    content: Optional[str] = None,
    *,
    embed: Optional[discord.Embed] = None,
    ephemeral: bool = True,
) -> Optional[Union[discord.InteractionMessage, discord.WebhookMessage]]:
    """
    Respond to an interaction whether or not it has been answered yet.

    Returns:
        The sent message if successful, None if failed.
    """
    kwargs: dict[str, Any] = {"ephemeral": ephemeral}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed

    try:
        if not interaction.response.is_done():
            await interaction.response.send_message(**kwargs)
            return await interaction.original_response()
        return await interaction.followup.send(**kwargs)
    except discord.HTTPException as e:
        # Expected for expired interactions
        logger.debug(f"safe_respond failed: {e.status} - {str(e)[:50]}")
        return None


__all__ = ["safe_respond"]
