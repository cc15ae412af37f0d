"""
Sakura - Invite Check Embeds
============================

Report embeds posted to a guild's results channel.
"""

from typing import List

import discord

from src.core.constants import EMBED_DESCRIPTION_LIMIT, EMBED_FIELD_VALUE_LIMIT
from src.utils.time_format import add_commas, humanize

from .results import CategoryResult, InviteCheck, percentages


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def _chunk_lines(lines: List[str], limit: int) -> List[str]:
    """Join lines into as few blocks as fit under limit without splitting a line."""
    chunks: List[str] = []
    current = ""
    for line in lines:
        candidate = f"{current}\n{line}" if current else line
        if current and len(candidate) > limit:
            chunks.append(current)
            candidate = line
        current = candidate
    if current:
        chunks.append(current)
    return chunks


def category_embed(result: CategoryResult, color: int, message_window: int) -> discord.Embed:
    """Per-category report: one line per channel, then issues and manual checks."""
    if result.channel_results:
        description = "\n".join(str(r) for r in result.channel_results)
        footer = f"Checked {message_window} messages"
    else:
        description = "No channels to check in this category."
        footer = "Checked 0 messages"

    embed = discord.Embed(
        title=f"The '{result.name}' category",
        description=_clip(description, EMBED_DESCRIPTION_LIMIT),
        color=color,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_footer(text=footer)

    if result.issues > 0:
        embed.add_field(
            name="Issues",
            value=f"- {result.issues} channel(s) could not be checked",
            inline=False,
        )
    manual_lines = [f"- <#{channel_id}>" for channel_id in result.manual]
    for index, chunk in enumerate(_chunk_lines(manual_lines, EMBED_FIELD_VALUE_LIMIT)):
        embed.add_field(
            name="Manual check(s) required" if index == 0 else "Manual check(s) required (cont.)",
            value=chunk,
            inline=False,
        )
    return embed


def summary_embed(check: InviteCheck, color: int, elapsed_ms: int) -> discord.Embed:
    """Final report with elapsed time and totals."""
    good, bad = check.good, check.bad
    _, bad_pct, good_pct = percentages(good, bad)

    stats = "\n".join([
        f"- **{add_commas(check.total_channels)}** channel(s) checked",
        f"- **{add_commas(check.total_invites)}** invite(s) checked",
        f"- **{add_commas(bad)}** ({bad_pct:.2f}%) invalid invite(s)",
        f"- **{add_commas(good)}** ({good_pct:.2f}%) valid invite(s)",
    ])

    embed = discord.Embed(
        title="Invite check results",
        color=color,
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Elapsed time", value=humanize(elapsed_ms, show_ms=True), inline=False)
    embed.add_field(name="Stats", value=stats, inline=False)
    return embed


def notice_embed(description: str, color: int) -> discord.Embed:
    """Plain one-line embed used for acknowledgements and rejections."""
    return discord.Embed(description=description, color=color)


__all__ = ["category_embed", "summary_embed", "notice_embed"]
