"""
Sakura - Invite Code Extractor
==============================

Pulls Discord invite codes out of message text.
"""

import re
from typing import Iterable, Pattern, Set


# =============================================================================
# Compiled Regex Patterns
# =============================================================================

# Matches discord.gg/<code>, discord.com/invite/<code> and
# discordapp.com/invite/<code>, with or without scheme and subdomain.
# IGNORECASE applies to the code too, so the captured code keeps the
# case it was posted with.
INVITE_PATTERN: Pattern = re.compile(
    r"(?:https?://)?(?:\w+\.)?discord(?:(?:app)?\.com/invite|\.gg)/(?P<code>[a-z0-9-]+)",
    re.IGNORECASE,
)


def extract_codes(content: str) -> Set[str]:
    """Return the distinct invite codes found in a piece of text."""
    if not content:
        return set()
    return {match.group("code") for match in INVITE_PATTERN.finditer(content)}


def extract_codes_from_messages(messages: Iterable) -> Set[str]:
    """Union of the invite codes in a batch of discord.Message objects."""
    codes: Set[str] = set()
    for message in messages:
        codes |= extract_codes(message.content)
    return codes


__all__ = ["INVITE_PATTERN", "extract_codes", "extract_codes_from_messages"]
