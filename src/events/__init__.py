"""
Sakura - Events Package
=======================

Gateway event cogs.

DESIGN:
    Each event file contains a Cog class with @commands.Cog.listener
    decorators, loaded by the bot with load_extension().

    Event routing:
    - guilds.py: Guild join/leave (settings lifecycle)
    - channels.py: Channel delete (settings cleanup)
    - messages.py: Message create (invite recording)
"""

EVENT_COGS = [
    "src.events.guilds",
    "src.events.channels",
    "src.events.messages",
]
"""List of event cog module paths for dynamic loading."""


__all__ = [
    "EVENT_COGS",
]
