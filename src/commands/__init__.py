"""
Sakura - Commands Package
=========================

Slash command cogs.

DESIGN:
    COMMAND_COGS is the complete command table: top-level slash command
    name -> cog module. The bot loads exactly these modules, and the test
    suite checks each module registers exactly the command it is listed
    under.

Available Commands (administrators only):
    /category add|remove: Categories to walk during invite checks
    /check: Run an invite check
    /ignore add|remove: Channels to skip during invite checks
    /ping: Gateway latency and round trip
    /set results-channel|embed-color: Results destination and report color
    /settings: Show the guild's settings
    /stats: Guild count, memory and uptime
"""

COMMAND_COGS = {
    "category": "src.commands.category",
    "check": "src.commands.check",
    "ignore": "src.commands.ignore",
    "ping": "src.commands.ping",
    "set": "src.commands.set",
    "settings": "src.commands.settings",
    "stats": "src.commands.stats",
}
"""Command name -> cog module path, loaded with load_extension()."""


__all__ = [
    "COMMAND_COGS",
]
