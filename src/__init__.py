"""
Sakura - Source Package
=======================

Discord bot that checks the invite links posted in a guild's partner
categories and reports which ones are still good.

Package Structure:
- bot.py: Main Discord bot class
- commands/: Slash command cogs
- core/: Config, logging and the database layer
- events/: Gateway event cogs
- services/: Invite checks and the background sweeper
- utils/: Helper functions

Version: v1.0.0
"""
