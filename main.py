#!/usr/bin/env python3
"""
Sakura - Entry Point
====================

Loads the environment, validates configuration and runs the bot until
interrupted.
"""

import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.core.config import ConfigValidationError, get_config, validate_and_log_config  # noqa: E402
from src.core.logger import logger  # noqa: E402


async def main() -> None:
    """
    Main entry point for Sakura.

    Handles the complete bot lifecycle:
    1. Validates configuration from the environment
    2. Creates the bot instance
    3. Connects to Discord and runs until closed

    Raises:
        SystemExit: If configuration is invalid
    """
    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Invalid Configuration", [("Error", str(e))])
        sys.exit(1)

    config = get_config()
    logger.set_webhook(config.error_webhook_url)

    from src.bot import SakuraBot

    logger.tree("SAKURA STARTING", [
        ("Commands", "/category, /check, /ignore, /ping, /set, /settings, /stats"),
    ], emoji="🌸")

    bot = SakuraBot(config)
    async with bot:
        await bot.start(config.discord_token)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
    except Exception as e:
        logger.critical(f"Fatal error: {type(e).__name__}: {e}")
        sys.exit(1)
