"""
Sakura - Main Bot Class
=======================

Core Discord client for the Sakura invite checker.

Features:
- Slash commands for per-guild invite check settings
- On-demand invite checks posted to a results channel
- Background sweeper validating recorded invites
- Invite recording from new messages
"""

from datetime import datetime

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import Config, get_config
from src.core.database import get_db
from src.services.invite_check import InviteCheckService
from src.services.sweeper import InviteSweeper
from src.utils.interaction import safe_respond


# =============================================================================
# SakuraBot Class
# =============================================================================

class SakuraBot(commands.Bot):
    """
    Main Discord bot class for Sakura.

    DESIGN: Central orchestrator that:
    - Holds references to all services for cross-service communication
    - Manages bot lifecycle (startup, shutdown)

    SERVICE INITIALIZATION ORDER:
    1. __init__:
       - Database, invite check service, sweeper

    2. setup_hook (before on_ready):
       - Stale check flags released
       - Command and event cog loading
       - Command tree syncing

    3. on_ready:
       - Settings rows for every guild
       - Sweeper start
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, config: Config = None) -> None:
        """Initialize the bot with the intents invite checks need."""
        self.config = config or get_config()

        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
            max_messages=self.config.message_cache_size,
        )

        self.db = get_db()
        self.start_time: datetime = datetime.now()

        self.invite_check = InviteCheckService(self, self.config, self.db)
        self.sweeper = InviteSweeper(self, self.config, self.db, self.invite_check.validator)

        self.tree.on_error = self.on_app_command_error

        # Ready state guard
        self._ready_initialized: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load cogs and sync commands before on_ready."""
        self.db.reset_stale_checks()

        from src.commands import COMMAND_COGS
        for name, cog in COMMAND_COGS.items():
            try:
                await self.load_extension(cog)
                logger.info(f"Cog Loaded: {name}")
            except commands.ExtensionError as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        from src.events import EVENT_COGS
        for cog in EVENT_COGS:
            try:
                await self.load_extension(cog)
                logger.debug(f"Event Cog Loaded: {cog.split('.')[-1]}")
            except commands.ExtensionError as e:
                logger.error("Failed to Load Event Cog", [("Cog", cog), ("Error", str(e))])

        try:
            if self.config.test_guild_id:
                guild = discord.Object(id=self.config.test_guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                scope = f"Guild {self.config.test_guild_id}"
            else:
                synced = await self.tree.sync()
                scope = "Global"
            logger.tree("Commands Synced", [
                ("Count", str(len(synced))),
                ("Scope", scope),
            ], emoji="✅")
        except discord.HTTPException as e:
            logger.error("Command Sync Failed", [("Error", str(e))])

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        """Create missing settings rows and start the sweeper."""
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        created = sum(1 for guild in self.guilds if self.db.create_settings(guild.id))

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
            ("New Settings", str(created)),
        ], emoji="🌸")

        self.sweeper.start()

    # =========================================================================
    # App Command Errors
    # =========================================================================

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        """Log failed slash commands and tell the invoker."""
        if isinstance(error, app_commands.CheckFailure):
            return

        command = interaction.command.qualified_name if interaction.command else "unknown"
        original = getattr(error, "original", error)

        logger.error("App Command Failed", [
            ("Command", f"/{command}"),
            ("Guild ID", str(interaction.guild_id)),
            ("User", f"{interaction.user} ({interaction.user.id})"),
            ("Error Type", type(original).__name__),
            ("Error", str(original)[:200]),
        ])

        await safe_respond(interaction, "Something went wrong while running this command.")

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Stop the sweeper and close the database before disconnecting."""
        logger.info("Initiating Graceful Shutdown")

        await self.sweeper.stop()
        await super().close()
        self.db.close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now() - self.start_time)),
        ], emoji="🛑")


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["SakuraBot"]
