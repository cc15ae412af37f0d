"""
Sakura - Invite Check Service
=============================

Runs a guild's invite check end to end.

DESIGN:
    A check walks the configured categories and their channels in display
    order, one channel at a time, and posts one report per category
    followed by a summary. The guild is held through the settings lease
    (in_check) from start to finish.

    Known checked invites are classified from the store. Anything else
    goes through the validator, which stores the verdict.

    If a report cannot be posted the check stops, the lease is released
    and last_check is left alone so the guild can try again.
"""

import time
from typing import TYPE_CHECKING, Dict, Optional

import discord

from src.core.config import Config, EmbedColors
from src.core.constants import LOG_TRUNCATE_LENGTH
from src.core.database import DatabaseManager, GuildSettings, InviteRecord
from src.core.logger import logger
from src.utils.discord_rate_limit import log_http_error
from src.utils.interaction import safe_respond

from .eligibility import check_invites, check_settings, in_progress_rejection
from .embeds import category_embed, notice_embed, summary_embed
from .extractor import extract_codes, extract_codes_from_messages
from .history import recent_messages
from .results import CategoryResult, ChannelResult, InviteCheck, classify
from .topology import ChannelEntry, build_snapshot, category_text_channels
from .validator import InviteValidator

if TYPE_CHECKING:
    from src.bot import SakuraBot


ACK_MESSAGE = "Sakura is checking your invites now!"


class InviteCheckService:
    """
    Invite checks, code seeding and message recording for all guilds.

    Args:
        bot: Client used for the guild cache and API calls.
        config: Loaded configuration.
        db: Store for settings and invite records.
    """

    def __init__(self, bot: "SakuraBot", config: Config, db: DatabaseManager) -> None:
        self.bot = bot
        self.config = config
        self.db = db
        self.validator = InviteValidator(bot, db)

    # =========================================================================
    # Command Entry Point
    # =========================================================================

    async def handle_check_command(self, interaction: discord.Interaction) -> Optional[InviteCheck]:
        """
        Handle /check: validate eligibility, acknowledge, run the check.

        Returns:
            The finished check, or None if it was rejected.
        """
        guild = interaction.guild
        now = time.time()

        settings = self.db.get_settings(guild.id)
        invites = None
        lease = None
        rejection = check_settings(
            settings,
            guild,
            interaction.channel_id,
            now,
            cooldown=self.config.invite_check_cooldown,
            lease_seconds=self.config.scan_lease_seconds,
        )
        if rejection is None:
            invites = self.db.get_guild_invites(guild.id)
            rejection = check_invites(settings, invites)
        if rejection is None:
            lease = self.db.begin_check(guild.id, self.config.scan_lease_seconds, now)
            if lease is None:
                rejection = in_progress_rejection()

        if rejection is not None:
            logger.tree("Invite Check Rejected", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("User", f"{interaction.user} ({interaction.user.id})"),
                ("Reason", rejection.reason.value),
            ], emoji="🚫")
            color = settings.embed_color if settings else EmbedColors.DEFAULT
            await safe_respond(interaction, embed=notice_embed(rejection.message, color), ephemeral=True)
            return None

        try:
            await interaction.response.send_message(embed=notice_embed(ACK_MESSAGE, settings.embed_color))
        except discord.HTTPException as e:
            log_http_error(e, "Invite Check Acknowledge", [("Guild", str(guild.id))])
            self.db.finish_check(guild.id, lease, completed=False)
            raise

        destination = guild.get_channel(settings.results_channel_id)
        return await self.run_check(guild, settings, invites, destination, lease)

    # =========================================================================
    # Check Pipeline
    # =========================================================================

    async def run_check(
        self,
        guild: discord.Guild,
        settings: GuildSettings,
        invites: Dict[str, InviteRecord],
        destination: discord.abc.Messageable,
        lease: float,
    ) -> InviteCheck:
        """
        Walk the guild and post category reports and the summary.

        The caller must already hold the guild's lease, identified by the
        token begin_check returned. It is released here whatever happens.

        Raises:
            discord.HTTPException: If a report could not be posted.
        """
        check = InviteCheck()
        known = dict(invites)
        color = settings.embed_color
        completed = False

        snapshot = build_snapshot(guild, settings.category_channel_ids, settings.ignored_channel_ids)
        logger.tree("Invite Check Started", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Categories", str(len(snapshot))),
            ("Channels", str(sum(len(c.channels) for c in snapshot))),
            ("Known Invites", str(len(known))),
        ], emoji="🔎")

        try:
            for category in snapshot:
                result = CategoryResult(name=category.name)
                for entry in category.channels:
                    await self._check_channel(guild, entry, known, result)

                await destination.send(embed=category_embed(result, color, self.config.message_window))
                check.category_results.append(result)

            elapsed_ms = check.elapsed_ms()
            await destination.send(embed=summary_embed(check, color, elapsed_ms))
            completed = True
        except discord.HTTPException as e:
            log_http_error(e, "Invite Check Report", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Categories Posted", str(len(check.category_results))),
            ])
            raise
        finally:
            if not self.db.finish_check(guild.id, lease, completed=completed):
                logger.warning("Invite Check Lease Lost", [
                    ("Guild", f"{guild.name} ({guild.id})"),
                    ("Completed", str(completed)),
                ])

        logger.tree("Invite Check Complete", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Channels", str(check.total_channels)),
            ("Invites", str(check.total_invites)),
            ("Valid", str(check.good)),
            ("Invalid", str(check.bad)),
            ("Elapsed", f"{elapsed_ms}ms"),
        ], emoji="✅")
        return check

    async def _check_channel(
        self,
        guild: discord.Guild,
        entry: ChannelEntry,
        known: Dict[str, InviteRecord],
        result: CategoryResult,
    ) -> None:
        """Check one channel and record its outcome on the category result."""
        channel = guild.get_channel(entry.channel_id)
        if channel is None:
            result.issues += 1
            return

        permissions = channel.permissions_for(guild.me)
        if not (permissions.view_channel and permissions.read_message_history):
            result.manual.append(entry.channel_id)
            return

        channel_result = ChannelResult(channel_id=entry.channel_id)
        if not entry.has_history:
            result.channel_results.append(channel_result)
            return

        try:
            messages = await recent_messages(self.bot, channel, self.config.message_window)
        except discord.HTTPException as e:
            log_http_error(e, "Channel History Fetch", [
                ("Channel", f"{channel.name} ({channel.id})"[:LOG_TRUNCATE_LENGTH]),
            ])
            result.manual.append(entry.channel_id)
            return

        now = time.time()
        for code in sorted(extract_codes_from_messages(messages)):
            record = known.get(code)
            if record is None or not record.is_checked:
                verdict = await self.validator.validate(guild.id, code)
                record = InviteRecord(
                    guild_id=guild.id,
                    code=code,
                    expires_at=verdict.expires_at,
                    is_permanent=verdict.is_permanent,
                    is_valid=verdict.is_valid,
                    is_checked=True,
                    created_at=now,
                    updated_at=now,
                )
                known[code] = record
            channel_result.add(classify(record, now))

        result.channel_results.append(channel_result)

    # =========================================================================
    # Code Collection
    # =========================================================================

    async def seed_category(self, guild: discord.Guild, category_id: int) -> int:
        """
        Store the codes currently visible in a category's channels.

        Returns:
            Number of new invite records.
        """
        codes = set()
        for channel in category_text_channels(guild, category_id):
            try:
                messages = await recent_messages(self.bot, channel, self.config.message_window)
            except discord.HTTPException as e:
                log_http_error(e, "Category Seed Fetch", [("Channel", str(channel.id))])
                continue
            codes |= extract_codes_from_messages(messages)

        created = self.db.create_invites(guild.id, codes) if codes else 0
        logger.tree("Category Seeded", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Category ID", str(category_id)),
            ("Codes Found", str(len(codes))),
            ("New", str(created)),
        ], emoji="🌱")
        return created

    def record_message(self, message: discord.Message) -> int:
        """Store unchecked records for invites posted in a guild message."""
        if message.guild is None:
            return 0
        codes = extract_codes(message.content)
        if not codes:
            return 0
        return self.db.create_invites(message.guild.id, codes)


__all__ = ["InviteCheckService", "ACK_MESSAGE"]
