"""
Sakura - Guild Settings Mixin
=============================

Per-guild configuration and the invite check lease.

DESIGN:
    Every change that reads a setting before writing it runs inside a
    single BEGIN IMMEDIATE transaction, so two commands editing the same
    guild cannot lose each other's update.
"""

import time
from typing import TYPE_CHECKING, Optional

from src.core.logger import logger
from src.core.database.base import _dump_id_set, _load_id_set
from src.core.database.models import GuildSettings

if TYPE_CHECKING:
    from .manager import DatabaseManager


CATEGORY_COLUMN = "category_channel_ids"
IGNORED_COLUMN = "ignored_channel_ids"
_ID_SET_COLUMNS = (CATEGORY_COLUMN, IGNORED_COLUMN)


class SettingsMixin:
    """Mixin for guild settings operations."""

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create_settings(self: "DatabaseManager", guild_id: int) -> bool:
        """
        Create default settings for a guild.

        Returns:
            True if a row was created, False if one already existed.
        """
        cursor = self.execute(
            "INSERT OR IGNORE INTO settings (guild_id) VALUES (?)",
            (guild_id,)
        )
        return cursor.rowcount > 0

    def get_settings(self: "DatabaseManager", guild_id: int) -> Optional[GuildSettings]:
        """Get settings for a guild, or None if the guild has none."""
        row = self.fetchone("SELECT * FROM settings WHERE guild_id = ?", (guild_id,))
        return GuildSettings.from_row(row) if row else None

    def delete_guild_data(self: "DatabaseManager", guild_id: int) -> int:
        """
        Delete a guild's settings and every invite recorded for it.

        Returns:
            Number of invite rows deleted.
        """
        with self.transaction() as tx:
            tx.execute("DELETE FROM settings WHERE guild_id = ?", (guild_id,))
            cursor = tx.execute("DELETE FROM invites WHERE guild_id = ?", (guild_id,))
            deleted = cursor.rowcount

        logger.tree("Guild Data Deleted", [
            ("Guild ID", str(guild_id)),
            ("Invites", str(deleted)),
        ], emoji="🗑️")
        return deleted

    # =========================================================================
    # Channel Sets
    # =========================================================================

    def _modify_id_set(
        self: "DatabaseManager",
        guild_id: int,
        column: str,
        channel_id: int,
        add: bool,
    ) -> bool:
        """
        Add or remove one id from a JSON id set column atomically.

        Returns:
            True if the set changed, False if the guild has no settings,
            the id was already present (add) or absent (remove).
        """
        if column not in _ID_SET_COLUMNS:
            raise ValueError(f"Unknown id set column: {column}")

        with self.transaction() as tx:
            tx.execute(f"SELECT {column} FROM settings WHERE guild_id = ?", (guild_id,))
            row = tx.fetchone()
            if row is None:
                return False

            ids = _load_id_set(row[column])
            if add == (channel_id in ids):
                return False

            if add:
                ids.add(channel_id)
            else:
                ids.discard(channel_id)

            tx.execute(
                f"UPDATE settings SET {column} = ? WHERE guild_id = ?",
                (_dump_id_set(ids), guild_id)
            )
        return True

    def add_category(self: "DatabaseManager", guild_id: int, category_id: int) -> bool:
        return self._modify_id_set(guild_id, CATEGORY_COLUMN, category_id, add=True)

    def remove_category(self: "DatabaseManager", guild_id: int, category_id: int) -> bool:
        return self._modify_id_set(guild_id, CATEGORY_COLUMN, category_id, add=False)

    def add_ignored_channel(self: "DatabaseManager", guild_id: int, channel_id: int) -> bool:
        return self._modify_id_set(guild_id, IGNORED_COLUMN, channel_id, add=True)

    def remove_ignored_channel(self: "DatabaseManager", guild_id: int, channel_id: int) -> bool:
        return self._modify_id_set(guild_id, IGNORED_COLUMN, channel_id, add=False)

    def remove_channel(self: "DatabaseManager", guild_id: int, channel_id: int) -> bool:
        """
        Forget a deleted channel everywhere in a guild's settings.

        Removes it from the category set, the ignored set and the results
        channel in one update.

        Returns:
            True if anything referenced the channel.
        """
        with self.transaction() as tx:
            tx.execute(
                """SELECT category_channel_ids, ignored_channel_ids, results_channel_id
                   FROM settings WHERE guild_id = ?""",
                (guild_id,)
            )
            row = tx.fetchone()
            if row is None:
                return False

            categories = _load_id_set(row["category_channel_ids"])
            ignored = _load_id_set(row["ignored_channel_ids"])
            results_channel_id = row["results_channel_id"]

            if (
                channel_id not in categories
                and channel_id not in ignored
                and results_channel_id != channel_id
            ):
                return False

            categories.discard(channel_id)
            ignored.discard(channel_id)
            if results_channel_id == channel_id:
                results_channel_id = None

            tx.execute(
                """UPDATE settings
                   SET category_channel_ids = ?, ignored_channel_ids = ?, results_channel_id = ?
                   WHERE guild_id = ?""",
                (_dump_id_set(categories), _dump_id_set(ignored), results_channel_id, guild_id)
            )
        return True

    # =========================================================================
    # Scalar Settings
    # =========================================================================

    def set_results_channel(self: "DatabaseManager", guild_id: int, channel_id: Optional[int]) -> None:
        self.execute(
            "UPDATE settings SET results_channel_id = ? WHERE guild_id = ?",
            (channel_id, guild_id)
        )

    def set_embed_color(self: "DatabaseManager", guild_id: int, color: int) -> None:
        self.execute(
            "UPDATE settings SET embed_color = ? WHERE guild_id = ?",
            (color, guild_id)
        )

    # =========================================================================
    # Invite Check Lease
    # =========================================================================

    def begin_check(
        self: "DatabaseManager",
        guild_id: int,
        lease_seconds: int,
        now: Optional[float] = None,
    ) -> Optional[float]:
        """
        Mark a guild as being checked.

        Compare-and-set: succeeds only if no scan holds the guild or the
        holder's lease has expired.

        Returns:
            The lease token (the stored check_started_at) if this caller now
            holds the guild, otherwise None. Pass it to finish_check.
        """
        now = time.time() if now is None else now
        cursor = self.execute(
            """UPDATE settings SET in_check = 1, check_started_at = ?
               WHERE guild_id = ?
               AND (in_check = 0 OR (check_started_at IS NOT NULL AND check_started_at <= ?))""",
            (now, guild_id, now - lease_seconds)
        )
        return now if cursor.rowcount > 0 else None

    def finish_check(
        self: "DatabaseManager",
        guild_id: int,
        lease: float,
        completed: bool,
        now: Optional[float] = None,
    ) -> bool:
        """
        Release a guild after a scan.

        Args:
            guild_id: Guild that was checked.
            lease: Token returned by begin_check. A holder whose lease was
                taken over releases nothing.
            completed: True if the summary was posted. Only completed scans
                move last_check forward.
            now: Timestamp to record as last_check.

        Returns:
            True if the lease was still held and has been released.
        """
        if completed:
            now = time.time() if now is None else now
            cursor = self.execute(
                """UPDATE settings SET last_check = ?, in_check = 0, check_started_at = NULL
                   WHERE guild_id = ? AND in_check = 1 AND check_started_at = ?""",
                (now, guild_id, lease)
            )
        else:
            cursor = self.execute(
                """UPDATE settings SET in_check = 0, check_started_at = NULL
                   WHERE guild_id = ? AND in_check = 1 AND check_started_at = ?""",
                (guild_id, lease)
            )
        return cursor.rowcount > 0

    def reset_stale_checks(self: "DatabaseManager") -> int:
        """
        Clear every in_check flag.

        Called once at startup, when no scan from this process can be
        running yet.

        Returns:
            Number of guilds released.
        """
        cursor = self.execute(
            "UPDATE settings SET in_check = 0, check_started_at = NULL WHERE in_check = 1"
        )
        if cursor.rowcount:
            logger.tree("Stale Invite Checks Reset", [
                ("Guilds", str(cursor.rowcount)),
            ], emoji="🔓")
        return cursor.rowcount


__all__ = ["SettingsMixin"]
