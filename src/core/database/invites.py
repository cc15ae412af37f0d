"""
Sakura - Invite Store Mixin
===========================

Durable (guild, code) -> validity records.

DESIGN:
    upsert_invite is the only path that writes validity data. It is a
    single INSERT ... ON CONFLICT statement, so concurrent writers for
    the same row race only on which write lands last.

    updated_at must strictly increase on every upsert of a row because
    the invite check compares it against the guild's last_check.
"""

import sqlite3
import time
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from src.core.logger import logger
from src.core.constants import LOG_TRUNCATE_SHORT
from src.core.database.models import InviteRecord

if TYPE_CHECKING:
    from .manager import DatabaseManager


# Smallest step that keeps updated_at strictly increasing when two
# upserts land within the clock's resolution.
_UPDATE_EPSILON = 1e-6


class InvitesMixin:
    """Mixin for invite record operations."""

    def create_invites(self: "DatabaseManager", guild_id: int, codes: Iterable[str]) -> int:
        """
        Insert unchecked placeholder records for codes not yet stored.

        Existing records are left untouched.

        Returns:
            Number of new records.
        """
        now = time.time()
        params = [(guild_id, code, now, now) for code in set(codes)]
        if not params:
            return 0

        cursor = self.executemany(
            """INSERT OR IGNORE INTO invites (guild_id, code, is_checked, created_at, updated_at)
               VALUES (?, ?, 0, ?, ?)""",
            params
        )
        return max(cursor.rowcount, 0)

    def get_guild_invites(self: "DatabaseManager", guild_id: int) -> Optional[Dict[str, InviteRecord]]:
        """
        Get every invite record for a guild keyed by code.

        Returns:
            Mapping of code to record (empty if the guild has none yet),
            or None if the store could not be read.
        """
        try:
            rows = self.fetchall("SELECT * FROM invites WHERE guild_id = ?", (guild_id,))
        except sqlite3.Error as e:
            logger.error("Invite Read Failed", [
                ("Guild ID", str(guild_id)),
                ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
            ])
            return None

        return {row["code"]: InviteRecord.from_row(row) for row in rows}

    def get_unchecked_invites(self: "DatabaseManager", limit: int) -> List[InviteRecord]:
        """Oldest never-checked records across all guilds."""
        rows = self.fetchall(
            """SELECT * FROM invites WHERE is_checked = 0
               ORDER BY created_at ASC LIMIT ?""",
            (limit,)
        )
        return [InviteRecord.from_row(row) for row in rows]

    def get_aging_invites(self: "DatabaseManager", limit: int) -> List[InviteRecord]:
        """Checked, valid records across all guilds, least recently validated first."""
        rows = self.fetchall(
            """SELECT * FROM invites WHERE is_checked = 1 AND is_valid = 1
               ORDER BY updated_at ASC LIMIT ?""",
            (limit,)
        )
        return [InviteRecord.from_row(row) for row in rows]

    def get_invite(self: "DatabaseManager", guild_id: int, code: str) -> Optional[InviteRecord]:
        row = self.fetchone(
            "SELECT * FROM invites WHERE guild_id = ? AND code = ?",
            (guild_id, code)
        )
        return InviteRecord.from_row(row) if row else None

    def upsert_invite(
        self: "DatabaseManager",
        guild_id: int,
        code: str,
        expires_at: Optional[float],
        is_permanent: bool,
        is_valid: bool,
    ) -> None:
        """
        Insert or overwrite a checked invite record.

        Always marks the record checked and moves updated_at forward.
        """
        now = time.time()
        self.execute(
            """INSERT INTO invites
               (guild_id, code, expires_at, is_permanent, is_valid, is_checked, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, 1, ?, ?)
               ON CONFLICT(guild_id, code) DO UPDATE SET
                   expires_at = excluded.expires_at,
                   is_permanent = excluded.is_permanent,
                   is_valid = excluded.is_valid,
                   is_checked = 1,
                   updated_at = MAX(excluded.updated_at, invites.updated_at + ?)""",
            (guild_id, code, expires_at, int(is_permanent), int(is_valid), now, now, _UPDATE_EPSILON)
        )


__all__ = ["InvitesMixin"]
