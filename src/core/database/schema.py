"""
Sakura - Database Schema
========================

Table definitions.
"""

from typing import TYPE_CHECKING

from src.core.config import EmbedColors

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts.
        Indexes cover the two sweeper orderings.
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Settings Table
        # DESIGN: One row per guild. Channel id sets are JSON lists.
        # in_check/check_started_at form the scan lease.
        # -----------------------------------------------------------------
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS settings (
                guild_id INTEGER PRIMARY KEY,
                results_channel_id INTEGER,
                category_channel_ids TEXT NOT NULL DEFAULT '[]',
                ignored_channel_ids TEXT NOT NULL DEFAULT '[]',
                embed_color INTEGER NOT NULL DEFAULT {EmbedColors.DEFAULT},
                last_check REAL,
                in_check INTEGER NOT NULL DEFAULT 0,
                check_started_at REAL
            )
        """)

        # -----------------------------------------------------------------
        # Invites Table
        # DESIGN: Codes are case-sensitive (BINARY collation).
        # is_valid/is_permanent/expires_at stay NULL until first check.
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS invites (
                guild_id INTEGER NOT NULL,
                code TEXT NOT NULL,
                expires_at REAL,
                is_permanent INTEGER,
                is_valid INTEGER,
                is_checked INTEGER NOT NULL DEFAULT 0,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL,
                PRIMARY KEY (guild_id, code)
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_invites_unchecked ON invites(is_checked, created_at)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_invites_aging ON invites(is_checked, is_valid, updated_at)"
        )

        conn.commit()


__all__ = ["SchemaMixin"]
