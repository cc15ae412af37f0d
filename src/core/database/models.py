"""
Sakura - Database Record Types
==============================

Typed records returned by the database mixins.
"""

import sqlite3
from dataclasses import dataclass, field
from typing import Optional, Set

from src.core.config import EmbedColors
from src.core.database.base import _load_id_set, _to_bool


@dataclass
class GuildSettings:
    """Per-guild invite check configuration (one `settings` row)."""

    guild_id: int
    category_channel_ids: Set[int] = field(default_factory=set)
    ignored_channel_ids: Set[int] = field(default_factory=set)
    results_channel_id: Optional[int] = None
    embed_color: int = EmbedColors.DEFAULT
    last_check: Optional[float] = None
    in_check: bool = False
    check_started_at: Optional[float] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "GuildSettings":
        return cls(
            guild_id=row["guild_id"],
            category_channel_ids=_load_id_set(row["category_channel_ids"]),
            ignored_channel_ids=_load_id_set(row["ignored_channel_ids"]),
            results_channel_id=row["results_channel_id"],
            embed_color=row["embed_color"],
            last_check=row["last_check"],
            in_check=bool(row["in_check"]),
            check_started_at=row["check_started_at"],
        )

    def check_in_progress(self, now: float, lease_seconds: int) -> bool:
        """
        Whether a scan currently holds this guild.

        A flag whose lease started more than `lease_seconds` ago belongs to
        a scan that died without clearing it and no longer counts.
        """
        if not self.in_check:
            return False
        if self.check_started_at is None:
            return True
        return now - self.check_started_at < lease_seconds


@dataclass
class InviteRecord:
    """
    Validity record for one invite code seen in one guild.

    Unchecked records carry no validity data. Checked records always
    have is_valid set.
    """

    guild_id: int
    code: str
    expires_at: Optional[float]
    is_permanent: Optional[bool]
    is_valid: Optional[bool]
    is_checked: bool
    created_at: float
    updated_at: float

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "InviteRecord":
        return cls(
            guild_id=row["guild_id"],
            code=row["code"],
            expires_at=row["expires_at"],
            is_permanent=_to_bool(row["is_permanent"]),
            is_valid=_to_bool(row["is_valid"]),
            is_checked=bool(row["is_checked"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


__all__ = ["GuildSettings", "InviteRecord"]
