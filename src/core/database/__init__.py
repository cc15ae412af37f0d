"""
Sakura - Database Module
========================

SQLite storage for guild settings and invite records.
"""

from src.core.database.manager import (
    DatabaseManager,
    get_db,
    DATA_DIR,
    DB_PATH,
)
from src.core.database.models import GuildSettings, InviteRecord

__all__ = [
    "DatabaseManager",
    "get_db",
    "DATA_DIR",
    "DB_PATH",
    "GuildSettings",
    "InviteRecord",
]
