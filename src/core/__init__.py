"""
Sakura - Core Package
=====================

Configuration, logging and the database layer.

DESIGN:
    - get_config() returns the process Config (components receive it explicitly)
    - get_db() returns the shared DatabaseManager instance
    - logger is the global TreeLogger instance
"""

from .config import (
    Config,
    ConfigValidationError,
    EmbedColors,
    NY_TZ,
    get_config,
)

from .database import DatabaseManager, get_db

from .logger import logger, TreeLogger


__all__ = [
    # Config
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    # Database
    "DatabaseManager",
    "get_db",
    # Logger
    "logger",
    "TreeLogger",
]
