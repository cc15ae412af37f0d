"""
Sakura - Configuration Module
=============================

Centralized configuration management with environment variable validation.

DESIGN:
    This module provides a single source of truth for all configuration,
    loaded from environment variables at startup. The Config dataclass is
    frozen so a loaded instance can be handed to every component at
    construction time without any of them mutating shared state.

    Key patterns:
    - get_config() caches one Config for the process
    - Components receive the Config explicitly (tests build their own)
    - Validation happens once at load time, not on every access
"""

import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo


# =============================================================================
# Timezone Configuration
# =============================================================================

NY_TZ = ZoneInfo("America/New_York")
"""Eastern timezone used for log timestamps and scheduler output."""


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Bot configuration loaded from environment variables.

    Attributes:
        discord_token: Discord bot authentication token.
        test_guild_id: Guild to sync slash commands to during development.
        invite_check_cooldown: Seconds a guild must wait between checks.
        scan_lease_seconds: Seconds after which an in-progress flag is stale.
        message_window: Number of recent messages read per channel.
        sweep_interval: Wall-clock boundary (seconds) for the sweeper.
        sweep_batch_size: Invites revalidated per sweeper run.
        sweep_concurrency: Max validator calls in flight per sweeper run.
        message_cache_size: discord.py message cache size.
        error_webhook_url: Webhook for error alerts from the logger.
    """

    # -------------------------------------------------------------------------
    # Required: Discord
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional: Discord
    # -------------------------------------------------------------------------

    test_guild_id: Optional[int] = None

    # -------------------------------------------------------------------------
    # Optional: Invite Check
    # -------------------------------------------------------------------------

    invite_check_cooldown: int = 86400
    scan_lease_seconds: int = 7200
    message_window: int = 15

    # -------------------------------------------------------------------------
    # Optional: Sweeper
    # -------------------------------------------------------------------------

    sweep_interval: int = 600
    sweep_batch_size: int = 4
    sweep_concurrency: int = 2

    # -------------------------------------------------------------------------
    # Optional: Runtime
    # -------------------------------------------------------------------------

    message_cache_size: int = 1000
    error_webhook_url: Optional[str] = None


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Color palette for bot embeds."""

    DEFAULT = 0xF8F8FF  # #F8F8FF - Ghost white, default report color
    ERROR = 0xE6B84A    # #E6B84A - Rejections and failures


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _parse_int(value: Optional[str], name: str) -> int:
    """
    Parse string to integer with descriptive error handling.

    Raises:
        ConfigValidationError: If value is missing or not a valid integer.
    """
    if not value:
        raise ConfigValidationError(f"Missing required: {name}")
    try:
        return int(value)
    except ValueError:
        raise ConfigValidationError(f"Invalid integer for {name}: {value}")


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: int = None,
    max_val: int = None,
) -> int:
    """
    Parse optional integer with default and range validation.

    Out-of-range values are clamped and logged, unparseable values fall
    back to the default.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    try:
        parsed = int(value)
        if min_val is not None and parsed < min_val:
            from src.core.logger import logger
            logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
            return min_val
        if max_val is not None and parsed > max_val:
            from src.core.logger import logger
            logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
            return max_val
        return parsed
    except ValueError:
        from src.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """Validate URL format for webhooks. Returns None if invalid or empty."""
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from src.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If any required variable is missing or invalid.
    """
    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        raise ConfigValidationError(
            "Missing required environment variables: DISCORD_TOKEN"
        )

    test_guild_raw = os.getenv("TEST_GUILD_ID")
    test_guild_id = _parse_int(test_guild_raw, "TEST_GUILD_ID") if test_guild_raw else None

    return Config(
        discord_token=discord_token,
        test_guild_id=test_guild_id,
        invite_check_cooldown=_parse_int_with_default(
            os.getenv("INVITE_CHECK_COOLDOWN"), 86400, "INVITE_CHECK_COOLDOWN", min_val=0, max_val=604800
        ),
        scan_lease_seconds=_parse_int_with_default(
            os.getenv("SCAN_LEASE_SECONDS"), 7200, "SCAN_LEASE_SECONDS", min_val=60, max_val=86400
        ),
        message_window=_parse_int_with_default(
            os.getenv("MESSAGE_WINDOW"), 15, "MESSAGE_WINDOW", min_val=1, max_val=100
        ),
        sweep_interval=_parse_int_with_default(
            os.getenv("SWEEP_INTERVAL"), 600, "SWEEP_INTERVAL", min_val=60, max_val=86400
        ),
        sweep_batch_size=_parse_int_with_default(
            os.getenv("SWEEP_BATCH_SIZE"), 4, "SWEEP_BATCH_SIZE", min_val=1, max_val=100
        ),
        sweep_concurrency=_parse_int_with_default(
            os.getenv("SWEEP_CONCURRENCY"), 2, "SWEEP_CONCURRENCY", min_val=1, max_val=10
        ),
        message_cache_size=_parse_int_with_default(
            os.getenv("MESSAGE_CACHE_SIZE"), 1000, "MESSAGE_CACHE_SIZE", min_val=0, max_val=100000
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def validate_and_log_config() -> None:
    """
    Validate configuration and log results at startup.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from src.core.logger import logger

    config = get_config()

    if not config.error_webhook_url:
        logger.info("Optional config not set: ERROR_WEBHOOK_URL")

    logger.tree("Configuration Validated", [
        ("Required", "✅ All required variables set"),
        ("Command Sync", f"Guild {config.test_guild_id}" if config.test_guild_id else "Global"),
        ("Check Cooldown", f"{config.invite_check_cooldown}s"),
        ("Scan Lease", f"{config.scan_lease_seconds}s"),
        ("Sweeper", f"every {config.sweep_interval}s, batch {config.sweep_batch_size}"),
    ], emoji="⚙️")


__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "load_config",
    "validate_and_log_config",
]
