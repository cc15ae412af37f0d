"""
Sakura - Centralized Constants
==============================

Magic numbers used across the bot. Values a deployment may want to tune
live in Config instead.
"""

# =============================================================================
# Database Constants
# =============================================================================

DB_CONNECTION_TIMEOUT = 30.0          # sqlite3.connect timeout
SQLITE_BUSY_TIMEOUT = 5000            # PRAGMA busy_timeout (ms)

# =============================================================================
# Invite Check Constants
# =============================================================================

VALIDATOR_TIMEOUT = 10                # Seconds before a lookup counts as failed
SCHEDULER_RETRY_DELAY = 60            # Seconds to wait after a scheduler error

# =============================================================================
# Logging Constants
# =============================================================================

LOG_TRUNCATE_SHORT = 100              # Error strings in tree logs
LOG_TRUNCATE_LENGTH = 50              # Names and reasons in tree logs

# =============================================================================
# Discord Limits
# =============================================================================

EMBED_DESCRIPTION_LIMIT = 4096
EMBED_FIELD_VALUE_LIMIT = 1024


__all__ = [
    "DB_CONNECTION_TIMEOUT",
    "SQLITE_BUSY_TIMEOUT",
    "VALIDATOR_TIMEOUT",
    "SCHEDULER_RETRY_DELAY",
    "LOG_TRUNCATE_SHORT",
    "LOG_TRUNCATE_LENGTH",
    "EMBED_DESCRIPTION_LIMIT",
    "EMBED_FIELD_VALUE_LIMIT",
]
