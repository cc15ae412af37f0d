"""
Sakura - Utils Package
======================

Utility modules for Sakura.

DESIGN:
    Utils are stateless helper functions that can be used anywhere in
    the codebase. They should not depend on bot state.

Available Utilities:
    async_utils: Logged background tasks and gather results
    discord_rate_limit: HTTP error logging
    interaction: Safe interaction responses
    time_format: Durations, counts and hex colors
"""

# =============================================================================
# Utility Imports
# =============================================================================

from .async_utils import create_safe_task, log_gather_exceptions
from .discord_rate_limit import log_http_error
from .interaction import safe_respond
from .time_format import add_commas, humanize, parse_hex_color


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "create_safe_task",
    "log_gather_exceptions",
    "log_http_error",
    "safe_respond",
    "add_commas",
    "humanize",
    "parse_hex_color",
]
