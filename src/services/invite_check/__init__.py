"""
Sakura - Invite Check Package
=============================

Scanning configured categories for invite links, validating them and
reporting the results.
"""

from .extractor import INVITE_PATTERN, extract_codes, extract_codes_from_messages
from .results import CategoryResult, ChannelResult, InviteCheck, classify, is_good, percentages
from .service import InviteCheckService
from .validator import InviteValidator, InviteVerdict

__all__ = [
    "INVITE_PATTERN",
    "extract_codes",
    "extract_codes_from_messages",
    "CategoryResult",
    "ChannelResult",
    "InviteCheck",
    "classify",
    "is_good",
    "percentages",
    "InviteCheckService",
    "InviteValidator",
    "InviteVerdict",
]
