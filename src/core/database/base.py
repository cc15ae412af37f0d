"""
Sakura - Database Helpers
=========================

Small helpers shared by the database mixins.
"""

import json
from typing import Any, Iterable, Optional, Set

from src.core.logger import logger


def _safe_json_loads(value: Optional[str], default: Any = None) -> Any:
    """Safely parse JSON, returning default on error."""
    if not value:
        return default if default is not None else []
    try:
        return json.loads(value)
    except (json.JSONDecodeError, ValueError):
        logger.warning(f"Corrupted JSON in database: {value[:50] if len(value) > 50 else value}")
        return default if default is not None else []


def _load_id_set(value: Optional[str]) -> Set[int]:
    """Decode a JSON id list column into a set of ints."""
    return {int(v) for v in _safe_json_loads(value, [])}


def _dump_id_set(ids: Iterable[int]) -> str:
    """Encode ids as a sorted JSON list so the column text is stable."""
    return json.dumps(sorted(int(i) for i in ids))


def _to_bool(value: Any) -> Optional[bool]:
    """Convert a nullable sqlite integer into Optional[bool]."""
    if value is None:
        return None
    return bool(value)


__all__ = ["_safe_json_loads", "_load_id_set", "_dump_id_set", "_to_bool"]
