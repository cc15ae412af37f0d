"""
Sakura - Async Utilities
========================

Helpers that keep background failures visible in the logs.

Usage:
    from src.utils.async_utils import create_safe_task

    create_safe_task(self._scheduler_loop(), "Invite Sweeper")
"""

import asyncio
from typing import Any, Coroutine, List, Optional

from src.core.logger import logger


def log_gather_exceptions(
    results: List[Any],
    operation_names: List[str],
    context: Optional[str] = None,
) -> int:
    """
    Log any exceptions from asyncio.gather(..., return_exceptions=True).

    Args:
        results: Results from asyncio.gather.
        operation_names: Names of the operations in the same order.
        context: Optional context string for error logs.

    Returns:
        Number of failures logged.
    """
    failures = 0

    for i, result in enumerate(results):
        if isinstance(result, Exception):
            failures += 1
            name = operation_names[i] if i < len(operation_names) else f"Operation {i}"

            error_details = [
                ("Operation", name),
                ("Error Type", type(result).__name__),
                ("Error", str(result)[:100]),
            ]
            if context:
                error_details.insert(0, ("Context", context))

            logger.warning("Async Operation Failed", error_details)

    return failures


# =============================================================================
# Safe Background Tasks
# =============================================================================

def create_safe_task(
    coro: Coroutine[Any, Any, Any],
    name: str = "Background Task",
) -> asyncio.Task:
    """
    Create a background task whose exceptions are logged, not lost.

    Args:
        coro: The coroutine to run as a background task.
        name: Name for logging purposes.

    Returns:
        The created asyncio.Task.
    """
    async def wrapped():
        try:
            await coro
        except asyncio.CancelledError:
            # Expected during shutdown
            pass
        except Exception as e:
            logger.error("Background Task Failed", [
                ("Task", name),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:200]),
            ])

    return asyncio.create_task(wrapped(), name=name)


__all__ = [
    "log_gather_exceptions",
    "create_safe_task",
]
