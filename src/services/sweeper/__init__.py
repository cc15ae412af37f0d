"""
Sakura - Invite Sweeper
=======================

Background revalidation of stored invites, independent of any guild's
invite check.

DESIGN:
    The scheduler wakes on a fixed wall-clock cadence and runs the next
    task in rotation: unchecked invites, then aging invites, then
    unchecked again. Each run validates a small cross-guild batch with
    bounded concurrency. The sweeper only touches invite rows, never
    guild settings.
"""

import asyncio
from datetime import datetime, timedelta
from itertools import cycle
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.core.config import Config, NY_TZ
from src.core.constants import LOG_TRUNCATE_SHORT, SCHEDULER_RETRY_DELAY
from src.core.logger import logger
from src.utils.async_utils import create_safe_task

from .base import SweepTask
from .tasks import AgingInviteSweep, UncheckedInviteSweep

if TYPE_CHECKING:
    from src.bot import SakuraBot
    from src.core.database import DatabaseManager
    from src.services.invite_check.validator import InviteValidator


def next_run_at(now: datetime, interval: int) -> datetime:
    """
    Next wake-up time: `interval` seconds from now, rounded down to the
    start of that minute.
    """
    return (now + timedelta(seconds=interval)).replace(second=0, microsecond=0)


class InviteSweeper:
    """Schedules the sweep tasks."""

    def __init__(
        self,
        bot: "SakuraBot",
        config: Config,
        db: "DatabaseManager",
        validator: "InviteValidator",
    ) -> None:
        self.bot = bot
        self.interval = config.sweep_interval
        self._running = False
        self._task: Optional[asyncio.Task] = None

        self._tasks: List[SweepTask] = [
            UncheckedInviteSweep(db, validator, config.sweep_batch_size, config.sweep_concurrency),
            AgingInviteSweep(db, validator, config.sweep_batch_size, config.sweep_concurrency),
        ]
        self._rotation = cycle(self._tasks)

        logger.tree("Invite Sweeper Loaded", [
            ("Interval", f"{self.interval}s"),
            ("Batch Size", str(config.sweep_batch_size)),
            ("Concurrency", str(config.sweep_concurrency)),
            ("Tasks", ", ".join(t.name for t in self._tasks)),
        ], emoji="🧹")

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start the sweeper loop."""
        if self._running:
            return

        self._running = True
        self._task = create_safe_task(self._scheduler_loop(), "Invite Sweeper")
        logger.info("Invite Sweeper Started")

    async def stop(self) -> None:
        """Stop the sweeper loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Invite Sweeper Stopped")

    async def _scheduler_loop(self) -> None:
        await self.bot.wait_until_ready()

        while self._running:
            try:
                now = datetime.now(NY_TZ)
                target = next_run_at(now, self.interval)
                await asyncio.sleep((target - now).total_seconds())
                await self.run_next()

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Invite Sweeper Error", [
                    ("Error Type", type(e).__name__),
                    ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
                    ("Retry", f"{SCHEDULER_RETRY_DELAY}s"),
                ])
                await asyncio.sleep(SCHEDULER_RETRY_DELAY)

    async def run_next(self) -> Dict[str, Any]:
        """
        Run the next task in the rotation.

        Task failures are logged and reported as {"success": False}.
        """
        task = next(self._rotation)
        try:
            result = await task.run()
        except Exception as e:
            logger.error("Invite Sweep Failed", [
                ("Task", task.name),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
            ])
            return {"success": False, "task": task.name}

        if result.get("scanned"):
            logger.tree("Invite Sweep Complete", [
                ("Task", task.name),
                ("Result", task.format_result(result)),
            ], emoji="🧹")
        else:
            logger.debug("Invite Sweep Idle", [("Task", task.name)])

        result["task"] = task.name
        return result


__all__ = ["InviteSweeper", "SweepTask", "next_run_at"]
