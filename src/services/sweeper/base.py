"""
Sakura - Sweep Task Base Class
==============================

Base class for the background invite sweeps.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

from src.core.database.models import InviteRecord

if TYPE_CHECKING:
    from src.core.database import DatabaseManager
    from src.services.invite_check.validator import InviteValidator


class SweepTask(ABC):
    """
    One kind of invite revalidation run by the sweeper.

    Subclasses choose which records to pick up. Validation and storage
    are shared: every picked record goes through the validator with
    bounded concurrency.
    """

    # Task name for logging (override in subclass)
    name: str = "Unknown Sweep"

    def __init__(
        self,
        db: "DatabaseManager",
        validator: "InviteValidator",
        batch_size: int,
        concurrency: int,
    ) -> None:
        self.db = db
        self.validator = validator
        self.batch_size = batch_size
        self.concurrency = concurrency

    @abstractmethod
    def select(self) -> List[InviteRecord]:
        """Pick the records this run revalidates."""
        pass

    async def run(self) -> Dict[str, Any]:
        """
        Revalidate one batch.

        Returns:
            Dict with at least "success", plus "scanned", "valid" and
            "invalid" counts.
        """
        records = self.select()
        if not records:
            return {"success": True, "scanned": 0, "valid": 0, "invalid": 0}

        verdicts = await self.validator.validate_many(
            ((record.guild_id, record.code) for record in records),
            concurrency=self.concurrency,
        )
        valid = sum(1 for v in verdicts if v.is_valid)
        return {
            "success": True,
            "scanned": len(verdicts),
            "valid": valid,
            "invalid": len(verdicts) - valid,
        }

    def format_result(self, result: Dict[str, Any]) -> str:
        """Short summary for the sweep log (e.g. "4 scanned, 1 invalid")."""
        if not result.get("success", False):
            return "failed"
        return f"{result.get('scanned', 0)} scanned, {result.get('invalid', 0)} invalid"


__all__ = ["SweepTask"]
