"""
Sakura - Invite Validator
=========================

Looks invite codes up against Discord and records the outcome.

DESIGN:
    Every lookup ends in an upsert, success or failure. A failed lookup
    (unknown invite, no access, transport error, timeout) is recorded as
    invalid and is not retried here.
"""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import aiohttp
import discord

from src.core.logger import logger
from src.core.constants import LOG_TRUNCATE_SHORT, VALIDATOR_TIMEOUT
from src.utils.async_utils import log_gather_exceptions
from src.utils.discord_rate_limit import log_http_error

if TYPE_CHECKING:
    from src.core.database import DatabaseManager


@dataclass(frozen=True)
class InviteVerdict:
    """Normalized result of one invite lookup."""
    code: str
    is_valid: bool
    is_permanent: bool
    expires_at: Optional[float]

    @classmethod
    def invalid(cls, code: str) -> "InviteVerdict":
        return cls(code=code, is_valid=False, is_permanent=False, expires_at=None)

    @classmethod
    def from_invite(cls, code: str, invite: discord.Invite) -> "InviteVerdict":
        expires_at = invite.expires_at.timestamp() if invite.expires_at else None
        # max_age/max_uses of 0 mean unlimited, same as absent
        is_permanent = not invite.expires_at and not invite.max_age and not invite.max_uses
        return cls(code=code, is_valid=True, is_permanent=is_permanent, expires_at=expires_at)


class InviteValidator:
    """Resolves invite codes through the Discord API and persists verdicts."""

    def __init__(self, client: discord.Client, db: "DatabaseManager", timeout: float = VALIDATOR_TIMEOUT) -> None:
        self.client = client
        self.db = db
        self.timeout = timeout

    async def _lookup(self, code: str) -> InviteVerdict:
        try:
            invite = await asyncio.wait_for(self.client.fetch_invite(code), timeout=self.timeout)
        except (discord.NotFound, discord.Forbidden):
            return InviteVerdict.invalid(code)
        except discord.HTTPException as e:
            log_http_error(e, "Invite Lookup", [("Code", code)])
            return InviteVerdict.invalid(code)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Invite Lookup Failed", [
                ("Code", code),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
            ])
            return InviteVerdict.invalid(code)

        return InviteVerdict.from_invite(code, invite)

    async def validate(self, guild_id: int, code: str) -> InviteVerdict:
        """Look one code up and store the verdict."""
        verdict = await self._lookup(code)
        self.db.upsert_invite(
            guild_id,
            code,
            expires_at=verdict.expires_at,
            is_permanent=verdict.is_permanent,
            is_valid=verdict.is_valid,
        )
        logger.debug("Invite Validated", [
            ("Guild ID", str(guild_id)),
            ("Code", code),
            ("Valid", str(verdict.is_valid)),
            ("Permanent", str(verdict.is_permanent)),
        ])
        return verdict

    async def validate_many(
        self,
        keys: Iterable[Tuple[int, str]],
        concurrency: int,
    ) -> List[InviteVerdict]:
        """
        Validate (guild_id, code) pairs with at most `concurrency` lookups
        in flight.

        Returns:
            Verdicts for the pairs that were stored. Failures to store are
            logged and left out.
        """
        keys = list(keys)
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(guild_id: int, code: str) -> InviteVerdict:
            async with semaphore:
                return await self.validate(guild_id, code)

        results = await asyncio.gather(
            *(bounded(guild_id, code) for guild_id, code in keys),
            return_exceptions=True,
        )
        log_gather_exceptions(results, [f"Validate {code}" for _, code in keys], context="Invite Sweep")
        return [r for r in results if isinstance(r, InviteVerdict)]


__all__ = ["InviteVerdict", "InviteValidator"]
