"""
Tests for the background invite sweeper.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.config import NY_TZ
from src.services.invite_check.validator import InviteValidator
from src.services.sweeper import InviteSweeper, next_run_at
from src.services.sweeper.tasks import AgingInviteSweep, UncheckedInviteSweep

from tests.mocks import http_error


GUILD = 1001


class TestNextRunAt:

    def test_truncated_to_minute(self):
        now = datetime(2024, 1, 1, 12, 3, 45, 123456, tzinfo=NY_TZ)
        assert next_run_at(now, 600) == datetime(2024, 1, 1, 12, 13, tzinfo=NY_TZ)

    def test_crosses_hour(self):
        now = datetime(2024, 1, 1, 12, 55, 10, tzinfo=NY_TZ)
        assert next_run_at(now, 600) == datetime(2024, 1, 1, 13, 5, tzinfo=NY_TZ)


class TestSweepTasks:

    @pytest.mark.asyncio
    async def test_unchecked_sweep(self, test_db, mock_bot):
        test_db.create_invites(GUILD, ["a", "b", "c"])
        task = UncheckedInviteSweep(test_db, InviteValidator(mock_bot, test_db), batch_size=2, concurrency=2)

        result = await task.run()

        assert result == {"success": True, "scanned": 2, "valid": 2, "invalid": 0}
        assert len(test_db.get_unchecked_invites(limit=10)) == 1
        assert task.format_result(result) == "2 scanned, 0 invalid"

    @pytest.mark.asyncio
    async def test_aging_sweep_invalidates(self, test_db, mock_bot):
        test_db.upsert_invite(GUILD, "old", expires_at=None, is_permanent=True, is_valid=True)
        mock_bot.fetch_invite = AsyncMock(side_effect=http_error(404))
        task = AgingInviteSweep(test_db, InviteValidator(mock_bot, test_db), batch_size=4, concurrency=2)

        result = await task.run()

        assert result["invalid"] == 1
        assert test_db.get_invite(GUILD, "old").is_valid is False
        assert test_db.get_aging_invites(limit=10) == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, test_db, mock_bot):
        task = AgingInviteSweep(test_db, InviteValidator(mock_bot, test_db), batch_size=4, concurrency=2)
        assert await task.run() == {"success": True, "scanned": 0, "valid": 0, "invalid": 0}
        mock_bot.fetch_invite.assert_not_awaited()


class TestInviteSweeper:

    @pytest.mark.asyncio
    async def test_rotation_alternates(self, test_db, mock_bot, config):
        sweeper = InviteSweeper(mock_bot, config, test_db, InviteValidator(mock_bot, test_db))

        names = [(await sweeper.run_next())["task"] for _ in range(3)]

        assert names == ["Unchecked Invites", "Aging Invites", "Unchecked Invites"]

    @pytest.mark.asyncio
    async def test_task_failure_reported(self, test_db, mock_bot, config):
        validator = MagicMock()
        sweeper = InviteSweeper(mock_bot, config, test_db, validator)
        test_db.create_invites(GUILD, ["a"])
        validator.validate_many = AsyncMock(side_effect=RuntimeError("boom"))

        result = await sweeper.run_next()

        assert result == {"success": False, "task": "Unchecked Invites"}

    @pytest.mark.asyncio
    async def test_start_and_stop(self, test_db, config):
        bot = MagicMock()
        bot.wait_until_ready = AsyncMock()
        sweeper = InviteSweeper(bot, config, test_db, MagicMock())

        sweeper.start()
        assert sweeper.is_running is True

        await sweeper.stop()
        assert sweeper.is_running is False
