"""
Tests for the gateway event cogs.
"""

import pytest

from src.events.channels import ChannelEvents
from src.events.guilds import GuildEvents
from src.events.messages import MessageEvents
from src.services.invite_check.service import InviteCheckService

from tests.mocks import GUILD_ID, make_channel, make_guild, make_message


@pytest.fixture
def bot(test_db, config, mock_bot):
    mock_bot.db = test_db
    mock_bot.invite_check = InviteCheckService(mock_bot, config, test_db)
    return mock_bot


class TestGuildEvents:

    @pytest.mark.asyncio
    async def test_join_creates_settings(self, bot, test_db):
        await GuildEvents(bot).on_guild_join(make_guild([]))
        assert test_db.get_settings(GUILD_ID) is not None

    @pytest.mark.asyncio
    async def test_leave_deletes_everything(self, bot, test_db):
        test_db.create_settings(GUILD_ID)
        test_db.create_invites(GUILD_ID, ["abc"])

        await GuildEvents(bot).on_guild_remove(make_guild([]))

        assert test_db.get_settings(GUILD_ID) is None
        assert test_db.get_guild_invites(GUILD_ID) == {}


class TestChannelEvents:

    @pytest.mark.asyncio
    async def test_deleted_results_channel_cleared(self, bot, test_db):
        test_db.create_settings(GUILD_ID)
        test_db.set_results_channel(GUILD_ID, 900)
        test_db.add_category(GUILD_ID, 10)
        channel = make_channel(900)
        channel.guild = make_guild([])

        await ChannelEvents(bot).on_guild_channel_delete(channel)

        settings = test_db.get_settings(GUILD_ID)
        assert settings.results_channel_id is None
        assert settings.category_channel_ids == {10}


class TestMessageEvents:

    @pytest.mark.asyncio
    async def test_guild_message_recorded(self, bot, test_db):
        await MessageEvents(bot).on_message(make_message("discord.gg/partner", 11))
        assert test_db.get_invite(GUILD_ID, "partner").is_checked is False

    @pytest.mark.asyncio
    async def test_direct_message_ignored(self, bot, test_db):
        message = make_message("discord.gg/partner", 11)
        message.guild = None

        await MessageEvents(bot).on_message(message)

        assert test_db.get_guild_invites(GUILD_ID) == {}

    @pytest.mark.asyncio
    async def test_message_without_invites(self, bot, test_db):
        await MessageEvents(bot).on_message(make_message("hello", 11))
        assert test_db.get_guild_invites(GUILD_ID) == {}
