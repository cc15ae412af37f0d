"""
Tests for the guild snapshot and the recent message window.
"""

from unittest.mock import MagicMock

import discord
import pytest

from src.services.invite_check.history import cached_channel_messages, recent_messages
from src.services.invite_check.topology import build_snapshot, category_text_channels

from tests.mocks import make_category, make_channel, make_guild, make_message


# =============================================================================
# build_snapshot
# =============================================================================

class TestBuildSnapshot:

    def test_channels_sorted_by_position(self):
        guild = make_guild([
            make_category(10, "Partners"),
            make_channel(1, position=3, category_id=10),
            make_channel(2, position=1, category_id=10),
            make_channel(3, position=2, category_id=10),
        ])
        snapshot = build_snapshot(guild, {10}, set())

        assert len(snapshot) == 1
        assert snapshot[0].name == "Partners"
        assert [c.channel_id for c in snapshot[0].channels] == [2, 3, 1]

    def test_categories_sorted_by_position(self):
        guild = make_guild([
            make_category(10, "Later", position=5),
            make_category(20, "Earlier", position=2),
            make_category(30, "Unconfigured", position=0),
        ])
        snapshot = build_snapshot(guild, {10, 20}, set())
        assert [c.category_id for c in snapshot] == [20, 10]

    def test_ignored_and_non_message_channels_skipped(self):
        guild = make_guild([
            make_category(10, "Partners"),
            make_channel(1, category_id=10),
            make_channel(2, category_id=10),
            make_channel(3, category_id=10, channel_type=discord.ChannelType.voice),
            make_channel(4, category_id=10, channel_type=discord.ChannelType.news),
            make_channel(5, category_id=99),
        ])
        snapshot = build_snapshot(guild, {10}, {2})
        assert [c.channel_id for c in snapshot[0].channels] == [1, 4]

    def test_missing_category_skipped(self):
        guild = make_guild([make_category(10, "Partners")])
        snapshot = build_snapshot(guild, {10, 404}, set())
        assert [c.category_id for c in snapshot] == [10]
        assert snapshot[0].channels == []

    def test_history_flag(self):
        guild = make_guild([
            make_category(10, "Partners"),
            make_channel(1, position=0, category_id=10, last_message_id=None),
            make_channel(2, position=1, category_id=10, last_message_id=77),
        ])
        channels = build_snapshot(guild, {10}, set())[0].channels
        assert [c.has_history for c in channels] == [False, True]


class TestCategoryTextChannels:

    def test_only_posted_channels(self):
        guild = make_guild([
            make_category(10, "Partners"),
            make_channel(1, category_id=10),
            make_channel(2, category_id=10, last_message_id=None),
            make_channel(3, category_id=11),
        ])
        assert [c.id for c in category_text_channels(guild, 10)] == [1]


# =============================================================================
# recent_messages
# =============================================================================

class TestRecentMessages:

    def test_cached_messages_filtered_by_channel(self):
        client = MagicMock()
        client.cached_messages = [make_message("a", 1), make_message("b", 2), make_message("c", 1)]
        assert [m.content for m in cached_channel_messages(client, 1)] == ["a", "c"]

    @pytest.mark.asyncio
    async def test_full_cache_skips_fetch(self):
        client = MagicMock()
        client.cached_messages = [make_message(str(i), 1) for i in range(5)]
        channel = make_channel(1)

        messages = await recent_messages(client, channel, limit=3)

        assert [m.content for m in messages] == ["2", "3", "4"]
        channel.history.assert_not_called()

    @pytest.mark.asyncio
    async def test_short_cache_fetches(self):
        client = MagicMock()
        client.cached_messages = [make_message("cached", 1)]
        fetched = [make_message(f"fetched {i}", 1) for i in range(3)]
        channel = make_channel(1, messages=fetched)

        messages = await recent_messages(client, channel, limit=3)

        assert messages == fetched
        channel.history.assert_called_once_with(limit=3)
