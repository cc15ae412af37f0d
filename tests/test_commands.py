"""
Sakura - Command Tests
======================

Command table wiring, the administrator check, and the settings
commands against a real database.
"""

import importlib
import inspect
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord.ext import commands

from src.commands import COMMAND_COGS
from src.commands.category import CategoryCog
from src.commands.checks import REQUIRED_BOT_PERMISSIONS, admin_interaction_check
from src.commands.ignore import IgnoreCog
from src.commands.ping import round_trip_ms
from src.commands.set import SetCog
from src.commands.settings import settings_embed
from src.commands.stats import process_stats
from src.core.config import EmbedColors

from tests.mocks import GUILD_ID, make_category, make_channel, make_guild, make_interaction


def cog_classes(module):
    return [
        obj for _, obj in inspect.getmembers(module, inspect.isclass)
        if issubclass(obj, commands.Cog) and obj.__module__ == module.__name__
    ]


def sent_description(interaction) -> str:
    send = interaction.followup.send if interaction.followup.send.await_count else interaction.response.send_message
    return send.await_args.kwargs["embed"].description


@pytest.fixture
def bot(test_db):
    bot = MagicMock()
    bot.db = test_db
    bot.invite_check.seed_category = AsyncMock(return_value=0)
    test_db.create_settings(GUILD_ID)
    return bot


# =============================================================================
# Command Table
# =============================================================================

class TestCommandTable:

    @pytest.mark.parametrize("name,module_path", sorted(COMMAND_COGS.items()))
    def test_module_registers_its_command(self, name, module_path):
        module = importlib.import_module(module_path)
        classes = cog_classes(module)
        assert len(classes) == 1

        cog = classes[0](MagicMock())
        assert [c.name for c in cog.get_app_commands()] == [name]
        assert hasattr(module, "setup")

    def test_command_names(self):
        assert set(COMMAND_COGS) == {"category", "check", "ignore", "ping", "set", "settings", "stats"}


# =============================================================================
# Access Check
# =============================================================================

class TestAdminCheck:

    def make_admin_interaction(self, administrator=True, app_permissions=REQUIRED_BOT_PERMISSIONS):
        interaction = make_interaction(make_guild([]), 1)
        interaction.user = MagicMock(spec=discord.Member)
        interaction.user.id = 1
        interaction.user.guild_permissions = discord.Permissions(administrator=administrator)
        interaction.app_permissions = app_permissions
        return interaction

    @pytest.mark.asyncio
    async def test_admin_allowed(self):
        interaction = self.make_admin_interaction()
        assert await admin_interaction_check(interaction) is True
        interaction.response.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_admin_denied(self):
        interaction = self.make_admin_interaction(administrator=False)

        assert await admin_interaction_check(interaction) is False

        kwargs = interaction.response.send_message.await_args.kwargs
        assert kwargs["ephemeral"] is True
        assert kwargs["embed"].color.value == EmbedColors.ERROR

    @pytest.mark.asyncio
    async def test_missing_bot_permissions_denied(self):
        interaction = self.make_admin_interaction(app_permissions=discord.Permissions(view_channel=True))
        assert await admin_interaction_check(interaction) is False

    @pytest.mark.asyncio
    async def test_direct_message_denied(self):
        interaction = make_interaction(None, 1)
        assert await admin_interaction_check(interaction) is False


# =============================================================================
# Settings Commands
# =============================================================================

class TestCategoryCommands:

    @pytest.mark.asyncio
    async def test_add_seeds_category(self, bot, test_db):
        cog = CategoryCog(bot)
        category = make_category(10, "Partners")
        interaction = make_interaction(make_guild([category]), 1)

        await CategoryCog.add.callback(cog, interaction, category)

        assert test_db.get_settings(GUILD_ID).category_channel_ids == {10}
        bot.invite_check.seed_category.assert_awaited_once_with(interaction.guild, 10)
        assert sent_description(interaction) == "<#10> will now be checked during invite checks."

    @pytest.mark.asyncio
    async def test_add_twice(self, bot, test_db):
        cog = CategoryCog(bot)
        category = make_category(10, "Partners")
        test_db.add_category(GUILD_ID, 10)
        interaction = make_interaction(make_guild([category]), 1)

        await CategoryCog.add.callback(cog, interaction, category)

        assert sent_description(interaction) == "This category has already been added."
        bot.invite_check.seed_category.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_missing(self, bot):
        cog = CategoryCog(bot)
        category = make_category(10, "Partners")
        interaction = make_interaction(make_guild([category]), 1)

        await CategoryCog.remove.callback(cog, interaction, category)

        assert sent_description(interaction) == "This channel is not in the \"category\" list."


class TestIgnoreCommands:

    @pytest.mark.asyncio
    async def test_add_and_remove(self, bot, test_db):
        cog = IgnoreCog(bot)
        channel = make_channel(20)
        guild = make_guild([channel])

        await IgnoreCog.add.callback(cog, make_interaction(guild, 1), channel)
        assert test_db.get_settings(GUILD_ID).ignored_channel_ids == {20}

        await IgnoreCog.remove.callback(cog, make_interaction(guild, 1), channel)
        assert test_db.get_settings(GUILD_ID).ignored_channel_ids == set()


class TestSetCommands:

    @pytest.mark.asyncio
    async def test_results_channel(self, bot, test_db):
        cog = SetCog(bot)
        channel = make_channel(900)
        interaction = make_interaction(make_guild([channel]), 1)

        await SetCog.results_channel.callback(cog, interaction, channel)

        assert test_db.get_settings(GUILD_ID).results_channel_id == 900
        assert sent_description(interaction) == "Invite check results will now be sent in <#900>."

    @pytest.mark.asyncio
    async def test_unset_results_channel(self, bot, test_db):
        test_db.set_results_channel(GUILD_ID, 900)
        cog = SetCog(bot)

        await SetCog.results_channel.callback(cog, make_interaction(make_guild([]), 1), None)

        assert test_db.get_settings(GUILD_ID).results_channel_id is None

    @pytest.mark.asyncio
    async def test_embed_color(self, bot, test_db):
        cog = SetCog(bot)
        interaction = make_interaction(make_guild([]), 1)

        await SetCog.embed_color.callback(cog, interaction, "#f0a")

        assert test_db.get_settings(GUILD_ID).embed_color == 0xFF00AA
        assert "#FF00AA" in sent_description(interaction)

    @pytest.mark.asyncio
    async def test_invalid_embed_color(self, bot, test_db):
        cog = SetCog(bot)
        interaction = make_interaction(make_guild([]), 1)

        await SetCog.embed_color.callback(cog, interaction, "nope")

        assert test_db.get_settings(GUILD_ID).embed_color == EmbedColors.DEFAULT
        assert sent_description(interaction) == "No valid color provided."


class TestSettingsEmbed:

    def test_fields(self, test_db):
        test_db.create_settings(GUILD_ID)
        test_db.add_category(GUILD_ID, 10)
        test_db.add_category(GUILD_ID, 404)
        guild = make_guild([make_category(10, "Partners")])

        embed = settings_embed(guild, test_db.get_settings(GUILD_ID))

        assert [f.name for f in embed.fields] == ["Categories", "Embed color", "Ignored", "Results channel"]
        assert embed.fields[0].value == "<#10>\n404 **(no longer exists)**"
        assert embed.fields[1].value == "#F8F8FF"
        assert embed.fields[2].value == "No channels ignored"
        assert embed.fields[3].value == "No results channel set"


class TestMetrics:

    def test_round_trip(self):
        request_id = discord.utils.time_snowflake(discord.utils.snowflake_time(0).replace(year=2024))
        response_id = request_id + (250 << 22)
        assert round_trip_ms(request_id, response_id) == 250

    def test_process_stats(self):
        memory_mb, uptime_ms = process_stats()
        assert memory_mb > 0
        assert uptime_ms >= 0
