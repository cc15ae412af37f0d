"""
Tests for src/services/invite_check/extractor.py
"""

from src.services.invite_check.extractor import extract_codes, extract_codes_from_messages

from tests.mocks import make_message


class TestExtractCodes:

    def test_all_link_forms(self):
        content = (
            "join https://discord.gg/abc123 or discord.com/invite/def456 "
            "or http://www.discordapp.com/invite/ghi-789"
        )
        assert extract_codes(content) == {"abc123", "def456", "ghi-789"}

    def test_case_preserved_and_distinct(self):
        content = "https://discord.gg/AbC123 and discord.com/invite/abc123"
        assert extract_codes(content) == {"AbC123", "abc123"}

    def test_duplicates_collapse(self):
        assert extract_codes("discord.gg/x1 discord.gg/x1") == {"x1"}

    def test_no_codes(self):
        assert extract_codes("no links here, just discord talk") == set()
        assert extract_codes("") == set()
        assert extract_codes(None) == set()

    def test_code_stops_at_punctuation(self):
        assert extract_codes("(discord.gg/partner!)") == {"partner"}


class TestExtractFromMessages:

    def test_union_across_messages(self):
        messages = [
            make_message("discord.gg/one", channel_id=1),
            make_message("nothing", channel_id=1),
            make_message("discord.gg/two discord.gg/one", channel_id=1),
        ]
        assert extract_codes_from_messages(messages) == {"one", "two"}
