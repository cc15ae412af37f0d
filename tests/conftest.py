"""
Sakura - Test Fixtures
======================

Shared fixtures for all tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set up test environment before importing modules
os.environ["TESTING"] = "1"
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="sakura-logs-"))

from src.core.config import Config  # noqa: E402

from tests.mocks import make_invite  # noqa: E402


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_sakura.db"


@pytest.fixture
def test_db(temp_db_path, monkeypatch):
    """Create a fresh test database instance."""
    from src.core.database import manager as manager_module

    # Reset singleton
    manager_module.DatabaseManager._instance = None

    # Patch the DB path
    monkeypatch.setattr(manager_module, "DB_PATH", temp_db_path)

    db = manager_module.DatabaseManager()

    yield db

    db.close()
    manager_module.DatabaseManager._instance = None


# =============================================================================
# Config
# =============================================================================

@pytest.fixture
def config():
    """Config with defaults and a dummy token."""
    return Config(discord_token="test-token")


# =============================================================================
# Discord
# =============================================================================

@pytest.fixture
def mock_bot():
    """Client with an empty message cache and a working invite lookup."""
    bot = MagicMock()
    bot.cached_messages = []
    bot.fetch_invite = AsyncMock(return_value=make_invite())
    return bot
