"""Pytest configuration and common fixtures."""

import logging
import sys
import warnings
from pathlib import Path
from typing import List
from unittest.mock import AsyncMock

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from loguru import logger

from afkbot.core.config import AfkSettings, reset_settings
from afkbot.services.octant import Credential, OctantClient


def pytest_configure(config):
    """Configure pytest environment before tests run."""
    warnings.filterwarnings("ignore", message="coroutine.*was never awaited")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    for var in (
        "AFK_ACCOUNTS_FILE",
        "AFK_PING_INTERVAL_MS",
        "AFK_LOG_LEVEL",
        "AFK_LOG_TIMEZONE",
        "AFK_LOG_FILE",
        "AFK_SHOW_RAW_RESPONSES",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    # Reset settings singleton so each test gets fresh settings
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path) -> AfkSettings:
    """Test settings pointing at a temporary accounts file."""
    return AfkSettings(
        accounts_file=tmp_path / "accounts.txt",
        gateway_base="https://gateway.test",
        hosting_base="https://hosting.test",
        ping_interval_ms=1000,
    )


@pytest.fixture
def credential() -> Credential:
    return Credential(email="test@example.com", password="password123")


@pytest.fixture
def mock_client() -> AsyncMock:
    """Octant client whose handshake succeeds."""
    client = AsyncMock(spec=OctantClient)
    client.login.return_value = {"token": "mock-token"}
    client.auth_callback.return_value = None
    client.start_afk.return_value = {"sessionId": "session-1234567890"}
    client.ping_afk.return_value = {"success": True}
    return client


@pytest.fixture
def log_messages() -> List[str]:
    """Collect loguru output as ``LEVEL|message`` strings."""
    messages: List[str] = []
    handler_id = logger.add(
        lambda m: messages.append(f"{m.record['level'].name}|{m.record['message']}"),
        level="DEBUG",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def restore_logger():
    """Put loguru and stdlib logging back to defaults after setup_logging runs."""
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.root.handlers.clear()
