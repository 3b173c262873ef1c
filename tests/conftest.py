"""Pytest configuration and common fixtures."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from unittest.mock import AsyncMock, MagicMock

import pytest

from dvsa_bot.core.config.properties import Properties
from dvsa_bot.core.config.settings import DVSASettings, reset_settings
from dvsa_bot.services.browser.pacing import PacingPolicy


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Isolate every test from DVSA_* variables and cached configuration."""
    # The live suite reads its own flags before fixtures run
    for key in list(os.environ):
        if key.startswith("DVSA_") and key != "DVSA_LIVE_TESTS":
            monkeypatch.delenv(key, raising=False)

    reset_settings()
    Properties.reset()
    yield
    reset_settings()
    Properties.reset()


@pytest.fixture
def settings() -> DVSASettings:
    """Settings with no typing delay and the strict verification policy."""
    return DVSASettings(headless=True, typing_delay_ms=0, verification="strict")


@pytest.fixture
def sleep_mock() -> AsyncMock:
    """Async sleep replacement recording requested pauses."""
    return AsyncMock()


@pytest.fixture
def pacing(sleep_mock) -> PacingPolicy:
    """Pacing policy that records pauses instead of sleeping."""
    return PacingPolicy(min_delay=0.0, jitter=5.0, sleep=sleep_mock)


@pytest.fixture
def mock_page():
    """Mock Playwright page object."""
    page = MagicMock()
    page.goto = AsyncMock()
    page.click = AsyncMock()
    page.type = AsyncMock()
    page.query_selector = AsyncMock(return_value=None)
    page.query_selector_all = AsyncMock(return_value=[])
    page.wait_for_url = AsyncMock()
    page.is_closed = MagicMock(return_value=False)
    page.close = AsyncMock()
    page.url = "https://driverpracticaltest.dvsa.gov.uk/application"
    return page
