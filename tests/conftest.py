"""
Shared pytest fixtures.

Provides:
- An httpx client bound to the FastAPI app (no network)
- Settings built for tests
- Resolved options for each built-in preset
- A fresh RuleCounter for stage-level tests
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from prompt_cleaner.api.app import app
from prompt_cleaner.config import Settings
from prompt_cleaner.models.options import CleanOptions
from prompt_cleaner.models.rules import RuleCounter
from prompt_cleaner.options import get_preset_options


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that calls the app in-process through ASGITransport."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """Settings independent of the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        default_preset="plain",
        max_request_chars=1_000_000,
        cors_allow_origins="*",
        log_json=False,
    )


@pytest.fixture
def counter() -> RuleCounter:
    """Fresh rule counter for stage-level tests."""
    return RuleCounter()


@pytest.fixture
def plain_options() -> CleanOptions:
    return get_preset_options("plain")


@pytest.fixture
def email_options() -> CleanOptions:
    return get_preset_options("email")


@pytest.fixture
def markdown_slim_options() -> CleanOptions:
    return get_preset_options("markdown-slim")


@pytest.fixture
def chat_options() -> CleanOptions:
    return get_preset_options("chat")


@pytest.fixture(autouse=True)
def restore_environment():
    """Undo environment variable changes made by a test."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


def pytest_configure(config):
    """Register the unit / integration markers."""
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line("markers", "integration: tests through the HTTP API")
