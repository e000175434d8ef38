"""Pytest configuration - shared stubs for the Grok client and loop tests."""

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from grok_cli.core.client import ClientConfig

GROK_ENV_VARS = (
    "GROK_API_KEY",
    "GROK_BASE_URL",
    "GROK_TIMEOUT",
    "GROK_LOG_FILE",
    "GROK_LOG_LEVEL",
    "GROK_STRICT_ANALYZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's GROK_* variables out of the tests."""
    for name in GROK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key", base_url="https://api.example.com/v1/")


def make_response(payload: Any = None, status: int = 200, body: bytes | None = None) -> MagicMock:
    """Build a fake urllib response usable as a context manager."""
    response = MagicMock()
    response.status = status
    if body is None:
        body = json.dumps(payload).encode("utf-8")
    response.read.return_value = body
    return response


@pytest.fixture
def opener():
    """A fake OpenerDirector; set opener.open.return_value or side_effect."""
    fake = MagicMock()
    fake.open.return_value = make_response({})
    return fake
