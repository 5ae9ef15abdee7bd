"""Pytest configuration and shared fixtures for all tests."""

from typing import List, Tuple
from unittest.mock import AsyncMock, Mock

import pytest
from loguru import logger

from plugin_terser.events import EventBus
from plugin_terser.loader import PluginLoader
from plugin_terser.logging import ensure_verbose_level
from plugin_terser.models import PluginSettings


class RecordingLog:
    """PluginLog that records messages instead of emitting them."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def log(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def at(self, level: str) -> List[str]:
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture
def plugin_log() -> RecordingLog:
    """Create a recording plugin log."""
    return RecordingLog()


@pytest.fixture
def config_locator() -> Mock:
    """Create a config locator that finds nothing."""
    locator = Mock()
    locator.request_config = AsyncMock(return_value=None)
    return locator


@pytest.fixture
def flag_registry() -> Mock:
    """Create a mock flag registry."""
    return Mock()


@pytest.fixture
def environ() -> dict:
    """Empty environment for flag defaults."""
    return {}


@pytest.fixture
def loader(config_locator, plugin_log, environ) -> PluginLoader:
    """Create a plugin loader with mocked collaborators."""
    return PluginLoader(
        config_locator=config_locator,
        plugin_log=plugin_log,
        settings=PluginSettings(env_prefix="TEST"),
        environ=environ,
    )


@pytest.fixture
def eventbus() -> EventBus:
    """Create a fresh event bus."""
    return EventBus("test")


@pytest.fixture
def log_records():
    """Capture loguru records as ``(level, message)`` tuples."""
    ensure_verbose_level()
    records: List[Tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: records.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)
