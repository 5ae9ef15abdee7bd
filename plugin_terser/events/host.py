"""
Host services exposed to plugins over the event bus.

``EventBusHost`` is the plugin-facing side: it implements the flag, config
and log ports by triggering bus events. ``wire_host`` is the host-facing
side: it binds the handlers that answer those events.
"""

from typing import Any, Dict, Mapping, Optional

from loguru import logger

from ..logging import ensure_verbose_level, loguru_level
from ..models import ConfigResult, FlagSpec
from .bus import EventBus
from .names import CONFIG_FILE_OPEN, FLAG_HANDLER_ADD, LOG_LEVELS, log_event


class EventBusHost:
    """Implements FlagRegistry, ConfigLocator and PluginLog over an event bus."""

    def __init__(self, eventbus: EventBus):
        self.eventbus = eventbus

    def register_flag(self, command: str, plugin: str, flags: Dict[str, FlagSpec]) -> None:
        self.eventbus.trigger(
            FLAG_HANDLER_ADD,
            {"command": command, "plugin": plugin, "flags": flags},
        )

    async def request_config(self, module_name: str, error_message: str) -> Optional[ConfigResult]:
        result = await self.eventbus.trigger_async(
            CONFIG_FILE_OPEN,
            module_name=module_name,
            error_message=error_message,
        )

        # Several locators may answer; the first result wins.
        if isinstance(result, list):
            result = next((r for r in result if r is not None), None)

        if result is None or isinstance(result, ConfigResult):
            return result
        if isinstance(result, Mapping):
            return ConfigResult(**result)

        raise TypeError(f"Unexpected config locator result: {type(result).__name__}")

    def log(self, level: str, message: str) -> None:
        self.eventbus.trigger(log_event(level), message)


def _log_handler(level: str):
    name = loguru_level(level)

    def handle(message: Any) -> None:
        logger.opt(depth=1).log(name, str(message))

    return handle


def wire_host(eventbus: EventBus, flag_handler=None, config_locator=None) -> EventBus:
    """
    Bind host-side handlers to ``eventbus``.

    Args:
        eventbus: Bus to wire
        flag_handler: ``FlagHandler`` receiving flag registrations
        config_locator: ``ConfigFileLocator`` answering config requests

    Returns:
        The wired bus
    """
    ensure_verbose_level()

    for level in LOG_LEVELS:
        eventbus.on(log_event(level), _log_handler(level))

    if flag_handler is not None:
        eventbus.on(FLAG_HANDLER_ADD, flag_handler.add)

    if config_locator is not None:
        eventbus.on(CONFIG_FILE_OPEN, config_locator.open)

    return eventbus
