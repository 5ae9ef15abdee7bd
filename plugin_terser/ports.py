"""Ports - contracts between the terser plugin and its host.

The plugin never reaches into the event bus by event name. It talks to the
host through these three protocols; ``events.host.EventBusHost`` is the
adapter that implements all of them on top of an ``EventBus``.
"""

from typing import Dict, Optional, Protocol, runtime_checkable

from .models import ConfigResult, FlagSpec


@runtime_checkable
class FlagRegistry(Protocol):
    """Accepts CLI flags contributed by plugins."""

    def register_flag(self, command: str, plugin: str, flags: Dict[str, FlagSpec]) -> None:
        """Register flags for a command.

        Args:
            command: ID of the command the flags belong to
            plugin: Name of the contributing plugin
            flags: Flag name -> specification
        """
        ...


@runtime_checkable
class ConfigLocator(Protocol):
    """Finds and parses a user configuration file."""

    async def request_config(self, module_name: str, error_message: str) -> Optional[ConfigResult]:
        """Locate the configuration for ``module_name``.

        Args:
            module_name: Configuration name to search for (e.g. ``terser``)
            error_message: Message the locator logs if loading fails

        Returns:
            The located configuration, or None if nothing was found
        """
        ...


@runtime_checkable
class PluginLog(Protocol):
    """Receives log messages from plugins."""

    def log(self, level: str, message: str) -> None:
        """Emit a message at ``level`` (error, warn, info, verbose, debug)."""
        ...
