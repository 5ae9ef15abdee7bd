"""
Minimal plugin manager that dispatches the load lifecycle event.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from ..errors import PluginError
from ..models import PluginEvent, PluginOptions
from .bus import EventBus


class PluginManager:
    """Loads plugin instances and hands them the shared event bus."""

    def __init__(self, eventbus: Optional[EventBus] = None):
        self.eventbus = eventbus or EventBus()
        self._plugins: Dict[str, Any] = {}

    def add(self, name: str, instance: Any, options: Optional[PluginOptions] = None, flag_registry=None) -> Any:
        """
        Add a plugin and dispatch its load event.

        Args:
            name: Unique plugin name
            instance: Plugin object; ``on_plugin_load`` is called if present
            options: Options passed with the load event (carries the command id)
            flag_registry: Explicit flag registry for the load event

        Returns:
            The plugin instance

        Raises:
            PluginError: If a plugin with this name is already loaded
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' already loaded", plugin_name=name)

        options = options or PluginOptions(id="")

        on_load = getattr(instance, "on_plugin_load", None)
        if callable(on_load):
            on_load(
                PluginEvent(
                    eventbus=self.eventbus,
                    plugin_options=options,
                    plugin_name=name,
                    flag_registry=flag_registry,
                )
            )

        self._plugins[name] = instance
        logger.debug(f"Loaded plugin '{name}'")
        return instance

    def get(self, name: str) -> Optional[Any]:
        return self._plugins.get(name)

    @property
    def plugin_names(self) -> List[str]:
        return list(self._plugins)
