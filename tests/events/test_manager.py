"""Tests for the plugin manager."""

from unittest.mock import MagicMock

import pytest

from plugin_terser.errors import PluginError
from plugin_terser.events import EventBus, PluginManager
from plugin_terser.models import PluginEvent, PluginOptions


class TestPluginManager:
    """Test PluginManager load lifecycle."""

    def test_load_event_dispatched(self):
        """Test on_plugin_load receives the bus and options."""
        manager = PluginManager()
        plugin = MagicMock()
        options = PluginOptions(id="bundle")

        manager.add("terser", plugin, options)

        plugin.on_plugin_load.assert_called_once()
        event = plugin.on_plugin_load.call_args.args[0]
        assert isinstance(event, PluginEvent)
        assert event.eventbus is manager.eventbus
        assert event.plugin_options is options
        assert event.plugin_name == "terser"

    def test_plugin_without_hook(self):
        manager = PluginManager(EventBus())

        manager.add("plain", object())

        assert manager.plugin_names == ["plain"]

    def test_duplicate_name(self):
        manager = PluginManager()
        manager.add("terser", MagicMock())

        with pytest.raises(PluginError, match="already loaded"):
            manager.add("terser", MagicMock())

    def test_get(self):
        manager = PluginManager()
        plugin = MagicMock()
        manager.add("terser", plugin)

        assert manager.get("terser") is plugin
        assert manager.get("missing") is None

    def test_failed_load_not_registered(self):
        """A plugin whose load hook raises can be added again."""
        manager = PluginManager()
        broken = MagicMock()
        broken.on_plugin_load.side_effect = PluginError("load failed")

        with pytest.raises(PluginError, match="load failed"):
            manager.add("terser", broken)

        assert manager.get("terser") is None

        fixed = MagicMock()
        manager.add("terser", fixed)
        assert manager.get("terser") is fixed
