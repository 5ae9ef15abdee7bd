"""Tests for the bus-backed host services."""

from unittest.mock import MagicMock

import pytest

from plugin_terser.config import DEFAULT_CONFIG
from plugin_terser.events import CONFIG_FILE_OPEN, FLAG_HANDLER_ADD, EventBusHost, wire_host
from plugin_terser.flags import FlagHandler, boolean_flag
from plugin_terser.loader import PluginLoader
from plugin_terser.models import ConfigResult
from plugin_terser.ports import ConfigLocator, FlagRegistry, PluginLog


class TestEventBusHost:
    """Test EventBusHost port implementations."""

    def test_implements_ports(self, eventbus):
        host = EventBusHost(eventbus)

        assert isinstance(host, FlagRegistry)
        assert isinstance(host, ConfigLocator)
        assert isinstance(host, PluginLog)

    def test_register_flag_payload(self, eventbus):
        handler = MagicMock()
        eventbus.on(FLAG_HANDLER_ADD, handler)
        flags = {"compress": boolean_flag("compress")}

        EventBusHost(eventbus).register_flag("bundle", "plugin-terser", flags)

        handler.assert_called_once_with({"command": "bundle", "plugin": "plugin-terser", "flags": flags})

    def test_log_event(self, eventbus):
        handler = MagicMock()
        eventbus.on("log:verbose", handler)

        EventBusHost(eventbus).log("verbose", "hello")

        handler.assert_called_once_with("hello")

    @pytest.mark.asyncio
    async def test_request_config_no_handler(self, eventbus):
        assert await EventBusHost(eventbus).request_config("terser", "failed") is None

    @pytest.mark.asyncio
    async def test_request_config_forwards_arguments(self, eventbus):
        handler = MagicMock(return_value=ConfigResult(config={"ecma": 2015}, relative_path="y"))
        eventbus.on(CONFIG_FILE_OPEN, handler)

        result = await EventBusHost(eventbus).request_config("terser", "failed")

        handler.assert_called_once_with(module_name="terser", error_message="failed")
        assert result.config == {"ecma": 2015}

    @pytest.mark.asyncio
    async def test_request_config_mapping_result(self, eventbus):
        """Mapping results from the locator are converted."""
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: {"config": "bad", "relative_path": "z"})

        result = await EventBusHost(eventbus).request_config("terser", "failed")

        assert isinstance(result, ConfigResult)
        assert result.config == "bad"
        assert result.relative_path == "z"

    @pytest.mark.asyncio
    async def test_request_config_camel_case_mapping(self, eventbus):
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: {"config": {"ecma": 2015}, "relativePath": "web/.terserrc"})

        result = await EventBusHost(eventbus).request_config("terser", "failed")

        assert result.relative_path == "web/.terserrc"

    @pytest.mark.asyncio
    async def test_camel_case_path_named_in_warning(self, eventbus):
        """The relativePath of an empty file ends the loader warning."""
        warnings = []
        eventbus.on("log:warn", warnings.append)
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: {"config": {}, "relativePath": "web/.terserrc"})
        loader = PluginLoader.from_eventbus(eventbus)

        config = await loader.load_config({})

        assert config == DEFAULT_CONFIG
        assert len(warnings) == 1
        assert warnings[0].endswith("web/.terserrc")

    @pytest.mark.asyncio
    async def test_request_config_first_result_wins(self, eventbus):
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: None)
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: ConfigResult(config={"a": 1}, relative_path="one"))
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: ConfigResult(config={"b": 2}, relative_path="two"))

        result = await EventBusHost(eventbus).request_config("terser", "failed")

        assert result.relative_path == "one"

    @pytest.mark.asyncio
    async def test_request_config_unexpected_result(self, eventbus):
        eventbus.on(CONFIG_FILE_OPEN, lambda **kwargs: 42)

        with pytest.raises(TypeError):
            await EventBusHost(eventbus).request_config("terser", "failed")


class TestWireHost:
    """Test binding host handlers."""

    def test_log_events_forwarded_to_loguru(self, eventbus, log_records):
        wire_host(eventbus)
        host = EventBusHost(eventbus)

        host.log("warn", "careful")
        host.log("verbose", "details")
        host.log("error", "broken")

        assert ("WARNING", "careful") in log_records
        assert ("VERBOSE", "details") in log_records
        assert ("ERROR", "broken") in log_records

    def test_flag_handler_bound(self, eventbus):
        flag_handler = FlagHandler()
        wire_host(eventbus, flag_handler=flag_handler)

        EventBusHost(eventbus).register_flag("bundle", "p", {"compress": boolean_flag("compress")})

        assert "compress" in flag_handler.get_flags("bundle")

    @pytest.mark.asyncio
    async def test_locator_bound(self, eventbus):
        locator = MagicMock()
        locator.open.return_value = None
        wire_host(eventbus, config_locator=locator)

        assert await EventBusHost(eventbus).request_config("terser", "failed") is None
        locator.open.assert_called_once_with(module_name="terser", error_message="failed")
