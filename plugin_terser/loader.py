"""Plugin loader for the terser output plugin.

This module wires the plugin into the host: it contributes the ``--compress``
flag to the ``bundle`` command and answers output-plugin requests with a
terser transform configured from a local configuration file or the built-in
defaults.
"""

import os
from typing import Any, Callable, Dict, List, Mapping, Optional

from loguru import logger

from .config.defaults import get_default_config
from .events.host import EventBusHost
from .events.names import BUNDLE_MAIN_OUTPUT_GET, BUNDLE_NPM_OUTPUT_GET
from .flags import boolean_flag, env_flag_default
from .models import BuildContext, PluginEvent, PluginSettings
from .ports import ConfigLocator, FlagRegistry, PluginLog
from .transform import terser


class PluginLoader:
    """Handles the plugin manager lifecycle for the terser output plugin."""

    plugin_name = "plugin-terser"
    managed_plugins: List[str] = ["terser"]

    def __init__(
        self,
        config_locator: ConfigLocator,
        plugin_log: PluginLog,
        settings: Optional[PluginSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
        minifier: Callable[[Dict[str, Any]], Any] = terser,
    ):
        """Initialize plugin loader.

        Args:
            config_locator: Locator queried for a local terser configuration
            plugin_log: Destination for warning and verbose messages
            settings: Plugin settings (environment prefix, module name)
            environ: Environment used for flag defaults (defaults to ``os.environ``)
            minifier: Factory building the transform from a configuration
        """
        self.config_locator = config_locator
        self.plugin_log = plugin_log
        self.settings = settings or PluginSettings()
        self.environ = os.environ if environ is None else environ
        self.minifier = minifier

    @classmethod
    def from_eventbus(cls, eventbus, settings: Optional[PluginSettings] = None, **kwargs) -> "PluginLoader":
        """Create a loader whose collaborators are reached through ``eventbus``."""
        host = EventBusHost(eventbus)
        return cls(config_locator=host, plugin_log=host, settings=settings, **kwargs)

    def add_flags(self, command: str, flag_registry: FlagRegistry) -> None:
        """Add flags for built in commands.

        For ``bundle`` this adds ``--compress / --no-compress``. Its default is
        True unless ``{prefix}_COMPRESS`` is exactly ``"false"``.

        Args:
            command: ID of the command being run
            flag_registry: Registry the flags are added to
        """
        if command != "bundle":
            return

        env_var = self.settings.compress_env_var
        flag_registry.register_flag(
            command,
            self.plugin_name,
            {
                "compress": boolean_flag(
                    "compress",
                    description="[default: true] Compress output using Terser.",
                    allow_no=True,
                    default=env_flag_default(env_var, self.environ),
                    env_var=env_var,
                ),
            },
        )

    async def get_output_plugin(self, bundle_data: Any = None) -> Optional[Any]:
        """Return the configured terser transform.

        Args:
            bundle_data: Build context, or a mapping carrying ``cli_flags``

        Returns:
            Terser transform, or None unless the ``compress`` flag is True
        """
        context = BuildContext.from_value(bundle_data)

        if context.cli_flags.get("compress") is not True:
            return None

        config = await self.load_config(context.cli_flags)
        return self.minifier(config)

    async def load_config(self, cli_flags: Mapping[str, Any]) -> Dict[str, Any]:
        """Load a local configuration file or provide the default configuration.

        Args:
            cli_flags: CLI flags of the current invocation

        Returns:
            The local terser configuration, or the default one
        """
        if cli_flags.get("ignore-local-config") is True:
            return get_default_config()

        try:
            result = await self.config_locator.request_config(
                self.settings.module_name,
                f"{self.plugin_name} loading local configuration file failed...",
            )
        except Exception as e:
            self.plugin_log.log(
                "warn",
                f"{self.plugin_name}: could not load local Terser configuration ({e}); "
                "using default config.",
            )
            return get_default_config()

        if result is None:
            self.plugin_log.log("warn", f"{self.plugin_name}: loading default configuration.")
            return get_default_config()

        if not isinstance(result.config, Mapping):
            self.plugin_log.log(
                "warn",
                f"{self.plugin_name}: local Terser configuration file malformed using default config; "
                f"expected an 'object':\n{result.relative_path}",
            )
            return get_default_config()

        if len(result.config) == 0:
            self.plugin_log.log(
                "warn",
                f"{self.plugin_name}: local Terser configuration file empty using default config:\n"
                f"{result.relative_path}",
            )
            return get_default_config()

        self.plugin_log.log("verbose", f"{self.plugin_name}: deferring to local Terser configuration file.")
        return result.config

    def on_plugin_load(self, event: PluginEvent) -> None:
        """Wire up output-plugin providers and flags on the plugin event bus.

        Args:
            event: The plugin load event
        """
        event.eventbus.on(BUNDLE_MAIN_OUTPUT_GET, self.get_output_plugin)
        event.eventbus.on(BUNDLE_NPM_OUTPUT_GET, self.get_output_plugin)

        flag_registry = event.flag_registry or EventBusHost(event.eventbus)
        self.add_flags(event.plugin_options.id, flag_registry)

        logger.debug(f"{self.plugin_name} loaded for command '{event.plugin_options.id}'")
