"""Terser output plugin for the bundle build pipeline.

The plugin contributes a ``--compress`` flag to the ``bundle`` command and
hands the bundler a terser transform configured from a local configuration
file or the built-in defaults.
"""

from ._version import __version__, __version_info__
from .config import DEFAULT_CONFIG, ConfigFileLocator, get_default_config
from .errors import ConfigurationError, EventBusError, MinifierError, PluginError
from .events import EventBus, EventBusHost, PluginManager, wire_host
from .flags import FlagHandler, boolean_flag, env_flag_default
from .loader import PluginLoader
from .models import BuildContext, ConfigResult, FlagSpec, PluginEvent, PluginOptions, PluginSettings
from .transform import TerserTransform, terser

__all__ = [
    "__version__",
    "__version_info__",
    # Plugin
    "PluginLoader",
    "TerserTransform",
    "terser",
    # Configuration
    "DEFAULT_CONFIG",
    "get_default_config",
    "ConfigFileLocator",
    # Host
    "EventBus",
    "EventBusHost",
    "PluginManager",
    "wire_host",
    "FlagHandler",
    "boolean_flag",
    "env_flag_default",
    # Models
    "BuildContext",
    "ConfigResult",
    "FlagSpec",
    "PluginEvent",
    "PluginOptions",
    "PluginSettings",
    # Errors
    "PluginError",
    "ConfigurationError",
    "MinifierError",
    "EventBusError",
]
