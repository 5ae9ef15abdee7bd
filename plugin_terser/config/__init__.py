"""Configuration for the terser plugin.

- Built-in default terser options
- Local configuration file discovery
- Environment-driven CLI settings
"""

from .defaults import DEFAULT_CONFIG, get_default_config
from .locator import ConfigFileLocator
from .settings import CliSettings

__all__ = [
    "DEFAULT_CONFIG",
    "get_default_config",
    "ConfigFileLocator",
    "CliSettings",
]
