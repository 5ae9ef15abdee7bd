"""Exception types for the terser plugin.

The adapter itself never raises to its host: every failure while resolving a
configuration is logged and replaced by the default configuration. These
exceptions are raised by the host-side collaborators shipped alongside it
(locator, flag handler, event bus) and by the minifier transform.
"""

from typing import Optional


class PluginError(Exception):
    """Base exception for plugin-related errors."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.plugin_name = plugin_name
        self.cause = cause


class ConfigurationError(PluginError):
    """A configuration file exists but could not be read or parsed."""

    def __init__(self, message: str, path=None, plugin_name: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message, plugin_name=plugin_name, cause=cause)
        self.path = path


class MinifierError(PluginError):
    """The terser child process is missing or exited with an error."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        plugin_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, plugin_name=plugin_name, cause=cause)
        self.returncode = returncode
        self.stderr = stderr


class EventBusError(PluginError):
    """Raised when an event cannot be dispatched the way it was requested."""
