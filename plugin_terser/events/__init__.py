"""
Event bus and host services for the terser plugin.
"""

from .bus import EventBus, HandlerRegistration
from .host import EventBusHost, wire_host
from .manager import PluginManager
from .names import (
    BUNDLE_MAIN_OUTPUT_GET,
    BUNDLE_NPM_OUTPUT_GET,
    CONFIG_FILE_OPEN,
    FLAG_HANDLER_ADD,
)

__all__ = [
    "EventBus",
    "HandlerRegistration",
    "EventBusHost",
    "wire_host",
    "PluginManager",
    "BUNDLE_MAIN_OUTPUT_GET",
    "BUNDLE_NPM_OUTPUT_GET",
    "CONFIG_FILE_OPEN",
    "FLAG_HANDLER_ADD",
]
