"""Data models exchanged between the plugin and its host.

Pydantic models describe values that cross the host boundary (flags, build
context, locator results, settings). The load event carries live objects and
is a plain dataclass, like the host's plugin context.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class PluginSettings(BaseModel):
    """Settings injected into the plugin at construction time."""

    env_prefix: str = Field("BUNDLE", description="Prefix of environment variables that drive flag defaults")
    module_name: str = Field("terser", description="Name the config locator searches for")

    @property
    def compress_env_var(self) -> str:
        """Environment variable consulted for the default of ``--compress``."""
        return f"{self.env_prefix}_COMPRESS"


class FlagSpec(BaseModel):
    """Description of a single CLI flag contributed by a plugin."""

    name: str = Field(..., description="Flag name without leading dashes")
    kind: str = Field("boolean", description="Flag type")
    description: str = Field("", description="Help text")
    allow_no: bool = Field(False, description="Whether --no-<name> is accepted")
    default: Any = Field(None, description="Default value resolved at registration time")
    env_var: Optional[str] = Field(None, description="Environment variable the default was derived from")


class BuildContext(BaseModel):
    """Per-invocation data handed to output-plugin providers."""

    model_config = ConfigDict(populate_by_name=True)

    cli_flags: Dict[str, Any] = Field(default_factory=dict, alias="cliFlags")

    @classmethod
    def from_value(cls, value: Any) -> "BuildContext":
        """Coerce host build data into a ``BuildContext``.

        Accepts ``None``, a ``BuildContext``, a mapping keyed ``cli_flags`` or
        ``cliFlags``, or any object with a ``cli_flags`` attribute.

        Args:
            value: Value received from the host

        Returns:
            BuildContext instance
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            flags = value.get("cli_flags", value.get("cliFlags"))
        else:
            flags = getattr(value, "cli_flags", None)
        return cls(cli_flags=dict(flags) if isinstance(flags, Mapping) else {})


class ConfigResult(BaseModel):
    """A configuration file found by the locator.

    ``config`` holds the parsed file content as-is; it is not required to be
    a mapping so callers can detect malformed files.
    """

    model_config = ConfigDict(populate_by_name=True)

    config: Any = None
    relative_path: str = Field("", alias="relativePath")
    file_path: Optional[Path] = None


@dataclass
class PluginOptions:
    """Options the plugin manager passes with the load event."""

    id: str


@dataclass
class PluginEvent:
    """Load event dispatched by the plugin manager."""

    eventbus: Any
    plugin_options: PluginOptions
    plugin_name: Optional[str] = None
    flag_registry: Optional[Any] = None
