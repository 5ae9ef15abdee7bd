"""Environment-driven settings for the ``plugin-terser`` command line."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models import PluginSettings


class CliSettings(BaseSettings):
    """Settings for the CLI, read from ``PLUGIN_TERSER_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLUGIN_TERSER_",
        case_sensitive=False,
        extra="ignore",
    )

    env_prefix: str = Field("BUNDLE", description="Prefix for flag environment variables")
    terser_bin: Optional[str] = Field(None, description="Path to the terser executable")
    verbose: bool = Field(False, description="Enable debug logging")
    quiet: bool = Field(False, description="Only log errors")

    def plugin_settings(self, env_prefix: Optional[str] = None) -> PluginSettings:
        """Settings handed to the plugin, with an optional env prefix override."""
        return PluginSettings(env_prefix=env_prefix or self.env_prefix)
