"""CLI flag specifications and the host-side flag handler.

Plugins describe flags with ``FlagSpec`` objects; the ``FlagHandler`` collects
them per command and turns them into ``click`` options when the command line
is parsed.
"""

import os
from typing import Any, Dict, Iterable, List, Mapping, Optional

import click
from loguru import logger

from .errors import PluginError
from .models import FlagSpec


def env_flag_default(env_var: str, environ: Optional[Mapping[str, str]] = None, default: bool = True) -> bool:
    """Resolve a boolean flag default from an environment variable.

    Only the exact strings ``"true"`` and ``"false"`` are recognised; any
    other value, or an unset variable, yields ``default``.

    Args:
        env_var: Environment variable name
        environ: Environment mapping (defaults to ``os.environ``)
        default: Value used when the variable is unset or unrecognised

    Returns:
        Resolved default
    """
    environ = os.environ if environ is None else environ
    value = environ.get(env_var)

    if value == "true":
        return True
    if value == "false":
        return False
    return default


def boolean_flag(
    name: str,
    description: str = "",
    allow_no: bool = False,
    default: bool = False,
    env_var: Optional[str] = None,
) -> FlagSpec:
    """Create a boolean flag specification."""
    return FlagSpec(
        name=name,
        kind="boolean",
        description=description,
        allow_no=allow_no,
        default=default,
        env_var=env_var,
    )


class FlagHandler:
    """Collects plugin flags per command and parses them with click."""

    def __init__(self):
        self._flags: Dict[str, Dict[str, FlagSpec]] = {}
        self._owners: Dict[str, Dict[str, str]] = {}

    def add(self, payload: Mapping[str, Any]) -> None:
        """Register flags from a ``{command, plugin, flags}`` payload.

        Args:
            payload: Flag registration payload

        Raises:
            PluginError: If a flag is already registered for the command
        """
        command = payload["command"]
        plugin = payload.get("plugin", "<unknown>")
        flags: Mapping[str, FlagSpec] = payload.get("flags", {})

        command_flags = self._flags.setdefault(command, {})
        owners = self._owners.setdefault(command, {})

        # Reject the whole payload before committing any of it
        for name in flags:
            if name in command_flags:
                raise PluginError(
                    f"Flag '--{name}' for command '{command}' already registered by '{owners[name]}'",
                    plugin_name=plugin,
                )

        for name, spec in flags.items():
            if spec.name != name:
                spec = spec.model_copy(update={"name": name})

            command_flags[name] = spec
            owners[name] = plugin
            logger.debug(f"Registered flag --{name} for '{command}' from {plugin}")

    def get_flags(self, command: str) -> Dict[str, FlagSpec]:
        return dict(self._flags.get(command, {}))

    def owner(self, command: str, name: str) -> Optional[str]:
        return self._owners.get(command, {}).get(name)

    def click_options(self, command: str) -> List[click.Option]:
        """Build click options for every flag registered for ``command``."""
        options = []

        for name, spec in self._flags.get(command, {}).items():
            if spec.kind != "boolean":
                raise PluginError(f"Unsupported flag type '{spec.kind}' for --{name}")

            declaration = f"--{name}/--no-{name}" if spec.allow_no else f"--{name}"
            options.append(
                click.Option(
                    [declaration],
                    is_flag=True,
                    default=bool(spec.default),
                    help=spec.description,
                    show_default=True,
                )
            )

        return options

    def parse(
        self,
        command: str,
        args: Iterable[str],
        parent: Optional[click.Context] = None,
    ) -> Dict[str, Any]:
        """Parse ``args`` against the flags registered for ``command``.

        Args:
            command: Command ID
            args: Remaining command line arguments
            parent: Parent click context, if any

        Returns:
            Flag name -> parsed value

        Raises:
            click.UsageError: On unknown or malformed arguments
        """
        cmd = click.Command(command, params=self.click_options(command), add_help_option=False)
        ctx = cmd.make_context(command, list(args), parent=parent)

        names = {name.replace("-", "_"): name for name in self._flags.get(command, {})}
        return {names.get(key, key): value for key, value in ctx.params.items()}
