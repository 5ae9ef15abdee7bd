"""Main entry point for the plugin-terser CLI.

The ``bundle`` command plays the host's part: it wires the event bus, loads
the terser plugin through the plugin manager, parses the flags the plugin
contributed and pipes the input through the returned transform.
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Optional

import click
import typer
from loguru import logger
from rich.console import Console

from .. import __version__
from ..config import CliSettings, ConfigFileLocator
from ..errors import PluginError
from ..events import BUNDLE_MAIN_OUTPUT_GET, EventBus, PluginManager, wire_host
from ..flags import FlagHandler
from ..loader import PluginLoader
from ..logging import setup_logging
from ..models import BuildContext, PluginOptions
from ..transform import terser


app = typer.Typer(
    name="plugin-terser",
    help="Minify bundle output with Terser",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Status output goes to stderr so minified code can be piped from stdout
console = Console(stderr=True)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def bundle(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JavaScript file to bundle",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write output to this file instead of stdout",
    ),
    ignore_local_config: bool = typer.Option(
        False,
        "--ignore-local-config",
        help="Ignore local configuration files and use the defaults",
    ),
    env_prefix: Optional[str] = typer.Option(
        None,
        "--env-prefix",
        help="Prefix of environment variables that set flag defaults",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        file_okay=False,
        help="Directory the local configuration search starts from",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Bundle a file, compressing it with Terser unless --no-compress is given.

    Flags contributed by plugins (such as [cyan]--compress/--no-compress[/cyan])
    are accepted after the input file.
    """
    settings = CliSettings()
    setup_logging(verbose=verbose or settings.verbose, quiet=quiet or settings.quiet)

    plugin_settings = settings.plugin_settings(env_prefix)
    flag_handler = FlagHandler()
    eventbus = wire_host(
        EventBus("plugin-terser"),
        flag_handler=flag_handler,
        config_locator=ConfigFileLocator(config_dir or Path.cwd()),
    )

    manager = PluginManager(eventbus)
    loader = PluginLoader.from_eventbus(
        eventbus,
        settings=plugin_settings,
        minifier=partial(terser, binary=settings.terser_bin),
    )
    manager.add(PluginLoader.plugin_name, loader, PluginOptions(id="bundle"))

    try:
        cli_flags = flag_handler.parse("bundle", ctx.args, parent=ctx)
    except click.UsageError as e:
        console.print(f"[red]Error:[/red] {e.format_message()}")
        raise typer.Exit(2)

    cli_flags["ignore-local-config"] = ignore_local_config
    logger.debug(f"Resolved CLI flags: {cli_flags}")

    transform = asyncio.run(
        eventbus.trigger_async(BUNDLE_MAIN_OUTPUT_GET, BuildContext(cli_flags=cli_flags))
    )

    code = input_path.read_text(encoding="utf-8")

    if transform is None:
        result = code
        status = "[yellow]copied (compression disabled)[/yellow]"
    else:
        try:
            result = transform.render_chunk(code)
        except PluginError as e:
            console.print(f"[red]Minification failed:[/red] {e}")
            raise typer.Exit(1)
        status = "[green]minified[/green]"

    if output is None:
        typer.echo(result, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")

    console.print(
        f"{input_path} {status} -> {output or 'stdout'} "
        f"({len(code)} -> {len(result)} bytes)"
    )


@app.command()
def version():
    """Display plugin-terser version information."""
    console.print(f"[bold blue]plugin-terser[/bold blue] version {__version__}")


def main():
    app()
