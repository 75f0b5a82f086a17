"""
Unified CLI entry point for vcd-tool operations using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Any, Callable, Optional, TypeVar

import click

from . import catalog, disk, network, task, vapp
from .._version import __version__

F = TypeVar("F", bound=Callable[..., Any])


# ============================================================================
# Common Click Options - Reusable decorators for shared options
# ============================================================================


def config_option(required: bool = False) -> Callable[[F], F]:
    """Shared --config option for commands."""
    default_help = " (default: ~/.config/vcd/cli.toml)" if not required else ""
    return click.option(
        "--config",
        required=required,
        type=click.Path(exists=True),
        help=f"Path to vcd-tool config file{default_help}",
    )


def debug_option() -> Callable[[F], F]:
    """Shared --debug option for verbosity control."""
    return click.option(
        "-d",
        "--debug",
        count=True,
        help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
    )


# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="vcd-tool")
@config_option()
@debug_option()
@click.option(
    "--max-retry-timeout",
    type=click.FloatRange(min=0),
    help="Seconds to keep retrying failed tasks and busy objects (default: 60, or the config file value)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    debug: int,
    max_retry_timeout: Optional[float],
) -> None:
    """vcd-tool - Manage vCloud Director catalogs, disks, networks and vApps."""
    # Store shared options in context for subcommands to access
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["max_retry_timeout"] = max_retry_timeout


# Register subcommands
cli.add_command(catalog.catalog)
cli.add_command(disk.disk)
cli.add_command(network.network)
cli.add_command(vapp.vapp)
cli.add_command(task.task)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(130)


__all__ = ["cli", "main", "config_option", "debug_option"]
