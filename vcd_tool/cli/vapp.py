"""
vApp subcommands.
"""

from typing import Optional

import click

from ..models.resources import VAppSpec
from ..resources import VAppResource
from .common import parse_spec, run_resource_command


@click.group()
def vapp() -> None:
    """Manage vApps of the configured VDC."""


@vapp.command("create")
@click.option("--name", required=True, help="vApp name.")
@click.option("--description", help="vApp description.")
@click.pass_context
def create_vapp(ctx: click.Context, name: str, description: Optional[str]):
    """Compose an empty vApp."""
    spec = parse_spec(VAppSpec, None, name=name, description=description)
    run_resource_command(ctx, VAppResource, f"create vApp {name}", lambda handler: handler.create(spec))


@vapp.command("read")
@click.argument("name")
@click.pass_context
def read_vapp(ctx: click.Context, name: str):
    """Print the current state of a vApp and the names of its VMs."""
    run_resource_command(
        ctx,
        VAppResource,
        f"read vApp {name}",
        lambda handler: handler.read(name),
        missing_message=f"vApp {name} not found",
    )


@vapp.command("delete")
@click.argument("name")
@click.pass_context
def delete_vapp(ctx: click.Context, name: str):
    """Power off a deployed vApp, then delete it."""
    run_resource_command(ctx, VAppResource, f"delete vApp {name}", lambda handler: handler.delete(name))


__all__ = ["vapp"]
