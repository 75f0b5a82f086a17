"""
Catalog subcommands.
"""

from typing import Optional

import click

from ..models.resources import CatalogSpec
from ..resources import CatalogResource
from .common import json_data_option, parse_spec, run_resource_command


@click.group()
def catalog() -> None:
    """Manage catalogs of the configured org."""


@catalog.command("create")
@click.option("--name", help="Catalog name. (required when not using json)")
@click.option("--description", help="Catalog description.")
@json_data_option()
@click.pass_context
def create_catalog(ctx: click.Context, name: Optional[str], description: Optional[str], json_data: Optional[str]):
    """
    Create a catalog, or adopt an existing catalog with the same name.
    """
    spec = parse_spec(CatalogSpec, json_data, name=name, description=description)
    run_resource_command(ctx, CatalogResource, f"create catalog {spec.name}", lambda handler: handler.create(spec))


@catalog.command("read")
@click.argument("name")
@click.pass_context
def read_catalog(ctx: click.Context, name: str):
    """Print the current state of a catalog."""
    run_resource_command(
        ctx,
        CatalogResource,
        f"read catalog {name}",
        lambda handler: handler.read(name),
        missing_message=f"Catalog {name} not found",
    )


@catalog.command("update")
@click.argument("name")
@click.option("--description", default="", help="New catalog description.")
@click.pass_context
def update_catalog(ctx: click.Context, name: str, description: str):
    """Set the description of a catalog."""
    spec = parse_spec(CatalogSpec, None, name=name, description=description)
    run_resource_command(
        ctx,
        CatalogResource,
        f"update catalog {name}",
        lambda handler: handler.update(name, spec),
        missing_message=f"Catalog {name} not found",
    )


@catalog.command("delete")
@click.argument("name")
@click.pass_context
def delete_catalog(ctx: click.Context, name: str):
    """Delete a catalog together with everything in it."""
    run_resource_command(ctx, CatalogResource, f"delete catalog {name}", lambda handler: handler.delete(name))


__all__ = ["catalog"]
