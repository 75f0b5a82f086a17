"""
Independent disk subcommands.
"""

from typing import Optional

import click

from ..models.resources import DiskSpec
from ..resources import DiskResource
from .common import json_data_option, parse_spec, run_resource_command


def disk_options(func):
    """Options describing a disk, shared by create and update."""
    options = [
        click.option("--size", help='Base-2 size such as "512MB" or "10GB". (required when not using json)'),
        click.option("--description", help="Disk description."),
        click.option("--bus-type", help="Bus type, e.g. 6 for SCSI."),
        click.option("--bus-sub-type", help="Bus sub type, e.g. lsilogic."),
        click.option("--storage-profile", help="Storage profile name (default: the VDC default profile)."),
        click.option("--iops", type=int, help="Requested IOPS."),
        json_data_option(),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def disk() -> None:
    """Manage independent disks of the configured VDC."""


@disk.command("create")
@click.option("--name", help="Disk name, unique within the VDC. (required when not using json)")
@disk_options
@click.pass_context
def create_disk(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    name: Optional[str],
    size: Optional[str],
    description: Optional[str],
    bus_type: Optional[str],
    bus_sub_type: Optional[str],
    storage_profile: Optional[str],
    iops: Optional[int],
    json_data: Optional[str],
):
    """
    Create an independent disk. Fails when a disk with that name exists.
    """
    spec = parse_spec(
        DiskSpec,
        json_data,
        name=name,
        size=size,
        description=description,
        bus_type=bus_type,
        bus_sub_type=bus_sub_type,
        storage_profile=storage_profile,
        iops=iops,
    )
    run_resource_command(ctx, DiskResource, f"create disk {spec.name}", lambda handler: handler.create(spec))


@disk.command("read")
@click.argument("name")
@click.pass_context
def read_disk(ctx: click.Context, name: str):
    """Print the current state of a disk, including the VM it is attached to."""
    run_resource_command(
        ctx,
        DiskResource,
        f"read disk {name}",
        lambda handler: handler.read(name),
        missing_message=f"Disk {name} not found",
    )


@disk.command("update")
@click.argument("name")
@click.option("--new-name", help="Rename the disk.")
@disk_options
@click.pass_context
def update_disk(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    name: str,
    new_name: Optional[str],
    size: Optional[str],
    description: Optional[str],
    bus_type: Optional[str],
    bus_sub_type: Optional[str],
    storage_profile: Optional[str],
    iops: Optional[int],
    json_data: Optional[str],
):
    """
    Update a detached disk. The disk must exist.
    """
    spec = parse_spec(
        DiskSpec,
        json_data,
        name=new_name or name,
        size=size,
        description=description,
        bus_type=bus_type,
        bus_sub_type=bus_sub_type,
        storage_profile=storage_profile,
        iops=iops,
    )
    run_resource_command(ctx, DiskResource, f"update disk {name}", lambda handler: handler.update(name, spec))


@disk.command("delete")
@click.argument("name")
@click.pass_context
def delete_disk(ctx: click.Context, name: str):
    """Delete a detached disk. The disk must exist."""
    run_resource_command(ctx, DiskResource, f"delete disk {name}", lambda handler: handler.delete(name))


__all__ = ["disk"]
