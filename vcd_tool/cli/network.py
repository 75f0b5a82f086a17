"""
Org VDC network subcommands.
"""

from typing import Dict, List, Optional, Tuple

import click

from ..models.resources import NetworkSpec
from ..resources import NetworkResource
from .common import json_data_option, parse_spec, run_resource_command


def parse_ip_ranges(
    ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]
) -> Optional[List[Dict[str, str]]]:
    """Click callback turning ``START-END`` strings into IP range mappings."""
    if not values:
        return None
    ranges = []
    for value in values:
        start, separator, end = value.partition("-")
        if not separator or not start.strip() or not end.strip():
            raise click.BadParameter(f"expected START-END, got '{value}'", ctx=ctx, param=param)
        ranges.append({"start_address": start.strip(), "end_address": end.strip()})
    return ranges


@click.group()
def network() -> None:
    """Manage org VDC networks of the configured VDC."""


@network.command("create")
@click.option("--name", help="Network name. (required when not using json)")
@click.option("--description", help="Network description.")
@click.option(
    "--fence-mode",
    type=click.Choice(["bridged", "isolated", "natRouted"]),
    help="How the network connects to the outside (default: natRouted).",
)
@click.option("--gateway", help="Gateway address. (required when not using json)")
@click.option("--netmask", help="Netmask (default: 255.255.255.0).")
@click.option("--dns1", help="Primary DNS server.")
@click.option("--dns2", help="Secondary DNS server.")
@click.option("--dns-suffix", help="DNS suffix.")
@click.option(
    "--static-ip-pool",
    multiple=True,
    callback=parse_ip_ranges,
    help="Static IP range as START-END; repeat for several ranges.",
)
@click.option("--edge-gateway", help="Name of the edge gateway a natRouted network connects to.")
@click.option("--shared", is_flag=True, default=None, help="Share the network with the other VDCs of the org.")
@json_data_option()
@click.pass_context
def create_network(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    ctx: click.Context,
    name: Optional[str],
    description: Optional[str],
    fence_mode: Optional[str],
    gateway: Optional[str],
    netmask: Optional[str],
    dns1: Optional[str],
    dns2: Optional[str],
    dns_suffix: Optional[str],
    static_ip_pool: Optional[List[Dict[str, str]]],
    edge_gateway: Optional[str],
    shared: Optional[bool],
    json_data: Optional[str],
):
    """
    Create an org VDC network.

    "Object is busy" rejections from vCD are retried within the retry budget.
    """
    spec = parse_spec(
        NetworkSpec,
        json_data,
        name=name,
        description=description,
        fence_mode=fence_mode,
        gateway=gateway,
        netmask=netmask,
        dns1=dns1,
        dns2=dns2,
        dns_suffix=dns_suffix,
        static_ip_pool=static_ip_pool,
        edge_gateway=edge_gateway,
        shared=shared,
    )
    run_resource_command(ctx, NetworkResource, f"create network {spec.name}", lambda handler: handler.create(spec))


@network.command("read")
@click.argument("name")
@click.pass_context
def read_network(ctx: click.Context, name: str):
    """Print the current state of a network."""
    run_resource_command(
        ctx,
        NetworkResource,
        f"read network {name}",
        lambda handler: handler.read(name),
        missing_message=f"Network {name} not found",
    )


@network.command("delete")
@click.argument("name")
@click.pass_context
def delete_network(ctx: click.Context, name: str):
    """Delete a network."""
    run_resource_command(ctx, NetworkResource, f"delete network {name}", lambda handler: handler.delete(name))


__all__ = ["network", "parse_ip_ranges"]
