"""
Task subcommands.
"""

import logging
from typing import Optional

import click

from ..models.vcd_api import Task
from ..utils import setup_logging
from ..utils.error_handling import with_error_handling
from .common import build_client, echo_state


@click.group()
def task() -> None:
    """Inspect vCD tasks."""


@task.command("wait")
@click.argument("href")
@click.option("--timeout", type=float, help="Give up after this many seconds (default: wait until the task ends).")
@click.pass_context
def wait_task(ctx: click.Context, href: str, timeout: Optional[float]):
    """
    Wait for the task at HREF to finish and print its final state.

    Exits with 1 when the task ends in any state other than success.
    """
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    @with_error_handling(f"wait for task {href}", exit_on_error=True)
    def wait() -> Task:
        with build_client(ctx) as client:
            client.authenticate()
            logging.info("Waiting for task %s", href)
            return client.wait_task_completion(client.get_task(href), timeout=timeout)

    echo_state(wait())


__all__ = ["task"]
