"""
Helpers shared by the resource subcommands.

Every subcommand follows the same flow: configure logging from the ``-d``
count, build a client from the config file, run one handler method and
print the resulting state as JSON. Any failure is logged and exits with 1.
"""

import logging
import sys
from typing import Any, Callable, Optional, Type, TypeVar

import click
from pydantic import BaseModel, ValidationError

from ..api import VcdClient
from ..resources import BaseResource
from ..utils import setup_logging
from ..utils.error_handling import with_error_handling

ModelT = TypeVar("ModelT", bound=BaseModel)


def json_data_option() -> Callable[[Any], Any]:
    """Shared -j/--json-data option for create and update commands."""
    return click.option(
        "-j",
        "--json-data",
        help="JSON string input. CLI options are ignored when JSON data is provided",
    )


def build_client(ctx: click.Context) -> VcdClient:
    """Create a client from the config file and the global CLI overrides."""
    return VcdClient.create_from_config_file(
        path=ctx.obj["config"],
        max_retry_timeout=ctx.obj["max_retry_timeout"],
    )


def parse_spec(model: Type[ModelT], json_data: Optional[str], **options: Any) -> ModelT:
    """
    Validate a resource spec from JSON data or from CLI options.

    Exits with status 1 after logging every validation error.
    """
    try:
        if json_data:
            return model.model_validate_json(json_data)
        return model(**{key: value for key, value in options.items() if value is not None})
    except ValidationError as e:
        source = "json data" if json_data else "CLI options"
        logging.error("Unable to validate %s:", source)
        for error in e.errors():
            if error["type"] == "json_invalid":
                logging.error("Invalid JSON: %s", error["msg"])
            else:
                location = error["loc"][0] if error["loc"] else model.__name__
                logging.error("%s-%s: %s", e.title, location, error["msg"])
        sys.exit(1)


def echo_state(state: Optional[BaseModel]) -> None:
    if state is not None:
        click.echo(state.model_dump_json(indent=2))


def run_resource_command(
    ctx: click.Context,
    handler_class: Type[BaseResource],
    operation: str,
    action: Callable[[Any], Optional[BaseModel]],
    *,
    missing_message: Optional[str] = None,
) -> None:
    """
    Run ``action`` against a handler bound to a freshly connected client.

    Args:
        ctx: Click context holding the global options
        handler_class: Resource handler to instantiate
        operation: Description of the operation, for error messages
        action: Calls one handler method and returns the state to print
        missing_message: When set, a None result is reported with this
            message and exit status 1
    """
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    @with_error_handling(operation, exit_on_error=True)
    def run() -> Optional[BaseModel]:
        with build_client(ctx) as client:
            client.connect()
            return action(handler_class(client))

    state = run()

    if state is None and missing_message:
        logging.error(missing_message)
        sys.exit(1)
    echo_state(state)


__all__ = ["json_data_option", "build_client", "parse_spec", "echo_state", "run_resource_command"]
