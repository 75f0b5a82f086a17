"""
vcd-tool - A Python client for vCloud Director API operations.

This package provides tools for managing vCloud Director catalogs,
independent disks, org VDC networks and vApps, with asynchronous task
tracking and bounded retries of transient API errors.
"""

from ._version import __version__

__author__ = "vcd-tool developers"

# Import main classes and functions for easy access
from .api import VcdClient, VcdSessionAuth
from .utils import (
    RetryPolicy,
    create_session_with_retry,
    retry_call,
    setup_logging,
    WrappingFormatter,
)
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "VcdClient",
    "VcdSessionAuth",
    "RetryPolicy",
    "retry_call",
    "setup_logging",
    "WrappingFormatter",
    "create_session_with_retry",
    "cli_main",
    "cli_group",
]
