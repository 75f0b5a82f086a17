"""
Utility modules for vcd-tool.
"""

from .logger import setup_logging, WrappingFormatter
from .session import create_session_with_retry
from .retry import (
    RetryableError,
    NonRetryableError,
    RetryTimeoutError,
    RetryPolicy,
    busy_retry_policy,
    is_busy_error,
    retry_call,
)
from .units import parse_size, format_size

from . import error_handling
from . import response_utils
from . import constants
from . import config_manager
from . import xml_utils

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "create_session_with_retry",
    "RetryableError",
    "NonRetryableError",
    "RetryTimeoutError",
    "RetryPolicy",
    "busy_retry_policy",
    "is_busy_error",
    "retry_call",
    "parse_size",
    "format_size",
    "error_handling",
    "response_utils",
    "constants",
    "config_manager",
    "xml_utils",
]
