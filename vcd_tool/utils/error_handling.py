"""
Error handling utilities for standardized error logging and handling.

This module provides reusable error handling patterns shared by the client
and the command line entry points.
"""

import logging
import sys
import traceback
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..errors import VcdApiError
from .constants import (
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_SERVER_ERROR,
    HTTP_STATUS_UNAUTHORIZED,
)

# Type variable for generic function decorators
F = TypeVar("F", bound=Callable[..., Any])


def _status_code(error: httpx.HTTPError) -> Optional[int]:
    if isinstance(error, VcdApiError):
        return error.status_code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    status = _status_code(error)

    if status == HTTP_STATUS_FORBIDDEN:
        logging.error(
            "Authorization failed during %s: the vCD user lacks the rights for this operation. %s",
            operation,
            error,
        )
    elif status == HTTP_STATUS_UNAUTHORIZED:
        logging.error(
            "Authentication failed during %s: Invalid credentials. "
            "Please check user, password and org in the configuration file.",
            operation,
        )
    elif status == HTTP_STATUS_NOT_FOUND:
        logging.error("Resource not found during %s: %s", operation, error)
    elif status is not None and status >= HTTP_STATUS_SERVER_ERROR:
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

    if isinstance(error, VcdApiError) and error.minor_error_code:
        logging.debug("vCD error code: major=%s minor=%s", error.major_error_code, error.minor_error_code)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    if isinstance(error, httpx.HTTPError):
        handle_http_error(error, operation, log_traceback=log_traceback)
        return

    logging.error("Error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def with_error_handling(
    operation: str, *, exit_on_error: bool = False, exit_code: int = 1, reraise: bool = True
) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error handling.

    Args:
        operation: Description of the operation for logging
        exit_on_error: If True, call sys.exit on error
        exit_code: Exit code to use if exit_on_error is True
        reraise: If True, reraise the exception after logging (unless exiting)

    Returns:
        Decorator function

    Example:
        @with_error_handling("delete catalog", exit_on_error=True)
        def delete_catalog():
            # Implementation
            pass
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except httpx.HTTPError as e:
                handle_http_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            return None

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = [
    "handle_http_error",
    "handle_generic_error",
    "with_error_handling",
]
