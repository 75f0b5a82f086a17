"""
Exception hierarchy for vcd-tool.

Transport failures stay ``httpx.HTTPError`` instances so callers can keep
handling them the usual way; ``VcdApiError`` adds the fields vCloud Director
puts in its ``<Error>`` body.
"""

from typing import Optional

import httpx


class VcdError(Exception):
    """Base class for all vcd-tool errors."""


class VcdApiError(VcdError, httpx.HTTPError):
    """A non-2xx response from the vCloud Director API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        operation: str = "request",
        major_error_code: Optional[int] = None,
        minor_error_code: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.operation = operation
        self.major_error_code = major_error_code
        self.minor_error_code = minor_error_code
        super().__init__(f"Failed to {operation}: {status_code} - {message}")


class AuthenticationError(VcdError):
    """Login, logout or session discovery failed."""


class ObjectNotFoundError(VcdError):
    """A named object could not be found under its parent."""


class LinkNotFoundError(VcdError):
    """An object does not expose the link required for an operation."""


class TaskError(VcdError):
    """A vCD task reached a terminal state other than success."""

    def __init__(self, name: str, description: str, status: str, error_message: Optional[str] = None) -> None:
        self.name = name
        self.description = description
        self.status = status
        self.error_message = error_message
        detail = description
        if error_message:
            detail = f"{description} ({error_message})" if description else error_message
        super().__init__(f"task {name} did not complete successfully: {detail}")


class TaskTimeoutError(VcdError):
    """A caller-supplied deadline passed while a task was still running."""


__all__ = [
    "VcdError",
    "VcdApiError",
    "AuthenticationError",
    "ObjectNotFoundError",
    "LinkNotFoundError",
    "TaskError",
    "TaskTimeoutError",
]
