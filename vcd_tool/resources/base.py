"""
Shared plumbing for the resource handlers.

Every mutation that submits a vCD task runs through the client's retry
budget: a request that vCD rejects outright is final. Once vCD accepted
the request, any failure while waiting (a failed task or a failed poll) is
submitted again.
"""

import logging
from typing import Callable, TYPE_CHECKING

import httpx

from ..errors import VcdError
from ..models.vcd_api import Task
from ..utils.retry import NonRetryableError, RetryableError, RetryPolicy, retry_call

if TYPE_CHECKING:
    from ..api import VcdClient


class BaseResource:
    """Base class for handlers that manage one kind of vCD object by name."""

    # Human readable resource kind, used in log messages
    kind = "resource"

    def __init__(self, client: "VcdClient") -> None:
        """
        Initialize the handler.

        Args:
            client: Authenticated client shared by all handlers
        """
        self.client = client

    def _retry_policy(self) -> RetryPolicy:
        return RetryPolicy(timeout=self.client.max_retry_timeout)

    def _run_task(self, submit: Callable[[], Task], action: str) -> Task:
        """
        Submit a task and wait for it, within the client's retry budget.

        Args:
            submit: Sends the request and returns the task vCD started
            action: Description for log messages, e.g. "create disk data"

        Returns:
            The finished task

        Raises:
            RetryTimeoutError: If the task kept failing for the whole budget
        """

        def attempt() -> Task:
            try:
                task = submit()
            except (httpx.HTTPError, VcdError, ValueError) as e:
                logging.error("Error submitting %s: %s", action, e)
                raise NonRetryableError(e) from e
            try:
                return self.client.wait_task_completion(task)
            except (httpx.HTTPError, VcdError) as e:
                logging.warning("Waiting for %s failed: %s", action, e)
                raise RetryableError(e) from e

        logging.info("Running %s", action)
        return retry_call(attempt, self._retry_policy())


__all__ = ["BaseResource"]
