"""
Task management operations for the vCD API.

This module handles waiting for and monitoring vCD asynchronous tasks.
"""

import logging
import time
import xml.etree.ElementTree as ET
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable

from ..errors import LinkNotFoundError, TaskError, TaskTimeoutError
from ..models.vcd_api import Task
from ..utils.constants import REL_TASK_CANCEL, TASK_POLL_INTERVAL


@runtime_checkable
class TaskManagerMixin(Protocol):
    """Protocol that provides task polling and waiting for vCD async operations."""

    # Required attributes
    _metrics: Any  # PerformanceMetrics

    def _get_element(self, href: str, operation: str, params: Optional[dict] = None) -> ET.Element:
        """GET an XML document."""
        ...  # pragma: no cover - defined in implementation

    def _send(
        self,
        method: str,
        href: str,
        operation: str,
        *,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> Optional[ET.Element]:
        """Send a request and return the decoded response body, if any."""
        ...  # pragma: no cover - defined in implementation

    def get_task(self, href: str) -> Task:
        """
        Get the current state of a task.

        Args:
            href: Task href

        Returns:
            Task model decoded from the ``<Task>`` body
        """
        return Task.from_xml(self._get_element(href, "get task"))

    def refresh_task(self, task: Task) -> Task:
        return self.get_task(task.href)

    def wait_task_completion(self, task: Task, timeout: Optional[float] = None) -> Task:
        """
        Poll a task every second until it reaches a terminal state.

        The loop has no iteration limit of its own; callers bound it with a
        retry budget or by passing ``timeout``.

        Args:
            task: Task to wait for
            timeout: Optional deadline in seconds

        Returns:
            The refreshed task, whose status is ``success``

        Raises:
            TaskError: If the task ends in any state other than success
            TaskTimeoutError: If ``timeout`` passes while the task is running
        """
        start = time.monotonic()
        poll_count = 0

        while True:
            poll_count += 1
            current = self.refresh_task(task)
            self._metrics.log_task_poll()

            if current.is_complete:
                elapsed = time.monotonic() - start
                if not current.is_successful:
                    logging.error(
                        "Task %s ended with status %s after %d polls: %s",
                        current.name,
                        current.status,
                        poll_count,
                        current.description,
                    )
                    raise TaskError(current.name, current.description, current.status, current.error_message)
                logging.info(
                    "Task finished: %s (status: %s, total polls: %d, elapsed: %.1fs)",
                    current.name or current.href,
                    current.status,
                    poll_count,
                    elapsed,
                )
                return current

            elapsed = time.monotonic() - start
            if timeout is not None and elapsed >= timeout:
                logging.error("Timed out waiting for task %s after %.1fs (%d polls)", current.href, elapsed, poll_count)
                raise TaskTimeoutError(f"Timed out waiting for task {current.name or current.href} after {timeout}s")

            logging.debug(
                "Waiting for %s to finish (poll #%d, status: %s, elapsed: %.1fs).",
                current.name or current.href,
                poll_count,
                current.status,
                elapsed,
            )
            time.sleep(TASK_POLL_INTERVAL)

    def wait_all_tasks(self, tasks: Iterable[Task]) -> List[Task]:
        """Wait on each task in order; the first failure stops the sequence."""
        return [self.wait_task_completion(task) for task in tasks]

    def cancel_task(self, task: Task) -> None:
        """
        Request cancellation of a running task.

        Raises:
            LinkNotFoundError: If the task no longer offers a cancel action
        """
        link = next((link for link in task.links if link.rel == REL_TASK_CANCEL), None)
        if link is None:
            raise LinkNotFoundError(f"task {task.name or task.href} does not have a link: rel={REL_TASK_CANCEL}")
        self._send("POST", link.href, "cancel task")
        logging.info("Requested cancellation of task %s", task.name or task.href)

    def execute_request(
        self, method: str, href: str, body: Optional[str] = None, content_type: Optional[str] = None
    ) -> Task:
        """
        Submit a request whose response body is a ``<Task>``.

        Returns:
            The submitted task
        """
        element = self._send(method, href, f"{method} {href}", body=body, content_type=content_type)
        if element is None:
            raise ValueError(f"Expected a task in the response to {method} {href}")
        return Task.from_xml(element)


__all__ = ["TaskManagerMixin"]
