"""
Bounded retry for operations against the vCD API.

A single ``RetryPolicy`` describes when a failure is worth another attempt
(a predicate over the raised error), how long to wait between attempts (a
fixed interval) and how long to keep trying overall (a time budget).

A unit of work can classify its own failure by raising ``RetryableError`` or
``NonRetryableError``; anything else it raises is classified by the policy's
predicate, and is fatal when there is none.

Example:
    >>> policy = RetryPolicy(timeout=60)
    >>> def attempt():
    ...     try:
    ...         task = client.create_disk(params)
    ...     except httpx.HTTPError as e:
    ...         raise NonRetryableError(e) from e
    ...     try:
    ...         return client.wait_task_completion(task)
    ...     except TaskError as e:
    ...         raise RetryableError(e) from e
    >>> retry_call(attempt, policy)
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..errors import VcdApiError, VcdError
from .constants import BUSY_ERROR_MESSAGE, BUSY_RETRY_INTERVAL, DEFAULT_RETRY_INTERVAL

T = TypeVar("T")


class RetryableError(Exception):
    """Raised by a unit of work whose failure may go away on another attempt."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause


class NonRetryableError(Exception):
    """Raised by a unit of work whose failure is final."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause


class RetryTimeoutError(VcdError):
    """The retry budget ran out; ``last_error`` is the most recent failure."""

    def __init__(self, last_error: BaseException, elapsed: float, attempts: int) -> None:
        self.last_error = last_error
        self.elapsed = elapsed
        self.attempts = attempts
        super().__init__(f"timeout after {elapsed:.1f}s and {attempts} attempt(s): {last_error}")


@dataclass(frozen=True)
class RetryPolicy:
    """
    When and for how long to retry.

    Attributes:
        timeout: Cumulative elapsed-time budget in seconds
        interval: Fixed delay between attempts in seconds
        predicate: Classifies errors the unit of work did not wrap itself
    """

    timeout: float
    interval: float = DEFAULT_RETRY_INTERVAL
    predicate: Optional[Callable[[BaseException], bool]] = None

    def is_retryable(self, error: BaseException) -> bool:
        """Return True if ``error`` should lead to another attempt."""
        if isinstance(error, RetryableError):
            return True
        if isinstance(error, NonRetryableError):
            return False
        if self.predicate is None:
            return False
        return self.predicate(error)


def is_busy_error(error: BaseException) -> bool:
    """Match API errors reporting that the target object is locked by another task."""
    return isinstance(error, VcdApiError) and BUSY_ERROR_MESSAGE in str(error)


def busy_retry_policy(timeout: float) -> RetryPolicy:
    """Policy that retries "is busy" API errors every few seconds within ``timeout``."""
    return RetryPolicy(timeout=timeout, interval=BUSY_RETRY_INTERVAL, predicate=is_busy_error)


def retry_call(func: Callable[[], T], policy: RetryPolicy) -> T:
    """
    Call ``func`` until it succeeds, fails for good, or the budget is spent.

    Args:
        func: Unit of work performing a single attempt
        policy: Retry policy to apply

    Returns:
        Whatever ``func`` returns on its first successful attempt

    Raises:
        RetryTimeoutError: If the budget ran out; chained from the last error
        Exception: The error of a non-retryable attempt, unwrapped from
            ``NonRetryableError`` when needed
    """
    start = time.monotonic()
    attempts = 0

    while True:
        attempts += 1
        try:
            return func()
        except Exception as error:  # pylint: disable=broad-except
            if not policy.is_retryable(error):
                if isinstance(error, NonRetryableError):
                    logging.debug("Attempt %d failed with a non-retryable error: %s", attempts, error.cause)
                    raise error.cause from None
                raise

            last_error = error.cause if isinstance(error, RetryableError) else error
            elapsed = time.monotonic() - start
            if elapsed >= policy.timeout:
                logging.warning(
                    "Giving up after %d attempt(s) in %.1fs (budget %.1fs): %s",
                    attempts,
                    elapsed,
                    policy.timeout,
                    last_error,
                )
                raise RetryTimeoutError(last_error, elapsed, attempts) from last_error

            delay = min(policy.interval, policy.timeout - elapsed)
            logging.info("Attempt %d failed, retrying in %.1fs: %s", attempts, delay, last_error)
            time.sleep(delay)


__all__ = [
    "RetryableError",
    "NonRetryableError",
    "RetryTimeoutError",
    "RetryPolicy",
    "is_busy_error",
    "busy_retry_policy",
    "retry_call",
]
