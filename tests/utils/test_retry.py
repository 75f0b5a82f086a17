"""
Tests for the bounded retry policy.

Time is faked through the ``fake_clock`` fixture: sleeping advances the
monotonic clock, so budgets are exercised without waiting.
"""

from unittest.mock import Mock

import pytest

from vcd_tool.errors import TaskError, VcdApiError
from vcd_tool.utils.retry import (
    NonRetryableError,
    RetryableError,
    RetryPolicy,
    RetryTimeoutError,
    busy_retry_policy,
    is_busy_error,
    retry_call,
)


def busy_error() -> VcdApiError:
    return VcdApiError(400, "The entity network1 is busy, cannot proceed with the operation.")


class TestRetryPolicy:
    """Test RetryPolicy classification."""

    def test_defaults(self):
        """Test the default interval and predicate."""
        policy = RetryPolicy(timeout=30)
        assert policy.timeout == 30
        assert policy.interval == 1.0
        assert policy.predicate is None

    def test_wrapped_errors(self):
        """Test that wrapper types decide regardless of the predicate."""
        policy = RetryPolicy(timeout=30, predicate=lambda e: False)
        assert policy.is_retryable(RetryableError(ValueError("x"))) is True

        policy = RetryPolicy(timeout=30, predicate=lambda e: True)
        assert policy.is_retryable(NonRetryableError(ValueError("x"))) is False

    def test_raw_error_without_predicate_is_fatal(self):
        """Test that unclassified errors are not retried without a predicate."""
        assert RetryPolicy(timeout=30).is_retryable(ValueError("boom")) is False

    def test_raw_error_uses_predicate(self):
        """Test that unclassified errors are classified by the predicate."""
        policy = RetryPolicy(timeout=30, predicate=lambda e: isinstance(e, KeyError))
        assert policy.is_retryable(KeyError("k")) is True
        assert policy.is_retryable(ValueError("v")) is False

    def test_policy_is_immutable(self):
        """Test that a policy cannot be changed after creation."""
        policy = RetryPolicy(timeout=30)
        with pytest.raises(AttributeError):
            policy.timeout = 10  # type: ignore[misc]


class TestBusyErrors:
    """Test the "object is busy" predicate and policy."""

    def test_is_busy_error(self):
        """Test matching of busy API errors."""
        assert is_busy_error(busy_error()) is True
        assert is_busy_error(VcdApiError(400, "Validation error")) is False
        assert is_busy_error(ValueError("is busy, cannot proceed")) is False

    def test_busy_retry_policy(self):
        """Test the busy policy retries busy errors every three seconds."""
        policy = busy_retry_policy(45)
        assert policy.timeout == 45
        assert policy.interval == 3.0
        assert policy.is_retryable(busy_error()) is True
        assert policy.is_retryable(VcdApiError(500, "Internal error")) is False


class TestRetryCall:
    """Test retry_call."""

    def test_returns_first_success(self, fake_clock):
        """Test that a successful first attempt returns without sleeping."""
        func = Mock(return_value="done")

        assert retry_call(func, RetryPolicy(timeout=10)) == "done"
        func.assert_called_once()
        assert fake_clock.sleeps == []

    def test_retries_until_success(self, fake_clock):
        """Test that retryable failures are retried at the fixed interval."""
        func = Mock(side_effect=[RetryableError(ValueError("1")), RetryableError(ValueError("2")), "done"])

        assert retry_call(func, RetryPolicy(timeout=10, interval=2)) == "done"
        assert func.call_count == 3
        assert fake_clock.sleeps == [2, 2]

    def test_non_retryable_stops_immediately(self, fake_clock):
        """Test that a non-retryable failure is never followed by another call."""
        cause = ValueError("fatal")
        func = Mock(side_effect=[RetryableError(ValueError("transient")), NonRetryableError(cause), "never"])

        with pytest.raises(ValueError) as exc_info:
            retry_call(func, RetryPolicy(timeout=10))

        assert exc_info.value is cause
        assert func.call_count == 2

    def test_unclassified_error_propagates(self, fake_clock):
        """Test that errors rejected by the predicate propagate unchanged."""
        func = Mock(side_effect=KeyError("missing"))

        with pytest.raises(KeyError):
            retry_call(func, RetryPolicy(timeout=10))

        func.assert_called_once()
        assert fake_clock.sleeps == []

    def test_budget_exhausted(self, fake_clock):
        """Test that attempts stop once the budget is spent and the last error surfaces."""
        errors = [RetryableError(ValueError(f"attempt {i}")) for i in range(1, 20)]
        func = Mock(side_effect=errors)

        with pytest.raises(RetryTimeoutError) as exc_info:
            retry_call(func, RetryPolicy(timeout=5, interval=1))

        # attempts at t=0,1,2,3,4,5; the failure observed at t=5 ends the loop
        assert func.call_count == 6
        assert str(exc_info.value.last_error) == "attempt 6"
        assert exc_info.value.__cause__ is exc_info.value.last_error
        assert exc_info.value.attempts == 6
        assert exc_info.value.elapsed == pytest.approx(5)

    def test_last_sleep_is_capped_by_budget(self, fake_clock):
        """Test that the wait never runs past the budget."""
        func = Mock(side_effect=[RetryableError(ValueError("x"))] * 5)

        with pytest.raises(RetryTimeoutError):
            retry_call(func, RetryPolicy(timeout=5, interval=3))

        assert fake_clock.sleeps == [3, 2]
        assert func.call_count == 3

    def test_zero_budget_single_attempt(self, fake_clock):
        """Test that a zero budget allows exactly one attempt."""
        func = Mock(side_effect=RetryableError(ValueError("x")))

        with pytest.raises(RetryTimeoutError):
            retry_call(func, RetryPolicy(timeout=0))

        func.assert_called_once()

    def test_busy_errors_retried_with_predicate(self, fake_clock):
        """Test that raw busy errors are retried by the busy policy."""
        func = Mock(side_effect=[busy_error(), busy_error(), "created"])

        assert retry_call(func, busy_retry_policy(30)) == "created"
        assert fake_clock.sleeps == [3.0, 3.0]

    def test_task_failure_pattern(self, fake_clock):
        """Test the submit/wait classification used by the resource handlers."""
        outcomes = [TaskError("createDisk", "quota exceeded", "error"), None]

        def attempt():
            outcome = outcomes.pop(0)
            if outcome is not None:
                raise RetryableError(outcome)
            return "task-done"

        assert retry_call(attempt, RetryPolicy(timeout=10)) == "task-done"
        assert fake_clock.sleeps == [1.0]
