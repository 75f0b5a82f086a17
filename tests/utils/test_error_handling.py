"""Tests for error handling utilities."""

import logging

import httpx
import pytest

from vcd_tool.errors import TaskError, VcdApiError
from vcd_tool.utils.error_handling import handle_generic_error, handle_http_error, with_error_handling


def status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://vcd.example.com/api/org")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"{status} error", request=request, response=response)


class TestHandleHttpError:
    """Tests for handle_http_error function."""

    def test_handle_403_error(self, caplog):
        """Test handling 403 Forbidden error."""
        handle_http_error(VcdApiError(403, "Access denied"), "test operation", log_traceback=False)

        assert "Authorization failed" in caplog.text
        assert "rights" in caplog.text

    def test_handle_401_error(self, caplog):
        """Test handling 401 Unauthorized error."""
        handle_http_error(status_error(401), "test operation", log_traceback=False)

        assert "Authentication failed" in caplog.text
        assert "Invalid credentials" in caplog.text

    def test_handle_404_error(self, caplog):
        """Test handling 404 Not Found error."""
        handle_http_error(VcdApiError(404, "No such object"), "test operation", log_traceback=False)

        assert "Resource not found" in caplog.text

    def test_handle_500_error(self, caplog):
        """Test handling 500 Server Error."""
        handle_http_error(status_error(500), "test operation", log_traceback=False)

        assert "Server error" in caplog.text

    def test_handle_transport_error(self, caplog):
        """Test handling an error without a status code."""
        handle_http_error(httpx.ConnectError("connection refused"), "test operation", log_traceback=False)

        assert "HTTP error during test operation" in caplog.text

    def test_logs_vcd_error_codes(self, caplog):
        """Test that vCD error codes are logged at debug level."""
        caplog.set_level(logging.DEBUG)
        error = VcdApiError(400, "Bad request", major_error_code=400, minor_error_code="BAD_REQUEST")

        handle_http_error(error, "test operation", log_traceback=False)

        assert "minor=BAD_REQUEST" in caplog.text


class TestHandleGenericError:
    """Tests for handle_generic_error function."""

    def test_handle_generic_error(self, caplog):
        """Test handling a non-HTTP error."""
        handle_generic_error(TaskError("createDisk", "quota exceeded", "error"), "create disk", log_traceback=False)

        assert "Error during create disk" in caplog.text
        assert "did not complete successfully" in caplog.text

    def test_delegates_http_errors(self, caplog):
        """Test that HTTP errors get the status-specific messages."""
        handle_generic_error(VcdApiError(404, "gone"), "read disk", log_traceback=False)

        assert "Resource not found during read disk" in caplog.text


class TestWithErrorHandling:
    """Tests for with_error_handling decorator."""

    def test_success(self):
        """Test that return values pass through."""

        @with_error_handling("test operation")
        def func():
            return "ok"

        assert func() == "ok"

    def test_reraise(self, caplog):
        """Test that errors are logged and re-raised by default."""

        @with_error_handling("test operation")
        def func():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            func()
        assert "Error during test operation" in caplog.text

    def test_no_reraise(self):
        """Test that errors can be swallowed into a None result."""

        @with_error_handling("test operation", reraise=False)
        def func():
            raise VcdApiError(500, "boom")

        assert func() is None

    def test_exit_on_error(self):
        """Test that exit_on_error turns errors into SystemExit."""

        @with_error_handling("test operation", exit_on_error=True, exit_code=2)
        def func():
            raise VcdApiError(500, "boom")

        with pytest.raises(SystemExit) as exc_info:
            func()
        assert exc_info.value.code == 2
