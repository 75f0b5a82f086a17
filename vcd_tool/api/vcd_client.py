"""
vCloud Director API client.

This module provides the main VcdClient class, which is composed using the
mixin pattern to provide specialized functionality:

Mixins:
    - TaskManagerMixin: Asynchronous task polling and submission
    - OrgManagerMixin: Org, admin org, catalog and VDC lookups
    - CatalogManagerMixin: Catalog lifecycle, catalog items and media transfer
    - VdcManagerMixin: Storage profiles, edge gateways and org VDC networks
    - DiskManagerMixin: Independent disk lifecycle
    - VAppManagerMixin: vApp composition, lookup and teardown
    - QueryMixin: Typed queries

Key Features:
    - Session login with automatic re-login on 401
    - XML bodies decoded into Pydantic models
    - One authenticated session shared by every resource handler
    - Proper resource cleanup with context managers
"""

# Standard library imports
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, Union

# Third-party imports
import httpx

# Local imports
from ..errors import AuthenticationError
from ..models.config import VcdConfig
from ..models.vcd_api import Org, Vdc
from ..utils.config_manager import ConfigManager
from ..utils.constants import AUTH_HEADER, DEFAULT_TIMEOUT, HTTP_STATUS_SERVER_ERROR
from ..utils.response_utils import raise_for_vcd_error
from ..utils.session import create_session_with_retry
from ..utils.xml_utils import parse_xml
from .auth import VcdSessionAuth
from .catalog_manager import CatalogManagerMixin
from .disk_manager import DiskManagerMixin
from .org_manager import OrgManagerMixin
from .query import QueryMixin
from .task_manager import TaskManagerMixin
from .vapp_manager import VAppManagerMixin
from .vdc_manager import VdcManagerMixin

# Headers never written to logs
SENSITIVE_HEADERS = ("authorization", "cookie", AUTH_HEADER)


# ============================================================================
# Performance Metrics
# ============================================================================


class PerformanceMetrics:
    """Track API performance metrics."""

    def __init__(self) -> None:
        """Initialize metrics tracker."""
        self.total_requests = 0
        self.failed_requests = 0
        self.task_polls = 0

    def log_request(self, failed: bool = False) -> None:
        """Log an API request."""
        self.total_requests += 1
        if failed:
            self.failed_requests += 1

    def log_task_poll(self) -> None:
        """Log a task poll."""
        self.task_polls += 1

    def get_summary(self) -> Dict[str, Any]:
        """
        Get metrics summary.

        Returns:
            Dictionary with metrics summary
        """
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
            "task_polls": self.task_polls,
        }

    def log_summary(self) -> None:
        """Log metrics summary."""
        summary = self.get_summary()
        logging.info("=== API Performance Metrics ===")
        logging.info("Total requests: %d", summary["total_requests"])
        logging.info("Failed requests: %d", summary["failed_requests"])
        logging.info("Task polls: %d", summary["task_polls"])


# ============================================================================
# Main Client Class
# ============================================================================


class VcdClient(
    TaskManagerMixin,
    OrgManagerMixin,
    CatalogManagerMixin,
    VdcManagerMixin,
    DiskManagerMixin,
    VAppManagerMixin,
    QueryMixin,
):
    """
    A client for interacting with the vCloud Director API.

    API documentation:
    - vCloud API Programming Guide for Service Providers

    Objects are addressed by href. Navigation follows the ``<Link>``
    elements of each object, matched by type, relation and name; request
    and response bodies are vCD XML documents.
    """

    def __init__(self, config: VcdConfig) -> None:
        """Initialize the vCD client.

        Args:
            config: Validated connection settings
        """
        self.config = config
        self.timeout = DEFAULT_TIMEOUT
        self.max_retry_timeout: float = config.max_retry_timeout
        self.session = create_session_with_retry(insecure=config.insecure, api_version=config.api_version)
        self._auth = VcdSessionAuth(
            config.url,
            config.user,
            config.password,
            config.org,
            api_version=config.api_version,
            insecure=config.insecure,
            client=self.session,
        )
        self.org: Optional[Org] = None
        self.vdc: Optional[Vdc] = None
        self._metrics = PerformanceMetrics()
        logging.debug("VcdClient initialized for %s (org %s)", config.url, config.org)

    @classmethod
    def create_from_config_file(cls, path: Optional[str] = None, **overrides: Any) -> "VcdClient":
        """
        Create a client from the ``[vcd]`` section of a TOML config file.

        Environment variables fill keys the file leaves out; ``overrides``
        that are not None win over both.
        """
        settings = ConfigManager(path).connection_settings()
        settings.update({key: value for key, value in overrides.items() if value is not None})
        return cls(VcdConfig(**settings))

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self._auth.is_authenticated

    def authenticate(self) -> None:
        """Log in to vCD (see VcdSessionAuth.login)."""
        self._auth.login()

    def connect(self) -> "VcdClient":
        """
        Log in, fetch the org and, when configured, the VDC.

        Raises:
            AuthenticationError: If login fails
            ObjectNotFoundError: If the configured VDC does not exist
        """
        self.authenticate()
        self.get_org()
        if self.config.vdc:
            self.vdc = self.find_vdc(self.config.vdc)
        return self

    def disconnect(self) -> None:
        """
        Log out, ending the session on the server.

        Raises:
            AuthenticationError: If the client is not logged in
        """
        if not self._auth.is_authenticated or not self._auth.logout_href:
            raise AuthenticationError("cannot disconnect, client is not authenticated")
        self._request("DELETE", self._auth.logout_href, "log out")
        self._auth.reset()
        logging.info("Logged out of vCD")

    def close(self) -> None:
        """Close the session and release all connections."""
        if hasattr(self, "session") and self.session:
            self.session.close()
            logging.debug("VcdClient session closed and connections released")
        # Log performance metrics summary
        if hasattr(self, "_metrics"):
            self._metrics.log_summary()

    def __enter__(self) -> "VcdClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        """Context manager exit - logs out when logged in and closes the session."""
        try:
            if self.is_authenticated:
                self.disconnect()
        except httpx.HTTPError as e:
            logging.warning("Failed to log out cleanly: %s", e)
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    @property
    def request_params(self) -> Dict[str, Any]:
        """
        Get default parameters for requests.

        Returns:
            Dictionary containing the session authentication
        """
        return {"auth": self._auth}

    def _current_vdc(self, vdc: Optional[Vdc] = None) -> Vdc:
        """
        Return ``vdc``, or the configured VDC (looked up on first use).

        Raises:
            ValueError: If no VDC was given and none is configured
        """
        if vdc is not None:
            return vdc
        if self.vdc is None:
            if not self.config.vdc:
                raise ValueError("No VDC configured; set vdc in the [vcd] config section or VCD_VDC")
            self.vdc = self.find_vdc(self.config.vdc)
        return self.vdc

    def _request(
        self,
        method: str,
        href: str,
        operation: str,
        *,
        content: Optional[Union[str, bytes]] = None,
        content_type: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> httpx.Response:
        """Send an authenticated request and check the response."""
        headers = {"Content-Type": content_type} if content_type else None
        logging.debug("%s %s", method, href)
        response = self.session.request(
            method,
            href,
            content=content,
            headers=headers,
            params=params,
            timeout=self.timeout,
            **self.request_params,
        )
        self._metrics.log_request(failed=not response.is_success)
        self._check_response(response, operation)
        return response

    def _get_element(self, href: str, operation: str, params: Optional[dict] = None) -> ET.Element:
        """GET an XML document."""
        response = self._request("GET", href, operation, params=params)
        return parse_xml(response.text, operation)

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
        response = self._request(method, href, operation, content=body, content_type=content_type, params=params)
        if not response.text.strip():
            return None
        return parse_xml(response.text, operation)

    # ------------------------------------------------------------------
    # Response checking
    # ------------------------------------------------------------------

    def _log_request_headers(self, response: httpx.Response) -> None:
        """Log request headers with sensitive data redacted."""
        if response.request and response.request.headers:
            safe_headers = dict(response.request.headers)
            for sensitive_key in SENSITIVE_HEADERS:
                if sensitive_key in safe_headers:
                    safe_headers[sensitive_key] = "[REDACTED]"
            logging.error("  Request Headers: %s", safe_headers)

    def _log_server_error(self, response: httpx.Response, operation: str) -> None:
        """Log detailed information for server errors (5xx)."""
        logging.error("=" * 80)
        logging.error("SERVER ERROR (%d) during %s", response.status_code, operation)
        logging.error("=" * 80)

        logging.error("REQUEST DETAILS:")
        logging.error("  Method: %s", response.request.method if response.request else "Unknown")
        logging.error("  URL: %s", response.url)
        self._log_request_headers(response)

        logging.error("RESPONSE DETAILS:")
        logging.error("  Status Code: %s", response.status_code)
        if len(response.text) > 500:
            logging.error("  Response Body (truncated): %s...", response.text[:500])
        else:
            logging.error("  Response Body: %s", response.text)
        logging.error("=" * 80)

    def _check_response(self, response: httpx.Response, operation: str = "request") -> None:
        """Check if a response is successful, raise VcdApiError if not."""
        if response.is_success:
            return

        if response.status_code >= HTTP_STATUS_SERVER_ERROR:
            self._log_server_error(response, operation)
        else:
            logging.debug("Client error during %s: %s - %s", operation, response.status_code, response.text)

        raise_for_vcd_error(response, operation)

    def check_response(self, response: httpx.Response, operation: str = "request") -> None:
        """Public method to check if a response is successful, raise exception if not."""
        self._check_response(response, operation)


__all__ = ["VcdClient", "PerformanceMetrics"]
