"""
Session authentication for the vCloud Director API.

vCD issues a session token from a login request made with HTTP basic
credentials (``user@org``). The token travels in the
``x-vcloud-authorization`` header of every later request.
"""

# Standard library imports
import logging
import os
import traceback
from typing import Generator, Optional

# Third-party imports
import httpx

# Local imports
from ..errors import AuthenticationError
from ..models.vcd_api import Session, SupportedVersions
from ..utils.constants import (
    AUTH_HEADER,
    DEFAULT_API_VERSION,
    DEFAULT_CONNECT_TIMEOUT,
    HTTP_STATUS_UNAUTHORIZED,
    MIME_ORG,
    MIME_QUERY_LIST,
    REL_DOWN,
    REL_REMOVE,
)
from ..utils.response_utils import parse_error_body
from ..utils.session import create_session_with_retry, version_accept_header
from ..utils.xml_utils import parse_xml

# Timeout for the two bootstrap requests (seconds)
LOGIN_TIMEOUT = 30


def _login_timeout() -> httpx.Timeout:
    return httpx.Timeout(LOGIN_TIMEOUT, connect=DEFAULT_CONNECT_TIMEOUT)


class VcdSessionAuth(httpx.Auth):
    """
    Login bootstrapping and token injection for vCD.

    The first request through this auth logs in:

    1. ``GET <endpoint>/versions`` to find the LoginUrl of the API version
    2. ``POST <LoginUrl>`` with basic auth ``user@org``
    3. keep the ``x-vcloud-authorization`` header and the session links

    A 401 on any later request triggers one fresh login and one replay.
    """

    def __init__(
        self,
        endpoint: str,
        user: Optional[str],
        password: Optional[str],
        org: Optional[str],
        api_version: str = DEFAULT_API_VERSION,
        insecure: bool = False,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize vCD session authentication.

        Args:
            endpoint: API endpoint (e.g., "https://vcd.example.com/api")
            user: Login name; falls back to VCLOUD_USERNAME
            password: Login password; falls back to VCLOUD_PASSWORD
            org: Organization name; falls back to VCLOUD_ORG
            api_version: vCloud API version
            insecure: Skip TLS verification for the login requests
            client: HTTP client for the login requests; the client shared with
                the API calls, so both use the same proxies and TLS settings
        """
        self._endpoint = endpoint.rstrip("/")
        self._user = user or os.environ.get("VCLOUD_USERNAME", "")
        self._password = password or os.environ.get("VCLOUD_PASSWORD", "")
        self._org = org or os.environ.get("VCLOUD_ORG", "")
        self._api_version = api_version
        self._client = client or create_session_with_retry(insecure=insecure, api_version=api_version)

        self._token: Optional[str] = None
        self._session: Optional[Session] = None
        self.org_href: Optional[str] = None
        self.query_href: Optional[str] = None
        self.logout_href: Optional[str] = None

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        """
        Execute the authentication flow for a request.

        Logs in when there is no token yet, sets the token header and
        retries once with a fresh session on 401.
        """
        if self._token is None:
            self.login()

        request.headers[AUTH_HEADER] = self._token or ""

        response = yield request

        if response.status_code == HTTP_STATUS_UNAUTHORIZED:
            logging.debug("Received 401, session expired; logging in again")
            self.login()
            request.headers[AUTH_HEADER] = self._token or ""
            yield request

    def _login_url(self) -> str:
        url = f"{self._endpoint}/versions"
        response = self._client.get(url, timeout=_login_timeout())
        if not response.is_success:
            message, _, _ = parse_error_body(response)
            raise AuthenticationError(f"error finding LoginUrl: {response.status_code} - {message}")

        versions = SupportedVersions.from_xml(parse_xml(response.text, "decode versions response"))
        login_url = versions.login_url_for(self._api_version)
        if not login_url:
            raise AuthenticationError("couldn't find a LoginUrl in versions")
        return login_url

    def login(self) -> Session:
        """
        Log in and store the session token and links.

        Raises:
            AuthenticationError: If the endpoint refuses the credentials or
                the session does not expose the org, query or logout links
        """
        try:
            login_url = self._login_url()
            logging.debug("Logging in to %s as %s@%s", login_url, self._user, self._org)
            response = self._client.post(
                login_url,
                auth=(f"{self._user}@{self._org}", self._password),
                headers=version_accept_header(self._api_version),
                timeout=_login_timeout(),
            )
        except httpx.HTTPError as e:
            logging.error("Failed to log in to vCD: %s", e)
            logging.debug("Traceback: %s", traceback.format_exc())
            raise

        if not response.is_success:
            message, _, _ = parse_error_body(response)
            raise AuthenticationError(
                f"error authorizing {self._user}@{self._org}: {response.status_code} - {message}"
            )

        token = response.headers.get(AUTH_HEADER)
        if not token:
            raise AuthenticationError(f"login response has no {AUTH_HEADER} header")

        session = Session.from_xml(parse_xml(response.text, "decode session response"))

        org_link = session.find_link(MIME_ORG, REL_DOWN, name=self._org)
        if org_link is None:
            raise AuthenticationError(
                f"cannot find a Org endpoint: name={self._org} type={MIME_ORG}, rel={REL_DOWN}"
            )
        query_link = session.find_link(MIME_QUERY_LIST, REL_DOWN)
        if query_link is None:
            raise AuthenticationError(f"cannot find a Query endpoint: type={MIME_QUERY_LIST}, rel={REL_DOWN}")
        logout_link = session.find_link(None, REL_REMOVE)
        if logout_link is None:
            raise AuthenticationError(f"cannot find a LogOut endpoint: rel={REL_REMOVE}")

        self._token = token
        self._session = session
        self.org_href = org_link.href
        self.query_href = query_link.href
        self.logout_href = logout_link.href
        logging.info("Logged in to vCD org %s as %s", self._org, self._user)
        return session

    def reset(self) -> None:
        """Forget the session; the next request logs in again."""
        self._token = None
        self._session = None
        self.org_href = None
        self.query_href = None
        self.logout_href = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    @property
    def token(self) -> Optional[str]:
        """Get the current session token (for debugging/inspection)."""
        return self._token

    @property
    def session_info(self) -> Optional[Session]:
        return self._session

    @property
    def org_name(self) -> str:
        return self._org


__all__ = ["VcdSessionAuth"]
