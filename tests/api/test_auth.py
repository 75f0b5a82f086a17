"""
Tests for vCD session authentication.

This module contains tests for VcdSessionAuth: login bootstrapping, token
injection and re-login on 401.
"""

import base64

import httpx
import pytest

from vcd_tool.api import VcdSessionAuth
from vcd_tool.errors import AuthenticationError

BASE_URL = "https://vcd.example.com/api"
LOGIN_URL = f"{BASE_URL}/sessions/27.0"


@pytest.fixture
def auth():
    return VcdSessionAuth(BASE_URL, "admin", "secret", "test-org")


@pytest.fixture
def login_routes(httpx_mock, versions_xml, session_xml):
    """Mock the versions and login endpoints; returns the login route."""
    httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml(("5.6", "27.0"))))
    return httpx_mock.post(LOGIN_URL).mock(
        return_value=httpx.Response(200, text=session_xml(), headers={"x-vcloud-authorization": "token-1"})
    )


class TestVcdSessionAuth:
    """Test VcdSessionAuth class."""

    def test_init(self, auth):
        """Test VcdSessionAuth initialization."""
        assert auth._endpoint == BASE_URL
        assert auth._user == "admin"
        assert auth._org == "test-org"
        assert auth.token is None
        assert not auth.is_authenticated

    def test_init_from_environment(self, monkeypatch):
        """Test that missing credentials come from the environment."""
        monkeypatch.setenv("VCLOUD_USERNAME", "env-user")
        monkeypatch.setenv("VCLOUD_PASSWORD", "env-password")
        monkeypatch.setenv("VCLOUD_ORG", "env-org")

        auth = VcdSessionAuth(f"{BASE_URL}/", None, None, None)

        assert auth._endpoint == BASE_URL
        assert auth._user == "env-user"
        assert auth._password == "env-password"
        assert auth.org_name == "env-org"

    def test_login(self, auth, login_routes):
        """Test the login exchange stores the token and session links."""
        session = auth.login()

        assert auth.token == "token-1"
        assert auth.is_authenticated
        assert auth.org_href == f"{BASE_URL}/org/org-1"
        assert auth.query_href == f"{BASE_URL}/query"
        assert auth.logout_href == f"{BASE_URL}/session"
        assert session.user == "admin"
        assert auth.session_info is session

        request = login_routes.calls.last.request
        expected = base64.b64encode(b"admin@test-org:secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.headers["Accept"] == "application/*+xml;version=27.0"

    def test_login_falls_back_to_last_version(self, httpx_mock, versions_xml, session_xml):
        """Test that an unlisted API version uses the last LoginUrl."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml(("5.6", "9.0"))))
        route = httpx_mock.post(f"{BASE_URL}/sessions/9.0").mock(
            return_value=httpx.Response(200, text=session_xml(), headers={"x-vcloud-authorization": "token-9"})
        )

        VcdSessionAuth(BASE_URL, "admin", "secret", "test-org", api_version="31.0").login()

        assert route.called

    def test_login_goes_through_given_client(self, login_routes, mocker):
        """Test that login uses the client handed in, not a client of its own."""
        client = httpx.Client()
        get = mocker.spy(client, "get")
        post = mocker.spy(client, "post")

        VcdSessionAuth(BASE_URL, "admin", "secret", "test-org", client=client).login()

        assert get.call_args.args[0] == f"{BASE_URL}/versions"
        assert post.call_args.args[0] == LOGIN_URL
        client.close()

    def test_login_rejected(self, auth, httpx_mock, versions_xml, error_xml):
        """Test that refused credentials raise AuthenticationError."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml()))
        httpx_mock.post(LOGIN_URL).mock(return_value=httpx.Response(401, text=error_xml("Bad credentials", 401)))

        with pytest.raises(AuthenticationError, match="error authorizing admin@test-org: 401 - Bad credentials"):
            auth.login()
        assert not auth.is_authenticated

    def test_login_without_token_header(self, auth, httpx_mock, versions_xml, session_xml):
        """Test that a login response without a token is rejected."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml()))
        httpx_mock.post(LOGIN_URL).mock(return_value=httpx.Response(200, text=session_xml()))

        with pytest.raises(AuthenticationError, match="x-vcloud-authorization"):
            auth.login()

    def test_login_org_not_in_session(self, httpx_mock, versions_xml, session_xml):
        """Test that a session without the named org link is rejected."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml()))
        httpx_mock.post(LOGIN_URL).mock(
            return_value=httpx.Response(
                200, text=session_xml(org="other-org"), headers={"x-vcloud-authorization": "token-1"}
            )
        )

        with pytest.raises(AuthenticationError, match="cannot find a Org endpoint"):
            VcdSessionAuth(BASE_URL, "admin", "secret", "test-org").login()

    def test_versions_unavailable(self, auth, httpx_mock):
        """Test that a failing versions endpoint raises AuthenticationError."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(503, text="down"))

        with pytest.raises(AuthenticationError, match="error finding LoginUrl"):
            auth.login()

    def test_no_versions_listed(self, auth, httpx_mock, versions_xml):
        """Test that an empty versions list raises AuthenticationError."""
        httpx_mock.get(f"{BASE_URL}/versions").mock(return_value=httpx.Response(200, text=versions_xml(())))

        with pytest.raises(AuthenticationError, match="couldn't find a LoginUrl"):
            auth.login()

    def test_reset(self, auth, login_routes):
        """Test that reset forgets the session."""
        auth.login()
        auth.reset()

        assert auth.token is None
        assert auth.org_href is None
        assert auth.logout_href is None


class TestAuthFlow:
    """Test the httpx auth flow."""

    def test_auth_flow_without_token(self, auth, login_routes):
        """Test that the first request logs in and carries the token."""
        request = httpx.Request("GET", f"{BASE_URL}/org/org-1")

        flow = auth.auth_flow(request)
        authenticated_request = next(flow)

        assert authenticated_request.headers["x-vcloud-authorization"] == "token-1"
        assert login_routes.call_count == 1

    def test_auth_flow_with_token(self, auth, login_routes):
        """Test that an existing token is reused without logging in."""
        auth._token = "existing-token"
        request = httpx.Request("GET", f"{BASE_URL}/org/org-1")

        authenticated_request = next(auth.auth_flow(request))

        assert authenticated_request.headers["x-vcloud-authorization"] == "existing-token"
        assert login_routes.call_count == 0

    def test_auth_flow_relogin_on_401(self, auth, login_routes):
        """Test that a 401 triggers one re-login and one replay."""
        auth._token = "expired-token"
        request = httpx.Request("GET", f"{BASE_URL}/org/org-1")

        flow = auth.auth_flow(request)
        next(flow)
        retried = flow.send(httpx.Response(401, request=request))

        assert retried.headers["x-vcloud-authorization"] == "token-1"
        assert login_routes.call_count == 1
        with pytest.raises(StopIteration):
            flow.send(httpx.Response(401, request=request))

    def test_auth_flow_success_no_relogin(self, auth, login_routes):
        """Test that successful responses end the flow."""
        auth._token = "valid-token"
        request = httpx.Request("GET", f"{BASE_URL}/org/org-1")

        flow = auth.auth_flow(request)
        next(flow)

        with pytest.raises(StopIteration):
            flow.send(httpx.Response(200, request=request))
        assert login_routes.call_count == 0
