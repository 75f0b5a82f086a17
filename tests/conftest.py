"""
Test fixtures and mock data for vcd-tool tests.

This module provides common fixtures, canned vCD XML documents, and
utilities for testing the vcd-tool package.

vCD documents are built by small factory fixtures (``task_xml``,
``disk_xml``, ...) so that each test states only the attributes it cares
about. HTTP traffic is mocked with respx through the ``httpx_mock`` fixture.
"""

from typing import Iterable, List, Optional, Tuple
from unittest.mock import patch

import pytest
import respx

from vcd_tool.utils.constants import (
    MIME_ADMIN_CATALOG,
    MIME_ADMIN_ORG,
    MIME_CATALOG,
    MIME_COMPOSE_VAPP_PARAMS,
    MIME_DISK,
    MIME_DISK_CREATE_PARAMS,
    MIME_ORG,
    MIME_ORG_VDC_NETWORK,
    MIME_QUERY_LIST,
    MIME_QUERY_RECORDS,
    MIME_TASK,
    MIME_VAPP,
    MIME_VDC,
    MIME_VMS,
)

BASE_URL = "https://vcd.example.com/api"
VCLOUD_NS = 'xmlns="http://www.vmware.com/vcloud/v1.5"'

ORG_HREF = f"{BASE_URL}/org/org-1"
ADMIN_ORG_HREF = f"{BASE_URL}/admin/org/org-1"
VDC_HREF = f"{BASE_URL}/vdc/vdc-1"
QUERY_HREF = f"{BASE_URL}/query"
LOGOUT_HREF = f"{BASE_URL}/session"
TASK_HREF = f"{BASE_URL}/task/task-1"


# ============================================================================
# Time
# ============================================================================


class FakeClock:
    """Monotonic clock that only moves when code sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Replace time.monotonic/time.sleep with a clock advanced by sleeping."""
    clock = FakeClock()
    with patch("time.monotonic", clock.monotonic), patch("time.sleep", clock.sleep):
        yield clock


# ============================================================================
# HTTP mocking and clients
# ============================================================================


PROXY_ENV_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "NO_PROXY")


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch):
    """Keep proxies from the calling shell out of the HTTP clients under test."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def mock_config():
    """Connection settings for a test org and VDC."""
    return {
        "url": BASE_URL,
        "user": "admin",
        "password": "secret",
        "org": "test-org",
        "vdc": "test-vdc",
        "api_version": "27.0",
        "max_retry_timeout": 10,
    }


@pytest.fixture
def vcd_config(mock_config):
    from vcd_tool.models import VcdConfig

    return VcdConfig(**mock_config)


@pytest.fixture
def vcd_client(vcd_config, httpx_mock):
    """VcdClient with a live session, so requests skip the login exchange."""
    from vcd_tool.api import VcdClient

    client = VcdClient(vcd_config)
    client._auth._token = "mock-token"
    client._auth.org_href = ORG_HREF
    client._auth.query_href = QUERY_HREF
    client._auth.logout_href = LOGOUT_HREF
    yield client
    client.session.close()


@pytest.fixture
def temp_config_file(tmp_path):
    """TOML config file with a complete [vcd] section."""
    config_path = tmp_path / "cli.toml"
    config_path.write_text(
        "[vcd]\n"
        f'url = "{BASE_URL}"\n'
        'user = "admin"\n'
        'password = "secret"\n'
        'org = "test-org"\n'
        'vdc = "test-vdc"\n'
        "max_retry_timeout = 10\n"
    )
    return str(config_path)


# ============================================================================
# vCD XML documents
# ============================================================================


def _attrs(**attributes: Optional[str]) -> str:
    return " ".join(f'{key}="{value}"' for key, value in attributes.items() if value is not None)


def _links(links: Iterable[Tuple[str, str, Optional[str], Optional[str]]]) -> str:
    """Render ``(rel, href, type, name)`` tuples as ``<Link>`` elements."""
    return "".join(f"<Link {_attrs(rel=rel, href=href, type=type_, name=name)}/>" for rel, href, type_, name in links)


def build_task_xml(
    status: str = "success",
    href: str = TASK_HREF,
    name: str = "task",
    description: str = "",
    error_message: Optional[str] = None,
    root: bool = True,
) -> str:
    error = f'<Error message="{error_message}" majorErrorCode="500"/>' if error_message else ""
    namespace = f" {VCLOUD_NS}" if root else ""
    return (
        f'<Task{namespace} {_attrs(href=href, name=name, status=status, type=MIME_TASK, operationName=name)}>'
        f'<Link rel="task:cancel" href="{href}/action/cancel"/>'
        f"<Description>{description}</Description>{error}</Task>"
    )


def build_org_xml(catalogs: Iterable[str] = (), vdcs: Iterable[str] = ("test-vdc",)) -> str:
    links = [("alternate", ADMIN_ORG_HREF, MIME_ADMIN_ORG, None)]
    links += [("down", f"{BASE_URL}/catalog/{name}", MIME_CATALOG, name) for name in catalogs]
    links += [("down", VDC_HREF if name == "test-vdc" else f"{BASE_URL}/vdc/{name}", MIME_VDC, name) for name in vdcs]
    return f'<Org {VCLOUD_NS} href="{ORG_HREF}" name="test-org" type="{MIME_ORG}">{_links(links)}</Org>'


def build_admin_org_xml(catalogs: Iterable[str] = ()) -> str:
    references = "".join(
        f'<CatalogReference href="{BASE_URL}/admin/catalog/{name}" name="{name}" type="{MIME_ADMIN_CATALOG}"/>'
        for name in catalogs
    )
    links = _links([("add", f"{ADMIN_ORG_HREF}/catalogs", MIME_ADMIN_CATALOG, None)])
    return (
        f'<AdminOrg {VCLOUD_NS} href="{ADMIN_ORG_HREF}" name="test-org" type="{MIME_ADMIN_ORG}">'
        f"{links}<Catalogs>{references}</Catalogs></AdminOrg>"
    )


def build_catalog_xml(name: str, description: str = "", admin: bool = False, tasks: str = "") -> str:
    tag = "AdminCatalog" if admin else "Catalog"
    href = f"{BASE_URL}/admin/catalog/{name}" if admin else f"{BASE_URL}/catalog/{name}"
    links = _links([("remove", href, None, None), ("edit", href, MIME_ADMIN_CATALOG, None)])
    tasks_block = f"<Tasks>{tasks}</Tasks>" if tasks else ""
    return (
        f'<{tag} {VCLOUD_NS} href="{href}" name="{name}" id="urn:vcloud:catalog:{name}-id">'
        f"{links}<Description>{description}</Description>{tasks_block}<IsPublished>false</IsPublished></{tag}>"
    )


def build_vdc_xml(
    disks: Iterable[str] = (),
    vapps: Iterable[str] = (),
    networks: Iterable[str] = (),
    storage_profiles: Iterable[str] = ("gold",),
) -> str:
    entities = "".join(
        f'<ResourceEntity href="{BASE_URL}/disk/{name}" name="{name}" type="{MIME_DISK}"/>' for name in disks
    ) + "".join(f'<ResourceEntity href="{BASE_URL}/vApp/{name}" name="{name}" type="{MIME_VAPP}"/>' for name in vapps)
    available = "".join(
        f'<Network href="{BASE_URL}/network/{name}" name="{name}" type="{MIME_ORG_VDC_NETWORK}"/>' for name in networks
    )
    profiles = "".join(
        f'<VdcStorageProfile href="{BASE_URL}/vdcStorageProfile/{name}" name="{name}"/>' for name in storage_profiles
    )
    links = _links(
        [
            ("add", f"{VDC_HREF}/disk", MIME_DISK_CREATE_PARAMS, None),
            ("add", f"{VDC_HREF}/action/composeVApp", MIME_COMPOSE_VAPP_PARAMS, None),
            ("add", f"{BASE_URL}/admin/vdc/vdc-1/networks", MIME_ORG_VDC_NETWORK, None),
            ("edgeGateways", f"{BASE_URL}/admin/vdc/vdc-1/edgeGateways", MIME_QUERY_RECORDS, None),
        ]
    )
    return (
        f'<Vdc {VCLOUD_NS} href="{VDC_HREF}" name="test-vdc" type="{MIME_VDC}">{links}'
        f"<ResourceEntities>{entities}</ResourceEntities>"
        f"<AvailableNetworks>{available}</AvailableNetworks>"
        f"<VdcStorageProfiles>{profiles}</VdcStorageProfiles></Vdc>"
    )


def build_disk_xml(
    name: str = "data",
    size: int = 1073741824,
    storage_profile: Optional[str] = "gold",
    tasks: str = "",
    description: str = "",
) -> str:
    href = f"{BASE_URL}/disk/{name}"
    links = _links(
        [
            ("edit", href, MIME_DISK, None),
            ("remove", href, None, None),
            ("down", f"{href}/attachedVms", MIME_VMS, None),
        ]
    )
    profile = (
        f'<StorageProfile href="{BASE_URL}/vdcStorageProfile/{storage_profile}" name="{storage_profile}"/>'
        if storage_profile
        else ""
    )
    tasks_block = f"<Tasks>{tasks}</Tasks>" if tasks else ""
    return (
        f'<Disk {VCLOUD_NS} {_attrs(href=href, name=name, size=str(size), busType="6", busSubType="lsilogic")}'
        f' id="urn:vcloud:disk:{name}-id">{links}<Description>{description}</Description>{tasks_block}'
        f'{profile}<Owner><User href="{BASE_URL}/admin/user/u1" name="admin"/></Owner></Disk>'
    )


def build_network_xml(name: str = "net1", tasks: str = "") -> str:
    href = f"{BASE_URL}/network/{name}"
    tasks_block = f"<Tasks>{tasks}</Tasks>" if tasks else ""
    return (
        f'<OrgVdcNetwork {VCLOUD_NS} href="{href}" name="{name}" id="urn:vcloud:network:{name}-id">'
        f"<Description>test network</Description>{tasks_block}<Configuration><IpScopes><IpScope>"
        "<IsInherited>false</IsInherited><Gateway>10.0.0.1</Gateway><Netmask>255.255.255.0</Netmask>"
        "<Dns1>8.8.8.8</Dns1><IpRanges><IpRange><StartAddress>10.0.0.10</StartAddress>"
        "<EndAddress>10.0.0.20</EndAddress></IpRange></IpRanges></IpScope></IpScopes>"
        "<FenceMode>natRouted</FenceMode></Configuration>"
        f'<EdgeGateway href="{BASE_URL}/admin/edgeGateway/edge1" name="edge1"/>'
        "<IsShared>false</IsShared></OrgVdcNetwork>"
    )


def build_vapp_xml(
    name: str = "app1", deployed: bool = False, vms: Iterable[str] = (), tasks: str = "", status: int = 8
) -> str:
    href = f"{BASE_URL}/vApp/{name}"
    links = [("remove", href, None, None)]
    if deployed:
        links.append(("undeploy", f"{href}/action/undeploy", None, None))
    children = "".join(f'<Vm href="{BASE_URL}/vApp/vm-{vm}" name="{vm}" status="4" deployed="true"/>' for vm in vms)
    tasks_block = f"<Tasks>{tasks}</Tasks>" if tasks else ""
    return (
        f'<VApp {VCLOUD_NS} href="{href}" name="{name}" status="{status}" '
        f'deployed="{"true" if deployed else "false"}" type="{MIME_VAPP}">'
        f"{_links(links)}<Description>test vApp</Description>{tasks_block}<Children>{children}</Children></VApp>"
    )


def build_session_xml(org: str = "test-org") -> str:
    links = _links(
        [
            ("down", ORG_HREF, MIME_ORG, org),
            ("down", QUERY_HREF, MIME_QUERY_LIST, None),
            ("remove", LOGOUT_HREF, None, None),
        ]
    )
    return f'<Session {VCLOUD_NS} user="admin" org="{org}" href="{LOGOUT_HREF}">{links}</Session>'


def build_versions_xml(versions: Iterable[str] = ("27.0",)) -> str:
    infos = "".join(
        f"<VersionInfo><Version>{version}</Version><LoginUrl>{BASE_URL}/sessions/{version}</LoginUrl></VersionInfo>"
        for version in versions
    )
    return f'<SupportedVersions {VCLOUD_NS}>{infos}</SupportedVersions>'


def build_error_xml(message: str, major: int = 400, minor: str = "BAD_REQUEST") -> str:
    return f'<Error {VCLOUD_NS} message="{message}" majorErrorCode="{major}" minorErrorCode="{minor}"/>'


@pytest.fixture
def task_xml():
    return build_task_xml


@pytest.fixture
def org_xml():
    return build_org_xml


@pytest.fixture
def admin_org_xml():
    return build_admin_org_xml


@pytest.fixture
def catalog_xml():
    return build_catalog_xml


@pytest.fixture
def vdc_xml():
    return build_vdc_xml


@pytest.fixture
def disk_xml():
    return build_disk_xml


@pytest.fixture
def network_xml():
    return build_network_xml


@pytest.fixture
def vapp_xml():
    return build_vapp_xml


@pytest.fixture
def session_xml():
    return build_session_xml


@pytest.fixture
def versions_xml():
    return build_versions_xml


@pytest.fixture
def error_xml():
    return build_error_xml
