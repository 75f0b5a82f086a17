"""
VDC operations for the vCD API: storage profiles, edge gateways and org VDC networks.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable
from urllib.parse import urlsplit, urlunsplit

from ..errors import LinkNotFoundError, ObjectNotFoundError
from ..models.requests import OrgVdcNetworkParams
from ..models.vcd_api import OrgVdcNetwork, QueryResultRecords, Reference, Task, Vdc, find_reference
from ..utils.constants import (
    MIME_EDGE_GATEWAY,
    MIME_ORG_VDC_NETWORK,
    MIME_QUERY_RECORDS,
    REL_ADD,
    REL_EDGE_GATEWAYS,
)
from ..utils.retry import busy_retry_policy, retry_call

# Path under which org VDC networks are deleted
ADMIN_NETWORK_PATH = "/api/admin/network/"


def admin_network_href(network_href: str) -> str:
    """
    Map an org VDC network href to its admin endpoint.

    Example:
        >>> admin_network_href("https://vcd.example.com/api/network/abc")
        'https://vcd.example.com/api/admin/network/abc'
    """
    parts = urlsplit(network_href)
    network_id = parts.path.rstrip("/").rsplit("/", 1)[-1]
    return urlunsplit((parts.scheme, parts.netloc, ADMIN_NETWORK_PATH + network_id, "", ""))


@runtime_checkable
class VdcManagerMixin(Protocol):
    """Protocol that provides VDC-level lookups and org VDC network lifecycle."""

    # Required attributes
    max_retry_timeout: float
    vdc: Optional[Vdc]

    # Provided by TaskManagerMixin and QueryMixin
    wait_all_tasks: Callable[..., List[Task]]
    query: Callable[[Dict[str, str]], QueryResultRecords]

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

    def _current_vdc(self, vdc: Optional[Vdc] = None) -> Vdc:
        """Return ``vdc`` or the client's configured VDC."""
        ...  # pragma: no cover - defined in implementation

    def refresh_vdc(self, vdc: Optional[Vdc] = None) -> Vdc:
        """
        Re-fetch a VDC; defaults to the client's VDC, which is replaced.
        """
        refreshed = Vdc.from_xml(self._get_element(self._current_vdc(vdc).href, "refresh vdc"))
        if vdc is None or vdc is self.vdc:
            self.vdc = refreshed
        return refreshed

    # ------------------------------------------------------------------
    # Storage profiles and edge gateways
    # ------------------------------------------------------------------

    def find_storage_profile_reference(self, name: str, vdc: Optional[Vdc] = None) -> Reference:
        """
        Raises:
            ObjectNotFoundError: If the VDC offers no storage profile of that name
        """
        reference = find_reference(self._current_vdc(vdc).storage_profiles, name)
        if reference is None:
            raise ObjectNotFoundError(f"can't find VDC Storage_profile: {name}")
        return reference

    def find_default_storage_profile(self, vdc: Optional[Vdc] = None) -> str:
        """
        Name of the VDC's default storage profile, from the query service.

        Raises:
            ObjectNotFoundError: If the query returns no record
        """
        vdc_name = self._current_vdc(vdc).name
        params = {
            "type": "orgVdcStorageProfile",
            "format": "records",
            "filter": f"(vdcName=={vdc_name};isDefaultStorageProfile==true)",
            "filterEncoded": "true",
        }
        result = self.query(params)
        if not result.records:
            raise ObjectNotFoundError(f"no storage profiles found: vdcName={vdc_name}")
        return result.records[0].get("name", "")

    def find_edge_gateway(self, name: str, vdc: Optional[Vdc] = None) -> Reference:
        """
        Find an edge gateway of the VDC by name.

        Raises:
            LinkNotFoundError: If the VDC does not expose its edge gateway records
            ObjectNotFoundError: If no edge gateway has that name
        """
        link = self._current_vdc(vdc).find_link(MIME_QUERY_RECORDS, REL_EDGE_GATEWAYS)
        if link is None:
            raise LinkNotFoundError("can't find Edge Gateway")
        records = QueryResultRecords.from_xml(self._get_element(link.href, "list edge gateways"))
        for record in records.records:
            if record.get("name") == name:
                return Reference(href=record.get("href", ""), name=name, type=MIME_EDGE_GATEWAY)
        raise ObjectNotFoundError(f"can't find edge gateway with name: {name}")

    # ------------------------------------------------------------------
    # Org VDC networks
    # ------------------------------------------------------------------

    def find_vdc_network(self, name: str, vdc: Optional[Vdc] = None) -> OrgVdcNetwork:
        """
        Raises:
            ObjectNotFoundError: If the VDC has no network of that name
        """
        reference = find_reference(self._current_vdc(vdc).available_networks, name)
        if reference is None:
            raise ObjectNotFoundError(f"can't find VDC Network: {name}")
        return OrgVdcNetwork.from_xml(self._get_element(reference.href, "get org vdc network"))

    def refresh_network(self, network: OrgVdcNetwork) -> OrgVdcNetwork:
        return OrgVdcNetwork.from_xml(self._get_element(network.href, "refresh org vdc network"))

    def create_org_vdc_network(self, params: OrgVdcNetworkParams, vdc: Optional[Vdc] = None) -> OrgVdcNetwork:
        """
        Create an org VDC network and wait for every task it starts.

        "Object is busy" rejections are retried every few seconds within
        the client's retry budget.

        Raises:
            RetryTimeoutError: If the VDC stayed busy for the whole budget
            TaskError: If one of the creation tasks fails
        """
        link = self._current_vdc(vdc).find_link(MIME_ORG_VDC_NETWORK, REL_ADD)
        if link is None:
            raise LinkNotFoundError("cannot find link for add orgVdcNetwork operation")

        body = params.to_xml()
        logging.debug("Org VDC network request body: %s", body)

        def submit() -> Optional[ET.Element]:
            return self._send(
                "POST", link.href, f"create org vdc network {params.name}", body=body, content_type=link.type
            )

        element = retry_call(submit, busy_retry_policy(self.max_retry_timeout))
        if element is None:
            raise ValueError(f"Expected an org VDC network in the response to create {params.name}")
        network = OrgVdcNetwork.from_xml(element)
        self.wait_all_tasks(network.tasks)
        logging.info("Created org VDC network %s", params.name)
        return network

    def delete_org_vdc_network(self, network: OrgVdcNetwork) -> Task:
        """
        Delete an org VDC network through its admin endpoint.

        Returns:
            The deletion task
        """
        current = self.refresh_network(network)
        href = admin_network_href(current.href)

        def submit() -> Optional[ET.Element]:
            return self._send("DELETE", href, f"delete org vdc network {current.name}")

        element = retry_call(submit, busy_retry_policy(self.max_retry_timeout))
        if element is None:
            raise ValueError(f"Expected a task in the response to delete {current.name}")
        return Task.from_xml(element)


__all__ = ["VdcManagerMixin", "admin_network_href"]
