"""
Organization navigation for the vCD API.

The session names the org to work in; catalogs and VDCs hang off the org
as named ``rel="down"`` links, and the administrator view of the org is the
``rel="alternate"`` link.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Optional, Protocol, runtime_checkable

from ..errors import ObjectNotFoundError
from ..models.vcd_api import AdminCatalog, AdminOrg, Catalog, Org, Vdc, find_reference
from ..utils.constants import MIME_ADMIN_ORG, MIME_CATALOG, MIME_VDC, REL_ALTERNATE, REL_DOWN


@runtime_checkable
class OrgManagerMixin(Protocol):
    """Protocol that provides org, catalog and VDC lookups."""

    # Required attributes
    _auth: Any  # VcdSessionAuth
    org: Optional[Org]

    def _get_element(self, href: str, operation: str, params: Optional[dict] = None) -> ET.Element:
        """GET an XML document."""
        ...  # pragma: no cover - defined in implementation

    def get_org(self) -> Org:
        """
        Fetch the organization the session is logged in to.

        Logs in first when the client has no session yet.
        """
        if not self._auth.org_href:
            self._auth.login()
        self.org = Org.from_xml(self._get_element(self._auth.org_href, "get org"))
        return self.org

    def refresh_org(self, org: Optional[Org] = None) -> Org:
        """Re-fetch an org; defaults to the client's current org."""
        current = org or self.org
        if current is None:
            return self.get_org()
        refreshed = Org.from_xml(self._get_element(current.href, "refresh org"))
        if org is None or org is self.org:
            self.org = refreshed
        return refreshed

    def get_admin_org(self, org: Optional[Org] = None) -> AdminOrg:
        """
        Fetch the administrator view of an org, used for create, update and delete.
        """
        current = org or self.get_org()
        href = current.url_for_type(MIME_ADMIN_ORG, REL_ALTERNATE)
        return AdminOrg.from_xml(self._get_element(href, "get admin org"))

    def refresh_admin_org(self, admin_org: AdminOrg) -> AdminOrg:
        return AdminOrg.from_xml(self._get_element(admin_org.href, "refresh admin org"))

    def _org_or_current(self, org: Optional[Org]) -> Org:
        if org is not None:
            return org
        if self.org is None:
            return self.get_org()
        return self.org

    def find_catalog(self, name: str, org: Optional[Org] = None) -> Catalog:
        """
        Find a catalog by name among the org's links.

        Raises:
            ObjectNotFoundError: If the org has no catalog of that name
        """
        link = self._org_or_current(org).find_link(MIME_CATALOG, REL_DOWN, name=name)
        if link is None:
            raise ObjectNotFoundError(
                f"cannot find Catalog endpoint: name={name}, type={MIME_CATALOG}, rel={REL_DOWN}"
            )
        return Catalog.from_xml(self._get_element(link.href, "get catalog"))

    def find_vdc(self, name: str, org: Optional[Org] = None) -> Vdc:
        """
        Find a VDC by name among the org's links.

        Raises:
            ObjectNotFoundError: If the org has no VDC of that name
        """
        link = self._org_or_current(org).find_link(MIME_VDC, REL_DOWN, name=name)
        if link is None:
            raise ObjectNotFoundError(f"cannot find VDC endpoint: name={name}, type={MIME_VDC}, rel={REL_DOWN}")
        logging.debug("Found VDC %s at %s", name, link.href)
        return Vdc.from_xml(self._get_element(link.href, "get vdc"))

    def find_admin_catalog(self, admin_org: AdminOrg, name: str) -> AdminCatalog:
        """
        Find a catalog by name in the admin org's catalog references.

        Raises:
            ObjectNotFoundError: If the admin org lists no catalog of that name
        """
        reference = find_reference(admin_org.catalogs, name)
        if reference is None:
            raise ObjectNotFoundError(f"cannot find catalog: {name}")
        return AdminCatalog.from_xml(self._get_element(reference.href, "get admin catalog"))


__all__ = ["OrgManagerMixin"]
