"""
Typed queries against the vCD query service.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from ..models.vcd_api import QueryResultRecords


def extract_id(urn: str) -> str:
    """
    Extract the ID from a URN.

    Example:
        >>> extract_id("urn:vcloud:catalog:39867ab4-04e0-4b13-b468-08abcc1de810")
        '39867ab4-04e0-4b13-b468-08abcc1de810'
    """
    return urn.split(":")[-1]


@runtime_checkable
class QueryMixin(Protocol):
    """Protocol that provides access to the query service found at login."""

    # Required attributes
    _auth: Any  # VcdSessionAuth

    def _get_element(self, href: str, operation: str, params: Optional[dict] = None) -> ET.Element:
        """GET an XML document."""
        ...  # pragma: no cover - defined in implementation

    def query(self, params: Dict[str, str]) -> QueryResultRecords:
        """
        Run a query, e.g. ``{"type": "orgVdcStorageProfile", "format": "records"}``.

        Logs in first when the client has no session yet.
        """
        if not self._auth.query_href:
            self._auth.login()
        return QueryResultRecords.from_xml(self._get_element(self._auth.query_href, "query", params=params))


__all__ = ["QueryMixin", "extract_id"]
