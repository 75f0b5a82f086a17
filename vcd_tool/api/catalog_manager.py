"""
Catalog, catalog item and media operations for the vCD API.
"""

import logging
import os
import xml.etree.ElementTree as ET
from typing import BinaryIO, Callable, Optional, Protocol, Union, runtime_checkable

import httpx

from ..errors import LinkNotFoundError, ObjectNotFoundError
from ..models.requests import AdminCatalogParams, MediaParams
from ..models.vcd_api import (
    AdminCatalog,
    AdminOrg,
    Catalog,
    CatalogItem,
    Media,
    Task,
    VAppTemplate,
    find_link,
    find_reference,
)
from ..utils.constants import (
    MIME_ADMIN_CATALOG,
    MIME_MEDIA,
    MIME_TASK,
    REL_ADD,
    REL_DOWNLOAD_DEFAULT,
    REL_ENABLE,
    REL_REMOVE,
    REL_UPLOAD_DEFAULT,
)

# Image type used when the media name has no extension
DEFAULT_MEDIA_IMAGE_TYPE = "floppy"


@runtime_checkable
class CatalogManagerMixin(Protocol):
    """Protocol that provides catalog lifecycle and media transfer operations."""

    # Provided by TaskManagerMixin
    execute_request: Callable[..., Task]

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
        ...  # pragma: no cover - defined in implementation

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

    # ------------------------------------------------------------------
    # Admin catalogs
    # ------------------------------------------------------------------

    def create_catalog(self, admin_org: AdminOrg, name: str, description: str = "") -> Task:
        """
        Create a catalog in the org.

        Args:
            admin_org: Administrator view of the org
            name: Catalog name
            description: Catalog description

        Returns:
            The creation task embedded in the returned AdminCatalog

        Raises:
            ValueError: If the response carries no task of the task media type
        """
        href = admin_org.url_for_type(MIME_ADMIN_CATALOG, REL_ADD)
        body = AdminCatalogParams(name=name, description=description).to_xml()
        element = self._send("POST", href, "create catalog", body=body, content_type=MIME_ADMIN_CATALOG)
        catalog = AdminCatalog.from_xml(element) if element is not None else None

        for task in catalog.tasks if catalog else []:
            if task.type == MIME_TASK:
                logging.info("Catalog %s submitted (task %s)", name, task.href)
                return task

        raise ValueError(f"error creating catalog: no task found with type : {MIME_TASK}")

    def update_admin_catalog(self, catalog: AdminCatalog) -> AdminCatalog:
        """
        PUT the catalog's name, description and publication flag.

        Returns:
            The catalog as stored by vCD after the update
        """
        body = AdminCatalogParams(
            name=catalog.name, description=catalog.description, is_published=catalog.is_published
        ).to_xml()
        element = self._send("PUT", catalog.href, "update catalog", body=body, content_type=MIME_ADMIN_CATALOG)
        if element is None:
            return catalog
        return AdminCatalog.from_xml(element)

    def delete_admin_catalog(self, catalog: AdminCatalog, force: bool = True, recursive: bool = True) -> None:
        """Delete a catalog; ``force``/``recursive`` also remove its items."""
        href = catalog.url_for_type(None, REL_REMOVE)
        self._send(
            "DELETE",
            href,
            f"delete catalog {catalog.name}",
            params={"force": str(force).lower(), "recursive": str(recursive).lower()},
        )
        logging.info("Deleted catalog %s", catalog.name)

    # ------------------------------------------------------------------
    # Catalog items
    # ------------------------------------------------------------------

    def refresh_catalog(self, catalog: Catalog) -> Catalog:
        return Catalog.from_xml(self._get_element(catalog.href, "refresh catalog"))

    def has_catalog_item(self, catalog: Catalog, name: str) -> bool:
        return find_reference(catalog.catalog_items, name) is not None

    def find_catalog_item(self, catalog: Catalog, name: str) -> CatalogItem:
        """
        Raises:
            ObjectNotFoundError: If the catalog has no item of that name
        """
        reference = find_reference(catalog.catalog_items, name)
        if reference is None:
            raise ObjectNotFoundError(f"cannot find catalog item: {name}")
        return CatalogItem.from_xml(self._get_element(reference.href, "get catalog item"))

    def delete_catalog_item(self, item: CatalogItem) -> None:
        href = item.url_for_type(None, REL_REMOVE)
        self._send("DELETE", href, f"delete catalog item {item.name}")

    def get_vapp_template(self, item: CatalogItem) -> VAppTemplate:
        if item.entity is None:
            raise ObjectNotFoundError(f"catalog item {item.name} has no entity")
        return VAppTemplate.from_xml(self._get_element(item.entity.href, "get vApp template"))

    def get_media(self, item: CatalogItem) -> Media:
        """
        Raises:
            ValueError: If the item does not reference a media image
        """
        if item.entity is None or item.entity.type != MIME_MEDIA:
            raise ValueError(f"wrong entity type: {item.entity.type if item.entity else None}")
        return Media.from_xml(self._get_element(item.entity.href, "get media"))

    def refresh_media(self, media: Media) -> Media:
        return Media.from_xml(self._get_element(media.href, "refresh media"))

    # ------------------------------------------------------------------
    # Media transfer
    # ------------------------------------------------------------------

    def upload_media(self, catalog: Catalog, name: str, stream: Union[BinaryIO, bytes]) -> Task:
        """
        Create a media item in a catalog and upload its content.

        The image type comes from the file extension of ``name``
        (``floppy`` when there is none).

        Returns:
            The media's upload task; wait on it to know the import finished
        """
        data = stream if isinstance(stream, bytes) else stream.read()
        image_type = os.path.splitext(name)[1].lstrip(".") or DEFAULT_MEDIA_IMAGE_TYPE

        href = catalog.url_for_type(MIME_MEDIA, REL_ADD)
        body = MediaParams(name=name, image_type=image_type, size=len(data)).to_xml()
        element = self._send("POST", href, f"create media {name}", body=body, content_type=MIME_MEDIA)
        if element is None:
            raise ValueError(f"Expected a catalog item in the response to create media {name}")

        media = self.get_media(CatalogItem.from_xml(element))
        if not media.files or not media.tasks:
            raise ValueError(f"media {name} has no file to upload to")

        upload = find_link(media.files[0].links, None, REL_UPLOAD_DEFAULT)
        if upload is None:
            raise LinkNotFoundError(f"object does not have a link: rel={REL_UPLOAD_DEFAULT}")

        logging.info("Uploading %d bytes to media %s", len(data), name)
        self._request("PUT", upload.href, f"upload media {name}", content=data)
        return media.tasks[0]

    def enable_media_download(self, media: Media) -> Task:
        link = media.find_link(None, REL_ENABLE)
        if link is None:
            raise LinkNotFoundError(f"object does not have a link: rel={REL_ENABLE}")
        return self.execute_request("POST", link.href)

    def download_media(self, media: Media) -> bytes:
        """
        Download the content of a media item whose download has been enabled.
        """
        if not media.files:
            raise ValueError("media does not have any files")
        link = find_link(media.files[0].links, None, REL_DOWNLOAD_DEFAULT)
        if link is None:
            raise LinkNotFoundError(f"object does not have a link: rel={REL_DOWNLOAD_DEFAULT}")
        return self._request("GET", link.href, f"download media {media.name}").content


__all__ = ["CatalogManagerMixin", "DEFAULT_MEDIA_IMAGE_TYPE"]
