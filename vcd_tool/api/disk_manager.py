"""
Independent disk operations for the vCD API.

An independent disk lives in a VDC (listed among its resource entities) and
can be attached to at most one VM.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional, Protocol, runtime_checkable

from ..errors import ObjectNotFoundError
from ..models.requests import DiskParams
from ..models.vcd_api import Disk, Reference, Task, Vdc, VmReferences
from ..utils.constants import MIME_DISK, MIME_DISK_CREATE_PARAMS, MIME_VMS, REL_ADD, REL_DOWN, REL_EDIT, REL_REMOVE


@runtime_checkable
class DiskManagerMixin(Protocol):
    """Protocol that provides independent disk lifecycle operations."""

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

    def create_disk(self, params: DiskParams, vdc: Optional[Vdc] = None) -> Task:
        """
        Create an independent disk in a VDC.

        Returns:
            The first task embedded in the returned Disk

        Raises:
            LinkNotFoundError: If the VDC does not allow adding disks
            ValueError: If the response carries no task
        """
        href = self._current_vdc(vdc).url_for_type(MIME_DISK_CREATE_PARAMS, REL_ADD)
        element = self._send(
            "POST",
            href,
            f"create disk {params.name}",
            body=params.to_create_xml(),
            content_type=MIME_DISK_CREATE_PARAMS,
        )
        disk = Disk.from_xml(element) if element is not None else None
        if disk is None or not disk.tasks:
            raise ValueError(f"error create disk: no task in the response for {params.name}")
        logging.info("Disk %s submitted (task %s)", params.name, disk.tasks[0].href)
        return disk.tasks[0]

    def find_disk_by_href(self, href: str) -> Disk:
        return Disk.from_xml(self._get_element(href, "find disk"))

    def find_disk_by_name(self, name: str, vdc: Optional[Vdc] = None) -> Disk:
        """
        Find a disk by name; the first match wins when names repeat.

        Raises:
            ObjectNotFoundError: If the VDC has no disk of that name
        """
        reference = self._current_vdc(vdc).find_entity(name, MIME_DISK)
        if reference is None:
            raise ObjectNotFoundError(f"disk '{name}' was not found")
        return self.find_disk_by_href(reference.href)

    def refresh_disk(self, disk: Disk) -> Disk:
        return self.find_disk_by_href(disk.href)

    def update_disk(self, disk: Disk, params: DiskParams) -> Task:
        """
        Update name, description, size, storage profile or owner of a disk.

        The disk must not be attached to a VM, or the task fails.
        """
        href = disk.url_for_type(MIME_DISK, REL_EDIT)
        element = self._send(
            "PUT", href, f"update disk {disk.name}", body=params.to_update_xml(), content_type=MIME_DISK
        )
        if element is None:
            raise ValueError(f"Expected a task in the response to update disk {disk.name}")
        return Task.from_xml(element)

    def delete_disk(self, disk: Disk) -> Task:
        """
        Delete a disk. The disk must not be attached to a VM, or the task fails.
        """
        href = disk.url_for_type(None, REL_REMOVE)
        element = self._send("DELETE", href, f"delete disk {disk.name}")
        if element is None:
            raise ValueError(f"Expected a task in the response to delete disk {disk.name}")
        return Task.from_xml(element)

    def disk_attached_vm(self, disk: Disk) -> Optional[Reference]:
        """
        Return the VM the disk is attached to, or None.
        """
        href = disk.url_for_type(MIME_VMS, REL_DOWN)
        vms = VmReferences.from_xml(self._get_element(href, f"list VMs of disk {disk.name}"))
        return vms.vms[0] if vms.vms else None


__all__ = ["DiskManagerMixin"]
