"""
Independent disk resource handler.
"""

import logging
from typing import Optional

from ..errors import LinkNotFoundError, ObjectNotFoundError, VcdError
from ..models.requests import DiskParams
from ..models.resources import DiskSpec, DiskState
from ..models.vcd_api import Disk, Reference
from ..utils.units import format_size
from .base import BaseResource


class DiskResource(BaseResource):
    """
    Manage an independent disk of the client's VDC, identified by its name.

    Unlike catalogs, disk names are not adopted: creating a disk whose name
    is already taken fails.
    """

    kind = "disk"

    def _storage_profile(self, name: Optional[str]) -> Optional[Reference]:
        if not name:
            return None
        return self.client.find_storage_profile_reference(name)

    def _params(self, spec: DiskSpec, owner: Optional[Reference] = None) -> DiskParams:
        return DiskParams(
            name=spec.name,
            size=spec.size_bytes,
            description=spec.description,
            bus_type=spec.bus_type,
            bus_sub_type=spec.bus_sub_type,
            iops=spec.iops,
            storage_profile=self._storage_profile(spec.storage_profile),
            owner=owner,
        )

    def _find(self, name: str) -> Optional[Disk]:
        try:
            return self.client.find_disk_by_name(name)
        except ObjectNotFoundError:
            return None

    def _state(self, disk: Disk) -> DiskState:
        storage_profile: Optional[str] = None
        if disk.storage_profile is not None and disk.storage_profile.name:
            storage_profile = disk.storage_profile.name
        else:
            try:
                storage_profile = self.client.find_default_storage_profile()
            except ObjectNotFoundError as e:
                logging.debug("No default storage profile for disk %s: %s", disk.name, e)

        try:
            attached = self.client.disk_attached_vm(disk)
        except LinkNotFoundError:
            attached = None

        return DiskState(
            name=disk.name,
            size=format_size(disk.size),
            size_bytes=disk.size,
            description=disk.description,
            bus_type=disk.bus_type,
            bus_sub_type=disk.bus_sub_type,
            storage_profile=storage_profile,
            iops=disk.iops,
            id=disk.id,
            href=disk.href,
            attached_vm=attached.name if attached else None,
        )

    def create(self, spec: DiskSpec) -> DiskState:
        """
        Raises:
            VcdError: If a disk with the same name already exists
            ObjectNotFoundError: If the requested storage profile does not exist
        """
        existing = self._find(spec.name)
        if existing is not None:
            raise VcdError(f"The disk '{spec.name}' already exists (HREF: '{existing.href}')")

        params = self._params(spec)
        logging.info("Create disk '%s'", spec.name)
        self._run_task(lambda: self.client.create_disk(params), f"create disk {spec.name}")

        state = self.read(spec.name)
        if state is None:
            raise ObjectNotFoundError(f"disk '{spec.name}' was not found after creation")
        return state

    def read(self, resource_id: str) -> Optional[DiskState]:
        self.client.refresh_vdc()
        disk = self._find(resource_id)
        if disk is None:
            logging.info("Disk '%s' does not exist", resource_id)
            return None
        return self._state(disk)

    def update(self, resource_id: str, spec: DiskSpec) -> Optional[DiskState]:
        """
        Raises:
            ObjectNotFoundError: If the disk does not exist
        """
        disk = self._find(resource_id)
        if disk is None:
            raise ObjectNotFoundError(f"Disk '{resource_id}' does not exist")

        params = self._params(spec, owner=disk.owner)
        logging.info("Update disk '%s'", resource_id)
        self._run_task(lambda: self.client.update_disk(disk, params), f"update disk {resource_id}")
        return self.read(spec.name)

    def delete(self, resource_id: str) -> None:
        """
        Raises:
            ObjectNotFoundError: If the disk does not exist
        """
        disk = self._find(resource_id)
        if disk is None:
            raise ObjectNotFoundError(f"The disk '{resource_id}' does not exist")

        self._run_task(lambda: self.client.delete_disk(disk), f"delete disk {resource_id}")
        logging.info("Deleted disk '%s'", resource_id)


__all__ = ["DiskResource"]
