"""
vApp resource handler.
"""

import logging
from typing import Optional

from ..errors import ObjectNotFoundError
from ..models.resources import VAppSpec, VAppState
from ..models.vcd_api import VApp
from .base import BaseResource


class VAppResource(BaseResource):
    """Manage an empty vApp of the client's VDC, identified by its name."""

    kind = "vapp"

    @staticmethod
    def _state(vapp: VApp) -> VAppState:
        return VAppState(
            name=vapp.name,
            description=vapp.description,
            status=vapp.status,
            deployed=vapp.deployed,
            vms=[vm.name for vm in vapp.vms],
            id=vapp.id,
            href=vapp.href,
        )

    def _find(self, name: str) -> Optional[VApp]:
        try:
            return self.client.find_vapp_by_name(name)
        except ObjectNotFoundError:
            return None

    def create(self, spec: VAppSpec) -> VAppState:
        vapp = self.client.compose_raw_vapp(spec.name, spec.description)
        return self._state(self.client.refresh_vapp(vapp))

    def read(self, resource_id: str) -> Optional[VAppState]:
        vapp = self._find(resource_id)
        if vapp is None:
            logging.info("vApp '%s' does not exist", resource_id)
            return None
        return self._state(vapp)

    def update(self, resource_id: str, spec: VAppSpec) -> Optional[VAppState]:
        raise NotImplementedError("vApps cannot be updated in place; delete and create them")

    def delete(self, resource_id: str) -> None:
        """
        Power off the vApp when it is deployed, then delete it.

        Raises:
            ObjectNotFoundError: If the vApp does not exist
        """
        vapp = self._find(resource_id)
        if vapp is None:
            raise ObjectNotFoundError(f"can't find vApp: {resource_id}")

        if vapp.deployed:
            task = self.client.undeploy_vapp(vapp)
            if task is not None:
                self.client.wait_task_completion(task)
            vapp = self.client.refresh_vapp(vapp)

        self._run_task(lambda: self.client.delete_vapp(vapp), f"delete vApp {resource_id}")
        logging.info("Deleted vApp '%s'", resource_id)


__all__ = ["VAppResource"]
