"""
vApp and VM operations for the vCD API.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, List, Optional, Protocol, runtime_checkable

from ..errors import ObjectNotFoundError
from ..models.requests import ComposeVAppParams, InstantiateVAppTemplateParams, UndeployVAppParams
from ..models.vcd_api import Task, VApp, Vdc, Vm
from ..utils.constants import (
    MIME_COMPOSE_VAPP_PARAMS,
    MIME_INSTANTIATE_VAPP_TEMPLATE_PARAMS,
    MIME_UNDEPLOY_VAPP_PARAMS,
    MIME_VAPP,
    REL_ADD,
    REL_REMOVE,
    REL_UNDEPLOY,
)


@runtime_checkable
class VAppManagerMixin(Protocol):
    """Protocol that provides vApp composition, lookup and teardown."""

    # Provided by TaskManagerMixin and VdcManagerMixin
    wait_all_tasks: Callable[..., List[Task]]
    refresh_vdc: Callable[..., Vdc]

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

    def _submit_vapp(self, href: str, body: str, content_type: str, name: str) -> VApp:
        element = self._send("POST", href, f"create vApp {name}", body=body, content_type=content_type)
        if element is None:
            raise ValueError(f"Expected a vApp in the response to create {name}")
        vapp = VApp.from_xml(element)
        self.wait_all_tasks(vapp.tasks)
        return vapp

    def compose_raw_vapp(self, name: str, description: str = "", vdc: Optional[Vdc] = None) -> VApp:
        """
        Compose an empty vApp and wait until vCD has created it.

        Returns:
            The vApp as returned by the compose request
        """
        href = self._current_vdc(vdc).url_for_type(MIME_COMPOSE_VAPP_PARAMS, REL_ADD)
        body = ComposeVAppParams(name=name, description=description).to_xml()
        vapp = self._submit_vapp(href, body, MIME_COMPOSE_VAPP_PARAMS, name)
        logging.info("Composed vApp %s", name)
        return vapp

    def instantiate_vapp_template(self, params: InstantiateVAppTemplateParams, vdc: Optional[Vdc] = None) -> VApp:
        """Instantiate a vApp template and wait for every task it starts."""
        href = self._current_vdc(vdc).url_for_type(MIME_INSTANTIATE_VAPP_TEMPLATE_PARAMS, REL_ADD)
        vapp = self._submit_vapp(href, params.to_xml(), MIME_INSTANTIATE_VAPP_TEMPLATE_PARAMS, params.name)
        logging.info("Instantiated vApp %s from %s", params.name, params.source.name or params.source.href)
        return vapp

    def get_vapp_by_href(self, href: str) -> VApp:
        return VApp.from_xml(self._get_element(href, "get vApp"))

    def refresh_vapp(self, vapp: VApp) -> VApp:
        return self.get_vapp_by_href(vapp.href)

    def find_vapp_by_name(self, name: str, vdc: Optional[Vdc] = None) -> VApp:
        """
        Find a vApp by name after refreshing the VDC.

        Raises:
            ObjectNotFoundError: If the VDC has no vApp of that name
        """
        current = self.refresh_vdc(vdc)
        reference = current.find_entity(name, MIME_VAPP)
        if reference is None:
            raise ObjectNotFoundError(f"can't find vApp: {name}")
        return self.get_vapp_by_href(reference.href)

    def get_vm_by_href(self, href: str) -> Vm:
        return Vm.from_xml(self._get_element(href, "get VM"))

    def find_vm_by_name(self, vapp: VApp, name: str) -> Vm:
        """
        Raises:
            ObjectNotFoundError: If the vApp has no VMs or none with that name
        """
        current = self.refresh_vapp(vapp)
        if not current.vms:
            raise ObjectNotFoundError("VApp Has No VMs")
        for vm in current.vms:
            if vm.name == name:
                return self.get_vm_by_href(vm.href)
        raise ObjectNotFoundError(f"can't find vm: {name}")

    def undeploy_vapp(self, vapp: VApp, power_action: str = "powerOff") -> Optional[Task]:
        """
        Undeploy (power off) a vApp.

        Returns:
            The undeploy task, or None when the vApp offers no undeploy action
            (it is not deployed)
        """
        link = vapp.find_link(None, REL_UNDEPLOY)
        if link is None:
            logging.debug("vApp %s is not deployed, nothing to undeploy", vapp.name)
            return None
        body = UndeployVAppParams(power_action=power_action).to_xml()
        element = self._send(
            "POST", link.href, f"undeploy vApp {vapp.name}", body=body, content_type=MIME_UNDEPLOY_VAPP_PARAMS
        )
        if element is None:
            raise ValueError(f"Expected a task in the response to undeploy {vapp.name}")
        return Task.from_xml(element)

    def delete_vapp(self, vapp: VApp) -> Task:
        href = vapp.url_for_type(None, REL_REMOVE)
        element = self._send("DELETE", href, f"delete vApp {vapp.name}")
        if element is None:
            raise ValueError(f"Expected a task in the response to delete {vapp.name}")
        return Task.from_xml(element)


__all__ = ["VAppManagerMixin"]
