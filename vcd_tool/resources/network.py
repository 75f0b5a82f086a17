"""
Org VDC network resource handler.
"""

import logging
from typing import Optional

from ..errors import ObjectNotFoundError
from ..models.requests import OrgVdcNetworkParams
from ..models.resources import NetworkSpec, NetworkState
from ..models.vcd_api import OrgVdcNetwork
from .base import BaseResource


class NetworkResource(BaseResource):
    """
    Manage an org VDC network, identified by its name.

    Networks are replaced rather than updated in place.
    """

    kind = "network"

    @staticmethod
    def _state(network: OrgVdcNetwork) -> NetworkState:
        return NetworkState(
            name=network.name,
            description=network.description,
            fence_mode=network.fence_mode,
            gateway=network.gateway,
            netmask=network.netmask,
            dns1=network.dns1,
            dns2=network.dns2,
            dns_suffix=network.dns_suffix,
            static_ip_pool=network.ip_ranges,
            edge_gateway=network.edge_gateway.name if network.edge_gateway else None,
            shared=network.is_shared,
            id=network.id,
            href=network.href,
        )

    def _find(self, name: str) -> Optional[OrgVdcNetwork]:
        try:
            return self.client.find_vdc_network(name)
        except ObjectNotFoundError:
            return None

    def create(self, spec: NetworkSpec) -> NetworkState:
        """
        Raises:
            ObjectNotFoundError: If the named edge gateway does not exist
            RetryTimeoutError: If the VDC stayed busy for the whole retry budget
        """
        edge_gateway = self.client.find_edge_gateway(spec.edge_gateway) if spec.edge_gateway else None
        params = OrgVdcNetworkParams(
            name=spec.name,
            description=spec.description,
            fence_mode=spec.fence_mode,
            gateway=spec.gateway,
            netmask=spec.netmask,
            dns1=spec.dns1,
            dns2=spec.dns2,
            dns_suffix=spec.dns_suffix,
            ip_ranges=spec.static_ip_pool,
            edge_gateway=edge_gateway,
            is_shared=spec.shared,
        )
        self.client.create_org_vdc_network(params)

        state = self.read(spec.name)
        if state is None:
            raise ObjectNotFoundError(f"network '{spec.name}' was not found after creation")
        return state

    def read(self, resource_id: str) -> Optional[NetworkState]:
        self.client.refresh_vdc()
        network = self._find(resource_id)
        if network is None:
            logging.info("Network '%s' does not exist", resource_id)
            return None
        return self._state(network)

    def update(self, resource_id: str, spec: NetworkSpec) -> Optional[NetworkState]:
        raise NotImplementedError("org VDC networks cannot be updated in place; delete and create them")

    def delete(self, resource_id: str) -> None:
        """
        Raises:
            ObjectNotFoundError: If the network does not exist
        """
        self.client.refresh_vdc()
        network = self._find(resource_id)
        if network is None:
            raise ObjectNotFoundError(f"can't find VDC Network: {resource_id}")

        self._run_task(lambda: self.client.delete_org_vdc_network(network), f"delete network {resource_id}")
        logging.info("Deleted network '%s'", resource_id)


__all__ = ["NetworkResource"]
