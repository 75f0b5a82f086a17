"""
Request body models for the vCD API.

Each model validates its inputs and renders the XML document the matching
vCD endpoint expects through ``to_xml()``.
"""

import xml.etree.ElementTree as ET
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..utils.constants import NS_OVF
from ..utils.xml_utils import add_child, format_bool, new_element, to_xml
from .vcd_api import IpRange, Reference


class VcdRequestModel(BaseModel):

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", mode="after", check_fields=False)
    @classmethod
    def is_empty(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(f"Invalid {info.field_name}: {value!r}")
        return value


def _reference_attrib(reference: Reference) -> dict:
    return {"href": reference.href, "name": reference.name or None, "type": reference.type}


# ============================================================================
# Catalog Requests
# ============================================================================


class AdminCatalogParams(VcdRequestModel):
    """Body of catalog create (POST to the admin org) and update (PUT to the catalog)."""

    name: str
    description: str = ""
    is_published: Optional[bool] = None

    def to_xml(self) -> str:
        root = new_element("AdminCatalog", {"name": self.name})
        add_child(root, "Description", self.description)
        if self.is_published is not None:
            add_child(root, "IsPublished", format_bool(self.is_published))
        return to_xml(root)


class MediaParams(VcdRequestModel):
    """Media placeholder created in a catalog before the image is uploaded."""

    name: str
    image_type: str = "floppy"
    size: int = Field(ge=0)
    description: str = ""

    def to_xml(self) -> str:
        root = new_element("Media", {"name": self.name, "imageType": self.image_type, "size": str(self.size)})
        if self.description:
            add_child(root, "Description", self.description)
        return to_xml(root)


# ============================================================================
# Disk Requests
# ============================================================================


class DiskParams(VcdRequestModel):
    """
    Independent disk settings.

    ``size`` is in bytes. The same model renders the ``DiskCreateParams``
    body for creation and the bare ``Disk`` body for updates.
    """

    name: str
    size: int = Field(gt=0)
    description: str = ""
    bus_type: Optional[str] = None
    bus_sub_type: Optional[str] = None
    iops: Optional[int] = None
    storage_profile: Optional[Reference] = None
    owner: Optional[Reference] = None

    def _disk_element(self) -> ET.Element:
        disk = new_element(
            "Disk",
            {
                "name": self.name,
                "size": str(self.size),
                "busType": self.bus_type,
                "busSubType": self.bus_sub_type,
                "iops": str(self.iops) if self.iops is not None else None,
            },
        )
        add_child(disk, "Description", self.description)
        if self.storage_profile is not None:
            add_child(disk, "StorageProfile", attrib=_reference_attrib(self.storage_profile))
        return disk

    def to_create_xml(self) -> str:
        root = new_element("DiskCreateParams")
        root.append(self._disk_element())
        return to_xml(root)

    def to_update_xml(self) -> str:
        disk = self._disk_element()
        if self.owner is not None:
            owner = add_child(disk, "Owner")
            add_child(owner, "User", attrib=_reference_attrib(self.owner))
        return to_xml(disk)


# ============================================================================
# Network Requests
# ============================================================================


class OrgVdcNetworkParams(VcdRequestModel):
    """Org VDC network definition."""

    name: str
    description: str = ""
    fence_mode: Literal["bridged", "isolated", "natRouted"] = "natRouted"
    gateway: str
    netmask: str
    dns1: Optional[str] = None
    dns2: Optional[str] = None
    dns_suffix: Optional[str] = None
    ip_ranges: List[IpRange] = Field(default_factory=list)
    edge_gateway: Optional[Reference] = None
    is_shared: bool = False

    def to_xml(self) -> str:
        root = new_element("OrgVdcNetwork", {"name": self.name})
        add_child(root, "Description", self.description)

        configuration = add_child(root, "Configuration")
        scope = add_child(add_child(configuration, "IpScopes"), "IpScope")
        add_child(scope, "IsInherited", "false")
        add_child(scope, "Gateway", self.gateway)
        add_child(scope, "Netmask", self.netmask)
        for tag, value in (("Dns1", self.dns1), ("Dns2", self.dns2), ("DnsSuffix", self.dns_suffix)):
            if value:
                add_child(scope, tag, value)
        if self.ip_ranges:
            ranges = add_child(scope, "IpRanges")
            for ip_range in self.ip_ranges:
                item = add_child(ranges, "IpRange")
                add_child(item, "StartAddress", ip_range.start_address)
                add_child(item, "EndAddress", ip_range.end_address)
        add_child(configuration, "FenceMode", self.fence_mode)

        if self.edge_gateway is not None:
            add_child(root, "EdgeGateway", attrib=_reference_attrib(self.edge_gateway))
        add_child(root, "IsShared", format_bool(self.is_shared))
        return to_xml(root)


# ============================================================================
# vApp Requests
# ============================================================================


class ComposeVAppParams(VcdRequestModel):
    """Compose an empty vApp."""

    name: str
    description: str = ""
    deploy: bool = False
    power_on: bool = False

    def to_xml(self) -> str:
        root = new_element(
            "ComposeVAppParams",
            {"name": self.name, "deploy": format_bool(self.deploy), "powerOn": format_bool(self.power_on)},
        )
        if self.description:
            add_child(root, "Description", self.description)
        return to_xml(root)


class InstantiateVAppTemplateParams(VcdRequestModel):
    """Instantiate a vApp template, optionally bridging it to an org VDC network."""

    name: str
    source: Reference
    description: str = ""
    network: Optional[Reference] = None
    fence_mode: str = "bridged"
    deploy: bool = False
    power_on: bool = False
    accept_all_eulas: bool = True

    def to_xml(self) -> str:
        root = new_element(
            "InstantiateVAppTemplateParams",
            {"name": self.name, "deploy": format_bool(self.deploy), "powerOn": format_bool(self.power_on)},
        )
        if self.description:
            add_child(root, "Description", self.description)
        if self.network is not None:
            section = add_child(add_child(root, "InstantiationParams"), "NetworkConfigSection")
            ET.SubElement(section, f"{{{NS_OVF}}}Info").text = "Configuration parameters for logical networks"
            config = add_child(section, "NetworkConfig", attrib={"networkName": self.network.name})
            configuration = add_child(config, "Configuration")
            add_child(configuration, "ParentNetwork", attrib={"href": self.network.href})
            add_child(configuration, "FenceMode", self.fence_mode)
        add_child(root, "Source", attrib=_reference_attrib(self.source))
        add_child(root, "AllEULAsAccepted", format_bool(self.accept_all_eulas))
        return to_xml(root)


class UndeployVAppParams(VcdRequestModel):
    power_action: Literal["powerOff", "suspend", "shutdown", "force", "default"] = "powerOff"

    def to_xml(self) -> str:
        root = new_element("UndeployVAppParams")
        add_child(root, "UndeployPowerAction", self.power_action)
        return to_xml(root)


__all__ = [
    "VcdRequestModel",
    "AdminCatalogParams",
    "MediaParams",
    "DiskParams",
    "OrgVdcNetworkParams",
    "ComposeVAppParams",
    "InstantiateVAppTemplateParams",
    "UndeployVAppParams",
]
