"""
Desired-state and observed-state models for the managed resources.

A ``*Spec`` is what the caller asks for; a ``*State`` is what ``read``
reports back from vCD. Both are keyed by the object name.
"""

from typing import List, Literal, Optional

from pydantic import Field, field_validator

from ..utils.units import parse_size
from .base import VcdToolBaseModel
from .vcd_api import IpRange


# ============================================================================
# Catalog
# ============================================================================


class CatalogSpec(VcdToolBaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class CatalogState(VcdToolBaseModel):
    name: str
    description: str = ""
    id: Optional[str] = None
    href: str = ""
    is_published: bool = False


# ============================================================================
# Independent Disk
# ============================================================================


class DiskSpec(VcdToolBaseModel):
    """
    Independent disk request.

    Attributes:
        name: Disk name, unique within the VDC
        size: Base-2 size string such as "512MB" or "10GB"
        storage_profile: Storage profile name; vCD picks the VDC default when unset
    """

    name: str = Field(min_length=1)
    size: str
    description: str = ""
    bus_type: Optional[str] = None
    bus_sub_type: Optional[str] = None
    storage_profile: Optional[str] = None
    iops: Optional[int] = None

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: str) -> str:
        parse_size(value)
        return value

    @property
    def size_bytes(self) -> int:
        return parse_size(self.size)


class DiskState(VcdToolBaseModel):
    name: str
    size: str
    size_bytes: int
    description: str = ""
    bus_type: Optional[str] = None
    bus_sub_type: Optional[str] = None
    storage_profile: Optional[str] = None
    iops: Optional[int] = None
    id: Optional[str] = None
    href: str = ""
    attached_vm: Optional[str] = None


# ============================================================================
# Org VDC Network
# ============================================================================


class NetworkSpec(VcdToolBaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    fence_mode: Literal["bridged", "isolated", "natRouted"] = "natRouted"
    gateway: str
    netmask: str = "255.255.255.0"
    dns1: Optional[str] = None
    dns2: Optional[str] = None
    dns_suffix: Optional[str] = None
    static_ip_pool: List[IpRange] = Field(default_factory=list)
    edge_gateway: Optional[str] = None
    shared: bool = False


class NetworkState(VcdToolBaseModel):
    name: str
    description: str = ""
    fence_mode: str = ""
    gateway: str = ""
    netmask: str = ""
    dns1: str = ""
    dns2: str = ""
    dns_suffix: str = ""
    static_ip_pool: List[IpRange] = Field(default_factory=list)
    edge_gateway: Optional[str] = None
    shared: bool = False
    id: Optional[str] = None
    href: str = ""


# ============================================================================
# vApp
# ============================================================================


class VAppSpec(VcdToolBaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class VAppState(VcdToolBaseModel):
    name: str
    description: str = ""
    status: Optional[int] = None
    deployed: bool = False
    vms: List[str] = Field(default_factory=list)
    id: Optional[str] = None
    href: str = ""


__all__ = [
    "CatalogSpec",
    "CatalogState",
    "DiskSpec",
    "DiskState",
    "NetworkSpec",
    "NetworkState",
    "VAppSpec",
    "VAppState",
]
