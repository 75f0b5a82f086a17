"""
Pydantic models for vcd-tool.

This package contains all Pydantic models used in the application:
- vcd_api: Models decoded from vCD API responses
- requests: Request bodies rendered to vCD XML
- base, config, resources: Domain models
"""

# vCD API Response Models
from .vcd_api import (
    VcdBaseModel,
    Link,
    Reference,
    Task,
    VcdEntity,
    Session,
    Org,
    AdminOrg,
    Catalog,
    AdminCatalog,
    CatalogItem,
    Media,
    VAppTemplate,
    Vdc,
    Disk,
    IpRange,
    OrgVdcNetwork,
    Vm,
    VApp,
    QueryResultRecords,
    SupportedVersions,
)

# Request Models
from .requests import (
    AdminCatalogParams,
    MediaParams,
    DiskParams,
    OrgVdcNetworkParams,
    ComposeVAppParams,
    InstantiateVAppTemplateParams,
    UndeployVAppParams,
)

# Domain Models
from .base import VcdToolBaseModel
from .config import VcdConfig
from .resources import (
    CatalogSpec,
    CatalogState,
    DiskSpec,
    DiskState,
    NetworkSpec,
    NetworkState,
    VAppSpec,
    VAppState,
)

__all__ = [
    # vCD API Models
    "VcdBaseModel",
    "Link",
    "Reference",
    "Task",
    "VcdEntity",
    "Session",
    "Org",
    "AdminOrg",
    "Catalog",
    "AdminCatalog",
    "CatalogItem",
    "Media",
    "VAppTemplate",
    "Vdc",
    "Disk",
    "IpRange",
    "OrgVdcNetwork",
    "Vm",
    "VApp",
    "QueryResultRecords",
    "SupportedVersions",
    # Request Models
    "AdminCatalogParams",
    "MediaParams",
    "DiskParams",
    "OrgVdcNetworkParams",
    "ComposeVAppParams",
    "InstantiateVAppTemplateParams",
    "UndeployVAppParams",
    # Domain Models
    "VcdToolBaseModel",
    "VcdConfig",
    "CatalogSpec",
    "CatalogState",
    "DiskSpec",
    "DiskState",
    "NetworkSpec",
    "NetworkState",
    "VAppSpec",
    "VAppState",
]
