"""
vCD API client modules.

This package provides clients for interacting with the vCloud Director API:
- Session authentication
- Main vCD client composed of specialized managers for tasks, orgs,
  catalogs, VDCs, disks, vApps and queries
"""

from .auth import VcdSessionAuth
from .catalog_manager import CatalogManagerMixin
from .disk_manager import DiskManagerMixin
from .org_manager import OrgManagerMixin
from .query import QueryMixin, extract_id
from .task_manager import TaskManagerMixin
from .vapp_manager import VAppManagerMixin
from .vcd_client import PerformanceMetrics, VcdClient
from .vdc_manager import VdcManagerMixin

# Import vCD API models for convenience
from ..models.vcd_api import (
    Task,
    Org,
    AdminOrg,
    Catalog,
    AdminCatalog,
    Vdc,
    Disk,
    OrgVdcNetwork,
    VApp,
    Vm,
)

__all__ = [
    "VcdSessionAuth",
    "CatalogManagerMixin",
    "DiskManagerMixin",
    "OrgManagerMixin",
    "QueryMixin",
    "extract_id",
    "TaskManagerMixin",
    "VAppManagerMixin",
    "VcdClient",
    "PerformanceMetrics",
    "VdcManagerMixin",
    # API Models
    "Task",
    "Org",
    "AdminOrg",
    "Catalog",
    "AdminCatalog",
    "Vdc",
    "Disk",
    "OrgVdcNetwork",
    "VApp",
    "Vm",
]
