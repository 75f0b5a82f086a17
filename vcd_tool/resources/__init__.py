"""
Resource handlers.

Each handler maps a create/read/update/delete lifecycle onto vCD API calls
made through one shared, authenticated client.
"""

from .base import BaseResource
from .catalog import CatalogResource
from .disk import DiskResource
from .network import NetworkResource
from .vapp import VAppResource

__all__ = ["BaseResource", "CatalogResource", "DiskResource", "NetworkResource", "VAppResource"]
