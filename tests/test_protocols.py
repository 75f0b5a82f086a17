"""Tests for protocol modules."""

import inspect
from typing import Protocol
from unittest.mock import Mock

import pytest

from vcd_tool.api import (
    CatalogManagerMixin,
    DiskManagerMixin,
    OrgManagerMixin,
    QueryMixin,
    TaskManagerMixin,
    VAppManagerMixin,
    VcdClient,
    VdcManagerMixin,
)
from vcd_tool.protocols import ResourceProtocol
from vcd_tool.protocols.resource_protocol import ResourceProtocol as ResourceProtocolModule
from vcd_tool.resources import CatalogResource, DiskResource, NetworkResource, VAppResource


def test_resource_protocol_import():
    """Test that ResourceProtocol can be imported from the protocols package."""
    assert ResourceProtocol is ResourceProtocolModule
    assert issubclass(ResourceProtocol, Protocol)  # type: ignore[arg-type]


def test_resource_protocol_interface():
    """Test that ResourceProtocol defines the lifecycle operations."""
    for name in ("create", "read", "update", "delete"):
        assert hasattr(ResourceProtocol, name)

    assert "spec" in inspect.signature(ResourceProtocol.create).parameters
    assert "resource_id" in inspect.signature(ResourceProtocol.read).parameters
    assert list(inspect.signature(ResourceProtocol.update).parameters) == ["self", "resource_id", "spec"]


@pytest.mark.parametrize("handler_class", [CatalogResource, DiskResource, NetworkResource, VAppResource])
def test_handlers_implement_resource_protocol(handler_class):
    """Test that every resource handler satisfies ResourceProtocol."""
    assert isinstance(handler_class(Mock()), ResourceProtocol)


@pytest.mark.parametrize(
    "mixin",
    [
        TaskManagerMixin,
        OrgManagerMixin,
        CatalogManagerMixin,
        VdcManagerMixin,
        DiskManagerMixin,
        VAppManagerMixin,
        QueryMixin,
    ],
)
def test_client_composes_mixins(mixin):
    """Test that VcdClient is built from every API mixin."""
    assert mixin in VcdClient.__mro__
