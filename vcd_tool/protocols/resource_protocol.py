"""
Resource protocol for type safety.

This module defines the lifecycle every resource handler exposes, so the
CLI can drive catalogs, disks, networks and vApps the same way.
"""

from typing import Optional, Protocol, TypeVar, runtime_checkable

SpecT = TypeVar("SpecT", contravariant=True)
StateT = TypeVar("StateT", covariant=True)


@runtime_checkable
class ResourceProtocol(Protocol[SpecT, StateT]):
    """
    Protocol defining the create/read/update/delete lifecycle of a resource.

    Resources are identified by name. Every ``read`` goes back to vCD;
    nothing is cached between calls.
    """

    def create(self, spec: SpecT) -> StateT:
        """
        Create the resource and return its state as read back from vCD.

        Args:
            spec: Desired state

        Returns:
            Observed state after creation
        """
        ...

    def read(self, resource_id: str) -> Optional[StateT]:
        """
        Read the resource.

        Args:
            resource_id: Resource name

        Returns:
            Observed state, or None when the resource no longer exists
        """
        ...

    def update(self, resource_id: str, spec: SpecT) -> Optional[StateT]:
        """
        Bring the resource in line with ``spec``.

        Raises:
            NotImplementedError: If the resource type cannot be updated in place
        """
        ...

    def delete(self, resource_id: str) -> None:
        """
        Delete the resource.

        Args:
            resource_id: Resource name
        """
        ...


__all__ = ["ResourceProtocol"]
