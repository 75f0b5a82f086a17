"""
Protocols for type safety.

This package provides protocols that define interfaces for the resource
handlers, enabling better type checking and abstraction.
"""

from .resource_protocol import ResourceProtocol

__all__ = ["ResourceProtocol"]
