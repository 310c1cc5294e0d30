"""
Core Protocol Interfaces

Protocols describing what a collection member and an injected logger
must look like, without coupling to concrete implementations.

Available Protocols:
    - ResourceProtocol: Optional open/close lifecycle of a single member
    - LoggerProtocol: Warning sink for member failures during a pass
"""

from resource_collection.core.interfaces.logging import LoggerProtocol
from resource_collection.core.interfaces.resource import Callback, ResourceProtocol

__all__ = [
    "Callback",
    "LoggerProtocol",
    "ResourceProtocol",
]
