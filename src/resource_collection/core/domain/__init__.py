"""
Domain Models

This package contains the core domain models for resource collections:
- Lifecycle states and operations
- Capability descriptors
- Error types and the error combiner
- Configuration schemas
"""

from resource_collection.core.domain.capabilities import Supports
from resource_collection.core.domain.config_schema import CollectionOptions
from resource_collection.core.domain.enums import LifecycleOperation, ResourceState
from resource_collection.core.domain.errors import (
    CollectionError,
    CombinedError,
    ConfigError,
    ResourceClosedError,
    ResourceOperationError,
    as_error,
    combine_errors,
)

__all__ = [
    "CollectionError",
    "CollectionOptions",
    "CombinedError",
    "ConfigError",
    "LifecycleOperation",
    "ResourceClosedError",
    "ResourceOperationError",
    "ResourceState",
    "Supports",
    "as_error",
    "combine_errors",
]
