"""
Core Domain Enums

Defines lifecycle states and operation names to eliminate magic strings
throughout the codebase.
"""

from enum import Enum


class ResourceState(str, Enum):
    """Lifecycle phase of a single resource."""

    UNOPENED = "unopened"
    OPENING = "opening"
    OPENED = "opened"
    CLOSING = "closing"
    CLOSED = "closed"
    DESTROYING = "destroying"


class LifecycleOperation(str, Enum):
    """Operation a sequencer can drive on a member resource."""

    OPEN = "open"
    CLOSE = "close"

    @property
    def state_flag(self) -> str:
        """Name of the boolean flag that marks the operation as already done."""
        return "opened" if self is LifecycleOperation.OPEN else "closed"
