"""Capability descriptor for member resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Supports:
    """Calling conventions a resource's open/close operations accept.

    Attributes:
        callbacks: ``open(callback)`` / ``close(callback)`` is supported.
        awaitables: ``open()`` / ``close()`` returns an awaitable.
    """

    callbacks: bool = True
    awaitables: bool = False

    @property
    def awaitables_only(self) -> bool:
        """True when the resource must be driven by awaiting its operations."""
        return self.awaitables and not self.callbacks


CALLBACKS_ONLY = Supports(callbacks=True, awaitables=False)


def supports_of(resource: Any) -> Supports:
    """Return the declared capability descriptor, defaulting to callbacks."""
    supports = getattr(resource, "supports", None)
    if isinstance(supports, Supports):
        return supports
    return CALLBACKS_ONLY
