"""Resource Protocol for lifecycle members.

Defines the contract for anything a Collection can open and close.
Every part of it is optional: a member may expose only ``open``, only
``close``, neither, and may or may not carry the ``opened``/``closed``
flags and the ``supports`` capability descriptor.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from resource_collection.core.domain.capabilities import Supports

Callback = Callable[..., None]
"""Continuation receiving an optional error: ``callback()`` or ``callback(error)``."""


class ResourceProtocol(Protocol):
    """Protocol for a unit with an open/close lifecycle.

    Lifecycle:
        1. Resource is created (``opened`` and ``closed`` read False)
        2. open() brings it up; ``opened`` reads True once it succeeds
        3. close() tears it down; ``closed`` reads True once it is done

    Members are invoked in continuation style unless ``supports`` declares
    awaitable-only support, in which case ``open()``/``close()`` are awaited.
    """

    supports: Supports

    @property
    def opened(self) -> bool:
        """Whether the resource is open."""
        ...

    @property
    def closed(self) -> bool:
        """Whether the resource is closed."""
        ...

    def open(self, callback: Callback | None = None) -> Awaitable[None] | Any:
        """Open the resource, reporting the outcome to ``callback``."""
        ...

    def close(self, callback: Callback | None = None) -> Awaitable[None] | Any:
        """Close the resource, reporting the outcome to ``callback``."""
        ...
