"""Collection: an ordered group of resources that is itself a resource.

Opening a collection opens its members in list order with all-or-nothing
semantics; closing it closes them in reverse order and reports every
failure. Because a Collection satisfies the same contract it consumes,
collections nest.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import TracebackType
from typing import Any, ClassVar

import structlog

from resource_collection.application.sequencer import close_stack, open_stack
from resource_collection.core.domain.capabilities import Supports
from resource_collection.core.domain.config_schema import CollectionOptions, load_options
from resource_collection.core.domain.enums import ResourceState
from resource_collection.infrastructure.lifecycle import LifecycleResource

logger = structlog.get_logger(__name__)


class Collection(LifecycleResource):
    """Ordered, append-only group of resources opened and closed as one.

    Members may be any object with optional ``open``/``close`` operations,
    see ``ResourceProtocol``. Results are delivered to callbacks; use
    ``AwaitableCollection`` to await them instead.

    Example:
        >>> collection = Collection([db, cache], {"name": "storage"})
        >>> collection.push(index)
        >>> collection.open(lambda error: ...)
    """

    supports: ClassVar[Supports] = Supports(callbacks=True, awaitables=False)

    def __init__(
        self,
        resources: Iterable[Any] | None = None,
        options: CollectionOptions | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self._options = load_options(options)
        self._resources: list[Any] = list(resources or ())
        self._rollback_error: BaseException | None = None
        self._logger = logger.bind(collection=self._options.name)

        # Reported as opened until the first explicit open runs the member pass.
        self._preseeded = self._options.opened
        if self._preseeded:
            self._state = ResourceState.OPENED

    @property
    def options(self) -> CollectionOptions:
        return self._options

    @property
    def rollback_error(self) -> BaseException | None:
        """Errors raised while rolling back the last failed open, if any."""
        return self._rollback_error

    def push(self, *resources: Any) -> None:
        """Append members. Passes already running are not affected."""
        self._resources.extend(resources)
        self._logger.debug("collection.pushed", added=len(resources), size=len(self._resources))

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._resources)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._options.name!r}, "
            f"state={self._state.value}, size={len(self._resources)})"
        )

    def _snapshot(self) -> tuple[Any, ...]:
        return tuple(self._resources)

    async def _open_once(self, members: tuple[Any, ...]) -> None:
        if self._preseeded:
            self._preseeded = False
            self._state = ResourceState.UNOPENED
        await super()._open_once(members)

    async def _close_once(
        self,
        members: tuple[Any, ...],
        *,
        allow_active: bool = False,
        destroying: bool = False,
    ) -> None:
        self._preseeded = False
        await super()._close_once(members, allow_active=allow_active, destroying=destroying)

    async def _open(self, members: tuple[Any, ...]) -> None:
        self._rollback_error = None
        self._logger.debug("collection.open.started", size=len(members))

        result = await open_stack(members, logger=self._logger)
        if result.error is not None:
            self._rollback_error = result.rollback_error
            raise result.error

        self._logger.info("collection.opened", size=len(result.opened))

    async def _close(self, members: tuple[Any, ...]) -> None:
        self._logger.debug("collection.close.started", size=len(members))

        error = await close_stack(members, logger=self._logger)
        if error is not None:
            self._logger.warning(
                "collection.close.failed",
                error=str(error),
                error_type=type(error).__name__,
            )
            raise error

        self._logger.info("collection.closed", size=len(members))


class AwaitableCollection(Collection):
    """Collection whose operations return an awaitable when no callback is given.

    Also usable as an async context manager: the collection is opened on
    entry and closed on exit.
    """

    supports: ClassVar[Supports] = Supports(callbacks=True, awaitables=True)

    async def __aenter__(self) -> AwaitableCollection:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
