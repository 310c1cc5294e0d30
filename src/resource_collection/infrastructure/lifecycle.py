"""State-tracking base class for resources with an open/close lifecycle.

Subclasses implement ``_open`` and ``_close``, which receive the member
snapshot taken synchronously when the operation was called (``_snapshot``).
The base class tracks the lifecycle state, folds concurrent calls into one
pass, and exposes the public ``open``/``close``/``destroy`` surface in both
calling conventions: a continuation receiving an optional error, or an awaitable task.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable, Coroutine
from typing import Any, ClassVar

import structlog

from resource_collection.core.domain.capabilities import Supports
from resource_collection.core.domain.enums import ResourceState
from resource_collection.core.domain.errors import (
    ResourceClosedError,
    as_error,
    combine_errors,
)
from resource_collection.core.interfaces.resource import Callback

logger = structlog.get_logger(__name__)

_CLOSING_STATES = frozenset({ResourceState.CLOSING, ResourceState.DESTROYING})


def _outcome(task: asyncio.Task[None]) -> BaseException | None:
    if task.cancelled():
        return asyncio.CancelledError()
    return task.exception()


def _deliver(callback: Callback, task: asyncio.Task[None]) -> None:
    callback(_outcome(task))


class LifecycleResource:
    """Base for resources that are opened once and closed once.

    Open and close passes are shared: calling ``open`` while an open pass is
    running waits for that pass instead of starting another one, and the
    same holds for ``close``. Closing while opening waits for the open pass
    to settle first. A waiter being cancelled never cancels the shared pass.
    """

    supports: ClassVar[Supports] = Supports(callbacks=True, awaitables=True)

    def __init__(self) -> None:
        self._state = ResourceState.UNOPENED
        self._open_task: asyncio.Task[None] | None = None
        self._close_task: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ResourceState:
        """Current lifecycle state."""
        return self._state

    @property
    def opening(self) -> bool:
        return self._state is ResourceState.OPENING

    @property
    def opened(self) -> bool:
        return self._state is ResourceState.OPENED

    @property
    def closing(self) -> bool:
        return self._state in _CLOSING_STATES

    @property
    def closed(self) -> bool:
        return self._state is ResourceState.CLOSED

    def open(self, callback: Callback | None = None) -> asyncio.Task[None] | None:
        """Open the resource.

        Args:
            callback: Receives ``None`` on success or the error.

        Returns:
            An awaitable task when no callback is given and the class
            supports awaitables, otherwise None.

        Raises:
            TypeError: If ``callback`` is given but not callable.
        """
        return self._dispatch(functools.partial(self._open_once, self._snapshot()), callback)

    def close(
        self, callback: Callback | None = None, *, allow_active: bool = False
    ) -> asyncio.Task[None] | None:
        """Close the resource.

        The resource ends up closed even when ``_close`` fails; the error is
        still reported. ``allow_active`` is accepted for compatibility with
        resources that track active use and has no effect here.
        """
        return self._dispatch(
            functools.partial(self._close_once, self._snapshot(), allow_active=allow_active),
            callback,
        )

    def destroy(
        self, reason: BaseException | None = None, callback: Callback | None = None
    ) -> asyncio.Task[None] | None:
        """Close the resource and report ``reason`` combined with any close error."""
        return self._dispatch(
            functools.partial(self._destroy_once, self._snapshot(), reason), callback
        )

    def _snapshot(self) -> tuple[Any, ...]:
        """Members a pass works on, captured when the operation is called."""
        return ()

    async def _open(self, members: tuple[Any, ...]) -> None:
        """Override to bring the resource up."""

    async def _close(self, members: tuple[Any, ...]) -> None:
        """Override to tear the resource down."""

    async def _open_once(self, members: tuple[Any, ...]) -> None:
        if self._state is ResourceState.CLOSED or self._state in _CLOSING_STATES:
            raise ResourceClosedError(details={"resource": type(self).__name__})
        if self._state is ResourceState.OPENED:
            return

        task = self._open_task
        if task is None:
            self._state = ResourceState.OPENING
            task = asyncio.get_running_loop().create_task(self._run_open(members))
            self._open_task = task
        await asyncio.shield(task)

    async def _run_open(self, members: tuple[Any, ...]) -> None:
        try:
            await self._open(members)
        except BaseException:
            self._state = ResourceState.UNOPENED
            raise
        else:
            self._state = ResourceState.OPENED
            logger.debug("resource.opened", resource=type(self).__name__)
        finally:
            self._open_task = None

    async def _close_once(
        self,
        members: tuple[Any, ...],
        *,
        allow_active: bool = False,
        destroying: bool = False,
    ) -> None:
        if self._state is ResourceState.CLOSED and self._close_task is None:
            return

        task = self._close_task
        if task is None:
            task = asyncio.get_running_loop().create_task(self._run_close(members, destroying))
            self._close_task = task
        await asyncio.shield(task)

    async def _run_close(self, members: tuple[Any, ...], destroying: bool) -> None:
        try:
            if self._open_task is not None:
                await asyncio.wait({self._open_task})

            if self._state is not ResourceState.OPENED:
                self._state = ResourceState.CLOSED
                return

            self._state = ResourceState.DESTROYING if destroying else ResourceState.CLOSING
            try:
                await self._close(members)
            finally:
                self._state = ResourceState.CLOSED
                logger.debug("resource.closed", resource=type(self).__name__)
        finally:
            self._close_task = None

    async def _destroy_once(self, members: tuple[Any, ...], reason: BaseException | None) -> None:
        close_error: BaseException | None = None
        try:
            await self._close_once(members, destroying=True)
        except Exception as error:
            close_error = error

        error = combine_errors([as_error(reason), close_error])
        if error is not None:
            raise error

    def _dispatch(
        self,
        operation: Callable[[], Coroutine[Any, Any, None]],
        callback: Callback | None,
    ) -> asyncio.Task[None] | None:
        if callback is not None and not callable(callback):
            raise TypeError(
                f"callback must be callable, got {type(callback).__name__}; "
                "pass allow_active as a keyword"
            )

        task = asyncio.get_running_loop().create_task(operation())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        if callback is not None:
            task.add_done_callback(functools.partial(_deliver, callback))
            return None
        if self.supports.awaitables:
            return task

        task.add_done_callback(self._log_unhandled)
        return None

    def _log_unhandled(self, task: asyncio.Task[None]) -> None:
        error = _outcome(task)
        if error is not None:
            logger.warning(
                "resource.unhandled_error",
                resource=type(self).__name__,
                error=str(error),
                error_type=type(error).__name__,
            )
