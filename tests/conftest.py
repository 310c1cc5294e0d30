"""Test configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog

from resource_collection.core.domain.capabilities import Supports
from resource_collection.infrastructure.lifecycle import LifecycleResource


class CallbackMember:
    """Member with continuation-style open/close and instrumentation.

    Records ``"<op>:start:<name>"`` when an operation is invoked and
    ``"<op>:end:<name>"`` right before it reports back.
    """

    def __init__(
        self,
        name: str,
        events: list[str],
        *,
        delay: float = 0.0,
        open_error: Any = None,
        close_error: Any = None,
    ) -> None:
        self.name = name
        self.events = events
        self.delay = delay
        self.open_error = open_error
        self.close_error = close_error
        self.open_calls = 0
        self.close_calls = 0

    def open(self, callback: Callable[..., None]) -> None:
        self.open_calls += 1
        self._run("open", self.open_error, callback)

    def close(self, callback: Callable[..., None]) -> None:
        self.close_calls += 1
        self._run("close", self.close_error, callback)

    def _run(self, operation: str, error: Any, callback: Callable[..., None]) -> None:
        self.events.append(f"{operation}:start:{self.name}")

        def finish() -> None:
            self.events.append(f"{operation}:end:{self.name}")
            callback(error)

        asyncio.get_running_loop().call_later(self.delay, finish)


class AwaitableMember:
    """Member that only supports awaitable open/close."""

    supports = Supports(callbacks=False, awaitables=True)

    def __init__(
        self,
        name: str,
        events: list[str],
        *,
        open_error: BaseException | None = None,
        close_error: BaseException | None = None,
    ) -> None:
        self.name = name
        self.events = events
        self.open_error = open_error
        self.close_error = close_error
        self.opened = False
        self.closed = False

    async def open(self) -> None:
        self.events.append(f"open:start:{self.name}")
        await asyncio.sleep(0)
        self.events.append(f"open:end:{self.name}")
        if self.open_error is not None:
            raise self.open_error
        self.opened = True

    async def close(self) -> None:
        self.events.append(f"close:start:{self.name}")
        await asyncio.sleep(0)
        self.events.append(f"close:end:{self.name}")
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def member(events: list[str]) -> Callable[..., CallbackMember]:
    """Factory for continuation-style members sharing the ``events`` log."""

    def _make(name: str, **kwargs: Any) -> CallbackMember:
        return CallbackMember(name, events, **kwargs)

    return _make


@pytest.fixture
def awaitable_member(events: list[str]) -> Callable[..., AwaitableMember]:
    """Factory for awaitable-only members sharing the ``events`` log."""

    def _make(name: str, **kwargs: Any) -> AwaitableMember:
        return AwaitableMember(name, events, **kwargs)

    return _make


@pytest.fixture
def create() -> Callable[[], LifecycleResource]:
    """Factory for plain state-tracking resources."""
    return LifecycleResource


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Keep structlog configuration changes from leaking between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def outcome() -> Callable[..., Any]:
    """Run a continuation-style operation and return the error it reports."""

    async def _run(start: Callable[[Callable[..., None]], Any]) -> BaseException | None:
        future: asyncio.Future[BaseException | None] = (
            asyncio.get_running_loop().create_future()
        )
        start(future.set_result)
        return await future

    return _run
