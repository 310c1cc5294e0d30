"""Invoke a member's open/close operation in the convention it supports.

Every outcome is normalized to ``None`` (success) or an exception, so the
sequencers never have to care how a member reports completion.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from resource_collection.core.domain.capabilities import supports_of
from resource_collection.core.domain.enums import LifecycleOperation
from resource_collection.core.domain.errors import as_error

logger = structlog.get_logger(__name__)


def is_satisfied(resource: Any, operation: LifecycleOperation) -> bool:
    """Return True when ``operation`` has nothing to do for ``resource``.

    That is the case when the member has no such operation at all, or when
    its ``opened``/``closed`` flag already reads True. A missing flag reads
    as False.
    """
    if not callable(getattr(resource, operation.value, None)):
        return True
    return getattr(resource, operation.state_flag, False) is True


async def invoke(resource: Any, operation: LifecycleOperation) -> BaseException | None:
    """Run ``operation`` on ``resource`` and wait for it to settle.

    Args:
        resource: Member resource, see ``ResourceProtocol``.
        operation: Which lifecycle operation to run.

    Returns:
        None on success, otherwise the error the member reported or raised.
    """
    if is_satisfied(resource, operation):
        return None

    method = getattr(resource, operation.value)
    try:
        if supports_of(resource).awaitables_only:
            await method()
            return None
        return await _call_with_continuation(resource, operation, method)
    except asyncio.CancelledError:
        raise
    except Exception as error:
        return error


async def _call_with_continuation(
    resource: Any, operation: LifecycleOperation, method: Any
) -> BaseException | None:
    loop = asyncio.get_running_loop()
    future: asyncio.Future[BaseException | None] = loop.create_future()

    def _settle(error: BaseException | None) -> None:
        if future.done():
            logger.warning(
                "resource.callback_repeated",
                resource=type(resource).__name__,
                operation=operation.value,
            )
            return
        future.set_result(error)

    def _done(error: Any = None) -> None:
        # Members may complete from worker threads.
        loop.call_soon_threadsafe(_settle, as_error(error))

    method(_done)
    return await future
