"""Serial open/close passes over an ordered list of resources.

Open walks the list front to back and stops at the first failure, closing
whatever it already opened in reverse order. Close walks the list back to
front and always attempts every member, combining the errors it collects.
Only one member operation is ever in flight at a time.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from resource_collection.application.invocation import invoke
from resource_collection.core.domain.enums import LifecycleOperation
from resource_collection.core.domain.errors import combine_errors
from resource_collection.core.interfaces.logging import LoggerProtocol

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OpenResult:
    """Outcome of one open pass.

    Attributes:
        error: The error of the member that failed to open, unchanged.
        rollback_error: Combined errors raised while closing the members
            opened before the failure.
        opened: Members opened by this pass. Empty when the pass failed,
            since those members were rolled back.
    """

    error: BaseException | None = None
    rollback_error: BaseException | None = None
    opened: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None


async def open_stack(
    resources: Iterable[Any], *, logger: LoggerProtocol | None = None
) -> OpenResult:
    """Open ``resources`` one at a time in list order.

    Args:
        resources: Members to open. A snapshot is taken on entry.
        logger: Optional logger; defaults to the module logger.

    Returns:
        OpenResult carrying the first open error and any rollback error.
    """
    log = logger or _logger
    remaining = list(resources)
    opened: list[Any] = []

    for index, resource in enumerate(remaining):
        error = await invoke(resource, LifecycleOperation.OPEN)
        if error is None:
            opened.append(resource)
            continue

        log.warning(
            "collection.open.member_failed",
            index=index,
            resource=type(resource).__name__,
            error=str(error),
            rolling_back=len(opened),
        )
        rollback_error = await close_stack(opened, logger=log)
        if rollback_error is not None:
            log.warning(
                "collection.rollback.failed",
                error=str(rollback_error),
                error_type=type(rollback_error).__name__,
            )
        return OpenResult(error=error, rollback_error=rollback_error)

    return OpenResult(opened=tuple(opened))


async def close_stack(
    resources: Iterable[Any], *, logger: LoggerProtocol | None = None
) -> BaseException | None:
    """Close ``resources`` one at a time, last member first.

    Every member gets a close attempt even after earlier failures.

    Returns:
        None, the single error, or a CombinedError in the order the
        failures happened.
    """
    log = logger or _logger
    stack = list(resources)
    errors: list[BaseException] = []

    while stack:
        resource = stack.pop()
        error = await invoke(resource, LifecycleOperation.CLOSE)
        if error is not None:
            log.warning(
                "collection.close.member_failed",
                index=len(stack),
                resource=type(resource).__name__,
                error=str(error),
            )
            errors.append(error)

    return combine_errors(errors)
