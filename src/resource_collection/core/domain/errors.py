"""Domain-specific exception types and the error combiner."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CollectionError(Exception):
    """Base exception for resource collection errors."""

    message: str
    code: str = "collection_error"
    details: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class ResourceClosedError(CollectionError):
    """Error raised when opening a resource that is closing or closed."""

    def __init__(self, message: str = "Resource is closed", *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="resource_closed", details=details)


class ResourceOperationError(CollectionError):
    """Error reported by a member whose continuation passed a non-exception value."""

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        self.value = value
        super().__init__(message=message, code="resource_operation_error", details=details)


class ConfigError(CollectionError):
    """Error raised for invalid collection options."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)


class CombinedError(CollectionError):
    """Single error standing for two or more constituent errors.

    The message joins each constituent's message with ``"; "`` in input
    order. The constituents stay available through ``errors``.
    """

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__(
            message="; ".join(_describe(error) for error in self.errors),
            code="combined_error",
            details={"count": len(self.errors)},
        )


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


def combine_errors(errors: Iterable[BaseException | None]) -> BaseException | None:
    """Reduce an ordered sequence of optional errors to at most one error.

    Args:
        errors: Errors in reporting order; ``None`` entries are skipped.

    Returns:
        ``None`` when nothing failed, the error itself when exactly one
        failed, otherwise a ``CombinedError``. Nested combined errors are
        flattened and an exception object is only listed once.
    """
    flat: list[BaseException] = []
    seen: set[int] = set()

    for error in errors:
        if error is None:
            continue
        members = error.errors if isinstance(error, CombinedError) else (error,)
        for member in members:
            if id(member) in seen:
                continue
            seen.add(id(member))
            flat.append(member)

    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return CombinedError(flat)


def as_error(value: Any) -> BaseException | None:
    """Normalize a reported error value into an exception (or ``None``)."""
    if value is None or isinstance(value, BaseException):
        return value
    return ResourceOperationError(str(value), value=value)
