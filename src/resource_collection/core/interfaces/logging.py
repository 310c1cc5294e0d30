"""Logger accepted by the open/close sequencers.

``open_stack`` and ``close_stack`` report member failures and rollback
failures as structured warnings. Any object with a structlog-style
``warning(event, **fields)`` method can be passed in, which is how a
collection hands over its own bound logger.
"""

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Sink for the sequencers' failure events."""

    def warning(self, event: str, **kwargs: Any) -> None:
        """Record a member or rollback failure as ``event`` with ``kwargs``."""
        ...
