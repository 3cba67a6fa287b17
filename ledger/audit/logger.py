"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged.
This provides:
1. Complete traceability of balance changes
2. Debugging capability for storage failures
3. A recent-events trail the console can show

The audit logger:
- Never raises into the ledger
- Maps event severity to the log level
- Keeps a bounded in-memory trail of recent events
"""

import logging
from collections import deque
from typing import Optional

import structlog

from ledger.models.audit import EventSeverity, LedgerEvent


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "WARNING", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Call once at startup, before the first logger is used.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
structlog.configure(
    processors=[*_SHARED_PROCESSORS, structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service for ledger events.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail (for the "recent activity" view)
    """

    def __init__(self, trail_size: int = 100):
        self._logger = structlog.get_logger("ledger.audit")
        self._trail: deque[LedgerEvent] = deque(maxlen=trail_size)

    def log(self, event: LedgerEvent) -> None:
        """Log an event and add it to the trail."""
        log_dict = event.to_log_dict()

        if event.severity == EventSeverity.ERROR:
            self._logger.error("ledger_event", **log_dict)
        elif event.severity == EventSeverity.WARNING:
            self._logger.warning("ledger_event", **log_dict)
        elif event.severity == EventSeverity.DEBUG:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

        self._trail.append(event)

    def debug(self, message: str, **fields) -> None:
        """Log a plain debug line that is not a ledger event."""
        self._logger.debug(message, **fields)

    def error(self, message: str, **fields) -> None:
        """Log a plain error line that is not a ledger event."""
        self._logger.error(message, **fields)

    def recent_events(self, limit: Optional[int] = None) -> list[LedgerEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._trail))
        if limit is not None:
            events = events[:limit]
        return events
