"""Logging-backed implementation of the event publisher."""

from __future__ import annotations

import logging

from distro_ready.domain.events import DomainEvent

LOGGER = logging.getLogger("distro_ready.events")


class LoggingEventPublisher:
    """Emit readiness and payout event summaries to structured logs."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def publish(self, event: DomainEvent) -> None:
        LOGGER.log(
            self.level,
            "domain_event_emitted",
            extra={
                "event_name": type(event).__name__,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
