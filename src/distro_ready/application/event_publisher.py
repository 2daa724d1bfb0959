"""Application-level event publishing contracts."""

from __future__ import annotations

from typing import Protocol

from distro_ready.domain.events import DomainEvent


class EventPublisher(Protocol):
    """Port for publishing domain events."""

    def publish(self, event: DomainEvent) -> None:
        """Publish a single event."""


class NullEventPublisher:
    """No-op publisher used when nobody listens for readiness events."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return
