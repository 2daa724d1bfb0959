"""Domain event contracts for readiness and payout workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class AudioClassified(DomainEvent):
    """An audio asset received a quality tier."""


@dataclass(frozen=True, slots=True)
class CoverArtEvaluated(DomainEvent):
    """Cover art was checked against the artwork catalog."""


@dataclass(frozen=True, slots=True)
class ReleaseScored(DomainEvent):
    """Audio, loudness and artwork reports were folded into one release score."""


@dataclass(frozen=True, slots=True)
class RevenueDistributed(DomainEvent):
    """A revenue event was fanned out across writer splits."""


@dataclass(frozen=True, slots=True)
class SplitValidationFailed(DomainEvent):
    """Writer splits for a track violated the 100% invariant."""
