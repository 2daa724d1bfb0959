"""Shared readiness enums and parsing helpers."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar


class QualityTier(str, Enum):
    """Distribution eligibility of a single asset, most severe first."""

    REJECTED = "rejected"
    BOPTONE_ONLY = "boptone_only"
    DISTRIBUTION_READY = "distribution_ready"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK: dict[QualityTier, int] = {
    QualityTier.REJECTED: 0,
    QualityTier.BOPTONE_ONLY: 1,
    QualityTier.DISTRIBUTION_READY: 2,
}


class ReleaseTier(str, Enum):
    """Badge assigned to a whole release by the unified quality score."""

    BOPTONE_PREMIUM = "boptone_premium"
    DISTRIBUTION_READY = "distribution_ready"
    BOPTONE_ONLY = "boptone_only"
    NEEDS_WORK = "needs_work"


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ReadinessReason(str, Enum):
    """Why a DSP rejected a loudness measurement."""

    TRUE_PEAK = "true_peak"
    TOO_LOUD = "too_loud"
    TOO_QUIET = "too_quiet"
    NOT_MEASURED = "not_measured"


class WriterRole(str, Enum):
    SONGWRITER = "songwriter"
    PRODUCER = "producer"
    MIXER = "mixer"
    MASTERING = "mastering"
    OTHER = "other"


class RevenueEventType(str, Enum):
    """Kinds of money movement that fan out across writer splits."""

    STREAM = "stream"
    TIP = "tip"
    SALE = "sale"


EnumT = TypeVar("EnumT", bound=Enum)


def enum_values(enum_cls: type[EnumT]) -> tuple[str, ...]:
    """Return enum values for UI/CLI hinting in declaration order."""

    return tuple(str(member.value) for member in enum_cls)


def parse_case_insensitive_enum(raw_value: str, enum_cls: type[EnumT]) -> EnumT:
    """Parse enum values case-insensitively and raise ValueError with allowed values."""

    normalized = raw_value.strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == normalized:
            return member

    allowed = ", ".join(enum_values(enum_cls))
    enum_name = enum_cls.__name__
    raise ValueError(f"Invalid {enum_name}: '{raw_value}'. Allowed values: {allowed}.")


def worst_tier(*tiers: QualityTier) -> QualityTier:
    """Return the most severe tier of those given."""

    if not tiers:
        raise ValueError("worst_tier() requires at least one tier.")
    return min(tiers, key=lambda tier: tier.rank)
