"""Writer split validation and revenue fan-out.

Amounts are integer cents. Every share is floored, so a fan-out never pays
out more than it was given; the floor-rounding remainder stays with the
platform and is reported as ``undistributed_cents``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from math import isfinite
from typing import Iterable, Sequence

from distro_ready.domain.models import RevenueDistribution, WriterEarning, WriterSplit
from distro_ready.domain.policies import FeeSchedule, resolve_fee_schedule
from distro_ready.readiness_options import RevenueEventType, WriterRole

SPLIT_SUM_TOLERANCE = Decimal("0.01")
_HUNDRED = Decimal(100)


@dataclass(frozen=True, slots=True)
class ValidationError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


def _as_decimal(percentage: float) -> Decimal:
    return Decimal(str(percentage))


def validate_splits(splits: Sequence[WriterSplit]) -> None:
    """Raise :class:`ValidationError` unless the splits describe exactly 100%."""

    for split in splits:
        percentage = split.percentage
        if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
            raise ValidationError(
                "invalid_percentage",
                f"Split percentage must be a number, got {percentage!r}.",
            )
        if not isfinite(percentage) or not 0 <= percentage <= 100:
            raise ValidationError(
                "percentage_out_of_range",
                f"Split percentage must be between 0 and 100, got {percentage}.",
            )

    total = sum((_as_decimal(split.percentage) for split in splits), Decimal(0))
    if abs(total - _HUNDRED) > SPLIT_SUM_TOLERANCE:
        raise ValidationError(
            "split_sum_invalid",
            f"Songwriter splits must add up to 100% (got {total.normalize():f}%).",
        )


def _validate_total(total_cents: int) -> None:
    if isinstance(total_cents, bool) or not isinstance(total_cents, int):
        raise ValidationError(
            "invalid_total",
            f"Revenue total must be an integer number of cents, got {total_cents!r}.",
        )
    if total_cents < 0:
        raise ValidationError("negative_total", f"Revenue total cannot be negative, got {total_cents}.")


def _floor_cents(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def payable_splits(splits: Iterable[WriterSplit]) -> list[WriterSplit]:
    """Drop invited writers without a profile and zero shares."""

    return [split for split in splits if split.writer_profile_id is not None and split.percentage > 0]


def fan_out(total_revenue_cents: int, splits: Sequence[WriterSplit]) -> list[WriterEarning]:
    """Split ``total_revenue_cents`` across writers, flooring every share.

    >>> fan_out(1000, [WriterSplit(1, 60), WriterSplit(2, 30), WriterSplit(3, 10)])
    [WriterEarning(writer_profile_id=1, earnings_cents=600), WriterEarning(writer_profile_id=2, earnings_cents=300), WriterEarning(writer_profile_id=3, earnings_cents=100)]
    """

    validate_splits(splits)
    _validate_total(total_revenue_cents)

    payable = payable_splits(splits)
    # Sums inside the tolerance band above 100 are scaled back to 100.
    denominator = max(_HUNDRED, sum((_as_decimal(split.percentage) for split in payable), Decimal(0)))
    total = Decimal(total_revenue_cents)
    return [
        WriterEarning(
            writer_profile_id=split.writer_profile_id,
            earnings_cents=_floor_cents(total * _as_decimal(split.percentage) / denominator),
        )
        for split in payable
    ]


def compute_fees(total_cents: int, schedule: FeeSchedule) -> tuple[int, int]:
    """Return ``(platform_fee, processing_fee)`` clamped so their sum never exceeds the total."""

    _validate_total(total_cents)
    total = Decimal(total_cents)
    platform_fee = min(_floor_cents(total * schedule.platform_fee_rate), total_cents)
    processing_fee = 0
    if schedule.processing_fee_rate or schedule.processing_fee_fixed_cents:
        processing_fee = _floor_cents(
            total * schedule.processing_fee_rate + Decimal(schedule.processing_fee_fixed_cents)
        )
    processing_fee = min(processing_fee, total_cents - platform_fee)
    return platform_fee, processing_fee


def distribute_revenue(
    total_cents: int,
    event_type: RevenueEventType,
    splits: Sequence[WriterSplit],
    owner_profile_id: int,
    schedules: dict[RevenueEventType, FeeSchedule] | None = None,
) -> RevenueDistribution:
    """Withhold the event's fees and fan the artist net out across the splits.

    A track without splits pays 100% of the net to ``owner_profile_id``.
    """

    schedule = resolve_fee_schedule(event_type, schedules)
    effective_splits = list(splits) or [
        WriterSplit(
            writer_profile_id=owner_profile_id,
            percentage=100.0,
            name="Track Owner",
            role=WriterRole.SONGWRITER,
        )
    ]
    validate_splits(effective_splits)

    platform_fee, processing_fee = compute_fees(total_cents, schedule)
    artist_net = total_cents - platform_fee - processing_fee
    return RevenueDistribution(
        event_type=event_type,
        total_cents=total_cents,
        platform_fee_cents=platform_fee,
        processing_fee_cents=processing_fee,
        artist_net_cents=artist_net,
        earnings=tuple(fan_out(artist_net, effective_splits)),
    )
