"""Domain value objects representing stable revenue policies."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from distro_ready.readiness_options import RevenueEventType


@dataclass(frozen=True, slots=True)
class FeeSchedule:
    """Fees withheld from a revenue event before writer fan-out."""

    policy_id: str
    platform_fee_rate: Decimal = Decimal("0")
    processing_fee_rate: Decimal = Decimal("0")
    processing_fee_fixed_cents: int = 0
    policy_version: str = "v1"


DEFAULT_FEE_SCHEDULES: dict[RevenueEventType, FeeSchedule] = {
    RevenueEventType.STREAM: FeeSchedule(
        policy_id="stream-default",
        platform_fee_rate=Decimal("0.10"),
    ),
    RevenueEventType.TIP: FeeSchedule(
        policy_id="tip-default",
        processing_fee_rate=Decimal("0.029"),
        processing_fee_fixed_cents=30,
    ),
    RevenueEventType.SALE: FeeSchedule(
        policy_id="sale-default",
        platform_fee_rate=Decimal("0.05"),
        processing_fee_rate=Decimal("0.029"),
        processing_fee_fixed_cents=30,
    ),
}


def resolve_fee_schedule(
    event_type: RevenueEventType,
    schedules: dict[RevenueEventType, FeeSchedule] | None = None,
) -> FeeSchedule:
    table = DEFAULT_FEE_SCHEDULES if schedules is None else schedules
    try:
        return table[event_type]
    except KeyError as exc:
        allowed = ", ".join(sorted(item.value for item in table))
        raise ValueError(
            f"No fee schedule for revenue event '{event_type.value}'. Allowed: {allowed}."
        ) from exc
