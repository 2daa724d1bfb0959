"""Application service for revenue events and writer payouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence
from uuid import uuid4

from distro_ready.application.event_publisher import EventPublisher, NullEventPublisher
from distro_ready.domain.events import RevenueDistributed, SplitValidationFailed
from distro_ready.domain.models import RevenueDistribution, WriterEarning, WriterSplit
from distro_ready.domain.policies import DEFAULT_FEE_SCHEDULES, FeeSchedule
from distro_ready.readiness_options import RevenueEventType
from distro_ready.revenue_split import ValidationError, distribute_revenue, fan_out


@dataclass(slots=True)
class DistributeRevenue:
    """Use case that validates writer splits and fans revenue out across them."""

    fee_schedules: dict[RevenueEventType, FeeSchedule] = field(
        default_factory=lambda: dict(DEFAULT_FEE_SCHEDULES)
    )
    event_publisher: EventPublisher = NullEventPublisher()

    def _reject(self, error: ValidationError, correlation_id: str, splits: Sequence[WriterSplit]) -> None:
        self.event_publisher.publish(
            SplitValidationFailed(
                correlation_id=correlation_id,
                payload_summary={
                    "code": error.code,
                    "message": error.message,
                    "split_count": len(splits),
                },
            )
        )

    def fan_out(
        self,
        total_revenue_cents: int,
        splits: Sequence[WriterSplit],
        correlation_id: str | None = None,
    ) -> list[WriterEarning]:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            return fan_out(total_revenue_cents, splits)
        except ValidationError as error:
            self._reject(error, run_correlation_id, splits)
            raise

    def distribute(
        self,
        total_cents: int,
        event_type: RevenueEventType,
        splits: Sequence[WriterSplit],
        owner_profile_id: int,
        correlation_id: str | None = None,
    ) -> RevenueDistribution:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            distribution = distribute_revenue(
                total_cents,
                event_type,
                splits,
                owner_profile_id,
                schedules=self.fee_schedules,
            )
        except ValidationError as error:
            self._reject(error, run_correlation_id, splits)
            raise

        self.event_publisher.publish(
            RevenueDistributed(
                correlation_id=run_correlation_id,
                payload_summary={
                    "event_type": event_type.value,
                    "total_cents": distribution.total_cents,
                    "platform_fee_cents": distribution.platform_fee_cents,
                    "processing_fee_cents": distribution.processing_fee_cents,
                    "artist_net_cents": distribution.artist_net_cents,
                    "undistributed_cents": distribution.undistributed_cents,
                    "writer_count": len(distribution.earnings),
                },
            )
        )
        return distribution
