"""DDD application layer."""

from .event_publisher import EventPublisher, NullEventPublisher
from .payout_service import DistributeRevenue
from .readiness_service import EvaluateDistributionReadiness, ReleaseReadiness

__all__ = [
    "EventPublisher",
    "NullEventPublisher",
    "EvaluateDistributionReadiness",
    "ReleaseReadiness",
    "DistributeRevenue",
]
