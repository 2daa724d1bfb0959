"""DDD domain layer."""

from .catalog import ArtworkLimits, AudioLimits, DspArtworkRequirement, DspCatalog, DspLoudnessTarget
from .events import AudioClassified, CoverArtEvaluated, DomainEvent, ReleaseScored, RevenueDistributed, SplitValidationFailed
from .models import (
    AudioQualityReport,
    CoverArtMeasurement,
    CoverArtReport,
    DspArtworkCompliance,
    DspReadinessResult,
    Issue,
    LoudnessMeasurement,
    LoudnessReport,
    ReleaseQualityScore,
    RevenueDistribution,
    TechnicalAudioProfile,
    WriterEarning,
    WriterSplit,
)
from .policies import DEFAULT_FEE_SCHEDULES, FeeSchedule, resolve_fee_schedule

__all__ = [
    "DomainEvent",
    "AudioClassified",
    "CoverArtEvaluated",
    "ReleaseScored",
    "RevenueDistributed",
    "SplitValidationFailed",
    "DspLoudnessTarget",
    "DspArtworkRequirement",
    "ArtworkLimits",
    "AudioLimits",
    "DspCatalog",
    "LoudnessMeasurement",
    "TechnicalAudioProfile",
    "DspReadinessResult",
    "LoudnessReport",
    "AudioQualityReport",
    "CoverArtMeasurement",
    "Issue",
    "DspArtworkCompliance",
    "CoverArtReport",
    "WriterSplit",
    "WriterEarning",
    "RevenueDistribution",
    "ReleaseQualityScore",
    "FeeSchedule",
    "DEFAULT_FEE_SCHEDULES",
    "resolve_fee_schedule",
]
