"""Domain models for readiness evaluation and revenue fan-out.

Inputs are measurements produced by an external analysis step; outputs are
immutable reports. ``as_dict`` renders the camelCase field names consumed by
report renderers, so those keys must not change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from distro_ready.readiness_options import (
    IssueSeverity,
    QualityTier,
    ReadinessReason,
    ReleaseTier,
    RevenueEventType,
    WriterRole,
)


@dataclass(frozen=True, slots=True)
class LoudnessMeasurement:
    """EBU R128 style measurements for one audio asset. ``None`` means not measured."""

    integrated_lufs: float | None = None
    true_peak_dbtp: float | None = None
    loudness_range_lu: float | None = None
    is_clipping: bool = False

    @property
    def is_measured(self) -> bool:
        return self.integrated_lufs is not None and self.true_peak_dbtp is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "integratedLufs": self.integrated_lufs,
            "truePeakDbtp": self.true_peak_dbtp,
            "loudnessRangeLu": self.loudness_range_lu,
            "isClipping": self.is_clipping,
        }


@dataclass(frozen=True, slots=True)
class TechnicalAudioProfile:
    format: str
    sample_rate_hz: int
    bit_depth: int | None
    channels: int
    duration_seconds: float
    is_lossless: bool
    bitrate_kbps: int | None = None

    @property
    def channel_layout(self) -> str:
        if self.channels == 1:
            return "Mono"
        if self.channels == 2:
            return "Stereo"
        return f"{self.channels} channels"

    def as_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "sampleRateHz": self.sample_rate_hz,
            "bitDepth": self.bit_depth,
            "channels": self.channels,
            "durationSeconds": self.duration_seconds,
            "isLossless": self.is_lossless,
            "bitrateKbps": self.bitrate_kbps,
        }


@dataclass(frozen=True, slots=True)
class DspReadinessResult:
    """Loudness verdict of one DSP for one asset."""

    dsp_id: str
    ready: bool
    reasons: tuple[ReadinessReason, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "dspId": self.dsp_id,
            "ready": self.ready,
            "reasons": [reason.value for reason in self.reasons],
        }


@dataclass(frozen=True, slots=True)
class LoudnessReport:
    """Per-DSP loudness readiness for one measurement."""

    measurement: LoudnessMeasurement
    dsp_readiness: tuple[DspReadinessResult, ...]
    gauge_percent: float | None
    recommendation: str

    @property
    def ready_count(self) -> int:
        return sum(1 for result in self.dsp_readiness if result.ready)

    @property
    def all_ready(self) -> bool:
        return bool(self.dsp_readiness) and self.ready_count == len(self.dsp_readiness)

    def readiness_map(self) -> dict[str, bool]:
        return {result.dsp_id: result.ready for result in self.dsp_readiness}

    def as_dict(self) -> dict[str, Any]:
        payload = self.measurement.as_dict()
        payload.update(
            {
                "dspReadiness": self.readiness_map(),
                "readyCount": self.ready_count,
                "gaugePercent": self.gauge_percent,
                "recommendation": self.recommendation,
            }
        )
        return payload


@dataclass(frozen=True, slots=True)
class AudioQualityReport:
    quality_tier: QualityTier
    summary: str
    warnings: tuple[str, ...]
    recommendations: tuple[str, ...]
    loudness: LoudnessMeasurement | None
    technical_profile: TechnicalAudioProfile | None
    dsp_readiness: tuple[DspReadinessResult, ...] = ()

    @property
    def is_distribution_ready(self) -> bool:
        return self.quality_tier is QualityTier.DISTRIBUTION_READY

    def as_dict(self) -> dict[str, Any]:
        return {
            "qualityTier": self.quality_tier.value,
            "isDistributionReady": self.is_distribution_ready,
            "summary": self.summary,
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
            "loudness": self.loudness.as_dict() if self.loudness is not None else None,
            "technicalProfile": (
                self.technical_profile.as_dict() if self.technical_profile is not None else None
            ),
            "dspReadiness": [result.as_dict() for result in self.dsp_readiness],
        }


@dataclass(frozen=True, slots=True)
class CoverArtMeasurement:
    """Decoded image facts. Every field may be ``None`` when undetermined."""

    width: int | None = None
    height: int | None = None
    format: str | None = None
    color_space: str | None = None
    file_size_bytes: int | None = None
    has_alpha_channel: bool | None = None
    dpi: float | None = None


@dataclass(frozen=True, slots=True)
class Issue:
    code: str
    severity: IssueSeverity
    message: str
    detail: str | None = None
    affected_dsps: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.detail is not None:
            payload["detail"] = self.detail
        if self.affected_dsps:
            payload["affectedDsps"] = list(self.affected_dsps)
        return payload


@dataclass(frozen=True, slots=True)
class DspArtworkCompliance:
    name: str
    ready: bool
    reason: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "ready": self.ready}
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


@dataclass(frozen=True, slots=True)
class CoverArtReport:
    quality_tier: QualityTier
    width: int | None
    height: int | None
    format: str | None
    color_space: str | None
    file_size_bytes: int | None
    has_alpha_channel: bool
    issues: tuple[Issue, ...]
    warnings: tuple[Issue, ...]
    dsp_compliance: tuple[DspArtworkCompliance, ...]
    recommendation: str | None
    info: tuple[Issue, ...] = ()
    dpi: float | None = None

    @property
    def is_distribution_ready(self) -> bool:
        return self.quality_tier is QualityTier.DISTRIBUTION_READY

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def as_dict(self) -> dict[str, Any]:
        return {
            "qualityTier": self.quality_tier.value,
            "isDistributionReady": self.is_distribution_ready,
            "isValid": self.is_valid,
            "width": self.width,
            "height": self.height,
            "format": self.format,
            "colorSpace": self.color_space,
            "fileSizeBytes": self.file_size_bytes,
            "hasAlphaChannel": self.has_alpha_channel,
            "dpi": self.dpi,
            "issues": [issue.as_dict() for issue in self.issues],
            "warnings": [issue.as_dict() for issue in self.warnings],
            "info": [issue.as_dict() for issue in self.info],
            "dspCompliance": [entry.as_dict() for entry in self.dsp_compliance],
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True, slots=True)
class WriterSplit:
    """One writer's share of a track. ``writer_profile_id`` is ``None`` while invited."""

    writer_profile_id: int | None
    percentage: float
    name: str | None = None
    role: WriterRole = WriterRole.SONGWRITER


@dataclass(frozen=True, slots=True)
class WriterEarning:
    writer_profile_id: int
    earnings_cents: int

    def as_dict(self) -> dict[str, Any]:
        return {"writerProfileId": self.writer_profile_id, "earningsCents": self.earnings_cents}


@dataclass(frozen=True, slots=True)
class RevenueDistribution:
    """Fees and writer fan-out for a single revenue event."""

    event_type: RevenueEventType
    total_cents: int
    platform_fee_cents: int
    processing_fee_cents: int
    artist_net_cents: int
    earnings: tuple[WriterEarning, ...] = field(default_factory=tuple)

    @property
    def distributed_cents(self) -> int:
        return sum(earning.earnings_cents for earning in self.earnings)

    @property
    def undistributed_cents(self) -> int:
        return self.artist_net_cents - self.distributed_cents

    def as_dict(self) -> dict[str, Any]:
        return {
            "eventType": self.event_type.value,
            "totalAmount": self.total_cents,
            "platformFee": self.platform_fee_cents,
            "processingFee": self.processing_fee_cents,
            "artistNetAmount": self.artist_net_cents,
            "undistributedAmount": self.undistributed_cents,
            "distributions": [earning.as_dict() for earning in self.earnings],
        }


@dataclass(frozen=True, slots=True)
class ReleaseQualityScore:
    score: int
    tier: ReleaseTier
    audio_score: int
    loudness_score: int
    art_score: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "tier": self.tier.value,
            "audioScore": self.audio_score,
            "loudnessScore": self.loudness_score,
            "artScore": self.art_score,
        }
