"""Application services orchestrating readiness use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from distro_ready.application.event_publisher import EventPublisher, NullEventPublisher
from distro_ready.audio_quality import classify
from distro_ready.catalog import DEFAULT_DSP_CATALOG
from distro_ready.cover_art import evaluate_cover_art
from distro_ready.domain.catalog import DspCatalog
from distro_ready.domain.events import AudioClassified, CoverArtEvaluated, ReleaseScored
from distro_ready.domain.models import (
    AudioQualityReport,
    CoverArtMeasurement,
    CoverArtReport,
    LoudnessMeasurement,
    LoudnessReport,
    ReleaseQualityScore,
    TechnicalAudioProfile,
)
from distro_ready.loudness import evaluate_loudness
from distro_ready.release_score import compute_release_score


@dataclass(frozen=True, slots=True)
class ReleaseReadiness:
    """Every report produced for one release, plus its unified score."""

    correlation_id: str
    audio: AudioQualityReport | None
    loudness: LoudnessReport | None
    cover_art: CoverArtReport | None
    score: ReleaseQualityScore

    def as_dict(self) -> dict[str, object]:
        return {
            "correlationId": self.correlation_id,
            "audioQuality": self.audio.as_dict() if self.audio is not None else None,
            "loudness": self.loudness.as_dict() if self.loudness is not None else None,
            "coverArt": self.cover_art.as_dict() if self.cover_art is not None else None,
            "releaseQualityScore": self.score.as_dict(),
        }


@dataclass(slots=True)
class EvaluateDistributionReadiness:
    """Use case that evaluates audio and artwork against one DSP catalog."""

    catalog: DspCatalog = DEFAULT_DSP_CATALOG
    event_publisher: EventPublisher = NullEventPublisher()

    def classify_audio(
        self,
        technical_profile: TechnicalAudioProfile | None,
        loudness: LoudnessMeasurement | None,
        correlation_id: str | None = None,
    ) -> AudioQualityReport:
        report = classify(technical_profile, loudness, self.catalog)
        self.event_publisher.publish(
            AudioClassified(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "quality_tier": report.quality_tier.value,
                    "warning_count": len(report.warnings),
                    "ready_dsps": [result.dsp_id for result in report.dsp_readiness if result.ready],
                    "catalog_version": self.catalog.catalog_version,
                },
            )
        )
        return report

    def evaluate_cover_art(
        self,
        measurement: CoverArtMeasurement | None,
        correlation_id: str | None = None,
    ) -> CoverArtReport:
        report = evaluate_cover_art(measurement, self.catalog)
        self.event_publisher.publish(
            CoverArtEvaluated(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "quality_tier": report.quality_tier.value,
                    "issue_codes": [issue.code for issue in report.issues],
                    "warning_codes": [issue.code for issue in report.warnings],
                    "catalog_version": self.catalog.catalog_version,
                },
            )
        )
        return report

    def evaluate_release(
        self,
        technical_profile: TechnicalAudioProfile | None = None,
        loudness: LoudnessMeasurement | None = None,
        cover_art: CoverArtMeasurement | None = None,
        correlation_id: str | None = None,
        *,
        include_audio: bool = True,
        include_cover_art: bool = True,
    ) -> ReleaseReadiness:
        """Run every evaluator that has input and fold the reports into a score.

        ``include_audio``/``include_cover_art`` set to ``False`` leave that
        part unevaluated so the score uses its neutral value.
        """

        run_correlation_id = correlation_id or str(uuid4())
        audio_report = (
            self.classify_audio(technical_profile, loudness, correlation_id=run_correlation_id)
            if include_audio
            else None
        )
        loudness_report = (
            evaluate_loudness(loudness, self.catalog)
            if loudness is not None and loudness.is_measured
            else None
        )
        art_report = (
            self.evaluate_cover_art(cover_art, correlation_id=run_correlation_id)
            if include_cover_art
            else None
        )
        score = compute_release_score(audio_report, loudness_report, art_report)
        self.event_publisher.publish(
            ReleaseScored(
                correlation_id=run_correlation_id,
                payload_summary={
                    "score": score.score,
                    "tier": score.tier.value,
                    "audio_score": score.audio_score,
                    "loudness_score": score.loudness_score,
                    "art_score": score.art_score,
                },
            )
        )
        return ReleaseReadiness(
            correlation_id=run_correlation_id,
            audio=audio_report,
            loudness=loudness_report,
            cover_art=art_report,
            score=score,
        )
