"""Unified 0-100 release quality score.

Audio is worth 40 points, loudness 25 and cover art 35. A missing report
scores a neutral value so a partially analysed release is not punished for
the analysis that has not run yet.
"""

from __future__ import annotations

from distro_ready.domain.models import AudioQualityReport, CoverArtReport, LoudnessReport, ReleaseQualityScore
from distro_ready.readiness_options import IssueSeverity, QualityTier, ReleaseTier

AUDIO_MAX_POINTS = 40
LOUDNESS_MAX_POINTS = 25
ART_MAX_POINTS = 35

NEUTRAL_AUDIO_POINTS = 20
NEUTRAL_LOUDNESS_POINTS = 12
NEUTRAL_ART_POINTS = 17

PREMIUM_BIT_DEPTH = 24
PREMIUM_SAMPLE_RATE_HZ = 96_000
PREMIUM_ART_SIZE_PX = 4000

_RELEASE_TIER_FLOORS: tuple[tuple[int, ReleaseTier], ...] = (
    (90, ReleaseTier.BOPTONE_PREMIUM),
    (70, ReleaseTier.DISTRIBUTION_READY),
    (40, ReleaseTier.BOPTONE_ONLY),
)


def _is_premium_audio(report: AudioQualityReport) -> bool:
    profile = report.technical_profile
    return (
        profile is not None
        and profile.is_lossless
        and (profile.bit_depth or 0) >= PREMIUM_BIT_DEPTH
        and profile.sample_rate_hz >= PREMIUM_SAMPLE_RATE_HZ
    )


def audio_points(report: AudioQualityReport | None) -> int:
    if report is None:
        return NEUTRAL_AUDIO_POINTS
    if report.quality_tier is QualityTier.DISTRIBUTION_READY:
        return AUDIO_MAX_POINTS if _is_premium_audio(report) else 32
    if report.quality_tier is QualityTier.BOPTONE_ONLY:
        return 18 if report.warnings else 24
    return 0


def loudness_points(report: LoudnessReport | None, audio: AudioQualityReport | None = None) -> int:
    if report is None:
        if audio is not None and audio.is_distribution_ready:
            return NEUTRAL_LOUDNESS_POINTS
        return 0

    total = len(report.dsp_readiness)
    ready_ratio = report.ready_count / total if total else 0.0
    true_peak = report.measurement.true_peak_dbtp
    true_peak_ok = (true_peak if true_peak is not None else 0.0) <= 0

    if ready_ratio >= 0.8 and true_peak_ok and not report.measurement.is_clipping:
        return LOUDNESS_MAX_POINTS
    if ready_ratio >= 0.5 and true_peak_ok:
        return 18
    if ready_ratio >= 0.3:
        return 12
    return 5


def art_points(report: CoverArtReport | None) -> int:
    if report is None:
        return NEUTRAL_ART_POINTS

    has_errors = any(issue.severity is IssueSeverity.ERROR for issue in report.issues)
    is_premium = (report.width or 0) >= PREMIUM_ART_SIZE_PX and (report.height or 0) >= PREMIUM_ART_SIZE_PX

    if report.is_distribution_ready and not report.warnings:
        return ART_MAX_POINTS if is_premium else 28
    if report.is_distribution_ready:
        return 24
    if not has_errors:
        return 14
    return 0


def release_tier(score: int) -> ReleaseTier:
    for floor, tier in _RELEASE_TIER_FLOORS:
        if score >= floor:
            return tier
    return ReleaseTier.NEEDS_WORK


def compute_release_score(
    audio: AudioQualityReport | None = None,
    loudness: LoudnessReport | None = None,
    cover_art: CoverArtReport | None = None,
) -> ReleaseQualityScore:
    audio_score = audio_points(audio)
    loudness_score = loudness_points(loudness, audio)
    art_score = art_points(cover_art)
    score = min(100, audio_score + loudness_score + art_score)
    return ReleaseQualityScore(
        score=score,
        tier=release_tier(score),
        audio_score=audio_score,
        loudness_score=loudness_score,
        art_score=art_score,
    )
