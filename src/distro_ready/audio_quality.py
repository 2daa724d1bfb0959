"""Audio quality tier classification.

Combines the technical profile of a master with its loudness readiness into
one of three tiers. Every failing condition adds exactly one warning and one
matching recommendation, so a report can never carry a non-ready tier
without telling the artist what to fix:

* hard gates (unreadable profile, out-of-range duration, sample rate,
  channels, bit depth or bitrate, clipping with no DSP ready) force
  ``rejected``;
* soft failures (loudness outside a DSP band, clipping, lossy source,
  non-standard sample rate, mono, unmeasured loudness) cap the tier at
  ``boptone_only``;
* a report with no warnings is ``distribution_ready``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real

from distro_ready.catalog import resolve_catalog
from distro_ready.domain.catalog import AudioLimits, DspCatalog, DspLoudnessTarget
from distro_ready.domain.models import (
    AudioQualityReport,
    LoudnessMeasurement,
    LoudnessReport,
    TechnicalAudioProfile,
)
from distro_ready.loudness import LIMITER_CEILING_DBTP, QUIET_FLOOR_OFFSET_LU, evaluate_loudness
from distro_ready.readiness_options import QualityTier, ReadinessReason, worst_tier


@dataclass(slots=True)
class _Findings:
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    hard_failures: int = 0

    def flag(self, warning: str, recommendation: str, *, hard: bool = False) -> None:
        self.warnings.append(warning)
        self.recommendations.append(recommendation)
        if hard:
            self.hard_failures += 1


def _positive(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value > 0


def _profile_is_sane(profile: TechnicalAudioProfile) -> bool:
    return (
        _positive(profile.sample_rate_hz)
        and _positive(profile.duration_seconds)
        and _positive(profile.channels)
    )


def _check_technical_profile(
    profile: TechnicalAudioProfile | None, limits: AudioLimits, findings: _Findings
) -> None:
    if profile is None:
        findings.flag(
            "Technical profile unavailable: the file could not be analysed.",
            "Re-export the track as a 24-bit WAV or FLAC and upload it again.",
            hard=True,
        )
        return

    if not _profile_is_sane(profile):
        findings.flag(
            "Invalid technical profile: sample rate, duration and channel count must be greater than zero.",
            "The file may be corrupt. Re-export it from your DAW and upload it again.",
            hard=True,
        )
        return

    duration = profile.duration_seconds
    if duration < limits.min_duration_seconds:
        findings.flag(
            f"Track duration ({duration:.1f}s) is below the {limits.min_duration_seconds:.0f}-second "
            "minimum required by most DSPs.",
            "Tracks shorter than 30 seconds are rejected by Spotify, Apple Music, and most other DSPs.",
            hard=True,
        )
    elif duration > limits.max_duration_seconds:
        findings.flag(
            f"Track duration ({duration / 3600:.1f} hours) exceeds the "
            f"{limits.max_duration_seconds / 3600:.0f}-hour maximum.",
            "Split the recording into separate tracks before uploading.",
            hard=True,
        )

    sample_rate = profile.sample_rate_hz
    if sample_rate < limits.min_sample_rate_hz:
        findings.flag(
            f"Sample rate ({sample_rate:,} Hz) is below the {limits.min_sample_rate_hz:,} Hz minimum "
            "required for DSP distribution.",
            "Re-export your track at 44.1kHz or 48kHz.",
            hard=True,
        )
    elif sample_rate not in limits.standard_sample_rates_hz:
        findings.flag(
            f"Sample rate ({sample_rate:,} Hz) is non-standard. Some DSPs may reject it.",
            "Re-export at a standard sample rate such as 44,100 Hz or 48,000 Hz.",
        )

    if profile.channels > limits.max_channels:
        findings.flag(
            f"{profile.channels}-channel audio is not supported for standard distribution.",
            "Deliver a stereo (2-channel) mixdown; immersive masters are submitted separately.",
            hard=True,
        )
    elif profile.channels == 1:
        findings.flag(
            "This track is mono. Stereo is strongly recommended for DSP distribution.",
            "Export a stereo (2-channel) master if one is available.",
        )

    if profile.is_lossless:
        if profile.bit_depth is not None and profile.bit_depth < limits.min_bit_depth_lossless:
            findings.flag(
                f"Bit depth ({profile.bit_depth}-bit) is below the {limits.min_bit_depth_lossless}-bit "
                "minimum for lossless formats.",
                "Re-export your track at 24-bit. 16-bit is the minimum accepted.",
                hard=True,
            )
    else:
        if profile.bitrate_kbps is not None and profile.bitrate_kbps < limits.min_lossy_bitrate_kbps:
            findings.flag(
                f"Bitrate ({profile.bitrate_kbps} kbps) is below the {limits.min_lossy_bitrate_kbps} kbps "
                "minimum for lossy formats.",
                "Re-export at 320 kbps, or better, deliver a lossless master.",
                hard=True,
            )
        findings.flag(
            f"Lossy source ({str(profile.format).upper()}) may limit quality. DSPs require lossless "
            "source files for distribution.",
            "Export your master as a 24-bit WAV or FLAC at 44.1 kHz or 48 kHz for DSP distribution eligibility.",
        )


def _names(targets: list[DspLoudnessTarget]) -> str:
    return ", ".join(target.display_name for target in targets)


def _bands(targets: list[DspLoudnessTarget]) -> str:
    return ", ".join(
        f"{target.target_lufs:.1f} LUFS ±{target.tolerance_lufs:.1f} LU for {target.display_name}"
        for target in targets
    )


def _check_loudness(report: LoudnessReport, catalog: DspCatalog, findings: _Findings) -> None:
    measurement = report.measurement
    lufs = measurement.integrated_lufs
    true_peak = measurement.true_peak_dbtp

    if lufs is None or true_peak is None:
        missing = "Integrated loudness" if lufs is None else "True peak"
        findings.flag(
            f"{missing} not measured: readiness could not be confirmed for any DSP.",
            "Re-run loudness analysis so integrated loudness and true peak can be checked against each DSP target.",
        )
    else:
        failing: dict[ReadinessReason, list[DspLoudnessTarget]] = {}
        for target, result in zip(catalog.loudness_targets, report.dsp_readiness):
            for reason in result.reasons:
                failing.setdefault(reason, []).append(target)

        peak_targets = failing.get(ReadinessReason.TRUE_PEAK)
        if peak_targets:
            ceiling = min(target.max_true_peak_dbtp for target in peak_targets)
            findings.flag(
                f"True peak ({true_peak:.1f} dBTP) is above the ceiling for {_names(peak_targets)}.",
                f"Lower the limiter ceiling to {ceiling:.1f} dBTP or below.",
            )
        loud_targets = failing.get(ReadinessReason.TOO_LOUD)
        if loud_targets:
            findings.flag(
                f"Too loud for {_names(loud_targets)}: integrated loudness ({lufs:.1f} LUFS) "
                "exceeds the platform target plus tolerance.",
                f"Reduce integrated loudness to around {_bands(loud_targets)}.",
            )
        quiet_targets = failing.get(ReadinessReason.TOO_QUIET)
        if quiet_targets:
            findings.flag(
                f"Too quiet for {_names(quiet_targets)}: integrated loudness ({lufs:.1f} LUFS) is "
                f"{QUIET_FLOOR_OFFSET_LU:.0f} LU or more below the platform target.",
                f"Raise integrated loudness to around {_bands(quiet_targets)}.",
            )

    if measurement.is_clipping:
        findings.flag(
            "Clipping detected: the master will sound distorted on DSPs.",
            "Re-master to eliminate clipping before resubmission: apply a true peak limiter "
            f"with a {LIMITER_CEILING_DBTP:.1f} dBTP ceiling.",
            hard=report.ready_count == 0,
        )


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(int(round(seconds)), 60)
    return f"{minutes}:{secs:02d}"


def _profile_summary(profile: TechnicalAudioProfile | None) -> str:
    if profile is None or not _profile_is_sane(profile):
        return ""
    parts = [str(profile.format).upper(), f"{profile.sample_rate_hz:,} Hz"]
    if profile.bit_depth:
        parts.append(f"{profile.bit_depth}-bit")
    parts.append(profile.channel_layout)
    parts.append(_format_duration(profile.duration_seconds))
    return " · ".join(parts)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" + ("" if count == 1 else "s")


def _summary(tier: QualityTier, findings: _Findings, profile_text: str) -> str:
    if tier is QualityTier.DISTRIBUTION_READY:
        prefix = f"{profile_text}. " if profile_text else ""
        return (
            f"Distribution ready. {prefix}This track meets all DSP requirements and is eligible "
            "for global distribution."
        )
    suffix = f" {profile_text}." if profile_text else ""
    if tier is QualityTier.BOPTONE_ONLY:
        return (
            "Uploadable to Boptone, but not yet ready for DSP distribution. "
            f"{_plural(len(findings.warnings), 'issue')} to resolve before distributing to Spotify, "
            f"Apple Music, and other platforms.{suffix}"
        )
    return (
        f"Upload rejected. {_plural(findings.hard_failures, 'critical issue')} must be fixed before "
        f"this track can be uploaded.{suffix}"
    )


def classify(
    technical_profile: TechnicalAudioProfile | None,
    loudness: LoudnessMeasurement | None,
    catalog: DspCatalog | None = None,
) -> AudioQualityReport:
    """Classify an audio master into a distribution tier. Never raises for typed input."""

    table = resolve_catalog(catalog)
    findings = _Findings()

    _check_technical_profile(technical_profile, table.audio_limits, findings)
    loudness_report = evaluate_loudness(loudness, table)
    _check_loudness(loudness_report, table, findings)

    if findings.hard_failures:
        tier = QualityTier.REJECTED
    elif findings.warnings:
        tier = QualityTier.BOPTONE_ONLY
    else:
        tier = QualityTier.DISTRIBUTION_READY
    if loudness_report.measurement.is_clipping:
        tier = worst_tier(tier, QualityTier.BOPTONE_ONLY)

    return AudioQualityReport(
        quality_tier=tier,
        summary=_summary(tier, findings, _profile_summary(technical_profile)),
        warnings=tuple(findings.warnings),
        recommendations=tuple(dict.fromkeys(findings.recommendations)),
        loudness=loudness,
        technical_profile=technical_profile,
        dsp_readiness=loudness_report.dsp_readiness,
    )
