from dataclasses import replace

import pytest

from distro_ready.audio_quality import classify
from distro_ready.domain.catalog import DspCatalog, DspLoudnessTarget
from distro_ready.domain.models import LoudnessMeasurement, TechnicalAudioProfile
from distro_ready.readiness_options import QualityTier, ReadinessReason


def test_clean_lossless_master_is_distribution_ready(studio_profile, streaming_loudness):
    report = classify(studio_profile, streaming_loudness)

    assert report.quality_tier is QualityTier.DISTRIBUTION_READY
    assert report.warnings == ()
    assert report.recommendations == ()
    assert report.summary.startswith("Distribution ready. FLAC · 44,100 Hz · 24-bit · Stereo · 3:30.")
    assert report.loudness is streaming_loudness
    assert all(result.ready for result in report.dsp_readiness)


def test_clipping_never_yields_distribution_ready(studio_profile, streaming_loudness):
    report = classify(studio_profile, replace(streaming_loudness, is_clipping=True))

    assert report.quality_tier is QualityTier.BOPTONE_ONLY
    assert any(warning.startswith("Clipping detected") for warning in report.warnings)
    assert any("true peak limiter" in item for item in report.recommendations)


def test_clipping_with_no_ready_dsp_is_rejected(studio_profile):
    loudness = LoudnessMeasurement(integrated_lufs=-5.0, true_peak_dbtp=0.5, is_clipping=True)

    report = classify(studio_profile, loudness)

    assert report.quality_tier is QualityTier.REJECTED
    assert report.summary.startswith("Upload rejected. 1 critical issue must be fixed")


def test_missing_profile_is_rejected(streaming_loudness):
    report = classify(None, streaming_loudness)

    assert report.quality_tier is QualityTier.REJECTED
    assert report.technical_profile is None
    assert report.warnings[0].startswith("Technical profile unavailable")


def test_malformed_profile_is_rejected_without_raising(studio_profile, streaming_loudness):
    report = classify(replace(studio_profile, sample_rate_hz=0), streaming_loudness)

    assert report.quality_tier is QualityTier.REJECTED
    assert report.summary == (
        "Upload rejected. 1 critical issue must be fixed before this track can be uploaded."
    )


@pytest.mark.parametrize(
    ("changes", "fragment"),
    [
        ({"duration_seconds": 12.0}, "Track duration (12.0s)"),
        ({"duration_seconds": 40_000.0}, "exceeds the 10-hour maximum"),
        ({"sample_rate_hz": 22_050}, "Sample rate (22,050 Hz) is below"),
        ({"channels": 6}, "6-channel audio"),
        ({"bit_depth": 8}, "Bit depth (8-bit)"),
    ],
)
def test_hard_gates_reject(studio_profile, streaming_loudness, changes, fragment):
    report = classify(replace(studio_profile, **changes), streaming_loudness)

    assert report.quality_tier is QualityTier.REJECTED
    assert any(fragment in warning for warning in report.warnings)


def test_low_bitrate_lossy_source_is_rejected(streaming_loudness):
    profile = TechnicalAudioProfile(
        format="mp3",
        sample_rate_hz=44_100,
        bit_depth=None,
        channels=2,
        duration_seconds=200.0,
        is_lossless=False,
        bitrate_kbps=96,
    )

    report = classify(profile, streaming_loudness)

    assert report.quality_tier is QualityTier.REJECTED
    assert any("Bitrate (96 kbps)" in warning for warning in report.warnings)


def test_lossy_source_is_boptone_only(streaming_loudness):
    profile = TechnicalAudioProfile(
        format="mp3",
        sample_rate_hz=44_100,
        bit_depth=None,
        channels=2,
        duration_seconds=200.0,
        is_lossless=False,
        bitrate_kbps=320,
    )

    report = classify(profile, streaming_loudness)

    assert report.quality_tier is QualityTier.BOPTONE_ONLY
    assert report.warnings == (
        "Lossy source (MP3) may limit quality. DSPs require lossless source files for distribution.",
    )
    assert report.summary.startswith("Uploadable to Boptone, but not yet ready for DSP distribution. 1 issue to resolve")
    assert report.summary.endswith("MP3 · 44,100 Hz · Stereo · 3:20.")


@pytest.mark.parametrize(
    ("changes", "fragment"),
    [
        ({"sample_rate_hz": 47_000}, "non-standard"),
        ({"channels": 1}, "This track is mono"),
    ],
)
def test_soft_failures_cap_at_boptone_only(studio_profile, streaming_loudness, changes, fragment):
    report = classify(replace(studio_profile, **changes), streaming_loudness)

    assert report.quality_tier is QualityTier.BOPTONE_ONLY
    assert any(fragment in warning for warning in report.warnings)


def test_unmeasured_loudness_is_boptone_only(studio_profile):
    report = classify(studio_profile, None)

    assert report.quality_tier is QualityTier.BOPTONE_ONLY
    assert report.loudness is None
    assert report.warnings[0].startswith("Integrated loudness not measured")
    assert all(result.reasons == (ReadinessReason.NOT_MEASURED,) for result in report.dsp_readiness)


def test_loud_master_names_failing_platform(studio_profile):
    report = classify(studio_profile, LoudnessMeasurement(integrated_lufs=-14.0, true_peak_dbtp=-2.5))

    assert report.quality_tier is QualityTier.BOPTONE_ONLY
    assert report.warnings[0].startswith("Too loud for Apple Music:")
    assert report.recommendations == ("Reduce integrated loudness to around -16.0 LUFS ±1.0 LU for Apple Music.",)


def test_true_peak_and_loudness_warnings_are_grouped(studio_profile):
    report = classify(studio_profile, LoudnessMeasurement(integrated_lufs=-10.0, true_peak_dbtp=-0.5))

    assert report.warnings[0].startswith("True peak (-0.5 dBTP) is above the ceiling for Spotify, Apple Music")
    assert report.warnings[1].startswith("Too loud for Spotify, Apple Music, YouTube, Amazon Music HD")
    assert len(report.warnings) == len(report.recommendations)


def test_non_ready_reports_always_explain_themselves(studio_profile):
    inputs = [
        (None, None),
        (studio_profile, None),
        (replace(studio_profile, channels=1), LoudnessMeasurement(-30.0, -6.0)),
        (studio_profile, LoudnessMeasurement(-4.0, 1.0, is_clipping=True)),
    ]

    for profile, loudness in inputs:
        report = classify(profile, loudness)
        assert report.quality_tier is not QualityTier.DISTRIBUTION_READY
        assert report.warnings
        assert report.recommendations


def test_classify_respects_custom_catalog(studio_profile):
    catalog = DspCatalog(
        catalog_version="spotify-only",
        loudness_targets=(DspLoudnessTarget("spotify", "Spotify", -14.0, 1.0, -1.0),),
        artwork_requirements=(),
    )

    report = classify(studio_profile, LoudnessMeasurement(integrated_lufs=-14.0, true_peak_dbtp=-1.5), catalog)

    assert report.quality_tier is QualityTier.DISTRIBUTION_READY


def test_as_dict_uses_tier_literals(studio_profile, streaming_loudness):
    payload = classify(studio_profile, streaming_loudness).as_dict()

    assert payload["qualityTier"] == "distribution_ready"
    assert payload["isDistributionReady"] is True
    assert payload["technicalProfile"]["sampleRateHz"] == 44_100
    assert payload["loudness"]["isClipping"] is False
