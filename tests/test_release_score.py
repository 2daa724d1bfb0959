from dataclasses import replace

import pytest

from distro_ready.audio_quality import classify
from distro_ready.cover_art import evaluate_cover_art
from distro_ready.domain.models import LoudnessMeasurement
from distro_ready.loudness import evaluate_loudness
from distro_ready.readiness_options import ReleaseTier
from distro_ready.release_score import compute_release_score, loudness_points, release_tier


def test_nothing_analysed_scores_neutral_values():
    score = compute_release_score()

    assert (score.audio_score, score.loudness_score, score.art_score) == (20, 0, 17)
    assert score.score == 37
    assert score.tier is ReleaseTier.NEEDS_WORK


def test_hi_res_release_with_large_artwork_is_premium(hi_res_profile, streaming_loudness, clean_artwork):
    score = compute_release_score(
        audio=classify(hi_res_profile, streaming_loudness),
        loudness=evaluate_loudness(streaming_loudness),
        cover_art=evaluate_cover_art(replace(clean_artwork, width=4000, height=4000, file_size_bytes=8 * 1024 * 1024)),
    )

    assert (score.audio_score, score.loudness_score, score.art_score) == (40, 25, 35)
    assert score.score == 100
    assert score.tier is ReleaseTier.BOPTONE_PREMIUM


def test_standard_release_is_distribution_ready(studio_profile, streaming_loudness, clean_artwork):
    score = compute_release_score(
        audio=classify(studio_profile, streaming_loudness),
        loudness=evaluate_loudness(streaming_loudness),
        cover_art=evaluate_cover_art(clean_artwork),
    )

    assert (score.audio_score, score.loudness_score, score.art_score) == (32, 25, 28)
    assert score.tier is ReleaseTier.DISTRIBUTION_READY


def test_missing_loudness_is_neutral_only_for_ready_audio(studio_profile, streaming_loudness):
    ready_audio = classify(studio_profile, streaming_loudness)
    mono_audio = classify(replace(studio_profile, channels=1), streaming_loudness)

    assert compute_release_score(audio=ready_audio).loudness_score == 12
    assert compute_release_score(audio=mono_audio).loudness_score == 0
    assert compute_release_score(audio=mono_audio).audio_score == 18


def test_rejected_assets_score_zero(clean_artwork):
    score = compute_release_score(
        audio=classify(None, None),
        cover_art=evaluate_cover_art(replace(clean_artwork, color_space="CMYK")),
    )

    assert score.audio_score == 0
    assert score.art_score == 0


def test_artwork_with_warnings_but_every_gate_passed_scores_24(clean_artwork):
    report = evaluate_cover_art(replace(clean_artwork, format="png", has_alpha_channel=True))

    assert compute_release_score(cover_art=report).art_score == 24


def test_uploadable_artwork_scores_14(clean_artwork):
    report = evaluate_cover_art(replace(clean_artwork, width=2000, height=2000))

    assert compute_release_score(cover_art=report).art_score == 14


@pytest.mark.parametrize(
    ("lufs", "true_peak", "clipping", "expected"),
    [
        (-15.5, -2.1, False, 25),
        (-15.5, -2.1, True, 18),
        (-18.0, -3.0, False, 12),
        (-30.0, -3.0, False, 5),
    ],
)
def test_loudness_points_follow_ready_ratio(lufs, true_peak, clipping, expected):
    report = evaluate_loudness(LoudnessMeasurement(lufs, true_peak, is_clipping=clipping))

    assert loudness_points(report) == expected


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (100, ReleaseTier.BOPTONE_PREMIUM),
        (90, ReleaseTier.BOPTONE_PREMIUM),
        (89, ReleaseTier.DISTRIBUTION_READY),
        (70, ReleaseTier.DISTRIBUTION_READY),
        (69, ReleaseTier.BOPTONE_ONLY),
        (40, ReleaseTier.BOPTONE_ONLY),
        (39, ReleaseTier.NEEDS_WORK),
        (0, ReleaseTier.NEEDS_WORK),
    ],
)
def test_release_tier_thresholds(score, tier):
    assert release_tier(score) is tier
