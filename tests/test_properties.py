from decimal import Decimal

from hypothesis import given
from hypothesis import strategies as st

from distro_ready.audio_quality import classify
from distro_ready.catalog import DEFAULT_DSP_CATALOG
from distro_ready.cover_art import evaluate_cover_art
from distro_ready.domain.models import CoverArtMeasurement, LoudnessMeasurement, TechnicalAudioProfile, WriterSplit
from distro_ready.loudness import is_dsp_ready, lufs_to_percent
from distro_ready.readiness_options import QualityTier
from distro_ready.revenue_split import fan_out

targets = st.sampled_from(DEFAULT_DSP_CATALOG.loudness_targets)
levels = st.floats(min_value=-70.0, max_value=6.0, allow_nan=False)


@st.composite
def hundred_percent_splits(draw):
    """Splits summing to 100%, or to anywhere inside the 0.01 rounding band around it."""

    weights = draw(st.lists(st.integers(min_value=1, max_value=10_000), min_size=1, max_size=8))
    total = sum(weights)
    basis_points = [weight * 10_000 // total for weight in weights]
    basis_points[-1] += 10_000 - sum(basis_points)
    largest = basis_points.index(max(basis_points))
    drift = draw(st.sampled_from([-1, 0, 1]))
    if 0 <= basis_points[largest] + drift <= 10_000:
        basis_points[largest] += drift
    return [WriterSplit(index + 1, points / 100) for index, points in enumerate(basis_points)]


@given(target=targets, excess=st.floats(min_value=0.01, max_value=40.0), true_peak=levels)
def test_too_loud_is_never_ready(target, excess, true_peak):
    assert not is_dsp_ready(target.upper_bound_lufs + excess, true_peak, target)


@given(target=targets, lufs=levels, excess=st.floats(min_value=0.01, max_value=20.0))
def test_peak_over_ceiling_is_never_ready(target, lufs, excess):
    assert not is_dsp_ready(lufs, target.max_true_peak_dbtp + excess, target)


@given(lufs=st.floats(allow_nan=False, allow_infinity=False))
def test_gauge_stays_in_range(lufs):
    assert 0.0 <= lufs_to_percent(lufs) <= 100.0


@given(total=st.integers(min_value=0, max_value=10**9), splits=hundred_percent_splits())
def test_fan_out_never_over_distributes(total, splits):
    result = fan_out(total, splits)
    distributed = sum(earning.earnings_cents for earning in result)
    shortfall = max(Decimal(0), 100 - sum(Decimal(str(split.percentage)) for split in splits))

    assert distributed <= total
    assert total - distributed < len(splits) + Decimal(total) * shortfall / 100
    assert {earning.writer_profile_id for earning in result} <= {split.writer_profile_id for split in splits}


@given(
    lufs=st.one_of(st.none(), levels),
    true_peak=st.one_of(st.none(), levels),
    clipping=st.booleans(),
    channels=st.integers(min_value=0, max_value=8),
    sample_rate=st.sampled_from([0, 22_050, 44_100, 47_000, 48_000, 96_000]),
)
def test_classify_is_deterministic_and_explains_non_ready(lufs, true_peak, clipping, channels, sample_rate):
    profile = TechnicalAudioProfile("wav", sample_rate, 24, channels, 180.0, True)
    loudness = LoudnessMeasurement(lufs, true_peak, is_clipping=clipping)

    first = classify(profile, loudness)
    second = classify(profile, loudness)

    assert first.as_dict() == second.as_dict()
    if first.quality_tier is not QualityTier.DISTRIBUTION_READY:
        assert first.warnings and first.recommendations
    if clipping:
        assert first.quality_tier is not QualityTier.DISTRIBUTION_READY


@given(
    width=st.one_of(st.none(), st.integers(min_value=1, max_value=9000)),
    height=st.one_of(st.none(), st.integers(min_value=1, max_value=9000)),
    image_format=st.sampled_from([None, "jpg", "jpeg", "png", "gif", "webp"]),
    color_space=st.sampled_from([None, "sRGB", "CMYK", "Gray", "LAB"]),
    size=st.one_of(st.none(), st.integers(min_value=0, max_value=80 * 1024 * 1024)),
)
def test_cover_art_tier_matches_issues(width, height, image_format, color_space, size):
    report = evaluate_cover_art(CoverArtMeasurement(width, height, image_format, color_space, size))

    if report.issues:
        assert report.quality_tier is QualityTier.REJECTED
    elif all(entry.ready for entry in report.dsp_compliance):
        assert report.quality_tier is QualityTier.DISTRIBUTION_READY
    else:
        assert report.quality_tier is QualityTier.BOPTONE_ONLY
