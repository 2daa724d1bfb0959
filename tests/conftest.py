import pytest

from distro_ready.domain.models import CoverArtMeasurement, LoudnessMeasurement, TechnicalAudioProfile


@pytest.fixture
def studio_profile():
    return TechnicalAudioProfile(
        format="flac",
        sample_rate_hz=44_100,
        bit_depth=24,
        channels=2,
        duration_seconds=210.0,
        is_lossless=True,
    )


@pytest.fixture
def hi_res_profile():
    return TechnicalAudioProfile(
        format="wav",
        sample_rate_hz=96_000,
        bit_depth=24,
        channels=2,
        duration_seconds=185.0,
        is_lossless=True,
    )


@pytest.fixture
def streaming_loudness():
    """Loudness that every packaged DSP accepts."""

    return LoudnessMeasurement(
        integrated_lufs=-15.5,
        true_peak_dbtp=-2.1,
        loudness_range_lu=6.0,
        is_clipping=False,
    )


@pytest.fixture
def clean_artwork():
    return CoverArtMeasurement(
        width=3000,
        height=3000,
        format="jpeg",
        color_space="sRGB",
        file_size_bytes=5 * 1024 * 1024,
        has_alpha_channel=False,
        dpi=300,
    )
