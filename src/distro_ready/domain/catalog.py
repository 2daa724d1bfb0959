"""Domain value objects describing per-platform delivery requirements."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DspLoudnessTarget:
    """Loudness normalization profile of a single streaming platform."""

    id: str
    display_name: str
    target_lufs: float
    tolerance_lufs: float
    max_true_peak_dbtp: float

    def __post_init__(self) -> None:
        if self.tolerance_lufs < 0:
            raise ValueError(f"{self.id}: tolerance_lufs must be >= 0.")
        if self.max_true_peak_dbtp > 0:
            raise ValueError(f"{self.id}: max_true_peak_dbtp must be <= 0.")

    @property
    def upper_bound_lufs(self) -> float:
        return self.target_lufs + self.tolerance_lufs


@dataclass(frozen=True, slots=True)
class DspArtworkRequirement:
    """Binary cover-art gate of a single streaming platform."""

    id: str
    display_name: str
    min_width: int
    min_height: int
    max_file_size_mb: float
    max_width: int | None = None
    max_height: int | None = None
    allowed_formats: tuple[str, ...] = ("jpeg", "png")
    requires_rgb: bool = True
    requires_square: bool = True


@dataclass(frozen=True, slots=True)
class ArtworkLimits:
    """Platform-agnostic artwork thresholds."""

    absolute_min_width: int = 1400
    absolute_min_height: int = 1400
    recommended_min_width: int = 3000
    recommended_min_height: int = 3000
    absolute_max_file_size_mb: float = 50.0
    strict_max_file_size_mb: float = 10.0
    allowed_formats: tuple[str, ...] = ("jpeg", "png")
    allowed_color_spaces: tuple[str, ...] = ("srgb", "rgb")
    square_tolerance: float = 0.01
    low_dpi_threshold: int = 72


@dataclass(frozen=True, slots=True)
class AudioLimits:
    """Technical limits an audio master must clear before classification."""

    min_duration_seconds: float = 30.0
    max_duration_seconds: float = 36_000.0
    min_sample_rate_hz: int = 44_100
    standard_sample_rates_hz: tuple[int, ...] = (44_100, 48_000, 88_200, 96_000)
    min_bit_depth_lossless: int = 16
    min_lossy_bitrate_kbps: int = 128
    max_channels: int = 2


@dataclass(frozen=True, slots=True)
class DspCatalog:
    """Versioned table of every platform requirement the evaluators consult."""

    catalog_version: str
    loudness_targets: tuple[DspLoudnessTarget, ...]
    artwork_requirements: tuple[DspArtworkRequirement, ...]
    artwork_limits: ArtworkLimits = ArtworkLimits()
    audio_limits: AudioLimits = AudioLimits()

    def loudness_target(self, dsp_id: str) -> DspLoudnessTarget:
        for target in self.loudness_targets:
            if target.id == dsp_id:
                return target
        allowed = ", ".join(target.id for target in self.loudness_targets)
        raise ValueError(f"Unknown DSP '{dsp_id}'. Allowed: {allowed}.")

    def artwork_requirement(self, dsp_id: str) -> DspArtworkRequirement:
        for requirement in self.artwork_requirements:
            if requirement.id == dsp_id:
                return requirement
        allowed = ", ".join(requirement.id for requirement in self.artwork_requirements)
        raise ValueError(f"Unknown DSP '{dsp_id}'. Allowed: {allowed}.")

    @property
    def dsp_ids(self) -> tuple[str, ...]:
        return tuple(target.id for target in self.loudness_targets)
