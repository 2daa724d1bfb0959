from __future__ import annotations

from pathlib import Path

import json

from pydantic import BaseModel, Field, field_validator, model_validator

from distro_ready.domain.catalog import (
    ArtworkLimits,
    AudioLimits,
    DspArtworkRequirement,
    DspCatalog,
    DspLoudnessTarget,
)


class LoudnessTargetConfig(BaseModel):
    id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    target_lufs: float = Field(..., le=0.0)
    tolerance_lufs: float = Field(..., ge=0.0, le=12.0)
    max_true_peak_dbtp: float = Field(..., le=0.0)


class ArtworkRequirementConfig(BaseModel):
    id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    min_width: int = Field(..., gt=0)
    min_height: int = Field(..., gt=0)
    max_width: int | None = Field(None, gt=0)
    max_height: int | None = Field(None, gt=0)
    max_file_size_mb: float = Field(..., gt=0.0)
    allowed_formats: list[str] = Field(default_factory=lambda: ["jpeg", "png"], min_length=1)
    requires_rgb: bool = True
    requires_square: bool = True

    @field_validator("allowed_formats")
    @classmethod
    def _normalize_formats(cls, value: list[str]) -> list[str]:
        return [item.strip().lower() for item in value]


class ArtworkLimitsConfig(BaseModel):
    absolute_min_width: int = Field(1400, gt=0)
    absolute_min_height: int = Field(1400, gt=0)
    recommended_min_width: int = Field(3000, gt=0)
    recommended_min_height: int = Field(3000, gt=0)
    absolute_max_file_size_mb: float = Field(50.0, gt=0.0)
    strict_max_file_size_mb: float = Field(10.0, gt=0.0)
    allowed_formats: list[str] = Field(default_factory=lambda: ["jpeg", "png"], min_length=1)
    allowed_color_spaces: list[str] = Field(default_factory=lambda: ["srgb", "rgb"], min_length=1)
    square_tolerance: float = Field(0.01, ge=0.0, le=0.5)
    low_dpi_threshold: int = Field(72, ge=0)

    @model_validator(mode="after")
    def _check_ordering(self) -> "ArtworkLimitsConfig":
        if self.recommended_min_width < self.absolute_min_width:
            raise ValueError("recommended_min_width must be >= absolute_min_width.")
        if self.recommended_min_height < self.absolute_min_height:
            raise ValueError("recommended_min_height must be >= absolute_min_height.")
        if self.strict_max_file_size_mb > self.absolute_max_file_size_mb:
            raise ValueError("strict_max_file_size_mb must be <= absolute_max_file_size_mb.")
        return self


class AudioLimitsConfig(BaseModel):
    min_duration_seconds: float = Field(30.0, ge=0.0)
    max_duration_seconds: float = Field(36_000.0, gt=0.0)
    min_sample_rate_hz: int = Field(44_100, gt=0)
    standard_sample_rates_hz: list[int] = Field(
        default_factory=lambda: [44_100, 48_000, 88_200, 96_000], min_length=1
    )
    min_bit_depth_lossless: int = Field(16, gt=0)
    min_lossy_bitrate_kbps: int = Field(128, gt=0)
    max_channels: int = Field(2, ge=1)


class CatalogConfig(BaseModel):
    catalog_version: str = Field(..., min_length=1)
    loudness_targets: list[LoudnessTargetConfig] = Field(..., min_length=1)
    artwork_requirements: list[ArtworkRequirementConfig] = Field(..., min_length=1)
    artwork_limits: ArtworkLimitsConfig = Field(default_factory=ArtworkLimitsConfig)
    audio_limits: AudioLimitsConfig = Field(default_factory=AudioLimitsConfig)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "CatalogConfig":
        for label, rows in (
            ("loudness_targets", self.loudness_targets),
            ("artwork_requirements", self.artwork_requirements),
        ):
            ids = [row.id for row in rows]
            duplicates = sorted({dsp_id for dsp_id in ids if ids.count(dsp_id) > 1})
            if duplicates:
                raise ValueError(f"Duplicate DSP ids in {label}: {', '.join(duplicates)}.")
        return self

    def to_catalog(self) -> DspCatalog:
        limits = self.artwork_limits
        audio = self.audio_limits
        return DspCatalog(
            catalog_version=self.catalog_version,
            loudness_targets=tuple(
                DspLoudnessTarget(
                    id=row.id,
                    display_name=row.display_name,
                    target_lufs=row.target_lufs,
                    tolerance_lufs=row.tolerance_lufs,
                    max_true_peak_dbtp=row.max_true_peak_dbtp,
                )
                for row in self.loudness_targets
            ),
            artwork_requirements=tuple(
                DspArtworkRequirement(
                    id=row.id,
                    display_name=row.display_name,
                    min_width=row.min_width,
                    min_height=row.min_height,
                    max_file_size_mb=row.max_file_size_mb,
                    max_width=row.max_width,
                    max_height=row.max_height,
                    allowed_formats=tuple(row.allowed_formats),
                    requires_rgb=row.requires_rgb,
                    requires_square=row.requires_square,
                )
                for row in self.artwork_requirements
            ),
            artwork_limits=ArtworkLimits(
                absolute_min_width=limits.absolute_min_width,
                absolute_min_height=limits.absolute_min_height,
                recommended_min_width=limits.recommended_min_width,
                recommended_min_height=limits.recommended_min_height,
                absolute_max_file_size_mb=limits.absolute_max_file_size_mb,
                strict_max_file_size_mb=limits.strict_max_file_size_mb,
                allowed_formats=tuple(item.lower() for item in limits.allowed_formats),
                allowed_color_spaces=tuple(item.lower() for item in limits.allowed_color_spaces),
                square_tolerance=limits.square_tolerance,
                low_dpi_threshold=limits.low_dpi_threshold,
            ),
            audio_limits=AudioLimits(
                min_duration_seconds=audio.min_duration_seconds,
                max_duration_seconds=audio.max_duration_seconds,
                min_sample_rate_hz=audio.min_sample_rate_hz,
                standard_sample_rates_hz=tuple(audio.standard_sample_rates_hz),
                min_bit_depth_lossless=audio.min_bit_depth_lossless,
                min_lossy_bitrate_kbps=audio.min_lossy_bitrate_kbps,
                max_channels=audio.max_channels,
            ),
        )


def load_catalog_config(path: Path) -> CatalogConfig:
    data = _load_config_data(path)
    return CatalogConfig.model_validate(data)


def _load_config_data(path: Path) -> dict:
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            import yaml

            try:
                with path.open("r", encoding="utf-8") as handle:
                    return yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Catalog file is not valid YAML: {path}") from exc

        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise ValueError(f"Catalog file is unreadable: {path}") from exc
