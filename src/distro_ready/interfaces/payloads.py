"""JSON payload schemas accepted by the command line tooling.

Field names are the camelCase names the upload pipeline already emits, so a
stored analysis document can be fed back in without renaming anything.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from distro_ready.domain.models import CoverArtMeasurement, LoudnessMeasurement, TechnicalAudioProfile, WriterSplit
from distro_ready.readiness_options import RevenueEventType, WriterRole, parse_case_insensitive_enum


class LoudnessPayload(BaseModel):
    integratedLufs: Optional[float] = None
    truePeakDbtp: Optional[float] = None
    loudnessRangeLu: Optional[float] = None
    isClipping: bool = False

    def to_measurement(self) -> LoudnessMeasurement:
        return LoudnessMeasurement(
            integrated_lufs=self.integratedLufs,
            true_peak_dbtp=self.truePeakDbtp,
            loudness_range_lu=self.loudnessRangeLu,
            is_clipping=self.isClipping,
        )


class TechnicalProfilePayload(BaseModel):
    format: str
    sampleRateHz: int
    bitDepth: Optional[int] = None
    channels: int
    durationSeconds: float
    isLossless: bool
    bitrateKbps: Optional[int] = None

    def to_profile(self) -> TechnicalAudioProfile:
        return TechnicalAudioProfile(
            format=self.format,
            sample_rate_hz=self.sampleRateHz,
            bit_depth=self.bitDepth,
            channels=self.channels,
            duration_seconds=self.durationSeconds,
            is_lossless=self.isLossless,
            bitrate_kbps=self.bitrateKbps,
        )


class AudioPayload(BaseModel):
    id: Optional[str] = None
    technicalProfile: Optional[TechnicalProfilePayload] = None
    loudness: Optional[LoudnessPayload] = None

    def to_domain(self) -> tuple[TechnicalAudioProfile | None, LoudnessMeasurement | None]:
        profile = self.technicalProfile.to_profile() if self.technicalProfile is not None else None
        loudness = self.loudness.to_measurement() if self.loudness is not None else None
        return profile, loudness


class CoverArtPayload(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    colorSpace: Optional[str] = None
    fileSizeBytes: Optional[int] = Field(None, ge=0)
    hasAlphaChannel: Optional[bool] = None
    dpi: Optional[float] = None

    def to_measurement(self) -> CoverArtMeasurement:
        return CoverArtMeasurement(
            width=self.width,
            height=self.height,
            format=self.format,
            color_space=self.colorSpace,
            file_size_bytes=self.fileSizeBytes,
            has_alpha_channel=self.hasAlphaChannel,
            dpi=self.dpi,
        )


class ReleasePayload(BaseModel):
    """A whole release. An explicit ``"coverArt": null`` means the image was unreadable."""

    technicalProfile: Optional[TechnicalProfilePayload] = None
    loudness: Optional[LoudnessPayload] = None
    coverArt: Optional[CoverArtPayload] = None

    @property
    def has_audio(self) -> bool:
        return bool({"technicalProfile", "loudness"} & self.model_fields_set)

    @property
    def has_cover_art(self) -> bool:
        return "coverArt" in self.model_fields_set


class WriterSplitPayload(BaseModel):
    writerProfileId: Optional[int] = None
    percentage: float
    name: Optional[str] = None
    role: WriterRole = WriterRole.SONGWRITER

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value):
        if isinstance(value, str):
            return parse_case_insensitive_enum(value, WriterRole)
        return value

    def to_split(self) -> WriterSplit:
        return WriterSplit(
            writer_profile_id=self.writerProfileId,
            percentage=self.percentage,
            name=self.name,
            role=self.role,
        )


class SplitsPayload(BaseModel):
    splits: List[WriterSplitPayload] = Field(default_factory=list)
    ownerProfileId: Optional[int] = None
    eventType: Optional[RevenueEventType] = None

    @field_validator("eventType", mode="before")
    @classmethod
    def _parse_event_type(cls, value):
        if isinstance(value, str):
            return parse_case_insensitive_enum(value, RevenueEventType)
        return value

    def to_splits(self) -> list[WriterSplit]:
        return [item.to_split() for item in self.splits]
