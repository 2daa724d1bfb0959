"""Cover art compliance against the artwork catalog."""

from __future__ import annotations

from typing import Iterable, Sequence

from distro_ready.catalog import resolve_catalog
from distro_ready.domain.catalog import ArtworkLimits, DspArtworkRequirement, DspCatalog
from distro_ready.domain.models import CoverArtMeasurement, CoverArtReport, DspArtworkCompliance, Issue
from distro_ready.readiness_options import IssueSeverity, QualityTier

_BYTES_PER_MB = 1024 * 1024
_ALL_DSPS = ("All DSPs",)

_FORMAT_ALIASES = {"jpg": "jpeg"}

# Issue code -> recommendation sentence, in output order. {dsps} is the issue's affected list.
_RECOMMENDATIONS: tuple[tuple[str, str], ...] = (
    ("RESOLUTION_TOO_LOW", "Re-export artwork at 3000x3000px minimum"),
    ("RESOLUTION_BELOW_RECOMMENDED", "Increase resolution to 3000x3000px for major DSP compatibility"),
    ("RESOLUTION_EXCEEDS_DSP_MAX", "Resize to the maximum resolution accepted by {dsps}"),
    ("UNSUPPORTED_FORMAT", "Convert to JPEG or PNG format"),
    ("CMYK_COLOR_SPACE", "Convert color space from CMYK to RGB"),
    ("GRAYSCALE_COLOR_SPACE", "Convert grayscale artwork to RGB color mode"),
    ("UNUSUAL_COLOR_SPACE", "Convert to sRGB for maximum compatibility"),
    ("NOT_SQUARE", "Crop to a perfect 1:1 square aspect ratio"),
    ("FILE_TOO_LARGE", "Compress the image to under 50 MB"),
    ("FILE_SIZE_EXCEEDS_STRICT_LIMIT", "Compress the file for {dsps} compatibility"),
    ("HAS_ALPHA_CHANNEL", "Flatten transparency with a solid background color"),
    ("UNREADABLE_IMAGE", "Re-export the artwork as a 3000x3000px RGB JPEG or PNG"),
)


def normalize_format(image_format: str | None) -> str | None:
    if image_format is None:
        return None
    normalized = image_format.strip().lower()
    return _FORMAT_ALIASES.get(normalized, normalized) or None


def _is_square(width: int, height: int, tolerance: float) -> bool:
    return height > 0 and abs(width / height - 1.0) < tolerance


def _size_mb(file_size_bytes: int) -> float:
    return file_size_bytes / _BYTES_PER_MB


def dsp_compliance(
    requirement: DspArtworkRequirement,
    measurement: CoverArtMeasurement,
    square_tolerance: float = 0.01,
) -> DspArtworkCompliance:
    """Evaluate one platform's binary artwork gate, naming every failing dimension."""

    reasons: list[str] = []
    width, height = measurement.width, measurement.height
    image_format = normalize_format(measurement.format)

    if width is not None and height is not None:
        if width < requirement.min_width or height < requirement.min_height:
            reasons.append(
                f"Resolution {width}x{height}px below {requirement.min_width}x{requirement.min_height}px minimum"
            )
        max_width = requirement.max_width
        max_height = requirement.max_height
        if (max_width is not None and width > max_width) or (max_height is not None and height > max_height):
            reasons.append(
                f"Resolution {width}x{height}px exceeds "
                f"{max_width or 'unbounded'}x{max_height or 'unbounded'}px maximum"
            )
        if requirement.requires_square and not _is_square(width, height, square_tolerance):
            reasons.append("Not square (1:1 aspect ratio required)")
    else:
        reasons.append("Resolution unknown")

    if image_format and image_format not in requirement.allowed_formats:
        reasons.append(f'Format "{image_format}" not accepted (JPEG/PNG required)')

    if measurement.color_space and requirement.requires_rgb:
        if "cmyk" in measurement.color_space.lower():
            reasons.append("CMYK color space not accepted (RGB required)")

    if measurement.file_size_bytes is not None:
        size_mb = _size_mb(measurement.file_size_bytes)
        if size_mb > requirement.max_file_size_mb:
            reasons.append(f"File size {size_mb:.1f} MB exceeds {requirement.max_file_size_mb:g} MB limit")

    return DspArtworkCompliance(
        name=requirement.display_name,
        ready=not reasons,
        reason="; ".join(reasons) if reasons else None,
    )


def _names(requirements: Iterable[DspArtworkRequirement]) -> tuple[str, ...]:
    return tuple(requirement.display_name for requirement in requirements)


def _check_format(image_format: str | None, limits: ArtworkLimits, issues: list[Issue], names: tuple[str, ...]) -> None:
    if not image_format or image_format not in limits.allowed_formats:
        issues.append(
            Issue(
                code="UNSUPPORTED_FORMAT",
                severity=IssueSeverity.ERROR,
                message=f'Cover art format "{image_format or "unknown"}" is not accepted by DSPs.',
                detail="All major DSPs require JPEG or PNG artwork. Convert your file and re-upload.",
                affected_dsps=names,
            )
        )


def _check_file_size(
    file_size_bytes: int | None,
    limits: ArtworkLimits,
    requirements: Sequence[DspArtworkRequirement],
    issues: list[Issue],
    warnings: list[Issue],
) -> None:
    if file_size_bytes is None:
        return
    size_mb = _size_mb(file_size_bytes)
    if size_mb > limits.absolute_max_file_size_mb:
        issues.append(
            Issue(
                code="FILE_TOO_LARGE",
                severity=IssueSeverity.ERROR,
                message=(
                    f"Cover art file size ({size_mb:.1f} MB) exceeds the maximum allowed by any DSP "
                    f"({limits.absolute_max_file_size_mb:g} MB)."
                ),
                detail=f"Compress the image or reduce resolution to under {limits.absolute_max_file_size_mb:g} MB.",
                affected_dsps=_ALL_DSPS,
            )
        )
    elif size_mb > limits.strict_max_file_size_mb:
        warnings.append(
            Issue(
                code="FILE_SIZE_EXCEEDS_STRICT_LIMIT",
                severity=IssueSeverity.WARNING,
                message=(
                    f"Cover art file size ({size_mb:.1f} MB) exceeds the strictest DSP limit "
                    f"({limits.strict_max_file_size_mb:g} MB)."
                ),
                detail="Most DSPs will accept it, but platforms with the strict limit will reject it.",
                affected_dsps=_names(row for row in requirements if size_mb > row.max_file_size_mb),
            )
        )


def _check_resolution(
    width: int | None,
    height: int | None,
    limits: ArtworkLimits,
    requirements: Sequence[DspArtworkRequirement],
    issues: list[Issue],
    warnings: list[Issue],
) -> None:
    if width is None or height is None:
        return
    if width < limits.absolute_min_width or height < limits.absolute_min_height:
        issues.append(
            Issue(
                code="RESOLUTION_TOO_LOW",
                severity=IssueSeverity.ERROR,
                message=(
                    f"Cover art resolution ({width}x{height}px) is below the minimum required by any DSP "
                    f"({limits.absolute_min_width}x{limits.absolute_min_height}px)."
                ),
                detail="Re-export your artwork at a minimum of 3000x3000px for full DSP compatibility.",
                affected_dsps=_ALL_DSPS,
            )
        )
    elif width < limits.recommended_min_width or height < limits.recommended_min_height:
        warnings.append(
            Issue(
                code="RESOLUTION_BELOW_RECOMMENDED",
                severity=IssueSeverity.WARNING,
                message=(
                    f"Cover art resolution ({width}x{height}px) is below the recommended "
                    f"{limits.recommended_min_width}x{limits.recommended_min_height}px minimum for major DSPs."
                ),
                affected_dsps=_names(
                    row for row in requirements if width < row.min_width or height < row.min_height
                ),
            )
        )

    too_large = [
        row
        for row in requirements
        if (row.max_width is not None and width > row.max_width)
        or (row.max_height is not None and height > row.max_height)
    ]
    if too_large:
        warnings.append(
            Issue(
                code="RESOLUTION_EXCEEDS_DSP_MAX",
                severity=IssueSeverity.WARNING,
                message=(
                    f"Cover art resolution ({width}x{height}px) exceeds the maximum accepted by "
                    f"{', '.join(_names(too_large))}."
                ),
                affected_dsps=_names(too_large),
            )
        )

    if not _is_square(width, height, limits.square_tolerance):
        ratio = width / height if height else float("inf")
        issues.append(
            Issue(
                code="NOT_SQUARE",
                severity=IssueSeverity.ERROR,
                message=f"Cover art must be square (1:1 aspect ratio). Current ratio: {width}:{height} ({ratio:.3f}).",
                detail="Crop or pad your image to a 1:1 ratio.",
                affected_dsps=_ALL_DSPS,
            )
        )


def _check_color_space(
    color_space: str | None,
    limits: ArtworkLimits,
    requirements: Sequence[DspArtworkRequirement],
    issues: list[Issue],
    warnings: list[Issue],
) -> None:
    if not color_space:
        return
    normalized = color_space.lower()
    if any(allowed in normalized for allowed in limits.allowed_color_spaces):
        return
    rgb_only = _names(row for row in requirements if row.requires_rgb)
    if "cmyk" in normalized:
        issues.append(
            Issue(
                code="CMYK_COLOR_SPACE",
                severity=IssueSeverity.ERROR,
                message="Cover art is in CMYK color space. DSPs require RGB.",
                detail="Convert to RGB color mode before re-uploading.",
                affected_dsps=_ALL_DSPS,
            )
        )
    elif "grey" in normalized or "gray" in normalized:
        warnings.append(
            Issue(
                code="GRAYSCALE_COLOR_SPACE",
                severity=IssueSeverity.WARNING,
                message="Cover art is in grayscale. DSPs require RGB color space.",
                affected_dsps=rgb_only,
            )
        )
    else:
        warnings.append(
            Issue(
                code="UNUSUAL_COLOR_SPACE",
                severity=IssueSeverity.WARNING,
                message=f'Cover art color space "{color_space}" may not be accepted by all DSPs.',
                affected_dsps=rgb_only,
            )
        )


def build_recommendation(issues: list[Issue], warnings: list[Issue]) -> str | None:
    affected: dict[str, tuple[str, ...]] = {}
    for issue in [*issues, *warnings]:
        affected.setdefault(issue.code, issue.affected_dsps)
    parts = [
        sentence.format(dsps=", ".join(affected[code]) or "every DSP")
        for code, sentence in _RECOMMENDATIONS
        if code in affected
    ]
    return ". ".join(parts) + "." if parts else None


def evaluate_cover_art(
    measurement: CoverArtMeasurement | None, catalog: DspCatalog | None = None
) -> CoverArtReport:
    """Evaluate cover art facts into per-DSP compliance and a quality tier.

    ``None`` stands for an image the upstream decoder could not read and is
    reported as ``UNREADABLE_IMAGE`` with tier ``rejected``.
    """

    table = resolve_catalog(catalog)
    limits = table.artwork_limits

    if measurement is None:
        unreadable = [
            Issue(
                code="UNREADABLE_IMAGE",
                severity=IssueSeverity.ERROR,
                message="Cover art file could not be read or is corrupted.",
            )
        ]
        return CoverArtReport(
            quality_tier=QualityTier.REJECTED,
            width=None,
            height=None,
            format=None,
            color_space=None,
            file_size_bytes=None,
            has_alpha_channel=False,
            issues=tuple(unreadable),
            warnings=(),
            dsp_compliance=(),
            recommendation=build_recommendation(unreadable, []),
        )

    image_format = normalize_format(measurement.format)
    issues: list[Issue] = []
    warnings: list[Issue] = []
    info: list[Issue] = []
    requirements = table.artwork_requirements

    _check_format(image_format, limits, issues, _names(requirements))
    _check_file_size(measurement.file_size_bytes, limits, requirements, issues, warnings)
    _check_resolution(measurement.width, measurement.height, limits, requirements, issues, warnings)
    _check_color_space(measurement.color_space, limits, requirements, issues, warnings)

    if measurement.has_alpha_channel:
        warnings.append(
            Issue(
                code="HAS_ALPHA_CHANNEL",
                severity=IssueSeverity.WARNING,
                message="Cover art has a transparency (alpha) channel.",
                detail="Some DSPs do not support transparent backgrounds.",
            )
        )

    if measurement.dpi is not None and measurement.dpi < limits.low_dpi_threshold:
        info.append(
            Issue(
                code="LOW_DPI",
                severity=IssueSeverity.INFO,
                message=f"Cover art DPI ({measurement.dpi:g}) is low, but DSPs use pixel dimensions, not DPI.",
            )
        )

    compliance = tuple(
        dsp_compliance(requirement, measurement, limits.square_tolerance)
        for requirement in table.artwork_requirements
    )

    if issues:
        tier = QualityTier.REJECTED
    elif all(entry.ready for entry in compliance):
        tier = QualityTier.DISTRIBUTION_READY
    else:
        tier = QualityTier.BOPTONE_ONLY

    return CoverArtReport(
        quality_tier=tier,
        width=measurement.width,
        height=measurement.height,
        format=image_format,
        color_space=measurement.color_space,
        file_size_bytes=measurement.file_size_bytes,
        has_alpha_channel=bool(measurement.has_alpha_channel),
        issues=tuple(issues),
        warnings=tuple(warnings),
        dsp_compliance=compliance,
        recommendation=build_recommendation(issues, warnings),
        info=tuple(info),
        dpi=measurement.dpi,
    )
