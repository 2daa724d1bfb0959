"""Per-DSP loudness readiness rules.

A DSP accepts a master when its true peak sits at or below the platform
ceiling and its integrated loudness lies inside ``(target - 4 LU,
target + tolerance]``. The quiet floor is the same 4 LU for every platform;
the loud bound uses each platform's own tolerance.
"""

from __future__ import annotations

import numpy as np

from distro_ready.catalog import resolve_catalog
from distro_ready.domain.catalog import DspCatalog, DspLoudnessTarget
from distro_ready.domain.models import DspReadinessResult, LoudnessMeasurement, LoudnessReport
from distro_ready.readiness_options import ReadinessReason

QUIET_FLOOR_OFFSET_LU = 4.0

GAUGE_MIN_LUFS = -24.0
GAUGE_MAX_LUFS = -6.0

STREAMING_REFERENCE_LUFS = -14.0
LIMITER_CEILING_DBTP = -1.0
HOT_MASTER_LUFS = -9.0
QUIET_MASTER_LUFS = -24.0
OPTIMAL_WINDOW_LU = 2.0


def is_dsp_ready(lufs: float, true_peak_dbtp: float, target: DspLoudnessTarget) -> bool:
    """Return whether a measured master passes one platform's loudness gate."""

    if true_peak_dbtp > target.max_true_peak_dbtp:
        return False
    if lufs > target.target_lufs + target.tolerance_lufs:
        return False
    if lufs <= target.target_lufs - QUIET_FLOOR_OFFSET_LU:
        return False
    return True


def readiness_reasons(
    lufs: float, true_peak_dbtp: float, target: DspLoudnessTarget
) -> tuple[ReadinessReason, ...]:
    """List every reason a platform rejects the measurement; empty when ready."""

    reasons: list[ReadinessReason] = []
    if true_peak_dbtp > target.max_true_peak_dbtp:
        reasons.append(ReadinessReason.TRUE_PEAK)
    if lufs > target.target_lufs + target.tolerance_lufs:
        reasons.append(ReadinessReason.TOO_LOUD)
    elif lufs <= target.target_lufs - QUIET_FLOOR_OFFSET_LU:
        reasons.append(ReadinessReason.TOO_QUIET)
    return tuple(reasons)


def compute_all_dsp_readiness(
    lufs: float, true_peak_dbtp: float, catalog: DspCatalog | None = None
) -> dict[str, bool]:
    table = resolve_catalog(catalog)
    return {target.id: is_dsp_ready(lufs, true_peak_dbtp, target) for target in table.loudness_targets}


def lufs_to_percent(lufs: float) -> float:
    """Map integrated loudness onto the -24..-6 LUFS meter, clamped to 0..100."""

    span = GAUGE_MAX_LUFS - GAUGE_MIN_LUFS
    return float(np.clip((lufs - GAUGE_MIN_LUFS) / span * 100.0, 0.0, 100.0))


def loudness_recommendation(lufs: float | None, true_peak_dbtp: float | None) -> str:
    if true_peak_dbtp is not None and true_peak_dbtp > 0:
        return (
            f"Apply a true peak limiter (ceiling: {LIMITER_CEILING_DBTP:.1f} dBTP) before re-exporting. "
            f"Current true peak: {true_peak_dbtp:.1f} dBTP."
        )
    if lufs is None:
        return (
            "Loudness could not be measured. Aim for -14 LUFS integrated with a "
            "-1.0 dBTP true peak ceiling."
        )
    if lufs > HOT_MASTER_LUFS:
        return (
            f"Your master ({lufs:.1f} LUFS) is louder than streaming targets. DSPs will apply "
            "gain reduction. Consider re-mastering at -14 LUFS."
        )
    if lufs < QUIET_MASTER_LUFS:
        return (
            f"Your master ({lufs:.1f} LUFS) is quieter than streaming targets. "
            "Consider re-mastering at -14 LUFS."
        )
    if abs(lufs - STREAMING_REFERENCE_LUFS) <= OPTIMAL_WINDOW_LU:
        return f"Loudness ({lufs:.1f} LUFS) is within the optimal streaming range. No changes needed."
    return f"Loudness ({lufs:.1f} LUFS) is acceptable. Aim for -14 LUFS for optimal streaming playback."


def evaluate_loudness(
    measurement: LoudnessMeasurement | None, catalog: DspCatalog | None = None
) -> LoudnessReport:
    """Evaluate a measurement against every catalog row.

    Missing integrated loudness or true peak marks every platform as not
    ready with ``ReadinessReason.NOT_MEASURED`` instead of raising.
    """

    table = resolve_catalog(catalog)
    measured = measurement if measurement is not None else LoudnessMeasurement()
    lufs = measured.integrated_lufs
    true_peak = measured.true_peak_dbtp

    if lufs is None or true_peak is None:
        results = tuple(
            DspReadinessResult(dsp_id=target.id, ready=False, reasons=(ReadinessReason.NOT_MEASURED,))
            for target in table.loudness_targets
        )
    else:
        results = tuple(
            DspReadinessResult(
                dsp_id=target.id,
                ready=is_dsp_ready(lufs, true_peak, target),
                reasons=readiness_reasons(lufs, true_peak, target),
            )
            for target in table.loudness_targets
        )

    return LoudnessReport(
        measurement=measured,
        dsp_readiness=results,
        gauge_percent=lufs_to_percent(lufs) if lufs is not None else None,
        recommendation=loudness_recommendation(lufs, true_peak),
    )
