"""Public package exports for distro-ready with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "DEFAULT_DSP_CATALOG",
    "load_catalog",
    "is_dsp_ready",
    "compute_all_dsp_readiness",
    "evaluate_loudness",
    "lufs_to_percent",
    "classify",
    "evaluate_cover_art",
    "validate_splits",
    "fan_out",
    "distribute_revenue",
    "ValidationError",
    "compute_release_score",
    "QualityTier",
    "ReleaseTier",
]

_EXPORT_MODULES: dict[str, str] = {
    "DEFAULT_DSP_CATALOG": "distro_ready.catalog",
    "load_catalog": "distro_ready.catalog",
    "is_dsp_ready": "distro_ready.loudness",
    "compute_all_dsp_readiness": "distro_ready.loudness",
    "evaluate_loudness": "distro_ready.loudness",
    "lufs_to_percent": "distro_ready.loudness",
    "classify": "distro_ready.audio_quality",
    "evaluate_cover_art": "distro_ready.cover_art",
    "validate_splits": "distro_ready.revenue_split",
    "fan_out": "distro_ready.revenue_split",
    "distribute_revenue": "distro_ready.revenue_split",
    "ValidationError": "distro_ready.revenue_split",
    "compute_release_score": "distro_ready.release_score",
    "QualityTier": "distro_ready.readiness_options",
    "ReleaseTier": "distro_ready.readiness_options",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'distro_ready' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
