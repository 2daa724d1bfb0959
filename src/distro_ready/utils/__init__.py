from .config import (
    ArtworkLimitsConfig,
    ArtworkRequirementConfig,
    AudioLimitsConfig,
    CatalogConfig,
    LoudnessTargetConfig,
    load_catalog_config,
)

__all__ = [
    "ArtworkLimitsConfig",
    "ArtworkRequirementConfig",
    "AudioLimitsConfig",
    "CatalogConfig",
    "LoudnessTargetConfig",
    "load_catalog_config",
]
