"""Versioned DSP catalog shipped with the package.

The packaged ``data/dsp_catalog.json`` is the single source of platform
loudness targets and artwork gates. Callers that need different tolerances
load their own file with :func:`load_catalog` and pass the result to the
evaluators instead of editing evaluator code.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
import json

from distro_ready.domain.catalog import DspCatalog
from distro_ready.utils.config import CatalogConfig, load_catalog_config

DEFAULT_CATALOG_RESOURCE = "dsp_catalog.json"


def load_default_catalog() -> DspCatalog:
    resource = resources.files("distro_ready").joinpath("data").joinpath(DEFAULT_CATALOG_RESOURCE)
    raw = resource.read_text(encoding="utf-8")
    return CatalogConfig.model_validate(json.loads(raw)).to_catalog()


def load_catalog(path: Path | None = None) -> DspCatalog:
    """Load a catalog file, or the packaged default when ``path`` is ``None``."""

    if path is None:
        return DEFAULT_DSP_CATALOG
    return load_catalog_config(path).to_catalog()


def resolve_catalog(catalog: DspCatalog | None) -> DspCatalog:
    return DEFAULT_DSP_CATALOG if catalog is None else catalog


DEFAULT_DSP_CATALOG: DspCatalog = load_default_catalog()
