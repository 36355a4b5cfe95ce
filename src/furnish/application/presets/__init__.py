"""Bundled ready-made product presets."""

from .manager import PresetManager, PresetNotFoundError, preset_to_configuration
from .schema import (
    PresetCatalogSchema,
    PresetDetails,
    PresetDimensions,
    PresetLayout,
    PresetMeta,
    PresetSchema,
    parse_dimension_string,
)

__all__ = [
    "PresetCatalogSchema",
    "PresetDetails",
    "PresetDimensions",
    "PresetLayout",
    "PresetManager",
    "PresetMeta",
    "PresetNotFoundError",
    "PresetSchema",
    "parse_dimension_string",
    "preset_to_configuration",
]
