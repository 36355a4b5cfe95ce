"""Domain layer - constraint tables, metadata and layout derivation."""

from .assets import AssetCatalog, AssetKey, OpeningLayout, build_default_catalog, default_catalog
from .capability import detect_render_capability, reset_render_capability, set_render_probe
from .colors import COLOR_DICTIONARY, ColorItem, ColorName, color_name, hex_code
from .constraints import (
    Constraints,
    DimensionPolicy,
    DimensionRange,
    SectionCountRange,
    WidthRatioRule,
    constraints_for,
    find_nearest_available_configuration,
    is_configuration_valid,
    minimum_width,
    valid_section_counts,
    validate_dimensions,
)
from .entities import ColumnConfiguration, Configuration, FurnitureOptions
from .errors import (
    AssetNotFound,
    ConfiguratorError,
    DimensionOutOfRange,
    InsufficientWidth,
    InvalidQueryState,
    StepViolation,
    UnknownFurnitureType,
)
from .metadata import (
    ConfigurationMetadata,
    ConfigurationMetadataRegistry,
    get_configuration_metadata,
    metadata_registry,
    normalize_column,
)
from .pricing import PricingFormula, calculate_price
from .section_resolver import (
    ColumnGeometry,
    LayoutResult,
    SectionLayout,
    SectionWidthError,
    derive_configuration_layout,
    derive_layout,
    resolve_column_widths,
)
from .validation import ValidationError, ValidationResult, ValidationWarning
from .value_objects import (
    ColumnConfigurationType,
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    GuideType,
    HingePositionRule,
    HingeType,
    OpeningType,
)
from .viewer import ViewerConfig, get_viewer_config, project_viewer

__all__ = [
    "AssetCatalog",
    "AssetKey",
    "AssetNotFound",
    "COLOR_DICTIONARY",
    "ColorItem",
    "ColorName",
    "ColumnConfiguration",
    "ColumnConfigurationType",
    "ColumnGeometry",
    "Configuration",
    "ConfigurationMetadata",
    "ConfigurationMetadataRegistry",
    "ConfiguratorError",
    "Constraints",
    "DimensionOutOfRange",
    "DimensionPolicy",
    "DimensionRange",
    "Dimensions",
    "DoorOpeningSide",
    "FurnitureOptions",
    "FurnitureType",
    "GuideType",
    "HingePositionRule",
    "HingeType",
    "InsufficientWidth",
    "InvalidQueryState",
    "LayoutResult",
    "OpeningLayout",
    "OpeningType",
    "PricingFormula",
    "SectionCountRange",
    "SectionLayout",
    "SectionWidthError",
    "StepViolation",
    "UnknownFurnitureType",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "ViewerConfig",
    "WidthRatioRule",
    "build_default_catalog",
    "calculate_price",
    "color_name",
    "constraints_for",
    "default_catalog",
    "derive_configuration_layout",
    "derive_layout",
    "detect_render_capability",
    "find_nearest_available_configuration",
    "get_configuration_metadata",
    "get_viewer_config",
    "hex_code",
    "is_configuration_valid",
    "metadata_registry",
    "minimum_width",
    "normalize_column",
    "project_viewer",
    "reset_render_capability",
    "resolve_column_widths",
    "set_render_probe",
    "valid_section_counts",
    "validate_dimensions",
]
