"""Configuration services shared by the store, query parsing and presets.

``validate_configuration`` is the single validation path: a user edit, a
shared link and a preset all pass through it before a layout is derived.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from furnish.domain.constraints import (
    ColumnDimensions,
    Constraints,
    DimensionPolicy,
    constraints_for,
    find_nearest_available_configuration,
    is_configuration_valid,
    minimum_width,
    ratios_for,
    recommended_section_counts,
    validate_dimensions,
)
from furnish.domain.entities import ColumnConfiguration, Configuration, FurnitureOptions
from furnish.domain.errors import InsufficientWidth
from furnish.domain.metadata import normalize_column
from furnish.domain.pricing import calculate_price
from furnish.domain.section_resolver import SectionWidthError, resolve_column_widths
from furnish.domain.validation import ValidationResult
from furnish.domain.value_objects import Dimensions, FurnitureType

logger = logging.getLogger(__name__)


def column_sizes(
    constraints: Constraints, dimensions: Dimensions, count: int
) -> list[ColumnDimensions] | None:
    """Per-column sizes for a column count, None when the width cannot hold it."""
    if count < 1 or dimensions.width < minimum_width(constraints, count):
        return None
    try:
        widths = resolve_column_widths(
            dimensions.width,
            count,
            constraints.side_panel,
            constraints.divider,
            ratios_for(constraints, dimensions.width, count),
        )
    except SectionWidthError:
        return None
    height = constraints.column_height(dimensions)
    return [ColumnDimensions(width, height, dimensions.depth) for width in widths]


def resize_columns(
    furniture_type: FurnitureType,
    dimensions: Dimensions,
    columns: Sequence[ColumnConfiguration],
    count: int,
) -> tuple[ColumnConfiguration, ...]:
    """Grow or shrink the column list to ``count`` entries.

    Existing columns keep their position and settings. Each new column starts
    as the type's default column type and is replaced by the first allowed
    type that fits its size when the default does not.
    """
    constraints = constraints_for(furniture_type)
    kept = list(columns[:count])
    sizes = column_sizes(constraints, dimensions, count)

    for index in range(len(kept), count):
        column_type = constraints.default_column_type
        if sizes is not None:
            column_type = (
                find_nearest_available_configuration(
                    column_type, sizes[index], constraints.column_types
                )
                or column_type
            )
        kept.append(ColumnConfiguration(type=column_type))
    return tuple(kept)


def normalize_columns(
    columns: Sequence[ColumnConfiguration],
) -> tuple[ColumnConfiguration, ...]:
    """Drop unsupported door side and mirror settings from every column."""
    return tuple(normalize_column(column) for column in columns)


def with_price(configuration: Configuration) -> Configuration:
    """Return the configuration with a freshly computed price."""
    options = configuration.furniture_options
    price = calculate_price(
        configuration.furniture_type,
        configuration.dimensions,
        configuration.selected_sections,
        guides=options.guides,
        hinges=options.hinges,
        door_count=configuration.door_count,
    )
    return replace(configuration, price=price)


def default_configuration(furniture_type: FurnitureType | str) -> Configuration:
    """Create the configuration a fresh configurator session starts with.

    Raises:
        UnknownFurnitureType: If the type tag is not recognized.
    """
    constraints = constraints_for(furniture_type)
    dimensions = constraints.default_dimensions()
    count = constraints.section_count.default
    configuration = Configuration(
        furniture_type=constraints.furniture_type,
        dimensions=dimensions,
        selected_sections=count,
        columns=resize_columns(constraints.furniture_type, dimensions, (), count),
        color=constraints.default_color,
        furniture_options=FurnitureOptions(),
    )
    return with_price(configuration)


def validate_configuration(
    configuration: Configuration,
    policy: DimensionPolicy = DimensionPolicy.REJECT,
) -> ValidationResult:
    """Validate a whole configuration against its furniture type.

    Checks, in order: dimensions (reject or clamp), section count range,
    column count, allowed column types, palette color and minimum width.
    Column sizes outside a type's applicability range and section counts
    outside the recommendation are reported as warnings.

    Args:
        configuration: Candidate configuration.
        policy: Dimension policy of the deployment.

    Returns:
        ValidationResult whose value is the configuration with clamped
        dimensions and normalized columns.

    Raises:
        UnknownFurnitureType: If the furniture type is not recognized.
    """
    constraints = constraints_for(configuration.furniture_type)

    dimension_result = validate_dimensions(
        configuration.dimensions, constraints, policy, path_prefix="dimensions."
    )
    result = ValidationResult().merge(dimension_result)
    dimensions: Dimensions = dimension_result.value

    sections = configuration.selected_sections
    section_range = constraints.section_count
    sections_valid = section_range.contains(sections)
    if not sections_valid:
        result.add_error(
            "selected_sections",
            f"selected_sections must be between {section_range.minimum} and "
            f"{section_range.maximum} for {constraints.furniture_type.value} (got {sections})",
            value=sections,
            code="section_count_out_of_range",
            allowed=(section_range.minimum, section_range.maximum),
        )

    if len(configuration.columns) != sections:
        result.add_error(
            "columns",
            f"Expected {sections} column configurations, got {len(configuration.columns)}",
            value=len(configuration.columns),
            code="column_count_mismatch",
            allowed=sections,
        )

    for index, column in enumerate(configuration.columns):
        if column.type not in constraints.column_types:
            result.add_error(
                f"columns[{index}].type",
                f"{column.type.value} is not offered for {constraints.furniture_type.value}",
                value=column.type.value,
                code="column_type_not_allowed",
                allowed=[t.value for t in constraints.column_types],
            )

    if configuration.color not in constraints.colors:
        result.add_error(
            "color",
            f"{configuration.color.value} is not available for {constraints.furniture_type.value}",
            value=configuration.color.value,
            code="color_not_available",
            allowed=[c.value for c in constraints.colors],
        )

    if sections_valid:
        required = minimum_width(constraints, sections)
        if dimensions.width < required:
            result.add_violation(
                "dimensions.width",
                InsufficientWidth(dimensions.width, sections, required),
                value=dimensions.width,
                allowed=required,
            )

    if result.is_valid:
        recommended = recommended_section_counts(constraints, dimensions)
        if recommended is not None and sections not in recommended:
            result.add_warning(
                "selected_sections",
                f"{sections} columns are not a standard layout at {dimensions.width:g} cm",
                suggestion=f"Recommended: {', '.join(str(n) for n in recommended)}",
            )
        sizes = column_sizes(constraints, dimensions, sections) or []
        for index, (column, size) in enumerate(zip(configuration.columns, sizes)):
            if not is_configuration_valid(column.type, size):
                result.add_warning(
                    f"columns[{index}].type",
                    f"{column.type.value} is not designed for a "
                    f"{size.width:g} x {size.height:g} cm column",
                )

    result.value = replace(
        configuration,
        dimensions=dimensions,
        columns=normalize_columns(configuration.columns),
    )
    if not result.is_valid:
        logger.debug(f"Configuration invalid: {', '.join(result.violated_fields)}")
    return result
