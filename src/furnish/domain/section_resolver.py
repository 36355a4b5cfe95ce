"""Column layout derivation.

This module turns a furniture type, its overall dimensions and one
ColumnConfiguration per column into a SectionLayout: the ordered column
geometries consumed by the 3D scene and the cart. Derivation is a pure
function of its arguments and is safe to call from several sessions at once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .assets import AssetCatalog, AssetKey, OpeningLayout, default_catalog
from .colors import ColorName
from .constraints import (
    constraints_for,
    height_bucket,
    minimum_width,
    ratios_for,
)
from .entities import ColumnConfiguration, Configuration
from .errors import AssetNotFound, ConfiguratorError, InsufficientWidth
from .metadata import get_configuration_metadata, normalize_column
from .value_objects import (
    ColumnConfigurationType,
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    OpeningType,
)

logger = logging.getLogger(__name__)

# Widths are reported to the millimetre
WIDTH_PRECISION = 1


class SectionWidthError(ValueError):
    """Raised when column widths cannot be resolved from the arguments."""

    pass


@dataclass(frozen=True)
class ColumnGeometry:
    """Derived geometry of one column.

    Attributes:
        index: Left-to-right position, also used by door side selection.
        configuration_type: Interior layout of the column.
        width: Interior column width in cm.
        height: Interior column height in cm.
        x_position: Distance of the column's left edge from the piece's
            left outer edge.
        arrangement_image: Interior image reference.
        opening_image: Door or drawer front image, None for open columns.
        handle_image: Handle image, None for push fronts and open columns.
        door_opening_side: Hinge side, present exactly for single doors.
        mirror: Whether the interior image is mirrored.
        door_count: Doors on the column.
        drawer_count: Drawers in the column.
        shelf_count: Shelves in the column.
        hinge_count: Hinges per door, None without doors.
    """

    index: int
    configuration_type: ColumnConfigurationType
    width: float
    height: float
    x_position: float
    arrangement_image: str
    opening_image: str | None
    handle_image: str | None
    door_opening_side: DoorOpeningSide | None
    mirror: bool
    door_count: int
    drawer_count: int = 0
    shelf_count: int = 0
    hinge_count: int | None = None

    def __post_init__(self) -> None:
        if (self.door_opening_side is not None) != (self.door_count == 1):
            raise ValueError(
                f"Column {self.index}: door opening side requires exactly one door"
            )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "index": self.index,
            "type": self.configuration_type.value,
            "width": self.width,
            "height": self.height,
            "x_position": self.x_position,
            "arrangement_image": self.arrangement_image,
            "opening_image": self.opening_image,
            "handle_image": self.handle_image,
            "mirror": self.mirror,
            "door_count": self.door_count,
            "drawer_count": self.drawer_count,
            "shelf_count": self.shelf_count,
            "hinge_count": self.hinge_count,
        }
        if self.door_opening_side is not None:
            data["door_opening_side"] = self.door_opening_side.value
        return data


@dataclass(frozen=True)
class SectionLayout:
    """Ordered column geometries of one configuration.

    Attributes:
        furniture_type: Product category the layout was derived for.
        columns: Column geometries, left to right.
        width: Overall width.
        usable_width: Width left for columns after side panels and dividers.
        column_height: Interior height shared by all columns.
        source: "derived" for computed layouts, "preset" for layouts shipped
            with a ready-made product.
    """

    furniture_type: FurnitureType
    columns: tuple[ColumnGeometry, ...]
    width: float
    usable_width: float
    column_height: float
    source: str = "derived"

    @property
    def derived_sections(self) -> int:
        """Number of columns; a projection of the layout, not separate state."""
        return len(self.columns)

    @property
    def total_column_width(self) -> float:
        return round(sum(column.width for column in self.columns), 6)

    def to_dict(self) -> dict[str, Any]:
        return {
            "furniture_type": self.furniture_type.value,
            "width": self.width,
            "usable_width": self.usable_width,
            "column_height": self.column_height,
            "derived_sections": self.derived_sections,
            "source": self.source,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class LayoutResult:
    """Outcome of a derivation: a layout or the errors that prevented it."""

    layout: SectionLayout | None
    errors: tuple[ConfiguratorError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.layout is not None and not self.errors


def usable_width(
    total_width: float, column_count: int, side_panel: float, divider: float
) -> float:
    """Overall width minus both side panels and the dividers between columns."""
    return round(total_width - 2 * side_panel - (column_count - 1) * divider, 6)


def resolve_column_widths(
    total_width: float,
    column_count: int,
    side_panel: float,
    divider: float,
    ratios: Sequence[float] | None = None,
) -> list[float]:
    """Partition the usable width into column widths.

    Algorithm:
    1. Usable width = total width - 2 * side panel - (N - 1) * divider
    2. Split by ratios, or equally when no ratios are given
    3. Round every column but the last to 0.1 cm
    4. Give the remainder to the last column so the sum is exact

    Args:
        total_width: Overall outer width in cm.
        column_count: Number of columns N.
        side_panel: Thickness of each outer side panel.
        divider: Thickness of each divider between columns.
        ratios: Optional relative widths, one per column.

    Returns:
        Column widths, left to right.

    Raises:
        SectionWidthError: If the count is not positive, the ratio count does
            not match, or no usable width remains.

    Example:
        >>> resolve_column_widths(150, 2, 2.0, 2.0, ratios=(2, 1))
        [96.0, 48.0]
    """
    if column_count < 1:
        raise SectionWidthError("At least one column is required")
    if ratios is not None and len(ratios) != column_count:
        raise SectionWidthError(
            f"Expected {column_count} width ratios, got {len(ratios)}"
        )

    available = usable_width(total_width, column_count, side_panel, divider)
    if available <= 0:
        raise SectionWidthError(
            f"No usable width left: {total_width:g} cm cannot hold {column_count} "
            f"columns with {side_panel:g} cm sides and {divider:g} cm dividers"
        )

    weights = list(ratios) if ratios is not None else [1.0] * column_count
    total_weight = sum(weights)

    widths = [
        round(available * weight / total_weight, WIDTH_PRECISION)
        for weight in weights[:-1]
    ]
    widths.append(round(available - sum(widths), 6))
    return widths


def _column_positions(
    widths: Sequence[float], side_panel: float, divider: float
) -> list[float]:
    positions: list[float] = []
    cursor = side_panel
    for width in widths:
        positions.append(round(cursor, 6))
        cursor += width + divider
    return positions


def derive_layout(
    furniture_type: FurnitureType | str,
    dimensions: Dimensions,
    columns: Sequence[ColumnConfiguration],
    *,
    section_count: int | None = None,
    color: ColorName | None = None,
    opening_type: OpeningType = OpeningType.PUSH,
    catalog: AssetCatalog | None = None,
) -> LayoutResult:
    """Derive the column layout of a configuration.

    The dimensions are expected to be validated already; a section count
    above the type's maximum is rejected upstream and is not truncated here.

    Args:
        furniture_type: Product category.
        dimensions: Validated overall dimensions.
        columns: One ColumnConfiguration per column, left to right.
        section_count: Number of columns N; defaults to len(columns).
        color: Board decor; defaults to the type's default color.
        opening_type: Front hardware style.
        catalog: Image lookup; defaults to the memoized default catalog.

    Returns:
        LayoutResult holding the layout, or InsufficientWidth /
        AssetNotFound errors.

    Raises:
        UnknownFurnitureType: If the furniture type is not recognized.
        ValueError: If the number of columns does not match section_count.
    """
    constraints = constraints_for(furniture_type)
    count = len(columns) if section_count is None else section_count
    if count < 1:
        raise ValueError("A layout needs at least one column")
    if len(columns) != count:
        raise ValueError(
            f"Expected {count} column configurations, got {len(columns)}"
        )

    required = minimum_width(constraints, count)
    if dimensions.width < required - 1e-6:
        error = InsufficientWidth(dimensions.width, count, required)
        logger.debug(str(error))
        return LayoutResult(layout=None, errors=(error,))

    catalog = catalog if catalog is not None else default_catalog()
    color = color if color is not None else constraints.default_color
    bucket = height_bucket(constraints, dimensions.height)
    column_height = constraints.column_height(dimensions)

    widths = resolve_column_widths(
        dimensions.width,
        count,
        constraints.side_panel,
        constraints.divider,
        ratios_for(constraints, dimensions.width, count),
    )
    positions = _column_positions(widths, constraints.side_panel, constraints.divider)

    geometries: list[ColumnGeometry] = []
    errors: list[ConfiguratorError] = []

    for index, column in enumerate(columns):
        column = normalize_column(column)
        metadata = get_configuration_metadata(column.type)
        door_count = metadata.door_count if metadata else 0

        side: DoorOpeningSide | None = None
        if door_count == 1:
            side = (
                column.door_opening_side
                or (metadata.default_door_opening_side if metadata else None)
                or DoorOpeningSide.LEFT
            )

        try:
            arrangement = catalog.arrangement_image(
                AssetKey(constraints.furniture_type, color, bucket, column.type, column.mirror)
            )
            layout = OpeningLayout.for_column(metadata, side) if metadata else None
            opening = (
                catalog.opening_image(constraints.furniture_type, layout, opening_type)
                if layout is not None
                else None
            )
            handle = catalog.handle_image(opening_type) if layout is not None else None
        except AssetNotFound as e:
            logger.error(f"Column {index}: {e}")
            errors.append(e)
            continue

        geometries.append(
            ColumnGeometry(
                index=index,
                configuration_type=column.type,
                width=widths[index],
                height=column_height,
                x_position=positions[index],
                arrangement_image=arrangement,
                opening_image=opening,
                handle_image=handle,
                door_opening_side=side,
                mirror=column.mirror,
                door_count=door_count,
                drawer_count=metadata.drawer_count if metadata else 0,
                shelf_count=metadata.shelf_count if metadata else 0,
                hinge_count=metadata.hinge_count if metadata else None,
            )
        )

    if errors:
        return LayoutResult(layout=None, errors=tuple(errors))

    return LayoutResult(
        layout=SectionLayout(
            furniture_type=constraints.furniture_type,
            columns=tuple(geometries),
            width=dimensions.width,
            usable_width=usable_width(
                dimensions.width, count, constraints.side_panel, constraints.divider
            ),
            column_height=column_height,
        )
    )


def derive_configuration_layout(
    configuration: Configuration, catalog: AssetCatalog | None = None
) -> LayoutResult:
    """Derive the layout of a whole Configuration."""
    return derive_layout(
        configuration.furniture_type,
        configuration.dimensions,
        configuration.columns,
        section_count=configuration.selected_sections,
        color=configuration.color,
        opening_type=configuration.furniture_options.opening_type,
        catalog=catalog,
    )
