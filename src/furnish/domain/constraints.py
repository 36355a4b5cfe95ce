"""Dimension and constraint table for every furniture type.

This module is the single source of truth for dimension ranges, step
granularity, column counts, panel thicknesses and per-column applicability
rules. All dimensions are in centimetres.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from .colors import ColorName
from .errors import DimensionOutOfRange, StepViolation
from .validation import ValidationResult
from .value_objects import (
    DIMENSION_FIELDS,
    ColumnConfigurationType,
    Dimensions,
    FurnitureType,
    require_exhaustive,
)

logger = logging.getLogger(__name__)

CT = ColumnConfigurationType

# Tolerance for float comparisons against the step grid
_EPSILON = 1e-6


class DimensionPolicy(str, Enum):
    """How out-of-range or off-grid dimensions are handled.

    Attributes:
        REJECT: Report the violated fields and keep the input unchanged.
        CLAMP: Snap to the step grid, clamp into range and continue,
            recording a warning for each adjusted field.
    """

    REJECT = "reject"
    CLAMP = "clamp"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class DimensionRange:
    """Allowed range of one dimension.

    Attributes:
        minimum: Smallest allowed value.
        maximum: Largest allowed value.
        default: Value used for new configurations.
        step: Granularity, counted from the minimum.
    """

    minimum: float
    maximum: float
    default: float
    step: float = 1.0

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError("Range minimum cannot exceed maximum")
        if self.step <= 0:
            raise ValueError("Step must be positive")
        if not (self.contains(self.default) and self.on_step(self.default)):
            raise ValueError(f"Default {self.default} is not a valid value")

    def contains(self, value: float) -> bool:
        return self.minimum - _EPSILON <= value <= self.maximum + _EPSILON

    def on_step(self, value: float) -> bool:
        steps = (value - self.minimum) / self.step
        return abs(steps - round(steps)) < _EPSILON

    @property
    def grid_maximum(self) -> float:
        """Largest value that sits on the step grid."""
        steps = math.floor((self.maximum - self.minimum) / self.step + _EPSILON)
        return self.minimum + steps * self.step

    def clamp(self, value: float) -> float:
        """Snap a value to the step grid and clamp it into range."""
        snapped = self.minimum + _round_half_up((value - self.minimum) / self.step) * self.step
        clamped = min(self.grid_maximum, max(self.minimum, snapped))
        return round(clamped, 6)


@dataclass(frozen=True)
class SectionCountRange:
    """Allowed number of columns."""

    minimum: int
    maximum: int
    default: int

    def contains(self, count: int) -> bool:
        return self.minimum <= count <= self.maximum


@dataclass(frozen=True)
class WidthRatioRule:
    """Explicit column width ratios for a section count and width band.

    Attributes:
        section_count: Number of columns the rule applies to.
        ratios: Relative width of each column, left to right.
        min_width: Smallest overall width (inclusive) the rule applies to.
        max_width: Largest overall width (inclusive) the rule applies to.
    """

    section_count: int
    ratios: tuple[float, ...]
    min_width: float = 0.0
    max_width: float = math.inf

    def __post_init__(self) -> None:
        if len(self.ratios) != self.section_count:
            raise ValueError("Ratio count must match section count")
        if any(r <= 0 for r in self.ratios):
            raise ValueError("Ratios must be positive")

    def applies(self, width: float, section_count: int) -> bool:
        return (
            section_count == self.section_count
            and self.min_width <= width <= self.max_width
        )


@dataclass(frozen=True)
class HeightBucket:
    """Maps overall heights below ``max_height`` to an image bucket label."""

    max_height: float
    label: str


@dataclass(frozen=True)
class Constraints:
    """Constraint set of one furniture type.

    Attributes:
        furniture_type: The type these constraints belong to.
        width, height, depth, plinth_height: Dimension ranges.
        section_count: Allowed number of columns.
        min_column_width: Minimum share of the overall width per column.
        side_panel: Thickness of each outer side panel.
        divider: Thickness of each divider between columns.
        top_panel: Thickness of the top panel.
        bottom_panel: Thickness of the bottom panel.
        column_types: Column configuration types offered for this type.
        default_column_type: Type used for new columns.
        colors: Available decors.
        default_color: Decor used for new configurations.
        height_buckets: Image buckets ordered by ascending height.
        width_ratios: Optional per-column width ratio rules.
        recommended_sections: Optional rule returning the column counts the
            product line is designed for at a given width and height.
    """

    furniture_type: FurnitureType
    width: DimensionRange
    height: DimensionRange
    depth: DimensionRange
    plinth_height: DimensionRange
    section_count: SectionCountRange
    min_column_width: float
    side_panel: float
    divider: float
    top_panel: float
    bottom_panel: float
    column_types: tuple[ColumnConfigurationType, ...]
    default_column_type: ColumnConfigurationType
    colors: tuple[ColorName, ...]
    default_color: ColorName
    height_buckets: tuple[HeightBucket, ...]
    width_ratios: tuple[WidthRatioRule, ...] = ()
    recommended_sections: Callable[[float, float], list[int]] | None = field(
        default=None, compare=False
    )

    def __post_init__(self) -> None:
        if self.default_column_type not in self.column_types:
            raise ValueError("Default column type must be one of the column types")
        if self.default_color not in self.colors:
            raise ValueError("Default color must be in the palette")
        if not self.section_count.contains(self.section_count.default):
            raise ValueError("Default section count out of range")

    def range_for(self, name: str) -> DimensionRange:
        """Return the range of a dimension field by name."""
        if name not in DIMENSION_FIELDS:
            raise KeyError(f"Unknown dimension field: {name}")
        return getattr(self, name)

    def default_dimensions(self) -> Dimensions:
        return Dimensions(
            width=self.width.default,
            height=self.height.default,
            depth=self.depth.default,
            plinth_height=self.plinth_height.default,
        )

    def column_height(self, dimensions: Dimensions) -> float:
        """Interior column height: overall height minus plinth and panels."""
        return round(
            dimensions.height
            - dimensions.plinth_height
            - self.top_panel
            - self.bottom_panel,
            6,
        )


def _wardrobe_sections(width: float, height: float) -> list[int]:
    if width <= 100:
        return [1]
    if width <= 159:
        return [2]
    if width <= 180:
        return [2, 3]
    if width <= 199:
        return [2]
    if width <= 200:
        return [2, 3]
    if width <= 240:
        return [3, 4]
    return [3]


def _tv_stand_sections(width: float, height: float) -> list[int]:
    if width < 120:
        return [1, 2]
    if width < 150:
        return [1, 2, 3]
    if width < 190:
        return [2]
    return [2, 4]


MODULAR_COLUMN_TYPES: tuple[ColumnConfigurationType, ...] = (
    CT.DRAWERS_1,
    CT.DRAWERS_2,
    CT.DRAWERS_3,
    CT.DRAWERS_4,
    CT.DRAWERS_5,
    CT.DOOR_1_SHELF,
    CT.DOOR_2_SHELVES,
    CT.DOOR_3_SHELVES,
    CT.DOOR_4_SHELVES,
    CT.DOOR_5_SHELVES,
    CT.DOOR_SPLIT_1_SHELF,
    CT.DOOR_SPLIT_2_SHELVES,
    CT.DOOR_SPLIT_3_SHELVES,
    CT.DOOR_SPLIT_4_SHELVES,
    CT.DOOR_SPLIT_5_SHELVES,
    CT.OPEN_SHELF,
)

WARDROBE_COLUMN_TYPES: tuple[ColumnConfigurationType, ...] = (
    CT.DOUBLE_DOOR,
    CT.SINGLE_DOOR_LEFT,
    CT.SINGLE_DOOR_RIGHT,
    CT.OPEN_SHELF,
    CT.DRAWER_STACK,
)

_CABINET_COLORS: tuple[ColorName, ...] = (
    ColorName.WHITE,
    ColorName.BIEGE,
    ColorName.LIGHT_GREY,
    ColorName.GREY,
)

FURNITURE_CONSTRAINTS: dict[FurnitureType, Constraints] = {
    FurnitureType.WARDROBE: Constraints(
        furniture_type=FurnitureType.WARDROBE,
        width=DimensionRange(40, 250, 150),
        height=DimensionRange(180, 260, 240),
        depth=DimensionRange(40, 65, 60),
        plinth_height=DimensionRange(2, 10, 2),
        section_count=SectionCountRange(1, 4, 2),
        min_column_width=40,
        side_panel=2.0,
        divider=2.0,
        top_panel=2.0,
        bottom_panel=2.0,
        column_types=WARDROBE_COLUMN_TYPES,
        default_column_type=CT.DOUBLE_DOOR,
        colors=_CABINET_COLORS
        + (ColorName.BEIGE_CASHMERE, ColorName.BIEGE_ALMOND),
        default_color=ColorName.WHITE,
        height_buckets=(
            HeightBucket(200, "H180"),
            HeightBucket(230, "H210"),
            HeightBucket(math.inf, "H240"),
        ),
        width_ratios=(
            # One wide double-door column plus one narrow single-door column
            WidthRatioRule(2, (2, 1), min_width=121, max_width=150),
            # Two wide columns plus a narrow end column
            WidthRatioRule(3, (2, 2, 1), min_width=201),
        ),
        recommended_sections=_wardrobe_sections,
    ),
    FurnitureType.STAND: Constraints(
        furniture_type=FurnitureType.STAND,
        width=DimensionRange(50, 120, 80),
        height=DimensionRange(70, 130, 70, step=5),
        depth=DimensionRange(35, 50, 40),
        plinth_height=DimensionRange(2, 10, 2),
        section_count=SectionCountRange(1, 3, 1),
        min_column_width=30,
        side_panel=2.0,
        divider=2.0,
        top_panel=2.0,
        bottom_panel=2.0,
        column_types=MODULAR_COLUMN_TYPES,
        default_column_type=CT.DRAWERS_3,
        colors=_CABINET_COLORS,
        default_color=ColorName.WHITE,
        height_buckets=(
            HeightBucket(90, "H70"),
            HeightBucket(110, "H90"),
            HeightBucket(math.inf, "H110"),
        ),
    ),
    FurnitureType.TV_STAND: Constraints(
        furniture_type=FurnitureType.TV_STAND,
        width=DimensionRange(80, 240, 160),
        height=DimensionRange(30, 60, 45),
        depth=DimensionRange(35, 50, 40),
        plinth_height=DimensionRange(2, 10, 2),
        section_count=SectionCountRange(1, 4, 2),
        min_column_width=40,
        side_panel=2.0,
        divider=2.0,
        top_panel=2.0,
        bottom_panel=2.0,
        column_types=MODULAR_COLUMN_TYPES,
        default_column_type=CT.DOOR_SPLIT_1_SHELF,
        colors=_CABINET_COLORS,
        default_color=ColorName.WHITE,
        height_buckets=(
            HeightBucket(45, "H30"),
            HeightBucket(math.inf, "H45"),
        ),
        recommended_sections=_tv_stand_sections,
    ),
    FurnitureType.BEDSIDE: Constraints(
        furniture_type=FurnitureType.BEDSIDE,
        width=DimensionRange(40, 80, 60),
        height=DimensionRange(30, 60, 40),
        depth=DimensionRange(35, 50, 40),
        plinth_height=DimensionRange(2, 10, 2),
        section_count=SectionCountRange(1, 2, 1),
        min_column_width=40,
        side_panel=2.0,
        divider=2.0,
        top_panel=2.0,
        bottom_panel=2.0,
        column_types=MODULAR_COLUMN_TYPES,
        default_column_type=CT.DRAWERS_1,
        colors=_CABINET_COLORS,
        default_color=ColorName.WHITE,
        height_buckets=(
            HeightBucket(36, "H30"),
            HeightBucket(math.inf, "H40"),
        ),
    ),
    FurnitureType.OFFICE_TABLE: Constraints(
        furniture_type=FurnitureType.OFFICE_TABLE,
        width=DimensionRange(100, 200, 140),
        height=DimensionRange(70, 80, 75),
        depth=DimensionRange(60, 80, 70),
        plinth_height=DimensionRange(0, 0, 0),
        section_count=SectionCountRange(1, 2, 1),
        min_column_width=50,
        side_panel=2.0,
        divider=2.0,
        top_panel=3.0,
        bottom_panel=0.0,
        column_types=(CT.DRAWER_STACK, CT.OPEN_SHELF),
        default_column_type=CT.DRAWER_STACK,
        colors=(
            ColorName.WHITE,
            ColorName.GREY,
            ColorName.NATURAL_ACACIA,
            ColorName.NATURAL_WALNUT,
        ),
        default_color=ColorName.WHITE,
        height_buckets=(HeightBucket(math.inf, "H75"),),
    ),
    FurnitureType.GREENWALL: Constraints(
        furniture_type=FurnitureType.GREENWALL,
        width=DimensionRange(60, 300, 120, step=10),
        height=DimensionRange(100, 250, 200),
        depth=DimensionRange(10, 30, 15),
        plinth_height=DimensionRange(0, 0, 0),
        section_count=SectionCountRange(1, 6, 3),
        min_column_width=30,
        side_panel=1.8,
        divider=1.8,
        top_panel=1.8,
        bottom_panel=1.8,
        column_types=(CT.OPEN_SHELF,),
        default_column_type=CT.OPEN_SHELF,
        colors=(
            ColorName.WHITE,
            ColorName.GREEN_EUCALYPT,
            ColorName.GREEN_FJORD,
            ColorName.GREEN_SALVIA,
        ),
        default_color=ColorName.GREEN_SALVIA,
        height_buckets=(
            HeightBucket(175, "H100"),
            HeightBucket(math.inf, "H175"),
        ),
    ),
    FurnitureType.STORAGE: Constraints(
        furniture_type=FurnitureType.STORAGE,
        width=DimensionRange(60, 200, 100),
        height=DimensionRange(60, 200, 120),
        depth=DimensionRange(30, 50, 40),
        plinth_height=DimensionRange(2, 10, 2),
        section_count=SectionCountRange(1, 5, 2),
        min_column_width=30,
        side_panel=2.0,
        divider=2.0,
        top_panel=2.0,
        bottom_panel=2.0,
        column_types=MODULAR_COLUMN_TYPES,
        default_column_type=CT.DOOR_3_SHELVES,
        colors=_CABINET_COLORS,
        default_color=ColorName.WHITE,
        height_buckets=(
            HeightBucket(100, "H60"),
            HeightBucket(150, "H100"),
            HeightBucket(math.inf, "H150"),
        ),
    ),
}

require_exhaustive(FURNITURE_CONSTRAINTS, FurnitureType, "FURNITURE_CONSTRAINTS")


def constraints_for(furniture_type: FurnitureType | str) -> Constraints:
    """Get the constraint set of a furniture type.

    Raises:
        UnknownFurnitureType: If the tag is not a known furniture type.
    """
    return FURNITURE_CONSTRAINTS[FurnitureType.parse(furniture_type)]


def validate_dimensions(
    dimensions: Dimensions,
    constraints: Constraints,
    policy: DimensionPolicy = DimensionPolicy.REJECT,
    path_prefix: str = "",
) -> ValidationResult:
    """Validate dimensions against a constraint set.

    Under the reject policy each out-of-range field is reported as
    ``dimension_out_of_range`` and each off-grid field as ``step_violation``;
    ``result.value`` is the input unchanged. Under the clamp policy every
    field is snapped and clamped, a warning is recorded per adjusted field and
    ``result.value`` holds the clamped dimensions. Non-finite values are
    reported as ``dimension_out_of_range`` under both policies. Both policies
    are idempotent.

    Args:
        dimensions: Dimensions to check.
        constraints: Constraint set of the active furniture type.
        policy: Reject or clamp.
        path_prefix: Prefix for reported field paths (e.g. "dimensions.").

    Returns:
        ValidationResult whose value is the (possibly clamped) dimensions.
    """
    result = ValidationResult(value=dimensions)

    for name in DIMENSION_FIELDS:
        value = getattr(dimensions, name)
        if not math.isfinite(value):
            rng = constraints.range_for(name)
            result.add_violation(
                f"{path_prefix}{name}",
                DimensionOutOfRange(name, value, rng.minimum, rng.maximum),
                value=value,
                allowed=(rng.minimum, rng.maximum),
            )

    if policy is DimensionPolicy.CLAMP:
        if not result.is_valid:
            return result
        clamped: dict[str, float] = {}
        for name in DIMENSION_FIELDS:
            value = getattr(dimensions, name)
            rng = constraints.range_for(name)
            adjusted = rng.clamp(value)
            if abs(adjusted - value) > _EPSILON:
                result.add_warning(
                    f"{path_prefix}{name}",
                    f"{name} adjusted from {value:g} to {adjusted:g} cm",
                )
                logger.debug(f"Clamped {name} from {value} to {adjusted}")
                clamped[name] = adjusted
            else:
                clamped[name] = value
        result.value = Dimensions(**clamped)
        return result

    for name in DIMENSION_FIELDS:
        value = getattr(dimensions, name)
        rng = constraints.range_for(name)
        if not math.isfinite(value):
            continue
        if not rng.contains(value):
            result.add_violation(
                f"{path_prefix}{name}",
                DimensionOutOfRange(name, value, rng.minimum, rng.maximum),
                value=value,
                allowed=(rng.minimum, rng.maximum),
            )
        elif not rng.on_step(value):
            result.add_violation(
                f"{path_prefix}{name}",
                StepViolation(name, value, rng.step, rng.minimum),
                value=value,
                allowed=rng.step,
            )
    return result


def minimum_width(constraints: Constraints, section_count: int) -> float:
    """Smallest overall width that can hold ``section_count`` columns."""
    return section_count * constraints.min_column_width


def valid_section_counts(
    furniture_type: FurnitureType | str, dimensions: Dimensions
) -> list[int]:
    """Column counts within range whose minimum width fits the dimensions."""
    constraints = constraints_for(furniture_type)
    rng = constraints.section_count
    return [
        count
        for count in range(rng.minimum, rng.maximum + 1)
        if minimum_width(constraints, count) <= dimensions.width + _EPSILON
    ]


def recommended_section_counts(
    constraints: Constraints, dimensions: Dimensions
) -> list[int] | None:
    """Counts the product line recommends, or None without a rule."""
    if constraints.recommended_sections is None:
        return None
    return constraints.recommended_sections(dimensions.width, dimensions.height)


def height_bucket(constraints: Constraints, height: float) -> str:
    """Image bucket label for an overall height."""
    for bucket in constraints.height_buckets:
        if height < bucket.max_height:
            return bucket.label
    return constraints.height_buckets[-1].label


def ratios_for(
    constraints: Constraints, width: float, section_count: int
) -> tuple[float, ...] | None:
    """Width ratios for a width and column count, None for equal division."""
    for rule in constraints.width_ratios:
        if rule.applies(width, section_count):
            return rule.ratios
    return None


# =============================================================================
# Column applicability
# =============================================================================


@dataclass(frozen=True)
class ColumnConfigurationConstraint:
    """Column dimensions a configuration type is offered for.

    All bounds are inclusive and refer to the column, not the whole piece.
    """

    configuration_type: ColumnConfigurationType
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None
    min_depth: float | None = None
    max_depth: float | None = None


@dataclass(frozen=True)
class ColumnDimensions:
    """Width, height and depth of a single column."""

    width: float
    height: float
    depth: float


def _drawer_rule(t: ColumnConfigurationType, lo: float, hi: float | None) -> ColumnConfigurationConstraint:
    return ColumnConfigurationConstraint(t, min_width=40, min_height=lo, max_height=hi, min_depth=25)


def _door_rule(
    t: ColumnConfigurationType, lo: float, hi: float | None, split: bool
) -> ColumnConfigurationConstraint:
    if split:
        return ColumnConfigurationConstraint(
            t, min_width=60, min_height=lo, max_height=hi, min_depth=25
        )
    return ColumnConfigurationConstraint(
        t, min_width=40, max_width=60, min_height=lo, max_height=hi, min_depth=25
    )


COLUMN_CONFIGURATION_CONSTRAINTS: dict[ColumnConfigurationType, ColumnConfigurationConstraint] = {
    rule.configuration_type: rule
    for rule in (
        _drawer_rule(CT.DRAWERS_1, 20, 40),
        _drawer_rule(CT.DRAWERS_2, 40, 60),
        _drawer_rule(CT.DRAWERS_3, 60, 100),
        _drawer_rule(CT.DRAWERS_4, 80, 130),
        _drawer_rule(CT.DRAWERS_5, 100, None),
        _door_rule(CT.DOOR_1_SHELF, 25, 60, split=False),
        _door_rule(CT.DOOR_2_SHELVES, 45, 105, split=False),
        _door_rule(CT.DOOR_3_SHELVES, 80, 130, split=False),
        _door_rule(CT.DOOR_4_SHELVES, 105, None, split=False),
        _door_rule(CT.DOOR_5_SHELVES, 140, None, split=False),
        _door_rule(CT.DOOR_SPLIT_1_SHELF, 25, 60, split=True),
        _door_rule(CT.DOOR_SPLIT_2_SHELVES, 45, 105, split=True),
        _door_rule(CT.DOOR_SPLIT_3_SHELVES, 80, 130, split=True),
        _door_rule(CT.DOOR_SPLIT_4_SHELVES, 105, None, split=True),
        _door_rule(CT.DOOR_SPLIT_5_SHELVES, 140, None, split=True),
        ColumnConfigurationConstraint(CT.SINGLE_DOOR_LEFT, max_width=60),
        ColumnConfigurationConstraint(CT.SINGLE_DOOR_RIGHT, max_width=60),
        ColumnConfigurationConstraint(CT.DOUBLE_DOOR, min_width=55),
        ColumnConfigurationConstraint(CT.DRAWER_STACK, min_width=40, max_width=100),
    )
}


def is_configuration_valid(
    configuration_type: ColumnConfigurationType, column: ColumnDimensions
) -> bool:
    """Check whether a configuration type is offered for a column size.

    Types without a rule are always offered.
    """
    rule = COLUMN_CONFIGURATION_CONSTRAINTS.get(configuration_type)
    if rule is None:
        return True

    checks = (
        (rule.min_width, rule.max_width, column.width),
        (rule.min_height, rule.max_height, column.height),
        (rule.min_depth, rule.max_depth, column.depth),
    )
    for low, high, value in checks:
        if low is not None and value < low - _EPSILON:
            return False
        if high is not None and value > high + _EPSILON:
            return False
    return True


def valid_configurations(
    column: ColumnDimensions,
    allowed: Iterable[ColumnConfigurationType] | None = None,
) -> list[ColumnConfigurationType]:
    """All configuration types offered for a column size, in catalog order."""
    candidates = list(allowed) if allowed is not None else list(ColumnConfigurationType)
    return [t for t in candidates if is_configuration_valid(t, column)]


def find_nearest_available_configuration(
    current: ColumnConfigurationType,
    column: ColumnDimensions,
    allowed: Iterable[ColumnConfigurationType] | None = None,
) -> ColumnConfigurationType | None:
    """Keep ``current`` if it still fits, else return the first type that does.

    Returns:
        A fitting configuration type, or None when nothing fits.
    """
    if is_configuration_valid(current, column):
        return current
    options = valid_configurations(column, allowed)
    return options[0] if options else None
