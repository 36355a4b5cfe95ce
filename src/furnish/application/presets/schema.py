"""Pydantic schema for ready-made product presets.

Historical preset data describes dimensions in several shapes: a structured
mapping with ``plinthHeight``, the misspelled ``plintHeight`` and
``plintheight`` variants, or a single formatted string such as
``"180 x 240 x 60 cm"``. The schema normalizes all of them into one
structured ``dimensions`` representation before validation.
"""

import re
from dataclasses import replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from furnish.domain.section_resolver import SectionLayout
from furnish.domain.value_objects import FurnitureType, GuideType, HingeType, OpeningType

PLINTH_ALIASES: tuple[str, ...] = ("plinthHeight", "plintHeight", "plintheight", "plinth_height")

_DIMENSION_STRING = re.compile(
    r"^\s*(?P<width>\d+(?:\.\d+)?)\s*[x×]\s*(?P<height>\d+(?:\.\d+)?)\s*[x×]\s*"
    r"(?P<depth>\d+(?:\.\d+)?)\s*(?:cm)?\s*$",
    re.IGNORECASE,
)

# Tolerance when matching shipped column widths against the usable width
_WIDTH_TOLERANCE = 0.5


def parse_dimension_string(value: str) -> dict[str, float]:
    """Parse "W x H x D cm" into a width/height/depth mapping.

    Raises:
        ValueError: If the string does not have the expected shape.

    Example:
        >>> parse_dimension_string("180 x 240 x 60 cm")
        {'width': 180.0, 'height': 240.0, 'depth': 60.0}
    """
    match = _DIMENSION_STRING.match(value)
    if match is None:
        raise ValueError(f"Expected 'W x H x D cm', got {value!r}")
    return {name: float(match.group(name)) for name in ("width", "height", "depth")}


def _pop_plinth(data: dict[str, Any]) -> Any:
    found = None
    for alias in PLINTH_ALIASES:
        if alias in data:
            value = data.pop(alias)
            if found is None:
                found = value
    return found


class PresetDimensions(BaseModel):
    """Structured preset dimensions in cm."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    plinth_height: float = Field(default=0.0, ge=0)


class PresetDetails(BaseModel):
    """Configurable part of a preset."""

    model_config = ConfigDict(extra="forbid")

    dimensions: PresetDimensions
    color: str = Field(..., pattern=r"^#[0-9a-fA-F]{6}$")
    columns: list[str] = Field(..., min_length=1)
    opening_type: OpeningType = OpeningType.PUSH
    guides: GuideType = GuideType.STANDARD
    hinges: HingeType = HingeType.STANDARD

    @model_validator(mode="before")
    @classmethod
    def normalize_shape(cls, data: Any) -> Any:
        """Fold the historical key spellings into the structured shape."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if "openingType" in data:
            data.setdefault("opening_type", data.pop("openingType"))
        if "colCfg" in data:
            data.setdefault("columns", data.pop("colCfg"))

        plinth = _pop_plinth(data)
        dimensions = data.get("dimensions")
        if isinstance(dimensions, str):
            dimensions = parse_dimension_string(dimensions)
        elif isinstance(dimensions, dict):
            dimensions = dict(dimensions)
            nested_plinth = _pop_plinth(dimensions)
            if nested_plinth is not None:
                plinth = nested_plinth
        if isinstance(dimensions, dict) and plinth is not None:
            dimensions["plinth_height"] = plinth
        if dimensions is not None:
            data["dimensions"] = dimensions

        if isinstance(data.get("columns"), str):
            data["columns"] = [c for c in data["columns"].split(",") if c.strip()]
        return data

    @field_validator("opening_type", mode="before")
    @classmethod
    def accept_legacy_opening(cls, v: Any) -> Any:
        opening = OpeningType.from_legacy(v)
        if opening is None:
            raise ValueError(f"Unknown opening type: {v!r}")
        return opening


class PresetMeta(BaseModel):
    """Catalog information shown on the product page."""

    name: str
    image: str | None = None
    description: str | None = None


class PresetLayout(BaseModel):
    """Layout shipped with a preset, matching its photographed product."""

    model_config = ConfigDict(extra="forbid")

    column_widths: list[float] = Field(..., min_length=1)

    @field_validator("column_widths")
    @classmethod
    def widths_positive(cls, v: list[float]) -> list[float]:
        if any(width <= 0 for width in v):
            raise ValueError("Column widths must be positive")
        return v


class PresetSchema(BaseModel):
    """A ready-made product.

    Attributes:
        id: Catalog identifier, e.g. "WR-101".
        slug: URL slug of the product page.
        type: Furniture type.
        meta: Catalog information.
        details: Normalized configuration data.
        layout: Optional precomputed layout.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    type: FurnitureType
    meta: PresetMeta
    details: PresetDetails
    layout: PresetLayout | None = None

    @model_validator(mode="after")
    def layout_matches_columns(self) -> "PresetSchema":
        if self.layout is not None and len(self.layout.column_widths) != len(self.details.columns):
            raise ValueError(
                f"Layout has {len(self.layout.column_widths)} widths for "
                f"{len(self.details.columns)} columns"
            )
        return self

    def to_section_layout(self, derived: SectionLayout | None) -> SectionLayout:
        """Apply the shipped column widths to a derived layout.

        Images, heights and door sides come from the derived layout; only the
        widths and positions are taken from the preset.

        Raises:
            ValueError: If there is no derived layout or the shipped widths
                do not fill the usable width.
        """
        if derived is None or self.layout is None:
            raise ValueError(f"Preset {self.id} has no layout to install")
        widths = self.layout.column_widths
        if len(widths) != derived.derived_sections:
            raise ValueError(f"Preset {self.id} layout does not match its columns")
        if abs(sum(widths) - derived.usable_width) > _WIDTH_TOLERANCE:
            raise ValueError(
                f"Preset {self.id} column widths sum to {sum(widths):g} cm, "
                f"usable width is {derived.usable_width:g} cm"
            )

        divider = 0.0
        if derived.derived_sections > 1:
            divider = (derived.width - 2 * derived.columns[0].x_position - derived.usable_width) / (
                derived.derived_sections - 1
            )
        cursor = derived.columns[0].x_position
        columns = []
        for column, width in zip(derived.columns, widths):
            columns.append(replace(column, width=width, x_position=round(cursor, 6)))
            cursor += width + divider
        return replace(derived, columns=tuple(columns), source="preset")


class PresetCatalogSchema(BaseModel):
    """Root of the bundled presets file."""

    presets: list[PresetSchema]
