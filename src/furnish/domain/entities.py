"""Configuration aggregate and its parts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .colors import ColorName, hex_code
from .metadata import ConfigurationMetadata, get_configuration_metadata
from .value_objects import (
    ColumnConfigurationType,
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    GuideType,
    HingeType,
    OpeningType,
)


@dataclass(frozen=True)
class ColumnConfiguration:
    """One user-chosen column.

    Attributes:
        type: Interior layout of the column.
        door_opening_side: Hinge side; meaningful only for single-door types.
        mirror: Mirror the interior; meaningful only when the type supports it.
    """

    type: ColumnConfigurationType
    door_opening_side: DoorOpeningSide | None = None
    mirror: bool = False

    @property
    def metadata(self) -> ConfigurationMetadata | None:
        return get_configuration_metadata(self.type)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "mirror": self.mirror}
        if self.door_opening_side is not None:
            data["door_opening_side"] = self.door_opening_side.value
        return data


@dataclass(frozen=True)
class FurnitureOptions:
    """Hardware choices that apply to the whole piece."""

    opening_type: OpeningType = OpeningType.PUSH
    guides: GuideType = GuideType.STANDARD
    hinges: HingeType = HingeType.STANDARD

    def to_dict(self) -> dict[str, str]:
        return {
            "opening_type": self.opening_type.value,
            "guides": self.guides.value,
            "hinges": self.hinges.value,
        }


@dataclass(frozen=True)
class Configuration:
    """Root aggregate of one configurator session.

    Instances are immutable; the store replaces the whole value on every
    update. ``price`` is derived from the other fields and is excluded from
    equality, so two configurations describing the same product compare equal
    regardless of when their price was computed.

    Attributes:
        furniture_type: Product category.
        dimensions: Overall dimensions in cm.
        selected_sections: Number of columns.
        columns: One ColumnConfiguration per column, left to right.
        color: Board decor.
        furniture_options: Opening type, guides and hinges.
        price: Last computed price.
    """

    furniture_type: FurnitureType
    dimensions: Dimensions
    selected_sections: int
    columns: tuple[ColumnConfiguration, ...]
    color: ColorName
    furniture_options: FurnitureOptions = field(default_factory=FurnitureOptions)
    price: float = field(default=0.0, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def door_count(self) -> int:
        """Total number of doors across all columns."""
        total = 0
        for column in self.columns:
            metadata = column.metadata
            if metadata is not None:
                total += metadata.door_count
        return total

    @property
    def color_hex(self) -> str:
        return hex_code(self.color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "furniture_type": self.furniture_type.value,
            "dimensions": self.dimensions.to_dict(),
            "selected_sections": self.selected_sections,
            "columns": [column.to_dict() for column in self.columns],
            "color": self.color.value,
            "color_hex": self.color_hex,
            "furniture_options": self.furniture_options.to_dict(),
            "price": self.price,
        }
