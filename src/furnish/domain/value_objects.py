"""Value objects for the furniture configuration domain."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import UnknownFurnitureType


class FurnitureType(str, Enum):
    """Top-level product categories offered by the configurator.

    The furniture type selects the constraint set, the column metadata that
    applies, the asset lookup tables and the viewer camera rig.
    """

    WARDROBE = "wardrobe"
    STAND = "stand"
    TV_STAND = "tv-stand"
    BEDSIDE = "bedside"
    OFFICE_TABLE = "office-table"
    GREENWALL = "greenwall"
    STORAGE = "storage"

    @classmethod
    def parse(cls, tag: str | FurnitureType) -> FurnitureType:
        """Resolve a raw tag to a furniture type.

        Args:
            tag: The furniture type value, e.g. "tv-stand".

        Returns:
            The matching FurnitureType member.

        Raises:
            UnknownFurnitureType: If the tag does not name a known type.
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise UnknownFurnitureType(str(tag)) from None


class OpeningType(str, Enum):
    """Door and drawer front hardware style.

    Attributes:
        PUSH: Push-to-open fronts, no handle asset is rendered.
        ROUND_HANDLE: Round knob handle.
        PROFILE_HANDLE: Aluminium profile handle along the front edge.
    """

    PUSH = "push"
    ROUND_HANDLE = "round"
    PROFILE_HANDLE = "profile"

    @classmethod
    def from_legacy(cls, value: str | OpeningType | None) -> OpeningType | None:
        """Convert current and legacy opening spellings.

        Older share links and preset data use "handle" or "maner" for the
        round handle and "profile-handle" for the profile handle.

        Returns:
            The matching OpeningType, or None if the value is not recognized.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized in _LEGACY_OPENING_TYPES:
            return _LEGACY_OPENING_TYPES[normalized]
        try:
            return cls(normalized)
        except ValueError:
            return None


_LEGACY_OPENING_TYPES: dict[str, OpeningType] = {
    "handle": OpeningType.ROUND_HANDLE,
    "maner": OpeningType.ROUND_HANDLE,
    "profile-handle": OpeningType.PROFILE_HANDLE,
    "profile-long": OpeningType.PROFILE_HANDLE,
}


class DoorOpeningSide(str, Enum):
    """Hinge side of a single door, seen from the front."""

    LEFT = "left"
    RIGHT = "right"


class GuideType(str, Enum):
    """Drawer runner quality."""

    STANDARD = "standard"
    PREMIUM = "premium"


class HingeType(str, Enum):
    """Door hinge type."""

    STANDARD = "standard"
    SOFT_CLOSE = "soft-close"


class HingePositionRule(str, Enum):
    """How hinges are distributed along a door.

    Attributes:
        EVEN: Hinges spaced evenly between the top and bottom offsets.
        OFFSET_MIDDLE: The middle hinge is shifted below the centre so it
            does not collide with a shelf.
    """

    EVEN = "even"
    OFFSET_MIDDLE = "offset-middle"


class ColumnConfigurationType(str, Enum):
    """Interior layout of one vertical column.

    Naming convention for the modular range:
    - DRAWERS_X: X pull-out drawers
    - DOOR_X_SHELVES: single door with X fixed shelves inside
    - DOOR_SPLIT_X_SHELVES: two side-by-side doors with X shelves inside

    The wardrobe range uses SINGLE_DOOR_LEFT/RIGHT, DOUBLE_DOOR, OPEN_SHELF
    and DRAWER_STACK.
    """

    SINGLE_DOOR_LEFT = "SINGLE_DOOR_LEFT"
    SINGLE_DOOR_RIGHT = "SINGLE_DOOR_RIGHT"
    DOUBLE_DOOR = "DOUBLE_DOOR"
    OPEN_SHELF = "OPEN_SHELF"
    DRAWER_STACK = "DRAWER_STACK"

    DRAWERS_1 = "DRAWERS_1"
    DRAWERS_2 = "DRAWERS_2"
    DRAWERS_3 = "DRAWERS_3"
    DRAWERS_4 = "DRAWERS_4"
    DRAWERS_5 = "DRAWERS_5"

    DOOR_1_SHELF = "DOOR_1_SHELF"
    DOOR_2_SHELVES = "DOOR_2_SHELVES"
    DOOR_3_SHELVES = "DOOR_3_SHELVES"
    DOOR_4_SHELVES = "DOOR_4_SHELVES"
    DOOR_5_SHELVES = "DOOR_5_SHELVES"

    DOOR_SPLIT_1_SHELF = "DOOR_SPLIT_1_SHELF"
    DOOR_SPLIT_2_SHELVES = "DOOR_SPLIT_2_SHELVES"
    DOOR_SPLIT_3_SHELVES = "DOOR_SPLIT_3_SHELVES"
    DOOR_SPLIT_4_SHELVES = "DOOR_SPLIT_4_SHELVES"
    DOOR_SPLIT_5_SHELVES = "DOOR_SPLIT_5_SHELVES"


DIMENSION_FIELDS: tuple[str, ...] = ("width", "height", "depth", "plinth_height")


@dataclass(frozen=True)
class Dimensions:
    """Overall furniture dimensions in centimetres.

    Attributes:
        width: Outer width.
        height: Outer height including the plinth.
        depth: Outer depth.
        plinth_height: Height of the base plinth.
    """

    width: float
    height: float
    depth: float
    plinth_height: float = 0.0

    def __post_init__(self) -> None:
        for name in DIMENSION_FIELDS:
            if getattr(self, name) < 0:
                raise ValueError(f"Dimension '{name}' cannot be negative")

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in DIMENSION_FIELDS}


def require_exhaustive(
    table: Mapping[Any, Any], enum_cls: type[Enum], name: str
) -> None:
    """Fail at import time if a lookup table misses an enum member.

    Every table keyed by a closed enum (constraints, metadata, assets,
    pricing, viewer rigs) calls this once at module level, so adding a new
    member without the matching table entries breaks the import instead of
    producing a silent runtime miss.

    Raises:
        RuntimeError: If one or more members have no entry.
    """
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(
            f"{name} is missing entries for {enum_cls.__name__}: {', '.join(missing)}"
        )
