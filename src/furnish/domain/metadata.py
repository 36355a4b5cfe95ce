"""Configuration metadata registry for column configuration types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from .value_objects import (
    ColumnConfigurationType,
    DoorOpeningSide,
    HingePositionRule,
    require_exhaustive,
)

logger = logging.getLogger(__name__)

CT = ColumnConfigurationType


@dataclass(frozen=True)
class ConfigurationMetadata:
    """Static facts about one column configuration type.

    Metadata is derived once per type and never edited per column instance.

    Attributes:
        type: The configuration type described.
        label: Translation key for the UI label.
        door_count: 0 for no doors, 1 for a single door, 2 for split doors.
        supports_mirror: Whether the interior can be mirrored left/right.
        supports_door_opening_side: Whether a hinge side choice applies.
            True exactly when door_count is 1.
        drawer_count: Number of pull-out drawers.
        shelf_count: Number of internal shelves.
        hinge_count: Hinges per door, None for door-less columns.
        hinge_position_rule: How hinges are distributed, None without doors.
        default_door_opening_side: Side used when the user picks none.
    """

    type: ColumnConfigurationType
    label: str
    door_count: int
    supports_mirror: bool
    supports_door_opening_side: bool
    drawer_count: int = 0
    shelf_count: int = 0
    hinge_count: int | None = None
    hinge_position_rule: HingePositionRule | None = None
    default_door_opening_side: DoorOpeningSide | None = None

    def __post_init__(self) -> None:
        if self.door_count not in (0, 1, 2):
            raise ValueError("door_count must be 0, 1 or 2")
        if self.supports_door_opening_side != (self.door_count == 1):
            raise ValueError(
                f"{self.type.value}: door opening side applies only to single doors"
            )

    @property
    def has_doors(self) -> bool:
        return self.door_count > 0

    @property
    def has_drawers(self) -> bool:
        return self.drawer_count > 0


class ConfigurationMetadataRegistry:
    """Registry of metadata records keyed by column configuration type.

    The registry is populated once at import time and treated as read-only
    afterwards. Lookups of unregistered or unknown tags return None: the
    metadata only gates additive UI such as the door side selector, so a
    missing record means "feature not applicable" rather than a crash.

    Example:
        meta = metadata_registry.get(ColumnConfigurationType.DOOR_2_SHELVES)
        if meta and meta.supports_door_opening_side:
            ...
    """

    def __init__(self) -> None:
        self._records: dict[ColumnConfigurationType, ConfigurationMetadata] = {}

    def register(self, metadata: ConfigurationMetadata) -> ConfigurationMetadata:
        """Register a metadata record.

        Raises:
            ValueError: If the type is already registered.
        """
        if metadata.type in self._records:
            raise ValueError(f"Metadata for '{metadata.type.value}' already registered")
        self._records[metadata.type] = metadata
        return metadata

    def get(self, column_type: ColumnConfigurationType | str) -> ConfigurationMetadata | None:
        """Look up metadata by type or raw tag; None if not registered."""
        try:
            key = ColumnConfigurationType(column_type)
        except ValueError:
            logger.debug(f"No configuration metadata for unknown tag {column_type!r}")
            return None
        return self._records.get(key)

    def require(self, column_type: ColumnConfigurationType | str) -> ConfigurationMetadata:
        """Look up metadata, raising KeyError when it is missing."""
        metadata = self.get(column_type)
        if metadata is None:
            raise KeyError(f"No configuration metadata registered for {column_type!r}")
        return metadata

    def list(self) -> list[ColumnConfigurationType]:
        """All registered types in declaration order."""
        return [t for t in ColumnConfigurationType if t in self._records]

    def types_where(self, **facts: Any) -> list[ColumnConfigurationType]:
        """Registered types whose metadata matches every given attribute.

        Example:
            metadata_registry.types_where(door_count=1)
        """
        return [
            t
            for t, record in self._records.items()
            if all(getattr(record, name) == value for name, value in facts.items())
        ]

    def __contains__(self, column_type: object) -> bool:
        return column_type in self._records


metadata_registry = ConfigurationMetadataRegistry()


def _single_door(
    column_type: ColumnConfigurationType,
    label: str,
    shelves: int,
    hinges: int,
    rule: HingePositionRule,
    side: DoorOpeningSide = DoorOpeningSide.LEFT,
    mirror: bool = False,
) -> ConfigurationMetadata:
    return ConfigurationMetadata(
        type=column_type,
        label=label,
        door_count=1,
        supports_mirror=mirror,
        supports_door_opening_side=True,
        shelf_count=shelves,
        hinge_count=hinges,
        hinge_position_rule=rule,
        default_door_opening_side=side,
    )


def _split_door(
    column_type: ColumnConfigurationType,
    label: str,
    shelves: int,
    hinges: int,
    rule: HingePositionRule,
    mirror: bool = False,
) -> ConfigurationMetadata:
    return ConfigurationMetadata(
        type=column_type,
        label=label,
        door_count=2,
        supports_mirror=mirror,
        supports_door_opening_side=False,
        shelf_count=shelves,
        hinge_count=hinges,
        hinge_position_rule=rule,
    )


def _drawers(
    column_type: ColumnConfigurationType, label: str, drawers: int
) -> ConfigurationMetadata:
    return ConfigurationMetadata(
        type=column_type,
        label=label,
        door_count=0,
        supports_mirror=False,
        supports_door_opening_side=False,
        drawer_count=drawers,
    )


EVEN = HingePositionRule.EVEN
OFFSET = HingePositionRule.OFFSET_MIDDLE

for _record in (
    # Wardrobe range: interiors are zone based and can be mirrored
    _single_door(
        CT.SINGLE_DOOR_LEFT, "configurator.column.singleDoorLeft", 4, 4, EVEN,
        side=DoorOpeningSide.LEFT, mirror=True,
    ),
    _single_door(
        CT.SINGLE_DOOR_RIGHT, "configurator.column.singleDoorRight", 4, 4, EVEN,
        side=DoorOpeningSide.RIGHT, mirror=True,
    ),
    _split_door(CT.DOUBLE_DOOR, "configurator.column.doubleDoor", 4, 4, EVEN, mirror=True),
    ConfigurationMetadata(
        type=CT.OPEN_SHELF,
        label="configurator.column.openShelf",
        door_count=0,
        supports_mirror=True,
        supports_door_opening_side=False,
        shelf_count=4,
    ),
    _drawers(CT.DRAWER_STACK, "configurator.column.drawerStack", 4),
    # Modular range
    _drawers(CT.DRAWERS_1, "configurator.column.drawers1", 1),
    _drawers(CT.DRAWERS_2, "configurator.column.drawers2", 2),
    _drawers(CT.DRAWERS_3, "configurator.column.drawers3", 3),
    _drawers(CT.DRAWERS_4, "configurator.column.drawers4", 4),
    _drawers(CT.DRAWERS_5, "configurator.column.drawers5", 5),
    _single_door(CT.DOOR_1_SHELF, "configurator.column.door1Shelf", 1, 2, EVEN),
    _single_door(CT.DOOR_2_SHELVES, "configurator.column.door2Shelves", 2, 3, EVEN),
    _single_door(CT.DOOR_3_SHELVES, "configurator.column.door3Shelves", 3, 3, OFFSET),
    _single_door(CT.DOOR_4_SHELVES, "configurator.column.door4Shelves", 4, 3, EVEN),
    _single_door(CT.DOOR_5_SHELVES, "configurator.column.door5Shelves", 5, 3, OFFSET),
    _split_door(CT.DOOR_SPLIT_1_SHELF, "configurator.column.doorSplit1Shelf", 1, 2, EVEN),
    _split_door(CT.DOOR_SPLIT_2_SHELVES, "configurator.column.doorSplit2Shelves", 2, 3, EVEN),
    _split_door(CT.DOOR_SPLIT_3_SHELVES, "configurator.column.doorSplit3Shelves", 3, 3, OFFSET),
    _split_door(CT.DOOR_SPLIT_4_SHELVES, "configurator.column.doorSplit4Shelves", 4, 3, EVEN),
    _split_door(CT.DOOR_SPLIT_5_SHELVES, "configurator.column.doorSplit5Shelves", 5, 3, OFFSET),
):
    metadata_registry.register(_record)

require_exhaustive(metadata_registry._records, ColumnConfigurationType, "metadata_registry")


def get_configuration_metadata(
    column_type: ColumnConfigurationType | str,
) -> ConfigurationMetadata | None:
    """Return the metadata for a column type, or None if not registered."""
    return metadata_registry.get(column_type)


def normalize_column(column: Any) -> Any:
    """Drop option fields that the column type does not support.

    A door opening side on a column without exactly one door, or a mirror
    flag on a type that cannot be mirrored, is silently ignored: the field is
    removed rather than reported. Works on any frozen dataclass with
    ``type``, ``door_opening_side`` and ``mirror`` fields.
    """
    metadata = get_configuration_metadata(column.type)
    side = column.door_opening_side
    mirror = column.mirror
    if side is not None and not (metadata and metadata.supports_door_opening_side):
        logger.debug(f"Ignoring door opening side on {column.type.value}")
        side = None
    if mirror and not (metadata and metadata.supports_mirror):
        logger.debug(f"Ignoring mirror flag on {column.type.value}")
        mirror = False
    if side is column.door_opening_side and mirror is column.mirror:
        return column
    return replace(column, door_opening_side=side, mirror=mirror)
