"""Unit tests for the configuration metadata registry."""

import pytest

from furnish.domain.entities import ColumnConfiguration
from furnish.domain.metadata import (
    ConfigurationMetadata,
    ConfigurationMetadataRegistry,
    get_configuration_metadata,
    metadata_registry,
    normalize_column,
)
from furnish.domain.value_objects import ColumnConfigurationType as CT
from furnish.domain.value_objects import DoorOpeningSide, HingePositionRule


class TestRegistry:
    """Tests for registry lookups."""

    def test_every_type_is_registered(self) -> None:
        assert metadata_registry.list() == list(CT)

    def test_unknown_tag_returns_none(self) -> None:
        assert get_configuration_metadata("FOLDING_BED") is None

    def test_require_unknown_tag_raises(self) -> None:
        with pytest.raises(KeyError):
            metadata_registry.require("FOLDING_BED")

    def test_lookup_by_raw_tag(self) -> None:
        assert metadata_registry.get("DRAWERS_3").drawer_count == 3

    def test_duplicate_registration_rejected(self) -> None:
        registry = ConfigurationMetadataRegistry()
        record = metadata_registry.require(CT.OPEN_SHELF)
        registry.register(record)

        with pytest.raises(ValueError, match="already registered"):
            registry.register(record)

    def test_door_side_applies_exactly_to_single_doors(self) -> None:
        single = set(metadata_registry.types_where(door_count=1))
        with_side = set(metadata_registry.types_where(supports_door_opening_side=True))

        assert single == with_side
        assert CT.DOOR_2_SHELVES in single
        assert CT.DOUBLE_DOOR not in single


class TestMetadataFacts:
    """Tests for individual metadata records."""

    def test_split_door(self) -> None:
        meta = metadata_registry.require(CT.DOOR_SPLIT_2_SHELVES)

        assert meta.door_count == 2
        assert not meta.supports_door_opening_side
        assert meta.shelf_count == 2

    def test_three_shelf_door_offsets_middle_hinge(self) -> None:
        meta = metadata_registry.require(CT.DOOR_3_SHELVES)

        assert meta.hinge_position_rule is HingePositionRule.OFFSET_MIDDLE

    def test_right_single_door_defaults_right(self) -> None:
        meta = metadata_registry.require(CT.SINGLE_DOOR_RIGHT)

        assert meta.default_door_opening_side is DoorOpeningSide.RIGHT

    def test_drawers_have_no_hinges(self) -> None:
        meta = metadata_registry.require(CT.DRAWERS_4)

        assert meta.hinge_count is None
        assert meta.has_drawers
        assert not meta.has_doors

    def test_inconsistent_record_rejected(self) -> None:
        with pytest.raises(ValueError):
            ConfigurationMetadata(
                type=CT.DOUBLE_DOOR,
                label="x",
                door_count=2,
                supports_mirror=False,
                supports_door_opening_side=True,
            )


class TestNormalizeColumn:
    """Tests for dropping unsupported column options."""

    def test_side_dropped_on_split_door(self) -> None:
        column = ColumnConfiguration(CT.DOUBLE_DOOR, door_opening_side=DoorOpeningSide.LEFT)

        assert normalize_column(column).door_opening_side is None

    def test_mirror_dropped_on_drawers(self) -> None:
        column = ColumnConfiguration(CT.DRAWERS_2, mirror=True)

        assert normalize_column(column).mirror is False

    def test_supported_options_kept(self) -> None:
        column = ColumnConfiguration(
            CT.SINGLE_DOOR_LEFT, door_opening_side=DoorOpeningSide.RIGHT, mirror=True
        )

        assert normalize_column(column) is column
