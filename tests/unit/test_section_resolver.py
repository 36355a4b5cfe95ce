"""Unit tests for column layout derivation."""

from dataclasses import replace

import pytest

from furnish.domain.assets import AssetCatalog
from furnish.domain.colors import ColorName
from furnish.domain.constraints import FURNITURE_CONSTRAINTS, constraints_for, minimum_width
from furnish.domain.entities import ColumnConfiguration
from furnish.domain.errors import AssetNotFound, InsufficientWidth
from furnish.domain.metadata import get_configuration_metadata
from furnish.domain.section_resolver import (
    ColumnGeometry,
    SectionWidthError,
    derive_layout,
    resolve_column_widths,
    usable_width,
)
from furnish.domain.value_objects import ColumnConfigurationType as CT
from furnish.domain.value_objects import (
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    OpeningType,
)


def _columns(*types: CT) -> list[ColumnConfiguration]:
    return [ColumnConfiguration(type=t) for t in types]


class TestResolveColumnWidths:
    """Tests for resolve_column_widths."""

    def test_ratios_split_usable_width(self) -> None:
        assert resolve_column_widths(150, 2, 2.0, 2.0, ratios=(2, 1)) == [96.0, 48.0]

    def test_equal_division(self) -> None:
        assert resolve_column_widths(80, 2, 2.0, 2.0) == [37.0, 37.0]

    def test_remainder_goes_to_last_column(self) -> None:
        widths = resolve_column_widths(100, 3, 2.0, 2.0)

        assert widths[:2] == [30.7, 30.7]
        assert widths[2] == pytest.approx(30.6)
        assert sum(widths) == pytest.approx(92)

    def test_zero_columns_rejected(self) -> None:
        with pytest.raises(SectionWidthError):
            resolve_column_widths(100, 0, 2.0, 2.0)

    def test_ratio_count_must_match(self) -> None:
        with pytest.raises(SectionWidthError, match="ratios"):
            resolve_column_widths(150, 2, 2.0, 2.0, ratios=(2, 1, 1))

    def test_no_usable_width(self) -> None:
        with pytest.raises(SectionWidthError, match="No usable width"):
            resolve_column_widths(3, 1, 2.0, 2.0)

    def test_section_width_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            resolve_column_widths(3, 1, 2.0, 2.0)


class TestDeriveLayout:
    """Tests for derive_layout."""

    def test_wardrobe_two_columns_with_ratios(self) -> None:
        result = derive_layout(
            FurnitureType.WARDROBE,
            Dimensions(150, 210, 60, 2),
            _columns(CT.DOUBLE_DOOR, CT.SINGLE_DOOR_LEFT),
        )

        assert result.ok
        layout = result.layout
        assert [c.width for c in layout.columns] == [96.0, 48.0]
        assert [c.x_position for c in layout.columns] == [2.0, 100.0]
        assert layout.column_height == 204
        assert layout.derived_sections == 2

    def test_single_door_gets_default_side(self) -> None:
        layout = derive_layout(
            FurnitureType.WARDROBE,
            Dimensions(150, 210, 60, 2),
            _columns(CT.DOUBLE_DOOR, CT.SINGLE_DOOR_LEFT),
        ).layout

        double, single = layout.columns
        assert double.door_opening_side is None
        assert double.door_count == 2
        assert single.door_opening_side is DoorOpeningSide.LEFT

    def test_right_single_door_defaults_right(self) -> None:
        layout = derive_layout(
            FurnitureType.WARDROBE,
            Dimensions(50, 210, 50, 2),
            _columns(CT.SINGLE_DOOR_RIGHT),
        ).layout

        assert layout.columns[0].door_opening_side is DoorOpeningSide.RIGHT

    def test_explicit_side_is_kept(self) -> None:
        columns = [
            ColumnConfiguration(CT.DOOR_1_SHELF, door_opening_side=DoorOpeningSide.RIGHT)
        ]

        layout = derive_layout(FurnitureType.BEDSIDE, Dimensions(60, 40, 40, 2), columns).layout

        assert layout.columns[0].door_opening_side is DoorOpeningSide.RIGHT

    def test_side_on_split_door_is_dropped(self) -> None:
        columns = [
            ColumnConfiguration(CT.DOUBLE_DOOR, door_opening_side=DoorOpeningSide.RIGHT)
        ]

        layout = derive_layout(FurnitureType.WARDROBE, Dimensions(100, 240, 60, 2), columns).layout

        assert layout.columns[0].door_opening_side is None

    def test_images_follow_key(self) -> None:
        layout = derive_layout(
            FurnitureType.WARDROBE,
            Dimensions(150, 210, 60, 2),
            _columns(CT.DOUBLE_DOOR, CT.SINGLE_DOOR_LEFT),
            color=ColorName.LIGHT_GREY,
            opening_type=OpeningType.ROUND_HANDLE,
        ).layout

        double, single = layout.columns
        assert double.arrangement_image == "/wardrobe/light-grey/h210/double-door.png"
        assert double.opening_image == "/wardrobe/openings/double-round.png"
        assert single.opening_image == "/wardrobe/openings/left-round.png"
        assert single.handle_image == "/handles/round.png"

    def test_push_fronts_have_no_handle(self) -> None:
        layout = derive_layout(
            FurnitureType.STAND, Dimensions(80, 70, 40, 2), _columns(CT.DRAWERS_3)
        ).layout

        column = layout.columns[0]
        assert column.opening_image == "/stand/openings/drawers-push.png"
        assert column.handle_image is None
        assert column.drawer_count == 3

    def test_open_column_has_no_front(self) -> None:
        layout = derive_layout(
            FurnitureType.GREENWALL, Dimensions(120, 200, 15, 0), _columns(CT.OPEN_SHELF)
        ).layout

        column = layout.columns[0]
        assert column.opening_image is None
        assert column.handle_image is None
        assert column.door_opening_side is None

    def test_mirrored_image(self) -> None:
        columns = [ColumnConfiguration(CT.OPEN_SHELF, mirror=True)]

        layout = derive_layout(FurnitureType.WARDROBE, Dimensions(60, 240, 60, 2), columns).layout

        assert layout.columns[0].arrangement_image.endswith("open-shelf-mirrored.png")

    def test_insufficient_width_is_returned(self) -> None:
        result = derive_layout(
            FurnitureType.WARDROBE,
            Dimensions(100, 240, 60, 2),
            _columns(CT.DOUBLE_DOOR, CT.DOUBLE_DOOR, CT.DOUBLE_DOOR),
        )

        assert result.layout is None
        assert isinstance(result.errors[0], InsufficientWidth)
        assert result.errors[0].minimum_width == 120

    def test_column_count_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="Expected 3"):
            derive_layout(
                FurnitureType.WARDROBE,
                Dimensions(150, 240, 60, 2),
                _columns(CT.DOUBLE_DOOR),
                section_count=3,
            )

    def test_missing_asset_is_an_error_not_a_fallback(self) -> None:
        catalog = AssetCatalog(arrangements={}, openings={}, handles={})

        result = derive_layout(
            FurnitureType.STAND, Dimensions(80, 70, 40, 2), _columns(CT.DRAWERS_3), catalog=catalog
        )

        assert result.layout is None
        assert isinstance(result.errors[0], AssetNotFound)

    @pytest.mark.parametrize(
        "furniture_type,count",
        [
            (FurnitureType.WARDROBE, 1),
            (FurnitureType.WARDROBE, 3),
            (FurnitureType.WARDROBE, 4),
            (FurnitureType.TV_STAND, 3),
            (FurnitureType.STORAGE, 5),
            (FurnitureType.GREENWALL, 6),
        ],
    )
    def test_columns_fill_the_width(self, furniture_type: FurnitureType, count: int) -> None:
        constraints = constraints_for(furniture_type)
        dims = constraints.default_dimensions()
        dims = Dimensions(
            max(dims.width, count * constraints.min_column_width),
            dims.height,
            dims.depth,
            dims.plinth_height,
        )
        columns = _columns(*[constraints.default_column_type] * count)

        layout = derive_layout(furniture_type, dims, columns).layout

        total = (
            layout.total_column_width
            + 2 * constraints.side_panel
            + (count - 1) * constraints.divider
        )
        assert total == pytest.approx(dims.width)
        assert layout.usable_width == usable_width(
            dims.width, count, constraints.side_panel, constraints.divider
        )
        assert [c.index for c in layout.columns] == list(range(count))


class TestColumnGeometry:
    """Tests for ColumnGeometry invariants."""

    def test_side_requires_single_door(self) -> None:
        with pytest.raises(ValueError, match="exactly one door"):
            ColumnGeometry(
                index=0,
                configuration_type=CT.DOUBLE_DOOR,
                width=50,
                height=200,
                x_position=2,
                arrangement_image="x.png",
                opening_image=None,
                handle_image=None,
                door_opening_side=DoorOpeningSide.LEFT,
                mirror=False,
                door_count=2,
            )

    def test_to_dict_omits_missing_side(self) -> None:
        layout = derive_layout(
            FurnitureType.STAND, Dimensions(80, 70, 40, 2), _columns(CT.DRAWERS_3)
        ).layout

        data = layout.columns[0].to_dict()

        assert "door_opening_side" not in data
        assert data["type"] == "DRAWERS_3"


def _offering_type(column_type: CT) -> FurnitureType:
    return next(
        furniture_type
        for furniture_type, constraints in FURNITURE_CONSTRAINTS.items()
        if column_type in constraints.column_types
    )


def _type_and_count() -> list[tuple[FurnitureType, int]]:
    return [
        (furniture_type, count)
        for furniture_type, constraints in FURNITURE_CONSTRAINTS.items()
        for count in range(
            constraints.section_count.minimum, constraints.section_count.maximum + 1
        )
    ]


class TestLayoutInvariants:
    """Properties that hold for every furniture type and column type."""

    @pytest.mark.parametrize("furniture_type,count", _type_and_count())
    def test_exact_minimum_width_fits(self, furniture_type: FurnitureType, count: int) -> None:
        constraints = constraints_for(furniture_type)
        dims = replace(
            constraints.default_dimensions(), width=count * constraints.min_column_width
        )

        result = derive_layout(
            furniture_type, dims, _columns(*[constraints.default_column_type] * count)
        )

        assert result.errors == ()
        assert result.layout.derived_sections == count

    @pytest.mark.parametrize("furniture_type,count", _type_and_count())
    def test_one_below_minimum_width_fails(self, furniture_type: FurnitureType, count: int) -> None:
        constraints = constraints_for(furniture_type)
        required = count * constraints.min_column_width
        dims = replace(constraints.default_dimensions(), width=required - 1)

        result = derive_layout(
            furniture_type, dims, _columns(*[constraints.default_column_type] * count)
        )

        assert result.layout is None
        assert isinstance(result.errors[0], InsufficientWidth)
        assert result.errors[0].minimum_width == required
        assert result.errors[0].minimum_width == minimum_width(constraints, count)

    @pytest.mark.parametrize("column_type", list(CT))
    @pytest.mark.parametrize("side", [None, DoorOpeningSide.RIGHT])
    def test_side_present_only_for_single_doors(
        self, column_type: CT, side: DoorOpeningSide | None
    ) -> None:
        furniture_type = _offering_type(column_type)
        dims = constraints_for(furniture_type).default_dimensions()

        layout = derive_layout(
            furniture_type, dims, [ColumnConfiguration(column_type, door_opening_side=side)]
        ).layout

        column = layout.columns[0]
        single_door = get_configuration_metadata(column_type).door_count == 1
        assert (column.door_opening_side is not None) == single_door
        assert ("door_opening_side" in column.to_dict()) == single_door

    @pytest.mark.parametrize("column_type", list(CT))
    def test_single_door_side_defaults_from_metadata(self, column_type: CT) -> None:
        metadata = get_configuration_metadata(column_type)
        if metadata.door_count != 1:
            pytest.skip("no door side for this column type")
        furniture_type = _offering_type(column_type)
        dims = constraints_for(furniture_type).default_dimensions()

        layout = derive_layout(furniture_type, dims, _columns(column_type)).layout

        expected = metadata.default_door_opening_side or DoorOpeningSide.LEFT
        assert layout.columns[0].door_opening_side is expected
        if column_type is not CT.SINGLE_DOOR_RIGHT:
            assert expected is DoorOpeningSide.LEFT
