"""Unit tests for configurator value objects and the error taxonomy."""

import pytest

from furnish.domain.errors import (
    DimensionOutOfRange,
    InsufficientWidth,
    InvalidQueryState,
    UnknownFurnitureType,
)
from furnish.domain.value_objects import (
    Dimensions,
    FurnitureType,
    OpeningType,
    require_exhaustive,
)


class TestFurnitureType:
    """Tests for FurnitureType parsing."""

    def test_parse_exact_tag(self) -> None:
        assert FurnitureType.parse("tv-stand") is FurnitureType.TV_STAND

    def test_parse_normalizes_case_and_whitespace(self) -> None:
        assert FurnitureType.parse("  Wardrobe ") is FurnitureType.WARDROBE

    def test_parse_passes_members_through(self) -> None:
        assert FurnitureType.parse(FurnitureType.STAND) is FurnitureType.STAND

    def test_parse_unknown_tag_raises(self) -> None:
        with pytest.raises(UnknownFurnitureType) as exc_info:
            FurnitureType.parse("sofa")

        assert exc_info.value.tag == "sofa"
        assert exc_info.value.code == "unknown_furniture_type"

    def test_unknown_type_is_a_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            FurnitureType.parse("sofa")


class TestOpeningType:
    """Tests for legacy opening type spellings."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("push", OpeningType.PUSH),
            ("handle", OpeningType.ROUND_HANDLE),
            ("maner", OpeningType.ROUND_HANDLE),
            ("MANER", OpeningType.ROUND_HANDLE),
            ("profile-handle", OpeningType.PROFILE_HANDLE),
            ("profile", OpeningType.PROFILE_HANDLE),
        ],
    )
    def test_from_legacy(self, value: str, expected: OpeningType) -> None:
        assert OpeningType.from_legacy(value) is expected

    def test_from_legacy_unknown_returns_none(self) -> None:
        assert OpeningType.from_legacy("magnet") is None
        assert OpeningType.from_legacy(None) is None


class TestDimensions:
    """Tests for the Dimensions value object."""

    def test_plinth_defaults_to_zero(self) -> None:
        assert Dimensions(100, 200, 50).plinth_height == 0.0

    def test_negative_dimension_rejected(self) -> None:
        with pytest.raises(ValueError, match="width"):
            Dimensions(-1, 200, 50)

    def test_to_dict(self) -> None:
        assert Dimensions(150, 210, 60, 2).to_dict() == {
            "width": 150,
            "height": 210,
            "depth": 60,
            "plinth_height": 2,
        }


class TestRequireExhaustive:
    """Tests for the enum table completeness check."""

    def test_missing_member_raises(self) -> None:
        table = {FurnitureType.WARDROBE: 1}

        with pytest.raises(RuntimeError, match="stand"):
            require_exhaustive(table, FurnitureType, "partial")

    def test_complete_table_passes(self) -> None:
        require_exhaustive({t: t.value for t in FurnitureType}, FurnitureType, "full")


class TestErrorMessages:
    """Tests for the error taxonomy messages."""

    def test_dimension_out_of_range_message(self) -> None:
        error = DimensionOutOfRange("width", 300, 40, 250)

        assert "between 40 and 250" in str(error)
        assert error.code == "dimension_out_of_range"

    def test_insufficient_width_message(self) -> None:
        error = InsufficientWidth(100, 3, 120)

        assert "3 columns need at least 120 cm" in str(error)

    def test_invalid_query_state_keeps_field(self) -> None:
        error = InvalidQueryState("width", "abc", "not a number")

        assert error.field == "width"
        assert error.reason == "not a number"
