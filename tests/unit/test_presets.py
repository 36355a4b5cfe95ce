"""Unit tests for preset schema normalization and the preset manager."""

import pytest
from pydantic import ValidationError

from furnish.application.configuration import validate_configuration
from furnish.application.presets import (
    PresetDetails,
    PresetManager,
    PresetNotFoundError,
    PresetSchema,
    parse_dimension_string,
    preset_to_configuration,
)
from furnish.application.store import ConfigurationStore
from furnish.domain.colors import ColorName
from furnish.domain.value_objects import ColumnConfigurationType as CT
from furnish.domain.value_objects import FurnitureType, OpeningType


def _preset_data(**details: object) -> dict:
    base_details: dict = {
        "dimensions": {"width": 80, "height": 70, "depth": 40},
        "color": "#fcfbf5",
        "columns": ["DR3"],
    }
    base_details.update(details)
    return {
        "id": "ST-999",
        "slug": "stand-test",
        "type": "stand",
        "meta": {"name": "Test stand"},
        "details": base_details,
    }


class TestParseDimensionString:
    """Tests for parse_dimension_string."""

    def test_standard_format(self) -> None:
        assert parse_dimension_string("180 x 240 x 60 cm") == {
            "width": 180.0,
            "height": 240.0,
            "depth": 60.0,
        }

    def test_tolerant_spacing_and_unit(self) -> None:
        assert parse_dimension_string("50x210×50")["height"] == 210.0

    def test_decimals(self) -> None:
        assert parse_dimension_string("80.5 x 70 x 40 cm")["width"] == 80.5

    @pytest.mark.parametrize("value", ["", "180 x 240", "wide x tall x deep", "180 x 240 x 60 m"])
    def test_rejects_other_shapes(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_dimension_string(value)


class TestPresetDetails:
    """Tests for normalizing historical preset shapes."""

    @pytest.mark.parametrize("alias", ["plinthHeight", "plintHeight", "plintheight"])
    def test_plinth_aliases_at_top_level(self, alias: str) -> None:
        details = PresetDetails.model_validate(
            {
                "dimensions": {"width": 80, "height": 70, "depth": 40},
                alias: 5,
                "color": "#fcfbf5",
                "columns": ["DR3"],
            }
        )

        assert details.dimensions.plinth_height == 5

    def test_plinth_alias_inside_dimensions(self) -> None:
        details = PresetDetails.model_validate(
            {
                "dimensions": {"width": 80, "height": 70, "depth": 40, "plintheight": 6},
                "color": "#fcfbf5",
                "columns": ["DR3"],
            }
        )

        assert details.dimensions.plinth_height == 6

    def test_dimension_string(self) -> None:
        details = PresetDetails.model_validate(
            {
                "dimensions": "50 x 210 x 50 cm",
                "plintHeight": 2,
                "color": "#fcfbf5",
                "columns": "SDRT",
            }
        )

        assert details.dimensions.width == 50
        assert details.dimensions.plinth_height == 2
        assert details.columns == ["SDRT"]

    def test_legacy_opening_type(self) -> None:
        details = PresetDetails.model_validate(
            {
                "dimensions": {"width": 80, "height": 70, "depth": 40},
                "color": "#fcfbf5",
                "columns": ["DR3"],
                "openingType": "maner",
            }
        )

        assert details.opening_type is OpeningType.ROUND_HANDLE

    def test_unknown_opening_type(self) -> None:
        with pytest.raises(ValidationError):
            PresetDetails.model_validate(
                {
                    "dimensions": {"width": 80, "height": 70, "depth": 40},
                    "color": "#fcfbf5",
                    "columns": ["DR3"],
                    "openingType": "magnetic",
                }
            )

    def test_bad_color(self) -> None:
        with pytest.raises(ValidationError):
            PresetDetails.model_validate(
                {
                    "dimensions": {"width": 80, "height": 70, "depth": 40},
                    "color": "white",
                    "columns": ["DR3"],
                }
            )


class TestPresetSchema:
    """Tests for PresetSchema validation."""

    def test_valid_preset(self) -> None:
        preset = PresetSchema.model_validate(_preset_data())

        assert preset.type is FurnitureType.STAND
        assert preset.layout is None

    def test_layout_length_must_match_columns(self) -> None:
        data = _preset_data()
        data["layout"] = {"column_widths": [40, 36]}

        with pytest.raises(ValidationError, match="2 widths for 1 columns"):
            PresetSchema.model_validate(data)

    def test_layout_widths_positive(self) -> None:
        data = _preset_data()
        data["layout"] = {"column_widths": [0]}

        with pytest.raises(ValidationError):
            PresetSchema.model_validate(data)

    def test_unknown_type(self) -> None:
        data = _preset_data()
        data["type"] = "sofa"

        with pytest.raises(ValidationError):
            PresetSchema.model_validate(data)

    def test_to_configuration(self) -> None:
        preset = PresetSchema.model_validate(_preset_data(color="#9c9c9c"))

        config = preset_to_configuration(preset)

        assert config.color is ColorName.GREY
        assert config.columns[0].type is CT.DRAWERS_3
        assert config.selected_sections == 1
        assert config.price == 3040

    def test_color_outside_palette(self) -> None:
        preset = PresetSchema.model_validate(_preset_data(color="#123456"))

        with pytest.raises(ValueError, match="unknown color"):
            preset_to_configuration(preset)


class TestPresetManager:
    """Tests for PresetManager."""

    def test_bundled_presets(self) -> None:
        manager = PresetManager()

        ids = [preset.id for preset in manager.list_presets()]

        assert len(ids) == 10
        assert "WR-101" in ids

    def test_filter_by_type(self) -> None:
        presets = PresetManager().list_presets("tv-stand")

        assert {preset.id for preset in presets} == {"TV-301", "TV-302"}

    def test_get_preset_is_case_insensitive(self) -> None:
        assert PresetManager().get_preset("wr-101").id == "WR-101"

    def test_get_missing_preset(self) -> None:
        with pytest.raises(PresetNotFoundError, match="Preset not found: XX-1"):
            PresetManager().get_preset("XX-1")

    def test_preset_exists(self) -> None:
        manager = PresetManager()

        assert manager.preset_exists("ST-201")
        assert not manager.preset_exists("ST-299")

    def test_wr101_normalized(self) -> None:
        config = PresetManager().to_configuration("WR-101")

        assert config.dimensions.plinth_height == 5
        assert config.color is ColorName.BIEGE
        assert config.furniture_options.opening_type is OpeningType.ROUND_HANDLE
        assert [c.type for c in config.columns] == [CT.DOUBLE_DOOR, CT.SINGLE_DOOR_RIGHT]

    def test_wr102_dimension_string(self) -> None:
        config = PresetManager().to_configuration("WR-102")

        assert config.dimensions.width == 50
        assert config.dimensions.height == 210

    def test_build_href(self) -> None:
        href = PresetManager().build_href("WR-101")

        assert href.startswith("/configurator/wardrobe?type=wardrobe&")
        assert "plinthHeight=5" in href

    def test_href_opens_the_preset(self) -> None:
        manager = PresetManager()
        query = manager.build_href("TV-301").split("?", 1)[1]

        store = ConfigurationStore.from_query(query)

        assert store.configuration == manager.to_configuration("TV-301")

    def test_injected_presets(self) -> None:
        preset = PresetSchema.model_validate(_preset_data())

        manager = PresetManager([preset])

        assert [p.id for p in manager.list_presets()] == ["ST-999"]

    @pytest.mark.parametrize("preset_id", [p.id for p in PresetManager().list_presets()])
    def test_every_bundled_preset_is_valid(self, preset_id: str) -> None:
        result = validate_configuration(PresetManager().to_configuration(preset_id))

        assert result.is_valid, result.violated_fields

    def test_every_preset_loads_into_a_session(self) -> None:
        manager = PresetManager()

        for preset in manager.list_presets():
            store = ConfigurationStore(preset.type)
            store.load_preset(preset)
            assert store.last_validation.is_valid, preset.id
