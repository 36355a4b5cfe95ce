"""Unit tests for engine settings and the settings loader."""

import json
import logging
from pathlib import Path

import pytest

from furnish.application.settings import (
    ConfigError,
    EngineSettings,
    load_settings,
    load_settings_from_dict,
)
from furnish.domain.constraints import DimensionPolicy
from furnish.domain.value_objects import FurnitureType


class TestEngineSettings:
    """Tests for EngineSettings defaults and validation."""

    def test_defaults(self) -> None:
        settings = EngineSettings()

        assert settings.dimension_policy is DimensionPolicy.REJECT
        assert settings.default_furniture_type is FurnitureType.WARDROBE
        assert settings.asset_base_url == ""
        assert settings.log_level_number == logging.WARNING

    def test_log_level_is_normalized(self) -> None:
        assert EngineSettings(log_level="debug").log_level == "DEBUG"

    def test_settings_are_frozen(self) -> None:
        settings = EngineSettings()

        with pytest.raises(Exception):
            settings.log_level = "INFO"  # type: ignore[misc]


class TestLoadSettingsFromDict:
    """Tests for load_settings_from_dict."""

    def test_valid(self) -> None:
        settings = load_settings_from_dict(
            {"dimension_policy": "clamp", "default_furniture_type": "stand"}
        )

        assert settings.dimension_policy is DimensionPolicy.CLAMP
        assert settings.default_furniture_type is FurnitureType.STAND

    def test_invalid_level(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings_from_dict({"log_level": "loud"})

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "log_level"

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Settings validation failed"):
            load_settings_from_dict({"policy": "clamp"})


class TestLoadSettings:
    """Tests for load_settings."""

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "furnish.json"
        path.write_text(json.dumps({"asset_base_url": "https://cdn.example.com"}))

        settings = load_settings(path)

        assert settings.asset_base_url == "https://cdn.example.com"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path / "missing.json")

        assert exc_info.value.error_type == "file_not_found"

    def test_bad_json(self, tmp_path: Path) -> None:
        path = tmp_path / "furnish.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)

        assert exc_info.value.error_type == "json_parse"
        assert exc_info.value.details[0]["line"] == 1

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "furnish.json"
        path.write_text("[]")

        with pytest.raises(ConfigError, match="must contain a JSON object") as exc_info:
            load_settings(path)

        assert exc_info.value.error_type == "validation"

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "furnish.json"
        path.write_text(json.dumps({"dimension_policy": "ignore"}))

        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.path == path
