"""Preset manager for the bundled ready-made products.

Presets are shipped as package data and validated once when first loaded.
"""

import json
import logging
from importlib import resources

from pydantic import ValidationError as PydanticValidationError

from furnish.application.configuration import with_price
from furnish.application.query import to_query_string
from furnish.application.settings import ConfigError
from furnish.application.store import columns_from_codes
from furnish.domain.colors import color_name
from furnish.domain.entities import Configuration, FurnitureOptions
from furnish.domain.value_objects import Dimensions, FurnitureType

from .schema import PresetCatalogSchema, PresetSchema

logger = logging.getLogger(__name__)


class PresetNotFoundError(Exception):
    """Raised when a requested preset does not exist."""

    def __init__(self, preset_id: str) -> None:
        self.preset_id = preset_id
        super().__init__(f"Preset not found: {preset_id}")


def preset_to_configuration(preset: PresetSchema) -> Configuration:
    """Build the priced Configuration described by a preset.

    The result is not validated here; callers pass it through the usual
    validation path.

    Raises:
        ValueError: If the preset color or a column code is unknown.
    """
    details = preset.details
    color = color_name(details.color)
    if color is None:
        raise ValueError(f"Preset {preset.id}: unknown color {details.color}")

    columns = columns_from_codes(details.columns)
    configuration = Configuration(
        furniture_type=preset.type,
        dimensions=Dimensions(
            width=details.dimensions.width,
            height=details.dimensions.height,
            depth=details.dimensions.depth,
            plinth_height=details.dimensions.plinth_height,
        ),
        selected_sections=len(columns),
        columns=columns,
        color=color,
        furniture_options=FurnitureOptions(
            opening_type=details.opening_type,
            guides=details.guides,
            hinges=details.hinges,
        ),
    )
    return with_price(configuration)


class PresetManager:
    """Access to the bundled product presets.

    Example:
        manager = PresetManager()
        for preset in manager.list_presets(FurnitureType.WARDROBE):
            print(preset.id, manager.build_href(preset))
    """

    def __init__(self, presets: list[PresetSchema] | None = None) -> None:
        self._data_package = "furnish.application.presets"
        self._presets: dict[str, PresetSchema] | None = (
            {p.id: p for p in presets} if presets is not None else None
        )

    def _load(self) -> dict[str, PresetSchema]:
        if self._presets is not None:
            return self._presets

        content = (
            resources.files(self._data_package)
            .joinpath("data")
            .joinpath("presets.json")
            .read_text(encoding="utf-8")
        )
        try:
            catalog = PresetCatalogSchema.model_validate(json.loads(content))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise ConfigError(
                message=f"Bundled presets are invalid: {e}",
                error_type="validation",
            ) from e

        self._presets = {preset.id: preset for preset in catalog.presets}
        logger.debug(f"Loaded {len(self._presets)} presets")
        return self._presets

    def list_presets(self, furniture_type: FurnitureType | str | None = None) -> list[PresetSchema]:
        """List presets, optionally only those of one furniture type."""
        presets = list(self._load().values())
        if furniture_type is None:
            return presets
        wanted = FurnitureType.parse(furniture_type)
        return [preset for preset in presets if preset.type is wanted]

    def get_preset(self, preset_id: str) -> PresetSchema:
        """Get a preset by id.

        Raises:
            PresetNotFoundError: If no preset has that id.
        """
        presets = self._load()
        preset = presets.get(preset_id) or presets.get(preset_id.upper())
        if preset is None:
            raise PresetNotFoundError(preset_id)
        return preset

    def preset_exists(self, preset_id: str) -> bool:
        return preset_id in self._load() or preset_id.upper() in self._load()

    def to_configuration(self, preset_id: str) -> Configuration:
        return preset_to_configuration(self.get_preset(preset_id))

    def build_href(self, preset: PresetSchema | str) -> str:
        """Configurator link that opens the preset, e.g. "/configurator/wardrobe?...".

        Raises:
            PresetNotFoundError: If an id is given and does not exist.
        """
        if isinstance(preset, str):
            preset = self.get_preset(preset)
        configuration = preset_to_configuration(preset)
        return f"/configurator/{preset.type.value}?{to_query_string(configuration)}"
