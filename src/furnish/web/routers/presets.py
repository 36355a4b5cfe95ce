"""Preset catalog endpoints."""

from fastapi import APIRouter, Query

from furnish.application.presets import PresetSchema
from furnish.application.store import ConfigurationStore
from furnish.web.dependencies import CatalogDep, PresetManagerDep, SettingsDep
from furnish.web.schemas.responses import (
    PresetDetailSchema,
    PresetListSchema,
    PresetSummarySchema,
)

router = APIRouter(prefix="/presets", tags=["presets"])


def _summary(preset: PresetSchema, manager: PresetManagerDep) -> PresetSummarySchema:
    return PresetSummarySchema(
        id=preset.id,
        slug=preset.slug,
        type=preset.type.value,
        name=preset.meta.name,
        image=preset.meta.image,
        href=manager.build_href(preset),
    )


@router.get("", response_model=PresetListSchema)
async def list_presets(
    manager: PresetManagerDep,
    furniture_type: str | None = Query(
        default=None, alias="type", description="Only list presets of this type"
    ),
) -> PresetListSchema:
    """List the bundled presets.

    Args:
        manager: Injected PresetManager.
        furniture_type: Optional furniture type filter.

    Returns:
        Presets with their configurator links.
    """
    return PresetListSchema(
        presets=[_summary(preset, manager) for preset in manager.list_presets(furniture_type)]
    )


@router.get("/{preset_id}", response_model=PresetDetailSchema)
async def get_preset(
    preset_id: str,
    manager: PresetManagerDep,
    settings: SettingsDep,
    catalog: CatalogDep,
) -> PresetDetailSchema:
    """Get a preset with its configuration and layout.

    Raises:
        PresetNotFoundError: If preset does not exist (handled by exception handler).
    """
    preset = manager.get_preset(preset_id)
    store = ConfigurationStore(preset.type, settings=settings, catalog=catalog)
    store.load_preset(preset)

    summary = _summary(preset, manager)
    return PresetDetailSchema(
        **summary.model_dump(),
        description=preset.meta.description,
        configuration=store.configuration.to_dict(),
        layout=store.layout.to_dict(),
    )
