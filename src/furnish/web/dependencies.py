"""FastAPI dependency injection for configurator services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from furnish.application.cart import Cart
from furnish.application.presets import PresetManager
from furnish.application.settings import EngineSettings
from furnish.domain.assets import AssetCatalog, default_catalog


def get_settings(request: Request) -> EngineSettings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_catalog(
    settings: Annotated[EngineSettings, Depends(get_settings)],
) -> AssetCatalog:
    """Asset catalog for the configured base URL."""
    return default_catalog(settings.asset_base_url)


def get_cart(request: Request) -> Cart:
    """In-memory cart shared by the application."""
    return request.app.state.cart


@lru_cache(maxsize=1)
def get_preset_manager() -> PresetManager:
    """Get cached PresetManager instance."""
    return PresetManager()


# Type aliases for cleaner endpoint signatures
SettingsDep = Annotated[EngineSettings, Depends(get_settings)]
CatalogDep = Annotated[AssetCatalog, Depends(get_catalog)]
CartDep = Annotated[Cart, Depends(get_cart)]
PresetManagerDep = Annotated[PresetManager, Depends(get_preset_manager)]
