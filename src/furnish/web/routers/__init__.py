"""API routers for the REST API."""

from furnish.web.routers.cart import router as cart_router
from furnish.web.routers.configuration import router as configuration_router
from furnish.web.routers.furniture import router as furniture_router
from furnish.web.routers.presets import router as presets_router

__all__ = [
    "cart_router",
    "configuration_router",
    "furniture_router",
    "presets_router",
]
