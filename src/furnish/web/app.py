"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from furnish.application.cart import Cart
from furnish.application.settings import EngineSettings
from furnish.web.exceptions import register_exception_handlers
from furnish.web.routers import (
    cart_router,
    configuration_router,
    furniture_router,
    presets_router,
)


def create_app(settings: EngineSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Engine settings; defaults to EngineSettings().

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Furniture Configurator API",
        description="REST API for configuring parametric furniture and deriving layouts",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings or EngineSettings()
    app.state.cart = Cart()

    # CORS middleware for browser access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(furniture_router, prefix="/api/v1")
    app.include_router(configuration_router, prefix="/api/v1")
    app.include_router(cart_router, prefix="/api/v1")
    app.include_router(presets_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
