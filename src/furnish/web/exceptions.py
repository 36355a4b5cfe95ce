"""Custom exceptions and error handlers for the REST API."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from furnish.application.presets import PresetNotFoundError
from furnish.domain.errors import AssetNotFound, UnknownFurnitureType
from furnish.domain.section_resolver import SectionWidthError

logger = logging.getLogger(__name__)


class InvalidPatchError(Exception):
    """Raised when an edit names fields the configuration does not have."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(UnknownFurnitureType)
    async def unknown_furniture_type_handler(
        request: Request, exc: UnknownFurnitureType
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "unknown_furniture_type",
                "details": {"type": exc.tag},
            },
        )

    @app.exception_handler(PresetNotFoundError)
    async def preset_not_found_handler(
        request: Request, exc: PresetNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": None,
            },
        )

    @app.exception_handler(AssetNotFound)
    async def asset_not_found_handler(
        request: Request, exc: AssetNotFound
    ) -> JSONResponse:
        logger.error(f"Asset lookup failed for {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc),
                "error_type": "asset_not_found",
                "details": {"key": str(exc.key)},
            },
        )

    @app.exception_handler(SectionWidthError)
    async def section_width_error_handler(
        request: Request, exc: SectionWidthError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "section_width",
                "details": None,
            },
        )

    @app.exception_handler(InvalidPatchError)
    async def invalid_patch_handler(
        request: Request, exc: InvalidPatchError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": "invalid_patch",
                "details": None,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Inputs are left out; they may hold non-finite floats JSON cannot carry
        return JSONResponse(
            status_code=422,
            content={
                "error": "Request validation failed",
                "error_type": "validation_error",
                "details": [
                    {
                        "loc": [str(part) for part in error["loc"]],
                        "msg": error["msg"],
                        "type": error["type"],
                    }
                    for error in exc.errors()
                ],
            },
        )
