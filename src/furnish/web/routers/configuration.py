"""Configurator session endpoints.

The API is stateless: the shareable query string is the session. Every
request reopens the session from its query, applies the edit, and returns
the canonical query of the result.
"""

import logging

from fastapi import APIRouter, Request

from furnish.application.store import ConfigurationStore
from furnish.domain.capability import detect_render_capability
from furnish.domain.value_objects import FurnitureType
from furnish.domain.viewer import project_viewer
from furnish.infrastructure import validation_to_dict
from furnish.web.dependencies import CatalogDep, SettingsDep
from furnish.web.exceptions import InvalidPatchError
from furnish.web.schemas.requests import ConfigurationUpdateRequest
from furnish.web.schemas.responses import (
    ConfigurationResponseSchema,
    QueryIssueSchema,
    ValidationResultSchema,
    ViewerSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/furniture", tags=["configuration"])


def configuration_response(store: ConfigurationStore) -> ConfigurationResponseSchema:
    """Build the response for the current state of a session."""
    return ConfigurationResponseSchema(
        configuration=store.configuration.to_dict(),
        layout=store.layout.to_dict(),
        validation=ValidationResultSchema.model_validate(
            validation_to_dict(store.last_validation)
        ),
        query=store.query_string,
        issues=[
            QueryIssueSchema(field=issue.field, value=issue.value, reason=issue.reason)
            for issue in store.query_issues
        ],
        viewer=ViewerSchema.model_validate(project_viewer(store.layout).to_dict()),
        render_3d=detect_render_capability(),
    )


@router.get("/{furniture_type}/configuration", response_model=ConfigurationResponseSchema)
async def get_configuration(
    furniture_type: str,
    request: Request,
    settings: SettingsDep,
    catalog: CatalogDep,
) -> ConfigurationResponseSchema:
    """Open a session from the request's query parameters.

    Fields that cannot be restored are reset to defaults and reported in
    ``issues``; the request itself never fails on a bad link.
    """
    store = ConfigurationStore.from_query(
        request.url.query,
        FurnitureType.parse(furniture_type),
        settings=settings,
        catalog=catalog,
    )
    return configuration_response(store)


@router.post("/{furniture_type}/configuration", response_model=ConfigurationResponseSchema)
async def update_configuration(
    furniture_type: str,
    request: ConfigurationUpdateRequest,
    settings: SettingsDep,
    catalog: CatalogDep,
) -> ConfigurationResponseSchema:
    """Apply an edit to the configuration a query describes.

    A rejected edit returns the previous configuration with
    ``validation.is_valid`` false and the violated fields in
    ``validation.errors``.

    Raises:
        InvalidPatchError: If the edit names unknown or read-only fields.
    """
    store = ConfigurationStore.from_query(
        request.query,
        FurnitureType.parse(furniture_type),
        settings=settings,
        catalog=catalog,
    )
    patch = request.patch.to_patch()
    if patch:
        try:
            store.update(patch)
        except ValueError as e:
            raise InvalidPatchError(str(e)) from e
    else:
        logger.debug("Empty patch, returning the session unchanged")
    return configuration_response(store)
