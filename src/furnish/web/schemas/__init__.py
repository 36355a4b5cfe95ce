"""Pydantic schemas for the REST API."""

from furnish.web.schemas.common import (
    ColumnSchema,
    DimensionsPatchSchema,
    FurnitureOptionsPatchSchema,
)
from furnish.web.schemas.requests import (
    CartLineItemRequest,
    ConfigurationPatchSchema,
    ConfigurationUpdateRequest,
)
from furnish.web.schemas.responses import (
    CartLineItemSchema,
    CartSchema,
    ConfigurationResponseSchema,
    ConstraintsSchema,
    ErrorResponseSchema,
    FurnitureListSchema,
    FurnitureTypeSchema,
    PresetDetailSchema,
    PresetListSchema,
    PresetSummarySchema,
    QueryIssueSchema,
    ValidationResultSchema,
    ViewerSchema,
)

__all__ = [
    # Common
    "ColumnSchema",
    "DimensionsPatchSchema",
    "FurnitureOptionsPatchSchema",
    # Requests
    "CartLineItemRequest",
    "ConfigurationPatchSchema",
    "ConfigurationUpdateRequest",
    # Responses
    "CartLineItemSchema",
    "CartSchema",
    "ConfigurationResponseSchema",
    "ConstraintsSchema",
    "ErrorResponseSchema",
    "FurnitureListSchema",
    "FurnitureTypeSchema",
    "PresetDetailSchema",
    "PresetListSchema",
    "PresetSummarySchema",
    "QueryIssueSchema",
    "ValidationResultSchema",
    "ViewerSchema",
]
