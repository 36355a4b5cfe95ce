"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class FurnitureTypeSchema(BaseModel):
    """A furniture type with its default dimensions."""

    type: str = Field(..., description="Furniture type tag")
    default_dimensions: dict[str, float] = Field(..., description="Default dimensions in cm")
    default_sections: int = Field(..., description="Default column count")


class FurnitureListSchema(BaseModel):
    """Response for listing furniture types."""

    furniture_types: list[FurnitureTypeSchema] = Field(
        ..., description="Available furniture types"
    )


class RangeSchema(BaseModel):
    """Allowed range of one dimension."""

    min: float
    max: float
    step: float
    default: float


class SectionRangeSchema(BaseModel):
    """Allowed column counts."""

    min: int
    max: int
    default: int


class ConstraintsSchema(BaseModel):
    """Constraint set of a furniture type."""

    furniture_type: str
    width: RangeSchema
    height: RangeSchema
    depth: RangeSchema
    plinth_height: RangeSchema
    sections: SectionRangeSchema
    min_column_width: float = Field(..., description="Minimum column width in cm")
    column_types: list[str] = Field(..., description="Allowed column configuration types")
    default_column_type: str
    colors: list[str] = Field(..., description="Available color names")
    default_color: str


class ViewerSchema(BaseModel):
    """Camera bounds for the 3D viewer."""

    background_scale: list[float]
    camera_position: list[float]
    camera_distance: list[float]
    azimuth: list[float]
    polar: list[float]
    target: list[float]
    fog_color: str
    fog_near: float
    fog_far: float
    shadow_x: float | None = None


class ValidationErrorSchema(BaseModel):
    """Field-level validation error."""

    path: str
    message: str
    code: str
    value: Any = None
    allowed: Any = None


class ValidationWarningSchema(BaseModel):
    """Field-level validation warning."""

    path: str
    message: str
    suggestion: str | None = None


class ValidationResultSchema(BaseModel):
    """Validation outcome of the last update."""

    is_valid: bool = Field(..., description="Whether the last update was accepted")
    errors: list[ValidationErrorSchema] = Field(default_factory=list)
    warnings: list[ValidationWarningSchema] = Field(default_factory=list)


class QueryIssueSchema(BaseModel):
    """A query field that was reset to its default."""

    field: str
    value: Any = None
    reason: str


class ConfigurationResponseSchema(BaseModel):
    """Current configuration of a session with its derived data."""

    configuration: dict[str, Any] = Field(..., description="Accepted configuration")
    layout: dict[str, Any] | None = Field(default=None, description="Derived layout")
    validation: ValidationResultSchema
    query: str = Field(..., description="Canonical shareable query string")
    issues: list[QueryIssueSchema] = Field(
        default_factory=list, description="Query fields that were reset"
    )
    viewer: ViewerSchema
    render_3d: bool = Field(..., description="Whether the 3D viewer is available")


class CartLineItemSchema(BaseModel):
    """A snapshotted cart line."""

    name: str
    furniture_type: str
    dimensions: dict[str, float]
    color: str
    color_name: str
    furniture_options: dict[str, str]
    columns: list[dict[str, Any]]
    section_count: int
    price: float
    share_query: str
    layout: dict[str, Any] = Field(default_factory=dict)


class CartSchema(BaseModel):
    """Response for cart operations."""

    items: list[CartLineItemSchema]
    item_count: int
    total: float


class PresetSummarySchema(BaseModel):
    """A preset as listed in the catalog."""

    id: str
    slug: str
    type: str
    name: str
    image: str | None = None
    href: str = Field(..., description="Configurator link that opens the preset")


class PresetListSchema(BaseModel):
    """Response for listing presets."""

    presets: list[PresetSummarySchema]


class PresetDetailSchema(PresetSummarySchema):
    """A preset with its configuration and layout."""

    description: str | None = None
    configuration: dict[str, Any]
    layout: dict[str, Any] | None = None


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")
