"""Pydantic request schemas for the REST API."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from furnish.web.schemas.common import (
    ColumnSchema,
    DimensionsPatchSchema,
    FurnitureOptionsPatchSchema,
)


class ConfigurationPatchSchema(BaseModel):
    """One user edit. Omitted fields keep their current value.

    Fields not declared here are passed through to the session, which
    rejects names the configuration does not have.
    """

    model_config = ConfigDict(extra="allow")

    dimensions: DimensionsPatchSchema | None = Field(
        default=None, description="Dimension changes"
    )
    selected_sections: int | None = Field(
        default=None, description="Requested column count"
    )
    columns: list[ColumnSchema | str] | None = Field(
        default=None,
        description="Column configurations or compact codes, left to right",
    )
    color: str | None = Field(default=None, description="Color name or hex code")
    furniture_options: FurnitureOptionsPatchSchema | None = Field(
        default=None, description="Hardware option changes"
    )

    @model_validator(mode="after")
    def reject_non_finite_extras(self) -> "ConfigurationPatchSchema":
        """Top-level dimension fields must be finite numbers."""
        for name, value in (self.model_extra or {}).items():
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
        return self

    def to_patch(self) -> dict[str, Any]:
        """Convert to a store patch, dropping omitted fields."""
        patch: dict[str, Any] = {}
        if self.dimensions is not None:
            patch["dimensions"] = self.dimensions.model_dump(exclude_none=True)
        if self.selected_sections is not None:
            patch["selected_sections"] = self.selected_sections
        if self.columns is not None:
            patch["columns"] = [
                column if isinstance(column, str) else column.model_dump(mode="json")
                for column in self.columns
            ]
        if self.color is not None:
            patch["color"] = self.color
        if self.furniture_options is not None:
            patch["furniture_options"] = self.furniture_options.model_dump(
                mode="json", exclude_none=True
            )
        patch.update(self.model_extra or {})
        return patch


class ConfigurationUpdateRequest(BaseModel):
    """Request for applying an edit to the configuration a link describes."""

    query: str = Field(default="", description="Current shareable query string")
    patch: ConfigurationPatchSchema = Field(
        default_factory=ConfigurationPatchSchema, description="Edit to apply"
    )


class CartLineItemRequest(BaseModel):
    """Request for adding a configuration to the cart."""

    furniture_type: str = Field(..., description="Furniture type of the configuration")
    query: str = Field(default="", description="Shareable query string")
    name: str | None = Field(default=None, description="Display name of the line")
