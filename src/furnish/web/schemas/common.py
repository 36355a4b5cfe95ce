"""Common Pydantic schemas shared across requests and responses."""

from pydantic import BaseModel, ConfigDict, Field

from furnish.domain.value_objects import (
    ColumnConfigurationType,
    DoorOpeningSide,
    GuideType,
    HingeType,
)


class DimensionsPatchSchema(BaseModel):
    """Partial overall dimensions in cm."""

    model_config = ConfigDict(extra="forbid")

    width: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Width in cm"
    )
    height: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Height in cm"
    )
    depth: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Depth in cm"
    )
    plinth_height: float | None = Field(
        default=None, ge=0, allow_inf_nan=False, description="Plinth height in cm"
    )


class ColumnSchema(BaseModel):
    """One column of a configuration, left to right."""

    type: ColumnConfigurationType = Field(..., description="Column configuration type")
    door_opening_side: DoorOpeningSide | None = Field(
        default=None, description="Hinge side of a single door"
    )
    mirror: bool = Field(default=False, description="Mirrored door front")


class FurnitureOptionsPatchSchema(BaseModel):
    """Partial hardware options."""

    model_config = ConfigDict(extra="forbid")

    opening_type: str | None = Field(
        default=None, description="push, handle or profile (legacy names accepted)"
    )
    guides: GuideType | None = Field(default=None, description="Drawer guide type")
    hinges: HingeType | None = Field(default=None, description="Door hinge type")
