"""Furniture type catalog endpoints."""

from fastapi import APIRouter, Query

from furnish.domain.constraints import constraints_for
from furnish.domain.value_objects import FurnitureType
from furnish.domain.viewer import get_viewer_config
from furnish.infrastructure import constraints_to_dict
from furnish.web.schemas.responses import (
    ConstraintsSchema,
    FurnitureListSchema,
    FurnitureTypeSchema,
    ViewerSchema,
)

router = APIRouter(prefix="/furniture", tags=["furniture"])


@router.get("", response_model=FurnitureListSchema)
async def list_furniture_types() -> FurnitureListSchema:
    """List the furniture types offered by the configurator."""
    furniture_types = []
    for furniture_type in FurnitureType:
        constraints = constraints_for(furniture_type)
        furniture_types.append(
            FurnitureTypeSchema(
                type=furniture_type.value,
                default_dimensions=constraints.default_dimensions().to_dict(),
                default_sections=constraints.section_count.default,
            )
        )
    return FurnitureListSchema(furniture_types=furniture_types)


@router.get("/{furniture_type}/constraints", response_model=ConstraintsSchema)
async def get_constraints(furniture_type: str) -> ConstraintsSchema:
    """Get the dimension ranges and options of a furniture type.

    Raises:
        UnknownFurnitureType: If the type is not recognized (handled by exception handler).
    """
    constraints = constraints_for(FurnitureType.parse(furniture_type))
    return ConstraintsSchema.model_validate(constraints_to_dict(constraints))


@router.get("/{furniture_type}/viewer", response_model=ViewerSchema)
async def get_viewer(
    furniture_type: str,
    width: float | None = Query(default=None, gt=0, description="Overall width in cm"),
) -> ViewerSchema:
    """Get the 3D viewer camera bounds of a furniture type.

    Unknown types get the default camera rather than an error.
    """
    return ViewerSchema.model_validate(get_viewer_config(furniture_type, width).to_dict())
