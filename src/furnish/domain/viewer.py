"""Camera and control bounds for the 3D viewer."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any

from .section_resolver import SectionLayout
from .value_objects import FurnitureType, require_exhaustive

logger = logging.getLogger(__name__)

# Offset of the scale figure from the piece's left edge
SHADOW_OFFSET = 50.0


@dataclass(frozen=True)
class ViewerConfig:
    """Read-only camera constraints handed to the renderer.

    Attributes:
        background_scale: Scale of the backdrop (x, y, z).
        camera_position: Initial camera position (x, y, z).
        camera_distance: Zoom bounds (min, max).
        azimuth: Horizontal orbit bounds in radians (min, max).
        polar: Vertical orbit bounds in radians (min, max).
        target: Point the camera orbits around (x, y, z).
        fog_color: Fog color as a hex string.
        fog_near: Distance where fog starts.
        fog_far: Distance where fog is opaque.
        shadow_x: X position of the scale figure, None without a width.
    """

    background_scale: tuple[float, float, float]
    camera_position: tuple[float, float, float]
    camera_distance: tuple[float, float]
    azimuth: tuple[float, float]
    polar: tuple[float, float]
    target: tuple[float, float, float]
    fog_color: str = "#f5f5f5"
    fog_near: float = 500.0
    fog_far: float = 900.0
    shadow_x: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "background_scale": list(self.background_scale),
            "camera_position": list(self.camera_position),
            "camera_distance": list(self.camera_distance),
            "azimuth": list(self.azimuth),
            "polar": list(self.polar),
            "target": list(self.target),
            "fog_color": self.fog_color,
            "fog_near": self.fog_near,
            "fog_far": self.fog_far,
            "shadow_x": self.shadow_x,
        }


DEFAULT_VIEWER = ViewerConfig(
    background_scale=(200, 90, 90),
    camera_position=(-100, 100, 150),
    camera_distance=(100, 500),
    azimuth=(-math.pi / 2 + 0.5, math.pi / 2 - 0.5),
    polar=(0.3, math.pi / 2 + 0.2),
    target=(0, 50, 0),
)

# Tall pieces need a wider, higher camera
WARDROBE_VIEWER = ViewerConfig(
    background_scale=(250, 120, 150),
    camera_position=(-150, 170, 350),
    camera_distance=(200, 500),
    azimuth=(-math.pi / 2 + math.pi / 5, math.pi / 2 - math.pi / 5),
    polar=(math.pi / 4, math.pi / 2),
    target=(0, 100, 0),
)

VIEWER_CONFIGS: dict[FurnitureType, ViewerConfig] = {
    FurnitureType.WARDROBE: WARDROBE_VIEWER,
    FurnitureType.STAND: DEFAULT_VIEWER,
    FurnitureType.TV_STAND: DEFAULT_VIEWER,
    FurnitureType.BEDSIDE: DEFAULT_VIEWER,
    FurnitureType.OFFICE_TABLE: DEFAULT_VIEWER,
    FurnitureType.GREENWALL: DEFAULT_VIEWER,
    FurnitureType.STORAGE: DEFAULT_VIEWER,
}

require_exhaustive(VIEWER_CONFIGS, FurnitureType, "VIEWER_CONFIGS")


def shadow_position(width: float) -> float:
    return -width / 2 - SHADOW_OFFSET


def get_viewer_config(
    furniture_type: FurnitureType | str | None, width: float | None = None
) -> ViewerConfig:
    """Look up the viewer config of a furniture type.

    Unrecognized or missing tags fall back to the default config rather than
    raising, since the viewer only affects presentation.

    Args:
        furniture_type: Furniture type or raw tag.
        width: Optional overall width used to place the scale figure.
    """
    try:
        config = VIEWER_CONFIGS[FurnitureType(furniture_type)]
    except ValueError:
        logger.debug(f"No viewer config for {furniture_type!r}, using default")
        config = DEFAULT_VIEWER

    if width is None:
        return config
    return replace(config, shadow_x=shadow_position(width))


def project_viewer(layout: SectionLayout) -> ViewerConfig:
    """Viewer config for a derived layout, using its overall width."""
    return get_viewer_config(layout.furniture_type, layout.width)
