"""Image lookup tables for column arrangements, door fronts and handles.

The catalog only maps lookup keys to image references. Loading, caching and
pre-fetching the images is the job of the rendering layer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType

from .colors import ColorName
from .constraints import FURNITURE_CONSTRAINTS
from .errors import AssetNotFound
from .metadata import ConfigurationMetadata, get_configuration_metadata
from .value_objects import (
    ColumnConfigurationType,
    DoorOpeningSide,
    FurnitureType,
    OpeningType,
    require_exhaustive,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetKey:
    """Exact key of an arrangement image."""

    furniture_type: FurnitureType
    color: ColorName
    height_bucket: str
    column_type: ColumnConfigurationType
    mirror: bool = False

    def __str__(self) -> str:
        mirrored = ", mirrored" if self.mirror else ""
        return (
            f"{self.furniture_type.value}/{self.color.value}/{self.height_bucket}/"
            f"{self.column_type.value}{mirrored}"
        )


class OpeningLayout(str, Enum):
    """Front layout of a column, used to pick the opening image."""

    LEFT = "left"
    RIGHT = "right"
    DOUBLE = "double"
    DRAWERS = "drawers"

    @classmethod
    def for_column(
        cls, metadata: ConfigurationMetadata, side: DoorOpeningSide | None
    ) -> OpeningLayout | None:
        """Front layout of a column, or None for an open column."""
        if metadata.door_count == 2:
            return cls.DOUBLE
        if metadata.door_count == 1:
            return cls.RIGHT if side is DoorOpeningSide.RIGHT else cls.LEFT
        if metadata.drawer_count > 0:
            return cls.DRAWERS
        return None


def _slug(column_type: ColumnConfigurationType) -> str:
    return column_type.value.lower().replace("_", "-")


class AssetCatalog:
    """Read-only image lookup built once per deployment.

    Lookups never fall back to a neighbouring key: a missing entry raises
    AssetNotFound so an incomplete catalog shows up as an error instead of a
    wrong render.
    """

    def __init__(
        self,
        arrangements: Mapping[AssetKey, str],
        openings: Mapping[tuple[FurnitureType, OpeningLayout, OpeningType], str],
        handles: Mapping[OpeningType, str],
    ) -> None:
        self._arrangements = MappingProxyType(dict(arrangements))
        self._openings = MappingProxyType(dict(openings))
        self._handles = MappingProxyType(dict(handles))

    @property
    def arrangements(self) -> Mapping[AssetKey, str]:
        return self._arrangements

    @property
    def openings(self) -> Mapping[tuple[FurnitureType, OpeningLayout, OpeningType], str]:
        return self._openings

    @property
    def handles(self) -> Mapping[OpeningType, str]:
        return self._handles

    def __len__(self) -> int:
        return len(self._arrangements)

    def arrangement_image(self, key: AssetKey) -> str:
        """Arrangement image for an exact key.

        Raises:
            AssetNotFound: If the key has no registered image.
        """
        try:
            return self._arrangements[key]
        except KeyError:
            raise AssetNotFound(key) from None

    def opening_image(
        self,
        furniture_type: FurnitureType,
        layout: OpeningLayout,
        opening_type: OpeningType,
    ) -> str:
        """Door or drawer front image.

        Raises:
            AssetNotFound: If no front is registered for the combination.
        """
        key = (furniture_type, layout, opening_type)
        try:
            return self._openings[key]
        except KeyError:
            raise AssetNotFound(
                f"{furniture_type.value}/{layout.value}/{opening_type.value}"
            ) from None

    def handle_image(self, opening_type: OpeningType) -> str | None:
        """Handle image, or None for push-to-open fronts.

        Raises:
            AssetNotFound: If a handle style has no registered image.
        """
        if opening_type is OpeningType.PUSH:
            return None
        try:
            return self._handles[opening_type]
        except KeyError:
            raise AssetNotFound(f"handle/{opening_type.value}") from None


def build_default_catalog(base_url: str = "") -> AssetCatalog:
    """Enumerate the image paths shipped with the storefront.

    One arrangement image exists per furniture type, palette color, height
    bucket, allowed column type and supported mirror flag.

    Args:
        base_url: Prefix prepended to every path, e.g. a CDN origin.
    """
    base = base_url.rstrip("/")
    arrangements: dict[AssetKey, str] = {}
    openings: dict[tuple[FurnitureType, OpeningLayout, OpeningType], str] = {}

    for furniture_type, constraints in FURNITURE_CONSTRAINTS.items():
        for color in constraints.colors:
            for bucket in constraints.height_buckets:
                for column_type in constraints.column_types:
                    metadata = get_configuration_metadata(column_type)
                    mirrors = (False, True) if metadata and metadata.supports_mirror else (False,)
                    for mirror in mirrors:
                        key = AssetKey(furniture_type, color, bucket.label, column_type, mirror)
                        suffix = "-mirrored" if mirror else ""
                        arrangements[key] = (
                            f"{base}/{furniture_type.value}/{color.slug}/"
                            f"{bucket.label.lower()}/{_slug(column_type)}{suffix}.png"
                        )
        for layout in OpeningLayout:
            for opening_type in OpeningType:
                openings[(furniture_type, layout, opening_type)] = (
                    f"{base}/{furniture_type.value}/openings/"
                    f"{layout.value}-{opening_type.value}.png"
                )

    handles = {
        OpeningType.ROUND_HANDLE: f"{base}/handles/round.png",
        OpeningType.PROFILE_HANDLE: f"{base}/handles/profile.png",
    }

    require_exhaustive(
        {key[0]: key for key in openings}, FurnitureType, "opening images"
    )
    logger.debug(f"Built asset catalog with {len(arrangements)} arrangement images")
    return AssetCatalog(arrangements, openings, handles)


@lru_cache(maxsize=8)
def default_catalog(base_url: str = "") -> AssetCatalog:
    """Memoized default catalog per base URL."""
    return build_default_catalog(base_url)
