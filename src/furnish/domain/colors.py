"""Board colors offered by the storefront."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColorName(str, Enum):
    """Display names of the available board decors."""

    BIEGE = "Biege"
    WHITE = "White"
    LIGHT_GREY = "Light Grey"
    GREY = "Grey"
    DARK_GREY = "Dark Grey"
    GREY_CUBANIT = "Grey Cubanit"
    GREY_STONE = "Grey Stone"
    GREEN_EUCALYPT = "Green Eucalypt"
    GREEN_FJORD = "Green Fjord"
    ROSE_ANTIQUE = "Rose Antique"
    BIEGE_ALMOND = "Biege Almond"
    GREEN_SALVIA = "Green Salvia"
    BEIGE_CASHMERE = "Beige Cashmere"
    BEIGE_SAND = "Beige Sand"
    NATURAL_ACACIA = "Natural Acacia"
    NATURAL_WALNUT = "Natural Walnut"

    @property
    def slug(self) -> str:
        """Path-friendly form used in asset paths, e.g. "light-grey"."""
        return self.value.lower().replace(" ", "-")


@dataclass(frozen=True)
class ColorItem:
    """A board decor with its hex code and supplier material code."""

    name: ColorName
    hex_code: str
    material_code: str


COLOR_DICTIONARY: tuple[ColorItem, ...] = (
    ColorItem(ColorName.BIEGE, "#ded9d3", "EGGER U115 ST9"),
    ColorItem(ColorName.WHITE, "#fcfbf5", "EGGER W1000 ST9"),
    ColorItem(ColorName.LIGHT_GREY, "#d6d6d6", "EGGER U763 ST9"),
    ColorItem(ColorName.GREY, "#9c9c9c", "EGGER U788 ST9"),
    ColorItem(ColorName.DARK_GREY, "#4b4b4b", "EGGER U963 ST9"),
    ColorItem(ColorName.GREY_CUBANIT, "#877d73", "EGGER U767 ST9"),
    ColorItem(ColorName.GREY_STONE, "#a29587", "EGGER U727 ST9"),
    ColorItem(ColorName.GREEN_EUCALYPT, "#6e786d", "EGGER U604 ST9"),
    ColorItem(ColorName.GREEN_FJORD, "#8d9c9a", "EGGER U636 ST9"),
    ColorItem(ColorName.BEIGE_CASHMERE, "#d9c9be", "EGGER U702 ST9"),
    ColorItem(ColorName.BEIGE_SAND, "#e7d5c3", "EGGER U156 ST9"),
    ColorItem(ColorName.ROSE_ANTIQUE, "#c39d94", "EGGER U325 ST9"),
    ColorItem(ColorName.BIEGE_ALMOND, "#baa397", "EGGER U211 ST9"),
    ColorItem(ColorName.GREEN_SALVIA, "#bdbda6", "EGGER U608 ST9"),
    ColorItem(ColorName.NATURAL_ACACIA, "#d4b896", "EGGER H1277 ST9"),
    ColorItem(ColorName.NATURAL_WALNUT, "#8b6f47", "EGGER H3734 ST9"),
)

_BY_HEX: dict[str, ColorItem] = {item.hex_code: item for item in COLOR_DICTIONARY}
_BY_NAME: dict[ColorName, ColorItem] = {item.name: item for item in COLOR_DICTIONARY}


def color_name(hex_code: str) -> ColorName | None:
    """Resolve a hex code (any case) to its color name, or None."""
    item = _BY_HEX.get(hex_code.strip().lower())
    return item.name if item else None


def hex_code(name: ColorName) -> str:
    """Return the lowercase hex code of a color."""
    return _BY_NAME[name].hex_code


def material_code(name: ColorName) -> str:
    """Return the supplier material code of a color."""
    return _BY_NAME[name].material_code
