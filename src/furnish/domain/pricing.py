"""Price formulas per furniture type."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .value_objects import (
    Dimensions,
    FurnitureType,
    GuideType,
    HingeType,
    require_exhaustive,
)


@dataclass(frozen=True)
class PricingFormula:
    """Linear price model of a furniture type.

    Attributes:
        base_price: Fixed cost of the carcass.
        per_section: Cost of each column.
        per_cm_width: Cost per cm of overall width.
        height_threshold: Height the height rate is counted from.
        height_rate: Cost per cm above (or credit below) the threshold.
        depth_threshold: Depth the depth rate is counted from.
        depth_rate: Cost per cm above (or credit below) the threshold.
        premium_guides_per_section: Surcharge per column for premium runners.
        soft_close_per_door: Surcharge per door for soft-close hinges.
        vat_multiplier: Applied to the net sum.
    """

    base_price: float
    per_section: float
    per_cm_width: float = 20.0
    height_threshold: float = 190.0
    height_rate: float = 4.5
    depth_threshold: float = 30.0
    depth_rate: float = 8.0
    premium_guides_per_section: float = 390.0
    soft_close_per_door: float = 120.0
    vat_multiplier: float = 1.3


PRICING: dict[FurnitureType, PricingFormula] = {
    FurnitureType.WARDROBE: PricingFormula(base_price=1200, per_section=900),
    FurnitureType.STAND: PricingFormula(base_price=600, per_section=600),
    FurnitureType.TV_STAND: PricingFormula(base_price=300, per_section=600),
    FurnitureType.BEDSIDE: PricingFormula(base_price=600, per_section=600),
    FurnitureType.OFFICE_TABLE: PricingFormula(
        base_price=900, per_section=500, height_threshold=75, height_rate=0
    ),
    FurnitureType.GREENWALL: PricingFormula(
        base_price=400, per_section=350, per_cm_width=12, depth_threshold=15
    ),
    FurnitureType.STORAGE: PricingFormula(base_price=500, per_section=550),
}

require_exhaustive(PRICING, FurnitureType, "PRICING")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_price(
    furniture_type: FurnitureType,
    dimensions: Dimensions,
    sections: int,
    guides: GuideType = GuideType.STANDARD,
    hinges: HingeType = HingeType.STANDARD,
    door_count: int = 0,
) -> int:
    """Calculate the gross price of a configuration.

    The net sum is multiplied by the VAT multiplier, rounded half-up to whole
    units and then to the nearest 10. The result is never negative.

    Example:
        >>> calculate_price(FurnitureType.STAND, Dimensions(80, 70, 40, 2), 1)
        3040
    """
    formula = PRICING[FurnitureType.parse(furniture_type)]

    guides_cost = (
        sections * formula.premium_guides_per_section
        if guides is GuideType.PREMIUM
        else 0.0
    )
    hinges_cost = (
        door_count * formula.soft_close_per_door
        if hinges is HingeType.SOFT_CLOSE
        else 0.0
    )

    net = (
        formula.base_price
        + sections * formula.per_section
        + dimensions.width * formula.per_cm_width
        + (dimensions.height - formula.height_threshold) * formula.height_rate
        + (dimensions.depth - formula.depth_threshold) * formula.depth_rate
        + guides_cost
        + hinges_cost
    )
    gross = _round_half_up(net * formula.vat_multiplier)
    return max(0, _round_half_up(gross / 10) * 10)
