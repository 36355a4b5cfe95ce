"""Cart snapshots of finalized configurations.

A line item is a value copy: once added to the cart it shares nothing with
the live configurator session.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from furnish.application.store import ConfigurationStore
from furnish.domain.colors import ColorName, hex_code
from furnish.domain.entities import ColumnConfiguration, FurnitureOptions
from furnish.domain.value_objects import Dimensions, FurnitureType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLineItem:
    """Immutable snapshot of one configured product.

    Attributes:
        name: Display name of the line.
        furniture_type: Product category.
        dimensions: Overall dimensions.
        color: Board decor.
        furniture_options: Hardware choices.
        columns: Column configurations, left to right.
        section_count: Column count read from the derived layout.
        price: Price at the moment of snapshotting.
        share_query: Query string that reopens the configuration.
        layout: Serialized derived layout.
    """

    name: str
    furniture_type: FurnitureType
    dimensions: Dimensions
    color: ColorName
    furniture_options: FurnitureOptions
    columns: tuple[ColumnConfiguration, ...]
    section_count: int
    price: float
    share_query: str
    layout: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def color_hex(self) -> str:
        return hex_code(self.color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "furniture_type": self.furniture_type.value,
            "dimensions": self.dimensions.to_dict(),
            "color": self.color_hex,
            "color_name": self.color.value,
            "furniture_options": self.furniture_options.to_dict(),
            "columns": [column.to_dict() for column in self.columns],
            "section_count": self.section_count,
            "price": self.price,
            "share_query": self.share_query,
            "layout": copy.deepcopy(self.layout),
        }


def snapshot_configuration(store: ConfigurationStore, name: str | None = None) -> CartLineItem:
    """Snapshot the current configuration of a session into a line item."""
    configuration = copy.deepcopy(store.configuration)
    layout = store.layout
    return CartLineItem(
        name=name or f"{configuration.furniture_type.value} {configuration.dimensions.width:g} cm",
        furniture_type=configuration.furniture_type,
        dimensions=configuration.dimensions,
        color=configuration.color,
        furniture_options=configuration.furniture_options,
        columns=configuration.columns,
        section_count=layout.derived_sections,
        price=configuration.price,
        share_query=store.query_string,
        layout=layout.to_dict(),
    )


class Cart:
    """In-memory cart of line items."""

    def __init__(self) -> None:
        self._items: list[CartLineItem] = []

    def add(self, item: CartLineItem) -> CartLineItem:
        self._items.append(item)
        logger.info(f"Added {item.name} ({item.price:g}) to cart")
        return item

    def add_configuration(self, store: ConfigurationStore, name: str | None = None) -> CartLineItem:
        return self.add(snapshot_configuration(store, name))

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def total(self) -> float:
        return sum(item.price for item in self._items)
