"""Application layer - sessions, shareable links, presets and cart."""

from .cart import Cart, CartLineItem, snapshot_configuration
from .configuration import (
    default_configuration,
    normalize_columns,
    resize_columns,
    validate_configuration,
    with_price,
)
from .presets import PresetManager, PresetNotFoundError, PresetSchema
from .query import (
    QueryParseResult,
    decode_column_configs,
    encode_column_configs,
    parse_query,
    parse_query_report,
    serialize_query,
    to_query_string,
)
from .settings import ConfigError, EngineSettings, load_settings
from .store import ConfigurationStore

__all__ = [
    "Cart",
    "CartLineItem",
    "ConfigError",
    "ConfigurationStore",
    "EngineSettings",
    "PresetManager",
    "PresetNotFoundError",
    "PresetSchema",
    "QueryParseResult",
    "decode_column_configs",
    "default_configuration",
    "encode_column_configs",
    "load_settings",
    "normalize_columns",
    "parse_query",
    "parse_query_report",
    "resize_columns",
    "serialize_query",
    "snapshot_configuration",
    "to_query_string",
    "validate_configuration",
    "with_price",
]
