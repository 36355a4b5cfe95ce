"""Canonical query-string encoding of a configuration.

A configuration is shared as a flat set of query parameters::

    ?type=wardrobe&width=150&height=210&sections=2&colCfg=DD,SDLF&color=%23fcfbf5

Dimensions, section count and hardware options are only written when they
differ from the type defaults; ``type``, ``colCfg`` and ``color`` are always
written. Parsing never raises for user data: every malformed, stale or
out-of-range field falls back to its type default and is reported as an
InvalidQueryState issue.
"""

from __future__ import annotations

import difflib
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Annotated
from urllib.parse import parse_qs, quote, urlencode

from pydantic import Field, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from furnish.application.configuration import (
    column_sizes,
    default_configuration,
    resize_columns,
    validate_configuration,
    with_price,
)
from furnish.application.settings import EngineSettings
from furnish.domain.colors import ColorName, color_name, hex_code
from furnish.domain.constraints import (
    Constraints,
    DimensionPolicy,
    constraints_for,
    find_nearest_available_configuration,
    minimum_width,
    valid_section_counts,
    validate_dimensions,
)
from furnish.domain.entities import ColumnConfiguration, Configuration, FurnitureOptions
from furnish.domain.errors import InvalidQueryState, UnknownFurnitureType
from furnish.domain.value_objects import (
    ColumnConfigurationType,
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    GuideType,
    HingeType,
    OpeningType,
    require_exhaustive,
)

logger = logging.getLogger(__name__)

CT = ColumnConfigurationType

TYPE_KEY = "type"
WIDTH_KEY = "width"
HEIGHT_KEY = "height"
DEPTH_KEY = "depth"
PLINTH_KEY = "plinthHeight"
SECTIONS_KEY = "sections"
COLUMNS_KEY = "colCfg"
COLOR_KEY = "color"
OPENING_KEY = "openingType"
GUIDES_KEY = "guides"
HINGES_KEY = "hinges"

QUERY_KEYS: tuple[str, ...] = (
    TYPE_KEY,
    WIDTH_KEY,
    HEIGHT_KEY,
    DEPTH_KEY,
    PLINTH_KEY,
    SECTIONS_KEY,
    COLUMNS_KEY,
    COLOR_KEY,
    OPENING_KEY,
    GUIDES_KEY,
    HINGES_KEY,
)

# Older links used these spellings
LEGACY_KEYS: dict[str, str] = {
    "colors": COLOR_KEY,
    "plintHeight": PLINTH_KEY,
}

_DIMENSION_KEYS: tuple[tuple[str, str], ...] = (
    (WIDTH_KEY, "width"),
    (HEIGHT_KEY, "height"),
    (DEPTH_KEY, "depth"),
    (PLINTH_KEY, "plinth_height"),
)

COLUMN_CODES: dict[ColumnConfigurationType, str] = {
    CT.SINGLE_DOOR_LEFT: "SDLF",
    CT.SINGLE_DOOR_RIGHT: "SDRT",
    CT.DOUBLE_DOOR: "DD",
    CT.OPEN_SHELF: "OS",
    CT.DRAWER_STACK: "DRS",
    CT.DRAWERS_1: "DR1",
    CT.DRAWERS_2: "DR2",
    CT.DRAWERS_3: "DR3",
    CT.DRAWERS_4: "DR4",
    CT.DRAWERS_5: "DR5",
    CT.DOOR_1_SHELF: "D1S",
    CT.DOOR_2_SHELVES: "D2S",
    CT.DOOR_3_SHELVES: "D3S",
    CT.DOOR_4_SHELVES: "D4S",
    CT.DOOR_5_SHELVES: "D5S",
    CT.DOOR_SPLIT_1_SHELF: "DS1S",
    CT.DOOR_SPLIT_2_SHELVES: "DS2S",
    CT.DOOR_SPLIT_3_SHELVES: "DS3S",
    CT.DOOR_SPLIT_4_SHELVES: "DS4S",
    CT.DOOR_SPLIT_5_SHELVES: "DS5S",
}

require_exhaustive(COLUMN_CODES, ColumnConfigurationType, "COLUMN_CODES")

_TYPES_BY_CODE: dict[str, ColumnConfigurationType] = {
    code: column_type for column_type, code in COLUMN_CODES.items()
}

_SIDE_SUFFIX: dict[DoorOpeningSide, str] = {
    DoorOpeningSide.LEFT: "L",
    DoorOpeningSide.RIGHT: "R",
}

_COLUMN_TOKEN = re.compile(r"^(?P<code>[A-Z0-9]+?)(?P<side>[LR])?(?P<mirror>M)?$")

_DIMENSION_ADAPTER = TypeAdapter(Annotated[float, Field(ge=0, allow_inf_nan=False)])
_SECTIONS_ADAPTER = TypeAdapter(Annotated[int, Field(ge=1)])
_HEX_ADAPTER = TypeAdapter(
    Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^#?[0-9a-fA-F]{6}$")]
)
_GUIDES_ADAPTER = TypeAdapter(GuideType)
_HINGES_ADAPTER = TypeAdapter(HingeType)


@dataclass(frozen=True)
class QueryParseResult:
    """A parsed configuration plus the fields that had to be reset."""

    configuration: Configuration
    issues: tuple[InvalidQueryState, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.issues

    @property
    def reset_fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


# =============================================================================
# Column codes
# =============================================================================


def encode_column(column: ColumnConfiguration) -> str:
    """Compact code of one column, e.g. "D1SL" or "OSM"."""
    code = COLUMN_CODES[column.type]
    if column.door_opening_side is not None:
        code += _SIDE_SUFFIX[column.door_opening_side]
    if column.mirror:
        code += "M"
    return code


def encode_column_configs(columns: Sequence[ColumnConfiguration]) -> str:
    """Comma separated column codes, left to right."""
    return ",".join(encode_column(column) for column in columns)


def decode_column(token: str) -> ColumnConfiguration | None:
    """Decode one column code, or None if it is not a known code."""
    match = _COLUMN_TOKEN.match(token.strip().upper())
    if match is None:
        return None
    column_type = _TYPES_BY_CODE.get(match.group("code"))
    if column_type is None:
        return None
    side = match.group("side")
    return ColumnConfiguration(
        type=column_type,
        door_opening_side=(
            DoorOpeningSide.LEFT if side == "L"
            else DoorOpeningSide.RIGHT if side == "R"
            else None
        ),
        mirror=match.group("mirror") is not None,
    )


def decode_column_configs(value: str) -> tuple[list[ColumnConfiguration | None], list[str]]:
    """Decode a comma separated column list.

    Returns:
        Tuple of (columns, invalid tokens). Invalid positions hold None so
        callers can replace them in place.
    """
    columns: list[ColumnConfiguration | None] = []
    invalid: list[str] = []
    for token in value.split(","):
        if not token.strip():
            continue
        column = decode_column(token)
        if column is None:
            invalid.append(token)
        columns.append(column)
    return columns, invalid


# =============================================================================
# Serialization
# =============================================================================


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(float(value))


def serialize_query(configuration: Configuration) -> dict[str, str]:
    """Flat query parameters of a configuration, in canonical key order."""
    constraints = constraints_for(configuration.furniture_type)
    defaults = constraints.default_dimensions()
    params: dict[str, str] = {TYPE_KEY: configuration.furniture_type.value}

    for key, name in _DIMENSION_KEYS:
        value = getattr(configuration.dimensions, name)
        if value != getattr(defaults, name):
            params[key] = _format_number(value)

    if configuration.selected_sections != constraints.section_count.default:
        params[SECTIONS_KEY] = str(configuration.selected_sections)

    params[COLUMNS_KEY] = encode_column_configs(configuration.columns)
    params[COLOR_KEY] = hex_code(configuration.color)

    options = configuration.furniture_options
    default_options = FurnitureOptions()
    if options.opening_type is not default_options.opening_type:
        params[OPENING_KEY] = options.opening_type.value
    if options.guides is not default_options.guides:
        params[GUIDES_KEY] = options.guides.value
    if options.hinges is not default_options.hinges:
        params[HINGES_KEY] = options.hinges.value
    return params


def to_query_string(configuration: Configuration) -> str:
    """URL-encoded query string without the leading "?"."""
    return urlencode(serialize_query(configuration), safe=",", quote_via=quote)


# =============================================================================
# Parsing
# =============================================================================


def _normalize_params(query: str | Mapping[str, str | Sequence[str]] | None) -> dict[str, str]:
    if query is None:
        return {}
    if isinstance(query, str):
        raw: Mapping[str, str | Sequence[str]] = parse_qs(
            query.lstrip("?"), keep_blank_values=True
        )
    else:
        raw = query

    params: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            text = value
        elif value:
            text = str(value[0])
        else:
            continue
        canonical = LEGACY_KEYS.get(key, key)
        # A current key wins over its legacy spelling
        if canonical in params and key != canonical:
            continue
        params[canonical] = text
    return params


class _QueryParser:
    """Field-by-field parser that collects issues instead of raising."""

    def __init__(self, params: dict[str, str], settings: EngineSettings) -> None:
        self.params = params
        self.settings = settings
        self.issues: list[InvalidQueryState] = []

    def report(self, field: str, value: object, reason: str) -> None:
        issue = InvalidQueryState(field, value, reason)
        logger.warning(str(issue))
        self.issues.append(issue)

    def furniture_type(self, explicit: FurnitureType | str | None) -> FurnitureType:
        raw = explicit if explicit is not None else self.params.get(TYPE_KEY)
        default = self.settings.default_furniture_type
        if raw is None or not str(raw).strip():
            return default
        try:
            return FurnitureType.parse(raw)
        except UnknownFurnitureType:
            tags = [t.value for t in FurnitureType]
            close = difflib.get_close_matches(str(raw).strip().lower(), tags, n=1, cutoff=0.6)
            resolved = FurnitureType(close[0]) if close else default
            self.report(TYPE_KEY, raw, f"unknown furniture type, using {resolved.value}")
            return resolved

    def dimensions(self, constraints: Constraints) -> Dimensions:
        defaults = constraints.default_dimensions()
        values = defaults.to_dict()

        for key, name in _DIMENSION_KEYS:
            raw = self.params.get(key)
            if raw is None or raw == "":
                continue
            try:
                values[name] = _DIMENSION_ADAPTER.validate_python(raw)
            except PydanticValidationError:
                self.report(key, raw, "not a number")

        candidate = Dimensions(**values)
        result = validate_dimensions(candidate, constraints, self.settings.dimension_policy)
        if self.settings.dimension_policy is DimensionPolicy.CLAMP:
            for warning in result.warnings:
                self.report(_query_key(warning.path), getattr(candidate, warning.path), warning.message)
            return result.value

        for error in result.errors:
            values[error.path] = getattr(defaults, error.path)
            self.report(_query_key(error.path), error.value, f"{error.message}, reset to default")
        return Dimensions(**values)

    def section_count(self, constraints: Constraints, dimensions: Dimensions) -> int:
        rng = constraints.section_count
        count = rng.default
        raw = self.params.get(SECTIONS_KEY)
        if raw is not None and raw != "":
            try:
                parsed = _SECTIONS_ADAPTER.validate_python(raw)
            except PydanticValidationError:
                self.report(SECTIONS_KEY, raw, "not a positive whole number")
            else:
                if rng.contains(parsed):
                    count = parsed
                else:
                    self.report(
                        SECTIONS_KEY,
                        raw,
                        f"must be between {rng.minimum} and {rng.maximum}, reset to default",
                    )

        if minimum_width(constraints, count) <= dimensions.width:
            return count

        fitting = valid_section_counts(constraints.furniture_type, dimensions)
        fallback = (
            rng.default
            if rng.default in fitting
            else (fitting[-1] if fitting else rng.default)
        )
        self.report(
            SECTIONS_KEY,
            count,
            f"width {dimensions.width:g} cm cannot hold {count} columns, using {fallback}",
        )
        return fallback

    def columns(
        self, constraints: Constraints, dimensions: Dimensions, count: int
    ) -> tuple[ColumnConfiguration, ...]:
        raw = self.params.get(COLUMNS_KEY)
        if raw is None or raw == "":
            return resize_columns(constraints.furniture_type, dimensions, (), count)

        decoded, invalid = decode_column_configs(raw)
        for token in invalid:
            self.report(COLUMNS_KEY, token, "unknown column code, using default")

        sizes = column_sizes(constraints, dimensions, count)
        columns: list[ColumnConfiguration] = []
        for index, column in enumerate(decoded[:count]):
            if column is not None and column.type not in constraints.column_types:
                self.report(
                    COLUMNS_KEY,
                    encode_column(column),
                    f"{column.type.value} is not offered for {constraints.furniture_type.value}",
                )
                column = None
            if column is None:
                column_type = constraints.default_column_type
                if sizes is not None:
                    column_type = (
                        find_nearest_available_configuration(
                            column_type, sizes[index], constraints.column_types
                        )
                        or column_type
                    )
                column = ColumnConfiguration(type=column_type)
            columns.append(column)

        if len(decoded) != count:
            self.report(
                COLUMNS_KEY,
                raw,
                f"expected {count} columns, got {len(decoded)}",
            )
            return resize_columns(constraints.furniture_type, dimensions, columns, count)
        return tuple(columns)

    def color(self, constraints: Constraints) -> ColorName:
        raw = self.params.get(COLOR_KEY)
        if raw is None or raw == "":
            return constraints.default_color

        color: ColorName | None = None
        try:
            code = _HEX_ADAPTER.validate_python(raw)
        except PydanticValidationError:
            color = _color_by_name(raw)
        else:
            color = color_name(code if code.startswith("#") else f"#{code}")

        if color is None:
            self.report(COLOR_KEY, raw, "unknown color, using default")
            return constraints.default_color
        if color not in constraints.colors:
            self.report(COLOR_KEY, raw, f"{color.value} is not available, using default")
            return constraints.default_color
        return color

    def options(self) -> FurnitureOptions:
        defaults = FurnitureOptions()

        opening_type = defaults.opening_type
        raw = self.params.get(OPENING_KEY)
        if raw:
            parsed = OpeningType.from_legacy(raw)
            if parsed is None:
                self.report(OPENING_KEY, raw, "unknown opening type, using default")
            else:
                opening_type = parsed

        guides = defaults.guides
        raw = self.params.get(GUIDES_KEY)
        if raw:
            try:
                guides = _GUIDES_ADAPTER.validate_python(raw.strip().lower())
            except PydanticValidationError:
                self.report(GUIDES_KEY, raw, "unknown guide type, using default")

        hinges = defaults.hinges
        raw = self.params.get(HINGES_KEY)
        if raw:
            try:
                hinges = _HINGES_ADAPTER.validate_python(raw.strip().lower())
            except PydanticValidationError:
                self.report(HINGES_KEY, raw, "unknown hinge type, using default")

        return FurnitureOptions(opening_type=opening_type, guides=guides, hinges=hinges)


def _query_key(field_name: str) -> str:
    for key, name in _DIMENSION_KEYS:
        if name == field_name:
            return key
    return field_name


def _color_by_name(value: str) -> ColorName | None:
    normalized = value.strip().lower().replace("-", " ")
    for color in ColorName:
        if color.value.lower() == normalized:
            return color
    return None


def parse_query_report(
    query: str | Mapping[str, str | Sequence[str]] | None,
    furniture_type: FurnitureType | str | None = None,
    settings: EngineSettings | None = None,
) -> QueryParseResult:
    """Parse a shared link into a configuration, reporting reset fields.

    The result runs through the same validation path as a user edit. Fields
    that fail are reset to the type defaults one by one; the whole link is
    never rejected.

    Args:
        query: Raw query string (with or without "?") or a mapping of
            parameter names to a value or list of values.
        furniture_type: Type taken from the page route; overrides ``type``.
        settings: Engine settings; defaults to EngineSettings().

    Returns:
        QueryParseResult with the priced configuration and the issues.
    """
    settings = settings or EngineSettings()
    parser = _QueryParser(_normalize_params(query), settings)

    resolved_type = parser.furniture_type(furniture_type)
    constraints = constraints_for(resolved_type)
    dimensions = parser.dimensions(constraints)
    count = parser.section_count(constraints, dimensions)

    candidate = Configuration(
        furniture_type=resolved_type,
        dimensions=dimensions,
        selected_sections=count,
        columns=parser.columns(constraints, dimensions, count),
        color=parser.color(constraints),
        furniture_options=parser.options(),
    )

    validation = validate_configuration(candidate, settings.dimension_policy)
    if validation.is_valid:
        configuration = validation.value
    else:
        for error in validation.errors:
            parser.report(error.path, error.value, f"{error.message}, using defaults")
        configuration = replace(
            default_configuration(resolved_type),
            furniture_options=candidate.furniture_options,
        )

    return QueryParseResult(
        configuration=with_price(configuration), issues=tuple(parser.issues)
    )


def parse_query(
    query: str | Mapping[str, str | Sequence[str]] | None,
    furniture_type: FurnitureType | str | None = None,
    settings: EngineSettings | None = None,
) -> Configuration:
    """Parse a shared link into a configuration; see parse_query_report."""
    return parse_query_report(query, furniture_type, settings).configuration
