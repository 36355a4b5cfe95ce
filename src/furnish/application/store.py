"""Configuration state store: the single writer of a configurator session.

Every update runs to completion (validation, derivation, pricing and query
serialization) before ``update`` returns. A rejected update leaves the
previous configuration in place and exposes the reason through
``last_validation``.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import fields, replace
from typing import TYPE_CHECKING, Any, Union

from furnish.application.configuration import (
    default_configuration,
    resize_columns,
    validate_configuration,
    with_price,
)
from furnish.application.query import (
    decode_column,
    parse_query_report,
    serialize_query,
    to_query_string,
)
from furnish.application.settings import EngineSettings
from furnish.domain.assets import AssetCatalog, default_catalog
from furnish.domain.colors import ColorName, color_name
from furnish.domain.entities import ColumnConfiguration, Configuration, FurnitureOptions
from furnish.domain.errors import InvalidQueryState
from furnish.domain.section_resolver import (
    LayoutResult,
    SectionLayout,
    derive_configuration_layout,
)
from furnish.domain.validation import ValidationResult
from furnish.domain.value_objects import (
    DIMENSION_FIELDS,
    ColumnConfigurationType,
    Dimensions,
    DoorOpeningSide,
    FurnitureType,
    GuideType,
    HingeType,
    OpeningType,
)

if TYPE_CHECKING:
    from furnish.application.presets.schema import PresetSchema

logger = logging.getLogger(__name__)

Patch = Mapping[str, Any]
Updater = Callable[[Configuration], Union[Configuration, Patch]]
Subscriber = Callable[[Configuration, ValidationResult], None]

_OPTION_FIELDS = ("opening_type", "guides", "hinges")
_READ_ONLY_FIELDS = ("furniture_type", "price")
_CONFIGURATION_FIELDS = frozenset(f.name for f in fields(Configuration))


class ConfigurationStore:
    """Authoritative configuration of one configurator session.

    The store is the only place a session's Configuration changes. Updates
    are applied one at a time: a lock serializes callers from different
    threads, and updates issued by a subscriber while a notification is in
    progress are queued and applied after the current one.

    Example:
        store = ConfigurationStore(FurnitureType.WARDROBE)
        store.update({"dimensions": {"width": 180}, "selected_sections": 3})
        if not store.last_validation.is_valid:
            print(store.last_validation.violated_fields)
        print(store.query_string)
    """

    def __init__(
        self,
        furniture_type: FurnitureType | str,
        *,
        settings: EngineSettings | None = None,
        catalog: AssetCatalog | None = None,
        configuration: Configuration | None = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._catalog = catalog or default_catalog(self._settings.asset_base_url)
        self._lock = threading.RLock()
        self._pending: deque[Patch | Updater] = deque()
        self._applying = False
        self._subscribers: list[Subscriber] = []
        self.query_issues: tuple[InvalidQueryState, ...] = ()

        initial = configuration or default_configuration(furniture_type)
        if initial.furniture_type is not FurnitureType.parse(furniture_type):
            raise ValueError(
                f"Configuration is a {initial.furniture_type.value}, "
                f"store was opened for {furniture_type!r}"
            )

        validation, layout_result = self._evaluate(initial)
        if not validation.is_valid:
            raise ValueError(
                f"Initial configuration is invalid: {', '.join(validation.violated_fields)}"
            )
        self._configuration: Configuration = with_price(validation.value)
        self._layout_result = layout_result
        self._validation = validation
        self._query = serialize_query(self._configuration)

    @classmethod
    def from_query(
        cls,
        query: str | Mapping[str, Any] | None,
        furniture_type: FurnitureType | str | None = None,
        *,
        settings: EngineSettings | None = None,
        catalog: AssetCatalog | None = None,
    ) -> ConfigurationStore:
        """Start a session from a shared link.

        Invalid fields fall back to their defaults; the issues are recorded
        as warnings on ``last_validation``.
        """
        settings = settings or EngineSettings()
        parsed = parse_query_report(query, furniture_type, settings)
        store = cls(
            parsed.configuration.furniture_type,
            settings=settings,
            catalog=catalog,
            configuration=parsed.configuration,
        )
        for issue in parsed.issues:
            store._validation.add_warning(issue.field, str(issue))
        store.query_issues = parsed.issues
        return store

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def furniture_type(self) -> FurnitureType:
        return self._configuration.furniture_type

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def layout_result(self) -> LayoutResult:
        return self._layout_result

    @property
    def layout(self) -> SectionLayout:
        # Only accepted configurations are stored, so a layout always exists
        assert self._layout_result.layout is not None
        return self._layout_result.layout

    @property
    def last_validation(self) -> ValidationResult:
        return self._validation

    @property
    def query(self) -> dict[str, str]:
        return dict(self._query)

    @property
    def query_string(self) -> str:
        return to_query_string(self._configuration)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback run after every update.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, patch_or_fn: Patch | Updater) -> None:
        """Apply a partial patch or an updater function.

        Patches are mappings of Configuration fields. Nested ``dimensions``
        and ``furniture_options`` mappings are merged into the current
        values, and their fields may also be given at the top level
        (``width``, ``opening_type``, ...). ``columns`` accepts
        ColumnConfiguration objects, mappings or compact codes. When
        ``selected_sections`` changes without ``columns``, the column list is
        resized.

        An updater receives the current configuration and returns either a
        new Configuration or a patch.

        Raises:
            ValueError: If the patch names an unknown or read-only field.
        """
        with self._lock:
            self._pending.append(patch_or_fn)
            if self._applying:
                logger.debug("Queued update issued during notification")
                return
            self._applying = True
            try:
                while self._pending:
                    self._apply(self._pending.popleft())
            finally:
                self._applying = False
                self._pending.clear()

    def load_preset(self, preset: PresetSchema) -> None:
        """Replace the session with a ready-made product.

        A preset that ships a precomputed layout installs it as is, bypassing
        derivation until the next update.
        """
        from furnish.application.presets.manager import preset_to_configuration

        if FurnitureType.parse(preset.type) is not self.furniture_type:
            raise ValueError(
                f"Preset {preset.id} is a {preset.type}, session is a {self.furniture_type.value}"
            )

        with self._lock:
            candidate = preset_to_configuration(preset)
            validation, layout_result = self._evaluate(candidate)
            if validation.is_valid and preset.layout is not None:
                layout_result = LayoutResult(layout=preset.to_section_layout(layout_result.layout))
            self._commit(candidate, validation, layout_result)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, patch_or_fn: Patch | Updater) -> None:
        current = self._configuration
        try:
            if callable(patch_or_fn):
                produced = patch_or_fn(current)
                candidate = (
                    produced
                    if isinstance(produced, Configuration)
                    else self._patched(current, produced)
                )
            else:
                candidate = self._patched(current, patch_or_fn)
        except InvalidPatchValue as e:
            validation = ValidationResult().add_error(e.path, str(e), value=e.value)
            self._commit(current, validation, LayoutResult(layout=None))
            return

        if candidate.furniture_type is not current.furniture_type:
            raise ValueError("furniture_type cannot change within a session")

        validation, layout_result = self._evaluate(candidate)
        self._commit(candidate, validation, layout_result)

    def _evaluate(
        self, candidate: Configuration
    ) -> tuple[ValidationResult, LayoutResult]:
        validation = validate_configuration(candidate, self._settings.dimension_policy)
        if not validation.is_valid:
            return validation, LayoutResult(layout=None)

        layout_result = derive_configuration_layout(validation.value, self._catalog)
        for error in layout_result.errors:
            path = "dimensions.width" if error.code == "insufficient_width" else "layout"
            validation.add_violation(path, error)
        return validation, layout_result

    def _commit(
        self,
        candidate: Configuration,
        validation: ValidationResult,
        layout_result: LayoutResult,
    ) -> None:
        if validation.is_valid and layout_result.layout is not None:
            self._configuration = with_price(validation.value)
            self._layout_result = layout_result
            self._query = serialize_query(self._configuration)
        else:
            logger.warning(
                f"Rejected update to {candidate.furniture_type.value}: "
                f"{', '.join(validation.violated_fields)}"
            )
        self._validation = validation
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self._configuration, self._validation)

    def _patched(self, current: Configuration, patch: Patch) -> Configuration:
        unknown = [
            key
            for key in patch
            if key not in _CONFIGURATION_FIELDS
            and key not in DIMENSION_FIELDS
            and key not in _OPTION_FIELDS
        ]
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        read_only = [key for key in patch if key in _READ_ONLY_FIELDS]
        if read_only:
            raise ValueError(f"Fields cannot be patched: {', '.join(read_only)}")
        for name, allowed in (
            ("dimensions", DIMENSION_FIELDS),
            ("furniture_options", _OPTION_FIELDS),
        ):
            nested = patch.get(name)
            if isinstance(nested, Mapping):
                extra = sorted(key for key in nested if key not in allowed)
                if extra:
                    raise ValueError(f"Unknown {name} fields: {', '.join(extra)}")

        with _patch_field("dimensions", patch.get("dimensions")):
            dimensions = _merge_dimensions(current.dimensions, patch)
        with _patch_field("furniture_options", patch.get("furniture_options")):
            options = _merge_options(current.furniture_options, patch)
        with _patch_field("selected_sections", patch.get("selected_sections")):
            sections = _coerce_section_count(
                patch.get("selected_sections", current.selected_sections)
            )

        if "columns" in patch:
            with _patch_field("columns", patch["columns"]):
                columns = tuple(_coerce_column(item) for item in patch["columns"])
        elif sections != current.selected_sections and sections >= 1:
            columns = resize_columns(
                current.furniture_type, dimensions, current.columns, sections
            )
        else:
            columns = current.columns

        color = current.color
        if "color" in patch:
            with _patch_field("color", patch["color"]):
                color = _coerce_color(patch["color"])

        return replace(
            current,
            dimensions=dimensions,
            selected_sections=sections,
            columns=columns,
            color=color,
            furniture_options=options,
        )


class InvalidPatchValue(ValueError):
    """A patch value could not be converted to its field type."""

    def __init__(self, path: str, value: Any, reason: str) -> None:
        self.path = path
        self.value = value
        super().__init__(f"Invalid value for {path}: {reason}")


@contextmanager
def _patch_field(path: str, value: Any) -> Iterator[None]:
    try:
        yield
    except (ValueError, TypeError, KeyError) as e:
        raise InvalidPatchValue(path, value, str(e)) from e


def _merge_dimensions(current: Dimensions, patch: Patch) -> Dimensions:
    values = current.to_dict()
    nested = patch.get("dimensions")
    if isinstance(nested, Dimensions):
        values = nested.to_dict()
    elif nested is not None:
        values.update({key: nested[key] for key in nested})
    for name in DIMENSION_FIELDS:
        if name in patch:
            values[name] = patch[name]
    return Dimensions(**{name: float(values[name]) for name in DIMENSION_FIELDS})


def _merge_options(current: FurnitureOptions, patch: Patch) -> FurnitureOptions:
    values: dict[str, Any] = {
        "opening_type": current.opening_type,
        "guides": current.guides,
        "hinges": current.hinges,
    }
    nested = patch.get("furniture_options")
    if isinstance(nested, FurnitureOptions):
        values = {name: getattr(nested, name) for name in _OPTION_FIELDS}
    elif nested is not None:
        values.update(nested)
    for name in _OPTION_FIELDS:
        if name in patch:
            values[name] = patch[name]

    opening_type = OpeningType.from_legacy(values["opening_type"])
    if opening_type is None:
        raise ValueError(f"Unknown opening type: {values['opening_type']!r}")
    return FurnitureOptions(
        opening_type=opening_type,
        guides=GuideType(values["guides"]),
        hinges=HingeType(values["hinges"]),
    )


def _coerce_column(item: ColumnConfiguration | Mapping[str, Any] | str) -> ColumnConfiguration:
    if isinstance(item, ColumnConfiguration):
        return item
    if isinstance(item, str):
        column = decode_column(item)
        if column is None:
            raise ValueError(f"Unknown column code: {item!r}")
        return column
    side = item.get("door_opening_side")
    return ColumnConfiguration(
        type=ColumnConfigurationType(item["type"]),
        door_opening_side=DoorOpeningSide(side) if side is not None else None,
        mirror=bool(item.get("mirror", False)),
    )


def _coerce_section_count(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("selected_sections must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"selected_sections must be a whole number (got {value:g})")
        return int(value)
    return int(value)


def _coerce_color(value: ColorName | str) -> ColorName:
    if isinstance(value, ColorName):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Color must be a name or hex code (got {value!r})")
    if value.startswith("#"):
        color = color_name(value)
        if color is None:
            raise ValueError(f"Unknown color: {value!r}")
        return color
    return ColorName(value)


def columns_from_codes(codes: Sequence[str]) -> tuple[ColumnConfiguration, ...]:
    """Decode a list of compact column codes, raising on unknown codes."""
    return tuple(_coerce_column(code) for code in codes)
