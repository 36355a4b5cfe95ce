"""Error taxonomy for the configuration engine.

Only UnknownFurnitureType is raised in normal operation: it signals a data
authoring bug that cannot be recovered from. The remaining errors describe
user-correctable or catalog problems and travel inside ValidationResult and
LayoutResult objects so callers can render field-level feedback.
"""

from __future__ import annotations

from typing import Any


class ConfiguratorError(Exception):
    """Base class for configuration engine errors."""

    code = "configurator_error"


class UnknownFurnitureType(ConfiguratorError, LookupError):
    """Raised when a furniture type tag is not recognized."""

    code = "unknown_furniture_type"

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Unknown furniture type: {tag!r}")


class DimensionOutOfRange(ConfiguratorError):
    """A dimension lies outside the range allowed for the furniture type."""

    code = "dimension_out_of_range"

    def __init__(
        self, field: str, value: float, minimum: float, maximum: float
    ) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{field} must be between {minimum:g} and {maximum:g} cm (got {value:g})"
        )


class StepViolation(ConfiguratorError):
    """A dimension does not sit on the step grid of the furniture type."""

    code = "step_violation"

    def __init__(self, field: str, value: float, step: float, minimum: float) -> None:
        self.field = field
        self.value = value
        self.step = step
        self.minimum = minimum
        super().__init__(
            f"{field} must be a multiple of {step:g} cm counted from {minimum:g} (got {value:g})"
        )


class InsufficientWidth(ConfiguratorError):
    """The overall width cannot hold the requested number of columns."""

    code = "insufficient_width"

    def __init__(self, width: float, section_count: int, minimum_width: float) -> None:
        self.width = width
        self.section_count = section_count
        self.minimum_width = minimum_width
        super().__init__(
            f"{section_count} columns need at least {minimum_width:g} cm of width "
            f"(got {width:g})"
        )


class AssetNotFound(ConfiguratorError):
    """No image is registered for a lookup key.

    Indicates an incomplete asset catalog or an engine bug. It is never
    replaced by a default image.
    """

    code = "asset_not_found"

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"No asset registered for {key}")


class InvalidQueryState(ConfiguratorError):
    """A shareable-link field was malformed or stale and was reset."""

    code = "invalid_query_state"

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Query field '{field}' ({value!r}): {reason}")
