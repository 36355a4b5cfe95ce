"""Engine settings and the settings file loader.

Settings are per deployment: the dimension policy in particular decides
whether out-of-range input is clamped or rejected.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from furnish.domain.constraints import DimensionPolicy
from furnish.domain.value_objects import FurnitureType

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class EngineSettings(BaseModel):
    """Deployment settings of the configuration engine.

    Attributes:
        dimension_policy: "reject" reports out-of-range dimensions,
            "clamp" snaps them into range and continues.
        default_furniture_type: Type used when a link names no usable type.
        asset_base_url: Prefix for every image reference.
        log_level: Level the CLI configures logging with.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dimension_policy: DimensionPolicy = DimensionPolicy.REJECT
    default_furniture_type: FurnitureType = FurnitureType.WARDROBE
    asset_base_url: str = Field(default="", description="Prefix for image paths")
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


class ConfigError(Exception):
    """Exception raised for settings file errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the settings file (if applicable)
        details: Additional error details (line/column for JSON, validation errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("settings", "log_level"))
        'settings.log_level'
        >>> _format_json_path(("items", 0, "name"))
        'items[0].name'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Settings validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_settings_from_dict(data: dict[str, Any]) -> EngineSettings:
    """Validate settings from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    try:
        return EngineSettings.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )


def load_settings(path: Path) -> EngineSettings:
    """Load and validate engine settings from a JSON file.

    Args:
        path: Path to the JSON settings file

    Returns:
        A validated EngineSettings instance

    Raises:
        ConfigError: If the file cannot be loaded or validated. The
            error_type attribute names the failure category.

    Example:
        >>> try:
        ...     settings = load_settings(Path("furnish.json"))
        ... except ConfigError as e:
        ...     print(f"Error: {e}")
    """
    if not path.exists():
        raise ConfigError(
            message=f"Settings file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading settings file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading settings file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in settings file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Settings file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
        )

    try:
        return EngineSettings.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )
