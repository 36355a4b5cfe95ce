"""Validation result structures shared by the constraint table and the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ConfiguratorError


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: Dotted path to the invalid field (e.g., "dimensions.width").
        message: Human-readable description of the error.
        value: The invalid value that caused the error.
        code: Stable error code from the error taxonomy.
        allowed: Allowed range or minimum, for presenting to the user.
    """

    path: str
    message: str
    value: Any = None
    code: str = "invalid"
    allowed: Any = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning.

    Attributes:
        path: Dotted path to the concerning field.
        message: Human-readable description of the concern.
        suggestion: Optional suggested remediation.
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors.
        warnings: List of non-blocking validation warnings.
        value: The validated object, clamped when the clamp policy applied.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    value: Any = None

    @property
    def is_valid(self) -> bool:
        """Check if there are no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    @property
    def violated_fields(self) -> list[str]:
        """Paths of all fields with blocking errors, in report order."""
        return [error.path for error in self.errors]

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        code: str = "invalid",
        allowed: Any = None,
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(
            ValidationError(
                path=path, message=message, value=value, code=code, allowed=allowed
            )
        )
        return self

    def add_violation(
        self,
        path: str,
        error: ConfiguratorError,
        value: Any = None,
        allowed: Any = None,
    ) -> "ValidationResult":
        """Record a taxonomy error as a value and return self for chaining."""
        return self.add_error(
            path, str(error), value=value, code=error.code, allowed=allowed
        )

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self
