"""Infrastructure layer - text and JSON output."""

from .formatters import (
    ConstraintsFormatter,
    JsonExporter,
    LayoutDiagramFormatter,
    ValidationReportFormatter,
    constraints_to_dict,
    validation_to_dict,
)

__all__ = [
    "ConstraintsFormatter",
    "JsonExporter",
    "LayoutDiagramFormatter",
    "ValidationReportFormatter",
    "constraints_to_dict",
    "validation_to_dict",
]
