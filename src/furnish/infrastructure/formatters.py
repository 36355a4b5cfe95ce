"""Text and JSON output for layouts, constraints and validation results."""

from __future__ import annotations

import json
from typing import Any

from furnish.application.query import COLUMN_CODES, QueryParseResult
from furnish.domain.constraints import Constraints
from furnish.domain.entities import Configuration
from furnish.domain.section_resolver import SectionLayout
from furnish.domain.validation import ValidationResult
from furnish.domain.viewer import ViewerConfig


class LayoutDiagramFormatter:
    """Formats an ASCII front elevation of a derived layout.

    Columns are drawn to scale across the diagram width and labelled with
    their compact code; single doors show their hinge side.
    """

    def format(
        self,
        layout: SectionLayout | None,
        configuration: Configuration | None = None,
        width: int = 60,
        height: int = 16,
    ) -> str:
        """Generate an ASCII diagram of the layout."""
        if layout is None:
            return "No layout to display."

        lines = [
            f"{layout.furniture_type.value.upper()} LAYOUT",
            "=" * width,
            "",
        ]

        grid = [[" " for _ in range(width)] for _ in range(height)]
        self._draw_box(grid, 0, 0, width - 1, height - 1)

        scale = (width - 1) / layout.width if layout.width else 0
        label_row = height // 2
        for column in layout.columns:
            left = int(round(column.x_position * scale))
            right = int(round((column.x_position + column.width) * scale))
            if column.index > 0 and 0 < left < width - 1:
                for y in range(1, height - 1):
                    grid[y][left] = "|"

            label = COLUMN_CODES[column.configuration_type]
            if column.door_opening_side is not None:
                label += "<" if column.door_opening_side.value == "left" else ">"
            if column.mirror:
                label += "M"
            start = left + max(1, (right - left - len(label)) // 2)
            for offset, char in enumerate(label):
                x = start + offset
                if 0 < x < width - 1 and x < right:
                    grid[label_row][x] = char

        for row in grid:
            lines.append("".join(row))

        lines.append("")
        if configuration is not None:
            dims = configuration.dimensions
            lines.append(
                f"Dimensions: {dims.width:g} W x {dims.height:g} H x {dims.depth:g} D cm "
                f"(plinth {dims.plinth_height:g} cm)"
            )
            lines.append(f"Color: {configuration.color.value} ({configuration.color_hex})")
            lines.append(f"Opening: {configuration.furniture_options.opening_type.value}")
            lines.append(f"Price: {configuration.price:g}")
        lines.append(f"Columns: {layout.derived_sections} (usable width {layout.usable_width:g} cm)")
        for column in layout.columns:
            side = f", opens {column.door_opening_side.value}" if column.door_opening_side else ""
            lines.append(
                f"  {column.index + 1}. {column.configuration_type.value:<22} "
                f"{column.width:>6.1f} x {column.height:.1f} cm{side}"
            )
        if layout.source != "derived":
            lines.append(f"Layout source: {layout.source}")

        return "\n".join(lines)

    def _draw_box(
        self, grid: list[list[str]], x1: int, y1: int, x2: int, y2: int
    ) -> None:
        grid[y1][x1] = "+"
        grid[y1][x2] = "+"
        grid[y2][x1] = "+"
        grid[y2][x2] = "+"
        for x in range(x1 + 1, x2):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1 + 1, y2):
            grid[y][x1] = "|"
            grid[y][x2] = "|"


class ConstraintsFormatter:
    """Formats the constraint set of a furniture type as a table."""

    def format(self, constraints: Constraints) -> str:
        lines = [
            f"CONSTRAINTS: {constraints.furniture_type.value}",
            "=" * 60,
            f"{'Field':<16} {'Min':>8} {'Max':>8} {'Step':>6} {'Default':>9}",
            "-" * 60,
        ]
        for name in ("width", "height", "depth", "plinth_height"):
            rng = constraints.range_for(name)
            lines.append(
                f"{name:<16} {rng.minimum:>8g} {rng.maximum:>8g} {rng.step:>6g} {rng.default:>9g}"
            )
        sections = constraints.section_count
        lines.append(
            f"{'sections':<16} {sections.minimum:>8} {sections.maximum:>8} {1:>6} {sections.default:>9}"
        )
        lines.append("-" * 60)
        lines.append(f"Minimum column width: {constraints.min_column_width:g} cm")
        lines.append(
            f"Panels: side {constraints.side_panel:g}, divider {constraints.divider:g}, "
            f"top {constraints.top_panel:g}, bottom {constraints.bottom_panel:g} cm"
        )
        lines.append(
            "Column types: " + ", ".join(t.value for t in constraints.column_types)
        )
        lines.append("Colors: " + ", ".join(c.value for c in constraints.colors))
        return "\n".join(lines)


def constraints_to_dict(constraints: Constraints) -> dict[str, Any]:
    """Serialize a constraint set for JSON output."""
    data: dict[str, Any] = {"furniture_type": constraints.furniture_type.value}
    for name in ("width", "height", "depth", "plinth_height"):
        rng = constraints.range_for(name)
        data[name] = {
            "min": rng.minimum,
            "max": rng.maximum,
            "step": rng.step,
            "default": rng.default,
        }
    sections = constraints.section_count
    data["sections"] = {
        "min": sections.minimum,
        "max": sections.maximum,
        "default": sections.default,
    }
    data["min_column_width"] = constraints.min_column_width
    data["column_types"] = [t.value for t in constraints.column_types]
    data["default_column_type"] = constraints.default_column_type.value
    data["colors"] = [c.value for c in constraints.colors]
    data["default_color"] = constraints.default_color.value
    return data


class ValidationReportFormatter:
    """Formats validation errors and warnings."""

    def format(self, result: ValidationResult) -> str:
        if result.is_valid and not result.has_warnings:
            return "Configuration is valid."
        lines: list[str] = []
        for error in result.errors:
            allowed = f" (allowed: {error.allowed})" if error.allowed is not None else ""
            lines.append(f"ERROR {error.path}: {error.message}{allowed}")
        for warning in result.warnings:
            suggestion = f" - {warning.suggestion}" if warning.suggestion else ""
            lines.append(f"WARNING {warning.path}: {warning.message}{suggestion}")
        return "\n".join(lines)


def validation_to_dict(result: ValidationResult) -> dict[str, Any]:
    return {
        "is_valid": result.is_valid,
        "errors": [
            {
                "path": e.path,
                "message": e.message,
                "code": e.code,
                "value": e.value,
                "allowed": e.allowed,
            }
            for e in result.errors
        ],
        "warnings": [
            {"path": w.path, "message": w.message, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    }


class JsonExporter:
    """Exports a configuration with its derived layout as JSON."""

    def export(
        self,
        configuration: Configuration,
        layout: SectionLayout | None,
        validation: ValidationResult | None = None,
        viewer: ViewerConfig | None = None,
        parse_result: QueryParseResult | None = None,
    ) -> str:
        """Export configuration output as JSON string."""
        data: dict[str, Any] = {
            "configuration": configuration.to_dict(),
            "layout": layout.to_dict() if layout is not None else None,
        }
        if validation is not None:
            data["validation"] = validation_to_dict(validation)
        if viewer is not None:
            data["viewer"] = viewer.to_dict()
        if parse_result is not None:
            data["issues"] = [
                {"field": issue.field, "value": issue.value, "reason": issue.reason}
                for issue in parse_result.issues
            ]
        return json.dumps(data, indent=2, default=str)
