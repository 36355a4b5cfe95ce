"""CLI entry point for the furnish application."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from furnish.application.settings import ConfigError, EngineSettings, load_settings
from furnish.application.store import ConfigurationStore
from furnish.cli.commands import presets_app
from furnish.domain.constraints import DimensionPolicy, constraints_for
from furnish.domain.errors import UnknownFurnitureType
from furnish.domain.value_objects import FurnitureType
from furnish.domain.viewer import get_viewer_config, project_viewer
from furnish.infrastructure import (
    ConstraintsFormatter,
    JsonExporter,
    LayoutDiagramFormatter,
    ValidationReportFormatter,
    constraints_to_dict,
)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Output formats supported by the layout commands."""

    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="furnish",
    help="Configure parametric furniture and derive column layouts.",
)

app.add_typer(presets_app, name="presets")


def _settings(ctx: typer.Context) -> EngineSettings:
    settings = ctx.obj if isinstance(ctx.obj, EngineSettings) else None
    return settings or EngineSettings()


def _furniture_type(value: str) -> FurnitureType:
    try:
        return FurnitureType.parse(value)
    except UnknownFurnitureType as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    settings_file: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            "-s",
            help="Path to a JSON settings file",
        ),
    ] = None,
    clamp: Annotated[
        bool,
        typer.Option("--clamp", help="Snap out-of-range dimensions into range"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure parametric furniture and derive column layouts."""
    settings = EngineSettings()
    if settings_file is not None:
        try:
            settings = load_settings(settings_file)
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
    if clamp:
        settings = settings.model_copy(update={"dimension_policy": DimensionPolicy.CLAMP})

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@app.command()
def constraints(
    furniture_type: Annotated[str, typer.Argument(help="Furniture type, e.g. wardrobe")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show the dimension ranges and options of a furniture type."""
    constraint_set = constraints_for(_furniture_type(furniture_type))
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(constraints_to_dict(constraint_set), indent=2))
    else:
        typer.echo(ConstraintsFormatter().format(constraint_set))


@app.command()
def layout(
    ctx: typer.Context,
    furniture_type: Annotated[str, typer.Argument(help="Furniture type, e.g. wardrobe")],
    width: Annotated[
        float | None,
        typer.Option("--width", "-W", help="Overall width in cm"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-H", help="Overall height in cm"),
    ] = None,
    depth: Annotated[
        float | None,
        typer.Option("--depth", "-D", help="Overall depth in cm"),
    ] = None,
    plinth: Annotated[
        float | None,
        typer.Option("--plinth", help="Plinth height in cm"),
    ] = None,
    sections: Annotated[
        int | None,
        typer.Option("--sections", "-n", help="Number of columns"),
    ] = None,
    columns: Annotated[
        str | None,
        typer.Option(
            "--columns",
            "-c",
            help="Comma separated column codes, left to right (e.g. DD,SDRT)",
        ),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option("--color", help="Color name or hex code"),
    ] = None,
    opening: Annotated[
        str | None,
        typer.Option("--opening", "-o", help="Opening type: push, handle or profile"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Derive the column layout of a configuration.

    Starts from the defaults of the furniture type and applies the given
    options as one edit.

    Example:
        furnish layout wardrobe --width 150 --height 210 --columns DD,SDRT
    """
    settings = _settings(ctx)
    store = ConfigurationStore(_furniture_type(furniture_type), settings=settings)

    patch: dict[str, Any] = {}
    for name, value in (
        ("width", width),
        ("height", height),
        ("depth", depth),
        ("plinth_height", plinth),
        ("selected_sections", sections),
        ("color", color),
        ("opening_type", opening),
    ):
        if value is not None:
            patch[name] = value
    if columns is not None:
        patch["columns"] = [code.strip() for code in columns.split(",") if code.strip()]
        patch.setdefault("selected_sections", len(patch["columns"]))

    if patch:
        logger.debug(f"Applying CLI edit: {patch}")
        store.update(patch)

    validation = store.last_validation
    if not validation.is_valid:
        typer.echo("Error: Configuration is invalid", err=True)
        typer.echo(ValidationReportFormatter().format(validation), err=True)
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        typer.echo(
            JsonExporter().export(
                store.configuration,
                store.layout,
                validation=validation,
                viewer=project_viewer(store.layout),
            )
        )
        return

    typer.echo(LayoutDiagramFormatter().format(store.layout, store.configuration))
    if validation.has_warnings:
        typer.echo()
        typer.echo(ValidationReportFormatter().format(validation))
    typer.echo()
    typer.echo(f"Share: ?{store.query_string}")


@app.command()
def query(
    ctx: typer.Context,
    furniture_type: Annotated[str, typer.Argument(help="Furniture type, e.g. wardrobe")],
    query_string: Annotated[str, typer.Argument(help="Shared link query string")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Open a shared link and show the configuration it restores.

    Fields that cannot be restored are reset to defaults and listed as
    warnings.
    """
    settings = _settings(ctx)
    query_text = query_string.split("?", 1)[1] if "?" in query_string else query_string
    store = ConfigurationStore.from_query(
        query_text, _furniture_type(furniture_type), settings=settings
    )

    if output_format == OutputFormat.JSON:
        issues = [
            {"field": issue.field, "value": issue.value, "reason": issue.reason}
            for issue in store.query_issues
        ]
        data = json.loads(JsonExporter().export(store.configuration, store.layout))
        data["issues"] = issues
        data["query"] = store.query_string
        typer.echo(json.dumps(data, indent=2, default=str))
        return

    for issue in store.query_issues:
        typer.echo(f"Warning: {issue}", err=True)
    typer.echo(LayoutDiagramFormatter().format(store.layout, store.configuration))
    typer.echo()
    typer.echo(f"Canonical: ?{store.query_string}")


@app.command()
def viewer(
    furniture_type: Annotated[str, typer.Argument(help="Furniture type, e.g. wardrobe")],
    width: Annotated[
        float | None,
        typer.Option("--width", "-W", help="Overall width used to place the scale figure"),
    ] = None,
) -> None:
    """Print the 3D viewer camera bounds of a furniture type as JSON."""
    typer.echo(json.dumps(get_viewer_config(furniture_type, width).to_dict(), indent=2))


if __name__ == "__main__":
    app()
