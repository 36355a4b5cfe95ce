"""Presets commands for listing and opening ready-made products.

This module provides the `presets` command group with subcommands for
listing bundled presets, showing a preset's derived layout and printing the
configurator link that opens it.
"""

from typing import Annotated

import typer

from furnish.application.presets import PresetManager, PresetNotFoundError
from furnish.application.store import ConfigurationStore
from furnish.domain.errors import UnknownFurnitureType
from furnish.infrastructure import LayoutDiagramFormatter, ValidationReportFormatter

presets_app = typer.Typer(
    name="presets",
    help="Browse ready-made product presets.",
)


@presets_app.command(name="list")
def list_presets(
    furniture_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only list presets of this furniture type"),
    ] = None,
) -> None:
    """List the bundled presets.

    Example:
        furnish presets list --type wardrobe
    """
    manager = PresetManager()
    try:
        presets = manager.list_presets(furniture_type)
    except UnknownFurnitureType as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not presets:
        typer.echo("No presets found.")
        return

    typer.echo("Available presets:")
    typer.echo()
    for preset in presets:
        dims = preset.details.dimensions
        typer.echo(
            f"  {preset.id:<8} {preset.type.value:<10} "
            f"{dims.width:g} x {dims.height:g} x {dims.depth:g} cm  "
            f"{len(preset.details.columns)} column(s)"
        )
    typer.echo()
    typer.echo("Use 'furnish presets show <id>' to see a preset's layout.")


@presets_app.command(name="show")
def show_preset(
    preset_id: Annotated[str, typer.Argument(help="Preset id, e.g. WR-101")],
) -> None:
    """Show the layout of a preset."""
    manager = PresetManager()
    try:
        preset = manager.get_preset(preset_id)
    except PresetNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    store = ConfigurationStore(preset.type)
    store.load_preset(preset)
    if not store.last_validation.is_valid:
        typer.echo(f"Error: Preset {preset.id} is invalid", err=True)
        typer.echo(ValidationReportFormatter().format(store.last_validation), err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{preset.id}: {preset.meta.name}")
    typer.echo(LayoutDiagramFormatter().format(store.layout, store.configuration))


@presets_app.command(name="href")
def preset_href(
    preset_id: Annotated[str, typer.Argument(help="Preset id, e.g. WR-101")],
) -> None:
    """Print the configurator link that opens a preset."""
    manager = PresetManager()
    try:
        typer.echo(manager.build_href(preset_id))
    except PresetNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
