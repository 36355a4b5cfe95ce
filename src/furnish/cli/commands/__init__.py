"""CLI command implementations for the furnish application.

This package contains subcommand groups for the furnish CLI, including:
- presets: Browse ready-made product presets
"""

from furnish.cli.commands.presets import presets_app

__all__ = ["presets_app"]
