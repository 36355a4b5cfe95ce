"""FastAPI REST API for the furniture configurator.

This module provides a REST API for browsing furniture types and presets,
editing configurations through shareable links, and adding them to a cart.

Usage:
    uvicorn furnish.web:app --reload
"""

from furnish.web.app import app, create_app

__all__ = ["app", "create_app"]
