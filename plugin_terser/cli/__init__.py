"""Command-line interface for plugin-terser."""

from .main import app, main

__all__ = ["app", "main"]
