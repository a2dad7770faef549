"""Command-line interface for SpecKeep."""

from ._app import create_app, main
from ._commands import CLIContext

__all__ = ["CLIContext", "create_app", "main"]
