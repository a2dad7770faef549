"""SpecKeep CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._context import CLIContext, OutputFormat
from ._project import app as context_app
from ._search import app as search_app
from ._serve import app as serve_app
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_table,
    format_yaml,
    get_error_console,
    load_services,
)
from ._show import app as show_app

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "context_app",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_yaml",
    "get_error_console",
    "load_services",
    "register_commands",
    "search_app",
    "serve_app",
    "show_app",
]


def register_commands(app: App) -> None:
    app.command(context_app)
    app.command(search_app)
    app.command(serve_app)
    app.command(show_app)
