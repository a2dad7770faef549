"""The command-line interface for SpecKeep."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from speckeep.config import Config, LogLevel, safe_load_config
from speckeep.utils import create_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Project context and full-text search over specification documents."


def _cli_logging(config: Config, *, verbose: bool) -> Config:
    """Quiet stderr logging to warnings unless verbose or logging to a file."""
    if verbose or config.logging.file:
        return config
    if config.logging.level in (LogLevel.ERROR, LogLevel.WARNING):
        return config
    quiet = config.logging.model_copy(update={"level": LogLevel.WARNING})
    return config.model_copy(update={"logging": quiet})


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the CLI application.

    Global options are parsed by the meta app; run it with ``app.meta(tokens)``.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="speckeep",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        verbose: Annotated[bool, Parameter(help="Log at the configured level")] = False,
    ) -> None:
        """Launch SpecKeep CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            verbose: Log at the configured level instead of warnings only.
        """
        loaded_config, config_error = safe_load_config(config_path=config)
        cli_logger = create_logger(
            _cli_logging(loaded_config, verbose=verbose).logging
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_path=config,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `speckeep` CLI."""
    app = create_app()
    app.meta()
