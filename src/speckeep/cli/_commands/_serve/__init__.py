# pyright: reportUnusedCallResult=false
"""SpecKeep API server command."""

from typing import Annotated, Literal

from cyclopts import App, Parameter

app = App(name="serve", help="Run the SpecKeep API server", help_on_error=True)

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


@app.default
def serve(
    *,
    host: Annotated[
        str | None,
        Parameter(help="Bind socket to this host. Defaults to server.host."),
    ] = None,
    port: Annotated[
        int | None,
        Parameter(help="Bind socket to this port. Defaults to server.port."),
    ] = None,
    log_level: Annotated[
        LogLevel,
        Parameter(help="Uvicorn log level."),
    ] = "info",
    access_log: Annotated[
        bool,
        Parameter(help="Enable access log."),
    ] = True,
) -> None:
    """Run the SpecKeep API server using uvicorn."""
    import uvicorn

    from speckeep.cli._commands._context import CLIContext
    from speckeep.server import create_app
    from speckeep.services import build_services

    ctx = CLIContext.get_current()
    services = build_services(ctx.config)
    effective_host = host if host is not None else ctx.config.server.host
    effective_port = port if port is not None else ctx.config.server.port

    print(f"Starting SpecKeep API server on {effective_host}:{effective_port}")
    uvicorn.run(
        create_app(services),
        host=effective_host,
        port=effective_port,
        log_level=log_level,
        access_log=access_log,
    )
