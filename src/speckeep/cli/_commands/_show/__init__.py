# pyright: reportUnusedCallResult=false
"""Single spec display command."""

from typing import Annotated

from cyclopts import App, Parameter

from speckeep.cli._commands._context import OutputFormat
from speckeep.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_yaml,
)
from speckeep.exceptions import SpecNotFoundError, StoreUnavailableError

app = App(name="show", help="Show a single spec", help_on_error=True)


@app.default
def show(
    spec_id: str,
    /,
    *,
    format: Annotated[  # noqa: A002
        OutputFormat,
        Parameter(help="Output format. Table prints a header and the body."),
    ] = OutputFormat.TABLE,
) -> None:
    """Show a spec by ID.

    Args:
        spec_id: The spec to show.
        format: Output format.
    """
    from speckeep.cli._commands._context import CLIContext
    from speckeep.services import build_services

    ctx = CLIContext.get_current()
    services = build_services(ctx.config, logger=ctx.logger)
    try:
        spec = services.store.get(spec_id)
    except SpecNotFoundError as e:
        exit_with_error(str(e), ExitCode.NOT_FOUND)
    except StoreUnavailableError as e:
        exit_with_error(str(e), ExitCode.STORE_UNAVAILABLE)

    if format is OutputFormat.TABLE:
        print(f"{spec.id}: {spec.title}")
        print(f"status: {spec.status.value}")
        print(f"updated: {spec.updated_at.isoformat()}")
        if spec.tags:
            print(f"tags: {', '.join(sorted(spec.tags))}")
        print()
        print(spec.body.rstrip())
        return

    data = {
        "id": spec.id,
        "title": spec.title,
        "status": spec.status.value,
        "tags": sorted(spec.tags),
        "updatedAt": spec.updated_at.isoformat(),
        "body": spec.body,
    }
    if format is OutputFormat.JSON:
        print(format_json(data))
    else:
        print(format_yaml(data).rstrip())
