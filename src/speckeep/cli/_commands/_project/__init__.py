# pyright: reportUnusedCallResult=false
"""Project context command."""

from typing import Annotated

from cyclopts import App, Parameter

from speckeep.cli._commands._context import OutputFormat
from speckeep.cli._commands._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_table,
    format_yaml,
    load_services,
)
from speckeep.exceptions import StoreUnavailableError
from speckeep.spec import ProjectContext

app = App(name="context", help="Summarize the project's specs", help_on_error=True)


def _context_data(context: ProjectContext) -> FormattableData:
    return {
        "totalSpecs": context.total_specs,
        "byStatus": {status.value: n for status, n in context.by_status.items()},
        "recentlyUpdated": list(context.recently_updated),
        "relationships": [
            {
                "specId": r.spec_id,
                "relatedSpecId": r.related_spec_id,
                "relationKind": r.relation_kind.value,
            }
            for r in sorted(context.relationships)
        ],
    }


def _print_table(context: ProjectContext) -> None:
    print(f"Total specs: {context.total_specs}")
    print()
    print(
        format_table(
            ["Status", "Count"],
            [[status.value, str(n)] for status, n in context.by_status.items()],
        )
    )
    if context.recently_updated:
        print("Recently updated:")
        for spec_id in context.recently_updated:
            print(f"  {spec_id}")
    if context.relationships:
        print()
        print(
            format_table(
                ["Spec", "Relation", "Related spec"],
                [
                    [r.spec_id, r.relation_kind.value, r.related_spec_id]
                    for r in sorted(context.relationships)
                ],
            )
        )


@app.default
def context(
    *,
    format: Annotated[  # noqa: A002
        OutputFormat,
        Parameter(help="Output format."),
    ] = OutputFormat.TABLE,
) -> None:
    """Print status counts, recently updated specs and relationships.

    Args:
        format: Output format.
    """
    services = load_services()
    try:
        project_context = services.aggregator.compute_context()
    except StoreUnavailableError as e:
        exit_with_error(str(e), ExitCode.STORE_UNAVAILABLE)

    if format is OutputFormat.TABLE:
        _print_table(project_context)
    elif format is OutputFormat.JSON:
        print(format_json(_context_data(project_context)))
    else:
        print(format_yaml(_context_data(project_context)).rstrip())
