# pyright: reportUnusedCallResult=false
"""Full-text search command."""

from typing import Annotated

from cyclopts import App, Parameter

from speckeep.cli._commands._context import OutputFormat
from speckeep.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_table,
    format_yaml,
    load_services,
)
from speckeep.exceptions import InvalidQueryError
from speckeep.spec import SearchOptions, SpecStatus

app = App(name="search", help="Search specs by free text", help_on_error=True)


@app.default
def search(
    query: str,
    /,
    *,
    limit: Annotated[
        int | None,
        Parameter(help="Maximum number of results. Defaults to search.default_limit."),
    ] = None,
    status: Annotated[
        SpecStatus | None,
        Parameter(help="Only return specs with this status."),
    ] = None,
    format: Annotated[  # noqa: A002
        OutputFormat,
        Parameter(help="Output format."),
    ] = OutputFormat.TABLE,
) -> None:
    """Search specs and print ranked results.

    Args:
        query: Free-text query.
        limit: Maximum number of results.
        status: Only return specs with this status.
        format: Output format.
    """
    services = load_services()
    options = SearchOptions(
        limit=limit if limit is not None else services.query_engine.default_limit,
        status_filter=status,
    )
    try:
        results = services.query_engine.search(query, options)
    except InvalidQueryError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    if format is OutputFormat.TABLE:
        if not results:
            print("No results.")
            return
        rows = [
            [r.spec_id, f"{r.score:.3f}", " ".join(r.snippet.split())]
            for r in results
        ]
        print(format_table(["ID", "Score", "Snippet"], rows))
        return

    data = {
        "query": query,
        "results": [
            {
                "specId": r.spec_id,
                "score": r.score,
                "snippet": r.snippet,
                "highlightSpans": [list(span) for span in r.highlight_spans],
            }
            for r in results
        ],
    }
    if format is OutputFormat.JSON:
        print(format_json(data))
    else:
        print(format_yaml(data).rstrip())
