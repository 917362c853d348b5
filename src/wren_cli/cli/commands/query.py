"""Question answering and SQL commands: ask, sql, run-sql, summary, chart.

These talk to the AI and SQL endpoints, which embed failures in the response
body. In JSON mode the body is printed as-is before a failure exits non-zero,
so scripts can still inspect it.
"""

import json
from typing import TypeVar

import typer

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import (
    add_row,
    console,
    emit_json,
    format_sql,
    make_table,
    print_hint,
    print_plain,
    progress,
)
from wren_cli.core.types import CellValue, QueryOutcome
from wren_cli.models import (
    AskRequest,
    ChartRequest,
    GenerateSQLRequest,
    RunSQLRequest,
    RunSQLResult,
    SummaryRequest,
)
from wren_cli.services.queries import DEFAULT_CHART_SAMPLE_SIZE, DEFAULT_SUMMARY_SAMPLE_SIZE

T = TypeVar("T")

NON_SQL_QUERY = "NON_SQL_QUERY"

ThreadIdOption = typer.Option(None, "--thread-id", help="Thread to continue")
LanguageOption = typer.Option(None, "--language", help="Language of the AI response")


def _finish(ctx: typer.Context, outcome: QueryOutcome[T]) -> T | None:
    """Return the payload for text rendering, or emit it in JSON mode.

    Raises the embedded failure, if any, after the JSON has been printed.
    """
    if json_mode(ctx):
        emit_json(outcome.payload)
        outcome.unwrap()
        return None
    return outcome.unwrap()


def _print_thread(thread_id: str | None) -> None:
    if thread_id:
        print_hint(f"\nThread: {thread_id}")


def ask(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question in natural language"),
    sample_size: int | None = typer.Option(
        None, "--sample-size", min=1, help="Rows used for the summary (server default if unset)"
    ),
    language: str | None = LanguageOption,
    thread_id: str | None = ThreadIdOption,
):
    """Ask a question: generate SQL, run it and summarize the answer."""
    request = AskRequest(
        question=question, sample_size=sample_size, language=language, thread_id=thread_id
    )
    with open_client(ctx) as client:
        with progress("Thinking...", enabled=not json_mode(ctx)):
            outcome = client.queries.ask(request)

    result = _finish(ctx, outcome)
    if result is None:
        return

    if result.type == NON_SQL_QUERY:
        print_plain(result.explanation or "")
        _print_thread(result.thread_id)
        return

    if result.sql:
        print_hint("\n--- SQL ---")
        print_plain(format_sql(result.sql))
    if result.summary:
        print_hint("\n--- Summary ---")
        print_plain(result.summary)
    _print_thread(result.thread_id)


def sql(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question in natural language"),
    dialect: bool = typer.Option(
        False, "--dialect", help="Return SQL in the data source's native dialect"
    ),
    language: str | None = LanguageOption,
    thread_id: str | None = ThreadIdOption,
):
    """Generate SQL for a question without running it."""
    request = GenerateSQLRequest(
        question=question,
        thread_id=thread_id,
        language=language,
        return_sql_dialect=dialect or None,
    )
    with open_client(ctx) as client:
        with progress("Generating SQL...", enabled=not json_mode(ctx)):
            outcome = client.queries.generate_sql(request)

    result = _finish(ctx, outcome)
    if result is None:
        return

    print_plain(format_sql(result.sql or ""))
    _print_thread(result.thread_id)


def _print_records(result: RunSQLResult) -> None:
    names = [column.name for column in result.columns]
    table = make_table(*names)
    for record in result.records:
        add_row(table, *(CellValue.of(record.get(name)).format() for name in names))
    console.print(table)


def run_sql(
    ctx: typer.Context,
    statement: str = typer.Argument(..., metavar="SQL", help="SQL to execute"),
    limit: int | None = typer.Option(
        None, "--limit", min=1, help="Maximum rows to return (server default if unset)"
    ),
    thread_id: str | None = ThreadIdOption,
):
    """Execute SQL against the deployed model and print the rows."""
    request = RunSQLRequest(sql=statement, thread_id=thread_id, limit=limit)
    with open_client(ctx) as client:
        outcome = client.queries.run_sql(request)

    result = _finish(ctx, outcome)
    if result is None:
        return

    if not result.columns:
        print_plain("Query executed successfully (no columns returned).")
        return

    if not result.records:
        print_plain("No rows returned.")
        print_hint("Columns: " + ", ".join(column.name for column in result.columns))
        return

    _print_records(result)

    count = f"\n{len(result.records)} row(s) returned"
    if result.total_rows and result.total_rows > len(result.records):
        count += f" (of {result.total_rows} total)"
    print_hint(count)


def summary(
    ctx: typer.Context,
    question: str = typer.Option(..., "--question", "-q", help="The question the SQL answers"),
    statement: str = typer.Option(..., "--sql", "-s", help="SQL whose result is summarized"),
    sample_size: int = typer.Option(
        DEFAULT_SUMMARY_SAMPLE_SIZE, "--sample-size", min=1, help="Rows sampled for the summary"
    ),
    language: str | None = LanguageOption,
    thread_id: str | None = ThreadIdOption,
):
    """Summarize the result of a SQL query in natural language."""
    request = SummaryRequest(
        question=question,
        sql=statement,
        sample_size=sample_size,
        language=language,
        thread_id=thread_id,
    )
    with open_client(ctx, needs_project=False) as client:
        with progress("Generating summary...", enabled=not json_mode(ctx)):
            outcome = client.queries.generate_summary(request)

    result = _finish(ctx, outcome)
    if result is None:
        return

    if not result.summary:
        print_plain("(empty summary)")
        return
    # Streamed summaries arrive with literal escape sequences
    print_plain(result.summary.replace("\\n", "\n").replace("\\t", "\t"))


def chart(
    ctx: typer.Context,
    question: str = typer.Option(..., "--question", "-q", help="The question the SQL answers"),
    statement: str = typer.Option(..., "--sql", "-s", help="SQL whose result is charted"),
    sample_size: int = typer.Option(
        DEFAULT_CHART_SAMPLE_SIZE, "--sample-size", min=1, help="Rows sampled for the chart"
    ),
    thread_id: str | None = ThreadIdOption,
):
    """Generate a Vega-Lite chart specification for a SQL query."""
    request = ChartRequest(
        question=question, sql=statement, sample_size=sample_size, thread_id=thread_id
    )
    with open_client(ctx, needs_project=False) as client:
        with progress("Generating chart...", enabled=not json_mode(ctx)):
            outcome = client.queries.generate_chart(request)

    result = _finish(ctx, outcome)
    if result is None:
        return

    if result.vega_spec is None:
        print_plain("(no chart spec generated)")
    else:
        print_plain(json.dumps(result.vega_spec, indent=2, ensure_ascii=False))
    if result.thread_id:
        print_hint(f"Thread ID: {result.thread_id}")
