"""API history CLI commands."""

import json

import typer

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table, print_plain
from wren_cli.models import ApiHistoryFilter, ApiHistoryItem
from wren_cli.services.keys import DEFAULT_HISTORY_LIMIT

app = typer.Typer(help="Inspect the log of API calls")


def _duration(item: ApiHistoryItem) -> str:
    return f"{item.duration_ms}ms" if item.duration_ms else "-"


def _short_thread(thread_id: str | None) -> str:
    if not thread_id:
        return "-"
    return thread_id[:8] + "..." if len(thread_id) > 8 else thread_id


def _payload(value: object) -> str:
    text = json.dumps(value, indent=2, ensure_ascii=False)
    return "\n".join("  " + line for line in text.splitlines())


def _print_detailed(items: list[ApiHistoryItem]) -> None:
    for index, item in enumerate(items):
        if index:
            print_plain("---")
        print_plain(f"ID:        {item.id}")
        print_plain(f"Type:      {item.api_type}")
        print_plain(f"Status:    {item.status_code if item.status_code is not None else '-'}")
        if item.duration_ms:
            print_plain(f"Duration:  {item.duration_ms}ms")
        if item.thread_id:
            print_plain(f"Thread:    {item.thread_id}")
        print_plain(f"Time:      {item.created_at}")
        if item.request_payload is not None:
            print_plain("Request:")
            print_plain(_payload(item.request_payload))
        if item.response_payload is not None:
            print_plain("Response:")
            print_plain(_payload(item.response_payload))


@app.command("list")
@app.command("ls", hidden=True)
def list_history(
    ctx: typer.Context,
    api_type: str | None = typer.Option(
        None, "--type", help="Filter by API type, e.g. GENERATE_SQL or RUN_SQL"
    ),
    status: int | None = typer.Option(None, "--status", help="Filter by HTTP status code"),
    thread: str | None = typer.Option(None, "--thread", help="Filter by thread ID"),
    start_date: str | None = typer.Option(None, "--start-date", help="Start date (ISO 8601)"),
    end_date: str | None = typer.Option(None, "--end-date", help="End date (ISO 8601)"),
    offset: int = typer.Option(0, "--offset", min=0, help="Pagination offset"),
    limit: int = typer.Option(DEFAULT_HISTORY_LIMIT, "--limit", min=1, help="Page size"),
    detailed: bool = typer.Option(
        False, "--verbose", help="Show request and response payloads"
    ),
):
    """List API calls, newest first."""
    history_filter = None
    if api_type or status or thread or start_date or end_date:
        history_filter = ApiHistoryFilter(
            api_type=api_type,
            status_code=status,
            thread_id=thread,
            start_date=start_date,
            end_date=end_date,
        )

    with open_client(ctx, needs_project=False) as client:
        page = client.keys.api_history(history_filter, offset=offset, limit=limit)

    if json_mode(ctx):
        emit_json(page)
        return

    if not page.items:
        console.print("[yellow]No API history entries found[/yellow]")
        return

    console.print(
        f"[bold]API History ({len(page.items)} of {page.total} total)[/bold]", highlight=False
    )
    if detailed:
        _print_detailed(page.items)
    else:
        table = make_table("TYPE", "STATUS", "DURATION", "THREAD", "TIME")
        for item in page.items:
            add_row(
                table,
                item.api_type,
                item.status_code if item.status_code is not None else "-",
                _duration(item),
                _short_thread(item.thread_id),
                item.created_at[:19],
            )
        console.print(table)

    if page.has_more:
        print_plain(f"\n(more results available; use --offset {offset + limit} to see next page)")
