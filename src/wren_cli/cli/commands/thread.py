"""Conversation thread CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import (
    add_row,
    console,
    emit_json,
    indent_sql,
    make_table,
    print_plain,
    truncate,
)
from wren_cli.core.validation import parse_id

app = typer.Typer(help="Browse and manage conversation threads")


@app.command("list")
@app.command("ls", hidden=True)
def list_threads(ctx: typer.Context):
    """List all threads."""
    with open_client(ctx) as client:
        threads = client.threads.list_threads()

    if json_mode(ctx):
        emit_json(threads)
        return

    if not threads:
        console.print("[yellow]No threads found[/yellow]")
        return

    table = make_table("ID", "SUMMARY")
    for thread in threads:
        add_row(table, thread.id, truncate(thread.summary, 80))
    console.print(table)


@app.command("show")
def show_thread(
    ctx: typer.Context,
    thread_id: str = typer.Argument(..., help="Thread ID"),
):
    """Show a thread with every question and SQL it contains."""
    tid = parse_id(thread_id, "thread")
    with open_client(ctx) as client:
        thread = client.threads.get_thread(tid)

    if json_mode(ctx):
        emit_json(thread)
        return

    console.print(f"[bold]Thread {thread.id}[/bold]")
    console.print(f"Responses: {len(thread.responses)}", highlight=False)
    for number, response in enumerate(thread.responses, start=1):
        console.print()
        console.print(f"[cyan]--- Response {number} (ID: {response.id}) ---[/cyan]")
        print_plain(f"Q: {response.question}")
        if response.sql:
            print_plain("SQL:")
            print_plain(indent_sql(response.sql))
        else:
            print_plain("SQL: (none)")


@app.command("rename")
def rename_thread(
    ctx: typer.Context,
    thread_id: str = typer.Argument(..., help="Thread ID"),
    summary: str = typer.Argument(..., help="New summary"),
):
    """Change a thread's summary."""
    tid = parse_id(thread_id, "thread")
    with open_client(ctx) as client:
        thread = client.threads.rename_thread(tid, summary)

    if json_mode(ctx):
        emit_json(thread)
    else:
        console.print(
            f"[green]Renamed thread {thread.id}:[/green] {escape(thread.summary)}", highlight=False
        )


@app.command("delete")
def delete_thread(
    ctx: typer.Context,
    thread_id: str = typer.Argument(..., help="Thread ID"),
):
    """Delete a thread and all of its responses."""
    tid = parse_id(thread_id, "thread")
    with open_client(ctx) as client:
        client.threads.delete_thread(tid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": tid})
    else:
        console.print(f"[green]Deleted thread {tid}[/green]")
