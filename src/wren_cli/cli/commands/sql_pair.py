"""SQL pair CLI commands.

A SQL pair maps a question to known-good SQL that the generator can use as
a reference for similar questions.
"""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table, print_plain, truncate
from wren_cli.core.exceptions import InputValidationError
from wren_cli.core.validation import parse_id
from wren_cli.models import SqlPairCreate, SqlPairUpdate

app = typer.Typer(help="Manage knowledge SQL pairs")


@app.command("list")
@app.command("ls", hidden=True)
def list_sql_pairs(ctx: typer.Context):
    """List all SQL pairs."""
    with open_client(ctx) as client:
        pairs = client.knowledge.list_sql_pairs()

    if json_mode(ctx):
        emit_json(pairs)
        return

    if not pairs:
        console.print("[yellow]No SQL pairs found[/yellow]")
        return

    table = make_table("ID", "QUESTION", "SQL")
    for pair in pairs:
        add_row(
            table,
            pair.id,
            truncate(pair.question, 45),
            truncate(pair.sql.replace("\n", " "), 50),
        )
    console.print(table)


@app.command("create")
def create_sql_pair(
    ctx: typer.Context,
    question: str = typer.Option(..., "--question", "-q", help="Natural-language question"),
    sql: str = typer.Option(..., "--sql", "-s", help="SQL answering the question"),
):
    """Create a SQL pair. The server validates the SQL before saving it."""
    with open_client(ctx) as client:
        pair = client.knowledge.create_sql_pair(SqlPairCreate(question=question, sql=sql))

    if json_mode(ctx):
        emit_json(pair)
    else:
        console.print(f"[green]Created SQL pair {pair.id}[/green]")


@app.command("show")
def show_sql_pair(
    ctx: typer.Context,
    pair_id: str = typer.Argument(..., help="SQL pair ID"),
):
    """Show a SQL pair."""
    pid = parse_id(pair_id, "SQL pair")
    with open_client(ctx) as client:
        pair = client.knowledge.get_sql_pair(pid)

    if json_mode(ctx):
        emit_json(pair)
        return

    console.print(f"[bold]ID:[/bold]       {pair.id}", highlight=False)
    console.print(f"[bold]Question:[/bold] {escape(pair.question)}", highlight=False)
    console.print("[bold]SQL:[/bold]")
    print_plain(pair.sql)
    if pair.created_at:
        console.print(f"[bold]Created:[/bold]  {escape(pair.created_at)}", highlight=False)
    if pair.updated_at:
        console.print(f"[bold]Updated:[/bold]  {escape(pair.updated_at)}", highlight=False)


@app.command("update")
def update_sql_pair(
    ctx: typer.Context,
    pair_id: str = typer.Argument(..., help="SQL pair ID"),
    question: str | None = typer.Option(None, "--question", "-q", help="New question"),
    sql: str | None = typer.Option(None, "--sql", "-s", help="New SQL"),
):
    """Update a SQL pair's question and/or SQL."""
    pid = parse_id(pair_id, "SQL pair")
    if question is None and sql is None:
        raise InputValidationError("no changes specified; use --question or --sql")

    with open_client(ctx) as client:
        pair = client.knowledge.update_sql_pair(pid, SqlPairUpdate(question=question, sql=sql))

    if json_mode(ctx):
        emit_json(pair)
    else:
        console.print(f"[green]Updated SQL pair {pair.id}[/green]")


@app.command("delete")
def delete_sql_pair(
    ctx: typer.Context,
    pair_id: str = typer.Argument(..., help="SQL pair ID"),
):
    pid = parse_id(pair_id, "SQL pair")
    with open_client(ctx) as client:
        client.knowledge.delete_sql_pair(pid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": pid})
    else:
        console.print(f"[green]Deleted SQL pair {pid}[/green]")
