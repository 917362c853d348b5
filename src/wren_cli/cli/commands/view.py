"""View CLI commands."""

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

app = typer.Typer(help="Manage saved views")


@app.command("list")
@app.command("ls", hidden=True)
def list_views(ctx: typer.Context):
    """List all views in the active project."""
    with open_client(ctx) as client:
        views = client.modeling.list_views()

    if json_mode(ctx):
        emit_json(views)
        return

    if not views:
        console.print("[yellow]No views found in this project[/yellow]")
        return

    table = make_table("ID", "NAME", "DISPLAY NAME", "STATEMENT")
    for view in views:
        add_row(table, view.id, view.name, view.display_name, truncate(view.statement, 60))
    console.print(table)


@app.command("show")
def show_view(
    ctx: typer.Context,
    view_id: str = typer.Argument(..., help="View ID"),
):
    """Show a view and its SQL statement."""
    vid = parse_id(view_id, "view")
    with open_client(ctx) as client:
        view = client.modeling.get_view(vid)

    if json_mode(ctx):
        emit_json(view)
        return

    console.print(f"[bold]ID:[/bold]           {view.id}", highlight=False)
    console.print(f"[bold]Name:[/bold]         {escape(view.name)}", highlight=False)
    if view.display_name:
        console.print(f"[bold]Display Name:[/bold] {escape(view.display_name)}", highlight=False)
    console.print("[bold]Statement:[/bold]")
    print_plain(indent_sql(view.statement))


@app.command("create")
def create_view(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Name for the new view"),
    response_id: str = typer.Option(..., "--response-id", help="Thread response to save as a view"),
):
    """Create a view from a thread response."""
    rid = parse_id(response_id, "response")
    with open_client(ctx) as client:
        view = client.modeling.create_view(name, rid)

    if json_mode(ctx):
        emit_json(view)
    else:
        console.print(
            f'[green]Created view "{escape(view.name)}" (ID: {view.id})[/green]', highlight=False
        )


@app.command("delete")
def delete_view(
    ctx: typer.Context,
    view_id: str = typer.Argument(..., help="View ID"),
):
    """Delete a view."""
    vid = parse_id(view_id, "view")
    with open_client(ctx) as client:
        client.modeling.delete_view(vid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": vid})
    else:
        console.print(f"[green]Deleted view {vid}[/green]")
