"""Relationship CLI commands."""

import typer

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table
from wren_cli.core.validation import parse_id, parse_relation_type

app = typer.Typer(help="Manage relationships between models")

TYPE_HELP = "Relationship type: ONE_TO_ONE, ONE_TO_MANY, MANY_TO_ONE"


@app.command("list")
@app.command("ls", hidden=True)
def list_relations(ctx: typer.Context):
    """List all relationships in the active project."""
    with open_client(ctx) as client:
        relations = client.modeling.list_relations()

    if json_mode(ctx):
        emit_json(relations)
        return

    if not relations:
        console.print("[yellow]No relationships found[/yellow]")
        return

    table = make_table("ID", "TYPE", "FROM", "TO")
    for relation in relations:
        add_row(
            table,
            relation.relation_id,
            relation.type,
            f"{relation.from_model_display_name}.{relation.from_column_display_name}",
            f"{relation.to_model_display_name}.{relation.to_column_display_name}",
        )
    console.print(table)


@app.command("create")
def create_relation(
    ctx: typer.Context,
    from_model: str = typer.Option(..., "--from-model", help="Source model ID"),
    from_column: str = typer.Option(..., "--from-column", help="Source column ID"),
    to_model: str = typer.Option(..., "--to-model", help="Target model ID"),
    to_column: str = typer.Option(..., "--to-column", help="Target column ID"),
    relation_type: str = typer.Option(..., "--type", help=TYPE_HELP),
):
    """Create a relationship between two model columns."""
    from_model_id = parse_id(from_model, "from-model")
    from_column_id = parse_id(from_column, "from-column")
    to_model_id = parse_id(to_model, "to-model")
    to_column_id = parse_id(to_column, "to-column")
    rel_type = parse_relation_type(relation_type)

    with open_client(ctx) as client:
        client.modeling.create_relation(
            from_model_id, from_column_id, to_model_id, to_column_id, rel_type
        )

    if json_mode(ctx):
        emit_json(
            {
                "created": True,
                "fromModelId": from_model_id,
                "fromColumnId": from_column_id,
                "toModelId": to_model_id,
                "toColumnId": to_column_id,
                "type": rel_type.value,
            }
        )
    else:
        console.print("[green]Relationship created[/green]")


@app.command("update")
def update_relation(
    ctx: typer.Context,
    relation_id: str = typer.Argument(..., help="Relation ID"),
    relation_type: str = typer.Option(..., "--type", help=TYPE_HELP),
):
    """Change the type of a relationship."""
    rid = parse_id(relation_id, "relation")
    rel_type = parse_relation_type(relation_type)

    with open_client(ctx) as client:
        client.modeling.update_relation(rid, rel_type)

    if json_mode(ctx):
        emit_json({"updated": True, "id": rid, "type": rel_type.value})
    else:
        console.print(f"[green]Updated relation {rid} to {rel_type.value}[/green]")


@app.command("delete")
def delete_relation(
    ctx: typer.Context,
    relation_id: str = typer.Argument(..., help="Relation ID"),
):
    """Delete a relationship."""
    rid = parse_id(relation_id, "relation")
    with open_client(ctx) as client:
        client.modeling.delete_relation(rid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": rid})
    else:
        console.print(f"[green]Deleted relation {rid}[/green]")
