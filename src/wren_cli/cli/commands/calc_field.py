"""Calculated field CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table
from wren_cli.core.types import CalculatedExpression
from wren_cli.core.validation import parse_expression, parse_id, parse_lineage

app = typer.Typer(help="Manage calculated fields on models")

EXPRESSION_HELP = "Expression function, one of: " + ", ".join(e.value for e in CalculatedExpression)
LINEAGE_HELP = "Comma-separated column IDs the expression is applied over, e.g. 12,34"


@app.command("list")
@app.command("ls", hidden=True)
def list_calculated_fields(
    ctx: typer.Context,
    model_id: str = typer.Argument(..., help="Model ID"),
):
    """List the calculated fields of a model."""
    mid = parse_id(model_id, "model")
    with open_client(ctx) as client:
        fields = client.modeling.list_calculated_fields(mid)

    if json_mode(ctx):
        emit_json(fields)
        return

    if not fields:
        console.print("[yellow]No calculated fields found on this model[/yellow]")
        return

    table = make_table("ID", "NAME", "TYPE", "EXPRESSION", "SOURCE")
    for field in fields:
        add_row(
            table,
            field.id,
            field.display_name,
            field.type or "-",
            field.expression or "-",
            field.source_column_name or "-",
        )
    console.print(table)


@app.command("create")
def create_calculated_field(
    ctx: typer.Context,
    model_id: str = typer.Option(..., "--model", help="Model ID"),
    name: str = typer.Option(..., "--name", help="Name of the calculated field"),
    expression: str = typer.Option(..., "--expression", help=EXPRESSION_HELP),
    lineage: str = typer.Option(..., "--lineage", help=LINEAGE_HELP),
):
    """Add a calculated field to a model."""
    mid = parse_id(model_id, "model")
    expr = parse_expression(expression)
    column_ids = parse_lineage(lineage)

    with open_client(ctx) as client:
        client.modeling.create_calculated_field(mid, name, expr, column_ids)

    if json_mode(ctx):
        emit_json(
            {
                "created": True,
                "modelId": mid,
                "name": name,
                "expression": expr.value,
                "lineage": column_ids,
            }
        )
    else:
        console.print(
            f'[green]Created calculated field "{escape(name)}" on model {mid}[/green]',
            highlight=False,
        )


@app.command("update")
def update_calculated_field(
    ctx: typer.Context,
    field_id: str = typer.Argument(..., help="Calculated field ID"),
    name: str = typer.Option(..., "--name", help="New name of the calculated field"),
    expression: str = typer.Option(..., "--expression", help=EXPRESSION_HELP),
    lineage: str = typer.Option(..., "--lineage", help=LINEAGE_HELP),
):
    """Replace the name, expression and lineage of a calculated field."""
    fid = parse_id(field_id, "calculated field")
    expr = parse_expression(expression)
    column_ids = parse_lineage(lineage)

    with open_client(ctx) as client:
        client.modeling.update_calculated_field(fid, name, expr, column_ids)

    if json_mode(ctx):
        emit_json(
            {
                "updated": True,
                "id": fid,
                "name": name,
                "expression": expr.value,
                "lineage": column_ids,
            }
        )
    else:
        console.print(f"[green]Updated calculated field {fid}[/green]")


@app.command("delete")
def delete_calculated_field(
    ctx: typer.Context,
    field_id: str = typer.Argument(..., help="Calculated field ID"),
):
    """Delete a calculated field."""
    fid = parse_id(field_id, "calculated field")
    with open_client(ctx) as client:
        client.modeling.delete_calculated_field(fid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": fid})
    else:
        console.print(f"[green]Deleted calculated field {fid}[/green]")


@app.command("validate")
def validate_calculated_field(
    ctx: typer.Context,
    model_id: str = typer.Option(..., "--model", help="Model ID"),
    name: str = typer.Option(..., "--name", help="Name to check"),
    column_id: str | None = typer.Option(
        None, "--column", help="ID of the field being renamed, if any"
    ),
):
    """Check whether a calculated-field name is available on a model."""
    mid = parse_id(model_id, "model")
    cid = parse_id(column_id, "column") if column_id is not None else None

    with open_client(ctx) as client:
        result = client.modeling.validate_calculated_field(name, mid, cid)

    if json_mode(ctx):
        emit_json(result)
    elif result.valid:
        console.print(
            f'[green]Name "{escape(name)}" is valid for model {mid}[/green]', highlight=False
        )
    else:
        console.print(
            f'[red]Name "{escape(name)}" is invalid: {escape(result.message or "")}[/red]',
            highlight=False,
        )
