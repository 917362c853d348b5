"""Model CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table, print_plain, truncate
from wren_cli.core.validation import parse_id
from wren_cli.models import DetailedModel, FieldSummary

app = typer.Typer(help="Inspect the models of the active project")


def _yes(flag: bool) -> str:
    return "yes" if flag else ""


@app.command("list")
@app.command("ls", hidden=True)
def list_models(ctx: typer.Context):
    """List all models with field counts."""
    with open_client(ctx) as client:
        models = client.modeling.list_models()

    if json_mode(ctx):
        emit_json(models)
        return

    if not models:
        console.print("[yellow]No models found in this project[/yellow]")
        return

    table = make_table("ID", "NAME", "SOURCE TABLE", "FIELDS", "CACHED", "DESCRIPTION")
    for model in models:
        fields = str(len(model.fields))
        if model.calculated_fields:
            fields = f"{len(model.fields)} (+{len(model.calculated_fields)} calc)"
        add_row(
            table,
            str(model.id),
            model.display_name,
            model.source_table_name,
            fields,
            "yes" if model.cached else "no",
            truncate(model.description or "", 50) or "-",
        )
    console.print(table)


def _print_model(model: DetailedModel) -> None:
    header = [
        ("Model", model.display_name),
        ("Reference", model.reference_name),
        ("Source Table", model.source_table_name),
        ("Ref SQL", model.ref_sql),
        ("Primary Key", model.primary_key),
        ("Description", model.description),
    ]
    for label, value in header:
        if value:
            console.print(f"[bold]{label}:[/bold] {escape(value)}", highlight=False)

    cached = "no"
    if model.cached:
        cached = "yes" if not model.refresh_time else f"yes (refresh: {model.refresh_time})"
    console.print(f"[bold]Cached:[/bold] {escape(cached)}", highlight=False)

    if model.fields:
        table = make_table(
            "NAME", "TYPE", "SOURCE COLUMN", "NOT NULL", title=f"Fields ({len(model.fields)})"
        )
        for field in model.fields:
            add_row(
                table,
                field.display_name,
                field.type or "-",
                field.source_column_name,
                _yes(field.not_null),
            )
        console.print(table)

    if model.calculated_fields:
        table = make_table(
            "NAME", "TYPE", "SOURCE", title=f"Calculated Fields ({len(model.calculated_fields)})"
        )
        for field in model.calculated_fields:
            add_row(table, field.display_name, field.type or "-", field.source_column_name)
        console.print(table)

    if model.relations:
        table = make_table(
            "NAME", "TYPE", "FROM", "TO", title=f"Relationships ({len(model.relations)})"
        )
        for relation in model.relations:
            add_row(
                table,
                relation.name,
                relation.type,
                f"model:{relation.from_model_id}.col:{relation.from_column_id}",
                f"model:{relation.to_model_id}.col:{relation.to_column_id}",
            )
        console.print(table)


@app.command("describe")
def describe_model(
    ctx: typer.Context,
    model_id: str = typer.Argument(..., help="Model ID"),
):
    """Show a model with its fields, calculated fields and relationships."""
    mid = parse_id(model_id, "model")
    with open_client(ctx) as client:
        model = client.modeling.get_model(mid)

    if json_mode(ctx):
        emit_json(model)
    else:
        _print_model(model)


@app.command("fields")
def model_fields(
    ctx: typer.Context,
    model_id: str = typer.Argument(..., help="Model ID"),
):
    """List every field of a model, calculated ones included."""
    mid = parse_id(model_id, "model")
    with open_client(ctx) as client:
        model = client.modeling.get_model(mid)

    rows = FieldSummary.rows_for(model)
    if json_mode(ctx):
        emit_json(rows)
        return

    if not rows:
        print_plain(f'Model "{model.display_name}" has no fields.')
        return

    table = make_table(
        "NAME", "TYPE", "SOURCE COLUMN", "NOT NULL", "CALCULATED",
        title=f"Fields for model: {escape(model.display_name)}",
    )
    for row in rows:
        add_row(
            table,
            row.name,
            row.type or "-",
            row.source_column,
            _yes(row.not_null),
            _yes(row.calculated),
        )
    console.print(table)

    calculated = sum(1 for row in rows if row.calculated)
    summary = f"Total: {len(rows)} fields"
    if calculated:
        summary += f" ({calculated} calculated)"
    print_plain(summary)
