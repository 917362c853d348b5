"""Project-scoped API key CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.commands.api_key import key_row, print_secret
from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table
from wren_cli.config import CLIConfig
from wren_cli.core.exceptions import InputValidationError
from wren_cli.core.validation import parse_id

app = typer.Typer(help="Manage API keys scoped to a single project")

NO_PROJECT_ID = "no project ID specified; use --project-id or set via 'wren project use <id>'"

ProjectIdOption = typer.Option(
    None, "--project-id", help="Project ID (defaults to the active project)"
)


def _explicit_id(value: str | None) -> int | None:
    return parse_id(value, "project") if value is not None else None


def _project_id(explicit: int | None, cfg: CLIConfig) -> int:
    if explicit is not None:
        return explicit
    if cfg.project_id:
        return parse_id(cfg.project_id, "project")
    raise InputValidationError(NO_PROJECT_ID)


@app.command("list")
@app.command("ls", hidden=True)
def list_project_api_keys(
    ctx: typer.Context,
    project_id: str | None = ProjectIdOption,
):
    """List the API keys of a project."""
    explicit = _explicit_id(project_id)
    cfg = CLIConfig.load()
    with open_client(ctx, cfg, needs_project=False) as client:
        pid = _project_id(explicit, cfg)
        keys = client.keys.list_project_api_keys(pid)

    if json_mode(ctx):
        emit_json(keys)
        return

    if not keys:
        console.print(f"[yellow]No project API keys found for project {pid}[/yellow]")
        return

    table = make_table("ID", "NAME", "KEY PREFIX", "PROJECT", "CREATED", "LAST USED", "STATUS")
    for key in keys:
        row = key_row(key)
        row.insert(3, str(key.project_id))
        add_row(table, *row)
    console.print(table)


@app.command("create")
def create_project_api_key(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new key"),
    project_id: str | None = ProjectIdOption,
):
    """Create a project API key. The secret is shown only once."""
    explicit = _explicit_id(project_id)
    cfg = CLIConfig.load()
    with open_client(ctx, cfg, needs_project=False) as client:
        pid = _project_id(explicit, cfg)
        created = client.keys.create_project_api_key(pid, name)

    if json_mode(ctx):
        emit_json(created)
        return

    key = created.key
    console.print(
        f'[green]Created project API key "{escape(key.name)}" '
        f"(ID: {key.id}, Project: {key.project_id or pid})[/green]",
        highlight=False,
    )
    print_secret(created.secret_key)


@app.command("revoke")
def revoke_project_api_key(
    ctx: typer.Context,
    key_id: str = typer.Argument(..., help="Project API key ID"),
    project_id: str | None = ProjectIdOption,
):
    """Revoke a project API key."""
    kid = parse_id(key_id, "key")
    explicit = _explicit_id(project_id)
    cfg = CLIConfig.load()
    with open_client(ctx, cfg, needs_project=False) as client:
        pid = _project_id(explicit, cfg)
        client.keys.revoke_project_api_key(kid, pid)

    if json_mode(ctx):
        emit_json({"revoked": True, "id": kid, "projectId": pid})
    else:
        console.print(f"[green]Revoked project API key {kid}[/green]")


@app.command("delete")
def delete_project_api_key(
    ctx: typer.Context,
    key_id: str = typer.Argument(..., help="Project API key ID"),
    project_id: str | None = ProjectIdOption,
):
    """Delete a project API key."""
    kid = parse_id(key_id, "key")
    explicit = _explicit_id(project_id)
    cfg = CLIConfig.load()
    with open_client(ctx, cfg, needs_project=False) as client:
        pid = _project_id(explicit, cfg)
        client.keys.delete_project_api_key(kid, pid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": kid, "projectId": pid})
    else:
        console.print(f"[green]Deleted project API key {kid}[/green]")
