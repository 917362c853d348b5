"""Project CLI commands."""

import logging

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table
from wren_cli.config import CLIConfig
from wren_cli.core.exceptions import InputValidationError, NotFoundError, WrenError
from wren_cli.core.validation import parse_id
from wren_cli.models import Project

logger = logging.getLogger(__name__)

app = typer.Typer(help="Manage projects")

NO_PROJECT_GIVEN = "no project specified; pass an ID or set one with: wren project use <id>"


def _resolve_project_id(explicit: int | None, cfg: CLIConfig) -> int:
    """Use the explicit ID if given, otherwise the active project."""
    if explicit is not None:
        return explicit
    if cfg.project_id:
        return parse_id(cfg.project_id, "project")
    raise InputValidationError(NO_PROJECT_GIVEN)


def _print_project(project: Project) -> None:
    rows = [
        ("Project", project.display_name),
        ("ID", str(project.id)),
        ("Data Source", project.type),
        ("Language", project.language or "-"),
        ("Timezone", project.timezone),
        ("Created", project.created_at or "-"),
        ("Updated", project.updated_at or "-"),
    ]
    for label, value in rows:
        if value:
            console.print(f"[bold]{label + ':':<12}[/bold] {escape(value)}", highlight=False)


@app.command("list")
@app.command("ls", hidden=True)
def list_projects(ctx: typer.Context):
    """List all projects. The active one is marked with *."""
    cfg = CLIConfig.load()
    with open_client(ctx, cfg, needs_project=False) as client:
        projects = client.projects.list_projects()

    if json_mode(ctx):
        emit_json(projects)
        return

    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    table = make_table(
        "ID", "NAME", "TYPE", "LANGUAGE", "TIMEZONE", title=f"Projects ({len(projects)})"
    )
    for project in projects:
        marker = " *" if cfg.project_id == str(project.id) else ""
        add_row(
            table,
            str(project.id),
            f"{project.display_name}{marker}",
            project.type or "-",
            project.language or "-",
            project.timezone or "-",
        )
    console.print(table)


@app.command("use")
def use_project(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Project ID"),
):
    """Set the active project after checking that it exists."""
    pid = parse_id(project_id, "project")
    cfg = CLIConfig.load()

    with open_client(ctx, cfg, needs_project=False) as client:
        try:
            project = client.projects.get_project(pid)
        except NotFoundError:
            raise NotFoundError(f"project {pid} not found") from None
        except WrenError as e:
            raise NotFoundError(f"project {pid} not found: {e.message}") from e

    cfg.project_id = str(pid)
    cfg.save()

    if json_mode(ctx):
        emit_json({"status": "switched", "projectId": pid, "name": project.display_name})
    else:
        console.print(
            f"[green]Switched to project: {escape(project.display_name)} (ID: {pid})[/green]",
            highlight=False,
        )


@app.command("current")
def current_project(ctx: typer.Context):
    """Show the active project."""
    cfg = CLIConfig.load()
    if not cfg.project_id:
        if json_mode(ctx):
            emit_json({"projectId": None})
        else:
            console.print("[yellow]No project selected. Use: wren project use <id>[/yellow]")
        return

    # The server lookup only enriches the output; the configured ID is enough
    project = None
    try:
        pid = parse_id(cfg.project_id, "project")
        with open_client(ctx, cfg, needs_project=False) as client:
            project = client.projects.get_project(pid)
    except WrenError as e:
        logger.debug("Project lookup failed, showing configured ID: %s", e)

    if project is None:
        if json_mode(ctx):
            emit_json({"projectId": cfg.project_id})
        else:
            console.print(f"Current project ID: {escape(cfg.project_id)}", highlight=False)
        return

    if json_mode(ctx):
        emit_json(project)
        return

    console.print(
        f"Current project: [bold]{escape(project.display_name)}[/bold] (ID: {project.id})",
        highlight=False,
    )
    if project.type:
        console.print(f"Data source:     {escape(project.type)}", highlight=False)
    if project.timezone:
        console.print(f"Timezone:        {escape(project.timezone)}", highlight=False)


@app.command("info")
def project_info(
    ctx: typer.Context,
    project_id: str | None = typer.Argument(None, help="Project ID (defaults to the active project)"),
):
    """Show details of a project."""
    explicit = parse_id(project_id, "project") if project_id is not None else None
    cfg = CLIConfig.load()
    pid = _resolve_project_id(explicit, cfg)
    with open_client(ctx, cfg, needs_project=False) as client:
        project = client.projects.get_project(pid)

    if json_mode(ctx):
        emit_json(project)
    else:
        _print_project(project)


@app.command("create")
def create_project(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Display name of the new project"),
):
    """Create a new project."""
    with open_client(ctx, needs_project=False) as client:
        project = client.projects.create_project(name)

    if json_mode(ctx):
        emit_json(project)
    else:
        console.print(
            f'[green]Created project "{escape(project.display_name)}" (ID: {project.id})[/green]',
            highlight=False,
        )


@app.command("update")
def update_project(
    ctx: typer.Context,
    project_id: str | None = typer.Argument(None, help="Project ID (defaults to the active project)"),
    name: str | None = typer.Option(None, "--name", help="New display name"),
    language: str | None = typer.Option(None, "--language", help="New language"),
    timezone: str | None = typer.Option(None, "--timezone", help="New timezone"),
):
    """Update a project's name, language or timezone."""
    if not (name or language or timezone):
        raise InputValidationError("specify at least one of --name, --language, or --timezone")
    explicit = parse_id(project_id, "project") if project_id is not None else None

    cfg = CLIConfig.load()
    pid = _resolve_project_id(explicit, cfg)
    with open_client(ctx, cfg, needs_project=False) as client:
        project = client.projects.update_project(
            pid, display_name=name or None, language=language or None, timezone=timezone or None
        )

    if json_mode(ctx):
        emit_json(project)
    else:
        console.print(
            f'[green]Updated project "{escape(project.display_name)}" (ID: {project.id})[/green]',
            highlight=False,
        )


@app.command("delete")
def delete_project(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Project ID"),
):
    """Delete a project."""
    pid = parse_id(project_id, "project")
    with open_client(ctx, needs_project=False) as client:
        client.projects.delete_project(pid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": pid})
    else:
        console.print(f"[green]Deleted project {pid}[/green]")
