"""Config CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode
from wren_cli.cli.output import console, emit_json, print_plain
from wren_cli.config import CLIConfig, config_path, mask_secret
from wren_cli.config.store import CONFIG_KEYS

app = typer.Typer(help="View and manage CLI configuration")

KEYS_HELP = "Keys: endpoint, api-key, project-id"


def _shown(key: str, value: str) -> str:
    """Mask the credential whenever it is echoed back."""
    return mask_secret(value) if CONFIG_KEYS.get(key) == "api_key" else value


@app.command("get")
def get_config(
    ctx: typer.Context,
    key: str | None = typer.Argument(None, help=KEYS_HELP),
):
    """Display all configuration values, or a single key."""
    cfg = CLIConfig.load()

    if key is not None:
        value = _shown(key, cfg.get(key))
        if json_mode(ctx):
            emit_json({key: value})
        else:
            print_plain(value)
        return

    display = cfg.display()
    if json_mode(ctx):
        emit_json(display)
        return

    console.print(f"Current configuration ({config_path()}):", markup=False, highlight=False)
    console.print()
    for name, value in display.items():
        console.print(f"  [bold]{name + ':':<12}[/bold] {escape(value) or '(not set)'}", highlight=False)


@app.command("set")
def set_config(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEYS_HELP),
    value: str = typer.Argument(..., help="New value"),
):
    """Set a configuration value."""
    cfg = CLIConfig.load()
    cfg.set(key, value)
    cfg.save()

    shown = _shown(key, value)
    if json_mode(ctx):
        emit_json({"status": "saved", key: shown})
    else:
        console.print(f"[green]Set {escape(key)} = {escape(shown)}[/green]", highlight=False)


@app.command("path")
def show_path(ctx: typer.Context):
    """Show the path to the configuration file."""
    path = config_path()
    if json_mode(ctx):
        emit_json({"path": str(path), "exists": path.exists()})
        return

    console.print(f"[blue]Config file:[/blue] {escape(str(path))}")
    if path.exists():
        console.print("[green]Status: File exists[/green]")
    else:
        console.print("[yellow]Status: File not found[/yellow]")
