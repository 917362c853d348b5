"""Organization API key CLI commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import add_row, console, emit_json, make_table, short_date
from wren_cli.core.validation import parse_id
from wren_cli.models import ApiKey

app = typer.Typer(help="Manage organization API keys")

SECRET_WARNING = "Save this key now; it will not be shown again."


def print_secret(secret: str) -> None:
    """Show a one-time secret with the save-it-now warning."""
    console.print()
    console.print(f"  [bold]Secret Key:[/bold] {escape(secret)}", highlight=False)
    console.print()
    console.print(f"  [yellow]{SECRET_WARNING}[/yellow]")


def key_row(key: ApiKey) -> list[str]:
    return [
        str(key.id),
        key.name,
        key.secret_key_masked,
        short_date(key.created_at),
        short_date(key.last_used_at),
        key.status,
    ]


@app.command("list")
@app.command("ls", hidden=True)
def list_api_keys(ctx: typer.Context):
    """List the organization's API keys. Secrets are shown masked."""
    with open_client(ctx, needs_project=False) as client:
        keys = client.keys.list_api_keys()

    if json_mode(ctx):
        emit_json(keys)
        return

    if not keys:
        console.print("[yellow]No API keys found[/yellow]")
        return

    table = make_table("ID", "NAME", "KEY PREFIX", "CREATED", "LAST USED", "STATUS")
    for key in keys:
        add_row(table, *key_row(key))
    console.print(table)


@app.command("create")
def create_api_key(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new key"),
):
    """Create an API key. The secret is shown only once."""
    with open_client(ctx, needs_project=False) as client:
        created = client.keys.create_api_key(name)

    if json_mode(ctx):
        emit_json(created)
        return

    console.print(
        f'[green]Created API key "{escape(created.key.name)}" (ID: {created.key.id})[/green]',
        highlight=False,
    )
    print_secret(created.secret_key)


@app.command("revoke")
def revoke_api_key(
    ctx: typer.Context,
    key_id: str = typer.Argument(..., help="API key ID"),
):
    """Revoke an API key. It stays listed but can no longer authenticate."""
    kid = parse_id(key_id, "key")
    with open_client(ctx, needs_project=False) as client:
        client.keys.revoke_api_key(kid)

    if json_mode(ctx):
        emit_json({"revoked": True, "id": kid})
    else:
        console.print(f"[green]Revoked API key {kid}[/green]")


@app.command("delete")
def delete_api_key(
    ctx: typer.Context,
    key_id: str = typer.Argument(..., help="API key ID"),
):
    """Delete an API key."""
    kid = parse_id(key_id, "key")
    with open_client(ctx, needs_project=False) as client:
        client.keys.delete_api_key(kid)

    if json_mode(ctx):
        emit_json({"deleted": True, "id": kid})
    else:
        console.print(f"[green]Deleted API key {kid}[/green]")
