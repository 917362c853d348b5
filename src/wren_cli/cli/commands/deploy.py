"""Deployment commands."""

import typer
from rich.markup import escape

from wren_cli.cli.common import json_mode, open_client
from wren_cli.cli.output import console, emit_json, progress

app = typer.Typer(help="Deploy the active project's semantic model")


@app.callback(invoke_without_command=True)
def deploy(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Redeploy even if nothing changed"),
):
    """Deploy the active project so model changes become queryable."""
    if ctx.invoked_subcommand is not None:
        return

    with open_client(ctx) as client:
        with progress("Deploying...", enabled=not json_mode(ctx)):
            result = client.modeling.deploy(force=force)

    if json_mode(ctx):
        emit_json(result)
        return

    console.print(f"[green]Status: {escape(result.status)}[/green]", highlight=False)
    if result.hash:
        console.print(f"Hash:   {escape(result.hash)}", highlight=False)


@app.command("status")
def deploy_status(ctx: typer.Context):
    """Show the deployed manifest hash with model, view and relationship counts."""
    with open_client(ctx, needs_project=False) as client:
        mdl = client.modeling.deployed_mdl()

    if json_mode(ctx):
        emit_json(
            {
                "hash": mdl.hash,
                "modelCount": len(mdl.models),
                "viewCount": len(mdl.views),
                "relationCount": len(mdl.relationships),
            }
        )
        return

    console.print(f"[bold]Deploy Hash:[/bold]   {escape(mdl.hash or '-')}", highlight=False)
    console.print(f"[bold]Models:[/bold]        {len(mdl.models)}", highlight=False)
    console.print(f"[bold]Views:[/bold]         {len(mdl.views)}", highlight=False)
    console.print(f"[bold]Relationships:[/bold] {len(mdl.relationships)}", highlight=False)
