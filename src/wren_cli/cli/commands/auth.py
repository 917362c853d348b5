"""Authentication commands: login and whoami."""

import logging

import typer
from rich.markup import escape

from wren_cli.cli.common import get_options, open_client
from wren_cli.cli.output import console, emit_json, progress
from wren_cli.config import CLIConfig, get_settings
from wren_cli.core.exceptions import InputValidationError, TransportError, WrenError
from wren_cli.models import WhoAmI
from wren_cli.services import WrenClient, WrenTransport

logger = logging.getLogger(__name__)


def _print_identity(info: WhoAmI) -> None:
    console.print(f"[bold]Endpoint:[/bold]     {escape(info.endpoint)}", highlight=False)
    console.print(f"[bold]User:[/bold]         {escape(info.user_email)}", highlight=False)
    if info.user_name:
        console.print(f"[bold]Display Name:[/bold] {escape(info.user_name)}", highlight=False)
    if info.org_name:
        console.print(
            f"[bold]Organization:[/bold] {escape(info.org_name)} (ID: {info.org_id})",
            highlight=False,
        )
    if info.role:
        console.print(f"[bold]Role:[/bold]         {escape(info.role)}", highlight=False)
    console.print(f"[bold]Projects:[/bold]     {info.project_count}", highlight=False)
    for name in info.project_names:
        console.print(f"              - {escape(name)}", highlight=False)


def login(
    ctx: typer.Context,
    endpoint: str | None = typer.Option(None, "--endpoint", help="Server endpoint URL"),
    api_key: str | None = typer.Option(None, "--api-key", help="API key"),
):
    """Authenticate against a server and save the credentials.

    Missing values are prompted for. Nothing is saved unless the server
    accepts the key.
    """
    options = get_options(ctx)
    cfg = CLIConfig.load()

    if not endpoint:
        default = cfg.endpoint or get_settings().default_endpoint
        endpoint = typer.prompt("Wren endpoint", default=default, err=True).strip() or default

    if not api_key:
        api_key = typer.prompt(
            "API key (osk-...)", default="", show_default=False, hide_input=True, err=True
        ).strip()
        if not api_key:
            raise InputValidationError("API key is required")

    transport = WrenTransport(
        endpoint, api_key, timeout=get_settings().login_timeout, transport=options.transport
    )
    with WrenClient(transport) as client:
        try:
            with progress("Validating credentials...", enabled=not options.json_output):
                info = client.auth.validate_connection()
        except WrenError as e:
            raise TransportError(f"validation failed: {e.message}") from e

    cfg.endpoint = transport.endpoint
    cfg.api_key = api_key
    path = cfg.save()
    logger.debug("Credentials for %s saved", transport.endpoint)

    if options.json_output:
        emit_json(
            {
                "status": "authenticated",
                "endpoint": transport.endpoint,
                "user": info.user_email,
                "org": info.org_name,
            }
        )
        return

    console.print("[green]Credentials validated[/green]")
    console.print(f"  Logged in as: {escape(info.user_email)}", highlight=False)
    if info.org_name:
        console.print(f"  Organization: {escape(info.org_name)}", highlight=False)
    console.print(f"  Config saved to: {escape(str(path))}", highlight=False)


def whoami(ctx: typer.Context):
    """Display the authenticated user and the projects the key can see."""
    with open_client(ctx, needs_project=False, timeout=get_settings().login_timeout) as client:
        info = client.auth.validate_connection()

    if get_options(ctx).json_output:
        emit_json(info)
    else:
        _print_identity(info)
