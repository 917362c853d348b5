"""Per-invocation state and helpers shared by the command modules."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import httpx
import typer

from wren_cli.config import CLIConfig
from wren_cli.core.exceptions import NoProjectError
from wren_cli.services import WrenClient


@dataclass(frozen=True)
class CLIOptions:
    """Global flags, set once by the root callback."""

    json_output: bool = False
    verbose: bool = False
    # Injected by tests to route requests to a fake server
    transport: httpx.BaseTransport | None = None


def get_options(ctx: typer.Context) -> CLIOptions:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, CLIOptions) else CLIOptions()


def json_mode(ctx: typer.Context) -> bool:
    return get_options(ctx).json_output


def require_project(config: CLIConfig) -> str:
    """Return the active project ID or fail with the selection hint."""
    if not config.project_id:
        raise NoProjectError()
    return config.project_id


@contextmanager
def open_client(
    ctx: typer.Context,
    config: CLIConfig | None = None,
    needs_project: bool = True,
    timeout: float | None = None,
) -> Iterator[WrenClient]:
    """Load the config (unless given), build a client and close it afterwards.

    Missing credentials are reported before a missing project.
    """
    if config is None:
        config = CLIConfig.load()
    client = WrenClient.from_config(config, timeout=timeout, transport=get_options(ctx).transport)
    try:
        if needs_project:
            require_project(config)
        yield client
    finally:
        client.close()
