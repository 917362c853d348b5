"""Command-line interface for the wren client."""

import logging
import sys
from dataclasses import replace
from typing import Any

import typer
import typer.core

from wren_cli.cli.commands import (
    api_key,
    auth,
    calc_field,
    config,
    deploy,
    history,
    instruction,
    model,
    project,
    project_key,
    query,
    relation,
    sql_pair,
    thread,
    view,
)
from wren_cli.cli.common import CLIOptions
from wren_cli.config import get_settings
from wren_cli.core.exceptions import WrenError

logger = logging.getLogger(__name__)


JSON_FLAG = "--json"


def hoist_json_flag(args: list[str]) -> list[str]:
    """Move a `--json` given after the subcommand to the root, where it is defined.

    Arguments after a `--` terminator are left alone.
    """
    end = args.index("--") if "--" in args else len(args)
    head = [arg for arg in args[:end] if arg != JSON_FLAG]
    if len(head) == end:
        return list(args)
    return [JSON_FLAG, *head, *args[end:]]


class WrenGroup(typer.core.TyperGroup):
    """Root command group that turns client errors into a one-line message and exit 1.

    `--json` is accepted anywhere on the command line.
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, hoist_json_flag(args))

    def invoke(self, ctx: typer.Context) -> Any:
        try:
            return super().invoke(ctx)
        except WrenError as e:
            logger.debug("Command failed", exc_info=True)
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(1) from e


app = typer.Typer(
    cls=WrenGroup,
    help="Client for a Wren semantic layer server: models, knowledge and natural-language SQL.",
    no_args_is_help=True,
)


@app.callback()
def root(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr"),
):
    """Client for a Wren semantic layer server."""
    base = ctx.obj if isinstance(ctx.obj, CLIOptions) else CLIOptions()
    ctx.obj = replace(base, json_output=json_output, verbose=verbose)

    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


# Account
app.command("login")(auth.login)
app.command("whoami")(auth.whoami)
app.add_typer(config.app, name="config")

# Projects and semantic layer
app.add_typer(project.app, name="project")
app.add_typer(project.app, name="projects", hidden=True)
app.add_typer(model.app, name="model")
app.add_typer(model.app, name="models", hidden=True)
app.add_typer(view.app, name="view")
app.add_typer(view.app, name="views", hidden=True)
app.add_typer(relation.app, name="relation")
app.add_typer(relation.app, name="relations", hidden=True)
app.add_typer(relation.app, name="rel", hidden=True)
app.add_typer(calc_field.app, name="calc-field")
app.add_typer(calc_field.app, name="cf", hidden=True)
app.add_typer(calc_field.app, name="calculated-field", hidden=True)
app.add_typer(deploy.app, name="deploy")

# Knowledge and conversations
app.add_typer(instruction.app, name="instruction")
app.add_typer(instruction.app, name="instructions", hidden=True)
app.add_typer(sql_pair.app, name="sql-pair")
app.add_typer(sql_pair.app, name="sql-pairs", hidden=True)
app.add_typer(thread.app, name="thread")
app.add_typer(thread.app, name="threads", hidden=True)

# Credentials and audit
app.add_typer(api_key.app, name="api-key")
app.add_typer(api_key.app, name="apikey", hidden=True)
app.add_typer(api_key.app, name="key", hidden=True)
app.add_typer(project_key.app, name="project-key")
app.add_typer(project_key.app, name="pkey", hidden=True)
app.add_typer(project_key.app, name="project-api-key", hidden=True)
app.add_typer(history.app, name="history")
app.add_typer(history.app, name="hist", hidden=True)

# Questions and SQL
app.command("ask")(query.ask)
app.command("sql")(query.sql)
app.command("run-sql")(query.run_sql)
app.command("summary")(query.summary)
app.command("chart")(query.chart)


def main() -> None:
    app()
