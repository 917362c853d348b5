"""Rendering helpers shared by all commands.

Results go to stdout. Progress, hints and errors go to stderr, so stdout
stays parseable in JSON mode.
"""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

# Keywords that start a new line in formatted SQL
SQL_BREAK_KEYWORDS = (
    " FROM ",
    " WHERE ",
    " GROUP BY ",
    " HAVING ",
    " ORDER BY ",
    " LIMIT ",
    " JOIN ",
    " LEFT JOIN ",
    " RIGHT JOIN ",
    " INNER JOIN ",
    " OUTER JOIN ",
    " CROSS JOIN ",
    " UNION ",
    " WITH ",
)


def to_jsonable(data: Any) -> Any:
    """Convert models (or lists of them) to plain JSON data with wire names."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(to_jsonable(data), indent=2, ensure_ascii=False))


def print_plain(text: str) -> None:
    """Print server-provided text verbatim: no markup, no highlighting, no wrapping."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_hint(text: str) -> None:
    err_console.print(text, markup=False, highlight=False, soft_wrap=True)


def make_table(*columns: str, title: str | None = None) -> Table:
    table = Table(title=title)
    for column in columns:
        table.add_column(column, overflow="fold")
    return table


def add_row(table: Table, *cells: object) -> None:
    """Add a row of literal values; server text is never parsed as markup."""
    table.add_row(*(Text(str(cell)) for cell in cells))


def truncate(text: str, limit: int) -> str:
    """Shorten text to at most ``limit`` characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def format_sql(sql: str) -> str:
    """Break a one-line SQL statement before its major clauses."""
    result = sql
    for keyword in SQL_BREAK_KEYWORDS:
        result = result.replace(keyword, "\n" + keyword.lstrip(" "))
    return result


def indent_sql(sql: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in sql.splitlines())


def short_date(value: str | None) -> str:
    """Keep the date part of an ISO timestamp; '-' when missing."""
    if not value:
        return "-"
    return value[:10]


@contextmanager
def progress(message: str, enabled: bool = True) -> Iterator[None]:
    """Show a transient spinner on stderr while a long call runs."""
    if not enabled:
        yield
        return
    with err_console.status(message):
        yield
