"""Request and result models for the AI and SQL endpoints.

Result payloads may carry an embedded ``code``/``error`` pair instead of
(or alongside) their data; see ``wren_cli.services.queries``.
"""

from typing import Any

from pydantic import Field

from wren_cli.models.base import WrenModel


class EmbeddedResult(WrenModel):
    """Fields every embedded-error payload may carry."""

    code: str | None = None
    error: str | None = None


class AskRequest(WrenModel):
    question: str
    sample_size: int | None = None
    language: str | None = None
    thread_id: str | None = None


class AskResult(EmbeddedResult):
    """Answer to a natural-language question."""

    id: str | None = None
    sql: str | None = None
    summary: str | None = None
    thread_id: str | None = None
    type: str | None = Field(default=None, description="NON_SQL_QUERY for conversational answers")
    explanation: str | None = None


class GenerateSQLRequest(WrenModel):
    question: str
    thread_id: str | None = None
    language: str | None = None
    return_sql_dialect: bool | None = None


class GenerateSQLResult(EmbeddedResult):
    id: str | None = None
    sql: str | None = None
    thread_id: str | None = None
    explanation_query_id: str | None = None


class RunSQLRequest(WrenModel):
    sql: str
    thread_id: str | None = None
    limit: int | None = None


class RunSQLColumn(WrenModel):
    name: str
    type: str | None = None
    not_null: bool | None = None
    properties: dict[str, Any] | None = None


class RunSQLResult(EmbeddedResult):
    """Rows returned by run_sql. Records map column name to raw JSON value."""

    id: str | None = None
    records: list[dict[str, Any]] = Field(default_factory=list)
    columns: list[RunSQLColumn] = Field(default_factory=list)
    thread_id: str | None = None
    total_rows: int | None = None


class SummaryRequest(WrenModel):
    question: str
    sql: str
    sample_size: int | None = None
    language: str | None = None
    thread_id: str | None = None


class SummaryResult(EmbeddedResult):
    summary: str | None = None
    thread_id: str | None = None


class ChartRequest(WrenModel):
    question: str
    sql: str
    thread_id: str | None = None
    sample_size: int | None = None


class ChartResult(EmbeddedResult):
    vega_spec: Any = None
    thread_id: str | None = None
