"""AI pipeline and SQL execution endpoints.

These endpoints report domain failures inside the JSON body, with either a
2xx or a 4xx status, instead of failing at the HTTP level. Every call here
therefore returns a ``QueryOutcome`` that keeps the decoded payload next to
the failure (if any) the payload describes.
"""

import json
import logging
from typing import Any, TypeVar

from wren_cli.config import get_settings
from wren_cli.core.exceptions import TransportError
from wren_cli.core.types import DomainFailure, QueryOutcome
from wren_cli.models import (
    AskRequest,
    AskResult,
    ChartRequest,
    ChartResult,
    GenerateSQLRequest,
    GenerateSQLResult,
    RunSQLRequest,
    RunSQLResult,
    SummaryRequest,
    SummaryResult,
)
from wren_cli.models.query import EmbeddedResult
from wren_cli.services.base import BaseService, parse_as

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=EmbeddedResult)

ASK_PATH = "/api/v1/ask"
GENERATE_SQL_PATH = "/api/v1/generate_sql"
RUN_SQL_PATH = "/api/v1/run_sql"
SUMMARY_PATH = "/api/v1/generate_summary"
CHART_PATH = "/api/v1/generate_vega_chart"

DEFAULT_FAILURE_CODE = "ERROR"
DEFAULT_FAILURE_MESSAGE = "request failed"
NOT_CONVERTIBLE_MESSAGE = "query could not be converted to SQL"

DEFAULT_SUMMARY_SAMPLE_SIZE = 500
DEFAULT_CHART_SAMPLE_SIZE = 10000


def build_outcome(
    status_code: int,
    body: Any,
    result_type: type[R],
    what: str,
    missing_message: str = DEFAULT_FAILURE_MESSAGE,
) -> QueryOutcome[R]:
    """Turn a decoded status/body pair into an outcome.

    A 2xx body, or any body carrying ``code``/``error`` keys, becomes an
    outcome. Everything else is a transport failure.

    Args:
        status_code: HTTP status of the response
        body: Decoded JSON body
        result_type: Payload model to decode into
        what: Noun used in parse errors
        missing_message: Failure message used when a code comes without one
    """
    success = 200 <= status_code < 300
    carries_error = isinstance(body, dict) and ("code" in body or "error" in body)
    if not success and not carries_error:
        text = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
        raise TransportError(f"HTTP {status_code}: {text}", status_code, text)

    payload = parse_as(result_type, body if body is not None else {}, what)

    failure = None
    if payload.code or payload.error:
        failure = DomainFailure(
            payload.code or DEFAULT_FAILURE_CODE, payload.error or missing_message
        )
    elif not success:
        failure = DomainFailure(
            f"HTTP_{status_code}", f"request failed with HTTP {status_code}"
        )

    if failure is not None:
        logger.debug("%s reported %s: %s", what, failure.code, failure.message)
    return QueryOutcome(payload=payload, status_code=status_code, failure=failure)


def _request_body(request: Any) -> dict[str, Any]:
    return request.model_dump(by_alias=True, exclude_none=True)


class QueryService(BaseService):
    """Ask questions, generate and run SQL, summarize and chart results."""

    def _post(
        self,
        path: str,
        request: Any,
        result_type: type[R],
        what: str,
        long_running: bool = True,
        missing_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> QueryOutcome[R]:
        timeout = get_settings().ai_timeout if long_running else None
        status_code, body = self._transport.post_embedded(
            path, _request_body(request), timeout=timeout
        )
        return build_outcome(status_code, body, result_type, what, missing_message)

    def ask(self, request: AskRequest) -> QueryOutcome[AskResult]:
        """Run the full pipeline: generate SQL, execute it and summarize."""
        return self._post(ASK_PATH, request, AskResult, "ask result")

    def generate_sql(self, request: GenerateSQLRequest) -> QueryOutcome[GenerateSQLResult]:
        return self._post(
            GENERATE_SQL_PATH,
            request,
            GenerateSQLResult,
            "generated SQL",
            missing_message=NOT_CONVERTIBLE_MESSAGE,
        )

    def run_sql(self, request: RunSQLRequest) -> QueryOutcome[RunSQLResult]:
        return self._post(RUN_SQL_PATH, request, RunSQLResult, "query result", long_running=False)

    def generate_summary(self, request: SummaryRequest) -> QueryOutcome[SummaryResult]:
        return self._post(SUMMARY_PATH, request, SummaryResult, "summary")

    def generate_chart(self, request: ChartRequest) -> QueryOutcome[ChartResult]:
        """Generate a Vega-Lite chart specification for a question and its SQL."""
        return self._post(CHART_PATH, request, ChartResult, "chart")
