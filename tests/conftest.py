"""Shared fixtures: an isolated config directory and a fake Wren server."""

import json
import re
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from wren_cli.cli import app
from wren_cli.cli.common import CLIOptions
from wren_cli.config import CLIConfig, get_settings
from wren_cli.services import WrenTransport

ENDPOINT = "https://wren.test"
API_KEY = "osk-0123456789abcdefghij"


class FakeServer:
    """Answers REST and GraphQL requests from canned responses.

    GraphQL handlers are keyed by the top-level field a document selects,
    e.g. ``listModels`` or ``project``. A handler is either the field's value
    or a callable taking the request variables and returning it. Every
    request is recorded for assertions.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._graphql: dict[str, Any] = {}
        self._graphql_errors: dict[str, list[str]] = {}
        self._rest: dict[tuple[str, str], httpx.Response] = {}

    def on_graphql(self, field: str, value: Any) -> None:
        self._graphql[field] = value

    def on_graphql_error(self, field: str, *messages: str) -> None:
        self._graphql_errors[field] = list(messages)

    def on(
        self, method: str, path: str, status: int = 200, json: Any = None, text: str | None = None
    ) -> None:
        if text is not None:
            response = httpx.Response(status, text=text)
        elif json is not None:
            response = httpx.Response(status, json=json)
        else:
            response = httpx.Response(status)
        self._rest[(method, path)] = response

    def graphql_bodies(self) -> list[dict[str, Any]]:
        return [
            json.loads(request.content)
            for request in self.requests
            if request.url.path == "/api/graphql"
        ]

    def last_json(self, path: str) -> Any:
        for request in reversed(self.requests):
            if request.url.path == path:
                return json.loads(request.content)
        raise AssertionError(f"no request sent to {path}")

    def _selects(self, document: str, field: str) -> bool:
        return re.search(rf"\b{re.escape(field)}\s*[({{]", document) is not None

    def _handle_graphql(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        document = body["query"]
        variables = body.get("variables") or {}

        for field, messages in self._graphql_errors.items():
            if self._selects(document, field):
                return httpx.Response(
                    200, json={"data": None, "errors": [{"message": m} for m in messages]}
                )
        for field, handler in self._graphql.items():
            if self._selects(document, field):
                value = handler(variables) if callable(handler) else handler
                return httpx.Response(200, json={"data": {field: value}})
        return httpx.Response(
            200, json={"errors": [{"message": f"no fake handler for: {document.strip()[:60]}"}]}
        )

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/graphql":
            return self._handle_graphql(request)
        response = self._rest.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point the CLI config at a temporary directory for every test."""
    directory = tmp_path / "wren"
    monkeypatch.setenv("WREN_CONFIG_DIR", str(directory))
    get_settings.cache_clear()
    yield directory
    get_settings.cache_clear()


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def wren_transport(server) -> WrenTransport:
    transport = WrenTransport(ENDPOINT, API_KEY, project_id="1", transport=server.transport())
    yield transport
    transport.close()


@pytest.fixture
def logged_in() -> CLIConfig:
    """A saved config with credentials but no active project."""
    cfg = CLIConfig(endpoint=ENDPOINT, api_key=API_KEY)
    cfg.save()
    return cfg


@pytest.fixture
def with_project(logged_in) -> CLIConfig:
    """A saved config with credentials and project 1 selected."""
    logged_in.project_id = "1"
    logged_in.save()
    return logged_in


@pytest.fixture
def run_cli(server) -> Callable[..., Any]:
    """Invoke the CLI against the fake server."""
    runner = CliRunner()

    def invoke(*args: str, input: str | None = None):
        return runner.invoke(
            app, list(args), input=input, obj=CLIOptions(transport=server.transport())
        )

    return invoke
