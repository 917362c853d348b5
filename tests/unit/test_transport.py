"""Tests for the HTTP transport."""

import httpx
import pytest

from wren_cli.config import CLIConfig
from wren_cli.core.exceptions import ConfigError, GraphQLError, TransportError
from wren_cli.services import WrenTransport


def make_transport(handler, project_id="1") -> WrenTransport:
    return WrenTransport(
        "https://wren.test/", "osk-key", project_id=project_id, transport=httpx.MockTransport(handler)
    )


class TestHeaders:
    """Test request headers and endpoint handling."""

    def test_auth_and_project_headers(self):
        """Test that every request carries the key and project scope."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": {}})

        with make_transport(handler) as transport:
            transport.graphql("query { x }")

        request = seen[0]
        assert request.headers["Authorization"] == "Bearer osk-key"
        assert request.headers["X-Project-Id"] == "1"
        assert request.headers["Content-Type"] == "application/json"
        assert str(request.url) == "https://wren.test/api/graphql"

    def test_no_project_header_without_project(self):
        """Test that no project header is sent when no project is selected."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        with make_transport(handler, project_id="") as transport:
            transport.get_json("/api/v1/models")

        assert "X-Project-Id" not in seen[0].headers

    def test_trailing_slash_stripped(self):
        """Test that a trailing slash on the endpoint is removed."""
        transport = make_transport(lambda r: httpx.Response(200))
        assert transport.endpoint == "https://wren.test"
        transport.close()


class TestFromConfig:
    """Test building a transport from the saved config."""

    def test_missing_endpoint(self):
        """Test that a config without an endpoint points the user at login."""
        with pytest.raises(ConfigError, match="endpoint not configured. Run: wren login"):
            WrenTransport.from_config(CLIConfig(api_key="osk-key"))

    def test_missing_api_key(self):
        """Test that a config without an API key points the user at login."""
        with pytest.raises(ConfigError, match="API key not configured. Run: wren login"):
            WrenTransport.from_config(CLIConfig(endpoint="https://wren.test"))


class TestRest:
    """Test REST helpers."""

    def test_error_status_includes_body(self):
        """Test that a non-2xx status reports the status and body."""
        with make_transport(lambda r: httpx.Response(500, text="boom")) as transport:
            with pytest.raises(TransportError) as exc_info:
                transport.get_json("/api/v1/models")

        assert exc_info.value.message == "HTTP 500: boom"
        assert exc_info.value.status_code == 500

    def test_undecodable_body(self):
        """Test that a non-JSON success body is a parse error."""
        with make_transport(lambda r: httpx.Response(200, text="<html>")) as transport:
            with pytest.raises(TransportError, match="parsing response"):
                transport.get_json("/api/v1/models")

    def test_empty_body_decodes_to_none(self):
        """Test that an empty success body decodes to None."""
        with make_transport(lambda r: httpx.Response(200)) as transport:
            assert transport.put_json("/api/v1/x", {"a": 1}) is None

    def test_embedded_post_keeps_status(self):
        """Test that an error status is returned rather than raised."""
        body = {"code": "NO_DEPLOYMENT", "error": "nothing deployed"}
        with make_transport(lambda r: httpx.Response(400, json=body)) as transport:
            status, decoded = transport.post_embedded("/api/v1/run_sql", {"sql": "SELECT 1"})

        assert status == 400
        assert decoded == body

    def test_timeout(self):
        """Test that a timeout names the request."""
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with make_transport(handler) as transport:
            with pytest.raises(TransportError, match="request timed out: GET /api/v1/models"):
                transport.get_json("/api/v1/models")

    def test_connection_error(self):
        """Test that a connection failure names the request."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with make_transport(handler) as transport:
            with pytest.raises(TransportError, match="request failed: GET /api/v1/models"):
                transport.get_json("/api/v1/models")


class TestGraphQL:
    """Test the GraphQL caller."""

    def test_returns_data(self):
        """Test that the data object of a GraphQL response is returned."""
        def handler(request):
            return httpx.Response(200, json={"data": {"listProjects": []}})

        with make_transport(handler) as transport:
            assert transport.graphql("query { listProjects { id } }") == {"listProjects": []}

    def test_variables_sent_only_when_given(self):
        """Test that the variables key is omitted when there are none."""
        bodies = []

        def handler(request):
            bodies.append(request.read())
            return httpx.Response(200, json={"data": {}})

        with make_transport(handler) as transport:
            transport.graphql("query { a }")
            transport.graphql("query B($id: Int!) { b(id: $id) }", {"id": 3})

        assert b"variables" not in bodies[0]
        assert b'"variables":{"id":3}' in bodies[1].replace(b" ", b"")

    def test_errors_joined(self):
        """Test that every GraphQL error message is reported."""
        body = {"errors": [{"message": "first"}, {"message": "second"}]}
        with make_transport(lambda r: httpx.Response(200, json=body)) as transport:
            with pytest.raises(GraphQLError) as exc_info:
                transport.graphql("query { a }")

        assert exc_info.value.message == "GraphQL errors: first; second"
        assert exc_info.value.messages == ["first", "second"]

    def test_non_200_status(self):
        """Test that a non-200 GraphQL response is a transport error."""
        with make_transport(lambda r: httpx.Response(502, text="bad gateway")) as transport:
            with pytest.raises(TransportError, match="GraphQL HTTP 502: bad gateway"):
                transport.graphql("query { a }")

    def test_null_data_is_empty(self):
        """Test that null GraphQL data becomes an empty dict."""
        with make_transport(lambda r: httpx.Response(200, json={"data": None})) as transport:
            assert transport.graphql("query { a }") == {}
