"""Tests for the domain services against a fake server."""

import pytest

from wren_cli.core.exceptions import DomainError, GraphQLError, NotFoundError, TransportError
from wren_cli.core.types import CalculatedExpression, DomainFailure, RelationType
from wren_cli.config import get_settings
from wren_cli.models import (
    ApiHistoryFilter,
    AskRequest,
    ChartRequest,
    GenerateSQLRequest,
    InstructionUpdate,
    Relation,
    RunSQLRequest,
    SummaryRequest,
)
from wren_cli.models.query import GenerateSQLResult, RunSQLResult
from wren_cli.services import WrenClient
from wren_cli.services.base import BaseService
from wren_cli.services.modeling import dedupe_relations, deploy_result_from
from wren_cli.services.queries import NOT_CONVERTIBLE_MESSAGE, build_outcome


@pytest.fixture
def client(wren_transport) -> WrenClient:
    return WrenClient(wren_transport)


def relation(relation_id: int, name: str = "") -> dict:
    return {
        "relationId": relation_id,
        "type": "ONE_TO_MANY",
        "displayName": name or f"rel-{relation_id}",
        "fromModelId": 1,
        "fromModelDisplayName": "orders",
        "fromColumnId": 10,
        "fromColumnDisplayName": "customer_id",
        "toModelId": 2,
        "toModelDisplayName": "customers",
        "toColumnId": 20,
        "toColumnDisplayName": "id",
    }


class TestRelations:
    """Test relation listing and mutations."""

    def test_dedupe_keeps_first_occurrence(self):
        """Test that duplicate relations keep their first occurrence."""
        relations = [
            Relation.model_validate(relation(1, "first")),
            Relation.model_validate(relation(2)),
            Relation.model_validate(relation(1, "second")),
        ]

        unique = dedupe_relations(relations)

        assert [r.relation_id for r in unique] == [1, 2]
        assert unique[0].name == "first"

    def test_list_flattens_diagram(self, client, server):
        """Test that a relation drawn under both models is listed once."""
        server.on_graphql(
            "diagram",
            {
                "models": [
                    {"relationFields": [relation(5), relation(6)]},
                    {"relationFields": [relation(5)]},
                    {"relationFields": None},
                ]
            },
        )

        relations = client.modeling.list_relations()

        assert [r.relation_id for r in relations] == [5, 6]
        assert relations[0].from_model_display_name == "orders"

    def test_create_sends_type_value(self, client, server):
        """Test that the relation type is sent as its string value."""
        server.on_graphql("createRelation", True)

        client.modeling.create_relation(1, 10, 2, 20, RelationType.MANY_TO_ONE)

        variables = server.graphql_bodies()[-1]["variables"]
        assert variables["data"] == {
            "fromModelId": 1,
            "fromColumnId": 10,
            "toModelId": 2,
            "toColumnId": 20,
            "type": "MANY_TO_ONE",
        }


class TestModels:
    """Test model lookups."""

    def test_get_model_fills_id(self, client, server):
        """Test that the requested ID is filled into the model."""
        server.on_graphql("model", {"displayName": "orders", "fields": [], "relations": []})

        model = client.modeling.get_model(3)

        assert model.id == 3
        assert model.display_name == "orders"

    def test_get_model_null_is_not_found(self, client, server):
        """Test that a null model is reported as not found."""
        server.on_graphql("model", None)

        with pytest.raises(NotFoundError, match="model 3 not found"):
            client.modeling.get_model(3)

    def test_missing_field_is_transport_error(self):
        """Test that a response without the expected field is rejected."""
        with pytest.raises(TransportError, match="missing field 'listModels'"):
            BaseService._field({}, "listModels")


class TestCalculatedFields:
    """Test calculated field operations."""

    def models(self):
        return [
            {"id": 1, "calculatedFields": []},
            {
                "id": 2,
                "calculatedFields": [
                    {"id": 30, "displayName": "total", "expression": "SUM", "type": "DOUBLE"}
                ],
            },
        ]

    def test_list_filters_by_model(self, client, server):
        """Test that only the calculated fields of one model are listed."""
        server.on_graphql("listModels", self.models())

        fields = client.modeling.list_calculated_fields(2)

        assert [f.display_name for f in fields] == ["total"]
        assert fields[0].expression == "SUM"

    def test_list_unknown_model(self, client, server):
        """Test that listing fields of an unknown model fails."""
        server.on_graphql("listModels", self.models())

        with pytest.raises(NotFoundError, match="model 9 not found"):
            client.modeling.list_calculated_fields(9)

    def test_create_sends_lineage(self, client, server):
        """Test that lineage and expression are sent on create."""
        server.on_graphql("createCalculatedField", True)

        client.modeling.create_calculated_field(2, "total", CalculatedExpression.SUM, [11, 12])

        data = server.graphql_bodies()[-1]["variables"]["data"]
        assert data == {"modelId": 2, "name": "total", "expression": "SUM", "lineage": [11, 12]}

    def test_validate_omits_missing_column(self, client, server):
        """Test that the column ID is left out when not given."""
        server.on_graphql("validateCalculatedField", {"valid": False, "message": "taken"})

        result = client.modeling.validate_calculated_field("total", 2)

        assert not result.valid
        assert result.message == "taken"
        assert server.graphql_bodies()[-1]["variables"]["data"] == {"name": "total", "modelId": 2}


class TestDeploy:
    """Test deploy result interpretation."""

    def test_status_object(self):
        """Test that a status object is parsed."""
        result = deploy_result_from({"status": "SUCCESS", "hash": "abc"})
        assert result.status == "SUCCESS"
        assert result.hash == "abc"

    def test_boolean_true(self):
        """Test that a bare true means success."""
        assert deploy_result_from(True).status == "SUCCESS"

    @pytest.mark.parametrize("raw", [False, {"status": "FAILED", "error": "bad mdl"}])
    def test_failure_raises(self, raw):
        """Test that a failed deploy raises a domain error."""
        with pytest.raises(DomainError) as exc_info:
            deploy_result_from(raw)
        assert exc_info.value.code == "DEPLOY_FAILED"

    def test_failure_message_from_server(self):
        """Test that the server's failure message is kept."""
        with pytest.raises(DomainError, match="bad mdl"):
            deploy_result_from({"status": "FAILED", "error": "bad mdl"})

    def test_unrecognized_shape(self):
        """Test that an unexpected deploy payload is a parse error."""
        with pytest.raises(TransportError, match="parsing deploy result"):
            deploy_result_from("done")

    def test_deploy_sends_force(self, client, server):
        """Test that the force flag is sent."""
        server.on_graphql("deploy", {"status": "SUCCESS"})

        client.modeling.deploy(force=True)

        assert server.graphql_bodies()[-1]["variables"] == {"force": True}


class TestKnowledge:
    """Test instructions and SQL pairs."""

    def test_get_sql_pair_scans_list(self, client, server):
        """Test that a pair is found by scanning the list."""
        pairs = [{"id": i, "question": f"q{i}", "sql": "SELECT 1"} for i in (1, 2, 4)]
        server.on("GET", "/api/v1/knowledge/sql_pairs", json=pairs)

        assert client.knowledge.get_sql_pair(4).question == "q4"
        with pytest.raises(NotFoundError, match="SQL pair 3 not found"):
            client.knowledge.get_sql_pair(3)

    def test_instruction_update_sends_only_given_fields(self, client, server):
        """Test that an instruction update sends only the changed fields."""
        server.on(
            "PUT",
            "/api/v1/knowledge/instructions/5",
            json={"id": 5, "instruction": "new", "questions": [], "isGlobal": True},
        )

        client.knowledge.update_instruction(5, InstructionUpdate(is_global=True))

        assert server.last_json("/api/v1/knowledge/instructions/5") == {"isGlobal": True}

    def test_delete_error_status(self, client, server):
        """Test that a failed delete raises with the status and body."""
        server.on("DELETE", "/api/v1/knowledge/sql_pairs/9", status=404, text="not found")

        with pytest.raises(TransportError, match="HTTP 404: not found"):
            client.knowledge.delete_sql_pair(9)


class TestThreadsAndProjects:
    """Test single-record lookups."""

    def test_thread_responses(self, client, server):
        """Test that thread responses are parsed with optional SQL."""
        server.on_graphql(
            "thread",
            {"id": 4, "responses": [{"id": 1, "threadId": 4, "question": "q", "sql": None}]},
        )

        thread = client.threads.get_thread(4)

        assert thread.responses[0].question == "q"
        assert thread.responses[0].sql is None

    def test_project_not_found(self, client, server):
        """Test that a null project is reported as not found."""
        server.on_graphql("project", None)

        with pytest.raises(NotFoundError, match="project 7 not found"):
            client.projects.get_project(7)

    def test_update_project_sends_only_given_fields(self, client, server):
        """Test that a project update sends only the changed fields."""
        server.on_graphql("updateProject", {"id": 1, "displayName": "Renamed"})

        client.projects.update_project(1, display_name="Renamed")

        variables = server.graphql_bodies()[-1]["variables"]
        assert variables == {"projectId": 1, "data": {"displayName": "Renamed"}}


class TestKeys:
    """Test API keys and history."""

    def test_created_key_carries_secret(self, client, server):
        """Test that a created key comes back with its secret."""
        server.on_graphql(
            "createApiKey",
            {"key": {"id": 3, "name": "ci", "createdAt": "2024-01-02T00:00:00Z"}, "secretKey": "osk-full"},
        )

        created = client.keys.create_api_key("ci")

        assert created.secret_key == "osk-full"
        assert created.key.status == "active"

    def test_history_filter_drops_empty_values(self, client, server):
        """Test that empty history filters are not sent."""
        server.on_graphql("apiHistory", {"items": [], "total": 0, "hasMore": False})

        history_filter = ApiHistoryFilter(api_type="RUN_SQL", status_code=0, thread_id="")
        client.keys.api_history(history_filter, offset=20, limit=10)

        variables = server.graphql_bodies()[-1]["variables"]
        assert variables["filter"] == {"apiType": "RUN_SQL"}
        assert variables["pagination"] == {"offset": 20, "limit": 10}


class TestBuildOutcome:
    """Test classification of embedded-error responses."""

    def test_success(self):
        """Test that a 2xx body without an error is a success."""
        outcome = build_outcome(200, {"records": [], "columns": []}, RunSQLResult, "query result")

        assert outcome.ok
        assert outcome.payload.records == []

    def test_error_in_2xx_body(self):
        """Test that an error in a 2xx body is a failure."""
        body = {"code": "NO_DEPLOYMENT", "error": "deploy first"}

        outcome = build_outcome(200, body, RunSQLResult, "query result")

        assert outcome.failure == DomainFailure("NO_DEPLOYMENT", "deploy first")

    def test_error_in_4xx_body(self):
        """Test that an error in a 4xx body keeps the status."""
        outcome = build_outcome(400, {"error": "syntax error"}, RunSQLResult, "query result")

        assert outcome.failure == DomainFailure("ERROR", "syntax error")
        assert outcome.status_code == 400

    def test_empty_error_fields_are_success(self):
        """Test that empty code and error strings do not mark a failure."""
        body = {"code": "", "error": "", "records": [{"n": 1}], "columns": [{"name": "n"}]}

        outcome = build_outcome(200, body, RunSQLResult, "query result")

        assert outcome.ok
        assert outcome.failure is None
        assert outcome.unwrap().records == [{"n": 1}]

    def test_code_without_message(self):
        """Test that a bare code gets the endpoint's default message."""
        outcome = build_outcome(
            200,
            {"code": "NON_SQL_QUERY"},
            GenerateSQLResult,
            "generated SQL",
            missing_message=NOT_CONVERTIBLE_MESSAGE,
        )

        assert outcome.failure == DomainFailure("NON_SQL_QUERY", NOT_CONVERTIBLE_MESSAGE)

    def test_plain_http_failure(self):
        """Test that a 5xx without an error payload is a transport error."""
        with pytest.raises(TransportError, match="HTTP 502"):
            build_outcome(502, "bad gateway", RunSQLResult, "query result")

    def test_run_sql_over_rest(self, client, server):
        """Test that run_sql posts the request and keeps the embedded failure."""
        server.on(
            "POST",
            "/api/v1/run_sql",
            status=400,
            json={"code": "INVALID_SQL", "error": "no such table"},
        )

        outcome = client.queries.run_sql(RunSQLRequest(sql="SELECT * FROM nope", limit=5))

        assert outcome.failure.code == "INVALID_SQL"
        assert server.last_json("/api/v1/run_sql") == {"sql": "SELECT * FROM nope", "limit": 5}


AI_PATHS = (
    "/api/v1/ask",
    "/api/v1/generate_sql",
    "/api/v1/generate_summary",
    "/api/v1/generate_vega_chart",
)


class TestQueryTimeouts:
    """Test the per-request timeouts of the query endpoints."""

    @staticmethod
    def read_timeout(server, path: str) -> float:
        request = next(r for r in reversed(server.requests) if r.url.path == path)
        return request.extensions["timeout"]["read"]

    def test_ai_endpoints_use_ai_timeout(self, client, server, monkeypatch):
        """Test that ask, generate-sql, summary and chart wait for the AI timeout."""
        monkeypatch.setenv("WREN_AI_TIMEOUT", "99")
        get_settings.cache_clear()
        for path in AI_PATHS:
            server.on("POST", path, json={})

        client.queries.ask(AskRequest(question="q"))
        client.queries.generate_sql(GenerateSQLRequest(question="q"))
        client.queries.generate_summary(SummaryRequest(question="q", sql="SELECT 1"))
        client.queries.generate_chart(ChartRequest(question="q", sql="SELECT 1"))

        for path in AI_PATHS:
            assert self.read_timeout(server, path) == 99.0

    def test_run_sql_keeps_default_timeout(self, client, server):
        """Test that run_sql uses the client's request timeout."""
        server.on("POST", "/api/v1/run_sql", json={"records": [], "columns": []})

        client.queries.run_sql(RunSQLRequest(sql="SELECT 1"))

        assert self.read_timeout(server, "/api/v1/run_sql") == get_settings().request_timeout


class TestAuth:
    """Test credential validation."""

    def test_rejected_key(self, client, server):
        """Test that a 401 is reported as an invalid API key."""
        server.on("GET", "/api/v1/models", status=401, text="unauthorized")

        with pytest.raises(TransportError, match="authentication failed: invalid API key"):
            client.auth.validate_connection()

    def test_unexpected_status(self, client, server):
        """Test that an unexpected status is reported with the body."""
        server.on("GET", "/api/v1/models", status=500, text="oops")

        with pytest.raises(TransportError, match="unexpected status 500: oops"):
            client.auth.validate_connection()

    def test_identity_lookups_are_best_effort(self, client, server):
        """Test that failing identity queries still yield a result."""
        server.on("GET", "/api/v1/models", status=400, json={"error": "no deployment"})
        server.on_graphql_error("currentUser", "not allowed with API key")
        server.on_graphql("listProjects", [{"id": 1, "displayName": "Sales"}, {"id": 2}])

        info = client.auth.validate_connection()

        assert info.user_email == "(authenticated via API key)"
        assert info.project_count == 2
        assert info.project_names == ["Sales", "project-2"]

    def test_graphql_errors_surface_elsewhere(self, client, server):
        """Test that GraphQL errors from other services propagate."""
        server.on_graphql_error("listViews", "forbidden")

        with pytest.raises(GraphQLError, match="forbidden"):
            client.modeling.list_views()
