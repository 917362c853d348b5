"""Semantic layer operations: models, views, relations, calculated fields, deploy."""

import logging
from typing import Any

from wren_cli.core.exceptions import DomainError, NotFoundError, TransportError
from wren_cli.core.types import CalculatedExpression, RelationType
from wren_cli.models import (
    CalcFieldValidation,
    CalculatedField,
    DeployedMDL,
    DeployResult,
    DetailedModel,
    Model,
    Relation,
    View,
)
from wren_cli.services.base import BaseService, parse_as

logger = logging.getLogger(__name__)

_FIELD_FIELDS = (
    "id displayName referenceName sourceColumnName type isCalculated notNull expression"
)
_COLUMN_FIELDS = "displayName referenceName sourceColumnName type isCalculated notNull"
_VIEW_FIELDS = "id name statement displayName"

LIST_MODELS = """
query {
  listModels {
    id displayName referenceName sourceTableName refSql
    primaryKey cached refreshTime description
    fields { %(f)s }
    calculatedFields { %(f)s }
  }
}
""" % {"f": _FIELD_FIELDS}

GET_MODEL = """
query GetModel($where: ModelWhereInput!) {
  model(where: $where) {
    displayName referenceName sourceTableName
    primaryKey cached refreshTime description
    fields { %(c)s }
    calculatedFields { %(c)s }
    relations { fromModelId fromColumnId toModelId toColumnId type name }
  }
}
""" % {"c": _COLUMN_FIELDS}

LIST_CALCULATED_FIELDS = """
query {
  listModels {
    id
    calculatedFields { %s }
  }
}
""" % _FIELD_FIELDS

LIST_VIEWS = "query { listViews { %s } }" % _VIEW_FIELDS

GET_VIEW = """
query GetView($where: ViewWhereUniqueInput!) {
  view(where: $where) { %s }
}
""" % _VIEW_FIELDS

CREATE_VIEW = """
mutation CreateView($data: CreateViewInput!) {
  createView(data: $data) { %s }
}
""" % _VIEW_FIELDS

DELETE_VIEW = """
mutation DeleteView($where: ViewWhereUniqueInput!) {
  deleteView(where: $where)
}
"""

LIST_RELATIONS = """
query {
  diagram {
    models {
      relationFields {
        relationId type displayName
        fromModelId fromModelName fromModelDisplayName
        fromColumnId fromColumnName fromColumnDisplayName
        toModelId toModelName toModelDisplayName
        toColumnId toColumnName toColumnDisplayName
      }
    }
  }
}
"""

CREATE_RELATION = """
mutation CreateRelation($data: RelationInput!) {
  createRelation(data: $data)
}
"""

UPDATE_RELATION = """
mutation UpdateRelation($where: WhereIdInput!, $data: UpdateRelationInput!) {
  updateRelation(where: $where, data: $data)
}
"""

DELETE_RELATION = """
mutation DeleteRelation($where: WhereIdInput!) {
  deleteRelation(where: $where)
}
"""

CREATE_CALCULATED_FIELD = """
mutation CreateCalculatedField($data: CreateCalculatedFieldInput!) {
  createCalculatedField(data: $data)
}
"""

UPDATE_CALCULATED_FIELD = """
mutation UpdateCalculatedField(
  $where: UpdateCalculatedFieldWhere!, $data: UpdateCalculatedFieldInput!
) {
  updateCalculatedField(where: $where, data: $data)
}
"""

DELETE_CALCULATED_FIELD = """
mutation DeleteCalculatedField($where: UpdateCalculatedFieldWhere!) {
  deleteCalculatedField(where: $where)
}
"""

VALIDATE_CALCULATED_FIELD = """
mutation ValidateCalculatedField($data: ValidateCalculatedFieldInput!) {
  validateCalculatedField(data: $data) { valid message }
}
"""

DEPLOY = """
mutation Deploy($force: Boolean) {
  deploy(force: $force)
}
"""

DEPLOY_FAILED = "FAILED"


def dedupe_relations(relations: list[Relation]) -> list[Relation]:
    """Drop repeated relations, keeping the first occurrence of each ID.

    The diagram lists every relation under both of the models it joins.
    """
    seen: set[int] = set()
    unique: list[Relation] = []
    for relation in relations:
        if relation.relation_id in seen:
            continue
        seen.add(relation.relation_id)
        unique.append(relation)
    return unique


def deploy_result_from(raw: Any) -> DeployResult:
    """Interpret the deploy mutation's JSON scalar.

    Raises:
        DomainError: When the server reports the deployment failed
        TransportError: When the response has no recognizable shape
    """
    if isinstance(raw, dict) and "status" in raw:
        result = parse_as(DeployResult, raw, "deploy result")
    elif raw is True:
        result = DeployResult(status="SUCCESS")
    elif raw is False:
        result = DeployResult(status=DEPLOY_FAILED)
    else:
        raise TransportError(f"parsing deploy result: unexpected response {raw!r}")

    if result.status.upper() == DEPLOY_FAILED:
        raise DomainError("DEPLOY_FAILED", result.error or "deployment failed")
    return result


class ModelingService(BaseService):
    """Models, views, relations and calculated fields of the active project."""

    # Models

    def list_models(self) -> list[Model]:
        data = self._query(LIST_MODELS)
        return parse_as(list[Model], self._field(data, "listModels"), "models")

    def get_model(self, model_id: int) -> DetailedModel:
        data = self._query(GET_MODEL, {"where": {"id": model_id}})
        raw = self._record(data, "model", f"model {model_id}")
        model = parse_as(DetailedModel, raw, "model")
        if model.id is None:
            model.id = model_id
        return model

    # Views

    def list_views(self) -> list[View]:
        data = self._query(LIST_VIEWS)
        return parse_as(list[View], self._field(data, "listViews"), "views")

    def get_view(self, view_id: int) -> View:
        data = self._query(GET_VIEW, {"where": {"id": view_id}})
        return parse_as(View, self._record(data, "view", f"view {view_id}"), "view")

    def create_view(self, name: str, response_id: int) -> View:
        """Save a thread response as a view; the name doubles as its question."""
        variables = {"data": {"name": name, "responseId": response_id, "rephrasedQuestion": name}}
        data = self._query(CREATE_VIEW, variables)
        return parse_as(View, self._field(data, "createView"), "view")

    def delete_view(self, view_id: int) -> None:
        self._query(DELETE_VIEW, {"where": {"id": view_id}})

    # Relations

    def list_relations(self) -> list[Relation]:
        data = self._query(LIST_RELATIONS)
        diagram = self._field(data, "diagram") or {}
        collected: list[Any] = []
        for model in diagram.get("models") or []:
            collected.extend(model.get("relationFields") or [])
        return dedupe_relations(parse_as(list[Relation], collected, "relations"))

    def create_relation(
        self,
        from_model_id: int,
        from_column_id: int,
        to_model_id: int,
        to_column_id: int,
        relation_type: RelationType,
    ) -> None:
        variables = {
            "data": {
                "fromModelId": from_model_id,
                "fromColumnId": from_column_id,
                "toModelId": to_model_id,
                "toColumnId": to_column_id,
                "type": relation_type.value,
            }
        }
        self._query(CREATE_RELATION, variables)

    def update_relation(self, relation_id: int, relation_type: RelationType) -> None:
        variables = {"where": {"id": relation_id}, "data": {"type": relation_type.value}}
        self._query(UPDATE_RELATION, variables)

    def delete_relation(self, relation_id: int) -> None:
        self._query(DELETE_RELATION, {"where": {"id": relation_id}})

    # Calculated fields

    def list_calculated_fields(self, model_id: int) -> list[CalculatedField]:
        """Return the calculated fields of one model.

        There is no per-model query for these, so all models are fetched and
        filtered here.
        """
        data = self._query(LIST_CALCULATED_FIELDS)
        for model in self._field(data, "listModels") or []:
            if model.get("id") == model_id:
                return parse_as(
                    list[CalculatedField], model.get("calculatedFields") or [], "calculated fields"
                )
        raise NotFoundError(f"model {model_id} not found")

    def create_calculated_field(
        self,
        model_id: int,
        name: str,
        expression: CalculatedExpression,
        lineage: list[int],
    ) -> None:
        variables = {
            "data": {
                "modelId": model_id,
                "name": name,
                "expression": expression.value,
                "lineage": lineage,
            }
        }
        self._query(CREATE_CALCULATED_FIELD, variables)

    def update_calculated_field(
        self,
        field_id: int,
        name: str,
        expression: CalculatedExpression,
        lineage: list[int],
    ) -> None:
        variables = {
            "where": {"id": field_id},
            "data": {"name": name, "expression": expression.value, "lineage": lineage},
        }
        self._query(UPDATE_CALCULATED_FIELD, variables)

    def delete_calculated_field(self, field_id: int) -> None:
        self._query(DELETE_CALCULATED_FIELD, {"where": {"id": field_id}})

    def validate_calculated_field(
        self, name: str, model_id: int, column_id: int | None = None
    ) -> CalcFieldValidation:
        """Check a calculated-field name; pass column_id when renaming an existing one."""
        payload: dict[str, Any] = {"name": name, "modelId": model_id}
        if column_id is not None:
            payload["columnId"] = column_id
        data = self._query(VALIDATE_CALCULATED_FIELD, {"data": payload})
        return parse_as(
            CalcFieldValidation, self._field(data, "validateCalculatedField"), "validation result"
        )

    # Deployment

    def deploy(self, force: bool = False) -> DeployResult:
        data = self._query(DEPLOY, {"force": force})
        result = deploy_result_from(self._field(data, "deploy"))
        logger.debug("Deploy finished with status %s", result.status)
        return result

    def deployed_mdl(self) -> DeployedMDL:
        """Fetch the deployed manifest over REST."""
        return parse_as(DeployedMDL, self._transport.get_json("/api/v1/models") or {}, "deployed models")
