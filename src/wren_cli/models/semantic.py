"""Semantic layer models: models, fields, views, relations, deployments."""

from typing import Any

from pydantic import Field as PydanticField

from wren_cli.models.base import WrenModel


class Field(WrenModel):
    """A column of a model, plain or calculated."""

    id: int
    display_name: str = ""
    reference_name: str = ""
    source_column_name: str = ""
    type: str | None = None
    is_calculated: bool = False
    not_null: bool = False
    expression: str | None = None


# Calculated fields share the column shape
CalculatedField = Field


class Model(WrenModel):
    """A model with its fields, as returned by listModels."""

    id: int
    display_name: str = ""
    reference_name: str = ""
    source_table_name: str = ""
    ref_sql: str | None = None
    primary_key: str | None = None
    cached: bool = False
    refresh_time: str | None = None
    description: str | None = None
    fields: list[Field] = PydanticField(default_factory=list)
    calculated_fields: list[Field] = PydanticField(default_factory=list)


class DetailedColumn(WrenModel):
    display_name: str = ""
    reference_name: str = ""
    source_column_name: str = ""
    type: str | None = None
    is_calculated: bool = False
    not_null: bool = False


class DetailedRelation(WrenModel):
    from_model_id: int
    from_column_id: int
    to_model_id: int
    to_column_id: int
    type: str = ""
    name: str = ""


class DetailedModel(WrenModel):
    """A single model with columns and relations."""

    id: int | None = None
    display_name: str = ""
    reference_name: str = ""
    source_table_name: str = ""
    ref_sql: str | None = None
    primary_key: str | None = None
    cached: bool = False
    refresh_time: str | None = None
    description: str | None = None
    fields: list[DetailedColumn] = PydanticField(default_factory=list)
    calculated_fields: list[DetailedColumn] = PydanticField(default_factory=list)
    relations: list[DetailedRelation] = PydanticField(default_factory=list)


class View(WrenModel):
    """A saved view."""

    id: int
    name: str = ""
    statement: str = ""
    display_name: str = ""


class Relation(WrenModel):
    """A relationship between two model columns, as drawn in the diagram."""

    relation_id: int
    type: str = ""
    name: str = PydanticField(default="", alias="displayName")
    from_model_id: int = 0
    from_model_name: str = ""
    from_model_display_name: str = ""
    from_column_id: int = 0
    from_column_name: str = ""
    from_column_display_name: str = ""
    to_model_id: int = 0
    to_model_name: str = ""
    to_model_display_name: str = ""
    to_column_id: int = 0
    to_column_name: str = ""
    to_column_display_name: str = ""


class CalcFieldValidation(WrenModel):
    valid: bool
    message: str | None = None


class DeployResult(WrenModel):
    """Outcome of a deploy mutation, as reported by the server."""

    status: str
    hash: str | None = None
    error: str | None = None


class DeployedMDL(WrenModel):
    """The currently deployed manifest."""

    hash: str = ""
    models: list[dict[str, Any]] = PydanticField(default_factory=list)
    relationships: list[dict[str, Any]] = PydanticField(default_factory=list)
    views: list[dict[str, Any]] = PydanticField(default_factory=list)


class FieldSummary(WrenModel):
    """One row of a model's combined field listing."""

    name: str
    type: str | None = None
    source_column: str = ""
    not_null: bool = False
    calculated: bool = False

    @classmethod
    def rows_for(cls, model: DetailedModel) -> list["FieldSummary"]:
        """Plain fields first, then calculated ones."""
        rows = []
        for columns, calculated in ((model.fields, False), (model.calculated_fields, True)):
            for column in columns:
                rows.append(
                    cls(
                        name=column.display_name,
                        type=column.type,
                        source_column=column.source_column_name,
                        not_null=column.not_null,
                        calculated=calculated,
                    )
                )
        return rows
