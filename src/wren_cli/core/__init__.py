"""Core module with exceptions and type definitions."""

from wren_cli.core.exceptions import (
    ConfigError,
    DomainError,
    GraphQLError,
    InputValidationError,
    NoProjectError,
    NotFoundError,
    TransportError,
    WrenError,
)
from wren_cli.core.types import (
    CalculatedExpression,
    CellValue,
    DomainFailure,
    QueryOutcome,
    RelationType,
    ValueKind,
)

__all__ = [
    "WrenError",
    "ConfigError",
    "NoProjectError",
    "InputValidationError",
    "TransportError",
    "GraphQLError",
    "DomainError",
    "NotFoundError",
    "CalculatedExpression",
    "RelationType",
    "ValueKind",
    "CellValue",
    "DomainFailure",
    "QueryOutcome",
]
