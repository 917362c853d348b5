"""Type definitions for the wren CLI."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, NamedTuple, TypeVar

from wren_cli.core.exceptions import DomainError

T = TypeVar("T")


class RelationType(str, Enum):
    """Cardinality of a relationship between two models."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"


class CalculatedExpression(str, Enum):
    """Expression functions a calculated field can apply over its lineage."""

    # Aggregate
    AVG = "AVG"
    COUNT = "COUNT"
    COUNT_IF = "COUNT_IF"
    MAX = "MAX"
    MIN = "MIN"
    SUM = "SUM"
    # Math
    ABS = "ABS"
    CBRT = "CBRT"
    CEIL = "CEIL"
    CEILING = "CEILING"
    EXP = "EXP"
    FLOOR = "FLOOR"
    LN = "LN"
    LOG10 = "LOG10"
    ROUND = "ROUND"
    SIGN = "SIGN"
    # String
    LENGTH = "LENGTH"
    REVERSE = "REVERSE"


class ValueKind(str, Enum):
    """Kinds of scalar values found in query result records."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    STRUCTURED = "structured"


class CellValue(NamedTuple):
    """A decoded JSON value tagged with its kind."""

    kind: ValueKind
    value: Any

    @classmethod
    def of(cls, raw: Any) -> "CellValue":
        """Classify a value decoded from JSON."""
        if raw is None:
            return cls(ValueKind.NULL, None)
        # bool is a subclass of int, so it has to be checked first
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(ValueKind.TEXT, raw)
        return cls(ValueKind.STRUCTURED, raw)

    def format(self) -> str:
        """Render the value for a text table."""
        if self.kind is ValueKind.NULL:
            return "NULL"
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is ValueKind.NUMBER:
            if isinstance(self.value, float) and self.value.is_integer():
                return str(int(self.value))
            if isinstance(self.value, float):
                return f"{self.value:g}"
            return str(self.value)
        if self.kind is ValueKind.TEXT:
            return self.value
        return json.dumps(self.value, separators=(",", ":"), ensure_ascii=False)


class DomainFailure(NamedTuple):
    """A failure the server reported inside an otherwise decodable payload."""

    code: str
    message: str


@dataclass(frozen=True)
class QueryOutcome(Generic[T]):
    """Result of an embedded-error REST call.

    The payload is always decoded. Callers reach it through ``unwrap()``,
    which raises ``DomainError`` when the server embedded a failure, or by
    reading ``payload`` after checking ``failure`` themselves (JSON output
    echoes failed payloads before exiting non-zero).
    """

    payload: T
    status_code: int
    failure: DomainFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        if self.failure is not None:
            raise DomainError(self.failure.code, self.failure.message)
        return self.payload
