"""Shared plumbing for the domain services."""

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from wren_cli.core.exceptions import NotFoundError, TransportError
from wren_cli.services.transport import WrenTransport

T = TypeVar("T")


def parse_as(type_: type[T] | Any, data: Any, what: str) -> T:
    """Validate decoded JSON against a model or a typing construct.

    A payload that does not match the expected shape is reported as a
    transport failure naming ``what`` was being parsed.
    """
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as e:
        raise TransportError(f"parsing {what}: {e}") from e


class BaseService:
    """A group of server operations sharing one transport."""

    def __init__(self, transport: WrenTransport) -> None:
        self._transport = transport

    def _query(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._transport.graphql(document, variables)

    @staticmethod
    def _field(data: dict[str, Any], name: str) -> Any:
        """Return a top-level field of a GraphQL data object."""
        if name not in data:
            raise TransportError(f"parsing response: missing field {name!r}")
        return data[name]

    def _record(self, data: dict[str, Any], name: str, what: str) -> Any:
        """Return a single-record field; null means the record does not exist."""
        value = self._field(data, name)
        if value is None:
            raise NotFoundError(f"{what} not found")
        return value
