"""Argument parsing helpers shared by the command layer.

Everything here runs before configuration is loaded, so malformed input is
rejected without touching the network.
"""

import re

from wren_cli.core.exceptions import InputValidationError
from wren_cli.core.types import CalculatedExpression, RelationType

_INTEGER = re.compile(r"[0-9]+")


def parse_id(value: str, label: str) -> int:
    """Parse a numeric record ID, naming the record kind in the error."""
    if not _INTEGER.fullmatch(value):
        raise InputValidationError(f'{label} ID must be a number, got "{value}"', value)
    return int(value)


def parse_lineage(value: str) -> list[int]:
    """Parse a comma-separated list of column IDs.

    Blank segments are skipped; at least one ID must remain.
    """
    ids: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if not _INTEGER.fullmatch(part):
            raise InputValidationError(f'invalid lineage ID "{part}": must be a number', part)
        ids.append(int(part))
    if not ids:
        raise InputValidationError("lineage must contain at least one column ID", value)
    return ids


def parse_expression(value: str) -> CalculatedExpression:
    """Parse a calculated-field expression name (case-insensitive)."""
    name = value.strip().upper()
    try:
        return CalculatedExpression(name)
    except ValueError:
        valid = ", ".join(e.value for e in CalculatedExpression)
        raise InputValidationError(
            f'invalid expression "{name}"; valid expressions: {valid}', value
        ) from None


def parse_relation_type(value: str) -> RelationType:
    """Parse a relationship type (case-insensitive)."""
    try:
        return RelationType(value.strip().upper())
    except ValueError:
        raise InputValidationError(
            f'invalid type "{value}". Must be ONE_TO_ONE, ONE_TO_MANY, or MANY_TO_ONE', value
        ) from None
