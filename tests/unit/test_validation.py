"""Tests for command argument parsing."""

import pytest

from wren_cli.core.exceptions import InputValidationError
from wren_cli.core.types import CalculatedExpression, RelationType
from wren_cli.core.validation import parse_expression, parse_id, parse_lineage, parse_relation_type


class TestParseId:
    """Test numeric ID parsing."""

    def test_valid_id(self):
        """Test that a decimal ID is parsed."""
        assert parse_id("42", "model") == 42

    @pytest.mark.parametrize("value", ["abc", "-1", "1.5", "", " 3", "0x10"])
    def test_rejects_non_digits(self, value):
        """Test that anything but plain digits is rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            parse_id(value, "model")

        assert exc_info.value.message == f'model ID must be a number, got "{value}"'
        assert exc_info.value.value == value


class TestParseLineage:
    """Test lineage list parsing."""

    def test_comma_separated(self):
        """Test that comma-separated IDs are parsed in order."""
        assert parse_lineage("12,34") == [12, 34]

    def test_blank_segments_skipped(self):
        """Test that spaces and empty segments are tolerated."""
        assert parse_lineage(" 5, ,6 ,") == [5, 6]

    def test_invalid_segment_named(self):
        """Test that the offending segment appears in the error."""
        with pytest.raises(InputValidationError, match='invalid lineage ID "x"'):
            parse_lineage("1,x,3")

    @pytest.mark.parametrize("value", ["", ",", " , "])
    def test_empty_lineage(self, value):
        """Test that a lineage without IDs is rejected."""
        with pytest.raises(InputValidationError, match="at least one column ID"):
            parse_lineage(value)


class TestParseExpression:
    """Test calculated-field expression parsing."""

    def test_case_insensitive(self):
        """Test that expressions are matched regardless of case."""
        assert parse_expression("sum") is CalculatedExpression.SUM
        assert parse_expression(" Count_If ") is CalculatedExpression.COUNT_IF

    def test_invalid_lists_all_expressions(self):
        """Test that the error enumerates every valid expression."""
        with pytest.raises(InputValidationError) as exc_info:
            parse_expression("median")

        message = exc_info.value.message
        assert message.startswith('invalid expression "MEDIAN"')
        for expression in CalculatedExpression:
            assert expression.value in message


class TestParseRelationType:
    """Test relationship type parsing."""

    def test_case_insensitive(self):
        """Test that relation types are matched regardless of case."""
        assert parse_relation_type("one_to_many") is RelationType.ONE_TO_MANY

    def test_invalid_type(self):
        """Test that MANY_TO_MANY is not accepted."""
        with pytest.raises(InputValidationError, match="ONE_TO_ONE, ONE_TO_MANY, or MANY_TO_ONE"):
            parse_relation_type("MANY_TO_MANY")
