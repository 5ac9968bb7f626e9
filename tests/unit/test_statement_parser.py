"""
Unit tests for StatementParser.

Tests cover:
- Well-formed statements with varied spacing and case
- Shape errors
- Column/placeholder count mismatches
- Strict token errors
"""

import pytest

from reflectlab.db.parser import StatementParser, parse_statement
from reflectlab.db.query import ParsedStatement, Query
from reflectlab.errors import (
    ColumnCountError,
    QuerySyntaxError,
    StatementError,
    UnexpectedTokenError,
)


@pytest.fixture
def parser():
    return StatementParser()


class TestParseValid:
    """Tests for statements that parse."""

    def test_parse_generated_shape(self, parser):
        """Builder-style statement."""
        parsed = parser.parse(
            Query("INSERT INTO Customer (name, phoneNumber) VALUES (?, ?);", ("Bob", "+372"))
        )

        assert parsed == ParsedStatement(
            table="Customer",
            columns=("name", "phoneNumber"),
            parameters=("Bob", "+372"),
        )

    def test_compact_spacing(self, parser):
        """No spaces around delimiters."""
        parsed = parser.parse(Query("INSERT INTO T(a,b) VALUES(?,?);", (1, 2)))
        assert parsed.table == "T"
        assert parsed.columns == ("a", "b")

    def test_lowercase_and_extra_whitespace(self, parser):
        """Keywords are case-insensitive; whitespace is free."""
        parsed = parser.parse(
            Query("  insert\tinto  items \n( sku ,  qty )  values ( ? , ? ) ;  ", ("A", 1))
        )
        assert parsed.table == "items"
        assert parsed.columns == ("sku", "qty")

    def test_parameters_carried_over(self, parser):
        """Parameters are not re-derived from the text."""
        values = (object(), None)
        parsed = parser.parse(Query("INSERT INTO T (a, b) VALUES (?, ?);", values))
        assert parsed.parameters == values

    def test_empty_column_list(self, parser):
        """Statement for an entity without fields."""
        parsed = parser.parse(Query("INSERT INTO Empty () VALUES ();"))
        assert parsed.columns == ()

    def test_parse_statement_helper(self):
        """parse_statement binds the given parameters."""
        parsed = parse_statement("INSERT INTO T (a) VALUES (?);", [42])
        assert parsed.columns == ("a",)
        assert parsed.parameters == (42,)

    def test_parse_statement_without_parameters(self):
        """A literal statement parses with no parameters bound."""
        parsed = parse_statement("INSERT INTO T (a) VALUES (?);")

        assert parsed.table == "T"
        assert parsed.columns == ("a",)
        assert parsed.parameters == ()

    def test_parse_sql_ignores_parameter_count(self, parser):
        """Only the text decides whether a statement is well formed."""
        parsed = parser.parse_sql("INSERT INTO T (a, b) VALUES (?, ?);", [1])
        assert parsed.columns == ("a", "b")
        assert parsed.parameters == (1,)


class TestShapeErrors:
    """Tests for statements without the INSERT shape."""

    def test_none_query(self, parser):
        """None is rejected."""
        with pytest.raises(QuerySyntaxError, match="instead of Query"):
            parser.parse(None)

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM T;",
            "INSERT INTO T (a) VALUES ()",
            "INSERT T (a) VALUES (?);",
            "INSERT INTO T a VALUES ?;",
            "INSERT INTO T (a) VALUES (?); DROP TABLE T;",
        ],
    )
    def test_pattern_mismatch(self, parser, sql):
        """Anything but INSERT INTO ... (...) VALUES (...); fails."""
        with pytest.raises(QuerySyntaxError, match="doesn't match pattern") as exc_info:
            parser.parse(Query(sql, (None,) * sql.count("?")))
        assert exc_info.value.code == "QUERY_SYNTAX"


class TestCountMismatch:
    """Tests for column/placeholder count checks."""

    def test_literal_mismatch_without_parameters(self):
        """A literal with 3 placeholders for 2 columns fails on the counts."""
        with pytest.raises(ColumnCountError, match="column count != placeholder count"):
            parse_statement("INSERT INTO T (a,b) VALUES (?,?,?);")

    def test_more_placeholders_than_columns(self, parser):
        """3 placeholders for 2 columns fails."""
        with pytest.raises(ColumnCountError) as exc_info:
            parser.parse(Query("INSERT INTO T (a,b) VALUES (?,?,?);", (1, 2, 3)))

        error = exc_info.value
        assert error.columns == ["a", "b"]
        assert error.placeholders == ["?", "?", "?"]
        assert "columns=['a', 'b']" in str(error)
        assert "placeholders=['?', '?', '?']" in str(error)

    def test_more_columns_than_placeholders(self, parser):
        """2 columns for 1 placeholder fails."""
        with pytest.raises(ColumnCountError, match="column count != placeholder count"):
            parser.parse(Query("INSERT INTO T (a, b) VALUES (?);", (1,)))

    def test_count_error_is_statement_error(self, parser):
        """All parse errors share a base class."""
        with pytest.raises(StatementError):
            parser.parse(Query("INSERT INTO T (a) VALUES (?, ?);", (1, 2)))


class TestTokenErrors:
    """Tests for the strict token walk."""

    def test_literal_instead_of_placeholder(self, parser):
        """Values must be '?' placeholders."""
        with pytest.raises(UnexpectedTokenError, match="expected '\\?' but found 'x'") as exc_info:
            parser.parse(Query("INSERT INTO T (a, b) VALUES (x, y);"))

        assert exc_info.value.expected == "?"
        assert exc_info.value.found == "x"

    def test_missing_placeholder(self, parser):
        """Empty placeholder slots run out of tokens."""
        with pytest.raises(UnexpectedTokenError, match="found nothing"):
            parser.parse(Query("INSERT INTO T (a, b) VALUES (, );"))

    def test_validate_syntax_only(self, parser):
        """validate_syntax accepts what the regex accepts."""
        parser.validate_syntax("INSERT INTO T (a) VALUES (?);")
