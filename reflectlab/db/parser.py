"""
Structural parser for INSERT statements.

Recovers table and column names from a Query so a generated statement
can be checked against the entity it was built from. Parsing runs in
two passes over the same grammar:

1. Shape check with a regular expression, including the column count
   against the placeholder count
2. Strict token-by-token walk: INSERT, INTO, <table>, <columns...>,
   VALUES, one '?' per column

Parameter values are never read from the text; they are carried over
from the Query unchanged.

Invariants:
    - Keywords match case-insensitively
    - Any amount of whitespace is allowed around tokens
    - A count mismatch always fails, never truncates
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any, Iterable

from ..errors import ColumnCountError, QuerySyntaxError, UnexpectedTokenError
from .query import PLACEHOLDER, ParsedStatement, Query

logger = logging.getLogger(__name__)

INSERT_PATTERN = re.compile(
    r"\s*INSERT\s+INTO\s+([^\s(]+)\s*\(([^)]*)\)\s*VALUES\s*\(([^)]*)\)\s*;\s*",
    re.IGNORECASE,
)

_DELIMITERS = re.compile(r"[\s,();]+")


class StatementParser:
    """Parses INSERT statements produced by StatementBuilder.

    Example:
        >>> parsed = StatementParser().parse(Query("INSERT INTO T (a, b) VALUES (?, ?);", (1, 2)))
        >>> parsed.table, parsed.columns
        ('T', ('a', 'b'))
    """

    def parse(self, query: Query | None) -> ParsedStatement:
        """Parse a query into table, columns and parameters.

        Raises:
            QuerySyntaxError: If query is None or doesn't have the INSERT shape
            ColumnCountError: If columns and placeholders differ in number
            UnexpectedTokenError: If the strict walk finds a wrong or missing token
        """
        if query is None:
            raise QuerySyntaxError("generator returned None instead of Query")
        return self.parse_sql(query.sql, query.parameters)

    def parse_sql(self, sql: str, parameters: Iterable[Any] = ()) -> ParsedStatement:
        """Parse literal SQL text, carrying the given parameters over unchanged.

        The parameters are not checked against the placeholders; the text
        alone decides whether the statement is well formed.

        Raises:
            QuerySyntaxError: If sql doesn't have the INSERT shape
            ColumnCountError: If columns and placeholders differ in number
            UnexpectedTokenError: If the strict walk finds a wrong or missing token
        """
        self.validate_syntax(sql)

        tokens = _tokenize(sql)
        _expect(tokens, "INSERT")
        _expect(tokens, "INTO")
        table = _next_token(tokens, "table name")
        columns: list[str] = []
        while True:
            token = _next_token(tokens, "column name or VALUES")
            if token.upper() == "VALUES":
                break
            columns.append(token)
        for _ in columns:
            _expect(tokens, PLACEHOLDER)

        logger.debug(f"Parsed statement: table={table} columns={columns}")
        return ParsedStatement(table=table, columns=tuple(columns), parameters=tuple(parameters))

    def validate_syntax(self, sql: str) -> None:
        """Check the statement shape and column/placeholder counts.

        Raises:
            QuerySyntaxError: If the shape doesn't match
            ColumnCountError: If the lists differ in size
        """
        match = INSERT_PATTERN.fullmatch(sql)
        if match is None:
            raise QuerySyntaxError(
                "query doesn't match pattern 'INSERT INTO ... (...) VALUES (...);'",
                sql=sql,
            )

        columns = _items(match.group(2))
        placeholders = _items(match.group(3))
        if len(columns) != len(placeholders):
            raise ColumnCountError(columns, placeholders)


def parse_statement(sql: str, parameters: Iterable[Any] = ()) -> ParsedStatement:
    """Parse literal SQL text; parameters default to none."""
    return StatementParser().parse_sql(sql, parameters)


def _items(group: str) -> list[str]:
    return [item.strip() for item in group.split(",")]


def _tokenize(sql: str) -> Iterator[str]:
    return iter(t for t in _DELIMITERS.split(sql) if t)


def _next_token(tokens: Iterator[str], description: str) -> str:
    token = next(tokens, None)
    if token is None:
        raise UnexpectedTokenError(description, quoted=False)
    return token


def _expect(tokens: Iterator[str], expected: str) -> None:
    token = next(tokens, None)
    if token is None or token.upper() != expected.upper():
        raise UnexpectedTokenError(expected, token)
