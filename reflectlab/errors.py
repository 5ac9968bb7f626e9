"""
Error types for reflectlab.

This module defines all exception types raised by the library:
- ReflectLabError: Base exception
- StatementError: Base for query text errors
  - QuerySyntaxError: Query doesn't have the INSERT shape
  - ColumnCountError: Column and placeholder lists differ in size
  - UnexpectedTokenError: Strict tokenizer found the wrong token
  - PlaceholderCountError: Query parameters don't match its placeholders
- IntrospectionError: An entity field could not be read
- LifecycleError: Base for fatal suite errors
  - SetupError: A setup method failed
  - TeardownError: A teardown method failed

Test failures are never raised to the caller; the runner records them
as TestResult(passed=False).

Invariants:
    - All errors inherit from ReflectLabError
    - Errors include what was expected and what was found
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ReflectLabError(Exception):
    """Base exception for all reflectlab errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "REFLECTLAB_ERROR"
        self.details = details or {}


class StatementError(ReflectLabError):
    """Query text could not be parsed."""


class QuerySyntaxError(StatementError):
    """Query doesn't match 'INSERT INTO ... (...) VALUES (...);'."""

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        super().__init__(message, code="QUERY_SYNTAX", details={"sql": sql})
        self.sql = sql


class ColumnCountError(StatementError):
    """Column list and placeholder list have different sizes.

    Attributes:
        columns: Column items found in the query
        placeholders: Placeholder items found in the query
    """

    def __init__(self, columns: List[str], placeholders: List[str]) -> None:
        super().__init__(
            f"column count != placeholder count; columns={columns}, placeholders={placeholders}",
            code="COLUMN_COUNT",
            details={"columns": columns, "placeholders": placeholders},
        )
        self.columns = columns
        self.placeholders = placeholders


class UnexpectedTokenError(StatementError):
    """Strict parse found a different token, or ran out of tokens.

    Attributes:
        expected: Description of the expected token
        found: Token actually found, None if input was exhausted
    """

    def __init__(self, expected: str, found: Optional[str] = None, quoted: bool = True) -> None:
        shown = f"'{expected}'" if quoted else expected
        if found is None:
            msg = f"expected {shown} but found nothing"
        else:
            msg = f"expected {shown} but found '{found}'"
        super().__init__(
            msg,
            code="UNEXPECTED_TOKEN",
            details={"expected": expected, "found": found},
        )
        self.expected = expected
        self.found = found


class IntrospectionError(ReflectLabError):
    """An entity or one of its fields could not be inspected.

    Raised when:
    - Entity is None
    - A declared field was never assigned on the instance
    - Reading a field raised
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="INTROSPECTION_ERROR",
            details={"type_name": type_name, "field_name": field_name},
        )
        self.type_name = type_name
        self.field_name = field_name


class LifecycleError(ReflectLabError):
    """A setup or teardown method failed and the run was aborted.

    The original exception is chained as __cause__.
    """

    def __init__(self, message: str, method_name: str, code: str) -> None:
        super().__init__(message, code=code, details={"method_name": method_name})
        self.method_name = method_name


class SetupError(LifecycleError):
    """A setup method raised before a test."""

    def __init__(self, method_name: str, test_name: str, cause: BaseException) -> None:
        super().__init__(
            f"setup '{method_name}' failed before test '{test_name}': {cause!r}",
            method_name=method_name,
            code="SETUP_FAILED",
        )
        self.test_name = test_name


class TeardownError(LifecycleError):
    """A teardown method raised after a test."""

    def __init__(self, method_name: str, test_name: str, cause: BaseException) -> None:
        super().__init__(
            f"teardown '{method_name}' failed after test '{test_name}': {cause!r}",
            method_name=method_name,
            code="TEARDOWN_FAILED",
        )
        self.test_name = test_name


class PlaceholderCountError(StatementError):
    """A Query's parameters don't match its '?' placeholders.

    Attributes:
        placeholders: Number of placeholders in the SQL
        parameters: Number of parameters supplied
    """

    def __init__(self, placeholders: int, parameters: int) -> None:
        super().__init__(
            f"Query has {placeholders} placeholders but {parameters} parameters",
            code="PLACEHOLDER_COUNT",
            details={"placeholders": placeholders, "parameters": parameters},
        )
        self.placeholders = placeholders
        self.parameters = parameters
