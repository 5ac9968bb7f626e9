"""
Statement generation for reflectlab.

- StatementBuilder: entity object -> Query
- StatementParser: Query -> ParsedStatement
- EntityRegistry: cached per-class descriptors and table overrides
"""

from .builder import StatementBuilder, build_insert
from .parser import StatementParser, parse_statement
from .query import ParsedStatement, Query
from .registry import (
    DuplicateRegistrationError,
    EntityRegistry,
    get_registry,
    reset_registry,
    table,
)
from .schema import Column, ColumnDef, EntityDef, FieldSource, column

__all__ = [
    # Values
    "Query",
    "ParsedStatement",
    # Schema
    "Column",
    "column",
    "ColumnDef",
    "EntityDef",
    "FieldSource",
    # Registry
    "EntityRegistry",
    "DuplicateRegistrationError",
    "get_registry",
    "reset_registry",
    "table",
    # Builder / parser
    "StatementBuilder",
    "build_insert",
    "StatementParser",
    "parse_statement",
]
