"""
Query value types.

- Query: SQL text plus its bound parameter values
- ParsedStatement: structure recovered from a Query by the parser

Invariants:
    - Both types are immutable
    - A Query has exactly one parameter per '?' placeholder, in order
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Any

from ..errors import PlaceholderCountError

PLACEHOLDER = "?"

# Characters the statement grammar uses as delimiters
_RESERVED = re.compile(r"[\s,();?]")


def check_identifier(name: str, kind: str) -> None:
    """Reject table/column names that would break the statement grammar.

    Raises:
        ValueError: If name contains whitespace or one of ,();?
    """
    match = _RESERVED.search(name)
    if match is not None:
        raise ValueError(f"{kind} name '{name}' contains reserved character {match.group()!r}")


@dataclass(frozen=True)
class Query:
    """Parametric SQL statement.

    Attributes:
        sql: Statement text with '?' placeholders
        parameters: Values bound to the placeholders, in order
    """

    sql: str
    parameters: tuple[Any, ...] = dataclass_field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, tuple):
            object.__setattr__(self, "parameters", tuple(self.parameters))
        placeholders = self.sql.count(PLACEHOLDER)
        if placeholders != len(self.parameters):
            raise PlaceholderCountError(placeholders, len(self.parameters))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"sql": self.sql, "parameters": list(self.parameters)}


@dataclass(frozen=True)
class ParsedStatement:
    """Structure of an INSERT statement.

    Attributes:
        table: Table name
        columns: Column names in statement order
        parameters: Parameters carried over from the parsed Query
    """

    table: str
    columns: tuple[str, ...]
    parameters: tuple[Any, ...] = dataclass_field(default_factory=tuple)
