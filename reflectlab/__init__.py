"""
reflectlab - runtime reflection exercises.

This package provides two independent components built on introspection:
- db: INSERT statement generation from entity objects, and a parser
  that recovers the statement structure
- tester: a small runner for suites of setup/test/teardown methods

Example:
    >>> from dataclasses import dataclass
    >>> from reflectlab.db import build_insert
    >>>
    >>> @dataclass
    ... class Customer:
    ...     name: str
    ...     phoneNumber: str
    >>>
    >>> build_insert(Customer("Bob", "+372 123 4567")).sql
    'INSERT INTO Customer (name, phoneNumber) VALUES (?, ?);'

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import Settings, configure_logging, get_settings
from .errors import (
    ColumnCountError,
    IntrospectionError,
    LifecycleError,
    PlaceholderCountError,
    QuerySyntaxError,
    ReflectLabError,
    SetupError,
    StatementError,
    TeardownError,
    UnexpectedTokenError,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "ReflectLabError",
    "StatementError",
    "QuerySyntaxError",
    "ColumnCountError",
    "UnexpectedTokenError",
    "PlaceholderCountError",
    "IntrospectionError",
    "LifecycleError",
    "SetupError",
    "TeardownError",
]
