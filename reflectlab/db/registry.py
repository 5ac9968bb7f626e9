"""
Entity registry for reflectlab.

The EntityRegistry holds the static descriptor table of every entity
class seen so far:
- Table name overrides registered with @table
- EntityDef per class, built on first use and cached

Invariants:
    - A table override belongs to exactly one class; subclasses don't inherit it
    - Overrides must be registered before the class is first described
    - A class is described at most once per registry

Example:
    >>> @table("customers")
    ... @dataclass
    ... class Customer:
    ...     name: str
    >>> get_registry().describe(Customer).table
    'customers'
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Callable, Optional, TypeVar

from .query import check_identifier
from .schema import EntityDef

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

# Global registry instance
_global_registry: Optional[EntityRegistry] = None
_registry_lock = threading.Lock()


class DuplicateRegistrationError(Exception):
    """Raised when a class already has a table override or descriptor."""

    pass


class EntityRegistry:
    """Per-type descriptor table for entity classes.

    Example:
        >>> registry = EntityRegistry()
        >>> registry.register_table(Customer, "customers")
        >>> registry.describe(Customer).table
        'customers'
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._tables: dict[type, str] = {}
        self._entities: dict[type, EntityDef] = {}
        self._lock = threading.Lock()

    def register_table(self, entity_type: type, name: str) -> None:
        """Register a table name override for a class.

        Args:
            entity_type: Entity class
            name: Table name

        Raises:
            ValueError: If name is empty
            DuplicateRegistrationError: If the class already has an override,
                or was already described without one
        """
        if not name or not name.strip():
            raise ValueError(f"Table name cannot be empty for '{entity_type.__name__}'")
        check_identifier(name, "Table")

        with self._lock:
            if entity_type in self._tables:
                raise DuplicateRegistrationError(
                    f"'{entity_type.__name__}' already mapped to table '{self._tables[entity_type]}'"
                )
            if entity_type in self._entities:
                raise DuplicateRegistrationError(
                    f"'{entity_type.__name__}' was already described as table "
                    f"'{self._entities[entity_type].table}'"
                )
            self._tables[entity_type] = name
            logger.debug(f"Registered table override: {entity_type.__name__} -> {name}")

    def table_name(self, entity_type: type) -> str:
        """Table name for a class: override if registered, else the class name."""
        return self._tables.get(entity_type, entity_type.__name__)

    def describe(self, entity_type: type) -> EntityDef:
        """Get the descriptor for a class, building it on first use."""
        with self._lock:
            entity_def = self._entities.get(entity_type)
            if entity_def is None:
                entity_def = EntityDef.from_type(entity_type, table=self._tables.get(entity_type))
                self._entities[entity_type] = entity_def
            return entity_def

    def entities(self) -> Iterator[EntityDef]:
        """Iterate over all described entities."""
        yield from list(self._entities.values())

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "entities": [
                {
                    "type_name": e.type_name,
                    "table": e.table,
                    "columns": [c.column for c in e.columns],
                    "open": e.open,
                }
                for e in self._entities.values()
            ],
        }


def get_registry() -> EntityRegistry:
    """Get the global entity registry."""
    global _global_registry
    with _registry_lock:
        if _global_registry is None:
            _global_registry = EntityRegistry()
        return _global_registry


def table(name: str, registry: EntityRegistry | None = None) -> Callable[[T], T]:
    """Class decorator that overrides the table name.

    Args:
        name: Table name
        registry: Registry to record the override in, defaults to the global one

    Example:
        >>> @table("customers")
        ... class Customer:
        ...     ...
    """

    def decorator(cls: T) -> T:
        (registry or get_registry()).register_table(cls, name)
        return cls

    return decorator


def reset_registry() -> None:
    """Reset the global registry (for testing only)."""
    global _global_registry
    with _registry_lock:
        _global_registry = None
