"""
INSERT statement generation from entity objects.

The builder reads an entity's fields through its EntityDef and emits:

    INSERT INTO <table> (<c1>, ..., <cN>) VALUES (?, ..., ?);

together with the field values in the same order.

Invariants:
    - One placeholder and one parameter per column, in column order
    - Building never modifies the entity
    - Field order is base class first, then subclass
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import Settings, get_settings
from ..errors import IntrospectionError
from .query import PLACEHOLDER, Query
from .registry import EntityRegistry, get_registry

logger = logging.getLogger(__name__)


class StatementBuilder:
    """Builds parametric INSERT statements from entities.

    Example:
        >>> builder = StatementBuilder()
        >>> query = builder.build(Customer(name="Bob", phoneNumber="+372 123 4567"))
        >>> query.sql
        'INSERT INTO Customer (name, phoneNumber) VALUES (?, ?);'
        >>> query.parameters
        ('Bob', '+372 123 4567')
    """

    def __init__(
        self,
        registry: EntityRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings

    @property
    def registry(self) -> EntityRegistry:
        return self._registry if self._registry is not None else get_registry()

    @property
    def settings(self) -> Settings:
        return self._settings if self._settings is not None else get_settings()

    def build(self, entity: Any) -> Query:
        """Generate an INSERT statement for an entity.

        Args:
            entity: Object to insert

        Returns:
            Query with the statement and the entity's field values

        Raises:
            IntrospectionError: If entity is None or a field can't be read
        """
        if entity is None:
            raise IntrospectionError("Cannot build a statement for None")

        entity_def = self.registry.describe(type(entity))
        columns = entity_def.resolve(entity, include_private=self.settings.include_private_fields)
        if not self.settings.include_instance_attributes:
            declared = {c.attr for c in entity_def.columns}
            columns = [c for c in columns if c.attr in declared]

        names = [c.column for c in columns]
        placeholders = [PLACEHOLDER] * len(columns)
        parameters = [c.read(entity) for c in columns]

        sql = "INSERT INTO {} ({}) VALUES ({});".format(
            entity_def.table,
            ", ".join(names),
            ", ".join(placeholders),
        )
        logger.debug(f"Built statement for {entity_def.type_name}: {sql}")
        return Query(sql, tuple(parameters))


def build_insert(entity: Any) -> Query:
    """Build an INSERT statement with the global registry and settings."""
    return StatementBuilder().build(entity)
