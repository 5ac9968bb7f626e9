"""
Entity descriptors for statement generation.

This module turns an entity class into a static descriptor table:
- Column: marker that overrides a field's column name
- column(): dataclass field with a column override
- ColumnDef: one readable field and its column name
- EntityDef: ordered ColumnDefs for one entity class

Supported entity shapes:
- dataclasses (dataclasses.fields)
- pydantic models (model_fields)
- plain classes (annotations, then __slots__, then instance attributes)

Invariants:
    - Fields are listed base class first, then subclass, each in declaration order
    - Descriptor order never depends on the instance being described
    - ClassVar annotations are not fields

Example:
    >>> @dataclass
    ... class Customer:
    ...     name: str
    ...     phone: Annotated[str, Column("phone_number")]
    >>> [c.column for c in EntityDef.from_type(Customer).columns]
    ['name', 'phone_number']
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import typing
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from typing import Annotated, Any, ClassVar, get_args, get_origin

from pydantic import BaseModel

from ..errors import IntrospectionError
from .query import check_identifier

logger = logging.getLogger(__name__)

# Key used in dataclass field metadata
COLUMN_METADATA_KEY = "reflectlab.column"

_MISSING = object()


@dataclass(frozen=True)
class Column:
    """Column name override, used inside typing.Annotated.

    Example:
        >>> phone: Annotated[str, Column("phone_number")]
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Column name cannot be empty")
        check_identifier(self.name, "Column")


def column(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field with a column override.

    Args:
        name: Column name to use in statements
        **kwargs: Passed through to dataclasses.field

    Example:
        >>> @dataclass
        ... class Customer:
        ...     phone: str = column("phone_number", default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[COLUMN_METADATA_KEY] = Column(name)
    return dataclass_field(metadata=metadata, **kwargs)


class FieldSource(Enum):
    """Where a field was declared."""

    DATACLASS = "dataclass"
    PYDANTIC = "pydantic"
    ANNOTATION = "annotation"
    SLOT = "slot"
    INSTANCE = "instance"


@dataclass(frozen=True)
class ColumnDef:
    """A single entity field mapped to a column.

    Attributes:
        attr: Attribute name the value is stored under
        column: Column name used in the statement
        source: How the field was discovered
    """

    attr: str
    column: str
    source: FieldSource

    def __post_init__(self) -> None:
        check_identifier(self.column, "Column")

    @property
    def private(self) -> bool:
        """Whether the attribute is underscore-prefixed."""
        return self.attr.startswith("_")

    def read(self, entity: Any) -> Any:
        """Read the field's current value directly from instance storage.

        Raises:
            IntrospectionError: If the field is unset or cannot be read
        """
        type_name = type(entity).__name__
        storage = getattr(entity, "__dict__", None)
        if storage is not None and self.attr in storage:
            return storage[self.attr]
        try:
            return object.__getattribute__(entity, self.attr)
        except AttributeError as e:
            raise IntrospectionError(
                f"Field '{self.attr}' of '{type_name}' has no value",
                type_name=type_name,
                field_name=self.attr,
            ) from e
        except Exception as e:
            raise IntrospectionError(
                f"Cannot read field '{self.attr}' of '{type_name}': {e}",
                type_name=type_name,
                field_name=self.attr,
            ) from e


@dataclass(frozen=True)
class EntityDef:
    """Descriptor table for one entity class.

    Attributes:
        type_name: Simple class name
        table: Table name (override or class name)
        columns: Declared fields in statement order
        open: Whether instance attributes beyond the declared ones are columns too
    """

    type_name: str
    table: str
    columns: tuple[ColumnDef, ...] = dataclass_field(default_factory=tuple)
    open: bool = False

    def __post_init__(self) -> None:
        if not self.table:
            raise ValueError(f"Table name cannot be empty for '{self.type_name}'")
        check_identifier(self.table, "Table")
        attrs = [c.attr for c in self.columns]
        if len(attrs) != len(set(attrs)):
            raise ValueError(f"Duplicate field in entity '{self.type_name}'")

    def get_column(self, attr: str) -> ColumnDef | None:
        """Get a column by attribute name."""
        for c in self.columns:
            if c.attr == attr:
                return c
        return None

    def instance_columns(self, entity: Any) -> list[ColumnDef]:
        """Columns for undeclared instance attributes, in insertion order."""
        if not self.open:
            return []
        storage = getattr(entity, "__dict__", None) or {}
        declared = {c.attr for c in self.columns}
        return [
            ColumnDef(attr=name, column=name, source=FieldSource.INSTANCE)
            for name in storage
            if name not in declared
        ]

    def resolve(self, entity: Any, include_private: bool = True) -> list[ColumnDef]:
        """All columns of an instance, declared first."""
        resolved = list(self.columns) + self.instance_columns(entity)
        if not include_private:
            resolved = [c for c in resolved if not c.private]
        return resolved

    @classmethod
    def from_type(cls, entity_type: type, table: str | None = None) -> EntityDef:
        """Build the descriptor table for an entity class.

        Args:
            entity_type: The entity class
            table: Table name override, defaults to the class name

        Returns:
            EntityDef for the class
        """
        if dataclasses.is_dataclass(entity_type):
            columns = _dataclass_columns(entity_type)
            is_open = False
        elif issubclass(entity_type, BaseModel):
            columns = _pydantic_columns(entity_type)
            is_open = False
        else:
            columns = _plain_columns(entity_type)
            is_open = True

        logger.debug(
            f"Described entity {entity_type.__name__}: "
            f"{[c.attr for c in columns]} (open={is_open})"
        )
        return cls(
            type_name=entity_type.__name__,
            table=table or entity_type.__name__,
            columns=tuple(columns),
            open=is_open,
        )


def _column_marker(hint: Any) -> str | None:
    """Column override carried in an Annotated hint."""
    if get_origin(hint) is Annotated:
        for meta in hint.__metadata__:
            if isinstance(meta, Column):
                return meta.name
    return None


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    if get_origin(hint) is Annotated:
        hint = get_args(hint)[0]
    return hint is ClassVar or get_origin(hint) is ClassVar


def _type_hints(entity_type: type) -> dict[str, Any]:
    """Resolved annotations across the MRO, falling back to raw ones."""
    try:
        return typing.get_type_hints(entity_type, include_extras=True)
    except (NameError, TypeError) as e:
        logger.debug(f"Unresolved annotations on {entity_type.__name__}: {e}")
        hints: dict[str, Any] = {}
        for klass in reversed(entity_type.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def _dataclass_columns(entity_type: type) -> list[ColumnDef]:
    hints = _type_hints(entity_type)
    columns = []
    for f in dataclasses.fields(entity_type):
        marker = f.metadata.get(COLUMN_METADATA_KEY)
        name = marker.name if marker is not None else _column_marker(hints.get(f.name))
        columns.append(
            ColumnDef(attr=f.name, column=name or f.name, source=FieldSource.DATACLASS)
        )
    return columns


def _pydantic_columns(entity_type: type[BaseModel]) -> list[ColumnDef]:
    columns = []
    for name, info in entity_type.model_fields.items():
        override = next((m.name for m in info.metadata if isinstance(m, Column)), None)
        columns.append(
            ColumnDef(attr=name, column=override or name, source=FieldSource.PYDANTIC)
        )
    return columns


def _slot_names(klass: type) -> list[tuple[str, str]]:
    """(attribute, declared name) pairs for a class's own __slots__."""
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    pairs = []
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        if name.startswith("__") and not name.endswith("__"):
            pairs.append((f"_{klass.__name__.lstrip('_')}{name}", name))
        else:
            pairs.append((name, name))
    return pairs


def _plain_columns(entity_type: type) -> list[ColumnDef]:
    hints = _type_hints(entity_type)
    bases = [k for k in reversed(entity_type.__mro__) if k is not object]
    columns: dict[str, ColumnDef] = {}

    for klass in bases:
        for name in inspect.get_annotations(klass):
            hint = hints.get(name, _MISSING)
            if name in columns or _is_classvar(hint):
                continue
            override = _column_marker(hint) if hint is not _MISSING else None
            columns[name] = ColumnDef(
                attr=name, column=override or name, source=FieldSource.ANNOTATION
            )

    for klass in bases:
        for attr, declared in _slot_names(klass):
            if attr not in columns:
                columns[attr] = ColumnDef(attr=attr, column=declared, source=FieldSource.SLOT)

    return list(columns.values())
