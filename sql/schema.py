"""
=========================================
Schema references: enums as table shapes.
=========================================

A schema reference is an ``enum.Enum`` subclass whose class name is the
table name and whose members are that table's columns. Typed builders are
generic over such a class, so a type checker rejects a column taken from a
different table, and a misspelled column is an AttributeError at the call
site rather than a broken statement.

The ``Schema`` base class adds an explicit table-name override and a few
helpers, but any plain Enum works with the functions in this module.

Identifiers are used verbatim: no quoting, no escaping. The enum only
guarantees that a column belongs to the declared shape; whether the real
table has that column is discovered when the statement runs.

Example:
    >>> from enum import auto
    >>> from sql.schema import Schema, table_name, qualified_name
    >>>
    >>> class Customers(Schema):
    ...     Id = auto()
    ...     Status = auto()
    >>>
    >>> table_name(Customers)
    'Customers'
    >>> qualified_name(Customers.Status)
    'Customers.Status'
    >>>
    >>> class Orders(Schema):
    ...     __table_name__ = 'sales_orders'
    ...     OrderId = auto()
    >>> Orders.table_name()
    'sales_orders'
"""

from enum import Enum
from typing import Iterable, List, Type, Union

# A column reference is either a schema member or a free-text column name
ColumnRef = Union[Enum, str]


class Schema(Enum):
    """Base class for schema references.

    Subclasses may set ``__table_name__`` when the table name is not a valid
    Python class name or differs from it.
    """

    @classmethod
    def table_name(cls) -> str:
        """Name of the table this schema stands for."""
        return table_name(cls)

    @classmethod
    def columns(cls) -> List[str]:
        """Column names in declaration order."""
        return column_names(cls)

    @property
    def column(self) -> str:
        """Bare column name of this member."""
        return self.name

    @property
    def qualified(self) -> str:
        """``Table.Column`` form of this member."""
        return qualified_name(self)

    def __str__(self) -> str:
        return self.name


def table_name(schema: Union[Type[Enum], Enum]) -> str:
    """
    Resolve the table name of a schema reference.

    Args:
        schema: Enum class, or one of its members

    Returns:
        ``__table_name__`` when defined, otherwise the class name
    """
    if isinstance(schema, Enum):
        schema = type(schema)
    return getattr(schema, '__table_name__', None) or schema.__name__


def column_name(ref: ColumnRef) -> str:
    """Bare column name of a member; free-text names pass through."""
    if isinstance(ref, Enum):
        return ref.name
    return str(ref)


def qualified_name(ref: ColumnRef) -> str:
    """``Table.Column`` for a member; free-text names pass through."""
    if isinstance(ref, Enum):
        return f"{table_name(type(ref))}.{ref.name}"
    return str(ref)


def column_names(schema: Type[Enum]) -> List[str]:
    """All column names of a schema, in declaration order."""
    return [member.name for member in schema]


def is_column_of(ref: ColumnRef, schemas: Iterable[Type[Enum]]) -> bool:
    """
    Check that a column reference is a member of one of the given schemas.

    Free-text column names never belong to a schema.
    """
    return isinstance(ref, Enum) and any(isinstance(ref, schema) for schema in schemas)
