"""
=======================
DELETE statement builders.
=======================

    >>> TypedDeleteCommand(Customers).render()
    'DELETE FROM Customers;'
    >>> (TypedDeleteCommand(Customers)
    ...     .start_where()
    ...     .condition(Customers.Id, SQLOperator.EQUAL, 5)
    ...     .end_where()
    ...     .render())
    'DELETE FROM Customers WHERE Id=5;'
"""

from enum import Enum
from typing import Generic, Optional, Type, TypeVar

from sql.base import ConditionalStatement
from sql.schema import table_name

T = TypeVar('T', bound=Enum)


class DeleteCommand(ConditionalStatement):
    """
    Untyped DELETE builder.

    Args:
        table: Table to delete from, written verbatim
        strict: Enable strict-mode validation (defaults to SQL_BUILDER_STRICT)
    """

    def __init__(self, table: str, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._table = table
        self._append(f"DELETE FROM {table}")

    @property
    def table(self) -> str:
        return self._table


class TypedDeleteCommand(DeleteCommand, Generic[T]):
    """DELETE builder whose table is the name of a schema enum."""

    def __init__(self, schema: Type[T], strict: Optional[bool] = None):
        super().__init__(table_name(schema), strict=strict)
        self._schema = schema
        self._bind_schemas(schema)

    @property
    def schema(self) -> Type[T]:
        return self._schema
