"""
=========================
UPDATE statement builders.
=========================

    >>> (TypedUpdateCommand(Customers)
    ...     .set(UpdateMetadata(Customers.Status, 'Inactive'))
    ...     .start_where()
    ...     .condition(Customers.Id, SQLOperator.EQUAL, 5)
    ...     .end_where()
    ...     .render())
    "UPDATE Customers SET Status='Inactive' WHERE Id=5;"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar

from sql.base import ConditionalStatement
from sql.schema import ColumnRef, table_name
from sql.vocabulary import DataType, sql_safe_value

T = TypeVar('T', bound=Enum)


@dataclass(frozen=True)
class UpdateMetadata:
    """One ``column=value`` assignment of a SET list.

    Attributes:
        column: Schema member or free-text column name
        value: New value
        data_type: Controls quoting (non-numeric values are single-quoted)
    """

    column: ColumnRef
    value: Any
    data_type: DataType = DataType.NON_NUMERIC


class UpdateCommand(ConditionalStatement):
    """
    Untyped UPDATE builder.

    Args:
        table: Target table, written verbatim
        strict: Enable strict-mode validation (defaults to SQL_BUILDER_STRICT)
    """

    def __init__(self, table: str, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._append(f"UPDATE {table}")
        self._has_assignments = False

    def set(self, *assignments: UpdateMetadata) -> 'UpdateCommand':
        """Append assignments; the first call writes SET."""
        if not assignments:
            raise ValueError("At least one assignment is required")

        for item in assignments:
            self.validate_column(item.column)
            self._append(", " if self._has_assignments else " SET ")
            self._has_assignments = True
            self._append(f"{self.render_column(item.column)}={sql_safe_value(item.value, item.data_type)}")
        return self


class TypedUpdateCommand(UpdateCommand, Generic[T]):
    """UPDATE builder whose table is a schema enum and whose columns are its members."""

    def __init__(self, schema: Type[T], strict: Optional[bool] = None):
        super().__init__(table_name(schema), strict=strict)
        self._bind_schemas(schema)
