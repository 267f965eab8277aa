"""
=========================
INSERT statement builders.
=========================

Columns and values are appended in two phases. The value list is closed
when the statement is rendered, so values may be added over several calls:

    >>> (TypedInsertIntoCommand(Customers)
    ...     .column(Customers.Name, Customers.Age)
    ...     .values(ValuesMetadata('Ada'), ValuesMetadata(36, DataType.NUMERIC))
    ...     .render())
    "INSERT INTO Customers (Name, Age) VALUES ('Ada', 36);"

Values are quoted according to their DataType but never escaped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar

from sql.base import Statement
from sql.schema import ColumnRef, table_name
from sql.vocabulary import DataType, sql_safe_value

T = TypeVar('T', bound=Enum)


@dataclass(frozen=True)
class ValuesMetadata:
    """A literal for a VALUES list.

    Attributes:
        value: Literal value
        data_type: Controls quoting (non-numeric values are single-quoted)
    """

    value: Any
    data_type: DataType = DataType.NON_NUMERIC

    @property
    def sql(self) -> str:
        return sql_safe_value(self.value, self.data_type)


class InsertIntoCommand(Statement):
    """
    Untyped INSERT builder.

    Args:
        table: Target table, written verbatim
        strict: Enable strict-mode validation (defaults to SQL_BUILDER_STRICT)
    """

    def __init__(self, table: str, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._append(f"INSERT INTO {table}")
        self._has_columns = False
        self._has_values = False

    def _closing(self) -> str:
        if self._has_columns or self._has_values:
            return ")"
        return ""

    def column(self, *columns: ColumnRef) -> 'InsertIntoCommand':
        """Append target columns; must come before any value."""
        if not columns:
            raise ValueError("At least one column is required")
        if self._has_values:
            raise ValueError("Columns must be added before values")

        for column in columns:
            self.validate_column(column)
            self._append(", " if self._has_columns else " (")
            self._has_columns = True
            self._append(self.render_column(column))
        return self

    def value(self, raw: Any, data_type: DataType = DataType.NON_NUMERIC) -> 'InsertIntoCommand':
        """Append a single value to the VALUES list."""
        if self._has_values:
            self._append(", ")
        else:
            self._append(") VALUES (" if self._has_columns else " VALUES (")
            self._has_values = True
        self._append(sql_safe_value(raw, data_type))
        return self

    def values(self, *items: ValuesMetadata) -> 'InsertIntoCommand':
        """Append values to the VALUES list."""
        if not items:
            raise ValueError("At least one value is required")

        for item in items:
            self.value(item.value, item.data_type)
        return self


class TypedInsertIntoCommand(InsertIntoCommand, Generic[T]):
    """INSERT builder whose table is a schema enum and whose columns are its members."""

    def __init__(self, schema: Type[T], strict: Optional[bool] = None):
        super().__init__(table_name(schema), strict=strict)
        self._bind_schemas(schema)
