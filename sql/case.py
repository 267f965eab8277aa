"""
========================
CASE expression composer.
========================

Builds a ``CASE WHEN ... THEN ... ELSE ... END`` expression inside the
column list of a SELECT. Results are rendered through ``sql_safe_value`` so
non-numeric results are single-quoted.

Example:
    >>> (TypedSelectCommand(Customers)
    ...     .select(Customers.Name)
    ...     .start_case()
    ...     .when(Customers.Age, SQLOperator.LESS_THAN, 18, 'minor')
    ...     .else_('adult')
    ...     .end_case(alias='AgeGroup')
    ...     .from_table()
    ...     .render())
    "SELECT Name, CASE WHEN Age < 18 THEN 'minor' ELSE 'adult' END AS AgeGroup FROM Customers;"
"""

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from sql.schema import ColumnRef
from sql.vocabulary import DataType, SQLOperator, sql_safe_value

if TYPE_CHECKING:
    from sql.base import ColumnFragment, Statement

TCommand = TypeVar('TCommand', bound='Statement')


class CaseClause(Generic[TCommand]):
    """Composer for a CASE expression, bound to the owning statement's buffer."""

    def __init__(self, parent: TCommand, buffer: list):
        self._parent = parent
        self._buffer = buffer
        self._buffer.append("CASE")

    def _column(self, column: ColumnRef) -> 'ColumnFragment':
        return self._parent.column_fragment(column)

    def when(
        self,
        column: ColumnRef,
        operator: SQLOperator,
        value: Any,
        result: Any,
        data_type: DataType = DataType.NON_NUMERIC
    ) -> 'CaseClause[TCommand]':
        """Append ``WHEN <column> <operator> <value> THEN <result>``."""
        fragment = self._column(column)
        self._buffer.extend((
            " WHEN ", fragment, f" {operator.symbol.strip()} {value} THEN {sql_safe_value(result, data_type)}"
        ))
        return self

    def when_null(
        self,
        column: ColumnRef,
        result: Any,
        data_type: DataType = DataType.NON_NUMERIC
    ) -> 'CaseClause[TCommand]':
        fragment = self._column(column)
        self._buffer.extend((" WHEN ", fragment, f" IS NULL THEN {sql_safe_value(result, data_type)}"))
        return self

    def when_not_null(
        self,
        column: ColumnRef,
        result: Any,
        data_type: DataType = DataType.NON_NUMERIC
    ) -> 'CaseClause[TCommand]':
        fragment = self._column(column)
        self._buffer.extend((" WHEN ", fragment, f" IS NOT NULL THEN {sql_safe_value(result, data_type)}"))
        return self

    def else_(self, result: Any, data_type: DataType = DataType.NON_NUMERIC) -> 'CaseClause[TCommand]':
        self._buffer.append(f" ELSE {sql_safe_value(result, data_type)}")
        return self

    def end_case(self, alias: Optional[str] = None) -> TCommand:
        """Close the expression (optionally aliased) and return the owning statement."""
        self._buffer.append(" END")
        if alias:
            self._buffer.append(f" AS {alias}")
        return self._parent
