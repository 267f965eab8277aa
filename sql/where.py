"""
======================
WHERE clause composer.
======================

``WhereClause`` accumulates conditions into the WHERE clause of its owning
statement. It writes straight into the owner's buffer and returns either
itself (to keep composing) or the owner (``end_where()``), so a statement
can be built in one fluent chain:

    >>> (TypedSelectCommand(Customers)
    ...     .select_all()
    ...     .from_table()
    ...     .start_where()
    ...     .condition(Customers.Status, SQLOperator.EQUAL, "'Active'")
    ...     .condition(Customers.Age, SQLOperator.GREATER_THAN, 18, WhereConnector.AND)
    ...     .end_where()
    ...     .render())
    "SELECT * FROM Customers WHERE Status='Active' AND Age>18;"

Connector rules:
    - the first condition of the clause is never preceded by a connector,
      whatever connector the caller passes;
    - every later condition is preceded by the connector the caller passes;
    - the first condition inside a group follows the ``(`` directly, the
      connector for that group is the one given to ``open_group()``.

Groups are literal ``(`` / ``)`` fragments. The composer does not count
them, so unbalanced groups and malformed raw text are reported by the
database engine when the statement runs. Builders created with
``strict=True`` validate connectors, groups and schema membership instead.
Values are written verbatim: quoting and escaping are the caller's job
(or use bound parameters through the execution adapters).
"""

from typing import TYPE_CHECKING, Any, Generic, Iterable, TypeVar

from sql.exceptions import MissingConnectorError, UnbalancedGroupError
from sql.schema import ColumnRef
from sql.vocabulary import SQLOperator, WhereConnector

if TYPE_CHECKING:
    from sql.base import ColumnFragment, Statement

TCommand = TypeVar('TCommand', bound='Statement')


class WhereClause(Generic[TCommand]):
    """
    Composer for the WHERE clause of a single statement.

    Instances are created by ``start_where()`` on the owning statement and
    share that statement's buffer.

    Attributes:
        has_condition: Whether a condition has been appended to the clause
    """

    def __init__(self, parent: TCommand, buffer: list, grouped: bool = False):
        self._parent = parent
        self._buffer = buffer
        self._strict = parent.strict
        self._has_condition = False
        self._group_start = grouped
        # only maintained in strict mode
        self._open_groups = 1 if grouped else 0

        self._buffer.append(" WHERE (" if grouped else " WHERE ")

    @property
    def has_condition(self) -> bool:
        return self._has_condition

    def _connect(self, connector: WhereConnector) -> None:
        """Write the connector preceding the next condition, if any."""
        if not self._has_condition:
            self._has_condition = True
            self._group_start = False
            return

        if self._group_start:
            self._group_start = False
            return

        if connector is WhereConnector.NONE:
            if self._strict:
                raise MissingConnectorError("Conditions after the first one need AND or OR")
            self._buffer.append(" ")
        else:
            self._buffer.append(f" {connector.keyword} ")

    def _column(self, column: ColumnRef) -> 'ColumnFragment':
        return self._parent.column_fragment(column)

    def end_where(self) -> TCommand:
        """End clause composition and return the owning statement."""
        return self._parent

    def raw_condition(self, condition: str, connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        """
        Append a pre-formatted condition.

        Args:
            condition: Condition text, written as-is
            connector: Connector placed before the condition (ignored for the first one)
        """
        self._connect(connector)
        self._buffer.append(condition)
        return self

    def condition(
        self,
        column: ColumnRef,
        operator: SQLOperator,
        value: Any,
        connector: WhereConnector = WhereConnector.NONE
    ) -> 'WhereClause[TCommand]':
        """
        Append ``<column><operator><value>``.

        Args:
            column: Schema member or free-text column name
            operator: Comparison operator
            value: Right-hand side, rendered with str() and not quoted
            connector: Connector placed before the condition (ignored for the first one)
        """
        fragment = self._column(column)
        self._connect(connector)
        self._buffer.extend((fragment, f"{operator.symbol}{value}"))
        return self

    def open_group(self, connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        """Append ``(``, preceded by the connector when the clause already has a condition."""
        if self._has_condition and not self._group_start:
            if connector is WhereConnector.NONE:
                if self._strict:
                    raise MissingConnectorError("A group after a condition needs AND or OR")
                self._buffer.append(" (")
            else:
                self._buffer.append(f" {connector.keyword} (")
        else:
            self._buffer.append("(")

        self._group_start = True
        if self._strict:
            self._open_groups += 1
        return self

    def close_group(self) -> 'WhereClause[TCommand]':
        """Append ``)``."""
        if self._strict:
            if self._open_groups == 0:
                raise UnbalancedGroupError("close_group() without a matching open_group()")
            self._open_groups -= 1

        self._group_start = False
        self._buffer.append(")")
        return self

    def between(
        self,
        column: ColumnRef,
        low: Any,
        high: Any,
        connector: WhereConnector = WhereConnector.NONE
    ) -> 'WhereClause[TCommand]':
        """Append ``<column> BETWEEN <low> AND <high>``."""
        fragment = self._column(column)
        self._connect(connector)
        self._buffer.extend((fragment, f" BETWEEN {low} AND {high}"))
        return self

    def in_(
        self,
        column: ColumnRef,
        values: Iterable[Any],
        connector: WhereConnector = WhereConnector.NONE
    ) -> 'WhereClause[TCommand]':
        """Append ``<column> IN (<v1>, <v2>, ...)``; values are written verbatim."""
        fragment = self._column(column)
        self._connect(connector)
        value_list = ", ".join(str(value) for value in values)
        self._buffer.extend((fragment, f" IN ({value_list})"))
        return self

    def is_null(self, column: ColumnRef, connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        fragment = self._column(column)
        self._connect(connector)
        self._buffer.extend((fragment, " IS NULL"))
        return self

    def is_not_null(self, column: ColumnRef, connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        fragment = self._column(column)
        self._connect(connector)
        self._buffer.extend((fragment, " IS NOT NULL"))
        return self

    def exists(self, subquery: 'Statement', connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        """Append ``EXISTS (<subquery>)``."""
        self._connect(connector)
        self._buffer.append(f"EXISTS ({subquery.text})")
        return self

    def not_exists(self, subquery: 'Statement', connector: WhereConnector = WhereConnector.NONE) -> 'WhereClause[TCommand]':
        """Append ``NOT EXISTS (<subquery>)``."""
        self._connect(connector)
        self._buffer.append(f"NOT EXISTS ({subquery.text})")
        return self

    def any_(
        self,
        column: ColumnRef,
        operator: SQLOperator,
        subquery: 'Statement',
        connector: WhereConnector = WhereConnector.NONE
    ) -> 'WhereClause[TCommand]':
        """Append ``<column> <operator> ANY (<subquery>)``."""
        return self._quantified(column, operator, "ANY", subquery, connector)

    def all_(
        self,
        column: ColumnRef,
        operator: SQLOperator,
        subquery: 'Statement',
        connector: WhereConnector = WhereConnector.NONE
    ) -> 'WhereClause[TCommand]':
        """Append ``<column> <operator> ALL (<subquery>)``."""
        return self._quantified(column, operator, "ALL", subquery, connector)

    def _quantified(self, column, operator, quantifier, subquery, connector):
        fragment = self._column(column)
        self._connect(connector)
        self._buffer.extend((fragment, f" {operator.symbol.strip()} {quantifier} ({subquery.text})"))
        return self

    def validate(self) -> None:
        """
        Strict mode only: check that every opened group was closed.

        Raises:
            UnbalancedGroupError: If strict and a group is still open
        """
        if self._strict and self._open_groups:
            raise UnbalancedGroupError(f"{self._open_groups} group(s) left open")
