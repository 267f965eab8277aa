"""
=====================
SELECT statement builders.
=====================

Three builders share one implementation:

- SelectCommand: untyped, columns and tables are free text
- TypedSelectCommand[T]: bound to one schema enum; the table name comes
  from the enum and columns are its members
- JoinSelectCommand[T, J]: bound to a primary and a joined schema; every
  column is written fully qualified (``Table.Column``)

Each method appends to the statement buffer and returns the builder, so a
query reads in the order it renders:

    >>> (TypedSelectCommand(Customers)
    ...     .select(Customers.Id, Customers.Name)
    ...     .from_table()
    ...     .start_where()
    ...     .condition(Customers.Status, SQLOperator.EQUAL, "'Active'")
    ...     .end_where()
    ...     .order_by(Customers.Name)
    ...     .render())
    "SELECT Id, Name FROM Customers WHERE Status='Active' ORDER BY Name ASC;"

The builders do not reorder anything: calling ``order_by()`` before
``from_table()`` produces text in that (invalid) order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from sql.base import ConditionalStatement, Statement
from sql.case import CaseClause
from sql.schema import ColumnRef, column_name, qualified_name, table_name
from sql.vocabulary import JoinMode, OrderByMode, SQLOperator

T = TypeVar('T', bound=Enum)
J = TypeVar('J', bound=Enum)


@dataclass(frozen=True)
class AliasMetadata(Generic[T]):
    """A column paired with the alias it is selected as.

    Attributes:
        column: Schema member to select
        alias: Alias written after AS
    """

    column: T
    alias: str


class SelectCommand(ConditionalStatement):
    """
    Untyped SELECT builder.

    Example:
        >>> (SelectCommand()
        ...     .select('id', 'name')
        ...     .from_table('customers')
        ...     .render())
        'SELECT id, name FROM customers;'
    """

    def __init__(self, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._append("SELECT ")
        self._has_columns = False
        self._has_group = False
        self._has_order = False
        self._columns: List[ColumnRef] = []

    @property
    def selected_columns(self) -> Tuple[ColumnRef, ...]:
        """Columns selected so far, in order."""
        return tuple(self._columns)

    def _next_column(self) -> None:
        if self._has_columns:
            self._append(", ")
        else:
            self._has_columns = True

    def _add_columns(self, columns, render=None) -> 'SelectCommand':
        if not columns:
            raise ValueError("At least one column is required")

        for column in columns:
            fragment = self.column_fragment(column)
            self._next_column()
            self._columns.append(column)
            self._append(fragment if render is None else render(column))
        return self

    def select(self, *columns: ColumnRef) -> 'SelectCommand':
        """Append columns to the select list."""
        return self._add_columns(columns)

    def select_all(self) -> 'SelectCommand':
        """Append ``*`` to the select list."""
        self._next_column()
        self._append("*")
        return self

    def distinct(self) -> 'SelectCommand':
        """Write DISTINCT; call before selecting columns."""
        self._append("DISTINCT ")
        return self

    def as_(self, alias: str) -> 'SelectCommand':
        """Alias the last selected expression."""
        self._append(f" AS {alias}")
        return self

    def from_table(self, table: str) -> 'SelectCommand':
        self._append(f" FROM {table}")
        return self

    def join(self, mode: JoinMode, table: str, on_left: str, on_right: str) -> 'SelectCommand':
        """Append ``<mode> <table> ON <on_left>=<on_right>``."""
        self._append(f" {mode.keyword} {table} ON {on_left}={on_right}")
        return self

    def order_by(self, column: ColumnRef, mode: OrderByMode = OrderByMode.ASC) -> 'SelectCommand':
        """Append a sort key; the first call writes ORDER BY."""
        fragment = self.column_fragment(column)
        if self._has_order:
            self._append(", ")
        else:
            self._append(" ORDER BY ")
            self._has_order = True
        self._append(fragment, f" {mode.keyword}")
        return self

    def group_by(self, *columns: ColumnRef) -> 'SelectCommand':
        """Append grouping columns; the first call writes GROUP BY."""
        if not columns:
            raise ValueError("At least one column is required")

        for column in columns:
            fragment = self.column_fragment(column)
            if self._has_group:
                self._append(", ")
            else:
                self._append(" GROUP BY ")
                self._has_group = True
            self._append(fragment)
        return self

    def having(
        self,
        expression: str,
        operator: Optional[SQLOperator] = None,
        value: Any = None
    ) -> 'SelectCommand':
        """
        Append a HAVING condition.

        Args:
            expression: Raw condition, or the left side when operator is given
            operator: Optional comparison operator
            value: Right-hand side used with operator
        """
        if operator is None:
            self._append(f" HAVING {expression}")
        else:
            self._append(f" HAVING {expression}{operator.symbol}{value}")
        return self

    def _aggregate(self, function: str, column: Optional[ColumnRef]) -> 'SelectCommand':
        argument = "*" if column is None else self.column_fragment(column)
        self._next_column()
        self._append(f"{function}(", argument, ")")
        return self

    def count(self, column: Optional[ColumnRef] = None) -> 'SelectCommand':
        """Append ``COUNT(<column>)``, or ``COUNT(*)`` without a column."""
        return self._aggregate("COUNT", column)

    def count_all(self) -> 'SelectCommand':
        return self._aggregate("COUNT", None)

    def min(self, column: ColumnRef) -> 'SelectCommand':
        return self._aggregate("MIN", column)

    def max(self, column: ColumnRef) -> 'SelectCommand':
        return self._aggregate("MAX", column)

    def sum(self, column: ColumnRef) -> 'SelectCommand':
        return self._aggregate("SUM", column)

    def avg(self, column: ColumnRef) -> 'SelectCommand':
        return self._aggregate("AVG", column)

    def union(self, query: Statement) -> 'SelectCommand':
        """Append ``UNION <query>`` (the query's terminator is dropped)."""
        self._append(f" UNION {query.text}")
        return self

    def union_all(self, query: Statement) -> 'SelectCommand':
        self._append(f" UNION ALL {query.text}")
        return self

    def open_parenthesis(self) -> 'SelectCommand':
        self._append(" (")
        return self

    def close_parenthesis(self) -> 'SelectCommand':
        self._append(")")
        return self

    def start_case(self) -> CaseClause:
        """Begin a CASE expression as the next select-list item."""
        self._next_column()
        return CaseClause(self, self._buffer)


class TypedSelectCommand(SelectCommand, Generic[T]):
    """
    SELECT builder bound to one schema enum.

    Members of the bound schema render as bare column names; members of
    other schemas render as ``Table.Column``. Once ``join()`` adds a second
    table every member is qualified, including those written before the
    join.

    Args:
        schema: Enum class whose name is the table and whose members are its columns
        strict: Enable strict-mode validation (defaults to SQL_BUILDER_STRICT)
    """

    def __init__(self, schema: Type[T], strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._schema = schema
        self._bind_schemas(schema)

    @property
    def schema(self) -> Type[T]:
        return self._schema

    def render_column(self, ref: ColumnRef) -> str:
        if not isinstance(ref, Enum):
            return column_name(ref)
        if isinstance(ref, self._schema) and len(self._schemas) == 1:
            return column_name(ref)
        return qualified_name(ref)

    def select(self, *columns: T, qualified: bool = False) -> 'TypedSelectCommand[T]':
        """
        Append schema members to the select list.

        Args:
            columns: Members of the bound schema
            qualified: Write ``Table.Column`` instead of the bare name
        """
        return self._add_columns(columns, qualified_name if qualified else None)

    def select_all(self) -> 'TypedSelectCommand[T]':
        """Append ``*`` and record every member of the schema as selected."""
        self._columns.extend(self._schema)
        return super().select_all()

    def select_as(self, *aliases: AliasMetadata[T]) -> 'TypedSelectCommand[T]':
        """Append ``<column> AS <alias>`` items."""
        if not aliases:
            raise ValueError("At least one alias is required")

        for item in aliases:
            fragment = self.column_fragment(item.column)
            self._next_column()
            self._columns.append(item.column)
            self._append(fragment, f" AS {item.alias}")
        return self

    def from_table(self, table: Optional[str] = None) -> 'TypedSelectCommand[T]':
        """Write FROM with the schema's table name (or an explicit table)."""
        return super().from_table(table or table_name(self._schema))

    def join(self, mode: JoinMode, left: T, right: Enum) -> 'TypedSelectCommand[T]':
        """
        Join the table of ``right``'s schema on ``left = right``.

        The joined schema becomes part of the statement, so its members are
        accepted by later calls in strict mode.
        """
        self.validate_column(left)
        self._bind_schemas(type(right))
        self._append(
            f" {mode.keyword} {table_name(right)} ON {qualified_name(left)}={qualified_name(right)}"
        )
        return self


class JoinSelectCommand(SelectCommand, Generic[T, J]):
    """
    SELECT builder over a primary schema joined with a secondary schema.

    All column references are written fully qualified.

    Example:
        >>> (JoinSelectCommand(Customers, Orders)
        ...     .select(Customers.Name, Orders.Total)
        ...     .from_table()
        ...     .join(JoinMode.INNER_JOIN, Customers.Id, Orders.CustomerId)
        ...     .render())
        'SELECT Customers.Name, Orders.Total FROM Customers INNER JOIN Orders ON Customers.Id=Orders.CustomerId;'
    """

    def __init__(self, primary: Type[T], joined: Type[J], strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._primary = primary
        self._joined = joined
        self._bind_schemas(primary, joined)

    def render_column(self, ref: ColumnRef) -> str:
        return qualified_name(ref)

    def select_all_primary(self) -> 'JoinSelectCommand[T, J]':
        self._next_column()
        self._columns.extend(self._primary)
        self._append(f"{table_name(self._primary)}.*")
        return self

    def select_all_joined(self) -> 'JoinSelectCommand[T, J]':
        self._next_column()
        self._columns.extend(self._joined)
        self._append(f"{table_name(self._joined)}.*")
        return self

    def select_as(self, *aliases: AliasMetadata) -> 'JoinSelectCommand[T, J]':
        if not aliases:
            raise ValueError("At least one alias is required")

        for item in aliases:
            self.validate_column(item.column)
            self._next_column()
            self._columns.append(item.column)
            self._append(f"{qualified_name(item.column)} AS {item.alias}")
        return self

    def from_table(self, table: Optional[str] = None) -> 'JoinSelectCommand[T, J]':
        return super().from_table(table or table_name(self._primary))

    def join(self, mode: JoinMode, left: T, right: J) -> 'JoinSelectCommand[T, J]':
        """Append ``<mode> <Joined> ON <Primary.left>=<Joined.right>``."""
        self.validate_column(left)
        self.validate_column(right)
        self._append(
            f" {mode.keyword} {table_name(self._joined)} ON {qualified_name(left)}={qualified_name(right)}"
        )
        return self
