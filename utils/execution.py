"""
==========================================
Execution adapters for rendered statements.
==========================================

Runs statements produced by the builders through a caller-supplied
SQLAlchemy ``Connection`` or ``Session``. The adapters never open, commit
or close the connection: transaction scope belongs to the caller.

Statements may be passed either as builders or as already rendered text.
Values can be written into the statement directly, or referenced as
``:name`` placeholders and supplied as bound parameters, which avoids
quoting them by hand.

A statement run without parameters is sent with every colon taken
literally, so text such as 'see :ref' inside a quoted value is safe. When
parameters are given, ``:name`` marks a placeholder and a literal colon
followed by a word must be written as ``\\:``.

Available adapters:
    - execute_non_query: run a DML/DDL statement, return the affected row count
    - execute_reader: return every row as a ColumnValueMap
    - execute_scalar: return the first column of the first row
    - execute_dataset: return the result as a pandas DataFrame

Example:
    >>> from sqlalchemy import create_engine
    >>> from utils.execution import QueryParameter, execute_reader
    >>>
    >>> engine = create_engine("sqlite://")
    >>> statement = (TypedSelectCommand(Customers)
    ...     .select_all()
    ...     .from_table()
    ...     .start_where()
    ...     .raw_condition("Status = :status")
    ...     .end_where())
    >>> with engine.connect() as conn:
    ...     rows = execute_reader(statement, conn, QueryParameter('status', 'Active'))
    >>> rows[0].get(Customers.Name)
    'Ada'
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import pandas as pd
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from sql.base import Statement
from sql.exceptions import StatementExecutionError
from sql.schema import ColumnRef, column_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryParameter:
    """A named bound parameter.

    Attributes:
        name: Placeholder name; a leading ``@`` or ``:`` is ignored
        value: Value bound to the placeholder
    """

    name: str
    value: Any

    @property
    def key(self) -> str:
        """Placeholder name without its prefix."""
        return self.name.lstrip('@:')


Parameters = Union[None, QueryParameter, Iterable[QueryParameter], Mapping[str, Any]]


class ColumnValueMap(Mapping):
    """
    Read-only mapping of one result row, keyed by column name.

    ``get()`` and item access accept a schema member as well as a string.
    """

    def __init__(self, values: Mapping[str, Any]):
        self._values = dict(values)

    def __getitem__(self, key: ColumnRef) -> Any:
        return self._values[column_name(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (Enum, str)):
            return column_name(key) in self._values
        return False

    def __repr__(self) -> str:
        return f"ColumnValueMap({self._values!r})"


def bind_parameters(parameters: Parameters = None) -> Dict[str, Any]:
    """
    Normalize bound parameters into a dict for SQLAlchemy.

    Args:
        parameters: None, a QueryParameter, an iterable of them, or a mapping

    Returns:
        Dictionary of placeholder name to value
    """
    if parameters is None:
        return {}
    if isinstance(parameters, QueryParameter):
        return {parameters.key: parameters.value}
    if isinstance(parameters, Mapping):
        return {str(name).lstrip('@:'): value for name, value in parameters.items()}
    return {parameter.key: parameter.value for parameter in parameters}


def _statement_text(statement: Union[Statement, str]) -> str:
    if isinstance(statement, Statement):
        return statement.render()
    return statement


def _text_clause(sql: str, params: Dict[str, Any]) -> TextClause:
    """Build the clause; without parameters no colon is read as a placeholder."""
    if params:
        return text(sql)
    return text(sql.replace(":", r"\:"))


def prepare(statement: Union[Statement, str], parameters: Parameters = None) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Turn a builder (or rendered text) into an executable clause.

    Returns:
        Tuple of (sqlalchemy TextClause, bound parameter dict)
    """
    params = bind_parameters(parameters)
    return _text_clause(_statement_text(statement), params), params


def _execute(statement, connection, parameters, fetch: Callable[[Any], Any]):
    """Run the statement and read its result with ``fetch``, wrapping driver errors."""
    sql = _statement_text(statement)
    params = bind_parameters(parameters)
    logger.debug(f"Executing: {sql} {params}")
    try:
        return fetch(connection.execute(_text_clause(sql, params), params))
    except SQLAlchemyError as e:
        logger.error(f"Statement failed: {sql}: {e}")
        raise StatementExecutionError(f"Failed to execute statement: {e}", statement=sql)


def _first_value(result) -> Optional[Any]:
    row = result.first()
    return None if row is None else row[0]


def _to_frame(result) -> pd.DataFrame:
    columns = list(result.keys())
    return pd.DataFrame([tuple(row) for row in result], columns=columns)


def execute_non_query(statement: Union[Statement, str], connection, parameters: Parameters = None) -> int:
    """
    Execute a statement that returns no rows.

    Args:
        statement: Builder or rendered statement text
        connection: SQLAlchemy Connection or Session
        parameters: Bound parameters

    Returns:
        Number of affected rows as reported by the driver

    Raises:
        StatementExecutionError: If the database rejects the statement
    """
    return _execute(statement, connection, parameters, lambda result: result.rowcount)


def execute_reader(statement: Union[Statement, str], connection, parameters: Parameters = None) -> List[ColumnValueMap]:
    """
    Execute a query and return one ColumnValueMap per row.

    Raises:
        StatementExecutionError: If the database rejects the statement
    """
    return _execute(
        statement, connection, parameters,
        lambda result: [ColumnValueMap(row) for row in result.mappings()]
    )


def execute_scalar(statement: Union[Statement, str], connection, parameters: Parameters = None) -> Optional[Any]:
    """Execute a query and return the first column of the first row, or None."""
    return _execute(statement, connection, parameters, _first_value)


def execute_dataset(statement: Union[Statement, str], connection, parameters: Parameters = None) -> pd.DataFrame:
    """
    Execute a query and load the result into a DataFrame.

    Column names come from the result set, so an empty result still has
    its columns.

    Raises:
        StatementExecutionError: If the database rejects the statement
    """
    return _execute(statement, connection, parameters, _to_frame)
