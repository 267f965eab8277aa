"""
==============================================
Fluent, schema-driven SQL statement builders.
==============================================

Statements are assembled left to right by chained method calls and rendered
to SQL text. Tables and columns are referenced through enum classes (the
class is the table, its members are the columns), so typed builders catch
a column from the wrong table before anything reaches the database.

The package is organized by statement type:
    - vocabulary.py: operators, connectors, join/order modes, literal quoting
    - schema.py: the enum-as-table convention and name resolution
    - base.py: statement buffer and render contract
    - where.py: WHERE clause composer (conditions, groups, subqueries)
    - case.py: CASE expression composer
    - select.py, delete.py, insert.py, update.py, truncate.py: builders
    - exceptions.py: error hierarchy (strict-mode and execution errors)

Example:
    >>> from enum import auto
    >>> from sql import Schema, SQLOperator, TypedSelectCommand, WhereConnector
    >>>
    >>> class Columns(Schema):
    ...     Status = auto()
    ...     Age = auto()
    >>>
    >>> (TypedSelectCommand(Columns)
    ...     .select_all()
    ...     .from_table()
    ...     .start_where()
    ...     .condition(Columns.Status, SQLOperator.EQUAL, "'Active'")
    ...     .condition(Columns.Age, SQLOperator.GREATER_THAN, 18, WhereConnector.AND)
    ...     .end_where()
    ...     .render())
    "SELECT * FROM Columns WHERE Status='Active' AND Age>18;"
"""

__version__ = "1.0.0"
__all__ = [
    # Vocabulary
    'SQLOperator', 'WhereConnector', 'JoinMode', 'OrderByMode', 'DataType',
    'sql_safe_value',
    # Schema
    'Schema', 'table_name', 'column_name', 'qualified_name', 'column_names',
    # Composers
    'Statement', 'ConditionalStatement', 'WhereClause', 'CaseClause',
    # Builders
    'SelectCommand', 'TypedSelectCommand', 'JoinSelectCommand', 'AliasMetadata',
    'DeleteCommand', 'TypedDeleteCommand',
    'InsertIntoCommand', 'TypedInsertIntoCommand', 'ValuesMetadata',
    'UpdateCommand', 'TypedUpdateCommand', 'UpdateMetadata',
    'TruncateCommand', 'TypedTruncateCommand',
    # Errors
    'SQLBuilderError', 'StrictModeError', 'UnbalancedGroupError',
    'MissingConnectorError', 'SchemaMismatchError', 'StatementExecutionError',
]

from .base import ConditionalStatement, Statement
from .case import CaseClause
from .delete import DeleteCommand, TypedDeleteCommand
from .exceptions import (
    MissingConnectorError,
    SchemaMismatchError,
    SQLBuilderError,
    StatementExecutionError,
    StrictModeError,
    UnbalancedGroupError,
)
from .insert import InsertIntoCommand, TypedInsertIntoCommand, ValuesMetadata
from .schema import Schema, column_name, column_names, qualified_name, table_name
from .select import AliasMetadata, JoinSelectCommand, SelectCommand, TypedSelectCommand
from .truncate import TruncateCommand, TypedTruncateCommand
from .update import TypedUpdateCommand, UpdateCommand, UpdateMetadata
from .vocabulary import DataType, JoinMode, OrderByMode, SQLOperator, WhereConnector, sql_safe_value
from .where import WhereClause
