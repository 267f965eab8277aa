"""
===============================
Statement builder error types.
===============================

The builders are permissive: composing a statement never validates the SQL
it produces, and mistakes such as an unbalanced group surface as an engine
error when the statement runs. The strict-mode errors below are raised only
by builders created with ``strict=True`` (or with SQL_BUILDER_STRICT set).

Hierarchy:
    SQLBuilderError
    ├── StrictModeError
    │   ├── UnbalancedGroupError
    │   ├── MissingConnectorError
    │   └── SchemaMismatchError
    └── StatementExecutionError
"""


class SQLBuilderError(Exception):
    """Base exception for the statement builders and execution adapters."""
    pass


class StrictModeError(SQLBuilderError):
    """Raised by strict-mode validation of a clause."""
    pass


class UnbalancedGroupError(StrictModeError):
    """Raised when a group is closed without being opened, or left open at render."""
    pass


class MissingConnectorError(StrictModeError):
    """Raised when a condition after the first one has no connector."""
    pass


class SchemaMismatchError(StrictModeError):
    """Raised when a column reference is not a member of the statement's schemas."""
    pass


class StatementExecutionError(SQLBuilderError):
    """Exception raised when an execution adapter fails to run a statement.

    Attributes:
        statement: SQL text that failed
    """

    def __init__(self, message: str, statement: str = None):
        super().__init__(message)
        self.statement = statement
