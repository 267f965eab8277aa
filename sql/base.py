"""
==============================
Statement buffer and rendering.
==============================

Every builder in this package is a ``Statement``: it owns a private list of
text fragments that its fluent methods append to, and renders the joined
fragments followed by the statement terminator.

Rendering never mutates the buffer, so ``render()`` (or ``str()``) can be
called any number of times and always returns the same text for the same
builder state.

Builders that accept a WHERE clause derive from ``ConditionalStatement``,
which hands out a single ``WhereClause`` bound to the same buffer.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Type, Union

from core.config import config
from sql.exceptions import SchemaMismatchError
from sql.schema import ColumnRef, column_name, is_column_of, table_name
from sql.where import WhereClause

logger = logging.getLogger(__name__)

TERMINATOR = ";"


class ColumnFragment:
    """Column reference written to a buffer and rendered with the statement.

    Rendering is deferred so that a schema bound later (e.g. by a join)
    still decides whether earlier references are qualified.
    """

    __slots__ = ('_statement', '_ref')

    def __init__(self, statement: 'Statement', ref: ColumnRef):
        self._statement = statement
        self._ref = ref

    def __str__(self) -> str:
        return self._statement.render_column(self._ref)


class Statement:
    """
    Base class for all statement builders.

    Attributes:
        strict: Whether opt-in clause validation is enabled for this builder
    """

    def __init__(self, strict: Optional[bool] = None):
        self._buffer: List[Union[str, ColumnFragment]] = []
        self._schemas: Sequence[Type[Enum]] = ()
        self.strict = config.strict_mode if strict is None else strict

    def _append(self, *fragments: Union[str, ColumnFragment]) -> None:
        self._buffer.extend(fragments)

    def _bind_schemas(self, *schemas: Type[Enum]) -> None:
        """Declare the schemas whose members this statement may reference."""
        self._schemas = tuple(self._schemas) + tuple(
            schema for schema in schemas if schema not in self._schemas
        )

    def _closing(self) -> str:
        """Text that completes the statement body (e.g. a pending parenthesis)."""
        return ""

    def _validate(self) -> None:
        """Strict-mode checks run before rendering."""
        pass

    @property
    def schemas(self) -> Sequence[Type[Enum]]:
        """Schemas bound to this statement (empty for untyped builders)."""
        return tuple(self._schemas)

    def render_column(self, ref: ColumnRef) -> str:
        """Render a column reference the way this statement writes columns."""
        return column_name(ref)

    def column_fragment(self, ref: ColumnRef) -> ColumnFragment:
        """Validate a column reference and wrap it for the buffer."""
        self.validate_column(ref)
        return ColumnFragment(self, ref)

    def validate_column(self, ref: ColumnRef) -> None:
        """
        Strict mode only: reject columns foreign to the bound schemas.

        Raises:
            SchemaMismatchError: If strict and the reference is not a member
                of any schema bound to the statement
        """
        if not self.strict or not self._schemas:
            return
        if not is_column_of(ref, self._schemas):
            tables = ", ".join(table_name(schema) for schema in self._schemas)
            raise SchemaMismatchError(f"{ref!r} is not a column of {tables}")

    @property
    def text(self) -> str:
        """Statement text without the terminator (used for subqueries)."""
        return "".join(str(fragment) for fragment in self._buffer) + self._closing()

    def render(self) -> str:
        """
        Render the finished statement, terminated with ``;``.

        Returns:
            SQL statement text
        """
        self._validate()
        sql = self.text + TERMINATOR
        if config.log_statements:
            logger.debug(f"Rendered statement: {sql}")
        return sql

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.text!r}>"


class ConditionalStatement(Statement):
    """Statement that supports a WHERE clause."""

    def __init__(self, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._where: Optional[WhereClause] = None

    def start_where(self, grouped: bool = False) -> WhereClause:
        """
        Begin (or resume) the WHERE clause of this statement.

        The first call writes ``WHERE`` (``WHERE (`` when grouped) and
        returns the clause composer; later calls return the same composer
        without writing anything.

        Args:
            grouped: Open a group right after the WHERE keyword

        Returns:
            WhereClause bound to this statement
        """
        if self._where is None:
            self._where = WhereClause(self, self._buffer, grouped=grouped)
        return self._where

    def _validate(self) -> None:
        if self._where is not None:
            self._where.validate()
