"""
=======================
SQL keyword vocabulary.
=======================

Closed enumerations used by the statement builders, each mapped to the
SQL text it renders as:

- SQLOperator: comparison operators for conditions (=, <>, >, LIKE, ...)
- WhereConnector: logical connectors between conditions (AND, OR, none)
- JoinMode: join strategies for two-table SELECTs
- OrderByMode: ASC / DESC
- DataType: numeric vs. non-numeric literals (controls quoting)

Usage:
    from sql.vocabulary import SQLOperator, WhereConnector

    SQLOperator.GREATER_THAN.symbol   # '>'
    WhereConnector.AND.keyword        # 'AND'
"""

from enum import Enum
from typing import Any


class SQLOperator(Enum):
    """Comparison operators accepted by typed conditions."""

    EQUAL = "="
    NOT_EQUAL = "<>"
    GREATER_THAN = ">"
    GREATER_THAN_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_EQUAL = "<="
    # padded so that column + symbol + value reads "Name LIKE 'a%'"
    LIKE = " LIKE "

    @property
    def symbol(self) -> str:
        """SQL text of the operator."""
        return self.value


class WhereConnector(Enum):
    """Logical connectors placed between successive conditions."""

    NONE = ""
    AND = "AND"
    OR = "OR"

    @property
    def keyword(self) -> str:
        """SQL keyword of the connector (empty for NONE)."""
        return self.value


class JoinMode(Enum):
    """Join strategies for combining a primary and a joined table."""

    INNER_JOIN = "INNER JOIN"
    LEFT_JOIN = "LEFT JOIN"
    RIGHT_JOIN = "RIGHT JOIN"
    FULL_OUTER_JOIN = "FULL OUTER JOIN"

    @property
    def keyword(self) -> str:
        return self.value


class OrderByMode(Enum):
    """Sort direction for ORDER BY."""

    ASC = "ASC"
    DESC = "DESC"

    @property
    def keyword(self) -> str:
        return self.value


class DataType(Enum):
    """Classification of a literal as numeric or non-numeric."""

    NUMERIC = "numeric"
    NON_NUMERIC = "non_numeric"


def sql_safe_value(value: Any, data_type: DataType) -> str:
    """
    Render a literal for inclusion in statement text.

    Non-numeric values are wrapped in single quotes, numeric values are
    rendered as-is. No escaping is performed: the value is assumed to be
    SQL-safe already.

    Args:
        value: Literal value
        data_type: Whether the value is numeric

    Returns:
        SQL literal text
    """
    if data_type is DataType.NON_NUMERIC:
        return f"'{value}'"
    return str(value)
