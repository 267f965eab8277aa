"""
=============================================
Pytest suite for sql/vocabulary.py
=============================================

Sections:
---------
1. Unit tests - Rendered text of each enumeration
2. Edge case tests - Literal quoting

Available markers:
------------------
unit, edge_case

Test Coverage:
--------------
- SQLOperator.symbol for every operator
- WhereConnector.keyword (including NONE)
- JoinMode / OrderByMode keywords
- sql_safe_value quoting by DataType

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_vocabulary.py -v
By category:        pytest tests/tests_sql/test_vocabulary.py -m unit
With coverage:      pytest tests/tests_sql/test_vocabulary.py --cov=sql.vocabulary
"""

import pytest

from sql.vocabulary import (
    DataType,
    JoinMode,
    OrderByMode,
    SQLOperator,
    WhereConnector,
    sql_safe_value,
)

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
@pytest.mark.parametrize("operator, symbol", [
    (SQLOperator.EQUAL, "="),
    (SQLOperator.NOT_EQUAL, "<>"),
    (SQLOperator.GREATER_THAN, ">"),
    (SQLOperator.GREATER_THAN_EQUAL, ">="),
    (SQLOperator.LESS_THAN, "<"),
    (SQLOperator.LESS_THAN_EQUAL, "<="),
    (SQLOperator.LIKE, " LIKE "),
])
def test_operator_symbols(operator, symbol):
    """Each operator renders as its SQL symbol."""
    assert operator.symbol == symbol


@pytest.mark.unit
def test_connector_keywords():
    """AND/OR render as keywords, NONE renders as nothing."""
    assert WhereConnector.AND.keyword == "AND"
    assert WhereConnector.OR.keyword == "OR"
    assert WhereConnector.NONE.keyword == ""


@pytest.mark.unit
def test_join_mode_keywords():
    """Join modes render with spaces between words."""
    assert JoinMode.INNER_JOIN.keyword == "INNER JOIN"
    assert JoinMode.LEFT_JOIN.keyword == "LEFT JOIN"
    assert JoinMode.RIGHT_JOIN.keyword == "RIGHT JOIN"
    assert JoinMode.FULL_OUTER_JOIN.keyword == "FULL OUTER JOIN"


@pytest.mark.unit
def test_order_by_mode_keywords():
    assert OrderByMode.ASC.keyword == "ASC"
    assert OrderByMode.DESC.keyword == "DESC"


@pytest.mark.unit
def test_sql_safe_value_quotes_non_numeric():
    assert sql_safe_value("Active", DataType.NON_NUMERIC) == "'Active'"


@pytest.mark.unit
def test_sql_safe_value_leaves_numeric_unquoted():
    assert sql_safe_value(42, DataType.NUMERIC) == "42"
    assert sql_safe_value(3.5, DataType.NUMERIC) == "3.5"


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_sql_safe_value_does_not_escape_quotes():
    """Values are assumed SQL-safe; embedded quotes are not doubled."""
    assert sql_safe_value("O'Brien", DataType.NON_NUMERIC) == "'O'Brien'"


@pytest.mark.edge_case
def test_sql_safe_value_quotes_numbers_marked_non_numeric():
    assert sql_safe_value(7, DataType.NON_NUMERIC) == "'7'"
