"""
========================================================
Comprehensive pytest suite for utils/execution.py
========================================================

Sections:
---------
1. Unit tests - Parameter binding, ColumnValueMap, adapter contract with fakes
2. Integration tests - Builders executed against an in-memory SQLite database
3. Edge case tests - Empty results, engine-reported errors

Available markers:
------------------
unit, integration, edge_case

Test Coverage:
--------------
- QueryParameter / bind_parameters / prepare
- ColumnValueMap lookups by schema member and by name
- execute_non_query row counts for INSERT / UPDATE / DELETE
- execute_reader, execute_scalar, execute_dataset results
- Literal colons in quoted values when no parameters are bound
- Typed joins over tables that share a column name
- SQLAlchemyError wrapped as StatementExecutionError
- Adapters never commit or close the caller's connection

How to Execute:
---------------
All tests:          pytest tests/tests_utils/test_execution.py -v
By category:        pytest tests/tests_utils/test_execution.py -m integration
With coverage:      pytest tests/tests_utils/test_execution.py --cov=utils.execution

Note: Use 'python -m pytest' (not just 'pytest') to ensure correct Python path resolution.
"""

from enum import auto
from unittest.mock import MagicMock

import pandas as pd
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.elements import TextClause

from sql.delete import TypedDeleteCommand
from sql.exceptions import StatementExecutionError
from sql.insert import TypedInsertIntoCommand, ValuesMetadata
from sql.schema import Schema
from sql.select import SelectCommand, TypedSelectCommand
from sql.update import TypedUpdateCommand, UpdateMetadata
from sql.vocabulary import DataType, JoinMode, SQLOperator, WhereConnector
from utils.execution import (
    ColumnValueMap,
    QueryParameter,
    bind_parameters,
    execute_dataset,
    execute_non_query,
    execute_reader,
    execute_scalar,
    prepare,
)

# ====================
# Test Schemas
# ====================

class Customers(Schema):
    Id = auto()
    Name = auto()
    Status = auto()
    Age = auto()


class Orders(Schema):
    Id = auto()
    CustomerId = auto()
    Total = auto()


CUSTOMER_ROWS = [
    (1, 'Ada', 'Active', 36),
    (2, 'Bob', 'Inactive', 17),
    (3, 'Cy', 'Active', 25),
]


# ====================
# Fixtures
# ====================

@pytest.fixture
def sqlite_connection():
    """In-memory SQLite connection with a populated Customers table."""
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        conn.execute(text(
            "CREATE TABLE Customers (Id INTEGER PRIMARY KEY, Name TEXT, Status TEXT, Age INTEGER)"
        ))
        for row_id, name, status, age in CUSTOMER_ROWS:
            execute_non_query(
                TypedInsertIntoCommand(Customers)
                .column(Customers.Id, Customers.Name, Customers.Status, Customers.Age)
                .values(
                    ValuesMetadata(row_id, DataType.NUMERIC),
                    ValuesMetadata(name),
                    ValuesMetadata(status),
                    ValuesMetadata(age, DataType.NUMERIC),
                ),
                conn
            )
        yield conn
    engine.dispose()


@pytest.fixture
def mock_connection():
    """Connection double recording execute() calls."""
    conn = MagicMock()
    conn.execute.return_value = MagicMock(rowcount=2)
    return conn


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_query_parameter_strips_prefix():
    assert QueryParameter('@status', 'A').key == 'status'
    assert QueryParameter(':status', 'A').key == 'status'
    assert QueryParameter('status', 'A').key == 'status'


@pytest.mark.unit
def test_bind_parameters_accepts_all_forms():
    assert bind_parameters() == {}
    assert bind_parameters(QueryParameter('@id', 1)) == {'id': 1}
    assert bind_parameters([QueryParameter('a', 1), QueryParameter(':b', 2)]) == {'a': 1, 'b': 2}
    assert bind_parameters({'@a': 1, 'b': 2}) == {'a': 1, 'b': 2}


@pytest.mark.unit
def test_prepare_renders_builder():
    statement = SelectCommand().select_all().from_table('t').start_where().raw_condition("id = :id").end_where()

    clause, params = prepare(statement, QueryParameter('@id', 7))

    assert isinstance(clause, TextClause)
    assert clause.text == "SELECT * FROM t WHERE id = :id;"
    assert params == {'id': 7}


@pytest.mark.unit
def test_prepare_accepts_rendered_text():
    clause, params = prepare("SELECT 1;")

    assert clause.text == "SELECT 1;"
    assert params == {}


@pytest.mark.unit
def test_prepare_without_parameters_keeps_colons_literal():
    clause, params = prepare("SELECT * FROM t WHERE note = 'at :noon';")

    assert params == {}
    assert str(clause) == "SELECT * FROM t WHERE note = 'at :noon';"


@pytest.mark.unit
def test_column_value_map_lookups():
    row = ColumnValueMap({'Id': 1, 'Name': 'Ada'})

    assert row[Customers.Name] == 'Ada'
    assert row['Id'] == 1
    assert row.get(Customers.Status) is None
    assert row.get(Customers.Status, 'n/a') == 'n/a'
    assert Customers.Id in row
    assert 'Age' not in row
    assert len(row) == 2
    assert list(row) == ['Id', 'Name']


@pytest.mark.unit
def test_column_value_map_missing_key_raises():
    with pytest.raises(KeyError):
        ColumnValueMap({})[Customers.Id]


@pytest.mark.unit
def test_adapter_uses_callers_connection_without_committing(mock_connection):
    affected = execute_non_query(TypedDeleteCommand(Customers), mock_connection)

    assert affected == 2
    mock_connection.execute.assert_called_once()
    clause, params = mock_connection.execute.call_args[0]
    assert clause.text == "DELETE FROM Customers;"
    assert params == {}
    mock_connection.commit.assert_not_called()
    mock_connection.close.assert_not_called()


@pytest.mark.unit
def test_sqlalchemy_error_is_wrapped(mock_connection):
    mock_connection.execute.side_effect = OperationalError("DELETE FROM Customers;", {}, Exception("locked"))

    with pytest.raises(StatementExecutionError) as exc_info:
        execute_non_query(TypedDeleteCommand(Customers), mock_connection)

    assert exc_info.value.statement == "DELETE FROM Customers;"


# =======================
# 2. INTEGRATION TESTS
# =======================

@pytest.mark.integration
def test_execute_reader_returns_rows(sqlite_connection):
    statement = (TypedSelectCommand(Customers)
                 .select(Customers.Name, Customers.Age)
                 .from_table()
                 .start_where()
                 .condition(Customers.Status, SQLOperator.EQUAL, "'Active'")
                 .condition(Customers.Age, SQLOperator.GREATER_THAN, 18, WhereConnector.AND)
                 .end_where()
                 .order_by(Customers.Name))

    rows = execute_reader(statement, sqlite_connection)

    assert [row.get(Customers.Name) for row in rows] == ['Ada', 'Cy']
    assert rows[0][Customers.Age] == 36


@pytest.mark.integration
def test_execute_reader_with_bound_parameter(sqlite_connection):
    statement = (TypedSelectCommand(Customers)
                 .select(Customers.Name)
                 .from_table()
                 .start_where()
                 .raw_condition("Status = :status")
                 .end_where())

    rows = execute_reader(statement, sqlite_connection, QueryParameter('@status', 'Inactive'))

    assert len(rows) == 1
    assert rows[0]['Name'] == 'Bob'


@pytest.mark.integration
def test_execute_scalar_count(sqlite_connection):
    statement = TypedSelectCommand(Customers).count_all().from_table()
    assert execute_scalar(statement, sqlite_connection) == 3


@pytest.mark.integration
def test_execute_dataset(sqlite_connection):
    statement = TypedSelectCommand(Customers).select_all().from_table().order_by(Customers.Id)

    frame = execute_dataset(statement, sqlite_connection)

    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ['Id', 'Name', 'Status', 'Age']
    assert frame['Name'].tolist() == ['Ada', 'Bob', 'Cy']


@pytest.mark.integration
def test_update_and_delete_row_counts(sqlite_connection):
    update = (TypedUpdateCommand(Customers)
              .set(UpdateMetadata(Customers.Status, 'Inactive'))
              .start_where()
              .condition(Customers.Age, SQLOperator.LESS_THAN, 30)
              .end_where())
    delete = (TypedDeleteCommand(Customers)
              .start_where()
              .condition(Customers.Status, SQLOperator.EQUAL, "'Inactive'")
              .end_where())

    assert execute_non_query(update, sqlite_connection) == 2
    assert execute_non_query(delete, sqlite_connection) == 2
    assert execute_scalar("SELECT COUNT(*) FROM Customers;", sqlite_connection) == 1


@pytest.mark.integration
def test_typed_join_on_tables_sharing_a_column(sqlite_connection):
    sqlite_connection.execute(text("CREATE TABLE Orders (Id INTEGER PRIMARY KEY, CustomerId INTEGER, Total INTEGER)"))
    sqlite_connection.execute(text("INSERT INTO Orders VALUES (10, 1, 50), (11, 1, 70), (12, 3, 20)"))
    statement = (TypedSelectCommand(Customers)
                 .select(Customers.Name, Orders.Total)
                 .from_table()
                 .join(JoinMode.INNER_JOIN, Customers.Id, Orders.CustomerId)
                 .start_where()
                 .condition(Customers.Id, SQLOperator.EQUAL, 1)
                 .end_where()
                 .order_by(Orders.Id))

    rows = execute_reader(statement, sqlite_connection)

    assert [(row[Customers.Name], row[Orders.Total]) for row in rows] == [('Ada', 50), ('Ada', 70)]


# ====================
# 3. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_execute_scalar_without_rows(sqlite_connection):
    statement = (TypedSelectCommand(Customers)
                 .select(Customers.Name)
                 .from_table()
                 .start_where()
                 .condition(Customers.Id, SQLOperator.EQUAL, 99)
                 .end_where())

    assert execute_scalar(statement, sqlite_connection) is None


@pytest.mark.edge_case
def test_empty_dataset_keeps_columns(sqlite_connection):
    statement = (TypedSelectCommand(Customers)
                 .select(Customers.Id, Customers.Name)
                 .from_table()
                 .start_where()
                 .condition(Customers.Age, SQLOperator.GREATER_THAN, 100)
                 .end_where())

    frame = execute_dataset(statement, sqlite_connection)

    assert frame.empty
    assert list(frame.columns) == ['Id', 'Name']


@pytest.mark.edge_case
def test_colon_inside_quoted_value_is_not_a_placeholder(sqlite_connection):
    insert = (TypedInsertIntoCommand(Customers)
              .column(Customers.Id, Customers.Name)
              .values(ValuesMetadata(4, DataType.NUMERIC), ValuesMetadata('see :ref')))
    query = (TypedSelectCommand(Customers)
             .select(Customers.Id)
             .from_table()
             .start_where()
             .condition(Customers.Name, SQLOperator.EQUAL, "'see :ref'")
             .end_where())

    assert execute_non_query(insert, sqlite_connection) == 1
    assert execute_scalar(query, sqlite_connection) == 4


@pytest.mark.edge_case
def test_unbalanced_group_is_reported_by_engine(sqlite_connection):
    """Malformed text is not caught by the builder; the database rejects it."""
    statement = (TypedSelectCommand(Customers)
                 .select_all()
                 .from_table()
                 .start_where()
                 .condition(Customers.Id, SQLOperator.EQUAL, 1)
                 .close_group()
                 .end_where())

    with pytest.raises(StatementExecutionError) as exc_info:
        execute_reader(statement, sqlite_connection)

    assert exc_info.value.statement == "SELECT * FROM Customers WHERE Id=1);"


@pytest.mark.edge_case
def test_unknown_table_is_reported_by_engine(sqlite_connection):
    with pytest.raises(StatementExecutionError):
        execute_reader(SelectCommand().select_all().from_table('Missing'), sqlite_connection)


@pytest.mark.edge_case
def test_dataset_from_statement_without_rows_is_wrapped(sqlite_connection):
    delete = (TypedDeleteCommand(Customers)
              .start_where()
              .condition(Customers.Id, SQLOperator.EQUAL, 2)
              .end_where())

    with pytest.raises(StatementExecutionError) as exc_info:
        execute_dataset(delete, sqlite_connection)

    assert exc_info.value.statement == "DELETE FROM Customers WHERE Id=2;"
