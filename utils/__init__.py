"""
==========================
Utility Functions Package.
==========================

Database connectivity and statement execution helpers.

Modules:
    database_utils: SQLAlchemy engine construction and availability checks
    execution: adapters that run rendered statements on a caller's connection
"""

__version__ = "1.0.0"
__all__ = [
    'create_sqlalchemy_engine',
    'check_database_available',
    'DatabaseConnectionError',
    'QueryParameter',
    'ColumnValueMap',
    'bind_parameters',
    'prepare',
    'execute_non_query',
    'execute_reader',
    'execute_scalar',
    'execute_dataset',
]

from .database_utils import (
    DatabaseConnectionError,
    check_database_available,
    create_sqlalchemy_engine,
)
from .execution import (
    ColumnValueMap,
    QueryParameter,
    bind_parameters,
    execute_dataset,
    execute_non_query,
    execute_reader,
    execute_scalar,
    prepare,
)
