"""
==================================================
Database connectivity helpers for the CLI.
==================================================

Builds SQLAlchemy engines from the configured connection settings. The
statement builders never open connections themselves: callers create an
engine here (or anywhere else), open a connection, and hand it to the
execution adapters in ``utils.execution``.

Example:
    >>> from utils.database_utils import create_sqlalchemy_engine
    >>> from utils.execution import execute_reader
    >>>
    >>> engine = create_sqlalchemy_engine()
    >>> with engine.connect() as conn:
    ...     rows = execute_reader(statement, conn)
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Exception raised when database connection fails."""
    pass


def create_sqlalchemy_engine(
    drivername: str = None,
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None,
    echo: bool = False
) -> Engine:
    """
    Create a SQLAlchemy engine for the configured database.

    Args:
        drivername: SQLAlchemy driver name
        host: Database hostname
        port: Database port
        user: Database user
        password: Database password
        database: Database name
        echo: Enable SQLAlchemy's own statement logging

    Returns:
        Configured SQLAlchemy Engine
    """
    drivername = drivername or config.db_driver

    if drivername.startswith('sqlite'):
        connection_url = URL.create(drivername=drivername, database=database or config.db_name)
        return create_engine(connection_url, echo=echo)

    connection_url = URL.create(
        drivername=drivername,
        username=user or config.db_user,
        password=password or config.db_password,
        host=host or config.db_host,
        port=port or config.db_port,
        database=database or config.db_name
    )
    return create_engine(connection_url, echo=echo, pool_pre_ping=True)


def check_database_available(engine: Engine) -> bool:
    """
    Check that the engine's database accepts connections.

    Args:
        engine: Engine to probe

    Returns:
        True if ``SELECT 1`` succeeds, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.debug(f"Database not available: {e}")
        return False
