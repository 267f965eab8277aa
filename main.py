"""
=========================================================
Command-line entry point for the SQL statement builders.
=========================================================

Builds a SELECT, DELETE or TRUNCATE statement from command-line arguments,
prints the rendered SQL and, on request, runs it against the configured
database through the execution adapters.

Architecture:
    1. Statement construction (sql.*) - pure text, no connection needed
    2. Database connectivity (utils.database_utils) - ONLY with --execute
    3. Execution (utils.execution) - caller-owned transaction
    4. Application logging (core.logger)

Usage:
    # Render a query
    python main.py --select customers --columns id,name --where "age > 18"

    # Several conditions joined with OR, sorted descending
    python main.py --select customers --where "status = 'A'" --where "status = 'B'" \\
        --connector OR --order-by name --desc

    # Render and run a delete
    python main.py --delete customers --where "id = 5" --execute

Example:
    >>> from main import build_statement, parse_args
    >>>
    >>> args = parse_args(['--select', 'customers', '--where', 'age > 18'])
    >>> build_statement(args).render()
    'SELECT * FROM customers WHERE age > 18;'
"""

import argparse
import sys
from typing import List, Optional

from core.config import config
from core.logger import get_logger, set_level
from sql import (
    DeleteCommand,
    OrderByMode,
    SelectCommand,
    SQLBuilderError,
    Statement,
    TruncateCommand,
    WhereConnector,
)
from utils.database_utils import (
    DatabaseConnectionError,
    check_database_available,
    create_sqlalchemy_engine,
)
from utils.execution import execute_dataset, execute_non_query

logger = get_logger(__name__)


class CommandLineError(Exception):
    """Exception raised for invalid argument combinations."""
    pass


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Fluent SQL statement builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render a query
  python main.py --select customers --columns id,name --where "age > 18"

  # Conditions joined with OR
  python main.py --select customers --where "status = 'A'" --where "status = 'B'" --connector OR

  # Run a delete against the configured database
  python main.py --delete customers --where "id = 5" --execute

Configuration:
  Connection settings come from DB_DRIVER, DB_HOST, DB_PORT, DB_USER,
  DB_PASSWORD and DB_NAME (.env at the project root is loaded).
        """
    )

    statement = parser.add_mutually_exclusive_group()
    statement.add_argument('--select', metavar='TABLE', help='Build a SELECT from TABLE')
    statement.add_argument('--delete', metavar='TABLE', help='Build a DELETE FROM TABLE')
    statement.add_argument('--truncate', metavar='TABLE', help='Build a TRUNCATE TABLE')

    parser.add_argument(
        '--columns',
        type=str,
        help='Comma-separated columns to select (default: *)'
    )
    parser.add_argument(
        '--where',
        action='append',
        default=[],
        metavar='CONDITION',
        help='Condition text, repeat for several conditions'
    )
    parser.add_argument(
        '--connector',
        choices=['AND', 'OR'],
        default='AND',
        help='Connector placed between conditions (default: AND)'
    )
    parser.add_argument('--order-by', metavar='COLUMN', help='Sort column for SELECT')
    parser.add_argument('--desc', action='store_true', help='Sort descending')
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Enable strict-mode validation of the WHERE clause'
    )
    parser.add_argument(
        '--execute',
        action='store_true',
        help='Run the statement against the configured database'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    return parser.parse_args(argv)


def _apply_where(statement, conditions: List[str], connector: WhereConnector) -> None:
    if not conditions:
        return

    clause = statement.start_where()
    for condition in conditions:
        clause.raw_condition(condition, connector)


def build_statement(args: argparse.Namespace) -> Statement:
    """
    Build the statement described by the parsed arguments.

    Raises:
        CommandLineError: If no statement type was given, or options do not
            apply to the chosen statement
    """
    strict = True if args.strict else None
    connector = WhereConnector[args.connector]

    if args.select:
        query = SelectCommand(strict=strict)
        if args.columns:
            columns = [column.strip() for column in args.columns.split(',') if column.strip()]
            if not columns:
                raise CommandLineError("--columns needs at least one column name")
            query.select(*columns)
        else:
            query.select_all()
        query.from_table(args.select)
        _apply_where(query, args.where, connector)
        if args.order_by:
            query.order_by(args.order_by, OrderByMode.DESC if args.desc else OrderByMode.ASC)
        return query

    if args.columns or args.order_by:
        raise CommandLineError("--columns and --order-by only apply to --select")

    if args.delete:
        command = DeleteCommand(args.delete, strict=strict)
        _apply_where(command, args.where, connector)
        return command

    if args.truncate:
        if args.where:
            raise CommandLineError("--where does not apply to --truncate")
        return TruncateCommand(args.truncate, strict=strict)

    raise CommandLineError("No statement specified. Use --select, --delete or --truncate")


def run_statement(statement: Statement) -> None:
    """
    Execute a statement against the configured database in one transaction.

    Queries print their result set; other statements log the affected row count.

    Raises:
        DatabaseConnectionError: If the database is not reachable
    """
    engine = create_sqlalchemy_engine()
    try:
        if not check_database_available(engine):
            raise DatabaseConnectionError(
                f"Database at {config.db_host}:{config.db_port}/{config.db_name} is not available"
            )

        with engine.begin() as conn:
            if isinstance(statement, SelectCommand):
                frame = execute_dataset(statement, conn)
                print(frame.to_string(index=False))
                logger.info(f"✅ {len(frame)} row(s) returned")
            else:
                affected = execute_non_query(statement, conn)
                logger.info(f"✅ {affected} row(s) affected")
    finally:
        engine.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line interface for the statement builders.

    Exit Codes:
        0: Success
        1: Error
        130: User interrupt (Ctrl+C)
    """
    args = parse_args(argv)

    if args.verbose:
        set_level("DEBUG")

    try:
        statement = build_statement(args)
        sql = statement.render()
        print(sql)

        if args.execute:
            run_statement(statement)
        return 0

    except CommandLineError as e:
        logger.error(f"❌ {e}")
        return 1
    except (SQLBuilderError, DatabaseConnectionError) as e:
        logger.error(f"❌ Statement failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("\n⚠️  Operation interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"\n❌ Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
