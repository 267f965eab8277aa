"""
=============================================
Configuration management for the SQL builder.
=============================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system covers:
- Connection settings handed to the execution adapters
- Builder behaviour (strict mode, statement logging)
- Default log level for the CLI and library logging

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection
    >>> engine_url = config.get_connection_string()
    >>>
    >>> # Builder behaviour
    >>> print(f"Strict mode: {config.strict_mode}")
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUTHY = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: str = 'false') -> bool:
    """Read a boolean flag from the environment."""
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        drivername: SQLAlchemy driver name (e.g. postgresql, mysql+pymysql, sqlite)
        host: Database server hostname or IP address
        port: Database server port number
        user: Database username
        password: Database password
        database: Database name statements run against
    """

    drivername: str
    host: str
    port: int
    user: str
    password: str
    database: str

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible connection string
        """
        return (
            f"{self.drivername}://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )

    def get_connection_params(self) -> dict:
        """Get connection parameters as dictionary.

        Returns:
            Dictionary with keys: drivername, host, port, user, password, database
        """
        return {
            'drivername': self.drivername,
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database
        }


@dataclass
class BuilderConfig:
    """Statement builder settings.

    Attributes:
        strict_mode: Default for the opt-in clause validation of new builders
        log_statements: Log every rendered statement at DEBUG level
        log_level: Default logging level for the CLI
    """

    strict_mode: bool
    log_statements: bool
    log_level: str


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        db: DatabaseConfig instance with database connection settings
        builder: BuilderConfig instance with statement builder settings

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            drivername=os.getenv('DB_DRIVER', 'postgresql'),
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', '5432')),
            user=os.getenv('DB_USER', 'postgres'),
            password=os.getenv('DB_PASSWORD', ''),
            database=os.getenv('DB_NAME', 'postgres')
        )

        self.builder = BuilderConfig(
            strict_mode=_env_flag('SQL_BUILDER_STRICT'),
            log_statements=_env_flag('SQL_BUILDER_LOG_STATEMENTS', 'true'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper()
        )

    @property
    def db_driver(self) -> str:
        """Get SQLAlchemy driver name."""
        return self.db.drivername

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get database name."""
        return self.db.database

    @property
    def strict_mode(self) -> bool:
        """Whether new builders validate clauses by default."""
        return self.builder.strict_mode

    @property
    def log_statements(self) -> bool:
        """Whether rendered statements are logged."""
        return self.builder.log_statements

    @property
    def log_level(self) -> str:
        """Get default logging level."""
        return self.builder.log_level

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible connection string

        Example:
            >>> config = Config()
            >>> url = config.get_connection_string()
        """
        return self.db.get_connection_string()

    def get_connection_params(self) -> dict:
        """Get database connection parameters.

        Returns:
            Dictionary with keys: drivername, host, port, user, password, database
        """
        return self.db.get_connection_params()


# Global configuration instance
config = Config()
