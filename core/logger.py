"""
==============================================
Centralized logging configuration for the SQL builder.
==============================================

Provides consistent logging setup across all modules with:
- Console output (optionally coloured) and optional file output
- Log level defaulting to the LOG_LEVEL setting
- Module-specific loggers

Builders log rendered statements at DEBUG and the execution adapters log
failures at ERROR, so a single setup_logging() call controls how much SQL
text ends up in the output.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='statements.log')
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendered: SELECT * FROM Customers;")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import config

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATEFMT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI colours and a level marker for console output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        EMOJI: Dict mapping log levels to emoji indicators
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        """Format log record with colors and emojis.

        The record is copied first so file handlers sharing the record
        still see the plain level name.
        """
        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        record.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        return super().format(record)


def _resolve_level(level: Optional[str]) -> int:
    """Translate a level name (or None for the configured default) to an int."""
    name = (level or config.log_level).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> debug_logger = get_logger('sql.select', level='DEBUG')
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(_resolve_level(level))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> None:
    """Setup centralized logging configuration.

    Configures the root logger with console and/or file handlers.
    Should be called once at application startup; calling it again
    replaces the previously installed handlers.

    Args:
        log_level: Logging level, defaults to the LOG_LEVEL setting
        log_file: Optional log file name (e.g., 'statements.log')
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console

    Example:
        >>> setup_logging(log_level='DEBUG', use_colors=False)
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter(
                '%(emoji)s ' + DEFAULT_FORMAT,
                datefmt=DEFAULT_DATEFMT
            )
        else:
            console_formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        root_logger.addHandler(file_handler)


def set_level(level: str) -> None:
    """Change the level of the root logger and all of its handlers.

    Args:
        level: New logging level name
    """
    resolved = _resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    for handler in root_logger.handlers:
        handler.setLevel(resolved)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module (alias of get_logger without level)."""
    return logging.getLogger(module_name)


def _init_default_logging():
    """Install the default console handler if logging is not configured yet."""
    if not logging.getLogger().handlers:
        setup_logging(console_output=True, use_colors=True)


# Auto-initialize on import
_init_default_logging()
