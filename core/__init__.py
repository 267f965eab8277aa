"""
==========================================
Core infrastructure for the SQL builder.
==========================================

This package provides centralized configuration management and logging
infrastructure used by the builders, the execution adapters and the CLI.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Strict mode: {config.strict_mode}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'set_level', 'get_module_logger', 'config', 'Config']

from core.config import Config, config
from core.logger import get_logger, get_module_logger, set_level, setup_logging
