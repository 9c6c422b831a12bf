"""
=============================================
Core infrastructure package for the query builder.
=============================================

This package provides centralized configuration management and logging
infrastructure used throughout the query builder.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Logging rendered SQL: {config.log_sql}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'ColoredFormatter', 'config', 'Config']

from core.config import Config, config
from core.logger import ColoredFormatter, get_logger, setup_logging
