"""
=============================================
Configuration management for the query builder.
=============================================

Loads configuration from environment variables (optionally from a .env file
at the project root) and provides a centralized Config singleton for
application-wide access.

Configuration only controls ambient behavior such as logging. It never
changes the SQL text produced by a builder.

Example:
    >>> from core.config import config
    >>>
    >>> if config.log_sql:
    ...     print(f"Rendered SQL is logged at {config.log_level}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass
class BuilderConfig:
    """Query builder settings.

    Attributes:
        log_sql: If True, every top-level render logs its SQL text at INFO
        log_level: Root logging level used by default logging setup
        log_file: Optional log file name written under the logs directory
        use_colors: If True, console output uses the colored formatter
    """

    log_sql: bool = False
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    use_colors: bool = True


@dataclass
class ProjectConfig:
    """Project-wide configuration settings.

    Attributes:
        project_root: Absolute path to project root directory
        logs_dir: Path to logs directory
    """

    project_root: Path
    logs_dir: Path

    def ensure_directories(self) -> None:
        """Create project directories if they don't exist.

        Safe to call multiple times (idempotent).
        """
        self.logs_dir.mkdir(parents=True, exist_ok=True)


class Config:
    """Centralized configuration manager.

    Attributes:
        builder: BuilderConfig instance with logging-related settings
        project: ProjectConfig instance with project directory paths

    Properties:
        log_sql: Whether rendered SQL is logged
        log_level: Default logging level
        log_file: Optional log file name
        use_colors: Whether console logging is colored

    Example:
        >>> config = Config()
        >>> print(f"Logging at {config.log_level} into {config.project.logs_dir}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.builder = BuilderConfig(
            log_sql=_env_flag('QUERY_BUILDER_LOG_SQL', False),
            log_level=os.getenv('QUERY_BUILDER_LOG_LEVEL', 'INFO'),
            log_file=os.getenv('QUERY_BUILDER_LOG_FILE') or None,
            use_colors=_env_flag('QUERY_BUILDER_LOG_COLORS', True)
        )

        # Project structure
        project_root = Path(__file__).parent.parent
        self.project = ProjectConfig(
            project_root=project_root,
            logs_dir=project_root / 'logs'
        )

    @property
    def log_sql(self) -> bool:
        """Get whether rendered SQL is logged."""
        return self.builder.log_sql

    @property
    def log_level(self) -> str:
        """Get default logging level."""
        return self.builder.log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get log file name, if file logging is enabled."""
        return self.builder.log_file

    @property
    def use_colors(self) -> bool:
        """Get whether console output is colored."""
        return self.builder.use_colors


# Global configuration instance
config = Config()
