"""
======================================
Configuration management for sqlscribe.
======================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system covers:
- Pretty-printer defaults (target dialect, formatting on/off)
- Schema output settings (file suffix, encoding, table comments)
- Logging defaults used by the command-line interface

Example:
    >>> from core.config import config
    >>>
    >>> # Default dialect handed to the SQL pretty-printer
    >>> print(config.dialect)
    postgres
    >>>
    >>> # File name of a per-table schema artifact
    >>> print(config.output.schema_file_name('users'))
    users.schema.sql
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: str) -> bool:
    """Read a boolean flag from the environment."""
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class FormatterConfig:
    """Pretty-printer settings.

    Attributes:
        dialect: SQL dialect handed to the formatter when the caller gives none
        pretty: If True, rendered DDL is pretty-printed by default
    """

    dialect: str
    pretty: bool


@dataclass
class OutputConfig:
    """Schema artifact settings.

    Attributes:
        schema_suffix: Suffix appended to table names in per-table mode
        encoding: Text encoding of written artifacts
        comments: If True, prefix each table of a combined schema with a comment
    """

    schema_suffix: str
    encoding: str
    comments: bool

    def schema_file_name(self, table_name: str) -> str:
        """Get the artifact file name for one table.

        Args:
            table_name: Name of the table

        Returns:
            File name such as 'users.schema.sql'
        """
        return f"{table_name}{self.schema_suffix}"


@dataclass
class LoggingConfig:
    """Logging defaults for the command-line interface.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name
        log_dir: Optional directory for the log file
    """

    level: str
    log_file: Optional[str]
    log_dir: Optional[str]


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        formatter: FormatterConfig with pretty-printer defaults
        output: OutputConfig with schema artifact settings
        logging: LoggingConfig with logging defaults

    Properties:
        dialect: Default SQL dialect
        pretty: Whether DDL is pretty-printed by default
        log_level: Default logging level name

    Example:
        >>> config = Config()
        >>> print(f"Formatting for {config.dialect}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.formatter = FormatterConfig(
            dialect=os.getenv('SQLSCRIBE_DIALECT', 'postgres'),
            pretty=_env_bool('SQLSCRIBE_PRETTY', 'true')
        )

        self.output = OutputConfig(
            schema_suffix=os.getenv('SQLSCRIBE_SCHEMA_SUFFIX', '.schema.sql'),
            encoding=os.getenv('SQLSCRIBE_ENCODING', 'utf-8'),
            comments=_env_bool('SQLSCRIBE_SCHEMA_COMMENTS', 'false')
        )

        self.logging = LoggingConfig(
            level=os.getenv('SQLSCRIBE_LOG_LEVEL', 'INFO'),
            log_file=os.getenv('SQLSCRIBE_LOG_FILE') or None,
            log_dir=os.getenv('SQLSCRIBE_LOG_DIR') or None
        )

    @property
    def dialect(self) -> str:
        """Get the default SQL dialect."""
        return self.formatter.dialect

    @property
    def pretty(self) -> bool:
        """Get whether DDL is pretty-printed by default."""
        return self.formatter.pretty

    @property
    def log_level(self) -> str:
        """Get the default logging level name."""
        return self.logging.level


# Global configuration instance
config = Config()
