"""
=====================
SQL pretty-printing.
=====================

Thin adapter over sqlparse used to re-indent generated SQL. Only whitespace
changes: keywords, identifiers, types, literals and statement terminators
are emitted exactly as generated. The builders never depend on its output
for any decision; it is applied last.

The dialect argument names the target database for log output and for
callers sharing one configuration; sqlparse re-indents independently of it.

Failures raised by sqlparse (e.g. invalid formatting options) propagate
unmodified. They all derive from ``FormatterError``.

Example:
    >>> from sql.formatter import format_sql
    >>> print(format_sql('SELECT a, b FROM t WHERE a > 1'))
    SELECT a,
           b
    FROM t
    WHERE a > 1
"""

import logging
from typing import Any, Optional

import sqlparse
from sqlparse.exceptions import SQLParseError

from core.config import config

logger = logging.getLogger(__name__)

FormatterError = SQLParseError


def format_sql(sql: str, dialect: Optional[str] = None, **options: Any) -> str:
    """
    Re-indent SQL text.

    Args:
        sql: One or more SQL statements
        dialect: Target dialect name (defaults to the configured dialect)
        **options: Extra sqlparse formatting options (indent_width,
            keyword_case, comma_first, ...)

    Returns:
        Re-indented SQL; statements stay separated, and terminators are kept
        as given

    Raises:
        FormatterError: If sqlparse rejects the formatting options
    """
    if not sql.strip():
        return sql

    dialect = dialect or config.dialect
    options.setdefault('reindent', True)

    logger.debug(f"Formatting {len(sql)} characters of SQL for dialect '{dialect}'")
    return sqlparse.format(sql, **options).strip()
