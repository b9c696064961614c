"""
=====================================
SQL text generation package.
=====================================

This package assembles SQL text. It never parses, validates or executes
SQL; given a sequence of builder calls it produces exactly one string.

The package is organized by concern:
    - normalize.py: Runtime value -> SQL literal text
    - operators.py: WHERE/HAVING fragment builders (and_, or_, in_, ...)
    - dml.py: INSERT/UPDATE/DELETE statement renderers
    - ddl.py: CREATE TABLE/CREATE INDEX fragment renderers
    - query_builder.py: The chainable QueryBuilder and SELECT rendering
    - formatter.py: Whitespace-only re-indenting through sqlparse

Architecture:
    - operators.py imports from query_builder.py (not vice versa)
    - query_builder.py renders INSERT/UPDATE/DELETE through dml.py
    - Fragment functions are pure (no side effects)

Example:
    >>> from sql import QueryBuilder, and_, in_
    >>>
    >>> sql = (
    ...     QueryBuilder()
    ...     .select(['id', 'name'])
    ...     .from_('users')
    ...     .where(and_('age > 18', in_('role', ["'admin'", "'owner'"])))
    ...     .render()
    ... )
"""

__version__ = "0.1.0"
__all__ = [
    # Query builder
    'QueryBuilder', 'create_query_builder', 'JoinType', 'Order', 'StatementKind',
    # Operators
    'and_', 'or_', 'not_', 'in_', 'between', 'is_null', 'not_null',
    'all_', 'any_', 'contain', 'concat',
    # Literals and formatting
    'normalized', 'format_sql', 'FormatterError',
]

from .formatter import FormatterError, format_sql
from .normalize import normalized
from .operators import (
    all_,
    and_,
    any_,
    between,
    concat,
    contain,
    in_,
    is_null,
    not_,
    not_null,
    or_,
)
from .query_builder import (
    JoinType,
    Order,
    QueryBuilder,
    StatementKind,
    create_query_builder,
)
