"""
====================================
Schema metadata and DDL generation.
====================================

Declare tables, collect their metadata in a caller-owned registry, and
render CREATE TABLE / CREATE INDEX statements.

Modules:
    registry: TableDefinition, TableRegistry and DeclarationError
    table_schema: DDL of one table
    emitter: DDL of every registered table, as text or files

Example:
    >>> from models import Column
    >>> from schema_builder import TableRegistry, build_schema
    >>>
    >>> registry = TableRegistry()
    >>>
    >>> @registry.table('users')
    ... class User:
    ...     id = Column('SERIAL', primary=True)
    ...     email = Column('VARCHAR(255)', nullable=False, unique=True)
    >>>
    >>> build_schema(registry, dirname='schema')
"""

__version__ = "0.1.0"
__all__ = [
    'DeclarationError', 'TableDefinition', 'TableRegistry',
    'table_schema', 'render_table_ddl', 'render_schema', 'build_schema',
]

from .emitter import build_schema, render_schema
from .registry import DeclarationError, TableDefinition, TableRegistry
from .table_schema import render_table_ddl, table_schema
