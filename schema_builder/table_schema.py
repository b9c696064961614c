"""
=====================
Table DDL rendering.
=====================

Renders the CREATE TABLE and CREATE INDEX statements of one table from its
registered metadata, then optionally pretty-prints them.

Statement order:
    1. CREATE TABLE with columns in declaration order, followed by the
       PRIMARY KEY constraint (if any) and every FOREIGN KEY constraint
    2. One CREATE [UNIQUE] INDEX per declared index

Example:
    >>> from schema_builder import TableDefinition, TableRegistry, table_schema
    >>>
    >>> registry = TableRegistry()
    >>> users = TableDefinition('users').column('id', 'SERIAL', primary=True)
    >>> registry.register(users)
    >>> print(table_schema(users, registry, pretty=False))
    CREATE TABLE users (
        id SERIAL,
        PRIMARY KEY (id)
    );
"""

import logging
from typing import Any, List, Optional

from core.config import config
from models.schema_models import Column, TableMetadata
from schema_builder.registry import DeclarationError, TableRegistry, describe
from sql.ddl import (
    column_definition,
    create_index,
    create_table,
    foreign_key_constraint,
    primary_key_constraint,
)
from sql.formatter import format_sql
from sql.normalize import normalized

logger = logging.getLogger(__name__)


def get_table_metadata(table: Any, registry: Optional[TableRegistry] = None) -> TableMetadata:
    """Resolve a table argument to its metadata.

    Args:
        table: TableMetadata, or a class / TableDefinition / table name
            registered in registry

    Raises:
        DeclarationError: If the table is not registered
    """
    if isinstance(table, TableMetadata):
        return table

    if registry is None:
        raise DeclarationError(f"{describe(table)} is not registered as a table")

    return registry.get_table_metadata(table)


def _column_sql(column: Column) -> str:
    default = normalized(column.default) if column.default is not None else None
    return column_definition(
        column.name,
        column.type,
        nullable=column.nullable,
        unique=column.unique,
        default=default,
        check=column.check
    )


def render_table_ddl(metadata: TableMetadata) -> str:
    """Render raw (unformatted) DDL for one table."""
    constraints: List[str] = []

    if metadata.primary_key:
        constraints.append(primary_key_constraint(metadata.primary_key))

    for fk in metadata.foreign_keys:
        constraints.append(foreign_key_constraint(
            fk.column,
            fk.reference,
            on_delete=fk.on_delete.value if fk.on_delete else None,
            on_update=fk.on_update.value if fk.on_update else None
        ))

    statements = [
        create_table(metadata.name, [_column_sql(col) for col in metadata.columns], constraints)
    ]

    for index in metadata.indexes:
        statements.append(create_index(metadata.name, index.name, index.columns, index.unique))

    return "\n".join(statements)


def table_schema(
    table: Any,
    registry: Optional[TableRegistry] = None,
    dialect: Optional[str] = None,
    pretty: Optional[bool] = None,
    **format_options: Any
) -> str:
    """Generate the DDL of one table.

    Args:
        table: TableMetadata, or a class / TableDefinition / table name
            registered in registry
        registry: Registry holding the table
        dialect: Formatter dialect (defaults to the configured dialect)
        pretty: Pretty-print the result (defaults to the configured setting)
        **format_options: Extra formatter options

    Returns:
        CREATE TABLE statement followed by its CREATE INDEX statements

    Raises:
        DeclarationError: If the table is not registered
        FormatterError: Propagated from the formatter
    """
    metadata = get_table_metadata(table, registry)
    sql = render_table_ddl(metadata)

    if config.pretty if pretty is None else pretty:
        sql = format_sql(sql, dialect, **format_options)

    logger.debug(f"Rendered DDL for table '{metadata.name}'")
    return sql
