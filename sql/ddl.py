"""
=========================================
Data Definition Language (DDL) fragments.
=========================================

Pure functions that render the pieces of CREATE TABLE and CREATE INDEX
statements. They receive plain values; turning table metadata into those
values (and normalizing DEFAULT literals) is done by
schema_builder.table_schema.

Functions:
    column_definition: One column line of a CREATE TABLE body
    primary_key_constraint: PRIMARY KEY (...) table constraint
    foreign_key_constraint: FOREIGN KEY (...) REFERENCES ... table constraint
    create_table: Complete CREATE TABLE statement
    create_index: Complete CREATE [UNIQUE] INDEX statement

Example:
    >>> from sql.ddl import column_definition, create_table
    >>>
    >>> print(create_table('users', [
    ...     column_definition('id', 'SERIAL', nullable=False),
    ...     column_definition('email', 'VARCHAR(255)', unique=True),
    ... ], constraints=['PRIMARY KEY (id)']))
    CREATE TABLE users (
        id SERIAL NOT NULL,
        email VARCHAR(255) UNIQUE,
        PRIMARY KEY (id)
    );
"""

from typing import List, Optional, Sequence

INDENT = "    "


def column_definition(
    name: str,
    type: str,
    nullable: bool = True,
    unique: bool = False,
    default: Optional[str] = None,
    check: Optional[str] = None
) -> str:
    """Generate one column definition.

    Args:
        name: Column name
        type: Raw SQL type (e.g. 'INTEGER', 'VARCHAR(50)')
        nullable: If False, add NOT NULL
        unique: If True, add UNIQUE
        default: Already-normalized DEFAULT literal
        check: CHECK constraint expression

    Returns:
        '<name> <type> [NOT NULL] [UNIQUE] [DEFAULT ...] [CHECK (...)]'
    """
    parts = [name, type]

    if not nullable:
        parts.append("NOT NULL")

    if unique:
        parts.append("UNIQUE")

    if default is not None:
        parts.append(f"DEFAULT {default}")

    if check:
        parts.append(f"CHECK ({check})")

    return " ".join(parts)


def primary_key_constraint(columns: Sequence[str]) -> str:
    """Generate 'PRIMARY KEY (a, b)'."""
    return f"PRIMARY KEY ({', '.join(columns)})"


def foreign_key_constraint(
    column: str,
    reference: str,
    on_delete: Optional[str] = None,
    on_update: Optional[str] = None
) -> str:
    """Generate a FOREIGN KEY table constraint.

    Args:
        column: Referencing column
        reference: Referenced table and column, e.g. 'users(id)'
        on_delete: Referential action for deletes
        on_update: Referential action for updates

    Returns:
        'FOREIGN KEY (column) REFERENCES reference [ON DELETE ...] [ON UPDATE ...]'
    """
    sql = f"FOREIGN KEY ({column}) REFERENCES {reference}"

    if on_delete:
        sql += f" ON DELETE {on_delete}"

    if on_update:
        sql += f" ON UPDATE {on_update}"

    return sql


def create_table(
    table: str,
    column_defs: Sequence[str],
    constraints: Optional[Sequence[str]] = None
) -> str:
    """Generate a CREATE TABLE statement.

    Args:
        table: Table name
        column_defs: Rendered column definitions, in order
        constraints: Rendered table constraints appended after the columns

    Returns:
        CREATE TABLE statement terminated by ';'
    """
    body: List[str] = [f"{INDENT}{line}" for line in column_defs]

    if constraints:
        body.extend([f"{INDENT}{constraint}" for constraint in constraints])

    return f"CREATE TABLE {table} (\n" + ",\n".join(body) + "\n);"


def create_index(
    table: str,
    index_name: str,
    columns: Sequence[str],
    unique: bool = False
) -> str:
    """Generate a CREATE INDEX statement.

    Args:
        table: Indexed table name
        index_name: Index name
        columns: Indexed columns
        unique: If True, create a UNIQUE index

    Returns:
        'CREATE [UNIQUE] INDEX name ON table (cols);'
    """
    unique_keyword = "UNIQUE " if unique else ""
    return f"CREATE {unique_keyword}INDEX {index_name} ON {table} ({', '.join(columns)});"
