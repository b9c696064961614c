"""
===========================================
Data Manipulation Language (DML) fragments.
===========================================

Pure functions that render INSERT, UPDATE and DELETE statements from
already-accumulated builder state. Values are turned into literals with
sql.normalize; WHERE conditions arrive pre-joined from the query builder.

Functions:
- column_list: Double-quoted, comma separated column names
- insert_statement: INSERT INTO ... VALUES (...), (...)
- update_statement: UPDATE ... SET ... [WHERE ...]
- delete_statement: DELETE FROM ... [WHERE ...]

Usage:
    from sql.dml import insert_statement, update_statement

    insert_sql = insert_statement('users', ['name', 'age'], [['ada', 36]])
    # INSERT INTO users ("name", "age") VALUES ('ada', 36)

    update_sql = update_statement('users', {'age': 37}, where='(id = 1)')
    # UPDATE users SET "age" = 37 WHERE (id = 1)
"""

from typing import Any, Dict, List, Optional, Sequence

from sql.normalize import normalized


def column_list(columns: Sequence[str]) -> str:
    """Render '"a", "b", ...'."""
    return ", ".join([f'"{col}"' for col in columns])


def insert_statement(
    table: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    escape: bool = False
) -> str:
    """
    Generate an INSERT statement with literal rows.

    Values are matched to columns by position and normalized one by one.

    Args:
        table: Target table name
        columns: Column names (omitted from the statement when empty)
        rows: Sequence of rows, each a sequence of raw values
        escape: Double single quotes inside string literals

    Returns:
        SQL INSERT statement
    """
    sql = f"INSERT INTO {table}"

    if columns:
        sql += f" ({column_list(columns)})"

    row_list = ", ".join([
        "(" + ", ".join([normalized(value, escape) for value in row]) + ")"
        for row in rows
    ])

    return f"{sql} VALUES {row_list}"


def update_statement(
    table: str,
    assignments: Dict[str, Any],
    where: Optional[str] = None,
    escape: bool = False
) -> str:
    """
    Generate an UPDATE statement.

    Args:
        table: Target table name
        assignments: Column to raw value, rendered in insertion order
        where: Rendered WHERE condition without the keyword
        escape: Double single quotes inside string literals

    Returns:
        SQL UPDATE statement
    """
    set_clauses: List[str] = [
        f'"{col}" = {normalized(value, escape)}' for col, value in assignments.items()
    ]

    sql = f"UPDATE {table} SET {', '.join(set_clauses)}"

    if where:
        sql += f" WHERE {where}"

    return sql


def delete_statement(table: str, where: Optional[str] = None) -> str:
    """
    Generate a DELETE statement.

    Args:
        table: Target table name
        where: Rendered WHERE condition without the keyword

    Returns:
        SQL DELETE statement
    """
    sql = f"DELETE FROM {table}"

    if where:
        sql += f" WHERE {where}"

    return sql
