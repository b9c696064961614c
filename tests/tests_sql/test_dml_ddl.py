"""
Test suite for the statement fragment renderers in sql.dml and sql.ddl.

Tests cover:
- column_list, insert_statement, update_statement, delete_statement
- column_definition, primary_key_constraint, foreign_key_constraint
- create_table, create_index
"""

import pytest

from sql.ddl import (
    column_definition,
    create_index,
    create_table,
    foreign_key_constraint,
    primary_key_constraint,
)
from sql.dml import column_list, delete_statement, insert_statement, update_statement

# ============================================================================
# UNIT TESTS - DML
# ============================================================================


@pytest.mark.unit
def test_column_list_quotes_names():
    """Test double-quoted column names."""
    assert column_list(['a', 'b']) == '"a", "b"'


@pytest.mark.unit
def test_insert_statement():
    """Test values are matched by position and normalized."""
    assert insert_statement('users', ['name', 'age'], [['ada', 36], ['bob', 41]]) == (
        'INSERT INTO users ("name", "age") VALUES (\'ada\', 36), (\'bob\', 41)'
    )


@pytest.mark.edge_case
def test_insert_statement_without_columns():
    """Test the column list is omitted when empty."""
    assert insert_statement('t', [], [[1, 2]]) == 'INSERT INTO t VALUES (1, 2)'


@pytest.mark.unit
def test_update_statement():
    """Test SET clauses in insertion order with a WHERE condition."""
    assert update_statement('t', {'a': 1, 'b': 'x'}, where='(id = 1)') == (
        'UPDATE t SET "a" = 1, "b" = \'x\' WHERE (id = 1)'
    )


@pytest.mark.unit
def test_update_statement_escape():
    """Test quote escaping in SET values."""
    assert update_statement('t', {'a': "it's"}, escape=True) == 'UPDATE t SET "a" = \'it\'\'s\''


@pytest.mark.unit
def test_delete_statement():
    """Test DELETE with and without WHERE."""
    assert delete_statement('t') == 'DELETE FROM t'
    assert delete_statement('t', '(a = 1)') == 'DELETE FROM t WHERE (a = 1)'
    assert delete_statement('t', '') == 'DELETE FROM t'


# ============================================================================
# UNIT TESTS - DDL
# ============================================================================


@pytest.mark.unit
def test_column_definition_minimal():
    """Test a nullable, non-unique column with no extras."""
    assert column_definition('id', 'INTEGER') == 'id INTEGER'


@pytest.mark.unit
def test_column_definition_all_options():
    """Test option order: NOT NULL, UNIQUE, DEFAULT, CHECK."""
    assert column_definition(
        'email', 'VARCHAR(255)', nullable=False, unique=True,
        default="'x@y.z'", check='length(email) > 3'
    ) == "email VARCHAR(255) NOT NULL UNIQUE DEFAULT 'x@y.z' CHECK (length(email) > 3)"


@pytest.mark.edge_case
def test_column_definition_falsy_default_literal():
    """Test a '0' default literal is still rendered."""
    assert column_definition('n', 'INTEGER', default='0') == 'n INTEGER DEFAULT 0'


@pytest.mark.unit
def test_primary_key_constraint():
    """Test composite primary key."""
    assert primary_key_constraint(['a', 'b']) == 'PRIMARY KEY (a, b)'


@pytest.mark.unit
def test_foreign_key_constraint():
    """Test foreign key with both referential actions."""
    assert foreign_key_constraint('org_id', 'orgs(id)') == 'FOREIGN KEY (org_id) REFERENCES orgs(id)'
    assert foreign_key_constraint('org_id', 'orgs(id)', on_delete='CASCADE', on_update='SET NULL') == (
        'FOREIGN KEY (org_id) REFERENCES orgs(id) ON DELETE CASCADE ON UPDATE SET NULL'
    )


@pytest.mark.unit
def test_create_table():
    """Test columns then constraints, one per indented line."""
    assert create_table('t', ['a INT', 'b TEXT'], ['PRIMARY KEY (a)']) == (
        'CREATE TABLE t (\n'
        '    a INT,\n'
        '    b TEXT,\n'
        '    PRIMARY KEY (a)\n'
        ');'
    )


@pytest.mark.unit
def test_create_index():
    """Test unique and plain indexes."""
    assert create_index('t', 'idx_t_a', ['a']) == 'CREATE INDEX idx_t_a ON t (a);'
    assert create_index('t', 'idx_t_ab', ['a', 'b'], unique=True) == 'CREATE UNIQUE INDEX idx_t_ab ON t (a, b);'
