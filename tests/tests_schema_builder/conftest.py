"""
Shared fixtures for schema_builder tests.

Key fixtures:
- registry: an empty TableRegistry.
- users_definition: the fluent 'users' table used across DDL tests.
- sample_registry: registry holding 'orgs' (declarative) then 'users' (fluent).
"""

import pytest

from models.schema_models import Column, Index
from schema_builder.registry import TableDefinition, TableRegistry


@pytest.fixture
def registry():
    """An empty registry."""
    return TableRegistry()


@pytest.fixture
def users_definition():
    """
    The 'users' table: a serial primary key, a constrained email, an
    organisation foreign key and a unique email index.
    """
    return (
        TableDefinition('users')
        .column('id', 'SERIAL', nullable=False, primary=True)
        .column('email', 'VARCHAR(255)', nullable=False, unique=True, default='x',
                check='length(email) > 3')
        .foreign_key('org_id', 'orgs(id)', on_delete='CASCADE')
        .index('idx_users_email', ['email'], unique=True)
    )


@pytest.fixture
def sample_registry(registry, users_definition):
    """Registry with two tables in a known order."""

    @registry.table('orgs')
    class Org:
        __table_args__ = (Index('idx_orgs_name', ['name']),)

        id = Column('SERIAL', primary=True)
        name = Column('VARCHAR(100)', nullable=False)

    registry.register(users_definition)
    return registry
