"""
========================================
Metadata models for schema generation
========================================

Dataclass records shared by the declaration API (schema_builder.registry)
and the DDL renderer (schema_builder.table_schema).

Modules:
    schema_models: Column, key, index and table metadata records

Example:
    >>> from models import Column, Index
    >>>
    >>> email = Column('VARCHAR(255)', nullable=False, unique=True)
    >>> by_email = Index('idx_users_email', ['email'], unique=True)
"""

__version__ = "0.1.0"
__all__ = [
    'CascadeAction',
    'Column',
    'ForeignKey',
    'Index',
    'PrimaryKey',
    'TableMetadata',
]

from .schema_models import (
    CascadeAction,
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    TableMetadata,
)
