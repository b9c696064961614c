"""
===========================================================
Table metadata models
===========================================================

Plain dataclass records describing tables for DDL generation. The same
classes serve as declaration objects (placed on declarative classes or
passed to TableDefinition) and as the frozen metadata the DDL renderer
reads.

Models:
    CascadeAction: Referential actions for ON DELETE / ON UPDATE
    ForeignKey: Foreign key declaration
    Column: Column declaration
    PrimaryKey: Primary key declaration (property or definition level)
    Index: Index declaration
    TableMetadata: Aggregated, immutable metadata of one table

Example:
    >>> from models.schema_models import Column, ForeignKey, Index, PrimaryKey
    >>>
    >>> class Membership:
    ...     __tablename__ = 'memberships'
    ...     __table_args__ = (
    ...         PrimaryKey('user_id', 'team_id'),
    ...         Index('idx_memberships_team', ['team_id']),
    ...     )
    ...
    ...     user_id = Column('INTEGER', nullable=False,
    ...                      foreign_key=ForeignKey('users(id)', on_delete='CASCADE'))
    ...     team_id = Column('INTEGER', nullable=False)
    ...     role = Column('VARCHAR(20)', default='member')
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union


class CascadeAction(str, Enum):
    """Referential actions for foreign keys."""

    RESTRICT = 'RESTRICT'
    CASCADE = 'CASCADE'
    SET_NULL = 'SET NULL'
    SET_DEFAULT = 'SET DEFAULT'
    NO_ACTION = 'NO ACTION'

    @classmethod
    def coerce(cls, action: Union['CascadeAction', str, None]) -> Optional['CascadeAction']:
        """Convert a string such as 'set null' to a CascadeAction.

        A bare 'DEFAULT' is accepted as SET DEFAULT.

        Raises:
            ValueError: If the string is not a referential action
        """
        if action is None:
            return None
        name = " ".join(action.upper().split())
        return cls(ACTION_ALIASES.get(name, name))


# Spellings accepted in addition to the enum values
ACTION_ALIASES = {'DEFAULT': CascadeAction.SET_DEFAULT.value}


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key declaration.

    Attributes:
        reference: Referenced table and column, e.g. 'users(id)'
        column: Referencing column; required at definition level, derived
            from the attribute name at property level
        on_delete: Optional ON DELETE action
        on_update: Optional ON UPDATE action
    """

    reference: str
    column: Optional[str] = None
    on_delete: Optional[CascadeAction] = None
    on_update: Optional[CascadeAction] = None

    def __post_init__(self):
        object.__setattr__(self, 'on_delete', CascadeAction.coerce(self.on_delete))
        object.__setattr__(self, 'on_update', CascadeAction.coerce(self.on_update))


@dataclass(frozen=True)
class Column:
    """Column declaration.

    Attributes:
        type: Raw SQL type (e.g. 'INTEGER', 'SERIAL', 'VARCHAR(50)')
        name: Column name; derived from the attribute name when omitted
        nullable: Column accepts NULL (default True)
        unique: Column is UNIQUE (default False)
        primary: Column is (part of) the primary key (default False)
        default: DEFAULT value; normalized as a literal, or a zero-argument
            callable returning raw SQL. None means no DEFAULT clause.
        check: CHECK constraint expression
        foreign_key: Foreign key of this column (its column is ignored)
    """

    type: str
    name: Optional[str] = None
    nullable: bool = True
    unique: bool = False
    primary: bool = False
    default: Any = None
    check: Optional[str] = None
    foreign_key: Optional[ForeignKey] = None


@dataclass(frozen=True, init=False)
class PrimaryKey:
    """Primary key declaration.

    With no columns it marks the attribute it is assigned to; with columns
    (in __table_args__) it declares them, possibly as a composite key.
    """

    columns: Tuple[str, ...] = ()

    def __init__(self, *columns: str):
        object.__setattr__(self, 'columns', tuple(columns))


@dataclass(frozen=True)
class Index:
    """Index declaration.

    Attributes:
        name: Index name
        columns: Indexed columns
        unique: Create a UNIQUE index (default False)
    """

    name: str
    columns: Sequence[str]
    unique: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'columns', tuple(self.columns))


@dataclass(frozen=True)
class TableMetadata:
    """Aggregated metadata of one table.

    Attributes:
        name: Table name
        columns: Columns in declaration order (every name resolved)
        primary_key: Primary key columns in declaration order
        foreign_keys: Foreign keys (every column resolved)
        indexes: Indexes in declaration order
    """

    name: str
    columns: Tuple[Column, ...] = field(default_factory=tuple)
    primary_key: Tuple[str, ...] = field(default_factory=tuple)
    foreign_keys: Tuple[ForeignKey, ...] = field(default_factory=tuple)
    indexes: Tuple[Index, ...] = field(default_factory=tuple)
