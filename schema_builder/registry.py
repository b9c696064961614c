"""
=========================================
Table declarations and metadata registry.
=========================================

Collects column, key and index declarations for table definitions and keeps
the resulting metadata in a caller-owned, ordered registry.

Two declaration styles feed the same TableDefinition builder:

Fluent:
    >>> users = (
    ...     TableDefinition('users')
    ...     .column('id', 'SERIAL', primary=True)
    ...     .column('email', 'VARCHAR(255)', nullable=False, unique=True)
    ...     .column('org_id', 'INTEGER')
    ...     .foreign_key('org_id', 'orgs(id)', on_delete='CASCADE')
    ...     .index('idx_users_email', ['email'], unique=True)
    ... )
    >>> registry = TableRegistry()
    >>> registry.register(users)

Declarative (SQLAlchemy-like class attributes and __table_args__):
    >>> @registry.table()
    ... class Org:
    ...     __table_args__ = (Index('idx_org_name', ['name']),)
    ...
    ...     id = Column('SERIAL', primary=True)
    ...     name = Column('VARCHAR(100)', nullable=False)

Registration processes a definition once; the stored TableMetadata is
frozen and never changes afterwards.
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union

from models.schema_models import (
    CascadeAction,
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    TableMetadata,
)

logger = logging.getLogger(__name__)

DECLARATION_TYPES = (Column, ForeignKey, PrimaryKey)


class DeclarationError(Exception):
    """Exception raised for invalid or missing table declarations.

    Raised when a table-level foreign key has no column, or when DDL is
    requested for a definition that was never registered as a table.
    """
    pass


def describe(definition: Any) -> str:
    """Human readable name of a definition for error messages."""
    if isinstance(definition, type):
        return definition.__name__
    if isinstance(definition, (TableDefinition, TableMetadata)):
        return definition.name
    return repr(definition)


class TableDefinition:
    """Fluent builder of one table's metadata.

    Declarations accumulate in call order. Column declarations also feed the
    primary key (primary=True) and foreign keys (foreign_key=...).

    Attributes:
        name: Table name
    """

    def __init__(self, name: str):
        self.name = name
        self._columns: List[Column] = []
        self._primary_key: List[str] = []
        self._foreign_keys: List[ForeignKey] = []
        self._indexes: List[Index] = []

    # Columns

    def add_column(self, column: Column, property_name: Optional[str] = None) -> 'TableDefinition':
        """Add a column; its name defaults to property_name.

        Raises:
            DeclarationError: If neither the column nor property_name gives a name
        """
        name = column.name or property_name
        if not name:
            raise DeclarationError(
                f"Table '{self.name}': column of type {column.type} has no name"
            )

        column = replace(column, name=name)
        self._columns.append(column)

        if column.primary:
            self._primary_key.append(name)

        if column.foreign_key is not None:
            self._foreign_keys.append(replace(column.foreign_key, column=name))

        return self

    def column(self, name: str, type: str, **options: Any) -> 'TableDefinition':
        """Declare a column (options as for models.Column)."""
        return self.add_column(Column(type, name=name, **options))

    # Keys

    def add_foreign_key(self, foreign_key: ForeignKey, property_name: Optional[str] = None) -> 'TableDefinition':
        """Add a foreign key; its column defaults to property_name.

        Raises:
            DeclarationError: If the column cannot be determined
        """
        column = foreign_key.column or property_name
        if not column:
            raise DeclarationError(
                f"Table '{self.name}': 'column' is required for the table-level "
                f"foreign key referencing {foreign_key.reference}"
            )

        self._foreign_keys.append(replace(foreign_key, column=column))
        return self

    def foreign_key(
        self,
        column: Optional[str],
        reference: str,
        on_delete: Union[CascadeAction, str, None] = None,
        on_update: Union[CascadeAction, str, None] = None
    ) -> 'TableDefinition':
        """Declare a table-level foreign key.

        Raises:
            DeclarationError: If column is empty
        """
        return self.add_foreign_key(ForeignKey(reference, column, on_delete, on_update))

    def add_primary_key(self, primary_key: PrimaryKey, property_name: Optional[str] = None) -> 'TableDefinition':
        """Append primary key columns (or property_name for a bare marker).

        Raises:
            DeclarationError: If no column is given
        """
        columns = primary_key.columns or ((property_name,) if property_name else ())
        if not columns:
            raise DeclarationError(
                f"Table '{self.name}': a table-level primary key needs at least one column"
            )

        self._primary_key.extend(columns)
        return self

    def primary_key(self, *columns: str) -> 'TableDefinition':
        """Append columns to the (possibly composite) primary key."""
        return self.add_primary_key(PrimaryKey(*columns))

    # Indexes

    def add_index(self, index: Index) -> 'TableDefinition':
        """Add an index."""
        self._indexes.append(index)
        return self

    def index(self, name: str, columns: Sequence[str], unique: bool = False) -> 'TableDefinition':
        """Declare an index."""
        return self.add_index(Index(name, columns, unique))

    def metadata(self, name: Optional[str] = None) -> TableMetadata:
        """Freeze the accumulated declarations."""
        return TableMetadata(
            name=name or self.name,
            columns=tuple(self._columns),
            primary_key=tuple(self._primary_key),
            foreign_keys=tuple(self._foreign_keys),
            indexes=tuple(self._indexes)
        )

    @classmethod
    def from_class(cls, target: type, name: Optional[str] = None) -> 'TableDefinition':
        """Process a declarative class.

        The table name is name, else __tablename__, else the lower-cased
        class name. Column, ForeignKey and PrimaryKey class attributes are
        read in definition order, base classes first; __table_args__ holds
        table-level ForeignKey, PrimaryKey and Index declarations.

        Raises:
            DeclarationError: On an invalid declaration
        """
        definition = cls(name or getattr(target, '__tablename__', None) or target.__name__.lower())

        attributes: Dict[str, Any] = {}
        for klass in reversed(target.__mro__):
            for attr, value in vars(klass).items():
                if isinstance(value, DECLARATION_TYPES):
                    attributes[attr] = value

        for attr, value in attributes.items():
            if isinstance(value, Column):
                definition.add_column(value, attr)
            elif isinstance(value, ForeignKey):
                definition.add_foreign_key(value, attr)
            else:
                definition.add_primary_key(value, attr)

        for arg in getattr(target, '__table_args__', None) or ():
            if isinstance(arg, ForeignKey):
                definition.add_foreign_key(arg)
            elif isinstance(arg, PrimaryKey):
                definition.add_primary_key(arg)
            elif isinstance(arg, Index):
                definition.add_index(arg)
            else:
                raise DeclarationError(
                    f"Table '{definition.name}': unsupported table argument {arg!r}"
                )

        return definition


class TableRegistry:
    """Ordered, append-only collection of table metadata.

    Keys are the registered objects (declarative classes or
    TableDefinition instances); iteration follows registration order.
    Registration is serialized with a lock so declarations may be processed
    from several threads.

    Example:
        >>> registry = TableRegistry()
        >>> registry.register(TableDefinition('tags').column('label', 'TEXT'))
        >>> [table.name for table in registry]
        ['tags']
    """

    def __init__(self):
        self._tables: Dict[Any, TableMetadata] = {}
        self._lock = threading.Lock()

    def register(self, definition: Union[type, TableDefinition], name: Optional[str] = None) -> TableMetadata:
        """Process and register a definition exactly once.

        Args:
            definition: Declarative class or TableDefinition
            name: Optional table name override

        Returns:
            The stored TableMetadata (the existing one if already registered)

        Raises:
            DeclarationError: If the definition is invalid
        """
        if not isinstance(definition, (TableDefinition, type)):
            raise DeclarationError(
                f"{describe(definition)} is neither a class nor a TableDefinition"
            )

        existing = self._tables.get(definition)
        if existing is not None:
            logger.debug(f"Table '{existing.name}' is already registered")
            return existing

        if isinstance(definition, TableDefinition):
            metadata = definition.metadata(name)
        else:
            metadata = TableDefinition.from_class(definition, name).metadata()

        with self._lock:
            if definition in self._tables:
                return self._tables[definition]

            if any(table.name == metadata.name for table in self._tables.values()):
                logger.warning(f"Table name '{metadata.name}' is registered more than once")

            self._tables[definition] = metadata

        logger.debug(
            f"Registered table '{metadata.name}' with {len(metadata.columns)} columns "
            f"and {len(metadata.indexes)} indexes"
        )
        return metadata

    def table(self, name: Union[str, type, None] = None) -> Callable:
        """Class decorator registering a declarative class.

        Usable as @registry.table, @registry.table() or @registry.table('name').
        """
        if isinstance(name, type):
            self.register(name)
            return name

        def decorator(target: type) -> type:
            self.register(target, name)
            return target

        return decorator

    def get_table_metadata(self, definition: Any) -> TableMetadata:
        """Look up metadata by registered object or table name.

        Raises:
            DeclarationError: If nothing matching is registered
        """
        if isinstance(definition, TableMetadata):
            return definition

        if isinstance(definition, str):
            for table in self._tables.values():
                if table.name == definition:
                    return table
        else:
            try:
                metadata = self._tables.get(definition)
            except TypeError:
                metadata = None
            if metadata is not None:
                return metadata

        raise DeclarationError(f"{describe(definition)} is not registered as a table")

    def tables(self) -> List[TableMetadata]:
        """Get all table metadata in registration order."""
        return list(self._tables.values())

    def __contains__(self, definition: Any) -> bool:
        try:
            self.get_table_metadata(definition)
        except DeclarationError:
            return False
        return True

    def __iter__(self) -> Iterator[TableMetadata]:
        return iter(self.tables())

    def __len__(self) -> int:
        return len(self._tables)
