"""
============================
Chainable SQL query builder.
============================

This module provides the QueryBuilder class, a mutable accumulator of clause
state that renders one SELECT, INSERT, UPDATE or DELETE statement, together
with the pure fragment builders it renders through.

Fragment Builders:
- select_builder: Build a SELECT statement from accumulated clauses
- join_builder: Render one JOIN clause
- where_builder: Parenthesize and join WHERE/HAVING predicates

QueryBuilder operations (all mutators return the builder):
- from_, select / add_select, count, count_distinct, sum, avg, min, max
- join, inner_join, left_join, right_join
- where / and_where, group_by, having / and_having, order_by, limit, offset
- insert_into, values, update, set, delete
- sub_query, add_raw_sql
- render (pure), build, get_sql, format, clear

Usage:
    from sql.query_builder import QueryBuilder

    sql = (
        QueryBuilder()
        .select(['id', {'email': 'contact'}])
        .from_('users', 'u')
        .left_join('orders', alias='o', condition='o.user_id = u.id', select={'total': 'order_total'})
        .where('u.active = TRUE')
        .order_by({'u.id': 'DESC'})
        .limit(10)
        .render()
    )
    # SELECT id, email AS contact, o.total AS order_total FROM "users" u
    #   LEFT JOIN "orders" o ON (o.user_id = u.id) WHERE (u.active = TRUE)
    #   ORDER BY u.id DESC LIMIT 10
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sql.dml import delete_statement, insert_statement, update_statement
from sql.formatter import format_sql

logger = logging.getLogger(__name__)

SelectionSpec = Union[str, Mapping[str, str], Sequence[Union[str, Mapping[str, str]]]]

ALWAYS_TRUE = 'TRUE'


class StatementKind(str, Enum):
    """Statement rendered by a QueryBuilder."""

    SELECT = 'SELECT'
    INSERT = 'INSERT'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'


class JoinType(str, Enum):
    """Supported JOIN kinds."""

    LEFT = 'LEFT'
    RIGHT = 'RIGHT'
    INNER = 'INNER'


class Order(str, Enum):
    """ORDER BY directions."""

    ASC = 'ASC'
    DESC = 'DESC'


@dataclass(frozen=True)
class Table:
    """Source table of a statement."""

    name: str
    alias: str


@dataclass(frozen=True)
class Selection:
    """One entry of the SELECT list."""

    expression: str
    alias: Optional[str] = None


@dataclass(frozen=True)
class JoinTable:
    """A fully defaulted JOIN record."""

    name: str
    type: JoinType
    alias: str
    condition: str = ALWAYS_TRUE


def where_builder(conditions: Sequence[str], operator: str = "AND") -> str:
    """
    Join predicates, each wrapped in parentheses.

    Args:
        conditions: Raw predicate fragments
        operator: Logical operator between predicates (AND, OR)

    Returns:
        Combined condition without the WHERE keyword ('' when empty)
    """
    return f" {operator} ".join([f"({condition})" for condition in conditions])


def join_builder(join: JoinTable) -> str:
    """Render 'KIND JOIN "name" alias ON (condition)'."""
    return f'{join.type.value} JOIN "{join.name}" {join.alias} ON ({join.condition})'


def select_builder(
    columns: Sequence[Selection],
    table: Optional[Table] = None,
    joins: Optional[Sequence[JoinTable]] = None,
    where_conditions: Optional[Sequence[str]] = None,
    group_by: Optional[Sequence[str]] = None,
    having_conditions: Optional[Sequence[str]] = None,
    order_by: Optional[Sequence[Tuple[str, Order]]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> str:
    """
    Build a SELECT statement.

    Every clause is omitted when its input is empty or None. An empty
    selection renders as '*'.

    Args:
        columns: Ordered SELECT list
        table: Source table; the FROM clause is omitted without one
        joins: JOIN records in declaration order
        where_conditions: WHERE predicates (combined with AND)
        group_by: GROUP BY expressions
        having_conditions: HAVING predicates (combined with AND)
        order_by: (expression, direction) pairs
        limit: LIMIT value
        offset: OFFSET value

    Returns:
        SQL SELECT statement
    """
    selection = ", ".join([
        col.expression + (f" AS {col.alias}" if col.alias else "")
        for col in columns
    ]) or "*"

    sql = f"SELECT {selection}"

    if table is not None and table.name:
        sql += f' FROM "{table.name}" {table.alias}'

    for join in joins or []:
        sql += f" {join_builder(join)}"

    if where_conditions:
        sql += f" WHERE {where_builder(where_conditions)}"

    if group_by:
        sql += f" GROUP BY {', '.join(group_by)}"

    if having_conditions:
        sql += f" HAVING {where_builder(having_conditions)}"

    if order_by:
        order_clause = ", ".join([f"{col} {direction.value}" for col, direction in order_by])
        sql += f" ORDER BY {order_clause}"

    if limit is not None:
        sql += f" LIMIT {limit}"

    if offset is not None:
        sql += f" OFFSET {offset}"

    return sql


class QueryBuilder:
    """
    Mutable, chainable builder for one SQL statement.

    Clause state accumulates across calls until clear() resets it. The
    statement kind (SELECT by default; switched by insert_into, update and
    delete) decides which state is consulted at render time; state that
    does not apply to the active kind is kept but ignored.

    render() is pure and may be called any number of times. build() stores
    the rendered text so that get_sql() and format() can work on it.

    Attributes:
        escape_literals: Double single quotes in INSERT/UPDATE string literals

    Example:
        >>> qb = QueryBuilder().insert_into('t', 'a', 'b').values([1, 'x'])
        >>> qb.render()
        'INSERT INTO t ("a", "b") VALUES (1, \\'x\\')'
    """

    def __init__(self, escape_literals: bool = False):
        self.escape_literals = escape_literals
        self._query = ''
        self._reset()

    def _reset(self) -> None:
        self._kind = StatementKind.SELECT
        self._table = Table(name='', alias='')
        self._fields: List[Selection] = []
        self._joins: List[JoinTable] = []
        self._where: List[str] = []
        self._group_by: List[str] = []
        self._having: List[str] = []
        self._order: List[Tuple[str, Order]] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._insert_columns: List[str] = []
        self._rows: List[List[Any]] = []
        self._assignments: Dict[str, Any] = {}
        self._raw = ''

    @property
    def statement_kind(self) -> StatementKind:
        """Get the statement kind rendered by this builder."""
        return self._kind

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def from_(self, table: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Set the source table; the alias defaults to the table name."""
        self._table = Table(name=table, alias=alias or table)
        return self

    def select(self, selection: SelectionSpec, from_table: Optional[str] = None) -> 'QueryBuilder':
        """
        Append expressions to the SELECT list.

        Args:
            selection: A column name, a mapping of expression to alias, or a
                sequence mixing both; order is preserved
            from_table: Qualify every expression as 'from_table.expression'

        Returns:
            The builder
        """
        def qualify(name: str) -> str:
            return f"{from_table}.{name}" if from_table else name

        if isinstance(selection, str):
            self._fields.append(Selection(qualify(selection)))
        elif isinstance(selection, Mapping):
            for name, alias in selection.items():
                self._fields.append(Selection(qualify(name), alias))
        else:
            for column in selection:
                self.select(column, from_table)

        return self

    add_select = select

    def _aggregate(self, expression: str, alias: Optional[str]) -> 'QueryBuilder':
        return self.select({expression: alias} if alias else expression)

    def count(self, column: str = '*', alias: Optional[str] = None) -> 'QueryBuilder':
        """Select COUNT(column)."""
        return self._aggregate(f"COUNT({column})", alias)

    def count_distinct(self, column: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Select COUNT(DISTINCT column)."""
        return self._aggregate(f"COUNT(DISTINCT {column})", alias)

    def sum(self, column: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Select SUM(column)."""
        return self._aggregate(f"SUM({column})", alias)

    def avg(self, column: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Select AVG(column)."""
        return self._aggregate(f"AVG({column})", alias)

    def min(self, column: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Select MIN(column)."""
        return self._aggregate(f"MIN({column})", alias)

    def max(self, column: str, alias: Optional[str] = None) -> 'QueryBuilder':
        """Select MAX(column)."""
        return self._aggregate(f"MAX({column})", alias)

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(
        self,
        name: str,
        type: Union[JoinType, str] = JoinType.INNER,
        alias: Optional[str] = None,
        condition: Optional[str] = None,
        select: Union[bool, SelectionSpec, None] = None
    ) -> 'QueryBuilder':
        """
        Add a JOIN clause.

        Args:
            name: Joined table name
            type: LEFT, RIGHT or INNER
            alias: Join alias (defaults to the table name)
            condition: ON condition (defaults to TRUE)
            select: True to select 'alias.*', or a selection spec whose
                expressions are qualified by the join alias and appended to
                the SELECT list at this point

        Returns:
            The builder
        """
        join = JoinTable(
            name=name,
            type=JoinType(type.upper()),
            alias=alias or name,
            condition=condition or ALWAYS_TRUE
        )

        if select is True:
            self.select('*', join.alias)
        elif select:
            self.select(select, join.alias)

        self._joins.append(join)
        return self

    def inner_join(self, name: str, **options) -> 'QueryBuilder':
        """INNER JOIN; accepts the keyword options of join()."""
        return self.join(name, JoinType.INNER, **options)

    def left_join(self, name: str, **options) -> 'QueryBuilder':
        """LEFT JOIN; accepts the keyword options of join()."""
        return self.join(name, JoinType.LEFT, **options)

    def right_join(self, name: str, **options) -> 'QueryBuilder':
        """RIGHT JOIN; accepts the keyword options of join()."""
        return self.join(name, JoinType.RIGHT, **options)

    # ------------------------------------------------------------------
    # Filtering, grouping, ordering, pagination
    # ------------------------------------------------------------------

    def where(self, *conditions: str) -> 'QueryBuilder':
        """Append WHERE predicates (combined with AND)."""
        self._where.extend(conditions)
        return self

    and_where = where

    def group_by(self, *columns: str) -> 'QueryBuilder':
        """Append GROUP BY expressions."""
        self._group_by.extend(columns)
        return self

    def having(self, *conditions: str) -> 'QueryBuilder':
        """Append HAVING predicates (combined with AND)."""
        self._having.extend(conditions)
        return self

    and_having = having

    def order_by(self, order: Union[str, Sequence[str], Mapping[str, Union[Order, str]]]) -> 'QueryBuilder':
        """
        Append ORDER BY entries.

        A column name or a list of names sorts ascending; a mapping gives
        each expression its direction.
        """
        if isinstance(order, str):
            self._order.append((order, Order.ASC))
        elif isinstance(order, Mapping):
            for column, direction in order.items():
                self._order.append((column, Order(direction.upper())))
        else:
            self._order.extend([(column, Order.ASC) for column in order])
        return self

    def limit(self, n: int) -> 'QueryBuilder':
        """Set LIMIT."""
        self._limit = n
        return self

    def offset(self, n: int) -> 'QueryBuilder':
        """Set OFFSET."""
        self._offset = n
        return self

    # ------------------------------------------------------------------
    # INSERT / UPDATE / DELETE
    # ------------------------------------------------------------------

    def insert_into(self, table: str, *columns: str) -> 'QueryBuilder':
        """Switch to INSERT into table with the given columns."""
        self._kind = StatementKind.INSERT
        self.from_(table)
        self._insert_columns.extend(columns)
        return self

    def values(self, *rows: Sequence[Any]) -> 'QueryBuilder':
        """Append literal rows, matched to the insert columns by position."""
        self._rows.extend([list(row) for row in rows])
        return self

    def update(self, table: str, data: Optional[Mapping[str, Any]] = None) -> 'QueryBuilder':
        """Switch to UPDATE of table, merging data into the assignments."""
        self._kind = StatementKind.UPDATE
        self.from_(table)
        if data:
            self._assignments.update(data)
        return self

    def set(self, column: Union[str, Mapping[str, Any]], value: Any = None) -> 'QueryBuilder':
        """
        Assign column = value, or merge a mapping of assignments.

        The last write to a column wins.
        """
        if isinstance(column, Mapping):
            self._assignments.update(column)
        else:
            self._assignments[column] = value
        return self

    def delete(self, table: str) -> 'QueryBuilder':
        """Switch to DELETE from table."""
        self._kind = StatementKind.DELETE
        self.from_(table)
        return self

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def sub_query(
        self,
        fn: Optional[Callable[['QueryBuilder'], Optional['QueryBuilder']]] = None
    ) -> Union['QueryBuilder', str]:
        """
        Create a nested query.

        Without an argument a fresh builder is returned for manual
        composition. With a function, a fresh builder is passed to it and
        the rendered result is returned wrapped in parentheses.
        """
        nested = QueryBuilder(escape_literals=self.escape_literals)
        if fn is None:
            return nested

        result = fn(nested)
        return f"({(result if result is not None else nested).render()})"

    def add_raw_sql(self, raw_sql: str) -> 'QueryBuilder':
        """Set text appended verbatim after every other clause."""
        self._raw = raw_sql
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render the accumulated state as one SQL statement."""
        table = self._table.name

        if self._kind is StatementKind.INSERT:
            sql = insert_statement(table, self._insert_columns, self._rows, self.escape_literals)
        elif self._kind is StatementKind.UPDATE:
            sql = update_statement(
                table, self._assignments, where_builder(self._where), self.escape_literals
            )
        elif self._kind is StatementKind.DELETE:
            sql = delete_statement(table, where_builder(self._where))
        else:
            sql = select_builder(
                self._fields,
                table=self._table,
                joins=self._joins,
                where_conditions=self._where,
                group_by=self._group_by,
                having_conditions=self._having,
                order_by=self._order,
                limit=self._limit,
                offset=self._offset
            )

        if self._raw:
            sql += f" {self._raw}"

        return sql

    def build(self) -> 'QueryBuilder':
        """Render the statement and keep it for get_sql()/format()."""
        self._query = self.render()
        logger.debug(f"Built {self._kind.value} statement: {self._query}")
        return self

    def format(self, dialect: Optional[str] = None, **options: Any) -> 'QueryBuilder':
        """
        Pretty-print the built statement (building it first if needed).

        Args:
            dialect: Target dialect (defaults to the configured dialect)
            **options: Extra formatter options

        Returns:
            The builder

        Raises:
            FormatterError: Propagated from the formatter
        """
        if not self._query:
            self.build()
        self._query = format_sql(self._query, dialect, **options)
        return self

    def get_sql(self) -> str:
        """Get the last built or formatted statement."""
        return self._query

    def clear(self) -> 'QueryBuilder':
        """Reset every clause and the built statement."""
        self._reset()
        self._query = ''
        return self

    def __str__(self) -> str:
        return self.render()


def create_query_builder(escape_literals: bool = False) -> QueryBuilder:
    """Create a fresh QueryBuilder."""
    return QueryBuilder(escape_literals=escape_literals)
