"""
======================================
Condition and operator fragment builders.
======================================

Stateless string templates that compose WHERE/HAVING fragments. Arguments
are interpolated as given; callers own any escaping.

Functions:
- and_ / or_: Parenthesized conjunction / disjunction
- not_: Negation
- in_: Membership in a literal list or a sub-query
- between: Range predicate
- is_null / not_null: NULL checks
- all_ / any_: Comparison against every / some row of a sub-query
- contain: LIKE '%...%' containment
- concat: CONCAT(...) call

Sub-query arguments of in_, all_ and any_ accept a literal SQL string, a
QueryBuilder, or a callable that receives a fresh QueryBuilder and either
returns it or configures it in place and returns None. Pass escape_literals
to give that fresh builder the outer builder's quoting policy.

Usage:
    from sql.operators import and_, in_, is_null

    condition = and_(
        is_null('u.deleted_at'),
        in_('u.role', lambda qb: qb.select('name').from_('roles'))
    )
    # ((u.deleted_at IS NULL) AND u.role IN (SELECT name FROM "roles" roles))
"""

from typing import Callable, Optional, Sequence, Union

from sql.query_builder import QueryBuilder

SubQuery = Union[str, QueryBuilder, Callable[[QueryBuilder], Optional[QueryBuilder]]]

COMPARISON_OPERATORS = ('=', '<>', '!=', '>', '>=', '<', '<=')


def _subquery_sql(subquery: SubQuery, escape_literals: bool = False) -> str:
    """Resolve a sub-query argument to SQL text without parentheses."""
    if isinstance(subquery, QueryBuilder):
        return subquery.render()
    if callable(subquery):
        nested = QueryBuilder(escape_literals=escape_literals)
        result = subquery(nested)
        return (result if result is not None else nested).render()
    return subquery


def and_(*conditions: str) -> str:
    """Join conditions with AND inside parentheses."""
    return f"({' AND '.join(conditions)})"


def or_(*conditions: str) -> str:
    """Join conditions with OR inside parentheses."""
    return f"({' OR '.join(conditions)})"


def not_(expression: str) -> str:
    """Negate an expression."""
    return f"NOT {expression}"


def in_(
    expression: str,
    items: Union[Sequence[str], SubQuery],
    escape_literals: bool = False
) -> str:
    """
    Build an IN predicate.

    Args:
        expression: Left-hand expression
        items: Literal fragments, or a sub-query (string, builder, callable)
        escape_literals: Quoting policy of the builder handed to a callable

    Returns:
        'expression IN (...)'
    """
    if isinstance(items, (str, QueryBuilder)) or callable(items):
        values = _subquery_sql(items, escape_literals)
    else:
        values = ", ".join(str(item) for item in items)
    return f"{expression} IN ({values})"


def between(expression: Optional[str], low, high) -> str:
    """
    Build the 'BETWEEN low AND high' part of a range predicate.

    The tested expression is not included; the caller writes it in front,
    e.g. f"age {between('age', 18, 65)}".
    """
    return f"BETWEEN {low} AND {high}"


def is_null(expression: str) -> str:
    """Build '(expression IS NULL)'."""
    return f"({expression} IS NULL)"


def not_null(expression: str) -> str:
    """Build '(expression IS NOT NULL)'."""
    return f"({expression} IS NOT NULL)"


def _quantified(
    quantifier: str,
    expression: str,
    operator: str,
    subquery: SubQuery,
    escape_literals: bool
) -> str:
    if operator not in COMPARISON_OPERATORS:
        raise ValueError(
            f"Unsupported comparison operator '{operator}' for {quantifier}; "
            f"expected one of {', '.join(COMPARISON_OPERATORS)}"
        )
    return f"{expression} {operator} {quantifier} ({_subquery_sql(subquery, escape_literals)})"


def all_(expression: str, operator: str, subquery: SubQuery, escape_literals: bool = False) -> str:
    """
    Build 'expression operator ALL (subquery)'.

    Raises:
        ValueError: If operator is not a comparison operator
    """
    return _quantified('ALL', expression, operator, subquery, escape_literals)


def any_(expression: str, operator: str, subquery: SubQuery, escape_literals: bool = False) -> str:
    """
    Build 'expression operator ANY (subquery)'.

    Raises:
        ValueError: If operator is not a comparison operator
    """
    return _quantified('ANY', expression, operator, subquery, escape_literals)


def contain(column: str, sub: str) -> str:
    """Build "column LIKE '%sub%'"."""
    return f"{column} LIKE '%{sub}%'"


def concat(*parts: str) -> str:
    """Build 'CONCAT(a, b, ...)'."""
    return f"CONCAT({', '.join(parts)})"
