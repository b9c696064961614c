"""
==========================
SQL literal normalization.
==========================

Converts a single runtime value into its literal SQL text. Used for INSERT
row values, UPDATE assignments and column DEFAULT clauses.

Escaping contract:
    Strings are interpolated verbatim between single quotes; embedded quotes
    are NOT escaped unless ``escape=True`` is passed, in which case each
    single quote is doubled. Callers that interpolate untrusted text must
    either pre-escape it or opt into ``escape``.

Raw SQL:
    A zero-argument callable is invoked and its return value is emitted
    unquoted, which is how non-literal defaults such as ``now()`` or
    ``gen_random_uuid()`` are expressed.

Example:
    >>> print(normalized('active'))
    'active'
    >>> print(normalized(42))
    42
    >>> print(normalized({'tags': ['a']}))
    '{"tags":["a"]}'
    >>> print(normalized(lambda: 'now()'))
    now()
"""

import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any


def quote(text: str, escape: bool = False) -> str:
    """Wrap text in single quotes, optionally doubling embedded quotes."""
    if escape:
        text = text.replace("'", "''")
    return f"'{text}'"


def normalized(value: Any, escape: bool = False) -> str:
    """
    Convert a value into SQL literal text.

    Args:
        value: String, number, boolean, None, dict/list/tuple, date/time,
            Decimal, or a zero-argument callable returning raw SQL
        escape: If True, double single quotes inside quoted literals

    Returns:
        SQL literal text
    """
    if isinstance(value, str):
        return quote(value, escape)

    if isinstance(value, (dict, list, tuple)):
        return quote(json.dumps(value, separators=(',', ':'), default=str), escape)

    if callable(value):
        return str(value())

    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)

    if isinstance(value, Decimal):
        return str(value)

    if isinstance(value, (datetime, date, time)):
        return quote(value.isoformat(), escape)

    return quote(str(value), escape)
