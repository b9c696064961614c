"""
Test suite for sql.normalize.

Tests cover:
- Quoted literals (strings, JSON structures, dates)
- Unquoted literals (numbers, booleans, null, Decimal)
- Raw SQL producers
- The opt-in quote escaping policy
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

import pytest

from sql.normalize import normalized, quote


@pytest.mark.unit
def test_string_is_single_quoted():
    """Test plain strings."""
    assert normalized('active') == "'active'"


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    (5, '5'),
    (-2, '-2'),
    (1.5, '1.5'),
    (True, 'true'),
    (False, 'false'),
    (None, 'null'),
])
def test_scalars_use_json_literals(value, expected):
    """Test numbers, booleans and None."""
    assert normalized(value) == expected


@pytest.mark.unit
def test_structures_are_json_then_quoted():
    """Test dicts, lists and tuples become compact quoted JSON."""
    assert normalized({'a': 1, 'b': [True, None]}) == '\'{"a":1,"b":[true,null]}\''
    assert normalized([1, 'x']) == '\'[1,"x"]\''
    assert normalized((1, 2)) == "'[1,2]'"


@pytest.mark.unit
def test_callable_is_raw_sql():
    """Test a zero-argument function's return value is used unquoted."""
    assert normalized(lambda: 'gen_random_uuid()') == 'gen_random_uuid()'


@pytest.mark.unit
def test_decimal_is_unquoted():
    """Test Decimal keeps its exact text."""
    assert normalized(Decimal('10.50')) == '10.50'


@pytest.mark.unit
def test_dates_are_iso_quoted():
    """Test date and datetime values."""
    assert normalized(date(2024, 1, 2)) == "'2024-01-02'"
    assert normalized(datetime(2024, 1, 2, 3, 4, 5)) == "'2024-01-02T03:04:05'"


@pytest.mark.edge_case
def test_other_values_are_quoted_text():
    """Test unknown types fall back to quoted str()."""
    value = UUID('12345678-1234-5678-1234-567812345678')
    assert normalized(value) == "'12345678-1234-5678-1234-567812345678'"


@pytest.mark.edge_case
def test_embedded_quotes_verbatim_by_default():
    """Test the default verbatim policy."""
    assert normalized("O'Brien") == "'O'Brien'"


@pytest.mark.unit
def test_escape_doubles_quotes():
    """Test the opt-in escaping policy."""
    assert normalized("O'Brien", escape=True) == "'O''Brien'"
    assert normalized({'name': "O'Brien"}, escape=True) == '\'{"name":"O\'\'Brien"}\''
    assert quote("it's", escape=True) == "'it''s'"


@pytest.mark.edge_case
def test_escape_does_not_touch_raw_sql():
    """Test raw SQL producers are never escaped."""
    assert normalized(lambda: "'x'", escape=True) == "'x'"
