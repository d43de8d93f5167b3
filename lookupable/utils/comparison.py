"""
Value comparison helpers for identifier lookups.

Single lookups compare loosely, the way PHP 8 ``==`` compares a value with
a string. Batch lookups use exact set membership.
"""

import re
from collections.abc import Hashable
from decimal import Decimal
from enum import Enum
from typing import Any, Collection, Union

# PHP only allows ASCII digits and this whitespace set around numeric strings
_WHITESPACE = " \t\n\r\v\f"
_NUMERIC_RE = re.compile(
    r"^[ \t\n\r\v\f]*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?[ \t\n\r\v\f]*$", re.ASCII
)

Number = Union[int, float, Decimal]


def is_numeric(value: str) -> bool:
    """Check whether a string is a numeric literal (leading/trailing whitespace allowed)."""
    return bool(_NUMERIC_RE.match(value))


def _to_number(value: str) -> Number:
    text = value.strip(_WHITESPACE)
    try:
        return int(text)
    except ValueError:
        return float(text)


def _truthy(value: str) -> bool:
    return value not in ("", "0")


def as_identifier(value: Any) -> str:
    """Coerce a requested identifier to the string it is compared as."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def loose_equals(value: Any, identifier: str) -> bool:
    """
    Compare a stored column value with a requested identifier string.

    Args:
        value: Value read from the record
        identifier: Identifier requested by the caller

    Returns:
        True if the two are equal under type-coercing comparison
    """
    identifier = as_identifier(identifier)

    if value is None:
        return identifier == ""

    if isinstance(value, Enum):
        return loose_equals(value.value, identifier)

    # bool first: it is also an int
    if isinstance(value, bool):
        return value == _truthy(identifier)

    if isinstance(value, (int, float, Decimal)):
        if not is_numeric(identifier):
            return False
        if isinstance(value, Decimal):
            return value == Decimal(identifier.strip(_WHITESPACE))
        return value == _to_number(identifier)

    if isinstance(value, str):
        if is_numeric(value) and is_numeric(identifier):
            return _to_number(value) == _to_number(identifier)
        return value == identifier

    return str(value) == identifier


def is_member(value: Any, identifiers: Collection[str]) -> bool:
    """Exact membership test; unhashable values are never members."""
    if not isinstance(value, Hashable):
        return False
    return value in identifiers
