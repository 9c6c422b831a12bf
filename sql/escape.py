"""
=====================
SQL Value Escaping.
=====================

Renders scalars and scalar lists into their literal SQL text.

Numbers are emitted as-is; integral floats drop their fraction and exponent. Strings are wrapped in backticks. The same rule
is applied to identifiers (table and column names) and to values, so
``escape_value('id')`` and ``escape_value('alice')`` look alike in the
output.

Note:
    This is not string-literal quoting and it is not injection-safe.
    Values are inlined into the SQL text; there are no bind parameters.

Usage:
    from sql.escape import escape

    escape(42)            # 42
    escape('name')        # `name`
    escape([1, 'a'])      # (1, `a`)
"""

from decimal import Decimal
from numbers import Number
from typing import List, Sequence, Union

Scalar = Union[int, float, Decimal, str]
ScalarList = List[Scalar]


def is_numeric(value: object) -> bool:
    """Return True for numbers that are rendered without quoting (bools excluded)."""
    return isinstance(value, Number) and not isinstance(value, bool)


def escape_value(value: Scalar) -> str:
    """
    Escape a single scalar.

    Args:
        value: Number or string

    Returns:
        The number's text, or the string wrapped in backticks
    """
    if is_numeric(value):
        if isinstance(value, float) and value.is_integer():
            # 2.0 -> 2, 1e16 -> 10000000000000000
            return str(int(value))
        return str(value)
    return f"`{value}`"


def escape_list(values: Sequence[Scalar]) -> str:
    """
    Escape a list of scalars into a parenthesized, comma-separated group.

    Args:
        values: Sequence of numbers or strings

    Returns:
        Text such as ``(1, 2, 3)`` or ``(`a`, `b`)``
    """
    return "(" + ", ".join(escape_value(v) for v in values) + ")"


def escape(value: Union[Scalar, Sequence[Scalar]]) -> str:
    """Escape a scalar or a list/tuple of scalars."""
    if isinstance(value, (list, tuple)):
        return escape_list(value)
    return escape_value(value)
