"""
==========================
Condition Model for Builders.
==========================

Data types held by a QueryBuilder:

- Condition: one ``column operator value`` comparison
- OrderEntry: one ORDER BY term
- RelationshipCondition: an EXISTS subquery attached to a relationship name

A condition group is a list whose entries are either a Condition or a
nested QueryBuilder. Nested builders render as a parenthesized expression.

This module also defines the four call shapes accepted by ``where`` and
``or_where``. ``parse_filter_args`` turns the raw positional arguments into
exactly one of them before the builder is touched:

- CallbackFilter: ``where(lambda q: ...)``
- MappingFilter: ``where({'a': 1, 'b': 'x'})``
- EqualsFilter: ``where('a', 1)``
- ComparisonFilter: ``where('a', '>', 1)``
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Tuple, Union

from sql.escape import Scalar, ScalarList

if TYPE_CHECKING:
    from sql.query_builder import QueryBuilder

OPERATORS = ('=', '<>', '>', '<', 'LIKE', 'IN')
DIRECTIONS = ('asc', 'desc')


@dataclass(frozen=True)
class Condition:
    """A single comparison. ``IN`` takes a list value, every other operator a scalar."""

    column: str
    operator: str
    value: Union[Scalar, ScalarList]


@dataclass(frozen=True)
class OrderEntry:
    column: str
    direction: str = 'asc'


@dataclass(frozen=True)
class RelationshipCondition:
    """EXISTS test over a relationship, rendered from its sub-builder."""

    relationship: str
    builder: 'QueryBuilder'


ConditionEntry = Union[Condition, 'QueryBuilder']
ConditionGroup = List[ConditionEntry]


# ====================
# Filter call shapes
# ====================

@dataclass(frozen=True)
class CallbackFilter:
    callback: Callable[['QueryBuilder'], Any]


@dataclass(frozen=True)
class MappingFilter:
    values: Dict[str, Scalar]


@dataclass(frozen=True)
class EqualsFilter:
    column: str
    value: Scalar


@dataclass(frozen=True)
class ComparisonFilter:
    column: str
    operator: str
    value: Union[Scalar, ScalarList]


FilterArgs = Union[CallbackFilter, MappingFilter, EqualsFilter, ComparisonFilter]


def validate_operator(operator: str) -> str:
    """Return the operator if supported, otherwise raise ValueError."""
    if operator not in OPERATORS:
        raise ValueError(
            f"Unsupported operator '{operator}'. Expected one of: {', '.join(OPERATORS)}"
        )
    return operator


def is_scalar_list(value: Any) -> bool:
    """Return True for list/tuple values, the only shapes rendered as ``(a, b)``."""
    return isinstance(value, (list, tuple))


def validate_value(operator: str, value: Any) -> Any:
    """
    Check the value shape against the operator.

    ``IN`` takes a list or tuple of scalars; every other operator takes a scalar.

    Raises:
        ValueError: If the value shape does not fit the operator
    """
    if operator == 'IN':
        if not is_scalar_list(value):
            raise ValueError(f"Operator 'IN' expects a list or tuple of values, got {value!r}")
    elif is_scalar_list(value):
        raise ValueError(f"Operator '{operator}' expects a single value, got {value!r}")
    return value


def validate_in_values(values: Any) -> List[Scalar]:
    """Return ``values`` as a list if it is a non-string sequence, otherwise raise ValueError."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValueError(f"IN expects a list or tuple of values, got {values!r}")
    return list(values)


def validate_direction(direction: str) -> str:
    """Return the ORDER BY direction if supported, otherwise raise ValueError."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Unsupported order direction '{direction}'. Expected 'asc' or 'desc'")
    return direction


def parse_filter_args(args: Tuple[Any, ...]) -> FilterArgs:
    """
    Discriminate the positional arguments of ``where``/``or_where``.

    Args:
        args: Raw positional arguments as received by the composer method

    Returns:
        One of CallbackFilter, MappingFilter, EqualsFilter, ComparisonFilter

    Raises:
        TypeError: If the arguments match none of the four shapes
        ValueError: If the operator is unsupported or the value shape does not fit it
    """
    if len(args) == 1:
        arg = args[0]
        if isinstance(arg, Mapping):
            for value in arg.values():
                validate_value('=', value)
            return MappingFilter(dict(arg))
        if callable(arg):
            return CallbackFilter(arg)
    elif len(args) == 2 and isinstance(args[0], str):
        return EqualsFilter(args[0], validate_value('=', args[1]))
    elif len(args) == 3 and isinstance(args[0], str):
        operator = validate_operator(args[1])
        return ComparisonFilter(args[0], operator, validate_value(operator, args[2]))

    raise TypeError(
        "where() expects a callback, a mapping of column -> value, "
        f"(column, value) or (column, operator, value); got {args!r}"
    )
