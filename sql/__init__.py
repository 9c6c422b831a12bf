"""
==========================================
SQL statement construction and rendering.
==========================================

This package builds SELECT and INSERT statements through a fluent API and
renders them to literal SQL text. Values are inlined; nothing is bound or
executed here.

The package follows a clear organization:
    - escape.py: Literal rendering of numbers, strings and lists
    - conditions.py: Condition model and the accepted ``where`` call shapes
    - query_builder.py: QueryBuilder, the mutable statement accumulator
    - renderer.py: Pure recursive rendering plus the error types

Example:
    >>> from sql import QueryBuilder
    >>>
    >>> QueryBuilder.select_from('widgets', 'name').where('id', 1).render()
    'SELECT name FROM widgets WHERE `id` = 1'
"""

__version__ = "0.1.0"
__all__ = [
    # Builder
    'QueryBuilder', 'BuilderContext', 'Mode',
    # Conditions
    'Condition', 'OrderEntry', 'RelationshipCondition',
    # Escaping
    'escape', 'escape_value', 'escape_list',
    # Rendering and errors
    'render', 'QueryBuilderError', 'MissingInsertValuesError',
    'UnknownRelationshipError', 'UnsupportedModeError',
]

from .conditions import Condition, OrderEntry, RelationshipCondition
from .escape import escape, escape_list, escape_value
from .query_builder import BuilderContext, QueryBuilder
from .renderer import (
    MissingInsertValuesError,
    Mode,
    QueryBuilderError,
    UnknownRelationshipError,
    UnsupportedModeError,
    render,
)
