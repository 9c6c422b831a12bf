"""
==========================================
Hand-off of rendered SQL to SQLAlchemy.
==========================================

The builder only produces text. Callers that execute statements through
SQLAlchemy can wrap a builder with ``to_text_clause`` and pass the result
to ``Connection.execute``. No connection is opened here.

Rendered statements carry their values inline, so every colon is escaped
to keep SQLAlchemy from reading ``:name`` as a bind parameter.

Example:
    >>> from utils.database_utils import to_text_clause
    >>>
    >>> clause = to_text_clause(User.select('name').where('id', 1))
    >>> with engine.connect() as conn:
    ...     rows = conn.execute(clause).fetchall()
"""

import logging
from typing import Union

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from sql.query_builder import QueryBuilder

logger = logging.getLogger(__name__)


def to_text_clause(statement: Union[QueryBuilder, str]) -> TextClause:
    """
    Wrap a builder (rendered here) or an already rendered SQL string.

    Args:
        statement: QueryBuilder or SQL text

    Returns:
        SQLAlchemy TextClause with no bind parameters

    Raises:
        QueryBuilderError: If the builder cannot be rendered
    """
    sql = statement.render() if isinstance(statement, QueryBuilder) else statement
    logger.debug(f"Wrapping statement as TextClause: {sql}")
    return text(sql.replace(':', r'\:'))
