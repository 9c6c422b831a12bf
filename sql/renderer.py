"""
=====================
SQL Statement Renderer.
=====================

Turns the accumulated state of a QueryBuilder into SQL text. Rendering is a
pure, recursive function of the builder: nested filter groups and EXISTS
subqueries are rendered by the same code.

Clause assembly for SELECT:

    SELECT <columns> FROM <table><joins><where><order><limit>

Each optional clause supplies its own leading space, or nothing.

WHERE rules:
    - The AND group and AND-EXISTS conditions are joined with `` AND ``.
    - If both are empty, no WHERE clause is produced at all, even when
      OR conditions exist.
    - Otherwise OR conditions and OR-EXISTS conditions follow, each group
      prefixed with `` OR ``.
    - A builder without a mode (a nested filter group) renders only the
      boolean expression, without the ``WHERE`` keyword.

Multiple JOIN clauses are separated by ``", "``.

Errors:
    MissingInsertValuesError: INSERT without values
    UnknownRelationshipError: EXISTS or JOIN over an undeclared relationship
    UnsupportedModeError: UPDATE or DELETE
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Sequence

from core.config import config
from core.logger import get_logger
from sql.conditions import Condition, RelationshipCondition
from sql.escape import escape, escape_value

if TYPE_CHECKING:
    from sql.query_builder import QueryBuilder

logger = get_logger(__name__)


class Mode(str, Enum):
    """Statement kinds. UPDATE and DELETE have no rendering rule yet."""

    SELECT = 'SELECT'
    INSERT = 'INSERT'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'


class QueryBuilderError(Exception):
    """Exception raised when a builder cannot be rendered to SQL."""
    pass


class MissingInsertValuesError(QueryBuilderError):
    """Exception raised when an INSERT has no column values."""
    pass


class UnknownRelationshipError(QueryBuilderError):
    """Exception raised when a relationship name is not declared on the model."""

    def __init__(self, relationship: str):
        self.relationship = relationship
        super().__init__(f"Unknown relationship '{relationship}'")


class UnsupportedModeError(QueryBuilderError):
    """Exception raised for statement modes without a rendering rule."""

    def __init__(self, mode):
        self.mode = mode
        name = mode.value if isinstance(mode, Mode) else mode
        super().__init__(f"Rendering {name} statements is not implemented")


def render(builder: 'QueryBuilder') -> str:
    """
    Render a builder to SQL text.

    Args:
        builder: The builder to render

    Returns:
        SQL statement, or a bare boolean expression for a builder without mode

    Raises:
        QueryBuilderError: Any of its subclasses; nothing partial is returned
    """
    sql = _render(builder)

    statement = builder.mode.value if builder.mode else 'filter'
    logger.debug(f"Rendered {statement} statement for table {builder.table}")
    if config.log_sql:
        logger.info(f"SQL: {sql}")

    return sql


def _render(builder: 'QueryBuilder') -> str:
    mode = builder.mode

    if mode is Mode.INSERT:
        return _render_insert(builder)

    if mode is not None and mode is not Mode.SELECT:
        logger.error(f"Cannot render {getattr(mode, 'value', mode)} statement for table {builder.table}")
        raise UnsupportedModeError(mode)

    where_sql = _render_where(builder)
    if mode is None:
        return where_sql

    columns = ", ".join(builder.columns) or "*"
    return (
        f"SELECT {columns} FROM {builder.table}"
        f"{_render_joins(builder)}{where_sql}"
        f"{_render_order(builder)}{_render_limit(builder)}"
    )


def _render_insert(builder: 'QueryBuilder') -> str:
    values = builder.insert_values
    if not values:
        logger.error(f"INSERT into {builder.table} has no values")
        raise MissingInsertValuesError("No values found")

    columns = ", ".join(escape_value(column) for column in values)
    literals = ", ".join(escape_value(value) for value in values.values())
    return f"INSERT INTO {builder.table} ({columns}) VALUES ({literals})"


def _render_group(group: Sequence, joiner: str) -> str:
    rendered = []
    for entry in group:
        if isinstance(entry, Condition):
            rendered.append(f"{escape_value(entry.column)} {entry.operator} {escape(entry.value)}")
        else:
            rendered.append(f"({_render(entry)})")
    return f" {joiner} ".join(rendered)


def _resolve_relationship(builder: 'QueryBuilder', name: str):
    relationship = builder.relationships.get(name)
    if relationship is None:
        logger.error(f"Unknown relationship '{name}' on table {builder.table}")
        raise UnknownRelationshipError(name)
    return relationship


def _render_exists(
    builder: 'QueryBuilder',
    conditions: List[RelationshipCondition],
    joiner: str
) -> str:
    rendered = []
    for condition in conditions:
        _resolve_relationship(builder, condition.relationship)
        rendered.append(f"EXISTS ({_render(condition.builder)})")
    return f" {joiner} ".join(rendered)


def _render_where(builder: 'QueryBuilder') -> str:
    and_conditions = builder.and_conditions
    and_exists = builder.and_relationship_conditions

    # OR-only filters have nothing to attach to
    if not and_conditions and not and_exists:
        return ""

    built = ""
    if and_conditions:
        built += _render_group(and_conditions, "AND")

    if and_exists:
        if and_conditions:
            built += " AND "
        built += _render_exists(builder, and_exists, "AND")

    if builder.or_conditions:
        built += " OR " + _render_group(builder.or_conditions, "OR")

    if builder.or_relationship_conditions:
        built += " OR " + _render_exists(builder, builder.or_relationship_conditions, "OR")

    if builder.mode is None:
        return built
    return f" WHERE {built}"


def _render_joins(builder: 'QueryBuilder') -> str:
    clauses = []
    for join in builder.joins:
        relationship = _resolve_relationship(builder, join) if isinstance(join, str) else join
        foreign_table = escape_value(relationship.foreign_table)
        clauses.append(
            f" JOIN {foreign_table} ON "
            f"{escape_value(relationship.local_table)}.{escape_value(relationship.local_key)} = "
            f"{foreign_table}.{escape_value(relationship.foreign_key)}"
        )
    return ", ".join(clauses)


def _render_order(builder: 'QueryBuilder') -> str:
    if not builder.order:
        return ""
    return " ORDER BY " + ", ".join(f"{entry.column} {entry.direction}" for entry in builder.order)


def _render_limit(builder: 'QueryBuilder') -> str:
    if not builder.limit_values:
        return ""
    return " LIMIT " + ", ".join(str(n) for n in builder.limit_values)
