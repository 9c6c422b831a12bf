"""
=====================
Fluent SQL Query Builder.
=====================

QueryBuilder accumulates the state of a single SELECT or INSERT statement
through chainable composer methods and renders it with sql.renderer.

Composer methods:
- select: Extend the projected column list
- where / or_where: Add a condition to the AND group / OR group
- where_in / or_where_in: Add an ``IN`` condition
- where_has / or_where_has: Add an EXISTS subquery over a relationship
- join: Join a declared relationship
- order_by: Add ORDER BY terms
- limit: Set ``LIMIT count`` or ``LIMIT offset, count``
- when: Apply a callback only if a condition holds

``where`` and ``or_where`` accept four shapes:

    where(lambda q: q.where('a', 1).or_where('b', 2))   # nested group
    where({'a': 1, 'b': 'x'})                           # equality per key
    where('a', 1)                                       # a = 1
    where('a', '>', 1)                                  # explicit operator

A mapping always lands in the AND group, also when passed to ``or_where``.

Usage:
    from sql.query_builder import QueryBuilder

    sql = (
        QueryBuilder.select_from('widgets', 'name')
        .where('id', 1)
        .order_by('name', 'desc')
        .limit(5)
        .render()
    )
    # SELECT name FROM widgets WHERE `id` = 1 ORDER BY name desc LIMIT 5
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from core.logger import get_logger
from sql.conditions import (
    CallbackFilter,
    ComparisonFilter,
    Condition,
    ConditionGroup,
    EqualsFilter,
    MappingFilter,
    OrderEntry,
    RelationshipCondition,
    parse_filter_args,
    validate_direction,
    validate_in_values,
)
from sql.escape import Scalar
from sql.renderer import Mode, render

if TYPE_CHECKING:
    from models.relationship import Relationship

logger = get_logger(__name__)

BuilderCallback = Callable[['QueryBuilder'], Any]


@dataclass
class BuilderContext:
    """Table name and relationship mapping shared by a builder and its nested builders.

    The relationships mapping is only read, never modified.
    """

    table: Optional[str] = None
    relationships: Mapping = field(default_factory=dict)


def _context_for(source: Any) -> BuilderContext:
    """Build a context from a table name or from a model class."""
    if source is None or isinstance(source, str):
        return BuilderContext(table=source)
    return BuilderContext(
        table=source.get_table(),
        relationships=getattr(source, 'relationships', None) or {}
    )


class QueryBuilder:
    """Mutable accumulator for one SQL statement.

    Attributes:
        mode: Statement kind, or None for a nested filter group
        context: Shared table name and relationship mapping
        columns: SELECT projection
        and_conditions: Conditions joined with AND
        or_conditions: Conditions joined with OR
        and_relationship_conditions: EXISTS subqueries joined with AND
        or_relationship_conditions: EXISTS subqueries joined with OR
        joins: Relationship descriptors, or relationship names resolved at render
        order: ORDER BY terms
        limit_values: ``(count,)`` or ``(offset, count)``
        insert_values: Column -> value mapping for INSERT
    """

    def __init__(
        self,
        table: Optional[str] = None,
        relationships: Optional[Mapping] = None,
        mode: Optional[Mode] = None
    ):
        self.mode = mode
        self.context = BuilderContext(table=table, relationships=relationships or {})
        self.columns: List[str] = []
        self.and_conditions: ConditionGroup = []
        self.or_conditions: ConditionGroup = []
        self.and_relationship_conditions: List[RelationshipCondition] = []
        self.or_relationship_conditions: List[RelationshipCondition] = []
        self.joins: List[Union['Relationship', str]] = []
        self.order: List[OrderEntry] = []
        self.limit_values: Optional[Tuple[int, ...]] = None
        self.insert_values: Optional[Dict[str, Scalar]] = None

    # ====================
    # Factories
    # ====================

    @classmethod
    def select_from(cls, source: Any, *columns: str) -> 'QueryBuilder':
        """
        Create a SELECT builder.

        Args:
            source: Table name or model class (anything with get_table())
            *columns: Initial projection; empty means ``*``

        Returns:
            A new builder in SELECT mode
        """
        builder = cls(mode=Mode.SELECT)
        builder.context = _context_for(source)
        builder.columns = list(columns)
        return builder

    @classmethod
    def insert_into(cls, source: Any, values: Optional[Mapping]) -> 'QueryBuilder':
        """
        Create an INSERT builder.

        Args:
            source: Table name or model class
            values: Column -> value mapping, rendered in iteration order

        Returns:
            A new builder in INSERT mode. Rendering fails if values is empty.
        """
        builder = cls(mode=Mode.INSERT)
        builder.context = _context_for(source)
        builder.insert_values = dict(values) if values else None
        return builder

    def _create_builder(self, mode: Optional[Mode] = None) -> 'QueryBuilder':
        builder = QueryBuilder(mode=mode)
        builder.context = self.context
        return builder

    @property
    def table(self) -> Optional[str]:
        return self.context.table

    @property
    def relationships(self) -> Mapping:
        return self.context.relationships

    # ====================
    # Composer methods
    # ====================

    def select(self, *columns: str) -> 'QueryBuilder':
        self.columns.extend(columns)
        return self

    def _apply_filter(self, group: ConditionGroup, args: Tuple[Any, ...]) -> 'QueryBuilder':
        shape = parse_filter_args(args)

        if isinstance(shape, CallbackFilter):
            nested = self._create_builder()
            shape.callback(nested)
            group.append(nested)
        elif isinstance(shape, MappingFilter):
            # Mappings are always AND-ed, whichever method was called
            for column, value in shape.values.items():
                self.and_conditions.append(Condition(column, '=', value))
        elif isinstance(shape, EqualsFilter):
            group.append(Condition(shape.column, '=', shape.value))
        elif isinstance(shape, ComparisonFilter):
            group.append(Condition(shape.column, shape.operator, shape.value))

        return self

    def where(self, *args: Any) -> 'QueryBuilder':
        """Add a condition (or nested group) to the AND group."""
        return self._apply_filter(self.and_conditions, args)

    def or_where(self, *args: Any) -> 'QueryBuilder':
        """Add a condition (or nested group) to the OR group."""
        return self._apply_filter(self.or_conditions, args)

    def where_in(self, column: str, values: Sequence[Scalar]) -> 'QueryBuilder':
        self.and_conditions.append(Condition(column, 'IN', validate_in_values(values)))
        return self

    def or_where_in(self, column: str, values: Sequence[Scalar]) -> 'QueryBuilder':
        self.or_conditions.append(Condition(column, 'IN', validate_in_values(values)))
        return self

    def _apply_relationship_filter(
        self,
        conditions: List[RelationshipCondition],
        name: str,
        callback: BuilderCallback
    ) -> 'QueryBuilder':
        builder = self._create_builder(Mode.SELECT)

        relationship = self.relationships.get(name)
        if relationship is not None:
            builder.columns.append(f"{relationship.foreign_table}.*")
            builder.joins.append(relationship)
        else:
            logger.debug(f"Relationship '{name}' not declared on {self.table}; checked at render")

        callback(builder)
        conditions.append(RelationshipCondition(name, builder))
        return self

    def where_has(self, name: str, callback: BuilderCallback) -> 'QueryBuilder':
        """
        Require that related rows exist (AND).

        Args:
            name: Relationship name declared on the model
            callback: Receives the subquery builder to add its own conditions

        Returns:
            self
        """
        return self._apply_relationship_filter(self.and_relationship_conditions, name, callback)

    def or_where_has(self, name: str, callback: BuilderCallback) -> 'QueryBuilder':
        """Same as where_has, OR-ed with the rest of the WHERE clause."""
        return self._apply_relationship_filter(self.or_relationship_conditions, name, callback)

    def join(self, name: str) -> 'QueryBuilder':
        """Join a declared relationship by name. Unknown names fail at render."""
        self.joins.append(name)
        return self

    def order_by(self, *order: Any) -> 'QueryBuilder':
        """
        Add ORDER BY terms.

        Accepts ``order_by('name')``, ``order_by('name', 'desc')`` or any number
        of OrderEntry objects / mappings with ``column`` and ``direction`` keys.
        """
        if order and isinstance(order[0], str):
            if len(order) > 2:
                raise TypeError("order_by(column, direction) takes at most two arguments")
            column = order[0]
            direction = order[1] if len(order) == 2 else 'asc'
            self.order.append(OrderEntry(column, validate_direction(direction)))
            return self

        for entry in order:
            if isinstance(entry, Mapping):
                entry = OrderEntry(entry['column'], entry.get('direction', 'asc'))
            validate_direction(entry.direction)
            self.order.append(entry)
        return self

    def limit(self, *values: int) -> 'QueryBuilder':
        """Set ``LIMIT count`` or ``LIMIT offset, count``."""
        if len(values) not in (1, 2):
            raise TypeError("limit() takes (count) or (offset, count)")
        self.limit_values = tuple(values)
        return self

    def when(self, condition: Any, callback: BuilderCallback) -> 'QueryBuilder':
        """
        Apply ``callback`` only if ``condition`` is truthy.

        The callback fills a nested builder which is merged back: columns and
        order are appended, a limit overwrites this builder's limit, and a
        non-empty AND or OR group is added as one parenthesized entry to the
        matching group here. Joins and EXISTS conditions are not merged.
        """
        if not condition:
            return self

        builder = self._create_builder()
        callback(builder)

        self.columns.extend(builder.columns)
        if builder.and_conditions:
            self.and_conditions.append(builder)
        if builder.or_conditions:
            self.or_conditions.append(builder)
        self.order.extend(builder.order)
        if builder.limit_values:
            self.limit_values = builder.limit_values

        return self

    # ====================
    # Rendering
    # ====================

    def render(self) -> str:
        return render(self)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        mode = self.mode.value if self.mode else None
        return f"<QueryBuilder mode={mode} table={self.table}>"
