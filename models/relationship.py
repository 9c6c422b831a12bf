"""
==============================
Relationship descriptors for models.
==============================

A Relationship records how two tables are linked. Builders use it to
synthesize JOIN clauses and EXISTS subqueries:

    JOIN `<foreign_table>` ON `<local_table>`.`<local_key>` = `<foreign_table>`.`<foreign_key>`

Descriptors are immutable. A model owns the descriptors it declares;
builders only look them up by name.

Example:
    >>> from models.relationship import has_many
    >>>
    >>> posts = has_many('posts', local_table='users')
    >>> posts.local_key, posts.foreign_key
    ('posts_id', 'id')
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Cardinality(str, Enum):
    """Relationship kinds. Only ONE_TO_MANY has a factory."""

    ONE_TO_MANY = 'one-to-many'
    MANY_TO_MANY = 'many-to-many'
    MANY_TO_ONE = 'many-to-one'


@dataclass(frozen=True)
class Relationship:
    """Static join metadata between a local and a foreign table.

    Attributes:
        local_table: Table of the declaring model ('' until bound)
        foreign_table: Related table
        local_key: Column on the local table
        foreign_key: Column on the foreign table
        cardinality: Relationship kind
    """

    local_table: str
    foreign_table: str
    local_key: str
    foreign_key: str
    cardinality: Cardinality = Cardinality.ONE_TO_MANY

    def bind(self, local_table: str) -> 'Relationship':
        """Return a copy bound to ``local_table`` if no local table is set yet."""
        if self.local_table:
            return self
        return replace(self, local_table=local_table)


def has_many(
    table: str,
    foreign_key: str = 'id',
    local_key: Optional[str] = None,
    local_table: str = ''
) -> Relationship:
    """
    Declare a one-to-many relationship.

    Args:
        table: Foreign table name
        foreign_key: Column on the foreign table (default 'id')
        local_key: Column on the local table (default '<table>_id')
        local_table: Declaring table; left empty when declared in a class
            body, the model binds it on class creation

    Returns:
        Relationship descriptor
    """
    return Relationship(
        local_table=local_table,
        foreign_table=table,
        local_key=local_key or f"{table}_id",
        foreign_key=foreign_key,
        cardinality=Cardinality.ONE_TO_MANY
    )
