"""
=====================
Model base class.
=====================

Subclasses of Model describe a table. They provide the table name, the
declared relationships and the table-scoped builder factories.

Example:
    >>> from models import Model, has_many
    >>>
    >>> class User(Model):
    ...     relationships = {'posts': has_many('posts', local_key='id', foreign_key='user_id')}
    >>>
    >>> User.get_table()
    'users'
    >>> User.select('name').where_has('posts', lambda q: q.where('published', 1)).render()
    'SELECT name FROM users WHERE EXISTS (SELECT posts.* FROM users JOIN `posts` ON `users`.`id` = `posts`.`user_id` WHERE `published` = 1)'
"""

from typing import Dict, Mapping, Optional

from models.relationship import Relationship
from models.relationship import has_many as _has_many
from sql.query_builder import QueryBuilder
from sql.escape import Scalar
from utils.naming import derive_table_name


class Model:
    """Base class for table-backed models.

    Attributes:
        table: Explicit table name; derived from the class name when unset
        relationships: Relationship name -> descriptor, including those of parent models
    """

    table: Optional[str] = None
    relationships: Dict[str, Relationship] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        # Parent relationships stay bound to the parent table
        inherited = {}
        for base in reversed(cls.__mro__[1:]):
            inherited.update(base.__dict__.get('relationships', {}))

        # Bind relationships declared in the class body to this table
        declared = cls.__dict__.get('relationships', {})
        table = cls.get_table()
        cls.relationships = {
            **inherited,
            **{name: rel.bind(table) for name, rel in declared.items()},
        }

    @classmethod
    def get_table(cls) -> str:
        if cls.table:
            return cls.table
        return derive_table_name(cls.__name__)

    @classmethod
    def has_many(
        cls,
        table: str,
        foreign_key: str = 'id',
        local_key: Optional[str] = None
    ) -> Relationship:
        """Declare a one-to-many relationship from this model's table."""
        return _has_many(table, foreign_key, local_key, local_table=cls.get_table())

    @classmethod
    def select(cls, *columns: str) -> QueryBuilder:
        """Start a SELECT on this model's table."""
        return QueryBuilder.select_from(cls, *columns)

    @classmethod
    def create(cls, values: Mapping[str, Scalar]) -> QueryBuilder:
        """Start an INSERT into this model's table."""
        return QueryBuilder.insert_into(cls, values)
