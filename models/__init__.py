"""
========================================
Model declarations for the query builder.
========================================

Models name a table and declare its relationships. They are the entry
point for table-scoped builders.

Modules:
    base: Model base class with select()/create() factories
    relationship: Immutable Relationship descriptor and has_many()

Example:
    >>> from models import Model, has_many
    >>>
    >>> class BlogPost(Model):
    ...     relationships = {'comments': has_many('comments')}
    >>>
    >>> BlogPost.select().where('id', 3).render()
    'SELECT * FROM blog_posts WHERE `id` = 3'
"""

__version__ = "0.1.0"
__all__ = [
    'Model',
    'Relationship',
    'Cardinality',
    'has_many',
]

from .base import Model
from .relationship import Cardinality, Relationship, has_many
