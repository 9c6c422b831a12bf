"""
==========================
Utility Functions Package.
==========================

Helpers shared by the builder and the models.

Modules:
    naming: Table name derivation from class names
    database_utils: Hand-off of rendered SQL to SQLAlchemy
"""

__version__ = "0.1.0"
__all__ = [
    'derive_table_name',
    'to_text_clause',
]

from .database_utils import to_text_clause
from .naming import derive_table_name
