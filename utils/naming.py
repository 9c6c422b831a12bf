"""
Table name derivation from class names.
"""

import re

_UPPERCASE = re.compile(r'([A-Z])')


def derive_table_name(class_name: str) -> str:
    """
    Derive a table name from a class name.

    An underscore is inserted before every uppercase letter, the first
    character is dropped, the result is lowercased, and an ``s`` is
    appended unless the name already ends in one.

    Args:
        class_name: Name of the model class

    Returns:
        Table name

    Example:
        >>> derive_table_name('BlogPost')
        'blog_posts'
        >>> derive_table_name('Address')
        'address'
    """
    name = _UPPERCASE.sub(r'_\1', class_name)[1:].lower()
    if not name.endswith('s'):
        name += 's'
    return name
