"""
Shared fixtures for sql/ package tests.

Key fixtures:
- widget_model: model with an explicit table name and no relationships
- user_model: model with 'posts' and 'comments' relationships
"""

import pytest

from models import Model, has_many


class Widget(Model):
    table = "widgets"


class User(Model):
    relationships = {
        "posts": has_many("posts", foreign_key="user_id", local_key="id"),
        "comments": has_many("comments"),
    }


@pytest.fixture
def widget_model():
    """Model bound to the 'widgets' table."""
    return Widget


@pytest.fixture
def user_model():
    """Model bound to the derived 'users' table with two relationships."""
    return User


@pytest.fixture
def posts_join():
    """JOIN text produced by the User.posts relationship."""
    return "JOIN `posts` ON `users`.`id` = `posts`.`user_id`"
