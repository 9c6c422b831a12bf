"""
Shared fixtures for models/ package tests.

Key fixtures:
- model_factory: builds throwaway Model subclasses with a given name and body
"""

import pytest

from models import Model


@pytest.fixture
def model_factory():
    """
    Factory that creates a Model subclass named ``name`` with class attributes ``attrs``.
    """
    def factory(name, **attrs):
        return type(name, (Model,), attrs)

    return factory
