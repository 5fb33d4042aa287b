"""Pytest configuration and shared fixtures."""
import pytest
import statefuld.global_registry as global_registry_module
from statefuld import StatefuldRegistry


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Give every test a fresh process default registry."""
    original = global_registry_module._default_registry
    global_registry_module._default_registry = None

    yield

    global_registry_module._default_registry = original


@pytest.fixture
def registry():
    """Provide an empty registry."""
    return StatefuldRegistry()


@pytest.fixture
def hero_registry(registry):
    """Provide a registry with 'Hero' registered (props a, b; key 'id')."""
    registry.register_class('Hero', ['a', 'b'])
    return registry
