"""
Pytest configuration and shared fixtures for prefab tests.
"""
import sys
import types
from dataclasses import dataclass
from typing import Any

import pytest

from prefab import ValueRegistry, create_registry
from prefab.shared.factories import CollectionFactory, MapFactory


@dataclass
class Box:
    value: Any


class Bag:
    """Minimal external collection: built from an iterable, optional sort key."""

    def __init__(self, items, key=None):
        self.items = sorted(items, key=key) if key else list(items)
        self.key = key

    def __eq__(self, other):
        return isinstance(other, Bag) and self.items == other.items

    def __hash__(self):
        return hash(tuple(self.items))


class Color:
    def __init__(self, name):
        self.name = name


Color.RED = Color("red")
Color.BLACK = Color("black")


class Exploding:
    def __init__(self, *args):
        raise ValueError("wrong library version")


@pytest.fixture
def registry():
    """Registry loaded with the default table."""
    return create_registry(include_optional=True)


@pytest.fixture
def primed_registry():
    """Bare registry with ints (1, 2), strings and list/dict factories only."""
    reg = ValueRegistry()
    reg.register(int, 1, 2, 1)
    reg.register(str, "one", "two", "".join(["o", "ne"]))
    sample = object()
    reg.register(object, sample, object(), sample)
    reg.register_factory(list, CollectionFactory(list))
    reg.register_factory(dict, MapFactory(dict))
    return reg


@pytest.fixture
def fake_library(monkeypatch):
    """An importable 'fake_widgets' module standing in for an optional library."""
    module = types.ModuleType("fake_widgets")
    module.Box = Box
    module.Bag = Bag
    module.Color = Color
    module.Exploding = Exploding
    module.make_bag = lambda items, key=None: Bag(items, key=key)
    monkeypatch.setitem(sys.modules, "fake_widgets", module)
    return module
