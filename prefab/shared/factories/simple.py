from typing import Any

from prefab.shared.factories.base import PrefabFactory
from prefab.shared.types import ValueTriple


class SimpleFactory(PrefabFactory):
    """Returns the same three context-free values whatever it is asked."""

    def __init__(self, red: Any, black: Any, red_copy: Any):
        self.triple = ValueTriple(red, black, red_copy)

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        return self.triple

    def __repr__(self) -> str:
        return f"SimpleFactory({self.triple.red!r}, {self.triple.black!r})"
