from typing import Any, Callable, Iterable

from prefab.shared.factories.base import PrefabFactory
from prefab.shared.types import ValueTriple


class CollectionFactory(PrefabFactory):
    """Single-element containers.

    ``create`` builds the container from an iterable (``list``, ``set``,
    ``collections.deque`` ...). Red holds the element type's red value, black
    its black value, and red_copy is a fresh container around the red value.
    """

    def __init__(self, create: Callable[[Iterable[Any]], Any]):
        self.create = create

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        element = registry.resolve(descriptor.param(0), guard)
        return ValueTriple(
            self.create([element.red]),
            self.create([element.black]),
            self.create([element.red]),
        )

    def __repr__(self) -> str:
        return f"CollectionFactory({getattr(self.create, '__name__', self.create)})"


class TupleFactory(PrefabFactory):
    """``tuple[A, B]`` position by position; ``tuple[A, ...]`` as one element."""

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        params = descriptor.params
        if not params or (len(params) == 2 and params[1].base is Ellipsis):
            params = (descriptor.param(0),)

        triples = [registry.resolve(p, guard) for p in params]
        return ValueTriple(
            tuple([t.red for t in triples]),
            tuple([t.black for t in triples]),
            tuple([t.red for t in triples]),
        )
