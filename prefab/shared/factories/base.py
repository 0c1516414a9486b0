# prefab/shared/factories/base.py
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from prefab.shared.types import RecursionGuard, TypeDescriptor, ValueTriple

if TYPE_CHECKING:
    from prefab.shared.registry import ValueRegistry


class PrefabFactory(ABC):
    """
    Base class for sample-value factories.
    A factory produces the red/black/red-copy triple for one type, asking the
    registry for the triples of any element or key types it needs.
    """

    @abstractmethod
    def create_values(
        self, descriptor: TypeDescriptor, registry: "ValueRegistry", guard: RecursionGuard
    ) -> ValueTriple:
        """
        Produce the triple for ``descriptor``.

        Args:
            descriptor: The (possibly parameterized) type being resolved.
            registry: The registry, for recursive element/key lookups.
            guard: The request's recursion guard; pass it on to every
                nested ``registry.resolve`` call.

        Raises:
            ClassAbsent: A required optional library is not installed.
            InstantiationFailure: The library is there but building failed.
        """
        pass


FactoryFn = Callable[[TypeDescriptor, "ValueRegistry", RecursionGuard], ValueTriple]


class CallableFactory(PrefabFactory):
    """Adapts a plain ``(descriptor, registry, guard) -> ValueTriple`` callable."""

    def __init__(self, fn: FactoryFn):
        self.fn = fn

    def create_values(self, descriptor, registry, guard):
        return self.fn(descriptor, registry, guard)

    def __repr__(self) -> str:
        return f"CallableFactory({getattr(self.fn, '__name__', self.fn)!r})"


def as_factory(factory: Any) -> PrefabFactory:
    if isinstance(factory, PrefabFactory):
        return factory
    if callable(factory):
        return CallableFactory(factory)
    raise TypeError(f"Expected a PrefabFactory or callable, got {type(factory).__name__}")
