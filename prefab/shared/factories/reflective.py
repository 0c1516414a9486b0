"""
Factories for types that live in optional libraries.

Nothing here imports the library up front: the type or factory method is
looked up through the registry's capability probe when values are first
requested, so registering these for an uninstalled library is harmless.
"""

from typing import Any, Optional

from prefab.shared.factories.base import PrefabFactory
from prefab.shared.types import ValueTriple


class ReflectiveCall:
    """A deferred ``type_name(payload, ...)`` or ``type_name.method_name(payload, ...)``."""

    def __init__(self, type_name: str, method_name: Optional[str] = None, *args, ordered: bool = False, **kwargs):
        self.type_name = type_name
        self.method_name = method_name
        self.args = args
        self.kwargs = kwargs
        self.ordered = ordered

    def __call__(self, registry, payload: Any) -> Any:
        kwargs = dict(self.kwargs)
        if self.ordered:
            kwargs.setdefault("key", registry.ordering_key)
        probe = registry.probe
        if self.method_name is None:
            return probe.instantiate(self.type_name, payload, *self.args, **kwargs)
        return probe.call_factory(self.type_name, self.method_name, payload, *self.args, **kwargs)

    def __repr__(self) -> str:
        target = self.type_name if self.method_name is None else f"{self.type_name}.{self.method_name}"
        return f"{target}(...)"


class ReflectiveCollectionFactory(PrefabFactory):
    """External collection built from a plain list by a named constructor."""

    def __init__(self, type_name: str, method_name: Optional[str] = None, *args, ordered: bool = False, **kwargs):
        self.call = ReflectiveCall(type_name, method_name, *args, ordered=ordered, **kwargs)

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        registry.probe.require(self.call.type_name)
        element = registry.resolve(descriptor.param(0), guard)
        return ValueTriple(
            self.call(registry, [element.red]),
            self.call(registry, [element.black]),
            self.call(registry, [element.red]),
        )

    def __repr__(self) -> str:
        return f"ReflectiveCollectionFactory({self.call!r})"


class ReflectiveMapFactory(PrefabFactory):
    """External mapping built from a plain dict by a named constructor."""

    def __init__(self, type_name: str, method_name: Optional[str] = None, *args, ordered: bool = False, **kwargs):
        self.call = ReflectiveCall(type_name, method_name, *args, ordered=ordered, **kwargs)

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        registry.probe.require(self.call.type_name)
        key = registry.resolve(descriptor.param(0), guard)
        value = registry.resolve(descriptor.param(1), guard)
        return ValueTriple(
            self.call(registry, {key.red: value.red}),
            self.call(registry, {key.red: value.black}),
            self.call(registry, {key.red: value.red}),
        )

    def __repr__(self) -> str:
        return f"ReflectiveMapFactory({self.call!r})"


class GenericContainerFactory(PrefabFactory):
    """Single-parameter wrappers such as ``Some[T]``: wraps each value of ``T``."""

    def __init__(self, type_name: str, method_name: Optional[str] = None, *args, **kwargs):
        self.call = ReflectiveCall(type_name, method_name, *args, **kwargs)

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        registry.probe.require(self.call.type_name)
        inner = registry.resolve(descriptor.param(0), guard)
        return ValueTriple(
            self.call(registry, inner.red),
            self.call(registry, inner.black),
            self.call(registry, inner.red),
        )

    def __repr__(self) -> str:
        return f"GenericContainerFactory({self.call!r})"


class ReflectiveInstanceFactory(PrefabFactory):
    """Fixed-argument construction of an external type.

    ``red_args``/``black_args`` are argument tuples; the red copy is built
    with ``red_args`` again. ``method_name`` selects a factory method instead
    of the constructor.
    """

    def __init__(self, type_name: str, red_args: tuple = (), black_args: tuple = (), method_name: Optional[str] = None):
        self.type_name = type_name
        self.red_args = red_args
        self.black_args = black_args
        self.method_name = method_name

    def _build(self, probe, args: tuple) -> Any:
        if self.method_name is None:
            return probe.instantiate(self.type_name, *args)
        return probe.call_factory(self.type_name, self.method_name, *args)

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        probe = registry.probe
        return ValueTriple(
            self._build(probe, self.red_args),
            self._build(probe, self.black_args),
            self._build(probe, self.red_args),
        )

    def __repr__(self) -> str:
        return f"ReflectiveInstanceFactory({self.type_name!r})"
