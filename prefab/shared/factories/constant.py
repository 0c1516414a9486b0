import enum
import typing

from prefab.shared.errors import CycleDetected, UnsupportedType
from prefab.shared.factories.base import PrefabFactory
from prefab.shared.types import TypeDescriptor, ValueTriple


class ReflectiveConstantFactory(PrefabFactory):
    """Two named constants of an external type, e.g. ``Color.RED``/``Color.BLACK``.

    Constants can't be copied, so the red copy is red itself.
    """

    def __init__(self, type_name: str, red_name: str, black_name: str):
        self.type_name = type_name
        self.red_name = red_name
        self.black_name = black_name

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        red = registry.probe.constant(self.type_name, self.red_name)
        black = registry.probe.constant(self.type_name, self.black_name)
        return ValueTriple(red, black, red)

    def __repr__(self) -> str:
        return f"ReflectiveConstantFactory({self.type_name}.{self.red_name}, {self.type_name}.{self.black_name})"


def is_enum_type(descriptor: TypeDescriptor) -> bool:
    return isinstance(descriptor.base, type) and issubclass(descriptor.base, enum.Enum)


class EnumFactory(PrefabFactory):
    """First two members of any ``enum.Enum``; members are singletons."""

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        members = list(descriptor.base)
        if len(members) < 2:
            raise UnsupportedType(descriptor, reason="enum needs at least two members")
        return ValueTriple(members[0], members[1], members[0])


def is_union_type(descriptor: TypeDescriptor) -> bool:
    return descriptor.base is typing.Union


def is_optional_type(descriptor: TypeDescriptor) -> bool:
    return is_union_type(descriptor) and any(p.base is type(None) for p in descriptor.params)


# Stands in for the Optional branch where a self-referential chain ends
OPTIONAL_TERMINAL = ValueTriple(None, None, None)


class UnionFactory(PrefabFactory):
    """``Optional[X]`` and ``X | Y``: values of the first non-None alternative.

    ``Optional[None]`` aside, None is never chosen, because red and black
    must differ. An alternative that cycles back into the type being built
    is skipped; if all of them do, an Optional ends the chain with None.
    """

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        alternatives = [p for p in descriptor.params if p.base is not type(None)]
        if not alternatives:
            raise UnsupportedType(descriptor, reason="union has no non-None alternative")

        cycle = None
        for alternative in alternatives:
            try:
                return registry.resolve(alternative, guard)
            except CycleDetected as exc:
                cycle = exc
        if is_optional_type(descriptor):
            return OPTIONAL_TERMINAL
        raise cycle
