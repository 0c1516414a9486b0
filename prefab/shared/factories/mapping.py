from typing import Any, Callable, Dict, Optional

from prefab.shared.factories.base import PrefabFactory
from prefab.shared.types import TypeDescriptor, ValueTriple


class MapFactory(PrefabFactory):
    """Single-entry mappings.

    Red and black share the key type's red key and differ in the value, so
    they are unequal however the key type behaves. ``create`` receives a
    plain dict and builds the target mapping from it.
    """

    def __init__(self, create: Callable[[Dict[Any, Any]], Any], value_type: Optional[Any] = None):
        self.create = create
        self.value_type = TypeDescriptor.of(value_type) if value_type is not None else None

    def key_and_value_types(self, descriptor: TypeDescriptor):
        value = self.value_type if self.value_type is not None else descriptor.param(1)
        return descriptor.param(0), value

    def create_values(self, descriptor, registry, guard) -> ValueTriple:
        key_type, value_type = self.key_and_value_types(descriptor)
        key = registry.resolve(key_type, guard)
        value = registry.resolve(value_type, guard)
        return ValueTriple(
            self.create({key.red: value.red}),
            self.create({key.red: value.black}),
            self.create({key.red: value.red}),
        )

    def __repr__(self) -> str:
        return f"MapFactory({getattr(self.create, '__name__', self.create)})"
