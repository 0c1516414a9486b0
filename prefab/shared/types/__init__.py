from prefab.shared.types.descriptor import OBJECT, TypeDescriptor
from prefab.shared.types.guard import RecursionGuard
from prefab.shared.types.triple import ValueTriple

__all__ = ["OBJECT", "TypeDescriptor", "RecursionGuard", "ValueTriple"]
