from prefab.shared.factories.base import CallableFactory, PrefabFactory, as_factory
from prefab.shared.factories.collection import CollectionFactory, TupleFactory
from prefab.shared.factories.constant import (
    EnumFactory,
    OPTIONAL_TERMINAL,
    ReflectiveConstantFactory,
    UnionFactory,
    is_enum_type,
    is_optional_type,
    is_union_type,
)
from prefab.shared.factories.mapping import MapFactory
from prefab.shared.factories.reflective import (
    GenericContainerFactory,
    ReflectiveCollectionFactory,
    ReflectiveInstanceFactory,
    ReflectiveMapFactory,
)
from prefab.shared.factories.simple import SimpleFactory

__all__ = [
    "PrefabFactory",
    "CallableFactory",
    "as_factory",
    "SimpleFactory",
    "CollectionFactory",
    "TupleFactory",
    "MapFactory",
    "GenericContainerFactory",
    "ReflectiveCollectionFactory",
    "ReflectiveMapFactory",
    "ReflectiveInstanceFactory",
    "ReflectiveConstantFactory",
    "EnumFactory",
    "UnionFactory",
    "is_enum_type",
    "is_optional_type",
    "is_union_type",
    "OPTIONAL_TERMINAL",
]
