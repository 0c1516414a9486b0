"""
Default sample values for the standard library and well-known optional
libraries.

Every optional-library entry is lazy: ``add_defaults`` imports nothing, and
an entry whose library isn't installed only fails (with ``ClassAbsent``)
when that exact type is requested.
"""

import collections
import collections.abc
import datetime
import decimal
import fractions
import ipaddress
import pathlib
import re
import types
import uuid
from typing import Optional

from prefab.config.logger import get_logger, get_settings
from prefab.config.settings import Settings
from prefab.shared.factories import (
    CollectionFactory,
    EnumFactory,
    GenericContainerFactory,
    MapFactory,
    ReflectiveCollectionFactory,
    ReflectiveConstantFactory,
    ReflectiveInstanceFactory,
    ReflectiveMapFactory,
    TupleFactory,
    UnionFactory,
    is_enum_type,
    is_union_type,
)
from prefab.shared.registry import ValueRegistry

logger = get_logger("bootstrap")


def _fresh_str(value: str) -> str:
    # str literals are interned; joining builds a distinct equal object
    return "".join(list(value))


def add_scalars(registry: ValueRegistry) -> None:
    # Singletons and identity-equality types can't have a distinct equal copy
    registry.register(bool, True, False, True)
    sample = object()
    registry.register(object, sample, object(), sample)
    registry.register(type, int, str, int)

    registry.register(int, 1000, 2000, int("1000"))
    registry.register(float, 0.5, 1.0, float("0.5"))
    registry.register(complex, 1j, 2j, complex("1j"))
    registry.register(str, "one", "two", _fresh_str("one"))
    registry.register(bytes, b"one", b"two", b"".join([b"o", b"ne"]))
    registry.register(bytearray, bytearray(b"one"), bytearray(b"two"), bytearray(b"one"))
    registry.register(memoryview, memoryview(b"a"), memoryview(b"b"), memoryview(b"a"))
    registry.register(range, range(0, 1), range(0, 2), range(0, 1))
    registry.register(slice, slice(1), slice(2), slice(1))

    registry.register(decimal.Decimal, decimal.Decimal("0"), decimal.Decimal("1"), decimal.Decimal("0"))
    registry.register(fractions.Fraction, fractions.Fraction(1, 2), fractions.Fraction(1, 3), fractions.Fraction(1, 2))
    registry.register(uuid.UUID, uuid.UUID(int=0), uuid.UUID(int=1), uuid.UUID(int=0))
    registry.register(pathlib.PurePath, pathlib.PurePath("one"), pathlib.PurePath("two"), pathlib.PurePath("one"))
    registry.register(pathlib.Path, pathlib.Path("one"), pathlib.Path("two"), pathlib.Path("one"))
    # re.compile caches compiled patterns, so the copy is the red pattern itself
    registry.register(re.Pattern, re.compile("one"), re.compile("two"), re.compile("one"))

    registry.register(
        ipaddress.IPv4Address,
        ipaddress.IPv4Address("127.0.0.1"),
        ipaddress.IPv4Address("127.0.0.42"),
        ipaddress.IPv4Address("127.0.0.1"),
    )
    registry.register(
        ipaddress.IPv6Address,
        ipaddress.IPv6Address("::1"),
        ipaddress.IPv6Address("::2"),
        ipaddress.IPv6Address("::1"),
    )
    registry.register(
        ipaddress.IPv4Network,
        ipaddress.IPv4Network("10.0.0.0/8"),
        ipaddress.IPv4Network("192.168.0.0/16"),
        ipaddress.IPv4Network("10.0.0.0/8"),
    )

    # Exceptions compare by identity; red doubles as its own copy
    base_error = BaseException("red")
    registry.register(BaseException, base_error, BaseException("black"), base_error)
    error = Exception("red")
    registry.register(Exception, error, Exception("black"), error)


def add_datetimes(registry: ValueRegistry) -> None:
    registry.register(
        datetime.date,
        datetime.date(2010, 8, 4),
        datetime.date(2010, 8, 5),
        datetime.date(2010, 8, 4),
    )
    registry.register(
        datetime.time,
        datetime.time(10, 15, 30),
        datetime.time(9, 14, 29),
        datetime.time(10, 15, 30),
    )
    registry.register(
        datetime.datetime,
        datetime.datetime(2017, 12, 13, 10, 15, 30),
        datetime.datetime(2016, 11, 12, 9, 14, 29),
        datetime.datetime(2017, 12, 13, 10, 15, 30),
    )
    registry.register(
        datetime.timedelta,
        datetime.timedelta(days=1),
        datetime.timedelta(days=2),
        datetime.timedelta(days=1),
    )
    registry.register(
        datetime.timezone,
        datetime.timezone(datetime.timedelta(hours=1)),
        datetime.timezone(datetime.timedelta(hours=-10)),
        datetime.timezone(datetime.timedelta(hours=1)),
    )
    # Needs the system tz database (or tzdata); ZoneInfo caches per key
    registry.register_lazy(
        "zoneinfo.ZoneInfo",
        ReflectiveInstanceFactory("zoneinfo.ZoneInfo", ("UTC",), ("Etc/GMT+10",)),
    )


def add_collections(registry: ValueRegistry) -> None:
    for abstract in (
        list,
        collections.abc.Iterable,
        collections.abc.Collection,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
    ):
        registry.register_factory(abstract, CollectionFactory(list))

    for abstract in (set, collections.abc.Set, collections.abc.MutableSet):
        registry.register_factory(abstract, CollectionFactory(set))

    registry.register_factory(frozenset, CollectionFactory(frozenset))
    registry.register_factory(collections.deque, CollectionFactory(collections.deque))
    registry.register_factory(tuple, TupleFactory())


def add_maps(registry: ValueRegistry) -> None:
    for abstract in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
        registry.register_factory(abstract, MapFactory(dict))

    registry.register_factory(collections.OrderedDict, MapFactory(collections.OrderedDict))
    registry.register_factory(
        collections.defaultdict,
        MapFactory(lambda entries: collections.defaultdict(None, entries)),
    )
    registry.register_factory(collections.Counter, MapFactory(collections.Counter, value_type=int))
    registry.register_factory(collections.ChainMap, MapFactory(lambda entries: collections.ChainMap(dict(entries))))
    registry.register_factory(types.MappingProxyType, MapFactory(types.MappingProxyType))


def add_language_types(registry: ValueRegistry) -> None:
    registry.register_predicate(is_enum_type, EnumFactory())
    registry.register_predicate(is_union_type, UnionFactory())


def add_optional_libraries(registry: ValueRegistry) -> None:
    # sortedcontainers: elements need an order, taken from registry.ordering_key
    registry.register_lazy(
        "sortedcontainers.SortedList",
        ReflectiveCollectionFactory("sortedcontainers.SortedList", ordered=True),
    )
    registry.register_lazy(
        "sortedcontainers.SortedSet",
        ReflectiveCollectionFactory("sortedcontainers.SortedSet", ordered=True),
    )
    registry.register_lazy("sortedcontainers.SortedDict", ReflectiveMapFactory("sortedcontainers.SortedDict"))

    # pyrsistent
    registry.register_lazy("pyrsistent.PVector", ReflectiveCollectionFactory("pyrsistent", "pvector"))
    registry.register_lazy("pyrsistent.PSet", ReflectiveCollectionFactory("pyrsistent", "pset"))
    registry.register_lazy("pyrsistent.PMap", ReflectiveMapFactory("pyrsistent", "pmap"))

    # immutable mappings
    registry.register_lazy("frozendict.frozendict", ReflectiveMapFactory("frozendict.frozendict"))
    registry.register_lazy("immutables.Map", ReflectiveMapFactory("immutables.Map"))
    registry.register_lazy("bidict.bidict", ReflectiveMapFactory("bidict.bidict"))
    registry.register_lazy("multidict.MultiDict", ReflectiveMapFactory("multidict.MultiDict"))

    # returns: single-parameter containers
    registry.register_lazy("returns.maybe.Maybe", GenericContainerFactory("returns.maybe.Maybe", "from_value"))
    registry.register_lazy("returns.maybe.Some", GenericContainerFactory("returns.maybe.Some"))
    registry.register_lazy("returns.result.Success", GenericContainerFactory("returns.result.Success"))

    # numpy: bool scalars are singletons, dtypes are built by name
    registry.register_lazy("numpy.bool_", ReflectiveConstantFactory("numpy", "True_", "False_"))
    registry.register_lazy("numpy.dtype", ReflectiveInstanceFactory("numpy.dtype", ("int32",), ("float64",)))

    registry.register_lazy(
        "dateutil.relativedelta.relativedelta",
        ReflectiveInstanceFactory("dateutil.relativedelta.relativedelta", (1,), (2,)),
    )
    registry.register_lazy(
        "dateutil.tz.tzoffset",
        ReflectiveInstanceFactory("dateutil.tz.tzoffset", (None, 3600), (None, -36000)),
    )
    registry.register_lazy(
        "yarl.URL",
        ReflectiveInstanceFactory("yarl.URL", ("http://example.com/one",), ("http://example.com/two",)),
    )


def add_defaults(registry: ValueRegistry, include_optional: bool = True) -> ValueRegistry:
    """Install the default table on ``registry`` and return it."""
    add_scalars(registry)
    add_datetimes(registry)
    add_collections(registry)
    add_maps(registry)
    add_language_types(registry)
    if include_optional:
        add_optional_libraries(registry)
    logger.debug("Default sample values registered", optional_libraries=include_optional)
    return registry


def create_registry(settings: Optional[Settings] = None, include_optional: Optional[bool] = None) -> ValueRegistry:
    """A registry loaded with the defaults, configured from ``settings``."""
    settings = settings or get_settings()
    if include_optional is None:
        include_optional = settings.registry.include_optional_libraries
    registry = ValueRegistry(ordering=settings.registry.ordering)
    return add_defaults(registry, include_optional=include_optional)
