"""
Value registry - type-keyed store of sample values and factories.

Populate it once (bootstrap defaults, then user overrides), then resolve.
Writes take a lock; after initialization the registry is read-only and can
be shared by concurrent verification runs.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from prefab.config.logger import get_logger
from prefab.shared.errors import ClassAbsent, CycleDetected, InstantiationFailure, UnsupportedType
from prefab.shared.factories.base import PrefabFactory, as_factory
from prefab.shared.factories.constant import OPTIONAL_TERMINAL, is_optional_type, is_union_type
from prefab.shared.probe import CapabilityProbe
from prefab.shared.types import RecursionGuard, TypeDescriptor, ValueTriple

Predicate = Callable[[TypeDescriptor], bool]

_MISSING = object()

ORDERINGS: Dict[str, Callable[[Any], Any]] = {
    "hash": hash,
    "repr": repr,
}


class ValueRegistry:
    """Central map from TypeDescriptor to a stored triple or a factory."""

    def __init__(self, probe: Optional[CapabilityProbe] = None, ordering: str = "hash"):
        self._values: Dict[TypeDescriptor, ValueTriple] = {}
        self._factories: Dict[TypeDescriptor, PrefabFactory] = {}
        self._lazy: Dict[str, PrefabFactory] = {}
        self._predicates: List[Tuple[Predicate, PrefabFactory]] = []
        self._absent_reported: Set[str] = set()
        self._lock = threading.RLock()
        self.probe = probe or CapabilityProbe()
        if ordering not in ORDERINGS:
            raise ValueError(f"Unknown ordering '{ordering}'. Must be one of {', '.join(ORDERINGS)}")
        self.ordering = ordering
        self.logger = get_logger("ValueRegistry")

    @property
    def ordering_key(self) -> Callable[[Any], Any]:
        """Key function used by sorted containers over unordered element types."""
        return ORDERINGS[self.ordering]

    # ----------------------------
    # Registration
    # ----------------------------
    def register(self, hint: Any, red: Any, black: Any = _MISSING, red_copy: Any = _MISSING) -> None:
        """Bind fixed values to a type: ``register(t, triple)`` or ``register(t, red, black, red_copy)``."""
        descriptor = self._normalize(TypeDescriptor.of(hint))
        if isinstance(red, ValueTriple):
            triple = red
        elif black is _MISSING or red_copy is _MISSING:
            raise TypeError(f"register({descriptor}) needs red, black and red_copy, or a ValueTriple")
        else:
            triple = ValueTriple(red, black, red_copy)
        if triple.red == triple.black:
            raise ValueError(f"red and black values for {descriptor} must not be equal")
        if triple.red_copy != triple.red:
            raise ValueError(f"red_copy for {descriptor} must equal red")
        with self._lock:
            self._warn_override(descriptor)
            self._factories.pop(descriptor, None)
            self._values[descriptor] = triple

    def register_factory(self, hint: Any, factory: Any) -> None:
        descriptor = self._normalize(TypeDescriptor.of(hint))
        factory = as_factory(factory)
        with self._lock:
            self._warn_override(descriptor)
            self._values.pop(descriptor, None)
            self._factories[descriptor] = factory

    def register_lazy(self, external_name: str, factory: Any) -> None:
        """Bind a factory to a dotted type name without importing anything."""
        factory = as_factory(factory)
        with self._lock:
            if external_name in self._lazy:
                self.logger.debug("Overriding lazy registration", type=external_name)
            self._lazy[external_name] = factory

    def register_predicate(self, predicate: Predicate, factory: Any) -> None:
        """Catch-all factory for every type ``predicate`` accepts (enums, unions ...)."""
        with self._lock:
            self._predicates.append((predicate, as_factory(factory)))

    def _warn_override(self, descriptor: TypeDescriptor) -> None:
        if descriptor in self._values or descriptor in self._factories:
            self.logger.debug("Overriding registration", type=str(descriptor))

    def contains(self, hint: Any) -> bool:
        """Whether some entry would serve ``hint``; lazy entries match by name only."""
        descriptor = self._normalize(TypeDescriptor.of(hint))
        for key in (descriptor, descriptor.erased()):
            if key in self._values or key in self._factories:
                return True
        if descriptor.qualified_name in self._lazy:
            return True
        return any(predicate(descriptor) for predicate, _ in self._predicates)

    __contains__ = contains

    def copy(self) -> "ValueRegistry":
        """Independent registry with the same entries, sharing the probe."""
        clone = ValueRegistry(probe=self.probe, ordering=self.ordering)
        with self._lock:
            clone._values = dict(self._values)
            clone._factories = dict(self._factories)
            clone._lazy = dict(self._lazy)
            clone._predicates = list(self._predicates)
        return clone

    # ----------------------------
    # Resolution
    # ----------------------------
    def resolve(self, hint: Any, guard: Optional[RecursionGuard] = None) -> ValueTriple:
        """Return the triple for ``hint``.

        Pass ``guard`` only from inside a factory; top-level callers get a
        fresh one.

        Raises:
            UnsupportedType: nothing is registered for the type.
            ClassAbsent: the type's optional library isn't installed.
            InstantiationFailure: the library is installed but building failed.
        """
        descriptor = self._normalize(TypeDescriptor.of(hint))
        if guard is None:
            guard = RecursionGuard()

        if descriptor in guard:
            return self._cycle_fallback(descriptor, guard)

        guard.push(descriptor)
        try:
            return self._create(descriptor, guard)
        except CycleDetected:
            fallback = self._erased_fallback(descriptor, guard)
            if fallback is None:
                raise
            return fallback
        finally:
            guard.pop(descriptor)

    def give_red(self, hint: Any) -> Any:
        return self.resolve(hint).red

    def give_black(self, hint: Any) -> Any:
        return self.resolve(hint).black

    def give_red_copy(self, hint: Any) -> Any:
        return self.resolve(hint).red_copy

    def _normalize(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        # A dotted name without a lazy entry may still name an importable type
        if descriptor.is_named and descriptor.base not in self._lazy:
            handle = self.probe.resolve(descriptor.base)
            if handle is not None:
                return descriptor.with_base(handle)
        return descriptor

    def _create(self, descriptor: TypeDescriptor, guard: RecursionGuard) -> ValueTriple:
        # Exact descriptor first, then the erased one; values before factories
        for key in dict.fromkeys((descriptor, descriptor.erased())):
            triple = self._values.get(key)
            if triple is not None:
                return triple
            factory = self._factories.get(key)
            if factory is not None:
                return self._invoke(factory, descriptor, guard)

        factory = self._lookup_lazy_or_predicate(descriptor)
        if factory is None:
            if descriptor.is_named:
                raise ClassAbsent(descriptor.base, descriptor)
            raise UnsupportedType(descriptor)
        return self._invoke(factory, descriptor, guard)

    def _invoke(self, factory: PrefabFactory, descriptor: TypeDescriptor, guard: RecursionGuard) -> ValueTriple:
        try:
            return factory.create_values(descriptor, self, guard)
        except ClassAbsent as exc:
            self._report_absent(exc)
            raise
        except InstantiationFailure as exc:
            self.logger.error("Could not build sample values", type=str(descriptor), name=exc.name, cause=repr(exc.cause))
            raise

    def _lookup_lazy_or_predicate(self, descriptor: TypeDescriptor) -> Optional[PrefabFactory]:
        factory = self._lazy.get(descriptor.qualified_name)
        if factory is not None:
            return factory
        if not descriptor.is_named:
            # Public names often differ from __module__ (sortedcontainers.SortedList
            # lives in sortedcontainers.sortedlist); probe only same-named entries
            for name, candidate in list(self._lazy.items()):
                if name.rsplit(".", 1)[-1] == descriptor.short_name and self.probe.resolve(name) is descriptor.base:
                    return candidate

        for predicate, candidate in self._predicates:
            if predicate(descriptor):
                return candidate
        return None

    def _report_absent(self, exc: ClassAbsent) -> None:
        if exc.name in self._absent_reported:
            return
        with self._lock:
            self._absent_reported.add(exc.name)
        self.logger.info("Optional library type not available", type=exc.name)

    # ----------------------------
    # Cycle handling
    # ----------------------------
    def _cycle_fallback(self, descriptor: TypeDescriptor, guard: RecursionGuard) -> ValueTriple:
        guard.record_cycle(descriptor)
        self.logger.debug("Cycle detected", type=str(descriptor), path=" -> ".join(str(d) for d in guard.path))

        # Optional[T] re-entering itself ends the chain with None
        if is_optional_type(descriptor):
            return OPTIONAL_TERMINAL
        triple = self._values.get(descriptor.erased())
        if triple is not None:
            return triple
        fallback = self._erased_fallback(descriptor, guard)
        if fallback is not None:
            return fallback
        # Let the nearest parameterized frame on the stack substitute instead
        raise CycleDetected(descriptor, guard.path)

    def _erased_fallback(self, descriptor: TypeDescriptor, guard: RecursionGuard) -> Optional[ValueTriple]:
        erased = descriptor.erased()
        # A bare Union has no alternatives to build values from
        if erased == descriptor or erased in guard or is_union_type(descriptor):
            return None
        return self.resolve(erased, guard)
