from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import pytest

from prefab import CycleDetected, RecursionGuard, TypeDescriptor, ValueTriple
from prefab.shared.factories import UnionFactory, is_union_type


@dataclass
class Tree:
    children: List["Tree"] = field(default_factory=list)


@dataclass
class Left:
    right: Any


@dataclass
class Right:
    lefts: List[Left]


def tree_factory(descriptor, registry, guard):
    children = registry.resolve(list[Tree], guard)
    return ValueTriple(Tree(children.red), Tree(children.black), Tree(children.red))


def left_factory(descriptor, registry, guard):
    right = registry.resolve(Right, guard)
    return ValueTriple(Left(right.red), Left(right.black), Left(right.red))


def right_factory(descriptor, registry, guard):
    lefts = registry.resolve(list[Left], guard)
    return ValueTriple(Right(lefts.red), Right(lefts.black), Right(lefts.red))


@pytest.fixture
def tree_registry(primed_registry):
    primed_registry.register_factory(Tree, tree_factory)
    return primed_registry


class TestSelfReferentialTypes:

    def test_self_referential_type_terminates(self, tree_registry):
        triple = tree_registry.resolve(Tree)
        assert triple.red != triple.black
        assert triple.red_copy == triple.red
        assert triple.red_copy is not triple.red

    def test_three_levels_of_nesting(self, tree_registry):
        triple = tree_registry.resolve(list[list[list[Tree]]])
        assert triple.check() == []
        innermost = triple.red[0][0][0]
        assert isinstance(innermost, Tree)

    def test_cycle_point_degrades_to_erased_container(self, tree_registry):
        """At the cycle, list[Tree] falls back to list (of object)."""
        triple = tree_registry.resolve(Tree)
        assert triple.red.children == tree_registry.resolve(list).red

    def test_cycles_are_observable(self, tree_registry):
        guard = RecursionGuard()
        tree_registry.resolve(Tree, guard)
        assert guard.cycles == [TypeDescriptor.of(Tree)]
        assert len(guard) == 0

    def test_mutually_recursive_pair(self, primed_registry):
        primed_registry.register_factory(Left, left_factory)
        primed_registry.register_factory(Right, right_factory)

        triple = primed_registry.resolve(Left)
        assert triple.red != triple.black
        assert triple.red_copy == triple.red

        triple = primed_registry.resolve(list[Right])
        assert triple.check() == []

    def test_cycle_broken_by_direct_value_of_base(self, primed_registry):
        """A parameterized re-entry uses the base type's direct values when they exist."""
        primed_registry.register(set, {"r"}, {"b"}, {"r"})

        def nested_sets(descriptor, registry, guard):
            inner = registry.resolve(set[frozenset], guard)
            return ValueTriple(frozenset([next(iter(inner.red))]), frozenset(["x"]), frozenset(["r"]))

        primed_registry.register_factory(set[frozenset], nested_sets)
        guard = RecursionGuard()
        # set[frozenset] -> set[frozenset] re-enters and gets the plain set values
        triple = primed_registry.resolve(set[frozenset], guard)
        assert triple.red == frozenset(["r"])
        assert guard.cycles == [TypeDescriptor.of(set[frozenset])]

    def test_unbreakable_cycle_surfaces(self, primed_registry):
        class Ouroboros:
            pass

        def swallow(descriptor, registry, guard):
            return registry.resolve(Ouroboros, guard)

        primed_registry.register_factory(Ouroboros, swallow)
        with pytest.raises(CycleDetected):
            primed_registry.resolve(Ouroboros)

        assert primed_registry.resolve(list[int]).red == [1]


@dataclass
class Link:
    value: int
    next: Optional["Link"] = None


@dataclass
class Directory:
    entries: Dict[str, "Directory"]


def link_factory(descriptor, registry, guard):
    value = registry.resolve(int, guard)
    tail = registry.resolve(Optional[Link], guard)
    return ValueTriple(Link(value.red, tail.red), Link(value.black, tail.black), Link(value.red_copy, tail.red_copy))


def directory_factory(descriptor, registry, guard):
    entries = registry.resolve(dict[str, Directory], guard)
    return ValueTriple(Directory(entries.red), Directory(entries.black), Directory(entries.red))


class TestCyclesThroughOtherContainers:

    @pytest.fixture
    def link_registry(self, primed_registry):
        primed_registry.register_predicate(is_union_type, UnionFactory())
        primed_registry.register_factory(Link, link_factory)
        return primed_registry

    def test_optional_self_reference_ends_in_none(self, link_registry):
        guard = RecursionGuard()
        triple = link_registry.resolve(Link, guard)
        assert triple.red == Link(1, None)
        assert triple.black == Link(2, None)
        assert triple.check() == []
        assert guard.cycles == [TypeDescriptor.of(Link)]

    def test_optional_entry_point_resolves_to_link(self, link_registry):
        triple = link_registry.resolve(Optional[Link])
        assert triple.red == Link(1, None)
        assert triple.red != triple.black

    def test_union_without_none_still_surfaces_cycle(self, primed_registry):
        class Knot:
            pass

        class Loop:
            pass

        def tie(descriptor, registry, guard):
            return registry.resolve(Union[Knot, Loop], guard)

        def loop_back(descriptor, registry, guard):
            return registry.resolve(Knot, guard)

        primed_registry.register_predicate(is_union_type, UnionFactory())
        primed_registry.register_factory(Knot, tie)
        primed_registry.register_factory(Loop, loop_back)
        with pytest.raises(CycleDetected):
            primed_registry.resolve(Knot)

    def test_map_value_self_reference(self, primed_registry):
        primed_registry.register_factory(Directory, directory_factory)
        triple = primed_registry.resolve(Directory)
        assert triple.check() == []
        # at the cycle dict[str, Directory] degrades to dict (of object)
        assert triple.red.entries == primed_registry.resolve(dict).red
