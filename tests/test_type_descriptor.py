import collections.abc
import typing
from typing import Annotated, Any, Dict, List, Optional, TypeVar

from prefab import TypeDescriptor
from prefab.shared.types import OBJECT

T = TypeVar("T")


class TestTypeDescriptor:

    def test_plain_class(self):
        descriptor = TypeDescriptor.of(int)
        assert descriptor.base is int
        assert descriptor.params == ()
        assert descriptor.qualified_name == "builtins.int"

    def test_builtin_and_typing_generics_are_equal(self):
        """list[int] and typing.List[int] describe the same type."""
        assert TypeDescriptor.of(list[int]) == TypeDescriptor.of(List[int])
        assert hash(TypeDescriptor.of(dict[str, int])) == hash(TypeDescriptor.of(Dict[str, int]))

    def test_structural_equality_is_recursive(self):
        a = TypeDescriptor.of(dict[str, list[int]])
        b = TypeDescriptor(dict, (TypeDescriptor(str), TypeDescriptor(list, (TypeDescriptor(int),))))
        assert a == b
        assert a != TypeDescriptor.of(dict[str, list[str]])

    def test_usable_as_dict_key(self):
        table = {TypeDescriptor.of(list[int]): "ints"}
        assert table[TypeDescriptor.of(List[int])] == "ints"

    def test_optional_and_pipe_union_match(self):
        optional = TypeDescriptor.of(Optional[int])
        assert optional.base is typing.Union
        assert optional == TypeDescriptor.of(int | None)
        assert optional.params == (TypeDescriptor(int), TypeDescriptor(type(None)))

    def test_any_and_typevars_become_object(self):
        assert TypeDescriptor.of(Any) == OBJECT
        assert TypeDescriptor.of(T) == OBJECT
        assert TypeDescriptor.of(list[T]).param(0) == OBJECT

    def test_annotated_is_unwrapped(self):
        assert TypeDescriptor.of(Annotated[int, "meta"]) == TypeDescriptor.of(int)

    def test_abstract_collections(self):
        descriptor = TypeDescriptor.of(collections.abc.Mapping[str, int])
        assert descriptor.base is collections.abc.Mapping

    def test_missing_params_default_to_object(self):
        descriptor = TypeDescriptor.of(list)
        assert descriptor.param(0) == OBJECT
        assert descriptor.param(3) == OBJECT

    def test_erased_drops_params(self):
        assert TypeDescriptor.of(list[int]).erased() == TypeDescriptor.of(list)
        raw = TypeDescriptor.of(int)
        assert raw.erased() is raw

    def test_named_descriptors(self):
        descriptor = TypeDescriptor.of("sortedcontainers.SortedList")
        assert descriptor.is_named
        assert descriptor.qualified_name == "sortedcontainers.SortedList"
        assert descriptor.short_name == "SortedList"

    def test_forward_references_become_names(self):
        descriptor = TypeDescriptor.of(List["Node"])
        assert descriptor.param(0) == TypeDescriptor("Node")

    def test_of_is_idempotent(self):
        descriptor = TypeDescriptor.of(list[int])
        assert TypeDescriptor.of(descriptor) is descriptor

    def test_string_rendering(self):
        assert str(TypeDescriptor.of(dict[str, list[int]])) == "dict[str, list[int]]"
        assert str(TypeDescriptor.of(tuple[int, ...])) == "tuple[int, ...]"
        assert str(TypeDescriptor.of(Optional[int])) == "Union[int, NoneType]"
