# prefab/shared/types/descriptor.py
"""
Structural type keys.

A ``TypeDescriptor`` is the registry's map key: a base type plus the
descriptors of its generic parameters. It can be built from anything that
shows up in an annotation, so ``TypeDescriptor.of(dict[str, list[int]])``
and ``TypeDescriptor.of(typing.Dict[str, typing.List[int]])`` are equal.
"""

import types
import typing
from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class TypeDescriptor:
    base: Any
    params: Tuple["TypeDescriptor", ...] = ()

    @classmethod
    def of(cls, hint: Any) -> "TypeDescriptor":
        """Build a descriptor from a class, a generic alias or a dotted name."""
        if isinstance(hint, TypeDescriptor):
            return hint
        if hint is None:
            return cls(type(None))
        if hint is typing.Any or isinstance(hint, typing.TypeVar):
            return cls(object)
        if isinstance(hint, typing.ForwardRef):
            return cls(hint.__forward_arg__)
        if isinstance(hint, (list, tuple)):
            # Callable[[A, B], R] carries its argument types as a list
            return cls(tuple, tuple(cls.of(arg) for arg in hint))

        origin = typing.get_origin(hint)
        if origin is None:
            return cls(hint)
        if origin is typing.Annotated:
            return cls.of(typing.get_args(hint)[0])

        if origin is types.UnionType:
            origin = typing.Union
        args = typing.get_args(hint)
        return cls(origin, tuple(cls.of(arg) for arg in args))

    @property
    def is_named(self) -> bool:
        """True when the base is a dotted name that has not been imported."""
        return isinstance(self.base, str)

    @property
    def qualified_name(self) -> str:
        if self.is_named:
            return self.base
        module = getattr(self.base, "__module__", None)
        name = getattr(self.base, "__qualname__", None) or getattr(self.base, "__name__", None)
        if module and name:
            return f"{module}.{name}"
        return repr(self.base)

    @property
    def short_name(self) -> str:
        if self.is_named:
            return self.base.rsplit(".", 1)[-1]
        return getattr(self.base, "__name__", None) or repr(self.base)

    def param(self, index: int) -> "TypeDescriptor":
        """The ``index``-th parameter, or ``object`` when it isn't declared."""
        if index < len(self.params):
            return self.params[index]
        return OBJECT

    def erased(self) -> "TypeDescriptor":
        if not self.params:
            return self
        return TypeDescriptor(self.base)

    def with_base(self, base: Any) -> "TypeDescriptor":
        return TypeDescriptor(base, self.params)

    def __str__(self) -> str:
        if self.base is Ellipsis:
            return "..."
        if self.is_named or self.base is typing.Union:
            name = self.qualified_name if self.is_named else "Union"
        else:
            name = self.short_name
        if not self.params:
            return name
        return f"{name}[{', '.join(str(p) for p in self.params)}]"


OBJECT = TypeDescriptor(object)
