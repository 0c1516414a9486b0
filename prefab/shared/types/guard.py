# prefab/shared/types/guard.py
from typing import Dict, Iterator, List

from prefab.shared.errors import CycleDetected
from prefab.shared.types.descriptor import TypeDescriptor


class RecursionGuard:
    """Descriptors currently being resolved within one top-level request.

    Insertion ordered, so the path that led to a cycle can be reported.
    Never share a guard between requests.
    """

    def __init__(self):
        self._stack: Dict[TypeDescriptor, None] = {}
        self.cycles: List[TypeDescriptor] = []

    def push(self, descriptor: TypeDescriptor) -> None:
        if descriptor in self._stack:
            raise CycleDetected(descriptor, self._stack)
        self._stack[descriptor] = None

    def pop(self, descriptor: TypeDescriptor) -> None:
        self._stack.pop(descriptor, None)

    def record_cycle(self, descriptor: TypeDescriptor) -> None:
        self.cycles.append(descriptor)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def path(self) -> List[TypeDescriptor]:
        return list(self._stack)

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._stack

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._stack))

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        return f"RecursionGuard({' -> '.join(str(d) for d in self._stack)})"
