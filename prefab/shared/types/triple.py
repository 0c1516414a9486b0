# prefab/shared/types/triple.py
from dataclasses import dataclass
from typing import Any, Iterator, List


@dataclass(frozen=True)
class ValueTriple:
    """Red, black and red-copy samples of a single type.

    ``red != black``; ``red_copy == red`` while ``red_copy is not red``.
    Singletons (``True``, enum members, named constants) and identity-equality
    types such as ``object`` can't meet all of it and are exempt.
    """

    red: Any
    black: Any
    red_copy: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.red
        yield self.black
        yield self.red_copy

    def check(self) -> List[str]:
        """Return the invariants this triple violates."""
        problems = []
        if self.red == self.black:
            problems.append("red equals black")
        if self.red_copy != self.red:
            problems.append("red_copy does not equal red")
        if self.red_copy is self.red:
            problems.append("red_copy is the same instance as red")
        return problems
