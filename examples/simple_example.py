"""
Simple Working Example of the prefab registry
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from dataclasses import dataclass, field
from typing import List, Optional

from prefab import ClassAbsent, ValueTriple, create_registry


@dataclass
class Node:
    name: str
    children: List["Node"] = field(default_factory=list)


def node_factory(descriptor, registry, guard):
    names = registry.resolve(str, guard)
    children = registry.resolve(list[Node], guard)
    return ValueTriple(
        Node(names.red, children.red),
        Node(names.black, children.black),
        Node(names.red_copy, children.red),
    )


def main():
    registry = create_registry()
    registry.register_factory(Node, node_factory)

    for hint in (int, dict[str, list[Optional[int]]], Node):
        red, black, red_copy = registry.resolve(hint)
        print(f"{hint}: red={red!r} black={black!r} copy_equal={red_copy == red}")

    try:
        print(registry.give_red("sortedcontainers.SortedList"))
    except ClassAbsent as exc:
        print(f"skipped: {exc}")


if __name__ == "__main__":
    main()
