"""
prefab - red/black/red-copy sample values for equality-contract verification.
"""

from prefab.bootstrap import add_defaults, create_registry
from prefab.shared.errors import (
    ClassAbsent,
    CycleDetected,
    InstantiationFailure,
    PrefabError,
    UnsupportedType,
)
from prefab.shared.factories import PrefabFactory
from prefab.shared.probe import CapabilityProbe
from prefab.shared.registry import ValueRegistry
from prefab.shared.types import RecursionGuard, TypeDescriptor, ValueTriple

__all__ = [
    "add_defaults",
    "create_registry",
    "ValueRegistry",
    "CapabilityProbe",
    "PrefabFactory",
    "TypeDescriptor",
    "RecursionGuard",
    "ValueTriple",
    "PrefabError",
    "UnsupportedType",
    "ClassAbsent",
    "CycleDetected",
    "InstantiationFailure",
]
