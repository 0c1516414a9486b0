# prefab/shared/errors.py
from typing import Any, Iterable, Optional


class PrefabError(Exception):
    """Base class for every failure raised while producing sample values."""


class UnsupportedType(PrefabError):
    """No direct value and no applicable factory exist for a type.

    The verification engine treats this as terminal: the user is expected to
    register values for the type before verifying again.
    """

    def __init__(self, descriptor: Any, reason: Optional[str] = None):
        self.descriptor = descriptor
        self.reason = reason
        message = f"No sample values available for type {descriptor}"
        if reason:
            message = f"{message}: {reason}"
        else:
            message = f"{message}; register red/black values for it first"
        super().__init__(message)


class ClassAbsent(UnsupportedType):
    """An optional library's type or callable could not be located."""

    def __init__(self, name: str, descriptor: Any = None):
        self.name = name
        super().__init__(
            descriptor if descriptor is not None else name,
            reason=f"'{name}' is not available in this environment",
        )


class CycleDetected(UnsupportedType):
    """A self-referential type could not be broken by the fallback policy."""

    def __init__(self, descriptor: Any, path: Iterable[Any] = ()):
        self.path = tuple(path)
        chain = " -> ".join(str(p) for p in (*self.path, descriptor))
        super().__init__(descriptor, reason=f"recursive type cycle {chain}")


class InstantiationFailure(PrefabError):
    """An external type was located but constructing or calling it failed."""

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(
            f"Could not instantiate '{name}': {type(cause).__name__}: {cause}"
        )
