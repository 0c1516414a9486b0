"""
Capability probe - locate optional external types by dotted name.

Whether a library is importable is a property of the runtime environment:
the same registry resolves ``sortedcontainers.SortedList`` in one virtualenv
and reports it absent in another. Absence is never an error here; it only
becomes one when a factory actually needs the type.
"""

import builtins
import importlib
import threading
from typing import Any, Dict, Optional

from prefab.config.logger import get_logger
from prefab.shared.errors import ClassAbsent, InstantiationFailure

_MISSING = object()


class CapabilityProbe:
    """Thread-safe, at-most-once lookup of external types."""

    def __init__(self):
        self._resolved: Dict[str, Any] = {}
        self._lock = threading.RLock()
        self.logger = get_logger("CapabilityProbe")

    def resolve(self, name: str) -> Optional[Any]:
        """Return the object ``name`` refers to, or None when it can't be found."""
        cached = self._resolved.get(name, _MISSING)
        if cached is not _MISSING:
            return cached
        with self._lock:
            if name not in self._resolved:
                self._resolved[name] = self._locate(name)
                if self._resolved[name] is None:
                    self.logger.debug("Type not found", name=name)
            return self._resolved[name]

    def require(self, name: str) -> Any:
        handle = self.resolve(name)
        if handle is None:
            raise ClassAbsent(name)
        return handle

    def is_present(self, name: str) -> bool:
        return self.resolve(name) is not None

    def instantiate(self, handle: Any, *args, **kwargs) -> Any:
        """Call ``handle`` (or the type named by it) with the given arguments."""
        target = self.require(handle) if isinstance(handle, str) else handle
        return self._invoke(target, _name_of(handle), args, kwargs)

    def call_factory(self, handle: Any, method_name: str, *args, **kwargs) -> Any:
        """Call a named static/class method (or module function) on ``handle``."""
        owner = self.require(handle) if isinstance(handle, str) else handle
        qualified = f"{_name_of(handle)}.{method_name}"
        method = getattr(owner, method_name, None)
        if method is None:
            raise ClassAbsent(qualified)
        return self._invoke(method, qualified, args, kwargs)

    def constant(self, handle: Any, constant_name: str) -> Any:
        owner = self.require(handle) if isinstance(handle, str) else handle
        value = getattr(owner, constant_name, _MISSING)
        if value is _MISSING:
            raise ClassAbsent(f"{_name_of(handle)}.{constant_name}")
        return value

    def clear(self) -> None:
        with self._lock:
            self._resolved.clear()

    @staticmethod
    def _invoke(target: Any, name: str, args: tuple, kwargs: dict) -> Any:
        try:
            return target(*args, **kwargs)
        except Exception as exc:
            raise InstantiationFailure(name, exc) from exc

    @staticmethod
    def _locate(name: str) -> Optional[Any]:
        parts = name.split(".")
        if len(parts) == 1 and hasattr(builtins, name):
            return getattr(builtins, name)

        # Longest importable module prefix, then attribute walk for the rest
        for split in range(len(parts), 0, -1):
            module_name = ".".join(parts[:split])
            try:
                obj = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as exc:
                raise InstantiationFailure(module_name, exc) from exc
            for attr in parts[split:]:
                obj = getattr(obj, attr, _MISSING)
                if obj is _MISSING:
                    return None
            return obj
        return None


def _name_of(handle: Any) -> str:
    if isinstance(handle, str):
        return handle
    module = getattr(handle, "__module__", None)
    name = getattr(handle, "__qualname__", None) or getattr(handle, "__name__", repr(handle))
    return f"{module}.{name}" if module else name
