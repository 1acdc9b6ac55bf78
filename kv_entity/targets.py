"""Write targets: keyed entities and ordered sequences."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping, MutableSequence
from typing import Any

from typing_extensions import override


class Target(ABC):
    """Something the parser writes decoded values into."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Return the current value stored under ``name``, or None."""

    @abstractmethod
    def write(self, name: str, value: Any, *, overwrite: bool) -> bool:
        """Store a scalar value and return True when it was written."""

    @abstractmethod
    def attach(self, name: str, value: Any) -> None:
        """Store a built array or nested entity."""


class KeyedTarget(Target):
    """Entity addressed by field name, either a mapping or a plain object."""

    def __init__(self, obj: Any) -> None:
        super().__init__()
        self.obj = obj
        self._is_mapping = isinstance(obj, MutableMapping)

    @override
    def get(self, name: str) -> Any:
        if self._is_mapping:
            return self.obj.get(name)
        return getattr(self.obj, name, None)

    @override
    def write(self, name: str, value: Any, *, overwrite: bool) -> bool:
        if not overwrite and self.get(name) is not None:
            return False
        self._set(name, value)
        return True

    @override
    def attach(self, name: str, value: Any) -> None:
        self._set(name, value)

    def _set(self, name: str, value: Any) -> None:
        if self._is_mapping:
            self.obj[name] = value
        else:
            setattr(self.obj, name, value)


class SequenceTarget(Target):
    """Ordered sequence that only grows by appending."""

    def __init__(self, items: MutableSequence[Any] | None = None) -> None:
        super().__init__()
        self.items: MutableSequence[Any] = [] if items is None else items

    @override
    def get(self, name: str) -> Any:
        return None

    @override
    def write(self, name: str, value: Any, *, overwrite: bool) -> bool:
        self.items.append(value)
        return True

    @override
    def attach(self, name: str, value: Any) -> None:
        self.items.append(value)


def as_target(obj: Any) -> Target:
    """Wrap a caller-supplied root object in the matching target variant."""
    if isinstance(obj, Target):
        return obj
    if isinstance(obj, MutableSequence):
        return SequenceTarget(obj)
    return KeyedTarget(obj)
