"""In-memory value sources."""

from __future__ import annotations

from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from .protocol import ValueSource


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping


class MappingSource(ValueSource):
    """Read flat keys from a plain mapping, such as parsed form fields."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._values: Mapping[str, Any] = {} if values is None else values

    @override
    async def get(self, key: str) -> Any | None:
        """Return raw value for key, or None when key does not exist."""
        return self._values.get(key)

    @override
    async def close(self) -> None:
        """Release source resources."""
        return


class CallableSource(ValueSource):
    """Delegate lookups to a getter function, sync or async."""

    def __init__(self, getter: Callable[[str], Awaitable[Any] | Any]) -> None:
        super().__init__()
        self._getter = getter

    @override
    async def get(self, key: str) -> Any | None:
        """Return raw value for key, or None when key does not exist."""
        maybe_awaitable = self._getter(key)
        if isawaitable(maybe_awaitable):
            return await maybe_awaitable
        return maybe_awaitable

    @override
    async def close(self) -> None:
        """Release source resources."""
        return
