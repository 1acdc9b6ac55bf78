"""Sources that load every flat key under a prefix in one round trip."""

from __future__ import annotations

import asyncio
from abc import abstractmethod
from typing import Any

from typing_extensions import override

from .protocol import ValueSource


class PrefixSnapshotSource(ValueSource):
    """Serve lookups from one batch read of all keys starting with ``prefix``.

    A mapping pass asks for many sibling keys (``customers_1_name``,
    ``customers_1_age``, ``customers_2_name``, ...), most of them absent.
    Loading the prefix once turns those into dictionary lookups. Keys
    outside the prefix fall back to a single-key read.

    The snapshot is taken on first use and kept until ``invalidate``.
    """

    def __init__(self, prefix: str = "") -> None:
        super().__init__()
        self.prefix = prefix
        self._snapshot: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _read_prefix(self, prefix: str) -> dict[str, str]:
        """Return every stored key/value pair whose key starts with ``prefix``."""

    @abstractmethod
    async def _read_key(self, key: str) -> str | None:
        """Return the stored value for one key outside the prefix."""

    async def _loaded(self) -> dict[str, str]:
        async with self._lock:
            if self._snapshot is None:
                self._snapshot = await self._read_prefix(self.prefix)
            return self._snapshot

    def invalidate(self) -> None:
        """Drop the snapshot so the next lookup reloads the prefix."""
        self._snapshot = None

    @override
    async def get(self, key: str) -> Any | None:
        """Return raw value for key, or None when key does not exist."""
        if not key.startswith(self.prefix):
            return await self._read_key(key)
        return (await self._loaded()).get(key)
