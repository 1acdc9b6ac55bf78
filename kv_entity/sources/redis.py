"""Redis-backed prefix snapshot source."""

from __future__ import annotations

import re
from inspect import isawaitable
from typing import Any

from typing_extensions import override


try:
    import redis.asyncio as redis_async
except ImportError:  # pragma: no cover - exercised when dependency is absent
    redis_async = None

from .snapshot import PrefixSnapshotSource


_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _text(value: str | bytes | None) -> str | None:
    if isinstance(value, bytes):
        return value.decode()
    return value


class RedisSource(PrefixSnapshotSource):
    """Read a submitted form stored as flat Redis string keys.

    One ``SCAN`` over ``prefix*`` followed by one ``MGET`` loads the form.
    Prefix characters that are glob wildcards are escaped.
    """

    def __init__(self, url: str = "redis://localhost:6379/0", *, prefix: str = "", client: Any | None = None) -> None:
        super().__init__(prefix)
        self._url = url
        self._client = client

    def _connected(self) -> Any:
        if self._client is None:
            if redis_async is None:
                msg = "redis dependency is required for RedisSource; install with `uv add redis`"
                raise RuntimeError(msg)
            self._client = redis_async.from_url(self._url, decode_responses=True)
        return self._client

    @override
    async def _read_prefix(self, prefix: str) -> dict[str, str]:
        client = self._connected()
        pattern = _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"
        keys = [_text(key) async for key in client.scan_iter(match=pattern)]
        if not keys:
            return {}
        values = await client.mget(keys)
        return {key: text for key, value in zip(keys, values, strict=True) if (text := _text(value)) is not None}

    @override
    async def _read_key(self, key: str) -> str | None:
        return _text(await self._connected().get(key))

    @override
    async def close(self) -> None:
        """Release the client connection pool, if one was opened."""
        if self._client is None:
            return
        closer = getattr(self._client, "aclose", None) or getattr(self._client, "close", None)
        if closer is not None and isawaitable(result := closer()):
            await result
