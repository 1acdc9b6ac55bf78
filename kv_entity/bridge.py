"""Blocking facade over ``DictParser`` for synchronous callers."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Iterable, Mapping

    from kv_entity.options import MapOptions
    from kv_entity.parser import DictParser
    from kv_entity.schema import EntitySchema, FieldDefinition


_T = TypeVar("_T")


class SyncDictParser:
    """Run parser coroutines to completion from blocking code.

    Every call is handed to one worker thread that owns a single
    ``asyncio.Runner``. Sources holding loop-bound connections (Redis,
    asyncpg) therefore always see the same loop, and calling from inside
    a running event loop does not try to nest loops.
    """

    def __init__(self, parser: DictParser) -> None:
        super().__init__()
        self._parser = parser
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kv-entity")
        self._runner: asyncio.Runner | None = None
        self._closed = False

    def _on_worker(self, make_coroutine: Callable[[], Coroutine[Any, Any, _T]]) -> _T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(make_coroutine())

    def _call(self, make_coroutine: Callable[[], Coroutine[Any, Any, _T]]) -> _T:
        if self._closed:
            msg = "SyncDictParser is closed"
            raise RuntimeError(msg)
        return self._worker.submit(self._on_worker, make_coroutine).result()

    def map(
        self,
        target: Any,
        entity_schema: EntitySchema,
        whitelist: Iterable[str],
        options: MapOptions | Mapping[str, Any] | None = None,
        parents: Iterable[str] = (),
    ) -> bool:
        """Populate ``target`` in place; see ``DictParser.map``."""
        paths, prefix = list(whitelist), tuple(parents)
        return self._call(lambda: self._parser.map(target, entity_schema, paths, options, prefix))

    def get_field(self, name: str, definition: FieldDefinition | str = "string") -> Any:
        """Fetch and convert a single flat key."""
        return self._call(lambda: self._parser.get_field(name, definition))

    def close(self) -> None:
        """Close the value source, then the worker's event loop."""
        if self._closed:
            return
        try:
            self._call(self._parser.source.close)
        finally:
            self._closed = True
            if self._runner is not None:
                self._worker.submit(self._runner.close).result()
            self._worker.shutdown()
