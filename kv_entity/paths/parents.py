"""Parent path stack for building flat keys during recursion."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ParentPath:
    """Stack of path segments joined with a delimiter into flat keys."""

    def __init__(self, delimiter: str, segments: Iterable[str] = ()) -> None:
        super().__init__()
        if not delimiter:
            msg = "delimiter must not be empty"
            raise ValueError(msg)
        self.delimiter = delimiter
        self._segments: list[str] = list(segments)

    @property
    def segments(self) -> tuple[str, ...]:
        """Return a snapshot of the current segments."""
        return tuple(self._segments)

    def key_for(self, field_name: str) -> str:
        """Build the flat key for ``field_name`` below the current segments."""
        return self.delimiter.join([*self._segments, field_name])

    @contextmanager
    def entered(self, segment: str) -> Iterator[None]:
        """Push ``segment`` for the duration of the block."""
        self._segments.append(segment)
        try:
            yield
        finally:
            _ = self._segments.pop()

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"ParentPath({self.delimiter.join(self._segments)!r})"
