"""Immutable whitelist of delimiter-split field paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class PathEntry:
    """One whitelisted path, with a cursor marking the current schema level."""

    raw: str
    segments: tuple[str, ...]
    offset: int = 0

    @classmethod
    def parse(cls, path: str, delimiter: str) -> PathEntry:
        """Split ``path`` into segments on ``delimiter``."""
        return cls(raw=path, segments=tuple(path.split(delimiter)))

    @property
    def head(self) -> str | None:
        """First remaining segment, or None once the path is used up."""
        if self.offset < len(self.segments):
            return self.segments[self.offset]
        return None

    @property
    def remaining(self) -> tuple[str, ...]:
        return self.segments[self.offset :]

    def advance(self) -> PathEntry:
        """Return the entry one level further down."""
        return PathEntry(raw=self.raw, segments=self.segments, offset=self.offset + 1)


@dataclass(frozen=True, slots=True)
class PathWhitelist:
    """Ordered set of paths that may be written during one mapping pass."""

    entries: tuple[PathEntry, ...]
    delimiter: str

    @classmethod
    def from_paths(cls, paths: Iterable[str], delimiter: str) -> PathWhitelist:
        if not delimiter:
            msg = "delimiter must not be empty"
            raise ValueError(msg)
        if isinstance(paths, str):
            msg = "whitelist must be a sequence of paths, not a single string"
            raise TypeError(msg)
        return cls(entries=tuple(PathEntry.parse(path, delimiter) for path in paths), delimiter=delimiter)

    def for_field(self, field_name: str) -> PathWhitelist:
        """Keep only entries whose first remaining segment is ``field_name``."""
        return PathWhitelist(
            entries=tuple(entry for entry in self.entries if entry.head == field_name),
            delimiter=self.delimiter,
        )

    def descend(self) -> PathWhitelist:
        """Drop the leading segment of every entry."""
        return PathWhitelist(entries=tuple(entry.advance() for entry in self.entries), delimiter=self.delimiter)

    def leads_with(self, field_name: str) -> bool:
        """Return True when the first entry starts with ``field_name``."""
        return bool(self.entries) and self.entries[0].head == field_name

    def allows_literal(self, field_name: str) -> bool:
        """Return True when some entry's remaining path is exactly ``field_name``.

        Unlike ``leads_with`` this compares the unsplit remainder, so
        ``tags_extra`` does not authorize ``tags``.
        """
        return any(self.delimiter.join(entry.remaining) == field_name for entry in self.entries)

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
