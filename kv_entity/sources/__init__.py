"""Value source contracts and implementations."""

from .in_memory import CallableSource, MappingSource
from .postgres import PostgresSource
from .protocol import ValueSource
from .redis import RedisSource
from .snapshot import PrefixSnapshotSource


__all__ = ["CallableSource", "MappingSource", "PostgresSource", "PrefixSnapshotSource", "RedisSource", "ValueSource"]
