"""Value source interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ValueSource(ABC):
    """Async resolver from flat keys to raw submitted values."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return raw value for key, or None when key does not exist."""

    @abstractmethod
    async def close(self) -> None:
        """Close any source resources."""
