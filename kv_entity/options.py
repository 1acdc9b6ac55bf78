"""Parser-wide and per-call mapping options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


DEFAULT_DELIMITER = "_"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Settings shared by every ``map`` call of one parser.

    Parameters
    ----------
    delimiter
        Separator used to split whitelist paths and to join parent path
        segments into flat keys.
    """

    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        if not self.delimiter:
            msg = "delimiter must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class MapOptions:
    """Write policy for one ``map`` call."""

    overwrite: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.overwrite, bool):
            msg = f"overwrite must be a bool, not {type(self.overwrite).__name__}"
            raise TypeError(msg)

    @classmethod
    def coerce(cls, value: MapOptions | Mapping[str, Any] | None) -> MapOptions:
        """Accept ``None``, a ``MapOptions`` or a plain ``{"overwrite": ...}`` mapping."""
        if value is None:
            return cls()
        if isinstance(value, MapOptions):
            return value
        unknown = set(value) - {"overwrite"}
        if unknown:
            msg = f"unknown map options: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        return cls(overwrite=value.get("overwrite", True))
