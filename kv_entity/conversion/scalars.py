"""Typed conversion of raw flat-source values."""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from kv_entity.errors import UnreachableTypeError

from .sanitize import escape_text, sanitize_html


if TYPE_CHECKING:
    from kv_entity.schema import EntitySchema, FieldDefinition


_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_int(raw: Any) -> int | None:
    """Parse the leading base-10 integer of ``raw``; ``"12px"`` gives 12.

    There is no integer NaN, so unparsable input gives None and the field
    is treated as absent.
    """
    match = _INT_PREFIX.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def parse_float(raw: Any) -> float:
    """Parse the leading decimal number of ``raw``; ``"3.5kg"`` gives 3.5, ``"abc"`` gives NaN."""
    match = _FLOAT_PREFIX.match(str(raw))
    if match is None:
        return math.nan
    return float(match.group(1))


def parse_bool(raw: Any) -> bool:
    """Only ``True`` and the exact string ``"true"`` are true."""
    return raw is True or raw == "true"


def convert_scalar(
    raw: Any,
    field_name: str,
    definition: FieldDefinition,
    entity_schema: EntitySchema | None = None,
) -> Any:
    """Convert one raw value according to ``definition.type``.

    Falsy raw values convert to None. Strings are escaped unless
    ``field_name`` is one of the enclosing schema's HTML fields.
    """
    if not raw:
        return None

    field_type = definition.type
    if field_type == "integer":
        return parse_int(raw)
    if field_type == "number":
        return parse_float(raw)
    if field_type == "string":
        text = str(raw)
        if entity_schema is not None and entity_schema.is_html_field(field_name):
            return sanitize_html(text)
        return escape_text(text)
    if field_type == "boolean":
        return parse_bool(raw)

    msg = f"{field_type} {field_name} is not a primitive type or is an array; cannot parse"
    raise UnreachableTypeError(msg)
