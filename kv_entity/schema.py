"""Entity schema data model consumed by the parser."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


PRIMITIVE_TYPES = frozenset({"string", "number", "integer", "boolean"})
ARRAY_TYPE = "array"


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """Declared type of one schema property.

    ``type`` is a primitive name, ``"array"``, or any other name marking a
    nested entity. Arrays describe their elements with ``items``; nested
    entities and arrays of entities carry an ``entity_schema``.
    """

    type: str
    items: FieldDefinition | None = None
    entity_schema: EntitySchema | None = None

    def __post_init__(self) -> None:
        if not self.type:
            msg = "field type must not be empty"
            raise ValueError(msg)
        if self.type == ARRAY_TYPE and self.items is None:
            msg = "array fields must declare an items definition"
            raise ValueError(msg)
        if isinstance(self.items, str):
            object.__setattr__(self, "items", FieldDefinition(type=self.items))

    @classmethod
    def coerce(cls, value: FieldDefinition | str) -> FieldDefinition:
        """Accept a bare type name wherever a definition is expected."""
        if isinstance(value, FieldDefinition):
            return value
        return cls(type=value)

    @property
    def is_array(self) -> bool:
        return self.type == ARRAY_TYPE

    @property
    def is_scalar(self) -> bool:
        return self.type in PRIMITIVE_TYPES


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """Properties of one entity plus its construction and encoding hints.

    Parameters
    ----------
    properties
        Field name to definition, iterated in declaration order.
    ctor
        Zero-argument factory for new instances. Nested fields whose
        schema has no factory are never mapped.
    mapping
        Array field names encoded as one comma separated value.
    html_fields
        String field names sanitized against an HTML allowlist instead of
        being fully escaped.
    """

    properties: Mapping[str, FieldDefinition]
    ctor: Callable[[], Any] | None = None
    mapping: frozenset[str] = field(default_factory=frozenset)
    html_fields: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        normalized = {name: FieldDefinition.coerce(definition) for name, definition in self.properties.items()}
        object.__setattr__(self, "properties", normalized)
        object.__setattr__(self, "mapping", frozenset(self.mapping))
        object.__setattr__(self, "html_fields", frozenset(self.html_fields))

    def is_csv_array(self, field_name: str) -> bool:
        return field_name in self.mapping

    def is_html_field(self, field_name: str) -> bool:
        return field_name in self.html_fields


def _definition_from_dict(value: Mapping[str, Any] | str) -> FieldDefinition:
    if isinstance(value, str):
        return FieldDefinition(type=value)

    field_type = value.get("type")
    if not isinstance(field_type, str):
        msg = f"field definition needs a string 'type': {value!r}"
        raise ValueError(msg)

    items = value.get("items")
    nested = value.get("entitySchema")
    return FieldDefinition(
        type=field_type,
        items=_definition_from_dict(items) if items is not None else None,
        entity_schema=schema_from_dict(nested) if nested is not None else None,
    )


def schema_from_dict(data: Mapping[str, Any]) -> EntitySchema:
    """Build an ``EntitySchema`` from its JSON form.

    The JSON form mirrors the dataclasses: ``properties``, ``mapping`` and
    ``htmlFields``. Entities are built as plain dicts unless they set
    ``"constructible": false``.
    """
    properties = data.get("properties")
    if not isinstance(properties, Mapping):
        msg = "entity schema needs a 'properties' object"
        raise ValueError(msg)

    return EntitySchema(
        properties={name: _definition_from_dict(value) for name, value in properties.items()},
        ctor=dict if data.get("constructible", True) else None,
        mapping=frozenset(data.get("mapping", ())),
        html_fields=frozenset(data.get("htmlFields", ())),
    )
