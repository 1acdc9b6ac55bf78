"""Decode a flat, delimiter-keyed value source into a typed entity tree.

Nested fields are addressed by joining their path with the delimiter, so
with the default ``_`` a submitted form such as::

    customers_1_name=jeswin
    customers_1_age=33
    customerids=1,54,66

maps onto ``{"customers": [{"name": "jeswin", "age": 33}], "customerids": [1, 54, 66]}``
given a schema declaring those fields and a whitelist naming the paths
that may be written. Anything not whitelisted is left alone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kv_entity.conversion import convert_scalar
from kv_entity.errors import UnsupportedNestedArrayError
from kv_entity.options import MapOptions, ParserOptions
from kv_entity.paths import ParentPath, PathWhitelist
from kv_entity.schema import FieldDefinition
from kv_entity.sources import CallableSource, MappingSource, ValueSource
from kv_entity.targets import KeyedTarget, SequenceTarget, as_target


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from kv_entity.schema import EntitySchema
    from kv_entity.targets import Target


logger = logging.getLogger(__name__)


def _as_source(source: ValueSource | Mapping[str, Any] | Callable[[str], Awaitable[Any] | Any]) -> ValueSource:
    if isinstance(source, ValueSource):
        return source
    if isinstance(source, Mapping):
        return MappingSource(source)
    if callable(source):
        return CallableSource(source)
    msg = f"unsupported value source: {type(source).__name__}"
    raise TypeError(msg)


class DictParser:
    """Map flat keys from a value source onto schema-described entities.

    Each ``map`` call is an independent pass. Lookups run one at a time,
    depth first, in schema declaration order.
    """

    def __init__(
        self,
        source: ValueSource | Mapping[str, Any] | Callable[[str], Awaitable[Any] | Any],
        options: ParserOptions | None = None,
    ) -> None:
        super().__init__()
        self.source = _as_source(source)
        self.options = options if options is not None else ParserOptions()

    async def get_field(self, name: str, definition: FieldDefinition | str = "string") -> Any:
        """Fetch and convert a single flat key, or return None when absent."""
        return await self._fetch(name, name, FieldDefinition.coerce(definition), None)

    async def map(
        self,
        target: Any,
        entity_schema: EntitySchema,
        whitelist: Iterable[str],
        options: MapOptions | Mapping[str, Any] | None = None,
        parents: Iterable[str] = (),
    ) -> bool:
        """Populate ``target`` in place and return True when anything was written.

        Parameters
        ----------
        target
            Dict, plain object or list receiving the decoded fields.
        entity_schema
            Schema describing ``target``.
        whitelist
            Delimiter-joined field paths that may be written.
        options
            ``MapOptions`` or ``{"overwrite": bool}``.
        parents
            Key prefix segments, for sources that nest this entity.
        """
        delimiter = self.options.delimiter
        return await self._walk(
            as_target(target),
            entity_schema,
            PathWhitelist.from_paths(whitelist, delimiter),
            MapOptions.coerce(options),
            ParentPath(delimiter, parents),
        )

    async def _fetch(
        self,
        key: str,
        field_name: str,
        definition: FieldDefinition,
        entity_schema: EntitySchema | None,
    ) -> Any:
        raw = await self.source.get(key)
        return convert_scalar(raw, field_name, definition, entity_schema)

    async def _walk(
        self,
        target: Target,
        entity_schema: EntitySchema,
        whitelist: PathWhitelist,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        changed = False
        for field_name, definition in entity_schema.properties.items():
            field_whitelist = whitelist.for_field(field_name)
            if await self._dispatch(target, field_name, definition, entity_schema, field_whitelist, options, parents):
                changed = True
        return changed

    async def _dispatch(
        self,
        target: Target,
        field_name: str,
        definition: FieldDefinition,
        entity_schema: EntitySchema | None,
        whitelist: PathWhitelist,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        if definition.is_array:
            return await self._build_array(target, field_name, definition, entity_schema, whitelist, options, parents)
        if not definition.is_scalar:
            return await self._build_object(target, field_name, definition, whitelist, options, parents)
        if not whitelist.leads_with(field_name):
            logger.debug("Skipping field outside the whitelist", extra={"key": parents.key_for(field_name)})
            return False
        return await self._extract_scalar(target, field_name, definition, entity_schema, options, parents)

    async def _extract_scalar(
        self,
        target: Target,
        field_name: str,
        definition: FieldDefinition,
        entity_schema: EntitySchema | None,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        value = await self._fetch(parents.key_for(field_name), field_name, definition, entity_schema)
        if value is None:
            return False
        return target.write(field_name, value, overwrite=options.overwrite)

    async def _build_array(
        self,
        target: Target,
        field_name: str,
        definition: FieldDefinition,
        entity_schema: EntitySchema | None,
        whitelist: PathWhitelist,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        items = definition.items
        if items is None:
            msg = f"array field declares no items: {parents.key_for(field_name)}"
            raise ValueError(msg)
        if items.is_array:
            msg = f"cannot map array of arrays: {parents.key_for(field_name)}"
            raise UnsupportedNestedArrayError(msg)

        if entity_schema is not None and entity_schema.is_csv_array(field_name):
            return await self._build_csv_array(target, field_name, items, whitelist, parents)
        return await self._build_indexed_array(target, field_name, items, whitelist, options, parents)

    async def _build_csv_array(
        self,
        target: Target,
        field_name: str,
        items: FieldDefinition,
        whitelist: PathWhitelist,
        parents: ParentPath,
    ) -> bool:
        if not whitelist.allows_literal(field_name):
            logger.debug("Skipping CSV array outside the whitelist", extra={"key": parents.key_for(field_name)})
            return False

        raw = await self.source.get(parents.key_for(field_name))
        if not raw:
            return False

        converted = (convert_scalar(item, field_name, items) for item in str(raw).split(","))
        values = [value for value in converted if value is not None]
        if not values:
            return False

        existing = target.get(field_name)
        if existing is None:
            target.attach(field_name, values)
        else:
            existing.extend(values)
        return True

    async def _build_indexed_array(
        self,
        target: Target,
        field_name: str,
        items: FieldDefinition,
        whitelist: PathWhitelist,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        existing = target.get(field_name)
        elements = SequenceTarget(existing)
        # scalar elements are whitelisted per index, e.g. ``scores_2``
        element_whitelist = whitelist.descend() if items.is_scalar else whitelist

        changed = False
        index = 1
        with parents.entered(field_name):
            while True:
                segment = str(index)
                allowed = element_whitelist.for_field(segment) if items.is_scalar else element_whitelist
                if not await self._dispatch(elements, segment, items, None, allowed, options, parents):
                    break
                if not changed and existing is None:
                    target.attach(field_name, elements.items)
                changed = True
                index += 1

        logger.debug(
            "Indexed array enumeration stopped",
            extra={"key": parents.key_for(field_name), "index": index},
        )
        return changed

    async def _build_object(
        self,
        target: Target,
        field_name: str,
        definition: FieldDefinition,
        whitelist: PathWhitelist,
        options: MapOptions,
        parents: ParentPath,
    ) -> bool:
        nested_schema = definition.entity_schema
        if nested_schema is None or nested_schema.ctor is None:
            logger.debug(
                "Skipping entity field without a factory",
                extra={"key": parents.key_for(field_name), "type": definition.type},
            )
            return False

        existing = target.get(field_name)
        if not options.overwrite and existing is not None:
            # fill the entity already present instead of replacing it
            with parents.entered(field_name):
                return await self._walk(KeyedTarget(existing), nested_schema, whitelist.descend(), options, parents)

        instance = nested_schema.ctor()
        with parents.entered(field_name):
            changed = await self._walk(KeyedTarget(instance), nested_schema, whitelist.descend(), options, parents)

        if changed:
            target.attach(field_name, instance)
        return changed
