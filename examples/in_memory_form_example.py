"""Minimal example decoding submitted form fields held in memory."""

import asyncio

from kv_entity import DictParser, EntitySchema, FieldDefinition


CUSTOMER = EntitySchema(properties={"name": "string", "age": "integer"}, ctor=dict)
ORDER = EntitySchema(
    properties={
        "reference": "string",
        "notes": "string",
        "customers": FieldDefinition(type="array", items=FieldDefinition(type="customer", entity_schema=CUSTOMER)),
        "customerids": FieldDefinition(type="array", items="integer"),
    },
    mapping=frozenset({"customerids"}),
    html_fields=frozenset({"notes"}),
)


async def main() -> None:
    """Decode a flat form into a nested order."""
    form = {
        "reference": "A-17",
        "notes": "<b>rush</b><script>alert(1)</script>",
        "customers_1_name": "jeswin",
        "customers_1_age": "33",
        "customers_2_name": "alice",
        "customerids": "1,54,66",
        "internal_flag": "true",
    }
    order: dict = {}
    changed = await DictParser(form).map(
        order,
        ORDER,
        ["reference", "notes", "customers_name", "customers_age", "customerids"],
    )
    print("changed:", changed)
    print("order:", order)


if __name__ == "__main__":
    asyncio.run(main())
