import pytest

from kv_entity.schema import EntitySchema, FieldDefinition, schema_from_dict


def test_bare_type_names_are_normalized() -> None:
    schema = EntitySchema(
        properties={"name": "string", "ids": FieldDefinition(type="array", items="integer")},  # type: ignore[dict-item]
        mapping={"ids"},  # type: ignore[arg-type]
    )

    assert schema.properties["name"] == FieldDefinition(type="string")
    assert schema.properties["ids"].items == FieldDefinition(type="integer")
    assert schema.mapping == frozenset({"ids"})
    assert schema.is_csv_array("ids")
    assert not schema.is_html_field("name")


def test_field_kinds() -> None:
    assert FieldDefinition(type="integer").is_scalar
    assert FieldDefinition(type="array", items="string").is_array
    custom = FieldDefinition(type="customer")
    assert not custom.is_scalar
    assert not custom.is_array


def test_array_without_items_is_rejected() -> None:
    with pytest.raises(ValueError, match="array fields must declare an items definition"):
        _ = FieldDefinition(type="array")


def test_schema_from_dict_builds_nested_entities() -> None:
    schema = schema_from_dict(
        {
            "properties": {
                "name": "string",
                "customers": {
                    "type": "array",
                    "items": {"type": "customer", "entitySchema": {"properties": {"age": "integer"}}},
                },
                "secret": {"type": "vault", "entitySchema": {"properties": {}, "constructible": False}},
            },
            "mapping": ["tags"],
            "htmlFields": ["name"],
        }
    )

    assert schema.ctor is dict
    assert schema.html_fields == frozenset({"name"})
    customer = schema.properties["customers"].items
    assert customer is not None
    assert customer.entity_schema is not None
    assert customer.entity_schema.ctor is dict
    vault = schema.properties["secret"].entity_schema
    assert vault is not None
    assert vault.ctor is None


def test_schema_from_dict_requires_properties() -> None:
    with pytest.raises(ValueError, match="needs a 'properties' object"):
        _ = schema_from_dict({})
    with pytest.raises(ValueError, match="needs a string 'type'"):
        _ = schema_from_dict({"properties": {"name": {"items": "string"}}})
