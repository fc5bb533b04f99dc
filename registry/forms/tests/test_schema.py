import pytest

from registry.forms.schema import FieldDef, FieldSchema, InvalidSchemaError, Option


def test_from_json():
    schema = FieldSchema.from_json(
        {
            "id": 12,
            "fields": [
                {"id": "name", "label": "Name", "type": "text", "required": True},
                {"id": "size", "type": "select", "options": ["S", {"value": "m", "label": "Medium"}]},
                {"id": "count", "type": "number", "min": 0, "max": 10},
            ],
        }
    )

    assert schema.id == 12
    assert [field.id for field in schema.fields] == ["name", "size", "count"]
    assert schema.get_field("size").options == (Option("S", "S"), Option("m", "Medium"))
    assert schema.get_field("count").min == 0
    assert schema.get_field("missing") is None


def test_missing_fields_list():
    assert FieldSchema.from_json({"id": 1}).fields == ()
    assert FieldSchema.from_json({"id": 1, "fields": "nope"}).fields == ()


def test_duplicate_field_ids_keep_first():
    schema = FieldSchema.from_json({"id": 1, "fields": [{"id": "a", "label": "First"}, {"id": "a", "label": "Again"}]})
    assert [field.label for field in schema.fields] == ["First"]


@pytest.mark.parametrize(
    "document",
    [
        [],
        "schema",
        None,
        {"fields": [{"label": "no id"}]},
        {"fields": [{"id": "x", "type": "select", "options": 5}]},
        {"fields": [{"id": "x", "type": "radio", "options": True}]},
    ],
)
def test_invalid_documents(document):
    with pytest.raises(InvalidSchemaError):
        FieldSchema.from_json(document)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ({"id": "email", "label": "Email", "required": True}, "Email *"),
        ({"id": "email", "label": "Email"}, "Email"),
        ({"id": "email"}, "email"),
        ({"id": "email", "required": True}, "email *"),
    ],
)
def test_display_label(raw, expected):
    assert FieldDef.build(raw).display_label == expected


def test_option_without_label_uses_value():
    assert Option.build({"value": "x"}) == Option("x", "x")


def test_option_matching_is_strict():
    option = Option.build({"value": "1", "label": "One"})
    assert option.matches("1")
    assert not option.matches(1)
    assert not option.matches(None)
