import pytest

from avro_schema_builder import DSL, BuilderConfig, InvalidDefinitionError, UnresolvedTypeError


@pytest.fixture
def dsl():
    dsl = DSL(config=BuilderConfig())
    dsl.namespace("ns")
    base = dsl.record("A")
    base.required("f", "string")
    base.required("g", "int")
    return dsl


def test_extends_copies_fields(dsl):
    b = dsl.record("B")
    b.extends("A")
    b.required("h", "long")

    assert [f["name"] for f in dsl.to_dict()["fields"]] == ["f", "g", "h"]


def test_extends_is_a_value_copy(dsl):
    b = dsl.record("B")
    b.extends("A")
    b.field("f").optional = True

    a_document = dsl.cache.get("ns.A").to_dict()
    b_document = dsl.cache.get("ns.B").to_dict()
    assert a_document["fields"][0] == {"name": "f", "type": "string"}
    assert b_document["fields"][0] == {"name": "f", "type": ["null", "string"], "default": None}


def test_redeclaring_copied_field_overwrites_in_place(dsl):
    b = dsl.record("B")
    b.extends("A")
    b.optional("f", "string")

    b_fields = dsl.cache.get("ns.B").to_dict()["fields"]
    assert [f["name"] for f in b_fields] == ["f", "g"]
    assert b_fields[0]["type"] == ["null", "string"]
    assert dsl.cache.get("ns.A").field("f").optional is False


def test_extends_overwrites_existing_fields_in_place(dsl):
    b = dsl.record("B")
    b.required("g", "string", doc="mine")
    b.required("z", "string")
    b.extends("A")

    fields = dsl.cache.get("ns.B").to_dict()["fields"]
    assert [f["name"] for f in fields] == ["g", "z", "f"]
    assert fields[0] == {"name": "g", "type": "int"}


def test_source_changes_after_extends_do_not_leak(dsl):
    b = dsl.record("B")
    b.extends("A")
    dsl.cache.get("ns.A").required("late", "string")

    assert dsl.cache.get("ns.B").field_names == ["f", "g"]


def test_extends_with_namespace_option(dsl):
    other = dsl.record("Base", namespace="other")
    other.required("x", "int")

    b = dsl.record("B")
    b.extends("Base", namespace="other")
    assert b.field_names == ["x"]


def test_extends_with_fullname(dsl):
    b = dsl.record("B", namespace="elsewhere")
    b.extends("ns.A")
    assert b.field_names == ["f", "g"]


def test_copied_field_resolves_in_source_namespace(dsl):
    dsl.enum("Kind", "X", "Y")
    dsl.cache.get("ns.A").required("kind", "Kind")

    b = dsl.record("B", namespace="elsewhere")
    b.extends("ns.A")
    assert dsl.to_dict()["fields"][2]["type"]["name"] == "Kind"


def test_extends_unknown_record(dsl):
    b = dsl.record("B")
    with pytest.raises(UnresolvedTypeError):
        b.extends("Missing")


def test_extends_non_record(dsl):
    dsl.enum("Colour", "RED")
    b = dsl.record("B")
    with pytest.raises(InvalidDefinitionError):
        b.extends("Colour")
