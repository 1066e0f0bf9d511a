import pytest

from avro_schema_builder import DSL, BuilderConfig, InvalidDefinitionError, UnknownAttributeError
from avro_schema_builder.types import ErrorType, RecordType


def make_dsl(**config):
    return DSL(config=BuilderConfig(**config))


def test_person_scenario():
    """A record with a required and an optional field"""
    dsl = make_dsl()
    dsl.namespace("ns")
    person = dsl.record("Person")
    person.required("name", "string")
    person.optional("age", "int")

    assert dsl.to_dict() == {
        "type": "record",
        "name": "Person",
        "namespace": "ns",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "age", "type": ["null", "int"], "default": None},
        ],
    }


def test_record_document_key_order():
    dsl = make_dsl()
    person = dsl.record("Person", namespace="ns", doc="A person", aliases=["Human"])
    person.required("name", "string")

    document = dsl.to_dict()
    assert list(document) == ["type", "name", "namespace", "fields", "doc", "aliases"]


def test_namespace_omitted_when_absent():
    dsl = make_dsl()
    dsl.record("Point").required("x", "int")

    document = dsl.to_dict()
    assert "namespace" not in document
    assert document["name"] == "Point"


def test_nil_metadata_is_omitted():
    dsl = make_dsl()
    dsl.record("Point", doc=None).required("x", "int", doc=None)

    document = dsl.to_dict()
    assert "doc" not in document
    assert document["fields"] == [{"name": "x", "type": "int"}]


def test_dotted_name_sets_namespace():
    dsl = make_dsl()
    record = dsl.record("com.example.Point")
    record.required("x", "int")

    assert record.name == "Point"
    assert record.namespace == "com.example"
    assert record.fullname == "com.example.Point"


def test_explicit_namespace_overrides_ambient_namespace():
    dsl = make_dsl()
    dsl.namespace("ambient")
    record = dsl.record("Point", namespace="explicit")

    assert record.fullname == "explicit.Point"


class TestFieldOverwrite:
    """Re-declaring a field replaces it and keeps its original position"""

    def test_last_declaration_wins(self):
        dsl = make_dsl()
        record = dsl.record("Thing")
        record.required("x", "string", doc="first")
        record.optional("x", "int")

        fields = dsl.to_dict()["fields"]
        assert fields == [{"name": "x", "type": ["null", "int"], "default": None}]

    def test_position_is_kept(self):
        dsl = make_dsl()
        record = dsl.record("Thing")
        record.required("a", "string")
        record.required("b", "string")
        record.required("c", "string")
        record.required("a", "long")

        fields = dsl.to_dict()["fields"]
        assert [f["name"] for f in fields] == ["a", "b", "c"]
        assert fields[0]["type"] == "long"


class TestRecordValidation:
    def test_empty_name(self):
        dsl = make_dsl()
        with pytest.raises(InvalidDefinitionError):
            dsl.record("")

    def test_invalid_name(self):
        dsl = make_dsl()
        with pytest.raises(InvalidDefinitionError):
            dsl.record("not-valid")

    @pytest.mark.parametrize(
        "name, namespace",
        [
            ("com..Person", None),
            ("com.1bad.Person", None),
            ("Person", "com.bad-ns"),
            ("Person.", None),
        ],
    )
    def test_invalid_qualified_name(self, name, namespace):
        dsl = make_dsl()
        with pytest.raises(InvalidDefinitionError):
            dsl.record(name, namespace=namespace)
        assert dsl.cache.fullnames == []

    def test_invalid_alias(self):
        dsl = make_dsl()
        with pytest.raises(InvalidDefinitionError):
            dsl.record("Person", aliases=["not-valid"])
        assert dsl.cache.fullnames == []

    def test_invalid_record_is_not_cached(self):
        dsl = make_dsl()
        with pytest.raises(InvalidDefinitionError):
            dsl.record("1Bad")
        assert dsl.cache.fullnames == []

    def test_invalid_field_name(self):
        dsl = make_dsl()
        record = dsl.record("Thing")
        with pytest.raises(InvalidDefinitionError):
            record.required("bad name", "string")

    def test_unknown_attribute(self):
        dsl = make_dsl()
        with pytest.raises(UnknownAttributeError):
            dsl.record("Thing", colour="red")

    def test_unknown_attribute_ignored_when_not_strict(self, caplog):
        dsl = make_dsl(strict_attributes=False)
        dsl.record("Thing", colour="red").required("x", "int")

        assert "colour" not in dsl.to_dict()
        assert "Ignoring unsupported attribute 'colour'" in caplog.text


def test_extra_metadata_attributes():
    dsl = make_dsl(extra_metadata_attributes=["sql_table", "sql_type"])
    record = dsl.record("Thing", sql_table="things")
    record.required("x", "int", sql_type="INTEGER")
    record.required("y", "int", sql_type=None)

    document = dsl.to_dict()
    assert document["sql_table"] == "things"
    assert document["fields"][0] == {"name": "x", "type": "int", "sql_type": "INTEGER"}
    assert document["fields"][1] == {"name": "y", "type": "int"}


def test_block_configures_record_before_registration():
    dsl = make_dsl()

    def person(record):
        assert "Person" not in dsl.cache
        record.required("name", "string")

    dsl.record("Person", person)
    assert "Person" in dsl.cache
    assert dsl.cache.get("Person").field_names == ["name"]


def test_failed_block_leaves_cache_unchanged():
    dsl = make_dsl()

    def broken(record):
        record.required("address", "record", type_name="Address")
        raise ValueError("boom")

    with pytest.raises(ValueError):
        dsl.record("Person", broken)
    assert "Person" not in dsl.cache
    assert "Address" not in dsl.cache


def test_failed_with_block_discards_record():
    dsl = make_dsl()
    with pytest.raises(RuntimeError):
        with dsl.record("Person") as person:
            person.required("name", "string")
            raise RuntimeError("boom")
    assert "Person" not in dsl.cache


def test_abstract_record_is_not_the_root():
    dsl = make_dsl()
    dsl.record("Concrete").required("x", "int")
    dsl.record("Base", abstract=True).required("y", "int")

    assert dsl.to_dict()["name"] == "Concrete"


def test_error_type():
    dsl = make_dsl()
    failure = dsl.error("Failure", namespace="ns")
    failure.required("message", "string")

    assert isinstance(failure, ErrorType)
    assert isinstance(failure, RecordType)
    assert dsl.to_dict()["type"] == "error"


def test_field_accessors():
    dsl = make_dsl()
    record = dsl.record("Thing")
    record.required("a", "int")
    record.optional("b", "string")

    assert record.field_names == ["a", "b"]
    assert record.field("b").optional is True
    assert [f.name for f in record.fields] == ["a", "b"]
    with pytest.raises(KeyError):
        record.field("missing")
