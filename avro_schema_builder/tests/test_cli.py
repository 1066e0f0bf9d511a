import json
from pathlib import Path

from click.testing import CliRunner

from avro_schema_builder.cli import avro_schema_builder

TEST_DATA = Path(__file__).parent / "test_data"
DEFINITIONS = TEST_DATA / "definitions"
PERSON = DEFINITIONS / "com" / "example" / "Person.py"


def test_writes_schema_to_output_file(tmp_path):
    output = tmp_path / "person.avsc"
    result = CliRunner().invoke(avro_schema_builder, ["-I", str(DEFINITIONS), str(PERSON), str(output)])

    assert result.exit_code == 0, result.output
    with open(TEST_DATA / "reference" / "person.avsc") as f:
        reference = json.load(f)
    assert json.loads(output.read_text()) == reference


def test_writes_schema_to_stdout():
    result = CliRunner().invoke(avro_schema_builder, ["--compact", "-I", str(DEFINITIONS), str(PERSON)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["name"] == "Person"
    assert result.output.count("\n") == 1


def test_config_file(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"load_paths": [str(DEFINITIONS)], "pretty": False}))

    result = CliRunner().invoke(avro_schema_builder, ["-c", str(config), str(PERSON)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["namespace"] == "com.example"


def test_builder_errors_are_reported():
    result = CliRunner().invoke(avro_schema_builder, [str(PERSON)])

    assert result.exit_code == 1
    assert "Definition not found for Base" in result.output
