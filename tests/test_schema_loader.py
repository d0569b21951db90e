"""Tests for loading the bundled and external schema artifacts."""

import json

import pytest

from llm_yml_validator.exceptions import SchemaError
from llm_yml_validator.schema import schema_loader
from llm_yml_validator.schema.schema_loader import (
    available_versions,
    get_schema_path,
    load_schema,
    load_schema_file,
    resolve_schema_version,
)


class TestBundledSchema:

    def test_versions_available(self):
        assert "1.0.0" in available_versions()

    def test_latest_resolves_to_highest_version(self):
        assert resolve_schema_version("latest") == available_versions()[-1]

    def test_explicit_version_unchanged(self):
        assert resolve_schema_version("1.0.0") == "1.0.0"

    def test_load_latest(self):
        schema = load_schema()
        assert schema["title"] == "LLM.yml"
        assert set(schema["required"]) == {"name", "version", "description"}

    def test_load_explicit_version(self):
        assert load_schema("1.0.0") is load_schema("latest")

    def test_unknown_version(self):
        with pytest.raises(SchemaError):
            load_schema("9.9.9")

    def test_schema_path_layout(self):
        path = get_schema_path("1.0.0")
        assert path.name == "llm.json"
        assert path.parent.name == "1.0.0"


class TestSchemaFile:

    def test_load_file(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"type": "object"}))
        assert load_schema_file(path) == {"type": "object"}

    def test_cached(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"type": "object"}))
        first = load_schema_file(path)
        path.write_text(json.dumps({"type": "array"}))
        assert load_schema_file(path) is first

        schema_loader.clear_cache()
        assert load_schema_file(path) == {"type": "array"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError):
            load_schema_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json")
        with pytest.raises(SchemaError) as exc_info:
            load_schema_file(path)
        assert "Invalid JSON" in str(exc_info.value)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("[1, 2]")
        with pytest.raises(SchemaError):
            load_schema_file(path)
