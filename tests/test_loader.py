"""Tests for schema file loading."""

import json

import pytest

from ddl_tools.create_table.loader import SchemaFormat, detect_format, load_schema, parse_schema


class TestDetectFormat:
    """Test format detection."""

    def test_extensions(self, tmp_path):
        """Test known extensions."""
        assert detect_format(tmp_path / "s.json") == SchemaFormat.JSON
        assert detect_format(tmp_path / "s.yaml") == SchemaFormat.YAML
        assert detect_format(tmp_path / "s.YML") == SchemaFormat.YAML
        assert detect_format(tmp_path / "s.toml") == SchemaFormat.TOML

    def test_unknown_extension(self, tmp_path):
        """Test unknown extension."""
        with pytest.raises(ValueError, match="Cannot auto-detect"):
            detect_format(tmp_path / "s.txt")


class TestParseSchema:
    """Test document parsing."""

    def test_invalid_json(self):
        """Test malformed JSON."""
        with pytest.raises(ValueError, match="Failed to parse json"):
            parse_schema("{not json", SchemaFormat.JSON)


class TestLoadSchema:
    """Test loading schema files."""

    def test_json_keeps_order(self, tmp_path):
        """Test that key order is preserved."""
        filepath = tmp_path / "schema.json"
        filepath.write_text(json.dumps({"b": "string", "a": {"type": "number"}}))

        schema = load_schema(filepath)
        assert list(schema) == ["b", "a"]
        assert schema["a"] == {"type": "number"}

    def test_yaml(self, tmp_path):
        """Test YAML schema."""
        filepath = tmp_path / "schema.yaml"
        filepath.write_text("id:\n  type: number\n  primary: true\nname: string\n")

        schema = load_schema(filepath)
        assert schema == {"id": {"type": "number", "primary": True}, "name": "string"}

    def test_toml_with_query(self, tmp_path):
        """Test TOML schema selected with a query."""
        filepath = tmp_path / "app.toml"
        filepath.write_text('[tables.users]\nname = "string"\n\n[tables.users.id]\ntype = "number"\n')

        schema = load_schema(filepath, query="tables.users")
        assert schema["name"] == "string"
        assert schema["id"] == {"type": "number"}

    def test_forced_format(self, tmp_path):
        """Test overriding format detection."""
        filepath = tmp_path / "schema.txt"
        filepath.write_text('{"a": "date"}')

        assert load_schema(filepath, format=SchemaFormat.JSON) == {"a": "date"}

    def test_missing_file(self, tmp_path):
        """Test missing file."""
        with pytest.raises(FileNotFoundError):
            load_schema(tmp_path / "missing.json")

    def test_not_a_mapping(self, tmp_path):
        """Test documents that are not mappings."""
        filepath = tmp_path / "schema.json"
        filepath.write_text('["string"]')

        with pytest.raises(ValueError, match="must be a mapping"):
            load_schema(filepath)

    def test_query_without_match(self, tmp_path):
        """Test a query that selects nothing."""
        filepath = tmp_path / "schema.json"
        filepath.write_text('{"a": "string"}')

        with pytest.raises(ValueError, match="got NoneType"):
            load_schema(filepath, query="tables.users")
