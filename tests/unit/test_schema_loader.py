"""Unit tests for schema and data file loading."""

import json

import pytest

from form_semantics.errors import SchemaLoadError
from form_semantics.runtime.schema_loader import (
    check_form_schema,
    load_document,
    load_form_data,
    load_form_schema,
)
from form_semantics.schemas import ConditionOperator


class TestLoadFormSchema:
    """Tests for load_form_schema."""

    def test_load_json(self, schema_file, project_schema):
        """Test loading a JSON schema returns the plain mapping."""
        assert load_form_schema(schema_file) == project_schema

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML schema."""
        schema_path = tmp_path / "schema.yaml"
        schema_path.write_text("""
title: Contact
sections:
  - id: contact
    properties:
      email:
        type: string
        required: true
        ui:widget: email
""")
        schema = load_form_schema(schema_path)
        assert schema["sections"][0]["properties"]["email"]["ui:widget"] == "email"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises SchemaLoadError."""
        with pytest.raises(SchemaLoadError, match="File not found"):
            load_form_schema(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises SchemaLoadError."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text("{not json")
        with pytest.raises(SchemaLoadError, match="Invalid JSON"):
            load_form_schema(schema_path)

    def test_sections_required(self, tmp_path):
        """Test that a schema without sections is rejected."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps({"type": "object", "properties": {}}))
        with pytest.raises(SchemaLoadError, match="'sections'"):
            load_form_schema(schema_path)

    def test_sections_must_be_list(self, tmp_path):
        """Test that sections must be a list."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps({"sections": {"id": "s"}}))
        with pytest.raises(SchemaLoadError, match="must be a list"):
            load_form_schema(schema_path)

    def test_unknown_field_type(self, tmp_path):
        """Test that the shape check reports unknown field types."""
        schema_path = tmp_path / "schema.json"
        schema = {"sections": [{"id": "s", "properties": {"f": {"type": "object"}}}]}
        schema_path.write_text(json.dumps(schema))
        with pytest.raises(SchemaLoadError, match="Unknown field type"):
            load_form_schema(schema_path)

    def test_dotted_section_id(self, tmp_path):
        """Test that section ids cannot contain dots."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps({"sections": [{"id": "a.b", "properties": {}}]}))
        with pytest.raises(SchemaLoadError, match="must not contain"):
            load_form_schema(schema_path)

    def test_duplicate_section_ids(self, tmp_path):
        """Test that duplicate section ids are rejected."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps({"sections": [{"id": "s"}, {"id": "s"}]}))
        with pytest.raises(SchemaLoadError, match="Duplicate section id"):
            load_form_schema(schema_path)

    def test_unknown_operator_loads(self, tmp_path):
        """Test that an unknown operator is not a load error."""
        schema_path = tmp_path / "schema.json"
        schema = {
            "sections": [{
                "id": "s",
                "ui:show": {"conditions": [{"field": "s.f", "operator": "matches", "value": "x"}]},
                "properties": {"f": {"type": "string"}},
            }]
        }
        schema_path.write_text(json.dumps(schema))
        assert load_form_schema(schema_path) == schema

    def test_operators_stored_as_strings(self, project_schema):
        """Test that the model keeps operators as strings the evaluator maps to enums."""
        model = check_form_schema(project_schema)
        condition = model.sections[0].properties["advancedOptions"].show.conditions[0]
        assert condition.operator == "in"
        assert ConditionOperator(condition.operator) is ConditionOperator.IN


class TestLoadFormData:
    """Tests for load_form_data and load_document."""

    def test_load_json(self, data_file, valid_data):
        """Test loading a data snapshot."""
        assert load_form_data(data_file) == valid_data

    def test_empty_yaml_is_empty_snapshot(self, tmp_path):
        """Test that an empty YAML file gives an empty snapshot."""
        data_path = tmp_path / "data.yml"
        data_path.write_text("")
        assert load_form_data(data_path) == {}

    def test_non_object(self, tmp_path):
        """Test that a list is rejected."""
        data_path = tmp_path / "data.json"
        data_path.write_text("[1, 2]")
        with pytest.raises(SchemaLoadError, match="must be a JSON/YAML object"):
            load_form_data(data_path)

    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises SchemaLoadError."""
        data_path = tmp_path / "data.yaml"
        data_path.write_text("a: b: c: [")
        with pytest.raises(SchemaLoadError, match="Invalid YAML"):
            load_document(data_path)
