"""
Tests for whole-form validation.
"""

import pytest

from form_semantics.config import EngineConfig
from form_semantics.errors import SchemaCompileError
from form_semantics.runtime.engine import JsonSchemaEngine
from form_semantics.runtime.validators import project_form_data, validate_form


class TestValidateForm:
    """validate_form on sectioned schemas."""

    def test_valid_data(self, project_schema, valid_data):
        result = validate_form(project_schema, valid_data)
        assert result.valid is True
        assert result.errors == {}

    def test_required_filed_under_field_path(self):
        schema = {"sections": [{"id": "s", "properties": {"f": {"type": "string", "required": True}}}]}
        result = validate_form(schema, {"s": {}})
        assert result.valid is False
        assert list(result.errors) == ["s.f"]
        assert len(result.errors["s.f"]) == 1
        assert result.errors["s.f"][0].endswith("is required")

    def test_required_uses_title(self, project_schema, valid_data):
        del valid_data["contact"]["email"]
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"contact.email": ["Email is required"]}

    def test_required_label_from_key(self):
        schema = {"sections": [{"id": "s", "properties": {"startDate": {"type": "string", "required": True}}}]}
        assert validate_form(schema, {}).errors == {"s.startDate": ["Start Date is required"]}

    def test_none_counts_as_missing(self, project_schema, valid_data):
        valid_data["projectInfo"]["projectName"] = None
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"projectInfo.projectName": ["Project Name is required"]}

    def test_empty_string_is_present(self, project_schema, valid_data):
        valid_data["projectInfo"]["projectName"] = ""
        result = validate_form(project_schema, valid_data)
        assert result.errors == {
            "projectInfo.projectName": ["Project name must start with a capital letter"]
        }

    def test_minimum_message(self, project_schema, valid_data):
        valid_data["projectInfo"]["budget"] = 500
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"projectInfo.budget": ["Value must be at least 1,000"]}

    def test_maximum_message(self, project_schema, valid_data):
        valid_data["projectInfo"]["budget"] = 2000000
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"projectInfo.budget": ["Value must be at most 1,000,000"]}

    def test_enum_message(self, project_schema, valid_data):
        valid_data["projectInfo"]["projectType"] = "option9"
        result = validate_form(project_schema, valid_data)
        assert result.errors == {
            "projectInfo.projectType": ["Value must be one of: option1, option2, option3"]
        }

    def test_format_message(self, project_schema, valid_data):
        valid_data["contact"]["email"] = "not-an-email"
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"contact.email": ["Invalid email format"]}

    def test_custom_pattern_message(self, project_schema, valid_data):
        valid_data["projectInfo"]["projectName"] = "apollo"
        result = validate_form(project_schema, valid_data)
        assert result.errors == {
            "projectInfo.projectName": ["Project name must start with a capital letter"]
        }

    def test_generic_pattern_message(self, project_schema, valid_data):
        valid_data["contact"]["phone"] = "call me"
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"contact.phone": ["Invalid format"]}

    def test_type_message(self, project_schema, valid_data):
        valid_data["projectInfo"]["budget"] = "lots"
        result = validate_form(project_schema, valid_data)
        assert result.errors == {"projectInfo.budget": ["Value must be a integer"]}

    def test_several_failures(self, project_schema):
        result = validate_form(project_schema, {"projectInfo": {"budget": 5}})
        assert result.valid is False
        assert set(result.errors) == {
            "projectInfo.projectName",
            "projectInfo.projectType",
            "projectInfo.budget",
            "contact.email",
        }

    def test_ungrouped_field_limit(self):
        schema = {
            "sections": [
                {"id": "s", "properties": {"year": {"type": "integer", "minimum": 1900, "ui:format": "none"}}}
            ]
        }
        assert validate_form(schema, {"s": {"year": 1800}}).errors == {
            "s.year": ["Value must be at least 1900"]
        }

    def test_hidden_fields_still_validated(self, project_schema, valid_data):
        valid_data["projectInfo"]["projectType"] = "option1"
        valid_data["projectInfo"]["budget"] = 500
        result = validate_form(project_schema, valid_data)
        assert "projectInfo.budget" in result.errors

    def test_data_not_modified(self, project_schema, valid_data):
        snapshot = {"projectInfo": {"budget": 5}}
        validate_form(project_schema, snapshot)
        assert snapshot == {"projectInfo": {"budget": 5}}


class TestPlainSchemas:
    """validate_form on plain object schemas."""

    def test_nested_required(self):
        schema = {
            "type": "object",
            "properties": {"contact": {"type": "object", "properties": {"email": {"type": "string"}}, "required": ["email"]}},
        }
        result = validate_form(schema, {"contact": {}})
        assert result.errors == {"contact.email": ["Email is required"]}

    def test_unresolvable_field_uses_generic_pattern_message(self):
        schema = {
            "type": "object",
            "patternProperties": {
                "^code_": {"type": "string", "pattern": "^\\d+$", "ui:validationMessage": "Digits only"}
            },
        }
        result = validate_form(schema, {"code_a": "12a"})
        assert result.errors == {"code_a": ["Invalid format"]}

    def test_root_failure(self):
        result = validate_form({"type": "object"}, ["not", "an", "object"])
        assert result.valid is False
        assert result.errors == {"root": ["Value must be a object"]}


class TestTopLevelProperties:
    """Top-level properties next to sections."""

    SCHEMA = {
        "properties": {"agree": {"type": "boolean", "title": "Terms accepted"}},
        "required": ["agree"],
        "sections": [{"id": "s", "properties": {"f": {"type": "string", "required": True}}}],
    }

    def test_filled_top_level_property(self):
        result = validate_form(self.SCHEMA, {"agree": True, "s": {"f": "x"}})
        assert result.valid is True
        assert result.errors == {}

    def test_missing_top_level_property(self):
        result = validate_form(self.SCHEMA, {"s": {"f": "x"}})
        assert result.errors == {"agree": ["Terms accepted is required"]}

    def test_top_level_constraint_checked(self):
        result = validate_form(self.SCHEMA, {"agree": "yes", "s": {"f": "x"}})
        assert result.errors == {"agree": ["Value must be a boolean"]}


class TestEngineFailures:
    """Schema problems surface as SchemaCompileError."""

    def test_invalid_keyword_value(self):
        schema = {"sections": [{"id": "s", "properties": {"n": {"type": "integer", "minimum": "ten"}}}]}
        with pytest.raises(SchemaCompileError):
            validate_form(schema, {"s": {"n": 1}})

    def test_explicit_engine(self, project_schema, valid_data):
        engine = JsonSchemaEngine(EngineConfig(check_formats=False))
        valid_data["contact"]["email"] = "not-an-email"
        assert validate_form(project_schema, valid_data, engine=engine).valid is True


class TestProjectFormData:
    """Projection of nested data onto composite keys."""

    def test_projection(self, project_schema):
        data = {"contact": {"email": "a@b.c", "phone": None}, "extra": {"x": 1}, "note": None}
        assert project_form_data(project_schema, data) == {
            "contact.email": "a@b.c",
            "extra": {"x": 1},
        }

    def test_section_entries_not_copied(self, project_schema, valid_data):
        projected = project_form_data(project_schema, valid_data)
        assert not set(projected) & {"projectInfo", "contact", "review"}
