"""
Pytest fixtures and configuration for form-semantics tests.
Provides sample schemas and data snapshots shared across test modules.
"""

import copy
import json

import pytest

from form_semantics.config import reset_engine_config_cache
from form_semantics.config.engine import CONFIG_ENV_VAR


PROJECT_SCHEMA = {
    "type": "object",
    "title": "Project Intake",
    "sections": [
        {
            "id": "projectInfo",
            "title": "Project Information",
            "properties": {
                "projectName": {
                    "type": "string",
                    "title": "Project Name",
                    "required": True,
                    "pattern": "^[A-Z][A-Za-z0-9 -]*$",
                    "ui:validationMessage": "Project name must start with a capital letter",
                    "ui:placeholder": "Apollo",
                },
                "projectType": {
                    "type": "string",
                    "title": "Project Type",
                    "required": True,
                    "enum": ["option1", "option2", "option3"],
                    "enumNames": ["Internal", "Client", "Research"],
                },
                "budget": {
                    "type": "integer",
                    "title": "Budget",
                    "minimum": 1000,
                    "maximum": 1000000,
                },
                "advancedOptions": {
                    "type": "string",
                    "title": "Advanced Options",
                    "ui:widget": "textarea",
                    "ui:show": {
                        "conditions": [
                            {
                                "field": "projectInfo.projectType",
                                "operator": "in",
                                "value": ["option2", "option3"],
                            }
                        ]
                    },
                },
                "subType": {
                    "type": "string",
                    "title": "Sub Type",
                    "ui:enumSource": {
                        "field": "projectInfo.projectType",
                        "mapping": {
                            "option2": {"enum": ["agency", "direct"], "enumNames": ["Agency", "Direct"]},
                            "option3": {"enum": ["basic", "applied"]},
                        },
                    },
                },
            },
        },
        {
            "id": "contact",
            "title": "Contact",
            "properties": {
                "email": {"type": "string", "title": "Email", "format": "email", "required": True},
                "phone": {"type": "string", "pattern": "^[0-9+ ]+$"},
                "newsletter": {"type": "boolean", "title": "Newsletter", "default": False},
            },
        },
        {
            "id": "review",
            "title": "Review",
            "ui:show": {
                "conditions": [
                    {"field": "projectInfo.budget", "operator": "greater_than", "value": 50000}
                ]
            },
            "ui:disabled": {
                "conditions": [{"field": "contact.email", "operator": "not_exists"}]
            },
            "properties": {
                "approved": {"type": "boolean", "title": "Approved", "ui:widget": "radio"},
                "notes": {
                    "type": "string",
                    "ui:disabled": {
                        "conditions": [
                            {"field": "review.approved", "operator": "equals", "value": False}
                        ]
                    },
                },
            },
        },
    ],
}

VALID_DATA = {
    "projectInfo": {
        "projectName": "Apollo",
        "projectType": "option2",
        "budget": 60000,
        "advancedOptions": "Fast track",
        "subType": "agency",
    },
    "contact": {"email": "lead@example.com", "phone": "+41 44 000", "newsletter": True},
    "review": {"approved": True, "notes": "ok"},
}


@pytest.fixture
def project_schema():
    """A sectioned form schema exercising every UI extension."""
    return copy.deepcopy(PROJECT_SCHEMA)


@pytest.fixture
def valid_data():
    """Form data that satisfies project_schema."""
    return copy.deepcopy(VALID_DATA)


@pytest.fixture
def schema_file(tmp_path, project_schema):
    """project_schema written to a JSON file."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(project_schema, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def data_file(tmp_path, valid_data):
    """valid_data written to a JSON file."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(valid_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_engine_config(monkeypatch):
    """Every test starts from the default engine configuration."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_engine_config_cache()
    yield
    reset_engine_config_cache()
