"""
Utility module for loading form schemas and data snapshots from disk.

Schemas and data may be JSON or YAML (by file extension). Schemas are
checked against the FormSchema model so structural mistakes surface at
load time, but the returned value is the plain mapping the runtime
evaluates.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from form_semantics.errors import SchemaLoadError
from form_semantics.schemas.form_schema import FormSchema

YAML_SUFFIXES = {".yaml", ".yml"}


def load_document(file_path: str | Path) -> Any:
    """
    Read a JSON or YAML document.

    Raises:
        SchemaLoadError: If the file is missing or cannot be parsed
    """
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except FileNotFoundError:
        raise SchemaLoadError(f"File not found: {file_path}")
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in {file_path}: {e}")
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {file_path}: {e}")


def load_form_schema(file_path: str | Path) -> Dict[str, Any]:
    """
    Load and check a form schema file.

    Args:
        file_path: Path to the schema (JSON or YAML)

    Returns:
        Dictionary containing the schema structure

    Raises:
        SchemaLoadError: If the file cannot be loaded or doesn't have the
            expected structure

    Expected structure:
        {
            "type": "object",
            "title": str,
            "sections": [{"id": str, "title": str, "properties": {...}}, ...]
        }
    """
    schema = load_document(file_path)

    if not isinstance(schema, dict):
        raise SchemaLoadError("Schema must be a JSON/YAML object")

    if "sections" not in schema:
        raise SchemaLoadError("Schema must contain 'sections' key")

    if not isinstance(schema["sections"], list):
        raise SchemaLoadError("Schema 'sections' must be a list")

    check_form_schema(schema)
    return schema


def check_form_schema(schema: Dict[str, Any]) -> FormSchema:
    """
    Validate a schema mapping against the FormSchema model.

    Raises:
        SchemaLoadError: Listing every structural problem found
    """
    try:
        return FormSchema.model_validate(schema)
    except ValidationError as e:
        problems = _format_problems(e)
        raise SchemaLoadError("Invalid form schema:\n  " + "\n  ".join(problems))


def load_form_data(file_path: str | Path) -> Dict[str, Any]:
    """
    Load a form data snapshot (section id -> field key -> value).

    An empty file is an empty snapshot.

    Raises:
        SchemaLoadError: If the file cannot be loaded or is not an object
    """
    data = load_document(file_path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaLoadError("Form data must be a JSON/YAML object")
    return data


def _format_problems(error: ValidationError) -> List[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        problems.append(f"{location}: {item.get('msg', 'invalid')}")
    return problems
