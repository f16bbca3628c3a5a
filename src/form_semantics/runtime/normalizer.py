"""
Schema Normalizer - form schema -> pure structural (JSON Schema) schema.

Two steps, both on a deep copy:
1. Drop every 'ui:*' key at every depth.
2. Replace 'sections' by a flat 'properties' map keyed "sectionId.fieldKey",
   moving each field's boolean 'required' flag into the parent's
   'required' list (JSON Schema declares required-ness on the object).

Example:
    {"sections": [{"id": "contact", "properties": {"email": {"type": "string",
      "required": true, "ui:widget": "email"}}}]}
    ->
    {"properties": {"contact.email": {"type": "string"}},
     "required": ["contact.email"]}
"""

import copy
from typing import Any, Dict, List, Mapping

from form_semantics.runtime.paths import build_field_path, iter_section_fields
from form_semantics.schemas.form_schema import UI_PREFIX


def strip_ui_extensions(schema: Any) -> Any:
    """
    Deep copy of a schema tree without any 'ui:*' keys.

    Args:
        schema: Any JSON-compatible value

    Returns:
        A new tree; the input is not modified
    """
    if isinstance(schema, Mapping):
        return {
            key: strip_ui_extensions(value)
            for key, value in schema.items()
            if not (isinstance(key, str) and key.startswith(UI_PREFIX))
        }
    if isinstance(schema, (list, tuple)):
        return [strip_ui_extensions(item) for item in schema]
    return copy.deepcopy(schema)


def normalize_field(field: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Structural schema of a single field.

    'ui:*' keys are removed and a boolean 'required' is dropped: on a leaf
    it is not a JSON Schema keyword, callers express it on the parent.
    """
    clean = strip_ui_extensions(field)
    if isinstance(clean.get("required"), bool):
        del clean["required"]
    return clean


def normalize(schema: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a form schema into a schema the structural engine understands.

    A schema without sections and without 'ui:*' keys comes back as an
    equal copy.

    Args:
        schema: Form schema (sectioned) or plain object schema

    Returns:
        New structural schema
    """
    if not isinstance(schema, Mapping):
        return copy.deepcopy(schema)

    if "sections" not in schema or not isinstance(schema.get("sections"), (list, tuple)):
        return strip_ui_extensions(schema)

    result: Dict[str, Any] = {
        key: strip_ui_extensions(value)
        for key, value in schema.items()
        if key != "sections" and not (isinstance(key, str) and key.startswith(UI_PREFIX))
    }

    properties: Dict[str, Any] = dict(result.get("properties") or {})
    required: List[str] = list(result.get("required") or [])

    for section, field_key, field in iter_section_fields(schema):
        full_key = build_field_path(section.get("id"), field_key)
        properties[full_key] = normalize_field(field)
        if field.get("required") is True and full_key not in required:
            required.append(full_key)

    result["properties"] = properties
    result["required"] = required
    return result

