"""
Schema validation for form data.

- validate_form: whole-form pass (on submit). Failures are filed under
  dot-notation field paths; required failures go to the missing field,
  not to its parent object.
- validate_field: one value in isolation (on blur). Fail-open: a missing or
  broken field definition yields no errors, never an exception.

Both normalize the schema (ui:* metadata removed, sections flattened)
and run it through a StructuralEngine; messages come from messages.py.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from form_semantics.config import get_engine_config
from form_semantics.runtime.engine import StructuralEngine, get_default_engine
from form_semantics.runtime.messages import MessageScope, custom_message, humanize_error
from form_semantics.runtime.normalizer import normalize, normalize_field
from form_semantics.runtime.paths import (
    MISSING,
    build_field_path,
    find_field_schema,
    get_nested_value,
    iter_section_fields,
)
from form_semantics.runtime.widget_factory import WidgetFactory
from form_semantics.schemas.results import ValidationResult

logger = logging.getLogger(__name__)

# Error key for failures that have no field location
ROOT_PATH = "root"

# Property name of the single-field wrapper schema
FIELD_PROPERTY = "field"


def validate_form(
    schema: Mapping[str, Any],
    form_data: Mapping[str, Any],
    engine: Optional[StructuralEngine] = None,
) -> ValidationResult:
    """
    Validate a full data snapshot against a form schema.

    Args:
        schema: Form schema (sectioned) or plain object schema
        form_data: Current form data
        engine: Structural engine (shared default when omitted)

    Returns:
        ValidationResult with messages keyed by field path (or 'root')

    Raises:
        SchemaCompileError: If the normalized schema is rejected by the engine
    """
    engine = engine or get_default_engine()
    group_digits = get_engine_config().group_digits

    compiled = engine.compile(normalize(schema))
    instance = project_form_data(schema, form_data) if has_sections(schema) else form_data
    failures = compiled.validate(instance)

    errors: Dict[str, List[str]] = {}
    for failure in failures:
        path = failure.path
        label = None

        if failure.keyword == "required" and failure.params.get("missingProperty") is not None:
            missing = str(failure.params["missingProperty"])
            path = f"{path}.{missing}" if path else missing
            field = _lookup_field(schema, path)
            label = WidgetFactory.field_label(field or {}, path)
        else:
            field = _lookup_field(schema, path) if path else None

        message = humanize_error(
            failure,
            field=field,
            scope=MessageScope.FORM,
            field_label=label,
            group_digits=group_digits,
        )
        errors.setdefault(path or ROOT_PATH, []).append(message)

    if failures:
        logger.debug(f"Form validation found {len(failures)} failure(s) on {len(errors)} path(s)")

    return ValidationResult(valid=not failures, errors=errors)


def validate_field(
    field_schema: Optional[Mapping[str, Any]],
    value: Any,
    field_path: str = "",
    engine: Optional[StructuralEngine] = None,
) -> List[str]:
    """
    Validate one field's value in isolation.

    The field is wrapped in a one-property object schema so the field's
    'required' flag can be expressed the JSON Schema way. None counts as
    not filled. A custom 'ui:validationMessage' always wins for pattern
    failures.

    Args:
        field_schema: The field's schema (UI keys allowed)
        value: Candidate value
        field_path: Path used in diagnostics only
        engine: Structural engine (shared default when omitted)

    Returns:
        Messages in validator order; empty when valid or not checkable
    """
    if not isinstance(field_schema, Mapping):
        return []

    try:
        wrapper: Dict[str, Any] = {
            "type": "object",
            "properties": {FIELD_PROPERTY: normalize_field(field_schema)},
        }
        if field_schema.get("required") is True:
            wrapper["required"] = [FIELD_PROPERTY]

        instance = {} if value is None else {FIELD_PROPERTY: value}
        compiled = (engine or get_default_engine()).compile(wrapper)
        failures = compiled.validate(instance)
        group_digits = get_engine_config().group_digits
    except Exception as e:
        logger.warning(f"Validation error for field '{field_path}': {e}")
        return []

    messages: List[str] = []
    for failure in failures:
        override = custom_message(field_schema) if failure.keyword == "pattern" else None
        if override:
            messages.append(override)
            continue
        messages.append(
            humanize_error(
                failure,
                field=field_schema,
                scope=MessageScope.FIELD,
                group_digits=group_digits,
            )
        )
    return messages


def has_sections(schema: Any) -> bool:
    """True for sectioned form schemas."""
    return isinstance(schema, Mapping) and isinstance(schema.get("sections"), (list, tuple))


def project_form_data(schema: Mapping[str, Any], form_data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Project nested form data onto the flattened 'section.field' keys.

    Top-level entries that are not sections are kept as they are, so a
    schema's own top-level properties still apply. Fields with no value or a
    None value are left out, so 'required' reports them as missing.

    Example:
        {"agree": True, "contact": {"email": "a@b.c", "phone": None}}
        -> {"agree": True, "contact.email": "a@b.c"}
    """
    section_ids = {
        section.get("id")
        for section in schema.get("sections") or []
        if isinstance(section, Mapping) and isinstance(section.get("id"), str)
    }

    projected: Dict[str, Any] = {
        key: value
        for key, value in form_data.items()
        if key not in section_ids and value is not None
    }
    for section, field_key, _field in iter_section_fields(schema):
        path = build_field_path(section.get("id"), field_key)
        value = get_nested_value(form_data, path, default=MISSING)
        if value is MISSING or value is None:
            continue
        projected[path] = value
    return projected


def _lookup_field(schema: Mapping[str, Any], path: str) -> Optional[Mapping[str, Any]]:
    # Custom messages and number formats are optional extras: any lookup
    # problem means "use the generic wording"
    try:
        return find_field_schema(schema, path)
    except Exception as e:
        logger.debug(f"Field lookup failed for '{path}': {e}")
        return None
