"""
Form State - everything derived from (schema, data) in one pass.

compute_form_state evaluates every section's and field's rules, picks
widgets, resolves option lists and optionally runs whole-form validation.
The render layer calls it again after each data change; nothing is
remembered between calls.
"""

import copy
import logging
from typing import Any, Dict, Mapping, Optional

from form_semantics.runtime.engine import StructuralEngine
from form_semantics.runtime.enum_resolver import resolve_options
from form_semantics.runtime.paths import build_field_path, get_nested_value, iter_section_fields
from form_semantics.runtime.rules import (
    should_disable_field,
    should_disable_section,
    should_show_field,
    should_show_section,
)
from form_semantics.runtime.validators import validate_form
from form_semantics.runtime.widget_factory import WidgetFactory
from form_semantics.schemas.results import FieldState, FormState, SectionState

logger = logging.getLogger(__name__)


def ensure_section_entries(schema: Mapping[str, Any], form_data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Shallow copy of form data with an entry for every declared section.

    Missing or None section entries become empty dicts; the input is not
    modified.
    """
    data: Dict[str, Any] = dict(form_data or {})
    for section in schema.get("sections") or []:
        if not isinstance(section, Mapping):
            continue
        section_id = section.get("id")
        if isinstance(section_id, str) and data.get(section_id) is None:
            data[section_id] = {}
    return data


def initial_form_data(schema: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Starting data snapshot: one dict per section holding field defaults.

    Fields without a default (and not rendered as a checkbox) are left out.
    """
    data = ensure_section_entries(schema, {})
    for section, field_key, field in iter_section_fields(schema):
        default = WidgetFactory.default_value(field)
        if default is not None:
            data[section["id"]][field_key] = copy.deepcopy(default)
    return data


def compute_form_state(
    schema: Mapping[str, Any],
    form_data: Optional[Mapping[str, Any]],
    validate: bool = False,
    engine: Optional[StructuralEngine] = None,
) -> FormState:
    """
    Derive visibility, disablement, widgets, options (and errors).

    Args:
        schema: Sectioned form schema
        form_data: Current data snapshot (not modified)
        validate: Also run whole-form validation
        engine: Structural engine for validation

    Returns:
        FormState for this snapshot
    """
    data = ensure_section_entries(schema, form_data)

    validation = validate_form(schema, data, engine=engine) if validate else None
    errors = validation.errors if validation is not None else {}

    sections: Dict[str, SectionState] = {}
    for section in schema.get("sections") or []:
        if not isinstance(section, Mapping) or not isinstance(section.get("id"), str):
            logger.warning(f"Skipping section without an id: {section!r}")
            continue

        section_disabled = should_disable_section(section, data)
        section_state = SectionState(
            id=section["id"],
            title=section.get("title") or "",
            visible=should_show_section(section, data),
            disabled=section_disabled,
        )

        properties = section.get("properties")
        for field_key, field in (properties.items() if isinstance(properties, Mapping) else []):
            if not isinstance(field, Mapping):
                continue
            path = build_field_path(section["id"], field_key)
            widget = WidgetFactory.classify(field)
            has_options = (
                WidgetFactory.is_choice_widget(widget)
                or field.get("enum") is not None
                or field.get("ui:enumSource") is not None
            )
            section_state.fields[field_key] = FieldState(
                key=field_key,
                path=path,
                visible=should_show_field(field, data),
                disabled=should_disable_field(field, data, section_disabled),
                widget=widget,
                options=resolve_options(field, data) if has_options else None,
                value=get_nested_value(data, path),
                errors=list(errors.get(path, [])),
            )

        sections[section_state.id] = section_state

    return FormState(
        title=schema.get("title") or "",
        sections=sections,
        valid=validation.valid if validation is not None else None,
        errors=errors,
    )
