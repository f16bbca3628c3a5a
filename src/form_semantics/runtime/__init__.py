"""
Runtime components for schema-driven forms.

Given an immutable form schema and a data snapshot, derive:
1. Visibility and disablement - conditions, rules
2. Option lists - enum_resolver
3. Widget choice - widget_factory
4. Validation errors - normalizer, engine, messages, validators

form_state bundles them into one FormState; session is the thin
controller that owns mutable data and recomputes after every change.
"""

from form_semantics.runtime.conditions import evaluate_condition
from form_semantics.runtime.engine import (
    CompiledSchema,
    JsonSchemaEngine,
    StructuralEngine,
    ValidatorCache,
    get_default_engine,
)
from form_semantics.runtime.enum_resolver import get_dynamic_enum_options, resolve_options
from form_semantics.runtime.form_state import (
    compute_form_state,
    ensure_section_entries,
    initial_form_data,
)
from form_semantics.runtime.normalizer import normalize, strip_ui_extensions
from form_semantics.runtime.paths import (
    build_field_path,
    flatten_sections,
    get_nested_value,
    set_nested_value,
)
from form_semantics.runtime.rules import (
    evaluate_rule,
    should_disable_field,
    should_disable_section,
    should_show_field,
    should_show_section,
)
from form_semantics.runtime.schema_loader import load_form_data, load_form_schema
from form_semantics.runtime.session import FormSession, coerce_input
from form_semantics.runtime.validators import validate_field, validate_form
from form_semantics.runtime.widget_factory import WidgetFactory, classify_widget

__all__ = [
    "evaluate_condition",
    "CompiledSchema",
    "JsonSchemaEngine",
    "StructuralEngine",
    "ValidatorCache",
    "get_default_engine",
    "get_dynamic_enum_options",
    "resolve_options",
    "compute_form_state",
    "ensure_section_entries",
    "initial_form_data",
    "normalize",
    "strip_ui_extensions",
    "build_field_path",
    "flatten_sections",
    "get_nested_value",
    "set_nested_value",
    "evaluate_rule",
    "should_disable_field",
    "should_disable_section",
    "should_show_field",
    "should_show_section",
    "load_form_data",
    "load_form_schema",
    "FormSession",
    "coerce_input",
    "validate_field",
    "validate_form",
    "WidgetFactory",
    "classify_widget",
]
