"""
Form Semantics - condition, option and validation logic for schema-driven forms.

This package provides:
- runtime: rule evaluation, enum resolution, schema normalization and
  validation over a form schema and a data snapshot
- schemas: pydantic models for the schema format and derived results
- config: engine settings
- cli: command-line access to validation and state computation
"""

__version__ = "0.1.0"

# Export commonly used functions for convenience
from form_semantics.errors import (
    ConfigError,
    FormSemanticsError,
    SchemaCompileError,
    SchemaLoadError,
)
from form_semantics.runtime import (
    FormSession,
    classify_widget,
    compute_form_state,
    evaluate_condition,
    evaluate_rule,
    load_form_schema,
    normalize,
    resolve_options,
    validate_field,
    validate_form,
)

__all__ = [
    "ConfigError",
    "FormSemanticsError",
    "SchemaCompileError",
    "SchemaLoadError",
    "FormSession",
    "classify_widget",
    "compute_form_state",
    "evaluate_condition",
    "evaluate_rule",
    "load_form_schema",
    "normalize",
    "resolve_options",
    "validate_field",
    "validate_form",
]
