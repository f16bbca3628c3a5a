"""Pydantic schemas for the form format and derived results."""

from form_semantics.schemas.form_schema import (
    Condition,
    ConditionOperator,
    EnumSource,
    FieldSchema,
    FormSchema,
    Rule,
    RuleLogic,
    SectionSchema,
    UI_PREFIX,
)
from form_semantics.schemas.results import (
    FieldState,
    FormState,
    OptionSet,
    SectionState,
    StructuralError,
    ValidationResult,
    WidgetKind,
)

__all__ = [
    "Condition",
    "ConditionOperator",
    "EnumSource",
    "FieldSchema",
    "FormSchema",
    "Rule",
    "RuleLogic",
    "SectionSchema",
    "UI_PREFIX",
    "FieldState",
    "FormState",
    "OptionSet",
    "SectionState",
    "StructuralError",
    "ValidationResult",
    "WidgetKind",
]
