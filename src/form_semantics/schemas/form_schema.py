"""Pydantic schemas for the persisted form schema format.

The runtime evaluates plain mappings (the JSON tree as loaded), so these
models are used to check a schema's shape at load time, not to replace it.
UI metadata keys carry the ``ui:`` prefix on disk and are exposed here under
snake_case names via aliases.

The models store operators and logic modes as plain strings, so an unknown
operator loads and degrades at evaluation time instead of failing the load.
The ConditionOperator and RuleLogic enums below are what the evaluator
dispatches on.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UI_PREFIX = "ui:"


class ConditionOperator(str, Enum):
    """Operators understood by the condition evaluator."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


class RuleLogic(str, Enum):
    """How the conditions of a rule are combined."""

    AND = "and"
    OR = "or"


class Condition(BaseModel):
    """A single comparison between a referenced field's value and a literal."""

    field: str = Field(..., min_length=1, description="Dot-path of the field to read")
    operator: str = Field(..., description="One of ConditionOperator")
    value: Any = Field(None, description="Comparison operand")


class Rule(BaseModel):
    """A condition set combined with AND/OR logic."""

    conditions: List[Condition] = Field(default_factory=list)
    logic: Optional[str] = Field(None, description="'and' (default) or 'or'")


class EnumMappingEntry(BaseModel):
    """Options offered when the source field holds a given value."""

    enum: List[Any] = Field(default_factory=list)
    enum_names: Optional[List[str]] = Field(None, alias="enumNames")

    model_config = ConfigDict(populate_by_name=True)


class EnumSource(BaseModel):
    """Dynamic enum descriptor: options keyed by another field's value."""

    field: str = Field(..., min_length=1)
    mapping: Dict[str, EnumMappingEntry] = Field(default_factory=dict)


class FieldSchema(BaseModel):
    """A leaf field: structural constraints plus inert UI hints."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(..., description="string, number, integer or boolean")
    title: Optional[str] = None
    required: bool = False
    enum: Optional[List[Any]] = None
    enum_names: Optional[List[str]] = Field(None, alias="enumNames")
    format: Optional[str] = None
    pattern: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    multiple_of: Optional[float] = Field(None, alias="multipleOf")
    default: Any = None

    show: Optional[Rule] = Field(None, alias="ui:show")
    disabled: Optional[Rule] = Field(None, alias="ui:disabled")
    widget: Optional[str] = Field(None, alias="ui:widget")
    placeholder: Optional[str] = Field(None, alias="ui:placeholder")
    help: Optional[str] = Field(None, alias="ui:help")
    validation_message: Optional[str] = Field(None, alias="ui:validationMessage")
    number_format: Optional[str] = Field(None, alias="ui:format")
    enum_source: Optional[EnumSource] = Field(None, alias="ui:enumSource")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Restrict fields to the primitive types the form layer renders."""
        if v not in ("string", "number", "integer", "boolean"):
            raise ValueError(
                f"Unknown field type '{v}' (must be string, number, integer or boolean)"
            )
        return v


class SectionSchema(BaseModel):
    """A named group of fields with its own visibility/disablement rules."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    properties: Dict[str, FieldSchema] = Field(default_factory=dict)
    show: Optional[Rule] = Field(None, alias="ui:show")
    disabled: Optional[Rule] = Field(None, alias="ui:disabled")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Section ids become path segments, so they cannot contain dots."""
        if "." in v:
            raise ValueError(f"Section id '{v}' must not contain '.'")
        return v


class FormSchema(BaseModel):
    """Top-level form: an ordered list of sections."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "object"
    title: str = ""
    sections: List[SectionSchema] = Field(default_factory=list)

    @field_validator("sections")
    @classmethod
    def validate_unique_ids(cls, v: List[SectionSchema]) -> List[SectionSchema]:
        """Reject duplicate section ids."""
        seen = set()
        for section in v:
            if section.id in seen:
                raise ValueError(f"Duplicate section id '{section.id}'")
            seen.add(section.id)
        return v
