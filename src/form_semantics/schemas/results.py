"""Pydantic schemas for everything the runtime derives from schema + data."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class WidgetKind(str, Enum):
    """Closed set of input widgets a field can be rendered with."""

    SELECT = "select"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    TEXT = "text"
    NUMBER_TEXT = "number-text"
    DATE = "date"
    EMAIL = "email"
    URL = "url"


class OptionSet(BaseModel):
    """Resolved option values with their display labels (same length)."""

    options: List[Any] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.options


class StructuralError(BaseModel):
    """One failure reported by the structural engine.

    ``params`` uses the names the message table keys on:
    missingProperty, limit, allowedValues, format, type, pattern.
    """

    instance_path: List[Any] = Field(default_factory=list)
    keyword: str
    message: str = ""
    params: Dict[str, Any] = Field(default_factory=dict)

    @property
    def path(self) -> str:
        """Dot-notation of the failing location ('' at the root)."""
        return ".".join(str(segment) for segment in self.instance_path)


class ValidationResult(BaseModel):
    """Outcome of a whole-form validation pass."""

    valid: bool
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    def messages_for(self, path: str) -> List[str]:
        return self.errors.get(path, [])


class FieldState(BaseModel):
    """Derived state of a single field for the current data snapshot."""

    key: str
    path: str
    visible: bool = True
    disabled: bool = False
    widget: WidgetKind = WidgetKind.TEXT
    options: Optional[OptionSet] = None
    value: Any = None
    errors: List[str] = Field(default_factory=list)


class SectionState(BaseModel):
    """Derived state of a section and its fields."""

    id: str
    title: str = ""
    visible: bool = True
    disabled: bool = False
    fields: Dict[str, FieldState] = Field(default_factory=dict)


class FormState(BaseModel):
    """Everything the render layer needs for one data snapshot."""

    title: str = ""
    sections: Dict[str, SectionState] = Field(default_factory=dict)
    valid: Optional[bool] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    def field(self, path: str) -> Optional[FieldState]:
        """Look up a field state by 'section.field' path."""
        section_id, _, field_key = path.partition(".")
        section = self.sections.get(section_id)
        if section is None:
            return None
        return section.fields.get(field_key)
