"""
Form Session - the controller loop around the pure runtime.

A session owns a private copy of the form data. Each update coerces the raw
input to the field's type, writes it, and recomputes the form state from
scratch; blur runs single-field validation; submit runs the whole form.

    session = FormSession(schema)
    state = session.update("projectInfo.projectType", "option2")
    session.blur("projectInfo.budget")
    result = session.submit()
"""

import copy
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Set

from form_semantics.runtime.engine import StructuralEngine
from form_semantics.runtime.enum_resolver import option_label
from form_semantics.runtime.form_state import (
    compute_form_state,
    ensure_section_entries,
    initial_form_data,
)
from form_semantics.runtime.paths import flatten_sections, get_nested_value, set_nested_value
from form_semantics.runtime.validators import validate_field
from form_semantics.schemas.results import FormState, ValidationResult

logger = logging.getLogger(__name__)

TRUE_STRINGS = {"true", "on", "yes", "1"}
FALSE_STRINGS = {"false", "off", "no", "0", ""}

# Digit group separators accepted in number input: 1,000 / 1 000 / 1'000 / 1_000
_GROUP_SEPARATORS = re.compile(r"[,\s'_]")
_INTEGER_TEXT = re.compile(r"^[+-]?\d+$")
_DECIMAL_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def parse_number_text(text: str, integer: bool = False) -> Optional[int | float]:
    """
    Parse number input text typed by a user.

    Handles:
    - Grouped digits: "10,000" -> 10000, "1 234.5" -> 1234.5
    - Integral decimals for integer fields: "12.0" -> 12

    Args:
        text: Raw input text
        integer: Target field is an integer field

    Returns:
        Parsed number, or None if the text is not (yet) a number
    """
    cleaned = _GROUP_SEPARATORS.sub("", text.strip())
    if not cleaned:
        return None

    if _INTEGER_TEXT.match(cleaned):
        return int(cleaned)

    if _DECIMAL_TEXT.match(cleaned):
        number = float(cleaned)
        if integer and number.is_integer():
            return int(number)
        return number

    return None


def coerce_input(field: Optional[Mapping[str, Any]], raw: Any) -> Any:
    """
    Convert a raw widget value to the field's declared type.

    Text that cannot be converted yet (e.g. "12a" while typing) is kept
    as-is so validation can report it. Empty text means "not filled" (None).

    Args:
        field: Field schema (None: value passes through)
        raw: Value as delivered by the widget

    Returns:
        Typed value
    """
    if field is None:
        return raw

    if isinstance(raw, str):
        enum_values = field.get("enum")
        if isinstance(enum_values, (list, tuple)):
            for option in enum_values:
                if not isinstance(option, str) and option_label(option) == raw:
                    return option

    field_type = field.get("type")

    if field_type in ("integer", "number"):
        if raw is None or isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            if not raw.strip():
                return None
            parsed = parse_number_text(raw, integer=field_type == "integer")
            return raw if parsed is None else parsed
        if field_type == "integer" and isinstance(raw, float) and raw.is_integer():
            return int(raw)
        return raw

    if field_type == "boolean":
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in TRUE_STRINGS:
                return True
            if lowered in FALSE_STRINGS:
                return False
        return raw

    if isinstance(raw, str) and raw == "":
        return None

    return raw


class FormSession:
    """
    Mutable form controller over an immutable schema.

    The caller's initial data is deep-copied; the session never writes to
    it. After every update the whole FormState is recomputed.
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        initial_data: Optional[Mapping[str, Any]] = None,
        engine: Optional[StructuralEngine] = None,
        validate_on_change: bool = False,
    ):
        """
        Args:
            schema: Sectioned form schema
            initial_data: Starting data (defaults from the schema if None)
            engine: Structural engine for validation
            validate_on_change: Run whole-form validation on every recompute
        """
        self.schema = schema
        self.engine = engine
        self.validate_on_change = validate_on_change

        base = initial_data if initial_data is not None else initial_form_data(schema)
        self._data: Dict[str, Any] = ensure_section_entries(schema, copy.deepcopy(dict(base)))
        self._fields = flatten_sections(schema.get("sections") or [])

        self.touched: Set[str] = set()
        self.field_errors: Dict[str, List[str]] = {}
        self.state: FormState = self.recompute()

    @property
    def data(self) -> Dict[str, Any]:
        """Deep copy of the current data snapshot."""
        return copy.deepcopy(self._data)

    def value(self, path: str) -> Any:
        return get_nested_value(self._data, path)

    def update(self, path: str, raw_value: Any) -> FormState:
        """
        Write a raw input value and recompute the form state.

        Fields already blurred once are re-validated so their messages
        follow the value while the user corrects it.
        """
        field = self._fields.get(path)
        if field is None:
            logger.debug(f"Update of undeclared path '{path}'")
        value = coerce_input(field, raw_value)
        set_nested_value(self._data, path, value)

        if path in self.touched:
            self.field_errors[path] = validate_field(field, value, path, engine=self.engine)

        return self.recompute()

    def blur(self, path: str) -> List[str]:
        """Mark a field as touched and validate it on its own."""
        self.touched.add(path)
        errors = validate_field(self._fields.get(path), self.value(path), path, engine=self.engine)
        self.field_errors[path] = errors
        return errors

    def submit(self) -> ValidationResult:
        """Validate the whole form; the state picks up the errors."""
        self.state = compute_form_state(self.schema, self._data, validate=True, engine=self.engine)
        return ValidationResult(valid=bool(self.state.valid), errors=self.state.errors)

    def recompute(self) -> FormState:
        self.state = compute_form_state(
            self.schema,
            self._data,
            validate=self.validate_on_change,
            engine=self.engine,
        )
        return self.state
