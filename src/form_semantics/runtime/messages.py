"""
Message Humanizer - structural failures -> user-facing messages.

One keyword table serves both whole-form and single-field validation; the
scope decides the few wordings that differ:

    keyword    form scope                      field scope
    required   "<Field> is required"           "This field is required"
    pattern    custom message | Invalid format custom message | Invalid format
    minimum    Value must be at least <limit>  (same)
    maximum    Value must be at most <limit>   (same)
    enum       Value must be one of: a, b      Please select a valid option
    format     Invalid <format> format         (same)
    type       Value must be a <type>          (same)
    other      validator's raw message         (same)

Limits are rendered without locale: digits grouped with ',' unless the field
sets 'ui:format: none' or grouping is disabled.
"""

import math
from enum import Enum
from numbers import Number
from typing import Any, Mapping, Optional

from form_semantics.schemas.results import StructuralError

VALIDATION_MESSAGE_KEY = "ui:validationMessage"
NUMBER_FORMAT_KEY = "ui:format"
NUMBER_FORMAT_NONE = "none"

DEFAULT_MESSAGE = "Invalid value"


class MessageScope(str, Enum):
    """Where a message is shown."""

    FORM = "form"
    FIELD = "field"


def format_limit(limit: Any, group_digits: bool = True) -> str:
    """
    Render a numeric limit independently of the process locale.

    Examples:
        10000 -> "10,000"; 1234.5 -> "1,234.5"; 0.1 + 0.2 -> "0.3"
        (group_digits=False) 10000 -> "10000"

    Fractions are rounded to at most three decimals; integral floats drop
    their ".0".
    """
    if isinstance(limit, bool) or not isinstance(limit, Number):
        return str(limit)
    if isinstance(limit, float) and (math.isnan(limit) or math.isinf(limit)):
        return str(limit)

    if isinstance(limit, int) or float(limit).is_integer():
        whole = int(limit)
        return f"{whole:,}" if group_digits else str(whole)

    text = f"{float(limit):,.3f}" if group_digits else f"{float(limit):.3f}"
    return text.rstrip("0").rstrip(".")


def wants_grouping(field: Optional[Mapping[str, Any]], group_digits: bool = True) -> bool:
    """Grouping applies unless disabled globally or by 'ui:format: none'."""
    if not group_digits:
        return False
    if isinstance(field, Mapping) and field.get(NUMBER_FORMAT_KEY) == NUMBER_FORMAT_NONE:
        return False
    return True


def custom_message(field: Optional[Mapping[str, Any]]) -> Optional[str]:
    """The field's 'ui:validationMessage', if it declares a usable one."""
    if not isinstance(field, Mapping):
        return None
    message = field.get(VALIDATION_MESSAGE_KEY)
    if isinstance(message, str) and message:
        return message
    return None


def humanize_error(
    error: StructuralError,
    field: Optional[Mapping[str, Any]] = None,
    scope: MessageScope = MessageScope.FORM,
    field_label: Optional[str] = None,
    group_digits: bool = True,
) -> str:
    """
    User-facing message for one structural failure.

    Args:
        error: Failure reported by the structural engine
        field: Schema of the field the failure belongs to (None if unknown)
        scope: Whole-form or single-field wording
        field_label: Name used in form-scope 'required' messages
        group_digits: Global digit grouping switch

    Returns:
        Message string (never empty)
    """
    params = error.params or {}
    fallback = error.message or DEFAULT_MESSAGE
    keyword = error.keyword

    if keyword == "required":
        if scope is MessageScope.FIELD:
            return "This field is required"
        name = field_label or params.get("missingProperty")
        return f"{name} is required" if name else fallback

    if keyword == "pattern":
        return custom_message(field) or "Invalid format"

    if keyword in ("minimum", "maximum"):
        if params.get("limit") is None:
            return fallback
        limit = format_limit(params["limit"], wants_grouping(field, group_digits))
        bound = "at least" if keyword == "minimum" else "at most"
        return f"Value must be {bound} {limit}"

    if keyword == "enum":
        if scope is MessageScope.FIELD:
            return "Please select a valid option"
        allowed = params.get("allowedValues")
        if isinstance(allowed, (list, tuple)):
            return f"Value must be one of: {', '.join(_enum_text(v) for v in allowed)}"
        return fallback

    if keyword == "format":
        if params.get("format"):
            return f"Invalid {params['format']} format"
        return fallback

    if keyword == "type":
        if params.get("type"):
            return f"Value must be a {params['type']}"
        return fallback

    return fallback


def _enum_text(value: Any) -> str:
    # JavaScript-style join: null/true/false spelled as in JSON
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
