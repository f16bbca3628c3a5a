"""
Enum Resolver - option lists for select/radio fields.

Resolution order:
1. 'ui:enumSource' mapping entry for the source field's current value
2. static 'enum' / 'enumNames'
3. Yes/No for boolean fields rendered as select or radio
4. empty option set
"""

import json
import logging
from typing import Any, List, Mapping, Optional

from form_semantics.runtime.paths import get_nested_value
from form_semantics.runtime.widget_factory import WidgetFactory
from form_semantics.schemas.results import OptionSet

logger = logging.getLogger(__name__)

ENUM_SOURCE_KEY = "ui:enumSource"

BOOLEAN_OPTIONS = OptionSet(options=[True, False], labels=["Yes", "No"])


def get_dynamic_enum_options(field: Mapping[str, Any], form_data: Mapping[str, Any]) -> Optional[OptionSet]:
    """
    Options from the field's dynamic enum source, if any apply.

    Args:
        field: Field schema
        form_data: Current form data

    Returns:
        OptionSet for the source value's mapping entry, or None when the
        field has no enum source or the value has no entry
    """
    source = field.get(ENUM_SOURCE_KEY)
    if not isinstance(source, Mapping):
        return None

    source_field = source.get("field")
    mapping = source.get("mapping")
    if not isinstance(source_field, str) or not isinstance(mapping, Mapping):
        logger.warning(f"Ignoring malformed {ENUM_SOURCE_KEY}: {source!r}")
        return None

    source_value = get_nested_value(form_data, source_field)
    if source_value is None:
        return None

    entry = _lookup_mapping(mapping, source_value)
    if not isinstance(entry, Mapping):
        return None

    return build_option_set(entry.get("enum"), entry.get("enumNames"))


def resolve_options(field: Mapping[str, Any], form_data: Mapping[str, Any]) -> OptionSet:
    """
    Effective option set of a field for the current data.

    Args:
        field: Field schema
        form_data: Current form data

    Returns:
        OptionSet (possibly empty)
    """
    dynamic = get_dynamic_enum_options(field, form_data)
    if dynamic is not None:
        return dynamic

    if isinstance(field.get("enum"), (list, tuple)):
        return build_option_set(field.get("enum"), field.get("enumNames"))

    if field.get("type") == "boolean" and WidgetFactory.is_choice_widget(WidgetFactory.classify(field)):
        return BOOLEAN_OPTIONS.model_copy(deep=True)

    return OptionSet()


def build_option_set(values: Any, names: Any = None) -> OptionSet:
    """
    Pair option values with labels.

    Labels come from 'enumNames' by position; values without a name are
    labelled with their string form.
    """
    if not isinstance(values, (list, tuple)):
        return OptionSet()

    names = names if isinstance(names, (list, tuple)) else []
    labels: List[str] = []
    for i, value in enumerate(values):
        if i < len(names) and names[i] is not None:
            labels.append(str(names[i]))
        else:
            labels.append(option_label(value))
    return OptionSet(options=list(values), labels=labels)


def option_label(value: Any) -> str:
    """String form of an option value (JSON spelling for true/false/null)."""
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    return str(value)


def _lookup_mapping(mapping: Mapping[str, Any], value: Any) -> Any:
    # Exact key first, then the JSON object-key spelling of scalars
    try:
        if value in mapping:
            return mapping[value]
    except TypeError:
        return None
    if isinstance(value, (bool, int, float)):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        key = option_label(value)
        if key in mapping:
            return mapping[key]
    return None
