"""
Condition Evaluator.

Evaluates a single UI condition against the current form data:

    {"field": "projectInfo.projectType", "operator": "in", "value": ["a", "b"]}

Comparisons are strict: no type coercion, booleans are never numbers.
A malformed condition or an unknown operator never fails the form; it is
logged and evaluates to True so the element stays shown/enabled.
"""

import logging
import math
from numbers import Number
from typing import Any, Mapping

from form_semantics.runtime.paths import get_nested_value
from form_semantics.schemas.form_schema import ConditionOperator

logger = logging.getLogger(__name__)


def evaluate_condition(condition: Mapping[str, Any], form_data: Mapping[str, Any]) -> bool:
    """
    Evaluate one condition against form data.

    Args:
        condition: Mapping with 'field', 'operator' and 'value'
        form_data: Current form data (section id -> field key -> value)

    Returns:
        Whether the condition holds
    """
    if not isinstance(condition, Mapping):
        logger.warning(f"Ignoring malformed condition (expected mapping): {condition!r}")
        return True

    field_path = condition.get("field")
    operator = condition.get("operator")
    expected = condition.get("value")

    if not isinstance(field_path, str) or not field_path:
        logger.warning(f"Ignoring condition without a field path: {condition!r}")
        return True

    actual = get_nested_value(form_data, field_path)

    try:
        op = ConditionOperator(operator)
    except ValueError:
        logger.warning(f"Unknown operator: {operator!r} (field '{field_path}'), treating condition as true")
        return True

    if op is ConditionOperator.EQUALS:
        result = strict_equals(actual, expected)
    elif op is ConditionOperator.NOT_EQUALS:
        result = not strict_equals(actual, expected)
    elif op is ConditionOperator.IN:
        result = _is_list(expected) and _contains(expected, actual)
    elif op is ConditionOperator.NOT_IN:
        result = _is_list(expected) and not _contains(expected, actual)
    elif op is ConditionOperator.GREATER_THAN:
        result = _compare_numeric(actual, expected, greater=True)
    elif op is ConditionOperator.LESS_THAN:
        result = _compare_numeric(actual, expected, greater=False)
    elif op is ConditionOperator.EXISTS:
        result = value_exists(actual)
    else:  # NOT_EXISTS
        result = not value_exists(actual)

    logger.debug(
        "evaluate_condition: field=%s operator=%s expected=%r actual=%r result=%s",
        field_path, op.value, expected, actual, result,
    )
    return result


def value_exists(value: Any) -> bool:
    """A value exists unless it is missing, None or the empty string."""
    return value is not None and value != ""


def is_number(value: Any) -> bool:
    """True for int/float values (booleans excluded)."""
    return isinstance(value, Number) and not isinstance(value, bool)


def strict_equals(a: Any, b: Any) -> bool:
    """
    Equality without type coercion.

    - bool only equals bool
    - numbers compare numerically (1 == 1.0), NaN never equals anything
    - lists/tuples compare element-wise and mappings key-by-key, with the
      same rules applied to every element
    - otherwise both values must share a type family and compare equal
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) or is_number(b):
        if not (is_number(a) and is_number(b)):
            return False
        if isinstance(a, float) and math.isnan(a):
            return False
        return a == b
    if a is None or b is None:
        return a is None and b is None
    if _is_list(a) or _is_list(b):
        return (
            _is_list(a)
            and _is_list(b)
            and len(a) == len(b)
            and all(strict_equals(x, y) for x, y in zip(a, b))
        )
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        return (
            isinstance(a, Mapping)
            and isinstance(b, Mapping)
            and a.keys() == b.keys()
            and all(strict_equals(a[key], b[key]) for key in a)
        )
    if type(a) is not type(b) and not (isinstance(a, type(b)) or isinstance(b, type(a))):
        return False
    return a == b


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _contains(options: Any, value: Any) -> bool:
    return any(strict_equals(option, value) for option in options)


def _compare_numeric(actual: Any, expected: Any, greater: bool) -> bool:
    if not is_number(actual):
        return False
    if not is_number(expected):
        logger.debug(f"Numeric comparison against non-numeric operand {expected!r} is false")
        return False
    return actual > expected if greater else actual < expected
