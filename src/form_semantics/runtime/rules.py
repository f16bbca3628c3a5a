"""
Rule Aggregator.

Combines the conditions of a 'ui:show' / 'ui:disabled' rule into one
decision, and derives section/field visibility and disablement:

- No rule or no conditions -> the caller's default
  (visible for 'ui:show', enabled for 'ui:disabled')
- logic 'or' -> any condition holds; 'and' or anything else -> all hold
- Section disablement cascades to its fields; visibility does not.
  A visible field inside a hidden section is still reported visible;
  the render layer skips the fields of hidden sections.
"""

import logging
from typing import Any, Mapping, Optional

from form_semantics.runtime.conditions import evaluate_condition
from form_semantics.schemas.form_schema import RuleLogic

logger = logging.getLogger(__name__)

SHOW_KEY = "ui:show"
DISABLED_KEY = "ui:disabled"


def evaluate_rule(
    rule: Optional[Mapping[str, Any]],
    form_data: Mapping[str, Any],
    default_when_absent: bool = True,
) -> bool:
    """
    Evaluate a rule (condition list + logic mode) against form data.

    Args:
        rule: Mapping with 'conditions' and optional 'logic', or None
        form_data: Current form data
        default_when_absent: Result when there is nothing to evaluate

    Returns:
        The combined decision
    """
    if not isinstance(rule, Mapping):
        if rule is not None:
            logger.warning(f"Ignoring malformed rule (expected mapping): {rule!r}")
        return default_when_absent

    conditions = rule.get("conditions")
    if not conditions or not isinstance(conditions, (list, tuple)):
        return default_when_absent

    logic = rule.get("logic") or RuleLogic.AND.value
    if logic not in (RuleLogic.AND.value, RuleLogic.OR.value):
        logger.warning(f"Unknown rule logic {logic!r}, using 'and'")
        logic = RuleLogic.AND.value

    results = [evaluate_condition(condition, form_data) for condition in conditions]
    if logic == RuleLogic.OR.value:
        return any(results)
    return all(results)


def should_show_section(section: Mapping[str, Any], form_data: Mapping[str, Any]) -> bool:
    """Sections are shown unless their 'ui:show' rule says otherwise."""
    return evaluate_rule(section.get(SHOW_KEY), form_data, True)


def should_disable_section(section: Mapping[str, Any], form_data: Mapping[str, Any]) -> bool:
    """Sections are enabled unless their 'ui:disabled' rule holds."""
    result = evaluate_rule(section.get(DISABLED_KEY), form_data, False)
    logger.debug(f"should_disable_section({section.get('id')}): {result}")
    return result


def should_show_field(field: Mapping[str, Any], form_data: Mapping[str, Any]) -> bool:
    """Fields are shown unless their 'ui:show' rule says otherwise."""
    return evaluate_rule(field.get(SHOW_KEY), form_data, True)


def should_disable_field(
    field: Mapping[str, Any],
    form_data: Mapping[str, Any],
    section_disabled: bool = False,
) -> bool:
    """
    Effective disabled state of a field.

    A disabled section disables every field in it, whatever the field's
    own rule says.
    """
    return section_disabled or evaluate_rule(field.get(DISABLED_KEY), form_data, False)
