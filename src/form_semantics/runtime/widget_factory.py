"""
Widget Factory - decides how each field is rendered.

The render layer asks the factory which widget to build; the decision
table lives here so it can be tested without any UI toolkit.

Precedence:
1. Explicit 'ui:widget' hint (known widgets only)
2. enum or 'ui:enumSource' present -> select
3. type: boolean -> checkbox, integer/number -> number-text
4. string format: date -> date, email -> email, uri/url -> url
5. anything else -> text
"""

import logging
from typing import Any, Dict, Mapping, Optional

from form_semantics.schemas.results import WidgetKind

logger = logging.getLogger(__name__)

# 'ui:widget' hint -> widget (aliases included)
WIDGET_HINTS: Dict[str, WidgetKind] = {
    "select": WidgetKind.SELECT,
    "dropdown": WidgetKind.SELECT,
    "textarea": WidgetKind.TEXTAREA,
    "checkbox": WidgetKind.CHECKBOX,
    "radio": WidgetKind.RADIO,
    "text": WidgetKind.TEXT,
    "number": WidgetKind.NUMBER_TEXT,
    "number-text": WidgetKind.NUMBER_TEXT,
    "updown": WidgetKind.NUMBER_TEXT,
    "date": WidgetKind.DATE,
    "email": WidgetKind.EMAIL,
    "url": WidgetKind.URL,
    "uri": WidgetKind.URL,
}

FORMAT_WIDGETS: Dict[str, WidgetKind] = {
    "date": WidgetKind.DATE,
    "email": WidgetKind.EMAIL,
    "uri": WidgetKind.URL,
    "url": WidgetKind.URL,
}

CHOICE_WIDGETS = frozenset({WidgetKind.SELECT, WidgetKind.RADIO})


class WidgetFactory:
    """
    Classifies field schemas into widget kinds and derives display metadata.

    All methods are pure functions of the field schema.
    """

    @staticmethod
    def classify(field: Mapping[str, Any]) -> WidgetKind:
        """
        Pick the widget for a field.

        Args:
            field: Field schema mapping

        Returns:
            The WidgetKind to render
        """
        hint = field.get("ui:widget")
        if isinstance(hint, str):
            widget = WIDGET_HINTS.get(hint.lower())
            if widget is not None:
                return widget
            logger.debug(f"Ignoring unknown ui:widget hint {hint!r}")

        if field.get("enum") or field.get("ui:enumSource"):
            return WidgetKind.SELECT

        field_type = field.get("type")
        if field_type == "boolean":
            return WidgetKind.CHECKBOX
        if field_type in ("integer", "number"):
            return WidgetKind.NUMBER_TEXT

        string_format = field.get("format")
        if isinstance(string_format, str) and string_format in FORMAT_WIDGETS:
            return FORMAT_WIDGETS[string_format]

        return WidgetKind.TEXT

    @staticmethod
    def is_choice_widget(widget: WidgetKind) -> bool:
        """Select and radio widgets render an option list."""
        return widget in CHOICE_WIDGETS

    @staticmethod
    def field_label(field: Mapping[str, Any], field_key: str) -> str:
        """
        Display label for a field.

        Uses the schema title; falls back to the key converted from
        snake_case/camelCase to Title Case.
        """
        title = field.get("title")
        if isinstance(title, str) and title.strip():
            return title

        # "projectType" -> "project_Type" -> "Project Type"
        key = field_key.split(".")[-1]
        spaced = "".join(f"_{c}" if c.isupper() and i > 0 else c for i, c in enumerate(key))
        return spaced.replace("_", " ").replace("  ", " ").strip().title()

    @staticmethod
    def default_value(field: Mapping[str, Any]) -> Optional[Any]:
        """
        Initial value for a field.

        The declared 'default' wins; otherwise booleans start False and
        everything else starts empty (None) to force input.
        """
        if "default" in field:
            return field["default"]
        if field.get("type") == "boolean" and WidgetFactory.classify(field) == WidgetKind.CHECKBOX:
            return False
        return None


def classify_widget(field: Mapping[str, Any]) -> WidgetKind:
    """Module-level shortcut for WidgetFactory.classify."""
    return WidgetFactory.classify(field)
