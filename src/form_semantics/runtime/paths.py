"""Dot-path access over nested form data and schema trees.

Paths use dot notation with optional list indices:
    "projectInfo.projectType"          -> data["projectInfo"]["projectType"]
    "contacts.people[1].email"         -> data["contacts"]["people"][1]["email"]
    "contacts.people.1.email"          -> same (numeric segment on a list)

Reads never raise: a missing key, an out-of-range index or a non-container
along the way resolves to the caller's default.
"""

import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

# Sentinel for "no value at this path", distinct from an explicit None
MISSING = object()

_INDEXED_SEGMENT = re.compile(r"^([^\[]+)((?:\[\d+\])+)$")
_INDEX = re.compile(r"\[(\d+)\]")


def parse_path(path: str) -> List[str | int]:
    """
    Parse a dot-path into segments.

    Examples:
        "section.field" -> ["section", "field"]
        "contacts.people[0].role" -> ["contacts", "people", 0, "role"]
        "grid.cells[2][1]" -> ["grid", "cells", 2, 1]

    Args:
        path: Dot-notation path with optional bracketed indices

    Returns:
        List of segments (strings for keys, integers for list indices)
    """
    segments: List[str | int] = []
    if not path:
        return segments

    for part in path.split("."):
        match = _INDEXED_SEGMENT.match(part)
        if match:
            segments.append(match.group(1))
            segments.extend(int(i) for i in _INDEX.findall(match.group(2)))
        else:
            segments.append(part)

    return segments


def get_nested_value(obj: Any, path: str, default: Any = None) -> Any:
    """
    Read a value from nested mappings/lists using dot notation.

    Args:
        obj: Root mapping (form data or a schema tree)
        path: Dot-notation path
        default: Returned when any segment cannot be resolved

    Returns:
        The value at the path, or default
    """
    current = obj
    for segment in parse_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            index = _as_index(segment)
            if index is None or index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def set_nested_value(target: Dict[str, Any], path: str, value: Any) -> None:
    """
    Set a value in nested data using dot notation, creating containers.

    This mutates target. It is meant for the owner of the data snapshot
    (see FormSession); evaluation and validation functions never call it
    on caller data.

    Examples:
        "section.field" -> target["section"]["field"] = value
        "contacts.people[0].role" -> target["contacts"]["people"][0]["role"] = value

    Args:
        target: Dictionary to modify (mutated in place)
        path: Dot-notation path with optional list indices
        value: Value to set

    Raises:
        ValueError: If the path is empty or crosses an existing non-container
    """
    segments = parse_path(path)
    if not segments:
        raise ValueError("Cannot set a value at an empty path")

    current: Any = target
    for i, segment in enumerate(segments[:-1]):
        next_segment = segments[i + 1]
        if isinstance(segment, int):
            if not isinstance(current, list):
                raise ValueError(f"Expected list at segment {i} of path '{path}', got {type(current).__name__}")
            while len(current) <= segment:
                current.append({})
            if current[segment] is None:
                current[segment] = [] if isinstance(next_segment, int) else {}
            current = current[segment]
        else:
            if not isinstance(current, dict):
                raise ValueError(f"Expected mapping at segment {i} of path '{path}', got {type(current).__name__}")
            if current.get(segment) is None:
                # Peek at next segment to decide if we need a list or dict
                current[segment] = [] if isinstance(next_segment, int) else {}
            current = current[segment]

    last_segment = segments[-1]
    if isinstance(last_segment, int):
        if not isinstance(current, list):
            raise ValueError(f"Expected list for final segment of path '{path}', got {type(current).__name__}")
        while len(current) <= last_segment:
            current.append(None)
        current[last_segment] = value
    else:
        if not isinstance(current, dict):
            raise ValueError(f"Expected mapping for final segment of path '{path}', got {type(current).__name__}")
        current[last_segment] = value


def build_field_path(section_id: str, field_key: str) -> str:
    """Build the 'section.field' path of a field."""
    return f"{section_id}.{field_key}"


def iter_section_fields(schema: Mapping[str, Any]) -> Iterator[Tuple[Mapping[str, Any], str, Mapping[str, Any]]]:
    """Yield (section, field_key, field_schema) in declaration order.

    Sections or properties that are not mappings are skipped.
    """
    sections = schema.get("sections") if isinstance(schema, Mapping) else None
    if not isinstance(sections, Sequence) or isinstance(sections, (str, bytes)):
        return
    for section in sections:
        if not isinstance(section, Mapping):
            continue
        properties = section.get("properties")
        if not isinstance(properties, Mapping):
            continue
        for field_key, field in properties.items():
            if isinstance(field, Mapping):
                yield section, field_key, field


def flatten_sections(sections: Sequence[Mapping[str, Any]]) -> Dict[str, Mapping[str, Any]]:
    """
    Flatten sections into one mapping keyed by 'section.field'.

    Args:
        sections: The schema's section list

    Returns:
        Ordered mapping of field path -> field schema (not copied)
    """
    return {
        build_field_path(section["id"], key): field
        for section, key, field in iter_section_fields({"sections": sections})
    }


def find_field_schema(schema: Any, path: str) -> Optional[Mapping[str, Any]]:
    """
    Resolve the schema node for a field path, walking from the root.

    At each segment, an object's 'properties' are consulted first, then a
    form's 'sections' (matched by id). Any unresolvable segment gives None.

    Args:
        schema: Form schema (sectioned) or plain object schema
        path: Dot-notation field path (e.g. "contact.email")

    Returns:
        The field's schema mapping, or None
    """
    node = schema
    for segment in parse_path(path):
        if not isinstance(node, Mapping):
            return None
        properties = node.get("properties")
        if isinstance(properties, Mapping) and segment in properties:
            node = properties[segment]
            continue
        sections = node.get("sections")
        if isinstance(sections, Sequence) and not isinstance(sections, (str, bytes)):
            node = next(
                (s for s in sections if isinstance(s, Mapping) and s.get("id") == segment),
                None,
            )
            continue
        items = node.get("items")
        if isinstance(items, Mapping) and _as_index(segment) is not None:
            node = items
            continue
        return None
    return node if isinstance(node, Mapping) else None


def _as_index(segment: str | int) -> Optional[int]:
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isdigit():
        return int(segment)
    return None
