"""Jinja2 output helpers for JSON-sourced values.

Context values come from JSON files, so they are displayed the way JSON
writes them rather than the way Python prints them.
"""

import json
from typing import Any

from jinja2 import Undefined


def display_value(value: Any) -> Any:
    """Finalize hook: convert an expression result before it is written.

    Args:
        value: Result of a ``{{ ... }}`` expression

    Returns:
        Value to be stringified by the engine

    Examples:
        >>> display_value(None)
        ''
        >>> display_value(True)
        'true'
        >>> display_value({"a": [1, 2]})
        '{"a": [1, 2]}'
    """
    if isinstance(value, Undefined) or value is None:
        return ""

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)

    return value


def to_pretty_json(value: Any, indent: int = 2) -> str:
    """Dump a value as indented JSON, for fenced code blocks.

    Args:
        value: Any JSON-compatible value
        indent: Indentation width

    Returns:
        JSON string (empty for undefined values)
    """
    if isinstance(value, Undefined):
        return ""
    return json.dumps(value, indent=indent, ensure_ascii=False)
