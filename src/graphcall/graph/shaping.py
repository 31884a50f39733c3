"""Result shaping: structured values or depth-limited JSON text."""

import json
from typing import Any

from graphcall.graph.models import DEFAULT_DEPTH


def limit_depth(value: Any, depth: int) -> Any:
    """Copy value, rendering containers nested deeper than depth as strings.

    depth counts container levels: with depth=1 the top-level list or dict is
    kept and anything inside it that is itself a container becomes its str().
    """
    if isinstance(value, dict):
        if depth <= 0:
            return str(value)
        return {key: limit_depth(item, depth - 1) for key, item in value.items()}
    if isinstance(value, list | tuple):
        if depth <= 0:
            return str(value)
        return [limit_depth(item, depth - 1) for item in value]
    return value


def to_json_text(value: Any, depth: int = DEFAULT_DEPTH) -> str:
    return json.dumps(limit_depth(value, depth), ensure_ascii=False)


def shape_result(value: Any, raw: bool = False, depth: int = DEFAULT_DEPTH) -> Any:
    """Return value as-is, or as JSON text when raw output was requested."""
    if raw:
        return to_json_text(value, depth)
    return value
