"""
Tag helpers — topic labels arrive either as lists or as JSON-encoded strings.

The store keeps candidate tags as a JSON column; the tagger hands over lists.
Both shapes are accepted and anything unparsable becomes an empty list.
"""

import json
from typing import Any, List


def parse_tags(value: Any) -> List[str]:
    """Return topic labels as a list of strings, never raising."""
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [t for t in value if isinstance(t, str) and t]
    return []
