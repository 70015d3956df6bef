import json
from typing import Any


def safe_json_parse(value: Any, fallback: Any = None) -> Any:
    """Decode JSON text stored in a column, returning ``fallback`` when it can't be read."""
    if value is None:
        return fallback
    if not isinstance(value, (str, bytes, bytearray)):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return fallback
