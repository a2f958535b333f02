"""Record payload construction from CLI input.

Translates repeated `--field key=value` options into the JSON payload sent
to the backend. Values that parse as JSON (numbers, booleans, lists) keep
their type; everything else is sent as a string.
"""

import json
from typing import Any, Iterable


def parse_value(raw: str) -> Any:
    """Decode a field value, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def build_payload(fields: Iterable[str], *, require: bool = True) -> dict[str, Any]:
    """
    Build a record payload from `key=value` strings.

    Args:
        fields: Iterable of field strings in the form `key=value`.
        require: If True, at least one field must be given.

    Returns:
        A dict mapping field names to decoded values, in input order.

    Raises:
        ValueError: If a field does not follow the `key=value` format, has
                    an empty key, or no fields were given while required.
    """
    payload: dict[str, Any] = {}

    for item in fields:
        if "=" not in item:
            raise ValueError(f"Invalid field: '{item}' (expected key=value)")

        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid field: '{item}' (empty key)")
        payload[key] = parse_value(value)

    if require and not payload:
        raise ValueError("At least one --field key=value is required")

    return payload
