from __future__ import annotations

import json
from typing import Any, Iterable


def stringify_value(value: Any) -> str:
    """
    Text form of one extracted value.

    Strings are used verbatim; objects and arrays become compact JSON and any
    other scalar uses its JSON spelling (true, false, null, numbers). Integral
    floats print without a fraction, so 1.0 and 1 merge the same way.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return json.dumps(value, default=str)


def merge_extracted_values(values: Iterable[Any], separator: str = "") -> str:
    """
    Merge extracted values into a single string.

    Args:
        values: Values in the order they were extracted.
        separator: Text placed between values (default: plain concatenation).

    Returns:
        The concatenation of every stringified value, without trimming.
    """
    return separator.join(stringify_value(v) for v in values)
