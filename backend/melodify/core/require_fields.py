"""Field Presence: pure checks for required request fields.

Invariants:
    - A field is missing when absent, None, or the empty string
    - Result order follows the `required` argument (stable error messages)
"""

from collections.abc import Iterable, Mapping
from typing import Any


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def find_missing_fields(
    payload: Mapping[str, Any], required: Iterable[str],
) -> list[str]:
    """Return the names in `required` that payload lacks."""
    return [name for name in required if is_blank(payload.get(name))]
