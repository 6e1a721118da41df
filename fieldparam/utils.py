"""
Shared "unset" predicates used by the default coercion and the required rule.
"""
import math
from typing import Any


def is_empty(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == ""


def is_nil(value: Any) -> bool:
    return value is None


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_set(value: Any) -> bool:
    """A value is set unless it is blank, None or NaN."""
    return not is_empty(value) and not is_nil(value) and not is_nan(value)
