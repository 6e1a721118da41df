"""
Coercion pipeline.
Each entry of COERCIONS takes (value, option) and returns the new value;
Param.parse applies them in the order the options were declared.
"""
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable

from dateutil import parser as dateutil_parser

from fieldparam.errors import ParamConfigError
from fieldparam.settings import get_settings
from fieldparam.utils import is_set

NAN = float("nan")


# ─── Scalar type coercions ────────────────────────────────────────────────────

def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return NAN
    raw = str(value).strip()
    if not raw:
        return NAN
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return NAN


def _to_float(value: Any) -> float:
    number = _to_number(value)
    try:
        return float(number)
    except OverflowError:
        return math.copysign(math.inf, number)


def _to_int(value: Any):
    number = _to_number(value)
    if isinstance(number, int):
        return number
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return NAN


def _to_bool(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return not (value == "false" or value == "0" or not value)


def _to_datetime(value: Any):
    """
    Numbers and long digit-only strings are epoch milliseconds; other strings
    go through dateutil. Naive results are taken as UTC. Unparseable -> None.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value is None or isinstance(value, bool):
        return None

    settings = get_settings()
    if isinstance(value, (int, float)):
        millis = value
    else:
        raw = str(value).strip()
        if raw.isdecimal() and len(raw) >= settings.epoch_min_digits:
            millis = int(raw)
        else:
            try:
                parsed = dateutil_parser.parse(raw, dayfirst=settings.date_dayfirst)
            except (ValueError, OverflowError):
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed

    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def _to_date(value: Any):
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = _to_datetime(value)
    return parsed.date() if parsed is not None else None


def _to_pattern(value: Any):
    if value is None or isinstance(value, re.Pattern):
        return value
    return re.compile(str(value), re.IGNORECASE)


def _to_object(value: Any):
    return {} if value is None else value


def _to_string(value: Any):
    if value is None or isinstance(value, str):
        return value
    return str(value)


SCALAR_COERCIONS: dict[Any, Callable[[Any], Any]] = {
    re.Pattern: _to_pattern,
    datetime: _to_datetime,
    date: _to_date,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    dict: _to_object,
    object: _to_object,
}


def is_list_marker(marker: Any) -> bool:
    return isinstance(marker, (list, tuple)) and len(marker) <= 1


def coerce_type(value: Any, marker: Any) -> Any:
    """Coerce value by type marker; [T] coerces element-wise."""
    if is_list_marker(marker):
        if not is_set(value):
            return value
        item_marker = marker[0] if marker else None
        items = value if isinstance(value, (list, tuple)) else [value]
        return [coerce_type(item, item_marker) for item in items]

    try:
        coerce = SCALAR_COERCIONS.get(marker, _to_string)
    except TypeError:  # unhashable marker
        coerce = _to_string
    return coerce(value)


# ─── Option coercions ─────────────────────────────────────────────────────────

def _callable_option(option_name: str) -> Callable[[Any, Any], Any]:
    def apply(value: Any, option: Any) -> Any:
        if not callable(option):
            raise ParamConfigError(f"`{option_name}` option must be callable")
        return option(value)
    return apply


def apply_default(value: Any, option: Any) -> Any:
    return value if is_set(value) else option


def _string_transform(fn: Callable[[str], str]) -> Callable[[Any, Any], Any]:
    def apply(value: Any, option: Any) -> Any:
        if not option:
            return value
        if isinstance(value, str):
            return fn(value)
        if isinstance(value, list):
            return [fn(item) if isinstance(item, str) else item for item in value]
        return value
    return apply


COERCIONS: dict[str, Callable[[Any, Any], Any]] = {
    "type": coerce_type,
    "set": _callable_option("set"),
    "get": _callable_option("get"),
    "default": apply_default,
    "trim": _string_transform(str.strip),
    "lowercase": _string_transform(str.lower),
    "uppercase": _string_transform(str.upper),
}
