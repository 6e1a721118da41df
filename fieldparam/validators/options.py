"""
Option-shape resolvers.
Rule options arrive in several shapes (bare value, [value, message] pair,
message string, mapping); each resolver turns one shape family into a single
tagged variant so the rules never branch on raw option shapes.
"""
import re
from collections.abc import Mapping
from typing import Any

from fieldparam.errors import ParamConfigError
from fieldparam.models import (
    ChoicesOption, FlagOption, PatternOption, ThresholdOption, ValidatorSpec,
)

SEQUENCE_TYPES = (list, tuple)


def _is_pair(option: Any) -> bool:
    return isinstance(option, SEQUENCE_TYPES) and len(option) == 2


def _mapping_message(option: Mapping):
    return option.get("msg") or option.get("message")


def resolve_flag(option: Any) -> FlagOption:
    """`"msg"` enables the rule with that message; `[flag, msg]`; else the bare flag."""
    if isinstance(option, str):
        return FlagOption(enabled=True, message=option)
    if _is_pair(option):
        return FlagOption(enabled=option[0], message=option[1])
    if isinstance(option, Mapping):
        return FlagOption(enabled=option.get("value", True), message=_mapping_message(option))
    return FlagOption(enabled=option)


def resolve_threshold(option: Any) -> ThresholdOption:
    if _is_pair(option):
        return ThresholdOption(value=option[0], message=option[1])
    if isinstance(option, Mapping):
        return ThresholdOption(value=option.get("value"), message=_mapping_message(option))
    return ThresholdOption(value=option)


def resolve_choices(option: Any) -> ChoicesOption:
    """
    Enumerations are lists themselves, so a pair only counts as
    [values, message] when its first element is a collection.
    """
    if isinstance(option, Mapping):
        values = option.get("values", option.get("value"))
        return ChoicesOption(values=tuple(values or ()), message=_mapping_message(option))
    if _is_pair(option) and isinstance(option[0], (list, tuple, set, frozenset)):
        return ChoicesOption(values=tuple(option[0]), message=option[1])
    if option is None:
        return ChoicesOption(values=())
    if isinstance(option, str):
        return ChoicesOption(values=(option,))
    return ChoicesOption(values=tuple(option))


def _compile(pattern: Any):
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(str(pattern))


def resolve_pattern(option: Any) -> PatternOption:
    if _is_pair(option):
        return PatternOption(pattern=_compile(option[0]), message=option[1])
    if isinstance(option, Mapping):
        return PatternOption(pattern=_compile(option.get("value")), message=_mapping_message(option))
    return PatternOption(pattern=_compile(option))


def _resolve_validator(entry: Any) -> ValidatorSpec:
    if callable(entry):
        return ValidatorSpec(validator=entry)
    if isinstance(entry, Mapping) and callable(entry.get("validator")):
        return ValidatorSpec(validator=entry["validator"], message=_mapping_message(entry))
    if isinstance(entry, SEQUENCE_TYPES) and entry and callable(entry[0]):
        return ValidatorSpec(validator=entry[0], message=entry[1] if len(entry) > 1 else None)
    raise ParamConfigError(f"cannot use {entry!r} as a validator")


def resolve_validators(option: Any) -> list[ValidatorSpec]:
    """
    Accepts a callable, a [callable, message] pair, a {validator, msg} mapping,
    or a list of any of those (evaluated in order).
    """
    if option is None:
        return []
    if callable(option) or isinstance(option, Mapping):
        return [_resolve_validator(option)]
    if _is_pair(option) and callable(option[0]) and (option[1] is None or isinstance(option[1], str)):
        return [_resolve_validator(option)]
    return [_resolve_validator(entry) for entry in option]
