"""
Param: one descriptor per field, holding its options and running the
coercion and rule pipelines over raw input.

    >>> age = Param("age", {"type": int, "min": [18, "too young"]})
    >>> age.parse("21")
    {'age': 21}
    >>> age.validate_sync(15).message
    'too young'
"""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Awaitable

from fieldparam.errors import ParamConfigError
from fieldparam.models import ValidationResult
from fieldparam.validators.normalizers import COERCIONS
from fieldparam.validators.rules import run_rules
from fieldparam.logging_config import get_logger

logger = get_logger("param")

_MISSING = object()


def _identity(value: Any) -> Any:
    return value


def infer_type(value: Any) -> Any:
    """Type marker implied by a bare default value."""
    if isinstance(value, list):
        return [infer_type(value[0]) if value else str]
    for marker in (bool, int, float, datetime, date):
        if isinstance(value, marker):
            return marker
    return str


def _is_type_marker(options: Any) -> bool:
    if isinstance(options, type) or callable(options):
        return True
    return isinstance(options, (list, tuple)) and len(options) == 1 and isinstance(options[0], type)


def normalize_options(options: Any) -> dict:
    """Fold the three constructor shapes (type marker, bare default, mapping) into a mapping."""
    if options is None:
        return {}
    if isinstance(options, Mapping):
        return dict(options)
    if _is_type_marker(options):
        return {"type": options}
    return {"default": options, "type": infer_type(options)}


class Param:
    """
    Options are read and written through option(); `set` and `get` start out
    as identity functions and run before any caller-declared coercion.
    """

    def __init__(self, name: str, options: Any = None):
        self.options: dict[str, Any] = {
            "set": _identity,
            "get": _identity,
            "name": name,
        }
        self.options.update(normalize_options(options))

    def __repr__(self):
        return f"Param({self.name!r}, {self.options!r})"

    @property
    def name(self) -> str:
        return self.options["name"]

    def option(self, name: str, value: Any = _MISSING) -> Any:
        """option(name) reads (None if absent); option(name, value) writes and returns self."""
        if value is not _MISSING:
            self.options[name] = value
            return self
        return self.options.get(name)

    def coerce(self, value: Any) -> Any:
        for option_name, option in list(self.options.items()):
            coerce = COERCIONS.get(option_name)
            if coerce is None:
                continue
            try:
                value = coerce(value, option)
            except ParamConfigError as e:
                logger.error("param_option_not_callable", param=self.name, option=option_name, error=str(e))
                raise
        return value

    def parse(self, value: Any = None) -> dict:
        """Return {name: coerced value}."""
        return {self.name: self.coerce(value)}

    def validate(self, value: Any = None) -> Awaitable[ValidationResult]:
        """
        Coerce now (configuration errors raise here) and return an awaitable
        that settles to a ValidationResult. Failures are results, not exceptions.
        """
        parsed = self.coerce(value)
        return run_rules(self.name, dict(self.options), parsed, value)

    def validate_sync(self, value: Any = None) -> ValidationResult:
        return asyncio.run(self.validate(value))
