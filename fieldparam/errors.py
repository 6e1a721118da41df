"""
Exception hierarchy.

Validation failures are returned as ValidationResult values; these exceptions
cover misconfiguration and the opt-in raise_for_status() path.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldparam.models import ValidationResult


class ParamError(Exception):
    pass


class ParamConfigError(ParamError, TypeError):
    """An option holds a value its consumer cannot use (e.g. `set` is not callable)."""


class ParamValidationError(ParamError):
    def __init__(self, result: "ValidationResult"):
        super().__init__(result.message)
        self.result = result
