"""
Data models: resolved option variants and the validation outcome.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from fieldparam.errors import ParamValidationError


# ─── Resolved rule options ───────────────────────────────────────────────────

@dataclass(frozen=True)
class FlagOption:
    """Boolean-style rule option (`required`)."""
    enabled: Any
    message: Optional[str] = None


@dataclass(frozen=True)
class ThresholdOption:
    """Bound-style rule option (`max`, `min`, `maxlength`, `minlength`)."""
    value: Any
    message: Optional[str] = None


@dataclass(frozen=True)
class ChoicesOption:
    values: tuple
    message: Optional[str] = None


@dataclass(frozen=True)
class PatternOption:
    pattern: Optional[re.Pattern]
    message: Optional[str] = None


@dataclass(frozen=True)
class ValidatorSpec:
    """One entry of the `validate` option."""
    validator: Callable
    message: Optional[str] = None


# ─── Outcome ─────────────────────────────────────────────────────────────────

class ValidationResult(BaseModel):
    """
    Settled outcome of Param.validate().

    `value` is the raw input, not the coerced one. On failure `name` is the
    failing rule and `option` its resolved option; `to_dict()` and item access
    expose that option under the rule name, e.g. result["min"] == 18.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    valid: bool
    param: str
    value: Any = None
    name: Optional[str] = None
    option: Any = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"valid": self.valid, "param": self.param, "value": self.value}
        if not self.valid:
            data["name"] = self.name
            data[self.name] = self.option
            data["message"] = self.message
        return data

    def __getitem__(self, key: str) -> Any:
        return self.to_dict()[key]

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_status(self) -> "ValidationResult":
        if not self.valid:
            raise ParamValidationError(self)
        return self
