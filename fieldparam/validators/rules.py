"""
Rule pipeline.
Rules run in RULES order against the coerced value and stop at the first
failure. A check returns None when the value passes, or a RuleFailure; checks
may be coroutines (the `validate` rule awaits user validators).
"""
import asyncio
import inspect
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Union

from fieldparam.models import ValidationResult
from fieldparam.utils import is_set
from fieldparam.validators.messages import message_tokens, render_message
from fieldparam.validators.options import (
    resolve_choices, resolve_flag, resolve_pattern, resolve_threshold, resolve_validators,
)
from fieldparam.logging_config import get_logger

logger = get_logger("rules")


@dataclass(frozen=True)
class RuleFailure:
    option: Any
    message: Optional[str] = None


CheckResult = Union[Optional[RuleFailure], Awaitable[Optional[RuleFailure]]]


@dataclass(frozen=True)
class Rule:
    name: str
    message: str
    check: Callable[[Any, Any], CheckResult]
    token: Optional[str] = None


# ─── Comparison helpers ───────────────────────────────────────────────────────

def _as_utc(value: Any) -> Any:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return value


def _align(value: Any, bound: Any) -> tuple[Any, Any]:
    """Bring date/datetime pairs onto aware UTC datetimes so they compare."""
    if isinstance(value, date) and isinstance(bound, date):
        if type(value) is type(bound) and not isinstance(value, datetime):
            return value, bound
        return _as_utc(value), _as_utc(bound)
    return value, bound


def _within(value: Any, bound: Any, compare: Callable[[Any, Any], bool]) -> bool:
    value, bound = _align(value, bound)
    try:
        return bool(compare(value, bound))
    except TypeError:
        return False


def _length(value: Any) -> int:
    try:
        return len(value)
    except TypeError:
        return len(str(value))


# ─── Checks ───────────────────────────────────────────────────────────────────

def check_required(value: Any, option: Any) -> Optional[RuleFailure]:
    opt = resolve_flag(option)
    if not opt.enabled or is_set(value):
        return None
    return RuleFailure(opt.enabled, opt.message)


def _bound_check(compare: Callable[[Any, Any], bool], measure: Callable[[Any], Any] = None):
    def check(value: Any, option: Any) -> Optional[RuleFailure]:
        opt = resolve_threshold(option)
        if opt.value is None or not is_set(value):
            return None
        measured = measure(value) if measure else value
        if _within(measured, opt.value, compare):
            return None
        return RuleFailure(opt.value, opt.message)
    return check


check_max = _bound_check(lambda v, b: v <= b)
check_min = _bound_check(lambda v, b: v >= b)
check_maxlength = _bound_check(lambda v, b: v <= b, _length)
check_minlength = _bound_check(lambda v, b: v >= b, _length)


def check_enum(value: Any, option: Any) -> Optional[RuleFailure]:
    if option is None:
        return None
    opt = resolve_choices(option)
    if not is_set(value):
        return None
    items = value if isinstance(value, list) else [value]
    if all(item in opt.values for item in items):
        return None
    return RuleFailure(list(opt.values), opt.message)


def check_match(value: Any, option: Any) -> Optional[RuleFailure]:
    opt = resolve_pattern(option)
    if opt.pattern is None or not is_set(value):
        return None
    items = value if isinstance(value, list) else [value]
    if all(opt.pattern.search(str(item)) for item in items):
        return None
    return RuleFailure(opt.pattern, opt.message)


def _takes_callback(fn: Callable) -> bool:
    """Callback-style validators declare (value, done) without defaults."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(positional) >= 2


async def call_validator(fn: Callable, value: Any) -> tuple[bool, Optional[str]]:
    """
    Run one custom validator and return (passed, override_message).
    Callback-style validators settle through done(passed, message=None), which
    may be invoked from any thread; only the first call counts. There is no
    timeout: a validator that never calls done never settles.
    """
    if not _takes_callback(fn):
        verdict = fn(value)
        if inspect.isawaitable(verdict):
            verdict = await verdict
        return bool(verdict), None

    loop = asyncio.get_running_loop()
    settled = loop.create_future()

    def _settle(passed: Any, message: Optional[str]):
        if not settled.done():
            settled.set_result((bool(passed), message))

    def done(passed: Any, message: Optional[str] = None):
        if loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(_settle, passed, message)
        except RuntimeError:  # loop closed between the check and the call
            pass

    returned = fn(value, done)
    if inspect.isawaitable(returned):
        await returned
    return await settled


async def check_validate(value: Any, option: Any) -> Optional[RuleFailure]:
    for spec in resolve_validators(option):
        passed, override = await call_validator(spec.validator, value)
        if not passed:
            return RuleFailure(spec.validator, override or spec.message)
    return None


RULES: tuple[Rule, ...] = (
    Rule("required", "{PATH} parameter is required", check_required, "REQUIRED"),
    Rule("max", "{PATH} parameter must be lower or equal to {MAX}", check_max, "MAX"),
    Rule("min", "{PATH} parameter must be greater or equal to {MIN}", check_min, "MIN"),
    Rule("maxlength", "{PATH} parameter must be at most {MAXLENGTH} characters long",
         check_maxlength, "MAXLENGTH"),
    Rule("minlength", "{PATH} parameter must be at least {MINLENGTH} characters long",
         check_minlength, "MINLENGTH"),
    Rule("enum", "{PATH} parameter must be one of: {ENUM}", check_enum, "ENUM"),
    Rule("match", "{PATH} parameter does not match {MATCH}", check_match, "MATCH"),
    Rule("validate", "{PATH} parameter is invalid", check_validate),
)


async def run_rules(param: str, options: dict, parsed: Any, raw: Any) -> ValidationResult:
    """
    Evaluate RULES against the coerced value; the first failure settles the
    result. Rules whose option is absent are skipped.
    """
    log = logger.bind(param=param)
    for rule in RULES:
        if rule.name not in options:
            continue
        failure = rule.check(parsed, options[rule.name])
        if inspect.isawaitable(failure):
            failure = await failure
        if failure is None:
            continue

        tokens = message_tokens(param, raw, rule.token, failure.option)
        message = render_message(failure.message or rule.message, tokens)
        log.debug("param_rule_failed", rule=rule.name, message=message)
        return ValidationResult(
            valid=False,
            param=param,
            value=raw,
            name=rule.name,
            option=failure.option,
            message=message,
        )

    log.debug("param_validated")
    return ValidationResult(valid=True, param=param, value=raw)
