from fieldparam.validators.normalizers import COERCIONS, coerce_type
from fieldparam.validators.rules import RULES, Rule, run_rules, call_validator
from fieldparam.validators.messages import render_message

__all__ = [
    "COERCIONS", "coerce_type",
    "RULES", "Rule", "run_rules", "call_validator",
    "render_message",
]
