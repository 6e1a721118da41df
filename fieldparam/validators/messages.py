"""
Failure message templating.
Tokens are upper-case and case-sensitive: {PATH}, {PARAM}, {VALUE} plus one
token per rule (e.g. {MAX}). Unknown tokens are left as written.
"""
import re
from datetime import date
from typing import Any, Mapping

TOKEN_RE = re.compile(r"\{([A-Z_]+)\}")


def format_token(value: Any) -> str:
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(format_token(v) for v in value)
    return str(value)


def render_message(template: Any, tokens: Mapping[str, Any]) -> str:
    def _sub(match: re.Match) -> str:
        key = match.group(1)
        if key not in tokens:
            return match.group(0)
        return format_token(tokens[key])

    return TOKEN_RE.sub(_sub, str(template))


def message_tokens(param: str, raw_value: Any, token: str = None, option: Any = None) -> dict:
    tokens = {"PATH": param, "PARAM": param, "VALUE": raw_value}
    if token:
        tokens[token] = option
    return tokens
