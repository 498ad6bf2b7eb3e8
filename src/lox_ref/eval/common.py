from __future__ import annotations

from typing import Any

from lark import Token

from ..types import LoxBool, LoxNil, LoxNumber, LoxString, LoxValue
from ..tree import is_token

def token_kind(node: Any) -> str | None:
    if not is_token(node):
        return None
    tok: Token = node
    return str(tok.type)

def ident_token_value(node: Any) -> str | None:
    if is_token(node) and token_kind(node) == 'IDENT':
        return str(node.value)

    return None

def token_number(token: Token) -> LoxNumber:
    return LoxNumber(float(token.value))

def token_string(token: Token) -> LoxString:
    raw = token.value

    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        raw = raw[1:-1]

    return LoxString(raw)

def stringify(value: LoxValue | None) -> str:
    """Text written by `print` for a value."""
    if isinstance(value, LoxString):
        return value.value

    if isinstance(value, LoxNumber):
        return repr(value)

    if isinstance(value, LoxBool):
        return "true" if value.value else "false"

    if value is None or isinstance(value, LoxNil):
        return "nil"

    return repr(value)
