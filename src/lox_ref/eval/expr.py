from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lark import Token, Tree

from ..types import (
    Frame,
    LoxBool,
    LoxNumber,
    LoxRuntimeError,
    LoxString,
    LoxTypeMismatch,
    LoxValue,
)
from .helpers import is_truthy, values_equal

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def as_op(x: Token | str) -> str:
    return str(x.value) if isinstance(x, Token) else str(x)

def eval_unary(n: Tree, frame: Frame, interp: Interpreter) -> LoxValue:
    op_node, rhs_node = n.children
    op = as_op(op_node)
    rhs = interp.evaluate(rhs_node, frame)

    match op:
        case '-':
            if not isinstance(rhs, LoxNumber):
                raise LoxTypeMismatch(op, (rhs,), "a number")
            return LoxNumber(-rhs.value)
        case '!':
            return LoxBool(not is_truthy(rhs))
        case _:
            raise LoxRuntimeError(f"Unknown unary operator {op}")

def eval_binary(n: Tree, frame: Frame, interp: Interpreter) -> LoxValue:
    lhs_node, op_node, rhs_node = n.children
    lhs = interp.evaluate(lhs_node, frame)
    rhs = interp.evaluate(rhs_node, frame)

    return apply_binary_operator(as_op(op_node), lhs, rhs)

def eval_logical(n: Tree, frame: Frame, interp: Interpreter) -> LoxValue:
    lhs_node, op_node, rhs_node = n.children
    op = as_op(op_node)
    lhs = interp.evaluate(lhs_node, frame)

    # short-circuit: the deciding operand is the result, not a coerced bool
    if op == 'or':
        if is_truthy(lhs):
            return lhs
    elif op == 'and':
        if not is_truthy(lhs):
            return lhs
    else:
        raise LoxRuntimeError(f"Unknown logical operator {op}")

    return interp.evaluate(rhs_node, frame)

def apply_binary_operator(op: str, lhs: LoxValue, rhs: LoxValue) -> LoxValue:
    match op:
        case '+':
            if isinstance(lhs, LoxNumber) and isinstance(rhs, LoxNumber):
                return LoxNumber(lhs.value + rhs.value)
            if isinstance(lhs, LoxString) and isinstance(rhs, LoxString):
                return LoxString(lhs.value + rhs.value)
            raise LoxTypeMismatch(op, (lhs, rhs), "two numbers or two strings")
        case '-':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxNumber(a - b)
        case '*':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxNumber(a * b)
        case '/':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxNumber(_divide(a, b))
        case '>':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxBool(a > b)
        case '>=':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxBool(a >= b)
        case '<':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxBool(a < b)
        case '<=':
            a, b = _require_numbers(op, lhs, rhs)
            return LoxBool(a <= b)
        case '==':
            return LoxBool(values_equal(lhs, rhs))
        case '!=':
            return LoxBool(not values_equal(lhs, rhs))
    raise LoxRuntimeError(f"Unknown operator {op}")

def _require_numbers(op: str, lhs: LoxValue, rhs: LoxValue) -> tuple[float, float]:
    if isinstance(lhs, LoxNumber) and isinstance(rhs, LoxNumber):
        return lhs.value, rhs.value

    raise LoxTypeMismatch(op, (lhs, rhs), "numbers")

def _divide(a: float, b: float) -> float:
    # IEEE-754 semantics rather than ZeroDivisionError
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)

    return a / b
