from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from .types import (
    Builtins,
    LoxArityMismatch,
    LoxCallable,
    LoxFunction,
    LoxNotCallable,
    LoxStackOverflow,
    LoxValue,
    NativeFn,
    NativeFunction,
    Returning,
    is_callable_value,
)

if TYPE_CHECKING:
    from .evaluator import Interpreter

logger = logging.getLogger(__name__)

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_native hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("lox_ref.stdlib")
    _STDLIB_INITIALIZED = True

def register_native(name: str, *, arity: int) -> Callable[[NativeFn], NativeFn]:
    def dec(fn: NativeFn) -> NativeFn:
        Builtins.natives[name] = NativeFunction(name=name, arity=arity, fn=fn)
        logger.debug("registered native %s/%d", name, arity)
        return fn

    return dec

def callable_arity(fn: LoxCallable) -> int:
    match fn:
        case NativeFunction(arity=arity):
            return arity
        case LoxFunction(params=params):
            return len(params)
        case _:
            raise LoxNotCallable(fn)

def invoke(fn: LoxCallable, interp: Interpreter, args: List[LoxValue]) -> Optional[LoxValue]:
    """Run a callable whose arity has already been checked."""
    match fn:
        case NativeFunction():
            return fn.fn(interp, args)
        case LoxFunction():
            return _call_lox_fn(fn, interp, args)
        case _:
            raise LoxNotCallable(fn)

def _call_lox_fn(fn: LoxFunction, interp: Interpreter, args: List[LoxValue]) -> Optional[LoxValue]:
    # parent is the captured frame, not the caller's: lexical scoping
    callee_frame = fn.closure.child()

    for name, val in zip(fn.params, args):
        callee_frame.define(name, val)

    outcome = interp.execute_block(fn.body.children, callee_frame)

    match outcome:
        case Returning(value=value):
            return value
        case _:
            return None

def call_value(callee: LoxValue, args: List[LoxValue], interp: Interpreter) -> Optional[LoxValue]:
    if not is_callable_value(callee):
        raise LoxNotCallable(callee)

    expected = callable_arity(callee)
    if len(args) != expected:
        raise LoxArityMismatch(expected, len(args))

    if interp.call_depth >= interp.max_call_depth:
        logger.debug("call depth limit %d hit calling %r", interp.max_call_depth, callee)
        raise LoxStackOverflow(interp.max_call_depth)

    interp.call_depth += 1

    try:
        return invoke(callee, interp, args)
    except RecursionError:
        logger.debug("host stack exhausted at call depth %d", interp.call_depth)
        raise LoxStackOverflow(interp.call_depth) from None
    finally:
        interp.call_depth -= 1
