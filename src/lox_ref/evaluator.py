from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional, TextIO

from lark import Token, Tree

from .config import get_max_call_depth
from .runtime import init_stdlib
from .types import (
    Builtins,
    ExecOutcome,
    Frame,
    LoxBool,
    LoxNil,
    LoxRuntimeError,
    LoxStackOverflow,
    LoxValue,
    NORMAL,
)
from .tree import Node, is_token, node_meta, tree_label

from .eval.blocks import eval_block, exec_statements
from .eval.common import stringify, token_number, token_string
from .eval.control import eval_if_stmt, eval_return_stmt, eval_while_stmt
from .eval.expr import eval_binary, eval_logical, eval_unary
from .eval.fn import eval_call, eval_fun_decl

logger = logging.getLogger(__name__)

StmtFunc = Callable[[Tree, Frame, 'Interpreter'], ExecOutcome]
ExprFunc = Callable[[Tree, Frame, 'Interpreter'], LoxValue]

# host frames budgeted for each nested Lox call
_HOST_FRAMES_PER_CALL = 40


def _maybe_attach_location(exc: LoxRuntimeError, node: Node) -> None:
    # innermost node wins; outer frames see the error already located
    if exc.meta is not None:
        return

    meta = node_meta(node)

    if meta is not None and getattr(meta, "line", None) is not None:
        exc.meta = meta


@contextmanager
def _host_stack_for(max_call_depth: int) -> Iterator[None]:
    """Raise the host recursion limit so `max_call_depth` calls fit, restoring it on exit."""
    previous = sys.getrecursionlimit()
    wanted = previous + max_call_depth * _HOST_FRAMES_PER_CALL

    sys.setrecursionlimit(wanted)
    logger.debug("host recursion limit %d -> %d", previous, wanted)

    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Interpreter:
    """Walks a lowered program tree.

    Owns the globals frame (natives pre-bound) and the per-run call depth;
    nothing else is shared between runs.
    """

    def __init__(self, out: Optional[TextIO]=None, max_call_depth: Optional[int]=None):
        init_stdlib()

        self.globals = Frame()
        for name, native in Builtins.natives.items():
            self.globals.define(name, native)

        self.out = out
        self.max_call_depth = max_call_depth if max_call_depth is not None else get_max_call_depth()
        self.call_depth = 0

    # ---------------- Public API ----------------

    def interpret(self, program: Tree | Iterable[Node]) -> ExecOutcome:
        """Run top-level statements in the globals frame.

        A top-level `return` stops the program and is reported as the outcome.
        """
        statements = program.children if isinstance(program, Tree) else list(program)
        logger.debug("interpreting %d top-level statements", len(statements))

        try:
            with _host_stack_for(self.max_call_depth):
                return exec_statements(statements, self.globals, self)
        except RecursionError:
            raise LoxStackOverflow(self.call_depth) from None

    def execute_block(self, statements: Iterable[Node], frame: Frame) -> ExecOutcome:
        return exec_statements(statements, frame, self)

    def execute(self, stmt: Node, frame: Frame) -> ExecOutcome:
        try:
            return self._execute_inner(stmt, frame)
        except LoxRuntimeError as e:
            _maybe_attach_location(e, stmt)
            raise

    def evaluate(self, expr: Node, frame: Frame) -> LoxValue:
        try:
            return self._evaluate_inner(expr, frame)
        except LoxRuntimeError as e:
            _maybe_attach_location(e, expr)
            raise

    def write(self, text: str) -> None:
        print(text, file=self.out)

    # ---------------- Core dispatch ----------------

    def _execute_inner(self, stmt: Node, frame: Frame) -> ExecOutcome:
        d = tree_label(stmt)
        handler = _STMT_DISPATCH.get(d) if d is not None else None

        if handler is None:
            raise LoxRuntimeError(f"Unknown statement: {d or stmt!r}")

        return handler(stmt, frame, self)

    def _evaluate_inner(self, expr: Node, frame: Frame) -> LoxValue:
        if is_token(expr):
            return _eval_token(expr)

        d = tree_label(expr)
        handler = _EXPR_DISPATCH.get(d) if d is not None else None

        if handler is None:
            raise LoxRuntimeError(f"Unknown expression: {d or expr!r}")

        return handler(expr, frame, self)

# ---------------- Statements ----------------

def _eval_exprstmt(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    interp.evaluate(n.children[0], frame)
    return NORMAL

def _eval_printstmt(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    interp.write(stringify(interp.evaluate(n.children[0], frame)))
    return NORMAL

def _eval_vardecl(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    name_tok, init_node = n.children
    value = interp.evaluate(init_node, frame) if init_node is not None else LoxNil()
    frame.define(str(name_tok), value)
    return NORMAL

# ---------------- Expressions ----------------

def _eval_token(t: Token) -> LoxValue:
    match t.type:
        case 'NUMBER':
            return token_number(t)
        case 'STRING':
            return token_string(t)
        case _:
            raise LoxRuntimeError(f"Unhandled token {t.type}:{t.value}")

def _eval_assign(n: Tree, frame: Frame, interp: Interpreter) -> LoxValue:
    name_tok, value_node = n.children
    value = interp.evaluate(value_node, frame)
    frame.assign(str(name_tok), value)
    return value

_STMT_DISPATCH: dict[str, StmtFunc] = {
    'exprstmt': _eval_exprstmt,
    'printstmt': _eval_printstmt,
    'vardecl': _eval_vardecl,
    'block': eval_block,
    'ifstmt': eval_if_stmt,
    'whilestmt': eval_while_stmt,
    'fundecl': eval_fun_decl,
    'returnstmt': eval_return_stmt,
}

_EXPR_DISPATCH: dict[str, ExprFunc] = {
    'true': lambda _, __, ___: LoxBool(True),
    'false': lambda _, __, ___: LoxBool(False),
    'nil': lambda _, __, ___: LoxNil(),
    'variable': lambda n, frame, _: frame.get(str(n.children[0])),
    'assign': _eval_assign,
    'grouping': lambda n, frame, interp: interp.evaluate(n.children[0], frame),
    'unary': eval_unary,
    'binary': eval_binary,
    'logical': eval_logical,
    'call': eval_call,
}
