from __future__ import annotations

from typing import TYPE_CHECKING

from lark import Tree

from ..types import NORMAL, ExecOutcome, Frame, Returning
from .helpers import is_truthy as _is_truthy

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_if_stmt(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    cond_node, then_node, else_node = n.children

    if _is_truthy(interp.evaluate(cond_node, frame)):
        return interp.execute(then_node, frame)

    if else_node is not None:
        return interp.execute(else_node, frame)

    return NORMAL

def eval_while_stmt(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    cond_node, body_node = n.children

    while _is_truthy(interp.evaluate(cond_node, frame)):
        outcome = interp.execute(body_node, frame)

        if isinstance(outcome, Returning):
            return outcome

    return NORMAL

def eval_return_stmt(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    value_node = n.children[0] if n.children else None

    if value_node is None:
        return Returning(None)

    return Returning(interp.evaluate(value_node, frame))
