from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from lark import Tree

from ..types import NORMAL, ExecOutcome, Frame, Returning
from ..tree import Node

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def exec_statements(statements: Iterable[Node], frame: Frame, interp: Interpreter) -> ExecOutcome:
    """Run statements in order inside `frame`, stopping at the first `Returning`."""
    for stmt in statements:
        outcome = interp.execute(stmt, frame)

        if isinstance(outcome, Returning):
            return outcome

    return NORMAL

def eval_block(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    return exec_statements(n.children, frame.child(), interp)
