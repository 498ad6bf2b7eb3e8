from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

from lark import Tree

from ..runtime import call_value
from ..types import NORMAL, ExecOutcome, Frame, LoxFunction, LoxNil, LoxRuntimeError, LoxValue
from ..tree import tree_children, tree_label
from .common import ident_token_value as _ident_token_value

if TYPE_CHECKING:
    from ..evaluator import Interpreter

logger = logging.getLogger(__name__)

def extract_param_names(params_node: Any) -> List[str]:
    if params_node is None:
        return []

    names: List[str] = []

    for p in tree_children(params_node):
        name = _ident_token_value(p)

        if name is None:
            raise LoxRuntimeError(f"Unsupported parameter node: {p!r}")
        names.append(name)

    return names

def eval_fun_decl(n: Tree, frame: Frame, interp: Interpreter) -> ExecOutcome:
    name_tok, params_node, body_node = n.children
    name = _ident_token_value(name_tok)

    if name is None or tree_label(body_node) != 'block':
        raise LoxRuntimeError("Malformed function declaration")

    params = tuple(extract_param_names(params_node))
    # capture the live frame and bind the name into it, so the body can
    # resolve itself and any sibling declared later in the same scope
    fn_value = LoxFunction(name=name, params=params, body=body_node, closure=frame)
    frame.define(name, fn_value)
    logger.debug("declared fn %s/%d", name, len(params))

    return NORMAL

def eval_call(n: Tree, frame: Frame, interp: Interpreter) -> LoxValue:
    callee_node, args_node = n.children
    callee = interp.evaluate(callee_node, frame)
    args = [interp.evaluate(a, frame) for a in tree_children(args_node)]

    result = call_value(callee, args, interp)

    return result if result is not None else LoxNil()
