from __future__ import annotations

from typing import List, Optional

from lark import Transformer, Tree

from .tree import Node, tree_children


class Lower(Transformer):
    """Runtime lowering pass: rewrites surface sugar into the core statement set."""

    def forstmt(self, c: List[Optional[Node]]) -> Tree:
        # c = [forinit, cond | None, incr | None, body]
        init, cond, incr, body = c
        body_stmts: List[Node] = [body]

        if incr is not None:
            body_stmts.append(Tree('exprstmt', [incr]))

        loop = Tree('whilestmt', [
            cond if cond is not None else Tree('true', []),
            Tree('block', body_stmts),
        ])

        return Tree('block', tree_children(init) + [loop])


def lower(ast: Tree) -> Tree:
    return Lower().transform(ast)
