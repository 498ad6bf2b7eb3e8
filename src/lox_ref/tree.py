"""Shared helpers for working with the Lark Tree/Token nodes the evaluator walks."""
from __future__ import annotations
from typing import List, Optional
from typing_extensions import TypeAlias, TypeGuard

from lark import Token, Tree


Node: TypeAlias = Tree | Token


def is_tree(node: object) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: object) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: object) -> Optional[str]:
    return node.data if is_tree(node) else None

def tree_children(node: object) -> List[Node]:
    if not is_tree(node):
        return []

    children = getattr(node, "children", None)
    if children is None:
        return []

    return list(children)

def node_meta(node: object) -> Optional[object]:
    """Position info for a node, or None when the producer recorded none."""
    if is_token(node):
        return node if getattr(node, "line", None) is not None else None

    meta = getattr(node, "meta", None)
    if meta is None or getattr(meta, "empty", True):
        return None

    return meta
