from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from lark import Lark, Tree

from .config import get_grammar_path
from .lower import lower

logger = logging.getLogger(__name__)

def build_parser(grammar_text: str, start_sym: str = "program") -> Lark:
    return Lark(
        grammar_text,
        parser="lalr",
        lexer="contextual",
        start=start_sym,
        maybe_placeholders=True,
        propagate_positions=True,
    )

@lru_cache(maxsize=4)
def _cached_parser(grammar_path: str) -> Lark:
    with open(grammar_path, encoding="utf-8") as fh:
        grammar_text = fh.read()
    logger.debug("built parser from %s", grammar_path)
    return build_parser(grammar_text)

def make_parser(grammar_path: Optional[str] = None) -> Lark:
    return _cached_parser(str(get_grammar_path(grammar_path)))

def parse_source(src: str, grammar_path: Optional[str] = None) -> Tree:
    """Parse source text into the lowered `program` tree the evaluator consumes.

    Syntax errors surface as lark.UnexpectedInput.
    """
    tree = make_parser(grammar_path).parse(src)
    return lower(tree)
