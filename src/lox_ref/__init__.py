"""Tree-walking runtime for the Lox scripting language."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "evaluator",
    "runtime",
    "runner",
    "types",
]
