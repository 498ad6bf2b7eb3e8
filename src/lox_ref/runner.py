from __future__ import annotations

import logging
from typing import Optional, TextIO

from .evaluator import Interpreter
from .parse_auto import parse_source
from .types import ExecOutcome

logger = logging.getLogger(__name__)

def run(
    src: str,
    interpreter: Optional[Interpreter]=None,
    out: Optional[TextIO]=None,
    grammar_path: Optional[str]=None,
) -> ExecOutcome:
    """Parse, lower and interpret `src`.

    Pass an `interpreter` to keep globals across runs or to inspect them
    afterwards; otherwise a fresh one writing to `out` is used.
    """
    program = parse_source(src, grammar_path=grammar_path)
    interp = interpreter if interpreter is not None else Interpreter(out=out)
    logger.debug("running %d chars of source", len(src))

    return interp.interpret(program)
