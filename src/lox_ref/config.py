from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


# Resolve installation dir (lox_ref package directory)
_LOX_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_GRAMMAR = _LOX_DIR / 'grammar.lark'
_DEFAULT_MAX_CALL_DEPTH = 200


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_call_depth() -> int:
    return int_from_env('LOX_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def get_grammar_path(override: Optional[str] = None) -> Path:
    if override:
        return Path(override)
    raw = os.environ.get('LOX_GRAMMAR_PATH')
    if raw and raw.strip():
        return Path(raw.strip())
    return _DEFAULT_GRAMMAR
