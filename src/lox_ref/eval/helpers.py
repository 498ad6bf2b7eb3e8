from __future__ import annotations

from ..types import LoxBool, LoxNil, LoxValue

def is_truthy(val: LoxValue) -> bool:
    match val:
        case LoxBool(value=b):
            return b
        case LoxNil():
            return False
        case _:
            return True

def values_equal(lhs: LoxValue, rhs: LoxValue) -> bool:
    # callables compare by identity; everything else structurally within a type
    if type(lhs) is not type(rhs):
        return False

    return lhs is rhs or lhs == rhs
