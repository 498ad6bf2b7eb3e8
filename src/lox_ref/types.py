from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

from lark import Tree

# ---------- Value Model ----------

@dataclass(frozen=True)
class LoxNil:
    def __repr__(self) -> str:
        return "nil"

@dataclass(frozen=True)
class LoxBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True)
class LoxNumber:
    value: float
    def __repr__(self) -> str:
        v = self.value
        if v == 0 and math.copysign(1.0, v) < 0:
            return "-0"
        return str(int(v)) if v.is_integer() and abs(v) < 1e16 else str(v)

@dataclass(frozen=True)
class LoxString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

NativeFn = Callable[['Interpreter', List['LoxValue']], Optional['LoxValue']]

@dataclass(frozen=True)
class NativeFunction:
    name: str
    arity: int
    fn: NativeFn = field(compare=False)
    def __repr__(self) -> str:
        return "<native fn>"

@dataclass(frozen=True, eq=False)
class LoxFunction:
    name: str
    params: Tuple[str, ...]
    body: Tree                   # block node
    closure: 'Frame'             # frame active at declaration, shared not copied
    def __repr__(self) -> str:
        return f"<fn {self.name}>"

LoxCallable: TypeAlias = NativeFunction | LoxFunction

LoxValue: TypeAlias = (
    LoxNil
    | LoxBool
    | LoxNumber
    | LoxString
    | NativeFunction
    | LoxFunction
)

def is_callable_value(value: object) -> TypeGuard[LoxCallable]:
    return isinstance(value, (NativeFunction, LoxFunction))

# ---------- Statement outcome ----------

@dataclass(frozen=True)
class Normal:
    """Statement ran to completion; execution continues with the next one."""

@dataclass(frozen=True)
class Returning:
    """A `return` fired; enclosing blocks stop and hand this to the call boundary.

    `value` is None for a bare `return;`.
    """
    value: Optional[LoxValue] = None

ExecOutcome: TypeAlias = Normal | Returning

NORMAL = Normal()

# ---------- Scope frames ----------

class Frame:
    """One lexical scope: the names declared directly in a block or call,
    plus a link to the enclosing scope.

    Frames are shared by reference. Every closure and nested block created
    while a frame is active points at that same object, so an assignment made
    through any of them is seen by all the others.
    """

    __slots__ = ("parent", "vars")

    def __init__(self, parent: Optional['Frame']=None):
        self.parent = parent
        self.vars: Dict[str, LoxValue] = {}

    def define(self, name: str, val: LoxValue) -> None:
        self.vars[name] = val

    def resolve(self, name: str) -> Optional['Frame']:
        """Nearest frame in the chain that binds `name`, or None."""
        cur: Optional[Frame] = self

        while cur is not None:
            if name in cur.vars:
                return cur

            cur = cur.parent

        return None

    def get(self, name: str) -> LoxValue:
        owner = self.resolve(name)

        if owner is None:
            raise LoxUndefinedVariable(name)

        return owner.vars[name]

    def assign(self, name: str, val: LoxValue) -> None:
        owner = self.resolve(name)

        if owner is None:
            raise LoxUndefinedVariable(name)

        owner.vars[name] = val

    def child(self) -> 'Frame':
        return Frame(parent=self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __repr__(self) -> str:
        chain = []
        cur: Optional[Frame] = self

        while cur is not None:
            chain.append("{" + ", ".join(f"{k}: {v!r}" for k, v in cur.vars.items()) + "}")
            cur = cur.parent

        return "<Frame " + " -> ".join(chain) + ">"

# ---------- Exceptions ----------

class LoxRuntimeError(Exception):
    meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class LoxUndefinedVariable(LoxRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name

class LoxArityMismatch(LoxRuntimeError):
    def __init__(self, expected: int, got: int):
        super().__init__(f"Expected {expected} arguments but got {got}")
        self.expected = expected
        self.got = got

class LoxNotCallable(LoxRuntimeError):
    def __init__(self, value: LoxValue):
        super().__init__(f"Can only call functions; got {value!r}")
        self.value = value

class LoxTypeMismatch(LoxRuntimeError):
    def __init__(self, op: str, operands: Tuple[LoxValue, ...], expected: str):
        rendered = ", ".join(repr(v) for v in operands)
        super().__init__(f"Operands of '{op}' must be {expected}; got {rendered}")
        self.op = op
        self.operands = operands

class LoxStackOverflow(LoxRuntimeError):
    def __init__(self, depth: int):
        super().__init__(f"Stack overflow: call depth exceeded {depth}")
        self.depth = depth

class Builtins:
    # filled once by register_native when lox_ref.stdlib is imported, then
    # read only; each Interpreter copies these into its own globals frame
    natives: Dict[str, NativeFunction] = {}
