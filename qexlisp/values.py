"""Value types, printing and environments for the interpreter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional, Union

# Error messages are formatted into a fixed-size buffer and cut short there.
_MAX_ERROR_LENGTH = 510

_STRING_ESCAPES = str.maketrans({
    "\n": "\\n",
    "\t": "\\t",
    "\\": "\\\\",
    '"': '\\"',
})


class LType(enum.Enum):
    """The kinds of value the interpreter knows."""

    ERR = "Error"
    NUM = "Number"
    SYM = "Symbol"
    STR = "String"
    FUN = "Function"
    SEXPR = "S-Expression"
    QEXPR = "Q-Expression"


@dataclass
class Number:
    """An integer value."""

    num: int
    kind: ClassVar[LType] = LType.NUM


@dataclass
class Error:
    """An error value carrying its message."""

    message: str
    kind: ClassVar[LType] = LType.ERR

    def __post_init__(self) -> None:
        self.message = self.message[:_MAX_ERROR_LENGTH]


@dataclass
class Symbol:
    """A name to be looked up in an environment."""

    name: str
    kind: ClassVar[LType] = LType.SYM


@dataclass
class String:
    """A string literal."""

    text: str
    kind: ClassVar[LType] = LType.STR


@dataclass
class Builtin:
    """A function implemented by the interpreter itself."""

    func: Callable[["Environment", "SExpr"], "Value"]
    name: str = ""
    kind: ClassVar[LType] = LType.FUN


@dataclass
class SExpr:
    """An expression that is evaluated as a call."""

    cells: list = field(default_factory=list)
    kind: ClassVar[LType] = LType.SEXPR


@dataclass
class QExpr:
    """A quoted expression, kept as data."""

    cells: list = field(default_factory=list)
    kind: ClassVar[LType] = LType.QEXPR


@dataclass
class Lambda:
    """A user-defined function with its own environment of bound arguments."""

    formals: QExpr
    body: QExpr
    env: "Environment" = field(default_factory=lambda: Environment(), compare=False)
    kind: ClassVar[LType] = LType.FUN


Value = Union[Number, Error, Symbol, String, Builtin, Lambda, SExpr, QExpr]


def _key(name: Union[str, Symbol]) -> str:
    return name.name if isinstance(name, Symbol) else name


class Environment:
    """A scope of named values, optionally chained to a parent scope."""

    def __init__(self, parent: Optional[Environment] = None) -> None:
        self.parent = parent
        self.bindings: dict[str, Value] = {}

    def get(self, name: Union[str, Symbol]) -> Value:
        """Return a copy of the value bound to name, searching parents."""
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.bindings:
                return copy_value(env.bindings[key])
            env = env.parent
        return Error(f"Unbound Symbol '{key}'")

    def put(self, name: Union[str, Symbol], value: Value) -> None:
        """Bind a copy of value to name in this scope."""
        self.bindings[_key(name)] = copy_value(value)

    def define(self, name: Union[str, Symbol], value: Value) -> None:
        """Bind a copy of value to name in the outermost scope."""
        env = self
        while env.parent is not None:
            env = env.parent
        env.put(name, value)

    def copy(self) -> Environment:
        """Return a new scope with copied bindings and the same parent."""
        new = Environment(self.parent)
        new.bindings = {k: copy_value(v) for k, v in self.bindings.items()}
        return new

    def __repr__(self) -> str:
        return f"Environment({list(self.bindings)!r})"


def type_name(kind: LType) -> str:
    """Return the human-readable name of a value kind."""
    if isinstance(kind, LType):
        return kind.value
    return "Unknown"


def copy_value(value: Value) -> Value:
    """Return a deep copy of value; builtins share their function."""
    if isinstance(value, Number):
        return Number(value.num)
    if isinstance(value, Error):
        return Error(value.message)
    if isinstance(value, Symbol):
        return Symbol(value.name)
    if isinstance(value, String):
        return String(value.text)
    if isinstance(value, Builtin):
        return Builtin(value.func, value.name)
    if isinstance(value, Lambda):
        return Lambda(copy_value(value.formals), copy_value(value.body), value.env.copy())
    if isinstance(value, SExpr):
        return SExpr([copy_value(c) for c in value.cells])
    if isinstance(value, QExpr):
        return QExpr([copy_value(c) for c in value.cells])
    raise TypeError(f"not an interpreter value: {value!r}")


def _cells_text(cells: list, open_: str, close: str) -> str:
    return open_ + " ".join(to_text(c) for c in cells) + close


def to_text(value: Value) -> str:
    """Render value the way the interpreter prints it."""
    if isinstance(value, Number):
        return str(value.num)
    if isinstance(value, Error):
        return f"Error: {value.message}"
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, String):
        return '"' + value.text.translate(_STRING_ESCAPES) + '"'
    if isinstance(value, Builtin):
        return "<builtin>"
    if isinstance(value, Lambda):
        return f"(lambda {to_text(value.formals)} {to_text(value.body)})"
    if isinstance(value, SExpr):
        return _cells_text(value.cells, "(", ")")
    if isinstance(value, QExpr):
        return _cells_text(value.cells, "{", "}")
    raise TypeError(f"not an interpreter value: {value!r}")