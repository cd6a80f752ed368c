"""Evaluation of expressions and the built-in functions of the language."""

from __future__ import annotations

import operator
from typing import Callable

from qexlisp.values import (
    Builtin,
    Environment,
    Error,
    Lambda,
    LType,
    Number,
    QExpr,
    SExpr,
    String,
    Symbol,
    Value,
    copy_value,
    to_text,
    type_name,
)

LAMBDA_NAME = "\\\\"


class _Failure(Exception):
    """Raised inside a builtin to abandon it with an error value."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.error = Error(message)


def _require_count(name: str, args: SExpr, expected: int) -> None:
    got = len(args.cells)
    if got != expected:
        raise _Failure(
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {got}, Expected {expected}."
        )


def _require_some(name: str, args: SExpr) -> None:
    if not args.cells:
        raise _Failure(
            f"Function '{name}' passed incorrect number of arguments. "
            "Got 0, Expected 1."
        )


def _require_type(name: str, args: SExpr, index: int, kind: LType) -> None:
    got = args.cells[index].kind
    if got is not kind:
        raise _Failure(
            f"Function '{name}' passed incorrect type for argument {index}. "
            f"Got {type_name(got)}, Expected {type_name(kind)}."
        )


def _require_not_empty(name: str, args: SExpr, index: int) -> None:
    if not args.cells[index].cells:
        raise _Failure(f"Function '{name}' passed {{}} for argument {index}.")


def evaluate(env: Environment, value: Value) -> Value:
    """Evaluate value in env: symbols are looked up, S-expressions are called."""
    if isinstance(value, Symbol):
        return env.get(value)
    if isinstance(value, SExpr):
        return eval_sexpr(env, value)
    return value


def eval_sexpr(env: Environment, expr: SExpr) -> Value:
    """Evaluate every cell of expr, then apply the first to the rest."""
    cells = [evaluate(env, cell) for cell in expr.cells]
    for cell in cells:
        if isinstance(cell, Error):
            return cell
    if not cells:
        return SExpr()
    if len(cells) == 1:
        return cells[0]

    func, *rest = cells
    if func.kind is not LType.FUN:
        return Error(
            "S-Expression starts with incorrect type. "
            f"Got {type_name(func.kind)}, Expected {type_name(LType.FUN)}."
        )
    return call(env, func, SExpr(rest))


def call(env: Environment, func: Value, args: SExpr) -> Value:
    """Apply func to args; a lambda given too few arguments is returned partially applied."""
    if isinstance(func, Builtin):
        try:
            return func.func(env, args)
        except _Failure as failure:
            return failure.error
    if not isinstance(func, Lambda):
        raise TypeError(f"not a function: {func!r}")

    func = copy_value(func)
    formals = func.formals.cells
    remaining = list(args.cells)
    given, total = len(remaining), len(formals)

    while remaining:
        if not formals:
            return Error(
                "Function passed too many arguments. "
                f"Got {given}, Expected {total}."
            )
        sym = formals.pop(0)
        if sym.name == "&":
            if len(formals) != 1:
                return Error(
                    "Function format invalid. "
                    "Symbol '&' not followed by single symbol."
                )
            func.env.put(formals.pop(0), QExpr(remaining))
            break
        func.env.put(sym, remaining.pop(0))

    if formals and formals[0].name == "&":
        if len(formals) != 2:
            return Error(
                "Function format invalid. "
                "Symbol '&' not followed by single symbol for varargs."
            )
        formals.pop(0)
        func.env.put(formals.pop(0), QExpr())

    if formals:
        return func

    func.env.parent = env
    return evaluate(func.env, SExpr(copy_value(func.body).cells))


def _trunc_div(x: int, y: int) -> int:
    if y == 0:
        raise _Failure("Division By Zero.")
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


def _trunc_mod(x: int, y: int) -> int:
    if y == 0:
        raise _Failure("Division By Zero (Modulo).")
    return x - y * _trunc_div(x, y)


_ARITHMETIC: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _trunc_div,
    "%": _trunc_mod,
    # '^' has no folding step: the first argument is returned unchanged.
    "^": lambda x, _y: x,
}


def _arithmetic(op: str) -> Callable[[Environment, SExpr], Value]:
    fold = _ARITHMETIC[op]

    def builtin(env: Environment, args: SExpr) -> Value:
        for index, _cell in enumerate(args.cells):
            _require_type(op, args, index, LType.NUM)
        _require_some(op, args)
        first, *rest = (cell.num for cell in args.cells)
        if op == "-" and not rest:
            first = -first
        for operand in rest:
            first = fold(first, operand)
        return Number(first)

    return builtin


def _builtin_head(env: Environment, args: SExpr) -> Value:
    _require_count("head", args, 1)
    _require_type("head", args, 0, LType.QEXPR)
    _require_not_empty("head", args, 0)
    return QExpr(args.cells[0].cells[:1])


def _builtin_tail(env: Environment, args: SExpr) -> Value:
    _require_count("tail", args, 1)
    _require_type("tail", args, 0, LType.QEXPR)
    _require_not_empty("tail", args, 0)
    return QExpr(args.cells[0].cells[1:])


def _builtin_list(env: Environment, args: SExpr) -> Value:
    return QExpr(list(args.cells))


def _builtin_eval(env: Environment, args: SExpr) -> Value:
    _require_count("eval", args, 1)
    _require_type("eval", args, 0, LType.QEXPR)
    return evaluate(env, SExpr(args.cells[0].cells))


def _builtin_join(env: Environment, args: SExpr) -> Value:
    for index, _cell in enumerate(args.cells):
        _require_type("join", args, index, LType.QEXPR)
    _require_some("join", args)
    return QExpr([item for qexpr in args.cells for item in qexpr.cells])


def _builtin_cons(env: Environment, args: SExpr) -> Value:
    _require_count("cons", args, 2)
    _require_type("cons", args, 1, LType.QEXPR)
    head, rest = args.cells
    return QExpr([head, *rest.cells])


def _builtin_len(env: Environment, args: SExpr) -> Value:
    _require_count("len", args, 1)
    _require_type("len", args, 0, LType.QEXPR)
    return Number(len(args.cells[0].cells))


def _builtin_init(env: Environment, args: SExpr) -> Value:
    _require_count("init", args, 1)
    _require_type("init", args, 0, LType.QEXPR)
    _require_not_empty("init", args, 0)
    return QExpr(args.cells[0].cells[:-1])


def _variable(name: str, bind: Callable[[Environment, Symbol, Value], None]):
    def builtin(env: Environment, args: SExpr) -> Value:
        _require_some(name, args)
        _require_type(name, args, 0, LType.QEXPR)
        symbols = args.cells[0].cells
        for sym in symbols:
            if not isinstance(sym, Symbol):
                raise _Failure(
                    f"Function '{name}' cannot define non-symbol. "
                    f"Got {type_name(sym.kind)}, Expected {type_name(LType.SYM)}."
                )
        values = args.cells[1:]
        if len(symbols) != len(values):
            raise _Failure(
                f"Function '{name}' passed too many arguments for symbols. "
                f"Got {len(symbols)}, Expected {len(values)}."
            )
        for sym, value in zip(symbols, values):
            bind(env, sym, value)
        return SExpr()

    return builtin


def _builtin_lambda(env: Environment, args: SExpr) -> Value:
    _require_count(LAMBDA_NAME, args, 2)
    _require_type(LAMBDA_NAME, args, 0, LType.QEXPR)
    _require_type(LAMBDA_NAME, args, 1, LType.QEXPR)
    formals, body = args.cells
    for sym in formals.cells:
        if not isinstance(sym, Symbol):
            raise _Failure(
                "Cannot define non-symbol. "
                f"Got {type_name(sym.kind)}, Expected {type_name(LType.SYM)}."
            )
    return Lambda(formals, body)


_ORDERINGS: dict[str, Callable[[int, int], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def _ordering(op: str) -> Callable[[Environment, SExpr], Value]:
    compare = _ORDERINGS[op]

    def builtin(env: Environment, args: SExpr) -> Value:
        _require_count(op, args, 2)
        _require_type(op, args, 0, LType.NUM)
        _require_type(op, args, 1, LType.NUM)
        left, right = args.cells
        return Number(int(compare(left.num, right.num)))

    return builtin


def values_equal(x: Value, y: Value) -> bool:
    """Return True when x and y are structurally equal values."""
    if x.kind is not y.kind:
        return False
    if isinstance(x, Number):
        return x.num == y.num
    if isinstance(x, Error):
        return x.message == y.message
    if isinstance(x, Symbol):
        return x.name == y.name
    if isinstance(x, String):
        return x.text == y.text
    if isinstance(x, Builtin) or isinstance(y, Builtin):
        return isinstance(x, Builtin) and isinstance(y, Builtin) and x.func is y.func
    if isinstance(x, Lambda):
        return values_equal(x.formals, y.formals) and values_equal(x.body, y.body)
    if len(x.cells) != len(y.cells):
        return False
    return all(values_equal(a, b) for a, b in zip(x.cells, y.cells))


def _equality(op: str, negate: bool) -> Callable[[Environment, SExpr], Value]:
    def builtin(env: Environment, args: SExpr) -> Value:
        _require_count(op, args, 2)
        left, right = args.cells
        return Number(int(values_equal(left, right) != negate))

    return builtin


def _builtin_if(env: Environment, args: SExpr) -> Value:
    _require_count("if", args, 3)
    _require_type("if", args, 0, LType.NUM)
    _require_type("if", args, 1, LType.QEXPR)
    _require_type("if", args, 2, LType.QEXPR)
    condition, when_true, when_false = args.cells
    branch = when_true if condition.num else when_false
    return evaluate(env, SExpr(branch.cells))


def _builtin_print(env: Environment, args: SExpr) -> Value:
    print(" ".join(to_text(cell) for cell in args.cells))
    return SExpr()


def _builtin_error(env: Environment, args: SExpr) -> Value:
    _require_count("error", args, 1)
    _require_type("error", args, 0, LType.STR)
    return Error(args.cells[0].text)


_BUILTINS: list[tuple[str, Callable[[Environment, SExpr], Value]]] = [
    ("list", _builtin_list),
    ("head", _builtin_head),
    ("tail", _builtin_tail),
    ("eval", _builtin_eval),
    ("join", _builtin_join),
    ("cons", _builtin_cons),
    ("len", _builtin_len),
    ("init", _builtin_init),
    *((op, _arithmetic(op)) for op in _ARITHMETIC),
    ("def", _variable("def", Environment.define)),
    ("=", _variable("=", Environment.put)),
    (LAMBDA_NAME, _builtin_lambda),
    *((op, _ordering(op)) for op in _ORDERINGS),
    ("==", _equality("==", negate=False)),
    ("!=", _equality("!=", negate=True)),
    ("if", _builtin_if),
    ("print", _builtin_print),
    ("error", _builtin_error),
]


def add_builtins(env: Environment) -> None:
    """Bind every built-in function into env."""
    for name, func in _BUILTINS:
        env.put(name, Builtin(func, name))


def default_environment() -> Environment:
    """Return a new top-level environment holding all builtins."""
    env = Environment()
    add_builtins(env)
    return env