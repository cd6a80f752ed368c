# qexlisp

The core of a small Lisp interpreter, written as a library. Programs are
built from integers, symbols, strings, S-expressions, which are evaluated
as calls, and Q-expressions, which are quoted lists. A Q-expression stays
as data until it is evaluated on purpose.

## Modules

### `qexlisp.values`

- Value classes: `Number`, `Error`, `Symbol`, `String`, `Builtin`,
  `Lambda`, `SExpr` and `QExpr`. Each one has a `kind`, which is a
  member of the `LType` enum.
- `type_name(kind)` returns the readable name of a kind, for example
  `"Number"` or `"Q-Expression"`.
- `copy_value(value)` returns a deep copy of a value. A copied builtin
  still uses the same Python function.
- `to_text(value)` renders a value the way the interpreter prints it.
  Strings are quoted and escaped, S-expressions are shown in `( )`,
  Q-expressions in `{ }`, builtins as `<builtin>`, lambdas as
  `(lambda {formals} {body})`, and errors start with `Error: `.
- `Environment(parent=None)` maps names to values.
  - `get(name)` returns a copy of the bound value, looking through parent
    environments too. If the name is not bound anywhere, it returns an
    `Error`.
  - `put(name, value)` binds a copy of the value in this environment.
  - `define(name, value)` binds it in the outermost environment.
  - `copy()` returns a new environment with the same parent and copied
    bindings.

### `qexlisp.evaluator`

- `evaluate(env, value)`: a symbol is looked up, an S-expression is
  evaluated, and any other value is returned unchanged.
- `eval_sexpr(env, expr)` evaluates every cell and returns the first error
  it finds. An empty expression evaluates to `()`, and a single cell
  evaluates to that cell. Otherwise the first cell is applied to the
  others.
- `call(env, func, args)` applies a `Builtin` or a `Lambda` to an
  `SExpr` of arguments.
- `values_equal(x, y)` is the structural equality used by `==` and `!=`.
- `add_builtins(env)` binds the built-in functions into an environment.
  `default_environment()` returns a new environment that already holds
  them.

```python
from qexlisp.evaluator import default_environment, evaluate
from qexlisp.values import Number, SExpr, Symbol, to_text

env = default_environment()
expr = SExpr([Symbol("+"), Number(1), Number(2), Number(3)])
print(to_text(evaluate(env, expr)))  # 6
```

## Builtins

| Group      | Names                                                      |
|------------|------------------------------------------------------------|
| Lists      | `list` `head` `tail` `eval` `join` `cons` `len` `init`     |
| Arithmetic | `+` `-` `*` `/` `%` `^`                                    |
| Variables  | `def` (outermost environment), `=` (current environment)   |
| Functions  | `\\` (lambda: formals and body, both Q-expressions)        |
| Comparison | `>` `<` `>=` `<=` `==` `!=`                                |
| Control    | `if` (a number condition and two Q-expression branches)    |
| Output     | `print` `error`                                            |

All numbers are integers. `/` and `%` round toward zero. Dividing by zero
or taking a modulo by zero gives an `Error`. A `-` with only one argument
negates it. `^` returns its first argument unchanged. Comparisons return
`1` or `0`. `print` writes its arguments to standard output, separated by
spaces, and returns `()`.

A lambda that gets fewer arguments than it has formals returns itself with
the given arguments already bound. A formal list such as `{x & rest}`
gathers the remaining arguments into a Q-expression.

## Errors

Errors in a Lisp program do not raise Python exceptions. They come back as
`Error` values and pass outward through the expressions that contain them.
Some causes are an unbound symbol, a wrong argument type or count, and an
S-expression whose first cell is not a function.

## What it does not do

This package does not read program text. It has no parser, so
expressions have to be built from the value classes. It has no `load`
builtin for running files, and no interactive prompt or command-line
program.