import pytest

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
    copy_value,
    to_text,
    type_name,
)


def _dummy(env, args):
    return args


@pytest.mark.parametrize(
    "kind, name",
    [
        (LType.FUN, "Function"),
        (LType.NUM, "Number"),
        (LType.ERR, "Error"),
        (LType.SYM, "Symbol"),
        (LType.STR, "String"),
        (LType.SEXPR, "S-Expression"),
        (LType.QEXPR, "Q-Expression"),
    ],
)
def test_type_name(kind, name):
    assert type_name(kind) == name


def test_type_name_unknown():
    assert type_name(99) == "Unknown"


def test_kinds_of_values():
    assert Number(1).kind is LType.NUM
    assert Lambda(QExpr(), QExpr()).kind is LType.FUN
    assert Builtin(_dummy).kind is LType.FUN
    assert QExpr().kind is LType.QEXPR


def test_to_text_atoms():
    assert to_text(Number(-42)) == "-42"
    assert to_text(Symbol("foo")) == "foo"
    assert to_text(Error("bad")) == "Error: bad"
    assert to_text(Builtin(_dummy)) == "<builtin>"


def test_to_text_string_escapes():
    text = to_text(String('a\n\t\\"b'))
    assert text == '"a\\n\\t\\\\\\"b"'


def test_to_text_expressions():
    value = SExpr([Symbol("+"), Number(1), QExpr([Number(2), Number(3)])])
    assert to_text(value) == "(+ 1 {2 3})"
    assert to_text(QExpr()) == "{}"
    assert to_text(SExpr()) == "()"


def test_to_text_lambda():
    fn = Lambda(QExpr([Symbol("x")]), QExpr([Symbol("x")]))
    assert to_text(fn) == "(lambda {x} {x})"


def test_error_message_truncated():
    err = Error("x" * 2000)
    assert len(err.message) == 510


def test_copy_value_is_deep():
    original = QExpr([Number(1), QExpr([Symbol("a")])])
    clone = copy_value(original)
    assert clone == original
    clone.cells[1].cells.append(Number(5))
    clone.cells[0].num = 9
    assert original.cells[0].num == 1
    assert len(original.cells[1].cells) == 1


def test_copy_lambda_copies_env_but_keeps_parent():
    parent = Environment()
    fn = Lambda(QExpr([Symbol("x")]), QExpr([Symbol("x")]), Environment(parent))
    fn.env.put("y", Number(3))
    clone = copy_value(fn)
    assert clone.env is not fn.env
    assert clone.env.parent is parent
    clone.env.put("y", Number(4))
    assert fn.env.get("y") == Number(3)


def test_copy_builtin_shares_function():
    b = Builtin(_dummy, "dummy")
    clone = copy_value(b)
    assert clone.func is _dummy
    assert clone == b


def test_copy_value_rejects_foreign():
    with pytest.raises(TypeError):
        copy_value(42)


def test_env_get_unbound():
    env = Environment()
    result = env.get("missing")
    assert isinstance(result, Error)
    assert "missing" in result.message


def test_env_put_and_get_returns_copy():
    env = Environment()
    value = QExpr([Number(1)])
    env.put("v", value)
    value.cells.append(Number(2))
    got = env.get("v")
    assert got == QExpr([Number(1)])
    got.cells.clear()
    assert env.get(Symbol("v")) == QExpr([Number(1)])


def test_env_put_replaces():
    env = Environment()
    env.put("a", Number(1))
    env.put("a", Number(2))
    assert env.get("a") == Number(2)
    assert list(env.bindings) == ["a"]


def test_env_lookup_in_parent_and_shadowing():
    root = Environment()
    child = Environment(root)
    root.put("a", Number(1))
    assert child.get("a") == Number(1)
    child.put("a", Number(2))
    assert child.get("a") == Number(2)
    assert root.get("a") == Number(1)


def test_env_define_goes_to_root():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    leaf.define("g", String("hi"))
    assert "g" in root.bindings
    assert "g" not in leaf.bindings
    assert middle.get("g") == String("hi")


def test_env_copy_independent():
    root = Environment()
    env = Environment(root)
    env.put("a", Number(1))
    clone = env.copy()
    assert clone.parent is root
    clone.put("a", Number(7))
    assert env.get("a") == Number(1)
    assert clone.get("a") == Number(7)