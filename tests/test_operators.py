import pytest

from belinterp.environment import Environment
from belinterp.errors import Panic
from belinterp.expression import (
    Array,
    Boolean,
    Number,
    Reference,
    String,
    Symbol,
    Type,
    Void,
)
from belinterp.operators import (
    Addition,
    Assignment,
    Block,
    Comparison,
    Declaration,
    Division,
    IfStatement,
)


@pytest.fixture
def env():
    return Environment()


@pytest.mark.parametrize(
    "op, text",
    [
        (Addition(Number(1), Number(2)), "Op(Addition)"),
        (Assignment("x", Number(1)), "Op(Assignment)"),
        (Block(Void()), "Op(Block)"),
        (Comparison(Number(1), Number(2)), "Op(Comparison)"),
        (Declaration("x"), "Op(Declaration)"),
        (Division(Number(1), Number(2)), "Op(Division)"),
        (IfStatement(Boolean(True), Void()), "Op(If)"),
    ],
)
def test_textual_form_and_type(op, text):
    assert str(op) == text
    assert op.type == Type.OPERATOR
    assert str(op.clone()) == text


def test_addition_of_numbers(env):
    result = Addition(Number(2), Number(3)).eval(env)
    assert result.type == Type.NUMBER
    assert result == Number(5)


def test_addition_is_commutative_for_numbers(env):
    a = Addition(Number("1/3"), Number(4)).eval(env)
    b = Addition(Number(4), Number("1/3")).eval(env)
    assert a == b


def test_addition_concatenates_strings(env):
    result = Addition(String("ab"), String("cd")).eval(env)
    assert result.type == Type.STRING
    assert str(result) == "ab" + "cd"


def test_addition_number_and_string(env):
    result = Addition(Number(1), String("x")).eval(env)
    assert result.type == Type.STRING
    assert str(result) == str(Number(1)) + "x"


def test_addition_rejects_boolean(env):
    with pytest.raises(Panic) as info:
        Addition(Boolean(True), Number(1)).eval(env)
    assert info.value.category == "ADDITION"
    with pytest.raises(Panic) as info:
        Addition(Number(1), Boolean(True)).eval(env)
    assert "Right operand" in info.value.detail


def test_declaration_binds_void(env):
    result = Declaration("x").eval(env)
    assert result.type == Type.VOID
    assert env.retrieve("x").type == Type.VOID
    assert Declaration("x").symbol_name == "x"


def test_redeclaration_panics(env):
    Declaration("x").eval(env)
    with pytest.raises(Panic) as info:
        Declaration("x").eval(env)
    assert info.value.category == "DECLARATION"


def test_assignment_to_undeclared_panics(env):
    with pytest.raises(Panic):
        Assignment("missing", Number(1)).eval(env)


def test_assignment_updates_value(env):
    Declaration("x").eval(env)
    returned = Assignment("x", Number(7)).eval(env)
    assert returned == Number(7)
    assert env.retrieve("x") == Number(7)
    assert Symbol("x").eval(env) == Number(7)


def test_assignment_updates_outer_scope(env):
    Declaration("x").eval(env)
    Block(Assignment("x", String("inner"))).eval(env)
    assert str(env.retrieve("x")) == "inner"


def test_array_element_assignment(env):
    env.top.insert("a", Reference(Array(3)))
    returned = Assignment("a", String("v"), [Number(1)]).eval(env)
    assert str(returned) == "v"
    arr = env.retrieve("a").deref()
    assert str(arr.get([1])) == "v"
    assert arr.get([0]).type == Type.VOID


def test_array_assignment_on_non_reference_panics(env):
    Declaration("x").eval(env)
    with pytest.raises(Panic) as info:
        Assignment("x", Number(1), [Number(0)]).eval(env)
    assert info.value.category == "ASSIGNMENT"


def test_array_assignment_with_non_number_index_panics(env):
    env.top.insert("a", Reference(Array(2)))
    with pytest.raises(Panic) as info:
        Assignment("a", Number(1), [String("0")]).eval(env)
    assert info.value.category == "ASSIGNMENT"


def test_array_assignment_out_of_range_panics(env):
    env.top.insert("a", Reference(Array(2)))
    with pytest.raises(Panic) as info:
        Assignment("a", Number(1), [Number(2)]).eval(env)
    assert info.value.category == "ARRAY"


def test_block_scope_is_dropped(env):
    result = Block(Declaration("inner")).eval(env)
    assert result.type == Type.VOID
    assert env.top.exists("inner") is False
    with pytest.raises(Panic):
        env.retrieve("inner")


def test_block_returns_content_value(env):
    assert Block(Number(4)).eval(env) == Number(4)


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (Number(3), Number(3), True),
        (Number(3), Number(4), False),
        (Boolean(True), Boolean(True), True),
        (Boolean(True), Boolean(False), False),
        (String("a"), String("a"), True),
        (String("a"), String("b"), False),
    ],
)
def test_comparison(env, left, right, expected):
    result = Comparison(left, right).eval(env)
    assert isinstance(result, Boolean)
    assert result.value is expected


def test_comparison_type_mismatch_panics(env):
    with pytest.raises(Panic) as info:
        Comparison(Number(1), String("1")).eval(env)
    assert info.value.category == "COMPARISON"


def test_division_by_one_is_identity(env):
    assert Division(Number("5/7"), Number(1)).eval(env) == Number("5/7")


def test_division_by_self_equals_one(env):
    assert Division(Number(9), Number(9)).eval(env) == Number(1)


def test_division_by_zero_panics(env):
    with pytest.raises(Panic):
        Division(Number(1), Number(0)).eval(env)


def test_division_rejects_non_numbers(env):
    with pytest.raises(Panic) as info:
        Division(String("a"), Number(1)).eval(env)
    assert info.value.category == "DIVISION"


def test_if_true_takes_if_body(env):
    result = IfStatement(Boolean(True), String("yes"), String("no")).eval(env)
    assert str(result) == "yes"


def test_if_false_takes_else_body(env):
    result = IfStatement(Boolean(False), String("yes"), String("no")).eval(env)
    assert str(result) == "no"


def test_if_false_without_else_is_void(env):
    result = IfStatement(Boolean(False), String("yes")).eval(env)
    assert result.type == Type.VOID


def test_if_with_comparison_condition(env):
    cond = Comparison(Number(2), Number(2))
    assert str(IfStatement(cond, String("eq"), String("ne")).eval(env)) == "eq"


def test_if_non_boolean_condition_panics(env):
    with pytest.raises(Panic):
        IfStatement(Number(1), Void()).eval(env)


def test_clone_evaluates_the_same(env):
    op = Addition(Number(2), Division(Number(6), Number(3)))
    assert op.clone().eval(env) == op.eval(env)