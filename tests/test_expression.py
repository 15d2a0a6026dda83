from fractions import Fraction

import pytest

from belinterp.environment import Environment
from belinterp.errors import InterpreterError, Panic
from belinterp.expression import (
    Array,
    Boolean,
    Expression,
    Number,
    Reference,
    String,
    Symbol,
    Type,
    Void,
    type_to_string,
)


@pytest.mark.parametrize(
    "type_, name",
    [
        (Type.NONE, "No type"),
        (Type.ARRAY, "Array"),
        (Type.BOOLEAN, "Boolean"),
        (Type.OPERATOR, "Operator"),
        (Type.NUMBER, "Number"),
        (Type.VOID, "Void"),
        (Type.REFERENCE, "Unknown type"),
    ],
)
def test_type_to_string(type_, name):
    assert type_to_string(type_) == name


class _Bare(Expression):
    type = Type.OPERATOR

    def eval(self, env):
        return self

    def __str__(self):
        return "Op(Bare)"


def test_base_clone_raises():
    with pytest.raises(InterpreterError) as info:
        Expression.clone(_Bare())
    assert str(info.value) == (
        "Expression::clone: Cannot clone expression of type 'Operator'."
    )


def test_boolean_text_and_eval():
    original = Boolean(True)
    evaluated = original.eval(Environment())
    assert str(evaluated) == "true"
    assert evaluated is not original
    assert str(Boolean()) == "false"
    assert Boolean().type == Type.BOOLEAN


def test_number_addition_and_equality():
    assert Number(1) + Number(2) == Number(3)
    assert Number("1/2") + Number("1/2") == Number(1)
    assert Number("1.5").value == Fraction(3, 2)


def test_number_division_by_zero():
    with pytest.raises(Panic):
        Number(1) / Number(0)


def test_number_invalid_text():
    with pytest.raises(Panic):
        Number("abc")


def test_number_round_trip_through_text():
    for text in ["7", "3/4"]:
        assert str(Number(text)) == text


def test_string_length_and_clone():
    s = String("hello")
    copy = s.clone()
    assert str(copy) == "hello"
    assert len(copy) == len("hello")


def test_symbol_eval_looks_up_environment():
    env = Environment()
    env.top.insert("x", Number(5))
    assert Symbol("x").eval(env) == Number(5)


def test_symbol_eval_unknown_raises():
    with pytest.raises(Panic):
        Symbol("missing").eval(Environment())


def test_array_starts_with_voids():
    arr = Array(3)
    assert len(arr) == 3
    assert all(isinstance(arr.get([i]), Void) for i in range(3))


def test_array_set_and_get():
    arr = Array(2)
    arr.set([1], Boolean(True))
    assert str(arr.get([1])) == "true"
    assert str(Array(0)) == "[]"


def test_array_text():
    arr = Array(2)
    arr.set([0], Boolean(True))
    arr.set([1], Boolean(False))
    assert str(arr) == "[true, false]"


def test_array_out_of_range():
    with pytest.raises(Panic, match="Index out of range."):
        Array(2).get([2])
    with pytest.raises(Panic, match="Index out of range."):
        Array(2).set([5], Void())


def test_array_nested_access():
    arr = Array(2)
    arr.set([0], Array(3))
    arr.set([0, 2], Boolean(True))
    assert arr.get([0, 2]).value is True


def test_array_nested_on_non_array():
    with pytest.raises(Panic, match="not an array"):
        Array(2).get([0, 1])


def test_array_clone_is_independent():
    arr = Array(1)
    copy = arr.clone()
    copy.set([0], Boolean(True))
    assert len(copy) == 1
    assert str(copy.get([0])) == "true"
    assert arr.get([0]).type == Type.VOID


def test_reference_shares_target():
    target = Array(2)
    ref = Reference(target)
    copy = ref.eval(Environment())
    copy.cast(Array).set([0], Boolean(True))
    assert ref.deref() is target
    assert str(target.get([0])) == "true"


def test_reference_cast_wrong_type():
    with pytest.raises(Panic):
        Reference(String("x")).cast(Array)