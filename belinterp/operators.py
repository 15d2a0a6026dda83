"""Operators: expressions that compute a value from other expressions."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .errors import Panic
from .expression import (
    Array,
    Boolean,
    Expression,
    Number,
    String,
    Type,
    Void,
)


class _Operator(Expression):
    """Common behaviour of every operator."""

    type = Type.OPERATOR
    label = "Operator"

    def __str__(self) -> str:
        return f"Op({self.label})"


class Addition(_Operator):
    """Adds two numbers, or concatenates when either operand is a string."""

    label = "Addition"

    def __init__(self, first: Expression, second: Expression) -> None:
        self.first = first
        self.second = second

    def eval(self, env: Any) -> Expression:
        left = self.first.eval(env)
        right = self.second.eval(env)
        addable = (Type.NUMBER, Type.STRING)
        if left.type not in addable:
            raise Panic("ADDITION", "Left operand does not support addition.")
        if right.type not in addable:
            raise Panic("ADDITION", "Right operand does not support addition.")
        if isinstance(left, Number) and isinstance(right, Number):
            return left + right
        return String(str(left) + str(right))

    def clone(self) -> Expression:
        return Addition(self.first.clone(), self.second.clone())


def _index_of(number: Number) -> int:
    # Indices are read the way the textual form begins: the numerator.
    return number.value.numerator


class Assignment(_Operator):
    """Assigns a value to a declared name, or to an element of an array."""

    label = "Assignment"

    def __init__(
        self,
        name: str,
        assignment: Expression,
        args: Iterable[Expression] = (),
    ) -> None:
        self.name = name
        self.assignment = assignment
        self.args: list[Expression] = list(args)

    def _indices(self, env: Any) -> list[int]:
        indices = []
        for arg in self.args:
            value = arg.eval(env)
            if not isinstance(value, Number):
                raise Panic(
                    "ASSIGNMENT",
                    "At least one argument of the array does not contain a number.",
                )
            indices.append(_index_of(value))
        return indices

    def eval(self, env: Any) -> Expression:
        current = env.retrieve(self.name)
        if current is None:
            raise Panic(
                "ASSIGNMENT",
                f"Cannot assign value to a non-declared variable '{self.name}'.",
            )

        if self.args:
            if current.type != Type.REFERENCE:
                raise Panic(
                    "ASSIGNMENT",
                    "Cannot assign value to an array call not containing an array.",
                )
            indices = self._indices(env)
            value = self.assignment.eval(env)
            current.cast(Array).set(indices, value)
        else:
            value = self.assignment.eval(env)
            env.update(self.name, value)

        return value.clone()

    def clone(self) -> Expression:
        return Assignment(
            self.name, self.assignment.clone(), [arg.clone() for arg in self.args]
        )


class Block(_Operator):
    """Evaluates its content in a fresh inner scope."""

    label = "Block"

    def __init__(self, content: Expression) -> None:
        self.content = content

    def eval(self, env: Any) -> Expression:
        with env.scope():
            return self.content.eval(env)

    def clone(self) -> Expression:
        return Block(self.content.clone())


class Comparison(_Operator):
    """Tests two numbers, booleans or strings for equality."""

    label = "Comparison"

    def __init__(self, left: Expression, right: Expression) -> None:
        self.left = left
        self.right = right

    def eval(self, env: Any) -> Expression:
        first = self.left.eval(env)
        second = self.right.eval(env)
        for kind in (Number, Boolean, String):
            if isinstance(first, kind) and isinstance(second, kind):
                if kind is Number:
                    return Boolean(first == second)
                if kind is Boolean:
                    return Boolean(first.value == second.value)
                return Boolean(str(first) == str(second))
        raise Panic(
            "COMPARISON",
            "Cannot compare expressions, because they do not type match.",
        )

    def clone(self) -> Expression:
        return Comparison(self.left.clone(), self.right.clone())


class Declaration(_Operator):
    """Declares a name in the innermost scope, bound to void."""

    label = "Declaration"

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    def symbol_name(self) -> str:
        """The declared name."""
        return self.name

    def eval(self, env: Any) -> Expression:
        if not env.top.insert(self.name, Void()):
            raise Panic(
                "DECLARATION",
                f"Cannot declare same variable '{self.name}' in the same scope.",
            )
        return Void()

    def clone(self) -> Expression:
        return Declaration(self.name)


class Division(_Operator):
    """Divides one number by another."""

    label = "Division"

    def __init__(self, first: Expression, second: Expression) -> None:
        self.first = first
        self.second = second

    def eval(self, env: Any) -> Expression:
        left = self.first.eval(env)
        right = self.second.eval(env)
        if not isinstance(left, Number) or not isinstance(right, Number):
            raise Panic(
                "DIVISION",
                "Cannot apply division to operands, because one of them is not a number.",
            )
        return left / right

    def clone(self) -> Expression:
        return Division(self.first.clone(), self.second.clone())


class IfStatement(_Operator):
    """Evaluates one of two bodies depending on a boolean condition."""

    label = "If"

    def __init__(
        self,
        condition: Expression,
        if_body: Expression,
        else_body: Expression | None = None,
    ) -> None:
        self.condition = condition
        self.if_body = if_body
        self.else_body = else_body

    def eval(self, env: Any) -> Expression:
        outcome = self.condition.eval(env)
        if not isinstance(outcome, Boolean):
            raise Panic("IF", "Condition does not evaluate to a boolean.")
        if outcome.value:
            return self.if_body.eval(env)
        if self.else_body is not None:
            return self.else_body.eval(env)
        return Void()

    def clone(self) -> Expression:
        return IfStatement(
            self.condition.clone(),
            self.if_body.clone(),
            None if self.else_body is None else self.else_body.clone(),
        )


def _all_operators() -> Sequence[type[_Operator]]:
    return (Addition, Assignment, Block, Comparison, Declaration, Division, IfStatement)