"""Values and the base classes of everything the interpreter evaluates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from fractions import Fraction
from typing import Any, Sequence, TypeVar

from .errors import InterpreterError, Panic


class Type(IntEnum):
    """The runtime type of an expression."""

    NONE = 0
    ARRAY = 1
    BOOLEAN = 2
    CLASS = 3
    ENVIRONMENT = 4
    FUNCTION = 5
    OPERATOR = 6
    REFERENCE = 7
    NUMBER = 8
    STRING = 9
    SYMBOL = 10
    VOID = 11
    PANIC = 12


_TYPE_NAMES = {
    Type.NONE: "No type",
    Type.ARRAY: "Array",
    Type.BOOLEAN: "Boolean",
    Type.CLASS: "Class",
    Type.ENVIRONMENT: "Environment",
    Type.FUNCTION: "Function",
    Type.OPERATOR: "Operator",
    Type.NUMBER: "Number",
    Type.STRING: "String",
    Type.SYMBOL: "Symbol",
    Type.VOID: "Void",
    Type.PANIC: "Panic",
}


def type_to_string(type_: Type) -> str:
    """Return the display name of a type."""
    return _TYPE_NAMES.get(type_, "Unknown type")


class Expression(ABC):
    """Anything that can be evaluated in an environment."""

    type: Type = Type.NONE

    @abstractmethod
    def eval(self, env: Any) -> Expression:
        """Evaluate in ``env`` and return a fresh result."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the textual form of the expression."""

    def clone(self) -> Expression:
        """Return an independent copy."""
        raise InterpreterError(
            "Expression::clone",
            f"Cannot clone expression of type '{type_to_string(self.type)}'.",
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Procedure(Expression):
    """An expression that can be applied to arguments."""

    @abstractmethod
    def formals_size(self) -> int:
        """Number of formal parameters, or -1 for any number."""

    @abstractmethod
    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        """Apply to unevaluated ``arguments`` in ``env``."""


class Void(Expression):
    """The absence of a value."""

    type = Type.VOID

    def eval(self, env: Any) -> Expression:
        return Void()

    def __str__(self) -> str:
        return "void"

    def clone(self) -> Expression:
        return Void()


class Boolean(Expression):
    """A truth value."""

    type = Type.BOOLEAN

    def __init__(self, value: bool = False) -> None:
        self.value = bool(value)

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def clone(self) -> Expression:
        return Boolean(self.value)


class Number(Expression):
    """An exact rational number."""

    type = Type.NUMBER

    def __init__(self, value: int | Fraction | str = 0) -> None:
        try:
            self.value = Fraction(value)
        except (ValueError, ZeroDivisionError, TypeError) as exc:
            raise Panic("NUMBER", f"Invalid number '{value}'.") from exc

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        if self.value.denominator == 1:
            return str(self.value.numerator)
        return f"{self.value.numerator}/{self.value.denominator}"

    def clone(self) -> Expression:
        return Number(self.value)

    def __add__(self, other: object) -> Number:
        if not isinstance(other, Number):
            return NotImplemented
        return Number(self.value + other.value)

    def __truediv__(self, other: object) -> Number:
        if not isinstance(other, Number):
            return NotImplemented
        if other.value == 0:
            raise Panic("NUMBER", "Division by zero.")
        return Number(self.value / other.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return int(self.value)


class String(Expression):
    """A piece of text."""

    type = Type.STRING

    def __init__(self, value: str = "") -> None:
        self.value = value

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        return self.value

    def clone(self) -> Expression:
        return String(self.value)

    def __len__(self) -> int:
        return len(self.value)


class Symbol(Expression):
    """A name that evaluates to the value bound to it."""

    type = Type.SYMBOL

    def __init__(self, name: str) -> None:
        self.name = name

    def eval(self, env: Any) -> Expression:
        return env.retrieve(self.name).clone()

    def __str__(self) -> str:
        return self.name

    def clone(self) -> Expression:
        return Symbol(self.name)


E = TypeVar("E", bound=Expression)


class Reference(Expression):
    """A handle to an expression shared by every copy of the handle."""

    type = Type.REFERENCE

    def __init__(self, target: Expression) -> None:
        self._target = target

    def deref(self) -> Expression:
        """Return the referenced expression itself."""
        return self._target

    def cast(self, cls: type[E]) -> E:
        """Return the referenced expression, which must be a ``cls``."""
        if not isinstance(self._target, cls):
            raise Panic(
                "REFERENCE",
                f"Referenced expression is not of type '{cls.__name__}'.",
            )
        return self._target

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        return str(self._target)

    def clone(self) -> Expression:
        return Reference(self._target)


class Array(Expression):
    """A fixed-length sequence of expressions, possibly nested."""

    type = Type.ARRAY

    def __init__(self, length: int = 0) -> None:
        self._content: list[Expression] = [Void() for _ in range(length)]

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self._content) + "]"

    def clone(self) -> Expression:
        copy = Array()
        copy._content = [item.clone() for item in self._content]
        return copy

    def __len__(self) -> int:
        return len(self._content)

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._content):
            raise Panic("ARRAY", "Index out of range.")
        return index

    def _nested(self, index: int) -> Array:
        element = self._content[self._check(index)]
        if not isinstance(element, Array):
            raise Panic(
                "ARRAY", "Cannot get element, because element is not an array."
            )
        return element

    def get(self, pos: Sequence[int]) -> Expression:
        """Return the element at the index path ``pos``."""
        if not pos:
            raise Panic("ARRAY", "Index out of range.")
        first, *rest = pos
        if not rest:
            return self._content[self._check(first)]
        return self._nested(first).get(rest)

    def set(self, pos: Sequence[int], data: Expression) -> None:
        """Replace the element at the index path ``pos`` with ``data``."""
        if not pos:
            raise Panic("ARRAY", "Index out of range.")
        first, *rest = pos
        if not rest:
            self._content[self._check(first)] = data
        else:
            self._nested(first).set(rest, data)