"""User-defined functions and the built-in operators callable like them."""

from __future__ import annotations

import sys
from typing import Any, Iterable, Sequence

from .errors import Panic
from .expression import (
    Array,
    Boolean,
    Expression,
    Number,
    Procedure,
    Reference,
    String,
    Symbol,
    Type,
    Void,
    type_to_string,
)


class Function(Procedure):
    """A named procedure with formal parameters and a body."""

    type = Type.FUNCTION

    def __init__(
        self,
        name: str,
        parameters: Iterable[str] = (),
        body: Expression | None = None,
    ) -> None:
        self.name = name
        self.params: list[str] = list(parameters)
        self.body = body

    def formals_size(self) -> int:
        """Number of formal parameters."""
        return len(self.params)

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        """Bind the evaluated arguments in the innermost scope and run the body."""
        if self.formals_size() != len(arguments):
            raise Panic(
                "FUNCTION",
                f"Cannot apply function with {self.formals_size()} parameters "
                f"to {len(arguments)} arguments.",
            )
        for param, argument in zip(self.params, arguments):
            env.top.insert(param, argument.eval(env))
        if self.body is None:
            return Void()
        return self.body.eval(env)

    def eval(self, env: Any) -> Expression:
        return self.clone()

    def __str__(self) -> str:
        return f"Function:{self.name}"

    def clone(self) -> Expression:
        body = None if self.body is None else self.body.clone()
        return Function(self.name, self.params, body)


class _Builtin(Function):
    """A function implemented by the interpreter itself."""

    builtin_name = ""
    arity = -1

    def __init__(self) -> None:
        super().__init__(self.builtin_name)

    def formals_size(self) -> int:
        return self.arity

    def clone(self) -> Expression:
        return type(self)()

    def _check_arity(self, arguments: Sequence[Expression]) -> None:
        if self.arity != len(arguments):
            raise Panic(
                "OPERATOR",
                f"Cannot apply '{self.builtin_name}' with {self.arity} parameters "
                f"to {len(arguments)} arguments.",
            )


class Println(_Builtin):
    """Prints its evaluated arguments separated by spaces, then a newline."""

    builtin_name = "println"
    arity = -1

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        text = " ".join(str(argument.eval(env)) for argument in arguments)
        sys.stdout.write(text + "\n")
        return Void()


class Defined(_Builtin):
    """Tells whether a symbol is bound in the innermost scope."""

    builtin_name = "defined"
    arity = 1

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        self._check_arity(arguments)
        symbol = arguments[0]
        if not isinstance(symbol, Symbol):
            raise Panic("OPERATOR", "Operator 'defined' expects a symbol parameter.")
        return Boolean(env.top.exists(symbol.name))


class TypeOf(_Builtin):
    """Returns the type name of its evaluated argument as a symbol."""

    builtin_name = "type"
    arity = 1

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        self._check_arity(arguments)
        value = arguments[0].eval(env)
        return Symbol(type_to_string(value.type))


class MakeArray(_Builtin):
    """Creates a reference to a new array of the given length."""

    builtin_name = "array"
    arity = -1

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        if not arguments:
            raise Panic("OPERATOR", "Cannot apply 'array' to zero arguments.")
        dims: list[int] = []
        for argument in arguments:
            value = argument.eval(env)
            if not isinstance(value, Number):
                raise Panic(
                    "OPERATOR",
                    "At least one of the arguments to array is not a number.",
                )
            dims.append(value.value.numerator)
        if dims[0] < 0:
            raise Panic("OPERATOR", "Cannot create an array of negative length.")
        return Reference(Array(dims[0]))


class Len(_Builtin):
    """Returns the length of a referenced array or string."""

    builtin_name = "len"
    arity = 1

    def apply(self, arguments: Sequence[Expression], env: Any) -> Expression:
        self._check_arity(arguments)
        value = arguments[0].eval(env)
        if not isinstance(value, Reference):
            raise Panic(
                "OPERATOR", f"Cannot call 'len' on {type_to_string(value.type)}."
            )
        target = value.deref()
        if isinstance(target, (Array, String)):
            return Number(len(target))
        raise Panic(
            "OPERATOR", f"Cannot call 'len' on {type_to_string(target.type)}."
        )


def builtins() -> dict[str, Function]:
    """Return a fresh instance of every built-in operator, keyed by name."""
    return {op.builtin_name: op() for op in (Println, Defined, TypeOf, MakeArray, Len)}