"""Exceptions raised by the lexer and the interpreter."""

from __future__ import annotations


class BelError(Exception):
    """Base class of every error the interpreter reports."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InterpreterError(BelError):
    """An internal problem of the interpreter, tagged with where it happened."""

    def __init__(self, function_name: str, message: str) -> None:
        self.function_name = function_name
        self.detail = message
        super().__init__(f"{function_name}: {message}")


class LexerError(BelError):
    """A problem found while turning source text into tokens."""

    def __init__(self, function_name: str, message: str, line: int) -> None:
        self.function_name = function_name
        self.detail = message
        self.line = line
        super().__init__(f"Line {line} ({function_name}): {message}")


class Panic(BelError):
    """A runtime error raised while evaluating a program."""

    def __init__(self, category: str, message: str) -> None:
        self.category = category
        self.detail = message
        super().__init__(f"{category}: {message}")