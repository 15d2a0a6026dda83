"""Turns source text into a list of tokens."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import LexerError


class TokenKind(Enum):
    """The kinds of token the lexer produces."""

    NONE = auto()
    EOFTOK = auto()
    IDENT = auto()
    NUMBER = auto()
    STRING = auto()
    SEPARATOR = auto()
    LEFT_PAR = auto()
    RIGHT_PAR = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()
    PLUS = auto()
    MINUS = auto()
    ARROW = auto()
    MULT = auto()
    DIV = auto()
    EQUAL = auto()
    LESS = auto()
    LEQUAL = auto()
    GREATER = auto()
    GEQUAL = auto()


@dataclass(frozen=True)
class Token:
    """A scanned token with the line it starts on."""

    kind: TokenKind
    line: int
    value: str = ""


_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_IDENT_CHARS = _LETTERS | _DIGITS | {"_"}
_NEWLINES = frozenset("\n\r")
_BLANKS = frozenset(" \t\v\f")

_SINGLE = {
    "(": TokenKind.LEFT_PAR,
    ")": TokenKind.RIGHT_PAR,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    ":": TokenKind.COLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS,
    ">": TokenKind.GREATER,
}

_DOUBLE = {
    "->": TokenKind.ARROW,
    "<=": TokenKind.LEQUAL,
    ">=": TokenKind.GEQUAL,
}

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "\\": "\\", '"': '"'}


class _Scanner:
    """Walks over the text once, yielding tokens."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1

    def __iter__(self) -> Iterator[Token]:
        while self._pos < len(self._text):
            yield self._next_token()

    def _peek(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self._text[index] if index < len(self._text) else ""

    def _next_token(self) -> Token:
        self._skip_ignored()
        if self._pos >= len(self._text):
            return Token(TokenKind.EOFTOK, self._line)

        char = self._peek()
        if char in _LETTERS:
            return self._identifier()
        if char in _DIGITS:
            return self._number()
        if char == '"':
            return self._string()
        if char in _NEWLINES:
            return self._newline()

        line = self._line
        pair = self._text[self._pos:self._pos + 2]
        if pair in _DOUBLE:
            self._pos += 2
            return Token(_DOUBLE[pair], line, pair)

        self._pos += 1
        kind = _SINGLE.get(char)
        if kind is None:
            return Token(TokenKind.NONE, 0)
        return Token(kind, line, char)

    def _take_while(self, allowed: frozenset[str]) -> str:
        start = self._pos
        while self._peek() and self._peek() in allowed:
            self._pos += 1
        return self._text[start:self._pos]

    def _identifier(self) -> Token:
        return Token(TokenKind.IDENT, self._line, self._take_while(_IDENT_CHARS))

    def _number(self) -> Token:
        value = self._take_while(_DIGITS)
        if self._peek() in ("/", "."):
            value += self._peek()
            self._pos += 1
            value += self._take_while(_DIGITS)
        return Token(TokenKind.NUMBER, self._line, value)

    def _string(self) -> Token:
        if self._peek() != '"':
            raise LexerError("Lexer::scanString", 'String does not start with ".', self._line)
        self._pos += 1

        chars: list[str] = []
        end = len(self._text)
        while self._pos < end:
            char = self._text[self._pos]
            if char == '"':
                self._pos += 1
                break
            if char == "\\":
                self._pos += 1
                if self._pos < end:
                    chars.append(_ESCAPES.get(self._text[self._pos], ""))
            else:
                if char in _NEWLINES:
                    raise LexerError(
                        "Lexer::scanString",
                        "Read a newline character while scanning a string.",
                        self._line,
                    )
                chars.append(char)
            self._pos += 1
        self._pos = min(self._pos, end)
        return Token(TokenKind.STRING, self._line, "".join(chars))

    def _newline(self) -> Token:
        char = self._peek()
        if char not in _NEWLINES or not char:
            raise LexerError(
                "Lexer::scanNewline",
                f"Cannot scan for a newline, because '{char}' is not a newline character.",
                self._line,
            )
        if char == "\r" and self._peek(1) == "\n":
            self._pos += 1
        self._pos += 1
        line = self._line
        self._line += 1
        return Token(TokenKind.SEPARATOR, line, "\n")

    def _skip_ignored(self) -> None:
        while self._pos < len(self._text):
            char = self._peek()
            if char in _BLANKS:
                self._pos += 1
            elif char == "-" and self._peek(1) == "-":
                self._skip_comment()
            else:
                break

    def _skip_comment(self) -> None:
        self._pos += 2
        if self._peek() == "[" and self._peek(1) == "[":
            self._pos += 2
            while True:
                if self._pos + 1 >= len(self._text):
                    raise LexerError(
                        "Lexer::ignoreComment",
                        "Multiline comment was not properly closed",
                        self._line,
                    )
                if self._peek() == "]" and self._peek(1) == "]":
                    self._pos += 2
                    return
                if self._peek() in _NEWLINES:
                    self._newline()
                else:
                    self._pos += 1
        else:
            while self._peek() and self._peek() not in _NEWLINES:
                self._pos += 1
            if self._peek():
                self._newline()


class Lexer:
    """Scans program text, taken from a file or given directly."""

    def __init__(self, source: str, is_file: bool = True) -> None:
        if is_file:
            try:
                with open(source, encoding="utf-8", newline="") as handle:
                    self._input = handle.read()
            except OSError as exc:
                raise LexerError(
                    "Lexer::Lexer", f"Cannot open file named '{source}'.", 0
                ) from exc
        else:
            self._input = source

    def scan(self) -> list[Token]:
        """Return every token found in the input."""
        return list(_Scanner(self._input))