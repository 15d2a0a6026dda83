"""Symbol tables and the stack of scopes they form."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from .errors import Panic
from .expression import Expression, Type


class Frame:
    """One scope: a mapping from names to expressions."""

    def __init__(self) -> None:
        self._symbols: dict[str, Expression] = {}

    def insert(self, name: str, expr: Expression) -> bool:
        """Bind ``name``; return True if it was not bound before."""
        newly_inserted = name not in self._symbols
        self._symbols[name] = expr
        return newly_inserted

    def remove(self, name: str) -> bool:
        """Unbind ``name``; return True if it was bound."""
        return self._symbols.pop(name, None) is not None

    def exists(self, name: str) -> bool:
        """Tell whether ``name`` is bound here."""
        return name in self._symbols

    def retrieve(self, name: str) -> Expression:
        """Return the expression bound to ``name``."""
        try:
            return self._symbols[name]
        except KeyError:
            raise Panic("FRAME", f"Cannot find symbol: {name}") from None

    def __str__(self) -> str:
        return "{" + ", ".join(self._symbols) + "}"


class Environment(Expression):
    """A stack of frames, innermost first; copies share the same stack."""

    type = Type.ENVIRONMENT

    def __init__(self, frames: list[Frame] | None = None) -> None:
        self._frames = frames if frames is not None else [Frame()]

    def eval(self, env: Any) -> Expression:
        return Environment(self._frames)

    def __str__(self) -> str:
        return "(" + str(self.top) + ")"

    @property
    def top(self) -> Frame:
        """The innermost frame."""
        if not self._frames:
            raise Panic("ENVIRONMENT", "There is no frame.")
        return self._frames[0]

    def push(self, frame: Frame) -> None:
        """Make ``frame`` the innermost scope."""
        self._frames.insert(0, frame)

    def pop(self) -> None:
        """Drop the innermost scope."""
        if not self._frames:
            raise Panic("ENVIRONMENT", "There is no frame.")
        del self._frames[0]

    @contextmanager
    def scope(self) -> Iterator[Frame]:
        """Push a fresh frame for the duration of the block."""
        frame = Frame()
        self.push(frame)
        try:
            yield frame
        finally:
            self.pop()

    def _frame_of(self, name: str) -> Frame:
        for frame in self._frames:
            if frame.exists(name):
                return frame
        raise Panic("ENVIRONMENT", f"No such name: {name}")

    def retrieve(self, name: str) -> Expression:
        """Return the value of ``name`` from the innermost frame binding it."""
        return self._frame_of(name).retrieve(name)

    def update(self, name: str, expr: Expression) -> None:
        """Rebind ``name`` in the innermost frame that binds it."""
        self._frame_of(name).insert(name, expr)