"""Positions over token sequences, with automatic backtracking."""

from __future__ import annotations

from types import TracebackType
from typing import Generic, Sequence, TypeVar

from .errors import InterpreterError

T = TypeVar("T")


class GuardedPosition(Generic[T]):
    """An index into a sequence that refuses to read past its end."""

    def __init__(self, items: Sequence[T], index: int = 0) -> None:
        self.items = items
        self.index = index

    def current(self) -> T:
        """Return the item at the position, raising if the position is invalid."""
        if 0 <= self.index < len(self.items):
            return self.items[self.index]
        raise InterpreterError("GuardedPosition::current", "Position is invalid.")

    def advance(self) -> int:
        """Move one step forward and return the index before the move."""
        previous = self.index
        self.index += 1
        return previous

    def retreat(self) -> int:
        """Move one step back and return the index before the move."""
        previous = self.index
        self.index -= 1
        return previous

    def at_end(self) -> bool:
        """Tell whether the position has run past the last item."""
        return self.index >= len(self.items)


class BacktrackingGuard:
    """Restores a position on leaving the block unless told not to."""

    def __init__(self, position: GuardedPosition) -> None:
        self._position = position
        self._start = position.index
        self._backtrack = True

    def no_backtrack(self) -> None:
        """Keep the position where it is when the block ends."""
        self._backtrack = False

    def __enter__(self) -> BacktrackingGuard:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self._backtrack:
            self._position.index = self._start
        return False