"""
Editor surface used by the numbering commands.

`EditorSurface` is the small interface a host editor has to provide. `TextBuffer`
is an in-memory implementation used by the CLI and in tests; it also emits
`ChangeEvent`s to subscribers when edited through `replace_lines()`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class Position:
    """Cursor position: zero-based line and character offset."""

    line: int
    ch: int


@dataclass(frozen=True)
class LineRange:
    """Inclusive range of changed lines."""

    from_line: int
    to_line: int


@dataclass(frozen=True)
class ChangeEvent:
    changes: list[LineRange] = field(default_factory=list)


ChangeListener = Callable[["EditorSurface", ChangeEvent], None]


class EditorSurface(Protocol):
    def get_full_text(self) -> str: ...

    def set_full_text(self, text: str) -> None: ...

    def get_cursor(self) -> Position: ...

    def set_cursor(self, position: Position) -> None: ...

    def get_line(self, line: int) -> str: ...


class TextBuffer:
    """
    In-memory editor. Full-text writes are a single replace; the cursor is
    clamped into the current text.
    """

    def __init__(self, text: str = "", cursor: Position | None = None) -> None:
        self._lines: list[str] = text.split("\n")
        self._cursor: Position = Position(0, 0)
        self._listeners: list[ChangeListener] = []
        self.write_count: int = 0
        if cursor is not None:
            self.set_cursor(cursor)

    def get_full_text(self) -> str:
        return "\n".join(self._lines)

    def set_full_text(self, text: str) -> None:
        self._lines = text.split("\n")
        self.write_count += 1
        self.set_cursor(self._cursor)

    def get_cursor(self) -> Position:
        return self._cursor

    def set_cursor(self, position: Position) -> None:
        line = min(max(position.line, 0), len(self._lines) - 1)
        ch = min(max(position.ch, 0), len(self._lines[line]))
        self._cursor = Position(line, ch)

    def get_line(self, line: int) -> str:
        """Text of a line; raises `IndexError` for lines outside the buffer."""
        if not 0 <= line < len(self._lines):
            raise IndexError(f"Line {line} out of range (0-{len(self._lines) - 1})")
        return self._lines[line]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def replace_lines(self, from_line: int, to_line: int, new_lines: list[str]) -> None:
        """
        Replace lines `from_line..to_line` (inclusive) as a user edit would, then
        notify listeners with the range of the inserted lines.
        """
        self._lines[from_line : to_line + 1] = new_lines
        if not self._lines:
            self._lines = [""]
        end = from_line + max(len(new_lines) - 1, 0)
        event = ChangeEvent(changes=[LineRange(from_line, end)])
        for listener in list(self._listeners):
            listener(self, event)
