"""Edit buffer: the statement text being typed plus a cursor offset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class BufferValidationError(RuntimeError):
    """Raised when an offset falls outside the buffer."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


@dataclass(frozen=True, slots=True)
class BufferView:
    text: str
    cursor: int
    row: int
    column: int


class EditBuffer:
    """Mutable text owned by one statement read; offsets index into ``text``."""

    def __init__(self, text: str = "", *, cursor: int | None = None) -> None:
        self._text = text
        self._cursor = len(text) if cursor is None else self._ensure(cursor)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def __bool__(self) -> bool:
        return bool(self._text)

    def snapshot(self) -> BufferView:
        row, column = self.row_column()
        return BufferView(text=self._text, cursor=self._cursor, row=row, column=column)

    def row_column(self, offset: int | None = None) -> Tuple[int, int]:
        position = self._cursor if offset is None else self._ensure(offset)
        before = self._text[:position]
        row = before.count("\n")
        return row, position - (before.rfind("\n") + 1)

    def replace_range(self, start: int, end: int, text: str) -> None:
        start = self._ensure(start)
        end = self._ensure(end)
        if start > end:
            start, end = end, start
        self._text = self._text[:start] + text + self._text[end:]
        self._cursor = start + len(text)

    def insert(self, text: str) -> None:
        self.replace_range(self._cursor, self._cursor, text)

    def delete_backward(self) -> None:
        if self._cursor > 0:
            self.replace_range(self._cursor - 1, self._cursor, "")

    def delete_forward(self) -> None:
        if self._cursor < len(self._text):
            self.replace_range(self._cursor, self._cursor + 1, "")

    def set_text(self, text: str) -> None:
        self._text = text
        self._cursor = len(text)

    def clear(self) -> None:
        self.set_text("")

    def move_to(self, offset: int) -> None:
        self._cursor = max(0, min(offset, len(self._text)))

    def move_by(self, delta: int) -> None:
        self.move_to(self._cursor + delta)

    def line_start(self) -> int:
        return self._text.rfind("\n", 0, self._cursor) + 1

    def line_end(self) -> int:
        newline = self._text.find("\n", self._cursor)
        return len(self._text) if newline < 0 else newline

    def _ensure(self, offset: int) -> int:
        if offset < 0 or offset > len(self._text):
            raise BufferValidationError("Offset out of range", offset=offset)
        return offset


__all__ = ["BufferValidationError", "BufferView", "EditBuffer"]
