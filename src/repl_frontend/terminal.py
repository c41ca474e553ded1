"""Boundary between the editor loop and whatever terminal hosts it."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Protocol, TextIO

from rich.control import Control
from rich.segment import ControlCode, ControlType

from .events import Closed, InputEvent, KeyInput, Paste


@dataclass(frozen=True, slots=True)
class RenderState:
    """Everything a surface needs to draw the edit area."""

    prompt: str
    text: str
    styled: str
    cursor: int
    row: int
    column: int
    incomplete: bool = False


class InputSource(Protocol):
    def read_event(self) -> InputEvent:
        """Block until the next key, paste or close event."""
        ...


class Surface(Protocol):
    def render(self, state: RenderState) -> None:
        """Draw (or redraw) the edit area from ``state``."""
        ...

    def write_line(self, text: str) -> None:
        """Print ``text`` above the edit area."""
        ...

    def redraw(self) -> None:
        """Draw the most recent edit area again."""
        ...

    def finish(self) -> None:
        """Leave the edit area; later output starts below it."""
        ...


class StreamSource:
    """Line-oriented input: every line is pasted, then submitted."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: Deque[InputEvent] = deque()

    def read_event(self) -> InputEvent:
        if self._pending:
            return self._pending.popleft()
        line = self._stream.readline()
        if not line:
            return Closed("end of input")
        line = line.rstrip("\r\n")
        if line:
            self._pending.append(KeyInput("enter"))
            return Paste(line)
        return KeyInput("enter")


class StreamSurface:
    """ANSI rendering onto a text stream; silent when not interactive.

    Cursor movement and erasing are rich ``Control`` codes; the styled
    buffer is written as produced by the highlighter.
    """

    def __init__(self, stream: TextIO, *, interactive: Optional[bool] = None) -> None:
        self._stream = stream
        if interactive is None:
            isatty = getattr(stream, "isatty", None)
            interactive = bool(isatty and isatty())
        self.interactive = interactive
        self._last: Optional[RenderState] = None
        self._cursor_row = 0
        self._drawn_rows = 0

    def render(self, state: RenderState) -> None:
        self._last = state
        if not self.interactive:
            return
        indent = "\n" + " " * len(state.prompt)
        parts = [self._rewind(), state.prompt, indent.join(state.styled.split("\n"))]
        last_row = state.text.count("\n")
        codes: list[ControlCode] = []
        if last_row > state.row:
            codes.append((ControlType.CURSOR_UP, last_row - state.row))
        codes.append((ControlType.CARRIAGE_RETURN,))
        column = len(state.prompt) + state.column
        if column:
            codes.append((ControlType.CURSOR_FORWARD, column))
        parts.append(str(Control(*codes)))
        self._cursor_row = state.row
        self._drawn_rows = last_row + 1
        self._write("".join(parts))

    def write_line(self, text: str) -> None:
        if not self.interactive or self._last is None:
            self._write(f"{text}\n")
            return
        self._write(f"{self._rewind()}{text}\n")
        self._cursor_row = 0
        self._drawn_rows = 0
        self.render(self._last)

    def redraw(self) -> None:
        if self._last is not None:
            self.render(self._last)

    def finish(self) -> None:
        if self.interactive and self._last is not None:
            remaining = self._last.text.count("\n") - self._cursor_row
            self._write(f"{Control.move(y=remaining)}\n")
        self._last = None
        self._cursor_row = 0
        self._drawn_rows = 0

    def _rewind(self) -> str:
        # back to the first row of the edit area, blanking every row drawn so far
        codes: list[ControlCode] = []
        if self._cursor_row:
            codes.append((ControlType.CURSOR_UP, self._cursor_row))
        codes.append((ControlType.CARRIAGE_RETURN,))
        for row in range(self._drawn_rows):
            if row:
                codes.append((ControlType.CURSOR_DOWN, 1))
            codes.append((ControlType.ERASE_IN_LINE, 2))
        if self._drawn_rows > 1:
            codes.append((ControlType.CURSOR_UP, self._drawn_rows - 1))
        return str(Control(*codes))

    def _write(self, data: str) -> None:
        self._stream.write(data)
        self._stream.flush()


__all__ = [
    "InputSource",
    "RenderState",
    "StreamSource",
    "StreamSurface",
    "Surface",
]
