from __future__ import annotations

import io

import pytest

from repl_frontend.editor import BufferValidationError, EditBuffer
from repl_frontend.events import Closed, KeyInput, Paste
from repl_frontend.terminal import RenderState, StreamSource, StreamSurface


def test_stream_source_pastes_then_submits_each_line() -> None:
    source = StreamSource(io.StringIO("1+1\r\n\nx"))

    events = [source.read_event() for _ in range(6)]

    assert events == [
        Paste("1+1"),
        KeyInput("enter"),
        KeyInput("enter"),
        Paste("x"),
        KeyInput("enter"),
        Closed("end of input"),
    ]


def test_interactive_surface_draws_prompt_and_positions_cursor() -> None:
    stream = io.StringIO()
    surface = StreamSurface(stream, interactive=True)

    surface.render(
        RenderState(prompt="@ ", text="ab", styled="ab", cursor=1, row=0, column=1)
    )

    assert stream.getvalue() == "\r@ ab\r\x1b[3C"


def test_interactive_surface_writes_lines_above_the_edit_area() -> None:
    stream = io.StringIO()
    surface = StreamSurface(stream, interactive=True)
    state = RenderState(prompt="@ ", text="a\nb", styled="a\nb", cursor=3, row=1, column=1)

    surface.render(state)
    surface.write_line("hint")
    surface.finish()

    output = stream.getvalue()
    assert "@ a\n  b" in output
    assert "\x1b[1A\r\x1b[2K\x1b[1B\x1b[2K\x1b[1Ahint\n" in output
    assert output.endswith("\n")


def test_redraw_blanks_every_row_of_the_previous_edit_area() -> None:
    stream = io.StringIO()
    surface = StreamSurface(stream, interactive=True)
    state = RenderState(prompt="@ ", text="a\nb", styled="a\nb", cursor=1, row=0, column=1)

    surface.render(state)
    first = stream.getvalue()
    surface.redraw()

    assert first == "\r@ a\n  b\x1b[1A\r\x1b[3C"
    assert stream.getvalue()[len(first):].startswith("\r\x1b[2K\x1b[1B\x1b[2K\x1b[1A@ a")


def test_non_interactive_surface_only_prints_lines() -> None:
    stream = io.StringIO()
    surface = StreamSurface(stream)

    surface.render(RenderState(prompt="@ ", text="x", styled="x", cursor=1, row=0, column=1))
    surface.write_line("Ctrl-D to exit")
    surface.finish()

    assert stream.getvalue() == "Ctrl-D to exit\n"


def test_key_tokens_are_normalized() -> None:
    assert KeyInput.parse("CTRL+c").token == "ctrl+c"
    assert KeyInput("Enter", modifiers=("ALT",)).token == "alt+enter"
    assert KeyInput.parse("ctrl++").key == "+"
    assert KeyInput.char("A").token == "A"


def test_edit_buffer_rows_columns_and_ranges() -> None:
    buffer = EditBuffer("ab\ncd")

    assert buffer.row_column() == (1, 2)
    buffer.move_to(1)
    assert buffer.snapshot().column == 1
    buffer.replace_range(0, 2, "xyz")
    assert (buffer.text, buffer.cursor) == ("xyz\ncd", 3)
    buffer.move_to(99)
    assert buffer.cursor == len(buffer.text)
    assert buffer.line_start() == 4
    with pytest.raises(BufferValidationError):
        buffer.replace_range(0, 42, "")
