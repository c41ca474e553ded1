"""Text-editing verbs bound to keys by the default keymap."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repl_frontend.events import KeyInput

if TYPE_CHECKING:
    from repl_frontend.editor.session import StatementSession


def insert_newline(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.insert("\n")


def delete_backward(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.delete_backward()


def delete_forward(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.delete_forward()


def move_left(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.move_by(-1)


def move_right(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.move_by(1)


def move_line_start(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.move_to(session.buffer.line_start())


def move_line_end(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.move_to(session.buffer.line_end())


def clear_buffer(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.buffer.clear()


def recall_previous(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.recall(-1)


def recall_next(session: "StatementSession", key: KeyInput) -> None:
    del key
    session.recall(1)


__all__ = [
    "clear_buffer",
    "delete_backward",
    "delete_forward",
    "insert_newline",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "recall_next",
    "recall_previous",
]
