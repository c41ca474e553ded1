"""Editor verbs the keymap binds to keys."""

from .editing import (
    clear_buffer,
    delete_backward,
    delete_forward,
    insert_newline,
    move_left,
    move_line_end,
    move_line_start,
    move_right,
    recall_next,
    recall_previous,
)
from .submission import complete_word, end_of_input, interrupt, submit_statement

__all__ = [
    "clear_buffer",
    "complete_word",
    "delete_backward",
    "delete_forward",
    "end_of_input",
    "insert_newline",
    "interrupt",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "recall_next",
    "recall_previous",
    "submit_statement",
]
