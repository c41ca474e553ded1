"""Built-in actions and key bindings for the statement editor."""

from __future__ import annotations

from repl_frontend.actions import editing as editing_actions
from repl_frontend.actions import submission as submission_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

BUFFER_EMPTY = "buffer_empty"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="editor.submit",
        handler=submission_actions.submit_statement,
        description="Submit the statement or continue it on a new line",
    ),
    ActionRef(
        id="editor.interrupt",
        handler=submission_actions.interrupt,
        description="Abandon the current statement",
    ),
    ActionRef(
        id="editor.end_of_input",
        handler=submission_actions.end_of_input,
        description="End the session",
    ),
    ActionRef(
        id="editor.complete",
        handler=submission_actions.complete_word,
        description="Complete the word under the cursor",
    ),
    ActionRef(
        id="editor.insert_newline",
        handler=editing_actions.insert_newline,
        description="Insert a line break without submitting",
    ),
    ActionRef(
        id="editor.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="editor.delete_forward",
        handler=editing_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="editor.move_left",
        handler=editing_actions.move_left,
        description="Move the cursor left",
    ),
    ActionRef(
        id="editor.move_right",
        handler=editing_actions.move_right,
        description="Move the cursor right",
    ),
    ActionRef(
        id="editor.line_start",
        handler=editing_actions.move_line_start,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="editor.line_end",
        handler=editing_actions.move_line_end,
        description="Move to the end of the line",
    ),
    ActionRef(
        id="editor.clear",
        handler=editing_actions.clear_buffer,
        description="Clear the buffer",
    ),
    ActionRef(
        id="history.previous",
        handler=editing_actions.recall_previous,
        description="Recall the previous statement",
    ),
    ActionRef(
        id="history.next",
        handler=editing_actions.recall_next,
        description="Recall the next statement",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="submit.enter", keys="enter", action_id="editor.submit"),
    Binding(id="newline.alt_enter", keys="alt+enter", action_id="editor.insert_newline"),
    Binding(id="interrupt.ctrl_c", keys="ctrl+c", action_id="editor.interrupt"),
    Binding(
        id="eof.ctrl_d",
        keys="ctrl+d",
        action_id="editor.end_of_input",
        when=(BUFFER_EMPTY,),
        description="End the session from an empty line",
    ),
    Binding(
        id="delete.ctrl_d",
        keys="ctrl+d",
        action_id="editor.delete_forward",
        when=(f"!{BUFFER_EMPTY}",),
    ),
    Binding(id="complete.tab", keys="tab", action_id="editor.complete"),
    Binding(id="delete.backspace", keys="backspace", action_id="editor.delete_backward"),
    Binding(id="delete.delete", keys="delete", action_id="editor.delete_forward"),
    Binding(id="move.left", keys="left", action_id="editor.move_left"),
    Binding(id="move.right", keys="right", action_id="editor.move_right"),
    Binding(id="move.home", keys="home", action_id="editor.line_start"),
    Binding(id="move.end", keys="end", action_id="editor.line_end"),
    Binding(id="move.ctrl_a", keys="ctrl+a", action_id="editor.line_start"),
    Binding(id="move.ctrl_e", keys="ctrl+e", action_id="editor.line_end"),
    Binding(id="clear.ctrl_u", keys="ctrl+u", action_id="editor.clear"),
    Binding(id="history.up", keys="up", action_id="history.previous"),
    Binding(id="history.down", keys="down", action_id="history.next"),
)


def load_default_keymaps(registry: KeymapRegistry) -> KeymapRegistry:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=True)
    return registry


__all__ = [
    "BUFFER_EMPTY",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]
