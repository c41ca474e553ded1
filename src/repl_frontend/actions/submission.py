"""Verbs that resolve or abandon the statement being edited."""

from __future__ import annotations

from os.path import commonprefix
from typing import TYPE_CHECKING, Optional

from repl_frontend.events import KeyInput
from repl_frontend.outcomes import SKIP, Exit, Failure, ReadOutcome, Success
from repl_frontend.parsing import Complete, MissingDelimiter, ResolutionMode
from repl_frontend.parsing import Failure as ParseFailure
from repl_frontend.runtime import telemetry

if TYPE_CHECKING:
    from repl_frontend.editor.session import StatementSession


def submit_statement(session: "StatementSession", key: KeyInput) -> Optional[ReadOutcome]:
    """Commit the buffer: accept it, reject it, or keep collecting lines.

    An unclosed delimiter continues the statement on a new line; only
    accepted and rejected submissions reach the history.
    """

    del key
    text = session.buffer.text
    outcome = session.parser.parse(text, ResolutionMode.COMMITTING)

    if isinstance(outcome, Complete):
        session.history.append(
            text, accepted=True, listener=session.config.on_history
        )
        telemetry.record_event(
            "statement.accepted", data={"statements": len(outcome.tokens)}
        )
        session.surface.finish()
        return Success(text=text, tokens=outcome.tokens)

    if isinstance(outcome, ParseFailure) and not isinstance(outcome, MissingDelimiter):
        session.history.append(
            text, accepted=False, listener=session.config.on_history
        )
        telemetry.record_event(
            "statement.rejected",
            level="warning",
            data={"position": outcome.position},
        )
        session.surface.finish()
        return Failure(outcome.message)

    session.buffer.insert("\n")
    return None


def interrupt(session: "StatementSession", key: KeyInput) -> ReadOutcome:
    del key
    had_input = bool(session.buffer)
    session.surface.finish()
    if not had_input:
        session.surface.write_line(session.interrupt_hint)
    telemetry.record_event(
        "editor.interrupt", data={"had_partial_input": had_input}
    )
    return SKIP


def end_of_input(session: "StatementSession", key: KeyInput) -> ReadOutcome:
    del key
    session.surface.finish()
    telemetry.record_event("editor.end_of_input")
    return Exit("user exited")


def complete_word(session: "StatementSession", key: KeyInput) -> None:
    """Apply tab completion at the cursor.

    One candidate replaces the word outright; several extend it to their
    common prefix, or get listed above the edit line when that adds nothing.
    """

    del key
    buffer = session.buffer
    cursor = buffer.cursor
    result = session.bridge.complete(
        cursor,
        buffer.text,
        session.config.completer,
        scheme=session.config.colors,
        surface=session.surface,
    )
    candidates = result.candidates
    if not candidates:
        return
    start = max(0, min(result.replace_from, cursor))
    if len(candidates) == 1:
        buffer.replace_range(start, cursor, candidates[0].insert_text)
        return
    common = commonprefix([candidate.insert_text for candidate in candidates])
    if len(common) > cursor - start:
        buffer.replace_range(start, cursor, common)
        return
    session.surface.write_line(
        "  ".join(candidate.display_text for candidate in candidates)
    )


__all__ = ["complete_word", "end_of_input", "interrupt", "submit_statement"]
