"""Read-evaluate loop built on ``LineEditor.read_statement``."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from repl_frontend.editor import LineEditor, ReadConfig
from repl_frontend.outcomes import Exit, Failure, Skip, Success
from repl_frontend.runtime import telemetry

Evaluator = Callable[[Success], None]
Reporter = Callable[[str], None]


def run_repl(
    editor: LineEditor,
    *,
    prompt: str,
    evaluate: Evaluator,
    report: Reporter,
    config: Optional[ReadConfig] = None,
) -> str:
    """Prompt until end-of-input and return the exit reason.

    ``config`` is passed to every read, so its history seed is only honoured
    on the first one; later reads see the editor's accumulated history.
    """

    current = config or ReadConfig()
    reads = 0
    while True:
        outcome = editor.read_statement(prompt, current)
        reads += 1
        if reads == 1 and current.history:
            current = replace(current, history=())
        if isinstance(outcome, Success):
            # blank submissions carry no statements
            if outcome.tokens:
                evaluate(outcome)
        elif isinstance(outcome, Failure):
            report(outcome.message)
        elif isinstance(outcome, Skip):
            continue
        elif isinstance(outcome, Exit):
            telemetry.record_event(
                "repl.exit", data={"reason": outcome.reason, "reads": reads}
            )
            return outcome.reason


__all__ = ["Evaluator", "Reporter", "run_repl"]
