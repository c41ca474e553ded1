"""Mode-aware classification of an edit buffer."""

from __future__ import annotations

from typing import Optional

from repl_frontend.runtime import telemetry

from .grammar import Matched, StatementGrammar, default_grammar
from .outcome import (
    INCOMPLETE,
    MISSING_DELIMITER_MESSAGE,
    ActiveWord,
    Complete,
    Failure,
    MissingDelimiter,
    ParseOutcome,
    ResolutionMode,
)


class IncrementalParser:
    """Classifies a buffer as Complete, Incomplete or Failure.

    ``parse`` keeps no state between calls. Grammar errors only become a
    ``Failure`` when the mode is ``COMMITTING``; while typing they read as
    ``Incomplete`` and while completing as an empty ``Complete``.
    """

    def __init__(
        self,
        grammar: Optional[StatementGrammar] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._grammar = grammar or default_grammar()
        self._logger_name = logger_name

    def parse(
        self,
        text: str,
        mode: ResolutionMode,
        cursor: Optional[int] = None,
    ) -> ParseOutcome:
        position = len(text) if cursor is None else cursor
        with telemetry.span(
            "parser::parse",
            logger_name=self._logger_name,
            component="parser",
            metadata={"mode": mode.value, "length": len(text)},
        ) as handle:
            result = self._grammar.split(text)
            if isinstance(result, Matched):
                handle.add_metadata("status", "complete")
                return _complete(text, result, position)

            if mode is ResolutionMode.COMPLETING:
                handle.add_metadata("status", "degraded")
                return Complete(tokens=())

            if mode is ResolutionMode.PROBING:
                handle.add_metadata("status", "incomplete")
                return INCOMPLETE

            if result is None:
                handle.add_metadata("status", "missing_delimiter")
                return MissingDelimiter(MISSING_DELIMITER_MESSAGE, len(text))

            handle.add_metadata("status", "failure")
            handle.add_metadata("position", result.position)
            return Failure(result.message, result.position)


def _complete(text: str, matched: Matched, cursor: int) -> Complete:
    tokens = tuple(text[start:end] for start, end in matched.spans)
    active = None
    for start, end in reversed(matched.spans):
        if end == cursor:
            active = ActiveWord(text=text[start:end], cursor=end - start, start=start)
            break
    return Complete(tokens=tokens, active_word=active, end=matched.end)


__all__ = ["IncrementalParser"]
