"""Tab completion: oracle results, member-prefix rewriting, signature help."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple

from repl_frontend.runtime import telemetry

from .highlight import ColorScheme, Highlighter
from .parsing import Complete, IncrementalParser, ResolutionMode
from .terminal import Surface

CompletionOracle = Callable[[int, str], Tuple[int, Sequence[str], Sequence[str]]]

MEMBER_SEPARATOR = "."


@dataclass(frozen=True, slots=True)
class Candidate:
    insert_text: str
    display_text: str


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Sorted candidates plus the buffer offset they replace up to the cursor."""

    candidates: tuple[Candidate, ...]
    signatures: tuple[str, ...]
    replace_from: int


def null_oracle(cursor: int, text: str) -> Tuple[int, Sequence[str], Sequence[str]]:
    del text
    return cursor, (), ()


class CompletionBridge:
    """Runs the oracle and adapts its answer to the word under the cursor."""

    def __init__(
        self,
        parser: Optional[IncrementalParser] = None,
        highlighter: Optional[Highlighter] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._parser = parser or IncrementalParser()
        self._highlighter = highlighter or Highlighter()
        self._logger_name = logger_name

    def complete(
        self,
        cursor: int,
        text: str,
        oracle: CompletionOracle,
        *,
        scheme: ColorScheme = ColorScheme(),
        surface: Optional[Surface] = None,
    ) -> CompletionResult:
        with telemetry.span(
            "completion::complete",
            logger_name=self._logger_name,
            component="completion",
            metadata={"cursor": cursor},
        ) as handle:
            start, raw_candidates, raw_signatures = oracle(cursor, text)
            signatures = tuple(
                self._highlighter.highlight(signature, scheme)
                for signature in raw_signatures
            )
            if signatures and surface is not None:
                for line in signatures:
                    surface.write_line(line)
                surface.redraw()

            prefix, replace_from = self._member_prefix(cursor, text, start)
            candidates = sorted(
                (
                    Candidate(insert_text=prefix + raw, display_text=raw)
                    for raw in raw_candidates
                ),
                key=lambda candidate: candidate.insert_text,
            )
            handle.add_metadata("candidates", len(candidates))
            handle.add_metadata("signatures", len(signatures))
            return CompletionResult(
                candidates=tuple(candidates),
                signatures=signatures,
                replace_from=replace_from,
            )

    def _member_prefix(self, cursor: int, text: str, start: int) -> Tuple[str, int]:
        outcome = self._parser.parse(text, ResolutionMode.COMPLETING, cursor)
        if not isinstance(outcome, Complete) or outcome.active_word is None:
            return "", start
        word = outcome.active_word
        if MEMBER_SEPARATOR not in word.text:
            return "", start
        prefix = word.text[: word.text.rindex(MEMBER_SEPARATOR) + 1]
        return prefix, word.start


_TRAILING_REFERENCE = re.compile(r"[A-Za-z_$][\w$.]*$")


class VocabularyOracle:
    """Prefix matching over fixed word and member lists.

    ``members`` maps an owner (``"List"``) to its member names and
    ``signatures`` maps a full reference (``"List.apply"``) to help lines.
    """

    def __init__(
        self,
        words: Iterable[str] = (),
        *,
        members: Optional[Mapping[str, Sequence[str]]] = None,
        signatures: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self.words = tuple(words)
        self.members = dict(members or {})
        self.signatures = dict(signatures or {})

    def __call__(
        self, cursor: int, text: str
    ) -> Tuple[int, Sequence[str], Sequence[str]]:
        match = _TRAILING_REFERENCE.search(text[:cursor])
        reference = match.group(0) if match else ""
        if MEMBER_SEPARATOR in reference:
            owner, partial = reference.rsplit(MEMBER_SEPARATOR, 1)
            pool: Sequence[str] = self.members.get(owner, ())
        else:
            partial = reference
            pool = self.words
        found = [name for name in pool if name.startswith(partial)]
        return cursor - len(partial), found, tuple(self.signatures.get(reference, ()))


__all__ = [
    "Candidate",
    "CompletionBridge",
    "CompletionOracle",
    "CompletionResult",
    "MEMBER_SEPARATOR",
    "VocabularyOracle",
    "null_oracle",
]
