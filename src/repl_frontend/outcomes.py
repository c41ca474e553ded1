"""Values returned by one ``LineEditor.read_statement`` call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Success:
    """A complete statement, ready for the evaluator."""

    text: str
    tokens: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Skip:
    """The statement was abandoned; the caller should prompt again."""


@dataclass(frozen=True, slots=True)
class Exit:
    """End of input: the interactive session is over."""

    reason: str = "user exited"


@dataclass(frozen=True, slots=True)
class Failure:
    """Rejected submission or internal fault; the session carries on."""

    message: str


ReadOutcome = Union[Success, Skip, Exit, Failure]

SKIP = Skip()


__all__ = ["Exit", "Failure", "ReadOutcome", "SKIP", "Skip", "Success"]
