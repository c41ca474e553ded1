"""Resolution modes and the tagged values produced by a parse attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ResolutionMode(str, Enum):
    """How decisive a parse attempt is."""

    PROBING = "probing"
    COMPLETING = "completing"
    COMMITTING = "committing"


@dataclass(frozen=True, slots=True)
class ActiveWord:
    """The statement token whose span ends exactly at the cursor."""

    text: str
    cursor: int
    start: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class Complete:
    tokens: tuple[str, ...]
    active_word: Optional[ActiveWord] = None
    end: int = 0


@dataclass(frozen=True, slots=True)
class Incomplete:
    pass


@dataclass(frozen=True, slots=True)
class Failure:
    message: str
    position: int


@dataclass(frozen=True, slots=True)
class MissingDelimiter(Failure):
    """Buffer ended with an unclosed bracket, quote or comment."""


ParseOutcome = Union[Complete, Incomplete, Failure]

INCOMPLETE = Incomplete()
MISSING_DELIMITER_MESSAGE = "missing closing delimiter"


__all__ = [
    "ActiveWord",
    "Complete",
    "Failure",
    "INCOMPLETE",
    "Incomplete",
    "MISSING_DELIMITER_MESSAGE",
    "MissingDelimiter",
    "ParseOutcome",
    "ResolutionMode",
]
