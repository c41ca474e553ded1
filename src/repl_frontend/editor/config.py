"""Per-call configuration for one statement read."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from repl_frontend.completion import CompletionOracle, null_oracle
from repl_frontend.highlight import ColorScheme
from repl_frontend.history import HistoryListener


@dataclass(frozen=True, slots=True)
class ReadConfig:
    """Color scheme, completion oracle and history seed for one read.

    ``history`` seeds the recall buffer when the read starts;
    ``on_history`` receives ``(text, accepted)`` for every submission so the
    caller can persist it.
    """

    colors: ColorScheme = field(default_factory=ColorScheme.default)
    completer: CompletionOracle = null_oracle
    history: Sequence[str] = ()
    on_history: Optional[HistoryListener] = None


__all__ = ["ReadConfig"]
