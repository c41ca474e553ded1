"""Statement grammar and the incremental, mode-aware parser."""

from .grammar import (
    GrammarResult,
    LarkStatementGrammar,
    Matched,
    StatementGrammar,
    Violation,
    default_grammar,
    is_unterminated,
)
from .incremental import IncrementalParser
from .outcome import (
    ActiveWord,
    Complete,
    Failure,
    Incomplete,
    MissingDelimiter,
    ParseOutcome,
    ResolutionMode,
)

__all__ = [
    "ActiveWord",
    "Complete",
    "Failure",
    "GrammarResult",
    "Incomplete",
    "IncrementalParser",
    "LarkStatementGrammar",
    "Matched",
    "MissingDelimiter",
    "ParseOutcome",
    "ResolutionMode",
    "StatementGrammar",
    "Violation",
    "default_grammar",
    "is_unterminated",
]
