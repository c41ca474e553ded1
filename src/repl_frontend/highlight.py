"""Syntax highlighting for the edit line and for signature help.

Pygments does the lexing; every token is folded into one of four categories
(comment, type, literal, keyword) and styled from a ``ColorScheme``.
Anything else passes through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from pygments.lexer import Lexer
from pygments.lexers import ScalaLexer
from pygments.token import Comment, Keyword, Literal, Name, Number, String, Token

COMMENT = "comment"
TYPE = "type"
LITERAL = "literal"
KEYWORD = "keyword"

RESET = "\x1b[0m"


@dataclass(frozen=True, slots=True)
class ColorScheme:
    """ANSI style per category, plus the reset appended after each span."""

    comment: str = ""
    type: str = ""
    literal: str = ""
    keyword: str = ""
    reset: str = ""

    def style_for(self, category: Optional[str]) -> str:
        if category is None:
            return ""
        return getattr(self, category)

    @classmethod
    def default(cls) -> "ColorScheme":
        return cls(
            comment="\x1b[34m",
            type="\x1b[32m",
            literal="\x1b[32m",
            keyword="\x1b[33m",
            reset=RESET,
        )

    @classmethod
    def black_white(cls) -> "ColorScheme":
        return cls()

    @classmethod
    def named(cls, name: str) -> "ColorScheme":
        try:
            factory = _NAMED_SCHEMES[name.lower()]
        except KeyError as exc:
            known = ", ".join(sorted(_NAMED_SCHEMES))
            raise ValueError(f"Unknown color scheme '{name}' (known: {known})") from exc
        return factory()


_NAMED_SCHEMES = {
    "default": ColorScheme.default,
    "blackwhite": ColorScheme.black_white,
}

# checked in order: constants and type keywords win over plain keywords
_CATEGORY_RULES: Tuple[Tuple[object, str], ...] = (
    (Comment, COMMENT),
    (Keyword.Type, TYPE),
    (Name.Class, TYPE),
    (Keyword.Constant, LITERAL),
    (String, LITERAL),
    (Number, LITERAL),
    (Literal, LITERAL),
    (Keyword, KEYWORD),
)


def classify(token_type: object) -> Optional[str]:
    for parent, category in _CATEGORY_RULES:
        if token_type in parent:  # type: ignore[operator]
            return category
    return None


class Highlighter:
    """Pure ``text -> styled text`` mapping; safe to call on every keystroke."""

    def __init__(self, lexer: Optional[Lexer] = None) -> None:
        # line comments only match up to a newline, so one is always appended
        self._lexer = lexer or ScalaLexer(stripnl=False, ensurenl=True)
        self._cache: Dict[Tuple[str, ColorScheme], str] = {}

    def tokens(self, text: str) -> Iterator[Tuple[Optional[str], str]]:
        lexed = list(self._lexer.get_tokens(text))
        if lexed and not text.endswith("\n") and lexed[-1][1].endswith("\n"):
            token_type, value = lexed[-1]
            lexed[-1] = (token_type, value[:-1])
        for token_type, value in lexed:
            if not value:
                continue
            if token_type is Token.Error:
                yield None, value
                continue
            yield classify(token_type), value

    def highlight(self, text: str, scheme: ColorScheme) -> str:
        key = (text, scheme)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        parts: list[str] = []
        for category, value in self.tokens(text):
            style = scheme.style_for(category)
            if style and value:
                parts.append(f"{style}{value}{scheme.reset}")
            else:
                parts.append(value)
        styled = "".join(parts)
        if len(self._cache) >= 256:
            self._cache.clear()
        self._cache[key] = styled
        return styled


__all__ = [
    "COMMENT",
    "KEYWORD",
    "LITERAL",
    "TYPE",
    "ColorScheme",
    "Highlighter",
    "classify",
]
