from __future__ import annotations

import re

import pytest
from pygments.token import Comment, Keyword, Name, Number, String

from repl_frontend.highlight import (
    COMMENT,
    KEYWORD,
    LITERAL,
    TYPE,
    ColorScheme,
    Highlighter,
    classify,
)

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI.sub("", text)


@pytest.mark.parametrize(
    ("token_type", "category"),
    [
        (Comment.Single, COMMENT),
        (Comment.Multiline, COMMENT),
        (Keyword.Type, TYPE),
        (Name.Class, TYPE),
        (Keyword.Constant, LITERAL),
        (String.Double, LITERAL),
        (Number.Integer, LITERAL),
        (Keyword, KEYWORD),
        (Keyword.Declaration, KEYWORD),
        (Name, None),
    ],
)
def test_classify_folds_token_types(token_type, category) -> None:
    assert classify(token_type) == category


def test_black_white_scheme_leaves_text_untouched() -> None:
    text = "val x = List(1, 2) // two\n  .size"

    assert Highlighter().highlight(text, ColorScheme.black_white()) == text


def test_default_scheme_styles_categories_and_keeps_text() -> None:
    text = 'val answer = 42 // "why"'
    styled = Highlighter().highlight(text, ColorScheme.default())

    assert strip_ansi(styled) == text
    assert "\x1b[33mval" in styled
    assert "\x1b[32m42\x1b[0m" in styled
    assert "\x1b[34m// \"why\"\x1b[0m" in styled


def test_comment_on_the_last_line_is_styled_without_a_newline() -> None:
    styled = Highlighter().highlight("1 // note", ColorScheme.default())

    assert styled == "\x1b[32m1\x1b[0m \x1b[34m// note\x1b[0m"
    assert list(Highlighter().tokens("")) == []


def test_highlight_is_idempotent_across_instances() -> None:
    text = 'def f(s: String): Int = s.length /* n */'
    scheme = ColorScheme.default()

    first = Highlighter().highlight(text, scheme)

    assert Highlighter().highlight(text, scheme) == first
    highlighter = Highlighter()
    assert highlighter.highlight(text, scheme) == highlighter.highlight(text, scheme)


def test_multiline_text_keeps_its_newlines() -> None:
    text = "val x = (\n1)"

    styled = Highlighter().highlight(text, ColorScheme.default())

    assert strip_ansi(styled) == text


def test_named_schemes() -> None:
    assert ColorScheme.named("default") == ColorScheme.default()
    assert ColorScheme.named("BlackWhite") == ColorScheme.black_white()
    with pytest.raises(ValueError):
        ColorScheme.named("solarized")
