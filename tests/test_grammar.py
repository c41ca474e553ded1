from __future__ import annotations

import pytest

from repl_frontend.parsing import Matched, Violation, default_grammar, is_unterminated


def spans_of(text: str) -> list[str]:
    result = default_grammar().split(text)
    assert isinstance(result, Matched)
    return [text[start:end] for start, end in result.spans]


def test_single_expression_spans_whole_buffer() -> None:
    result = default_grammar().split("1+1")

    assert result == Matched(spans=((0, 3),), end=3)


def test_semicolons_and_newlines_separate_statements() -> None:
    assert spans_of("val x = 1; x + 2") == ["val x = 1", "x + 2"]
    assert spans_of("a\nb\n") == ["a", "b"]


def test_trailing_operator_continues_onto_next_line() -> None:
    assert spans_of("1 +\n2") == ["1 +\n2"]
    assert spans_of("val y =\n  3") == ["val y =\n  3"]


def test_newlines_inside_parentheses_are_layout() -> None:
    assert spans_of("foo(1,\n2)") == ["foo(1,\n2)"]
    assert spans_of("val x = (\n1)") == ["val x = (\n1)"]


def test_block_statements_stay_inside_one_top_level_statement() -> None:
    text = "def f(a: Int): Int = {\n  val b = a * 2\n  b + 1\n}"

    assert spans_of(text) == [text]


def test_assorted_statement_forms_parse() -> None:
    for text in (
        "import scala.collection.mutable",
        "import scala.collection.{Map, Seq}",
        "var (a, b) = (1, 2)",
        "val s: String = \"hi\" // comment",
        "if (a >= 1 && !b) List(1, 2).size else -3",
        "x.y = 'c'",
        "val doc = \"\"\"multi\nline\"\"\"",
        "/* note */ null",
    ):
        assert isinstance(default_grammar().split(text), Matched), text


def test_empty_and_blank_buffers_have_no_statements() -> None:
    assert spans_of("") == []
    assert spans_of("  \n ; \n") == []


@pytest.mark.parametrize(
    "text",
    ["(", "foo(1, ", "val x = [", "{ a", '"abc', '"""abc', "/* open", "f(\"(\""],
)
def test_unterminated_buffers_have_no_result(text: str) -> None:
    assert is_unterminated(text)
    assert default_grammar().split(text) is None


@pytest.mark.parametrize("text", ["())", "(]", "'('", "// (", "\"(\"", "1 + 2"])
def test_terminated_or_malformed_buffers_are_not_unterminated(text: str) -> None:
    assert not is_unterminated(text)


def test_violation_at_end_of_input() -> None:
    result = default_grammar().split("1+")

    assert isinstance(result, Violation)
    assert result.position == 2
    assert result.found == "end-of-input"
    assert "NUMBER" in result.expected
    assert result.message.startswith("found end-of-input, expected ")
    assert result.message.endswith(" at index 2")


def test_violation_quotes_the_offending_text() -> None:
    result = default_grammar().split("val = 3")

    assert isinstance(result, Violation)
    assert result.position == 4
    assert result.found == '"= 3"'


def test_mismatched_closer_is_a_violation() -> None:
    result = default_grammar().split("(]")

    assert isinstance(result, Violation)
    assert result.position == 1
