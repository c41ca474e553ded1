from __future__ import annotations

from typing import Sequence, Tuple

from conftest import RecordingSurface

from repl_frontend.completion import CompletionBridge, VocabularyOracle, null_oracle
from repl_frontend.highlight import ColorScheme


def fixed_oracle(start: int, candidates: Sequence[str], signatures: Sequence[str] = ()):
    calls: list[Tuple[int, str]] = []

    def oracle(cursor: int, text: str):
        calls.append((cursor, text))
        return start, list(candidates), list(signatures)

    oracle.calls = calls  # type: ignore[attr-defined]
    return oracle


def test_candidates_are_sorted_by_insert_text() -> None:
    bridge = CompletionBridge()

    result = bridge.complete(3, "zap", fixed_oracle(0, ["zeta", "alpha", "mid", "beta"]))

    assert [c.insert_text for c in result.candidates] == ["alpha", "beta", "mid", "zeta"]
    assert result.replace_from == 0


def test_dotted_member_candidates_keep_the_owner_prefix() -> None:
    bridge = CompletionBridge()

    result = bridge.complete(6, "foo.ba", fixed_oracle(4, ["baz", "bar"]))

    assert [c.insert_text for c in result.candidates] == ["foo.bar", "foo.baz"]
    assert [c.display_text for c in result.candidates] == ["bar", "baz"]
    assert result.replace_from == 0


def test_trailing_space_keeps_the_oracle_start() -> None:
    bridge = CompletionBridge()

    result = bridge.complete(7, "List.a ", fixed_oracle(7, ["println"]))

    assert [c.insert_text for c in result.candidates] == ["println"]
    assert result.replace_from == 7


def test_member_prefix_replaces_from_the_word_start() -> None:
    bridge = CompletionBridge()

    result = bridge.complete(9, "x; List.a", fixed_oracle(8, ["apply"]))

    assert [c.insert_text for c in result.candidates] == ["List.apply"]
    assert result.replace_from == 3


def test_oracle_receives_cursor_and_buffer() -> None:
    oracle = fixed_oracle(0, [])

    CompletionBridge().complete(2, "pr", oracle)

    assert oracle.calls == [(2, "pr")]


def test_unterminated_buffer_completes_without_prefix_rewrite() -> None:
    bridge = CompletionBridge()

    result = bridge.complete(6, "foo(ba", fixed_oracle(4, ["bar"]))

    assert [c.insert_text for c in result.candidates] == ["bar"]
    assert result.replace_from == 4


def test_signatures_are_highlighted_and_written_above_the_edit_line() -> None:
    surface = RecordingSurface()
    bridge = CompletionBridge()
    signature = "def range(start: Int, end: Int): List[Int]"

    result = bridge.complete(
        5,
        "range",
        fixed_oracle(0, ["range"], [signature]),
        scheme=ColorScheme.default(),
        surface=surface,
    )

    assert len(surface.lines) == 1
    assert surface.lines == list(result.signatures)
    assert "\x1b[33m" in surface.lines[0]
    assert surface.redraws == 1


def test_no_signatures_means_no_redraw() -> None:
    surface = RecordingSurface()

    CompletionBridge().complete(1, "x", fixed_oracle(0, ["xs"]), surface=surface)

    assert surface.lines == []
    assert surface.redraws == 0


def test_null_oracle_returns_nothing() -> None:
    result = CompletionBridge().complete(3, "abc", null_oracle)

    assert result.candidates == ()
    assert result.signatures == ()
    assert result.replace_from == 3


def test_vocabulary_oracle_filters_words_and_members() -> None:
    oracle = VocabularyOracle(
        ["println", "print", "List"],
        members={"List": ["apply", "empty"]},
        signatures={"List.apply": ["def apply[A](elems: A*): List[A]"]},
    )

    assert oracle(5, "val p") == (4, ["println", "print"], ())
    assert oracle(7, "List.em") == (5, ["empty"], ())
    start, found, signatures = oracle(10, "List.apply")
    assert (start, found) == (5, ["apply"])
    assert signatures == ("def apply[A](elems: A*): List[A]",)


def test_vocabulary_member_completion_through_the_bridge() -> None:
    oracle = VocabularyOracle(["List"], members={"List": ["apply", "empty"]})

    result = CompletionBridge().complete(6, "List.a", oracle)

    assert [c.insert_text for c in result.candidates] == ["List.apply"]
    assert result.replace_from == 0
