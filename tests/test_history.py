from __future__ import annotations

from repl_frontend.history import HistoryStore


def test_seed_then_append_keeps_order_and_duplicates() -> None:
    store = HistoryStore(["a", "b"])

    store.append("b", accepted=True)
    store.append("1+", accepted=False)

    assert store.entries() == ("a", "b", "b", "1+")
    assert store.seeded_count == 2
    assert store.submitted_count == 2
    assert len(store) == 4
    assert store[-1] == "1+"


def test_append_notifies_both_listeners() -> None:
    seen: list[tuple[str, bool, str]] = []
    store = HistoryStore(listener=lambda text, ok: seen.append((text, ok, "store")))

    store.append(
        "x", accepted=False, listener=lambda text, ok: seen.append((text, ok, "call"))
    )

    assert seen == [("x", False, "store"), ("x", False, "call")]


def test_seeding_again_appends_rather_than_replacing() -> None:
    store = HistoryStore(["a"])

    added = store.seed(["a", "c"])

    assert added == 2
    assert list(store) == ["a", "a", "c"]
    assert store.submitted_count == 0
