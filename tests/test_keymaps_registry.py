import pytest

from repl_frontend.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "editor.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    keys: str = "ctrl+k",
    action_id: str = "editor.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        keys=keys,
        action_id=action_id,
        when=when,
        priority=priority,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="kill")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings("ctrl+k")) == [binding]


def test_binding_keys_are_normalized() -> None:
    binding = make_binding(binding_id="b", keys="CTRL+Enter")

    assert binding.keys == "ctrl+enter"


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="kill"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="kill.duplicate"))


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(
        make_binding(binding_id="empty", when=(WhenClause("buffer_empty"),))
    )
    registry.register_binding(
        make_binding(binding_id="typed", when=(WhenClause.parse("!buffer_empty"),))
    )

    assert registry.stats().binding_count == 2


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", keys="ctrl+y")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert list(registry.iter_bindings("ctrl+k")) == []


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.resolve("ctrl+k") is None


def test_resolve_respects_when_and_priority() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("low"))
    registry.register_action(make_action("high"))
    registry.register_binding(make_binding(binding_id="a", action_id="low"))
    registry.register_binding(
        make_binding(
            binding_id="b",
            action_id="high",
            when=(WhenClause("armed"),),
            priority=5,
        )
    )

    assert registry.resolve("ctrl+k", {"armed": True}).action.id == "high"
    assert registry.resolve("ctrl+k", {"armed": False}).action.id == "low"


def test_default_keymap_splits_ctrl_d_on_buffer_state() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    assert registry.resolve("ctrl+d", {"buffer_empty": True}).action.id == "editor.end_of_input"
    assert registry.resolve("ctrl+d", {"buffer_empty": False}).action.id == "editor.delete_forward"
    assert registry.resolve("enter").action.id == "editor.submit"
    assert registry.resolve("tab").action.id == "editor.complete"
    assert "alt+enter" in registry.stats().keys


def test_load_default_keymaps_is_repeatable() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)
    before = registry.stats()
    load_default_keymaps(registry)

    assert registry.stats() == before
