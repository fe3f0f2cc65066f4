import pytest

from notevim.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or KeySequence.typed("gg"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))


def test_prefix_of_existing_sequence_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(
        make_binding(binding_id="normal.daily", sequence=KeySequence.typed("\\oot"))
    )

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(
            make_binding(binding_id="normal.short", sequence=KeySequence.typed("\\oo"))
        )

    assert [conflict.id for conflict in excinfo.value.conflicts] == ["normal.daily"]


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.gg"))
    registry.register_binding(make_binding(binding_id="visual.gg", mode="visual"))

    assert registry.stats().binding_count == 2


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg", action_id="missing"))


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_update_binding_changes_sequence() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    updated = registry.update_binding(
        "binding", sequence=KeySequence.typed("dd"), description="delete line"
    )

    assert updated.sequence.tokens == ("d", "d")
    assert updated.description == "delete line"


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0


def test_default_keymaps_cover_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert set(registry.modes()) >= {
        "normal",
        "insert",
        "complete",
        "command",
        "search",
        "tag_files",
        "visual",
        "visual_block",
        "block_insert",
        "file_tree",
        "file_tree_visual",
    }
    assert registry.get_binding("normal.daily_tomorrow").sequence.tokens == ("\\", "o", "o", "T")
    assert registry.get_binding("normal.enter_visual_block").key_signature == "ctrl+v"


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("core.enter_insert",),
        include_bindings=("normal.enter_insert",),
    )

    assert registry.stats().binding_count == 1
    assert registry.get_binding("normal.enter_insert").action_id == "core.enter_insert"


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="normal.enter_insert",
        mode="normal",
        sequence=KeySequence.from_strings("I"),
        action_id="core.enter_insert",
    )

    load_default_keymaps(registry, per_mode_overrides={"normal": (custom_binding,)})

    assert registry.get_binding("normal.enter_insert").sequence.tokens == ("I",)


def test_per_mode_override_must_match_mode() -> None:
    registry = KeymapRegistry()
    stray = Binding(
        id="insert.enter_insert",
        mode="insert",
        sequence=KeySequence.from_strings("I"),
        action_id="core.enter_insert",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={"normal": (stray,)})
