import pytest

from file_viewer.keymaps import (
    ActionRef,
    Binding,
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


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
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["normal.gg"]


def test_same_keys_in_different_modes_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.gg"))
    registry.register_binding(make_binding(binding_id="visual.gg", mode="visual"))

    assert registry.stats().modes == ("normal", "visual")


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.lookup("normal", ("g", "g")) is None
    assert registry.revision() == before + 1


def test_key_stroke_parse_and_labels() -> None:
    sequence = KeySequence.from_strings("ctrl+u")

    assert sequence.tokens == ("ctrl+u",)
    assert sequence.label == "Ctrl-u"
    assert make_sequence("g", "g").label == "gg"
    assert make_sequence("ESC").label == "Esc"
    assert make_sequence("+").tokens == ("+",)


def test_load_default_keymaps_timeout_override() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, default_sequence_timeout_ms=1500)

    binding = registry.lookup("normal", ("g", "g"))
    assert binding is not None
    assert binding.sequence.timeout_ms == 1500


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_bindings=("normal.core.enter_visual.v",),
    )

    assert registry.stats().binding_count == 1
    binding = registry.get_binding("normal.core.enter_visual.v")
    assert binding.action_id == "core.enter_visual"


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="normal.core.enter_visual.v",
        mode="normal",
        sequence=KeySequence.from_strings("s"),
        action_id="core.enter_visual",
    )

    load_default_keymaps(registry, per_mode_overrides={"normal": (custom_binding,)})

    binding = registry.get_binding("normal.core.enter_visual.v")
    assert binding.sequence.tokens == ("s",)


def test_per_mode_override_must_match_mode() -> None:
    registry = KeymapRegistry()
    stray = Binding(
        id="visual.stray",
        mode="visual",
        sequence=KeySequence.from_strings("s"),
        action_id="core.enter_visual",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={"normal": (stray,)})


def test_default_bindings_cover_every_mode() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    assert set(registry.modes()) == {
        "normal",
        "visual",
        "visual_line",
        "command",
        "search",
        "help",
    }
    for mode in ("normal", "visual", "visual_line"):
        for keys in (("g", "g"), ("G",), ("ctrl+d",), ("w",), ("}",)):
            assert registry.lookup(mode, keys) is not None, (mode, keys)


def test_every_exported_action_is_registered_and_bound() -> None:
    import file_viewer.actions as actions

    handlers = {action.handler for action in DEFAULT_ACTIONS}
    bound = {binding.action_id for binding in DEFAULT_BINDINGS}

    for name in actions.__all__:
        assert getattr(actions, name) in handlers, name
    assert {action.id for action in DEFAULT_ACTIONS} <= bound
