from __future__ import annotations

from typing import Any, Dict, List

import pytest

from file_viewer.commands import CommandSpec, ResolvedCommand
from file_viewer.engine import create_engine
from file_viewer.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from file_viewer.modes import (
    CommandMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NormalMode,
    VisualMode,
)
from file_viewer.modes.mode_manager import ModeManager
from file_viewer.session import ViewerSession

TEXT = "alpha beta\ngamma\nbeta delta\n"


def make_context(
    registry: KeymapRegistry,
    resolver: KeymapResolver,
    *,
    session: ViewerSession | None = None,
) -> ModeContext:
    extras: Dict[str, Any] = {
        "keymap_registry": registry,
        "keymap_resolver": resolver,
    }
    return ModeContext(
        session=session or ViewerSession.from_text(TEXT),
        bus=ModeBus(),
        height=10,
        extras=extras,
    )


def make_manager(text: str = TEXT, **commands: str) -> ModeManager:
    table = {name: CommandSpec(name, template) for name, template in commands.items()}
    return create_engine(ViewerSession.from_text(text), commands=table, height=10)


def press(manager: ModeManager, *keys: str) -> None:
    for key in keys:
        manager.handle_key(KeyInput(key=key, text=key if len(key) == 1 else None))


def record(manager: ModeManager, event: str) -> List[object]:
    seen: List[object] = []
    manager.context.bus.subscribe(event, seen.append)
    return seen


def test_normal_mode_uses_keymap_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context(registry, KeymapResolver(registry))
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="v"))

    assert result.switch_to == "visual"
    assert result.consumed is True


def test_normal_mode_reports_unbound_keys() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context(registry, KeymapResolver(registry))

    result = NormalMode(context).handle_key(KeyInput(key="z", text="z"))

    assert result.consumed is False
    assert result.status == "miss"


def test_mode_requires_resolver_in_extras() -> None:
    context = ModeContext(session=ViewerSession(), bus=ModeBus())

    with pytest.raises(RuntimeError):
        NormalMode(context)


def test_gg_sequence_goes_to_first_line() -> None:
    manager = make_manager()
    press(manager, "G")
    assert manager.context.session.cursor == (2, 0)

    pending = manager.handle_key(KeyInput(key="g", text="g"))
    assert pending.status == "pending"
    assert pending.consumed is True

    manager.handle_key(KeyInput(key="g", text="g"))
    assert manager.context.session.cursor == (0, 0)


def test_pending_prefix_is_dropped_for_unrelated_key() -> None:
    manager = make_manager()

    press(manager, "g", "j")

    assert manager.context.session.cursor == (1, 0)
    assert not manager.has_pending_timeout


def test_pending_sequence_timeout_via_mode_manager() -> None:
    manager = make_manager()

    pending = manager.handle_key(KeyInput(key="g"))
    assert pending.timeout_ms is not None

    assert manager.has_pending_timeout
    assert manager.process_timeouts(now=0.0) is None

    expired = manager.process_timeouts(now=float("inf"))
    assert expired is not None
    assert expired.status == "timeout"
    assert expired.consumed is False
    assert not manager.has_pending_timeout
    assert manager.force_timeout() is None


def test_mode_switch_drops_pending_prefix() -> None:
    manager = make_manager()

    press(manager, "g", "v")

    assert manager.active_name == "visual"
    assert not manager.has_pending_timeout


def test_sequence_timeout_comes_from_engine_settings() -> None:
    manager = create_engine(ViewerSession.from_text(TEXT), sequence_timeout_ms=400)

    pending = manager.handle_key(KeyInput(key="g"))

    assert pending.timeout_ms == 400


def test_normal_mode_custom_default_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    # Without resolver hints the mode falls back to its own default.
    monkeypatch.setattr(KeymapResolver, "_pending_timeout", lambda self, node: None)
    context = make_context(registry, resolver)
    mode = NormalMode(context, default_pending_timeout_ms=250)

    pending = mode.handle_key(KeyInput(key="g"))

    assert pending.status == "pending"
    assert pending.timeout_ms == 250


def test_mode_manager_switches_and_reports() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    context = make_context(registry, resolver)
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)
    manager.register_mode(VisualMode)
    changes = record(manager, "mode.change")

    result = manager.handle_key(KeyInput(key="v"))

    assert result.switch_to == "visual"
    assert manager.active_name == "visual"
    assert changes == ["visual"]

    with pytest.raises(KeyError):
        manager.switch_mode("missing")
    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_half_page_uses_context_height() -> None:
    manager = make_manager("\n".join(f"row {n}" for n in range(30)))

    manager.handle_key(KeyInput(key="d", modifiers=("CTRL",)))

    assert manager.context.session.cursor == (5, 0)


def test_motion_emits_cursor_event() -> None:
    manager = make_manager()
    moves = record(manager, "cursor.move")

    press(manager, "w")

    assert moves == [{"from": (0, 0), "to": (0, 6)}]


def test_visual_selection_follows_motions() -> None:
    manager = make_manager()
    selections = record(manager, "visual.selection")

    press(manager, "l", "v", "j")

    session = manager.context.session
    assert session.selection_spans() == [(0, 1, 10), (1, 0, 1)]
    assert selections[-1] == {"anchor": (0, 1), "cursor": (1, 1), "mode": "char"}


def test_visual_escape_cancels_selection() -> None:
    manager = make_manager()
    press(manager, "v", "l")

    manager.handle_key(KeyInput(key="ESC"))

    assert manager.active_name == "normal"
    assert manager.context.session.selection_range() is None
    assert manager.context.session.cursor == (0, 1)


def test_visual_line_selects_whole_rows() -> None:
    manager = make_manager()

    press(manager, "l", "V", "j")

    assert manager.active_name == "visual_line"
    assert manager.context.session.selection_spans() == [(0, 0, 10), (1, 0, 5)]


def test_command_from_visual_uses_selection_then_clears_it() -> None:
    manager = make_manager(r="run {start_line}:{start_col} {end_line}:{end_col}")
    runs = record(manager, "command.run")

    press(manager, "v", "j", "l", ":")
    assert manager.active_name == "command"
    assert manager.context.session.selection.active

    press(manager, "r", "ENTER")

    assert runs == [ResolvedCommand("run", ("1:1", "2:2"))]
    assert manager.active_name == "normal"
    assert not manager.context.session.selection.active


def test_command_mode_text_entry_and_backspace() -> None:
    manager = make_manager(e="echo {line} {args}")
    submitted = record(manager, "command.submit")
    runs = record(manager, "command.run")

    press(manager, ":", "e", "x", "BACKSPACE", " ", "h", "i", "ENTER")

    assert submitted == ["e hi"]
    assert runs == [ResolvedCommand("echo", ("1", "hi"))]
    assert manager.context.extras["command_state"] == {"text": ""}


def test_command_mode_ignores_control_chords() -> None:
    manager = make_manager()
    press(manager, ":", "a")

    result = manager.handle_key(KeyInput(key="x", text="x", modifiers=("ctrl",)))

    assert result.consumed is False
    assert manager.context.extras["command_state"]["text"] == "a"


def test_unknown_command_reports_error() -> None:
    manager = make_manager()
    errors = record(manager, "command.error")

    press(manager, ":", "n", "o", "p", "e", "ENTER")

    assert errors == ["nope"]
    assert manager.active_name == "normal"


def test_empty_template_runs_nothing() -> None:
    manager = make_manager(a="{args}")
    runs = record(manager, "command.run")
    empties = record(manager, "command.empty")

    press(manager, ":", "a", "ENTER")

    assert runs == []
    assert empties == [None]


def test_command_escape_discards_text() -> None:
    manager = make_manager()

    press(manager, ":", "q", "ESC")

    assert manager.active_name == "normal"
    assert manager.context.extras["command_state"]["text"] == ""


def test_builtin_quit_and_help_commands() -> None:
    manager = make_manager()
    quits = record(manager, "viewer.quit")
    helps = record(manager, "help.open")

    press(manager, ":", "q", "ENTER")
    assert quits == [None]

    press(manager, ":", "h", "e", "l", "p", "ENTER")
    assert manager.active_name == "help"
    assert helps and helps[0][0] == "File Viewer Help"

    press(manager, "q")
    assert manager.active_name == "normal"
    assert quits == [None]


def test_builtins_match_the_whole_line_only() -> None:
    manager = make_manager(q="echo {args}")
    quits = record(manager, "viewer.quit")
    runs = record(manager, "command.run")

    press(manager, ":", "q", " ", "x", "ENTER")

    assert quits == []
    assert runs == [ResolvedCommand("echo", ("x",))]
    assert manager.active_name == "normal"


def test_q_quits_from_normal_and_visual() -> None:
    manager = make_manager()
    quits = record(manager, "viewer.quit")

    result = manager.handle_key(KeyInput(key="q", text="q"))
    assert result.status == "quit"

    press(manager, "v", "q")
    assert quits == [None, None]


def test_search_submit_and_cycle() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "/", "b", "e", "t", "a", "ENTER")

    assert manager.active_name == "normal"
    assert session.cursor == (0, 6)
    press(manager, "n")
    assert session.cursor == (2, 0)
    press(manager, "n")
    assert session.cursor == (0, 6)
    press(manager, "N")
    assert session.cursor == (2, 0)


def test_search_escape_keeps_hits_and_ctrl_c_clears() -> None:
    manager = make_manager()
    session = manager.context.session
    press(manager, "/", "b", "e", "t", "a", "ENTER")

    press(manager, "/", "x", "ESC")
    assert session.search.hits == [(0, 6), (2, 0)]

    press(manager, "/")
    manager.handle_key(KeyInput(key="c", modifiers=("ctrl",)))
    assert manager.active_name == "normal"
    assert not session.search.active


def test_next_hit_without_search_is_noop() -> None:
    manager = make_manager()

    result = manager.handle_key(KeyInput(key="n", text="n"))

    assert result.status == "search_inactive"
    assert manager.context.session.cursor == (0, 0)
