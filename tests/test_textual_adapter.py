from __future__ import annotations

from typing import Any, Dict, List, Optional

from file_viewer.adapters.textual import TextualUIHooks, TextualViewerAdapter
from file_viewer.adapters.textual.render import char_offset, render_mirror, status_text
from file_viewer.commands import CommandSpec, ResolvedCommand
from file_viewer.engine import create_engine
from file_viewer.modes.mode_manager import ModeManager
from file_viewer.session import ViewerMirror, ViewerSession


def make_manager(text: str = "alpha beta\ngamma\n") -> ModeManager:
    commands = {"e": CommandSpec("e", "echo {line} {args}")}
    return create_engine(ViewerSession.from_text(text), commands=commands, height=5)


def test_adapter_updates_view_and_status() -> None:
    manager = make_manager()
    views: List[ViewerMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_view=views.append,
        update_status=statuses.append,
    )
    adapter = TextualViewerAdapter(manager, hooks)

    adapter.handle_textual_key("v", text="v")
    adapter.handle_textual_key("ESC")

    assert views[0].text == "alpha beta\ngamma"
    assert "enter_visual" in statuses
    assert "selection_cancel" in statuses


def test_adapter_relays_prompt_and_runs_commands() -> None:
    manager = make_manager()
    prompts: List[str] = []
    runs: List[ResolvedCommand] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_view=lambda mirror: None,
        show_prompt=prompts.append,
        run_command=runs.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualViewerAdapter(manager, hooks)

    for key in (":", "e", " ", "x"):
        adapter.handle_textual_key(key, text=key)
    adapter.handle_textual_key("ENTER")

    assert ":e x" in prompts
    assert prompts[-1] == ""
    assert ("command.submit", "e x") in events
    assert runs == [ResolvedCommand("echo", ("1", "x"))]


def test_adapter_shows_and_hides_help() -> None:
    manager = make_manager()
    shown: List[Optional[List[str]]] = []
    adapter = TextualViewerAdapter(
        manager, TextualUIHooks(update_view=lambda mirror: None, show_help=shown.append)
    )

    adapter.handle_textual_key("?", text="?")
    adapter.handle_textual_key("ESC")

    assert shown[0] is not None and shown[0][0] == "File Viewer Help"
    assert shown[-1] is None


def test_adapter_quits_on_q() -> None:
    manager = make_manager()
    quits: List[bool] = []
    adapter = TextualViewerAdapter(
        manager,
        TextualUIHooks(update_view=lambda mirror: None, quit=lambda: quits.append(True)),
    )

    adapter.handle_textual_key("q", text="q")

    assert quits == [True]


def test_adapter_surfaces_visual_selection_events() -> None:
    manager = make_manager()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_view=lambda mirror: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualViewerAdapter(manager, hooks)

    adapter.handle_textual_key("v", text="v")
    adapter.handle_textual_key("l", text="l")

    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads[-1]["payload"]["cursor"] == (0, 1)


def test_adapter_resize_and_key_height_update_context() -> None:
    manager = make_manager("\n".join(str(n) for n in range(20)))
    adapter = TextualViewerAdapter(manager, TextualUIHooks(update_view=lambda mirror: None))

    adapter.handle_textual_key("G", text="G", height=4)
    assert manager.context.height == 4
    assert manager.context.session.scroll == 16

    adapter.resize(0)
    assert manager.context.height == 1
    assert manager.context.session.scroll == 19


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    adapter = TextualViewerAdapter(
        manager, TextualUIHooks(update_view=lambda mirror: None, log=logs.append)
    )

    adapter.handle_textual_key("j", text="j")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='normal'" in line for line in logs)


def test_render_marks_cursor_hits_and_overlays() -> None:
    session = ViewerSession.from_text("héllo wörld\n")
    session.add_overlay(0, ["note"], 5)
    session.set_search_query("wö", 5)

    mirror = session.mirror(5)
    rendered = render_mirror(mirror)

    assert rendered.plain == "héllo wörld\nnote"
    assert char_offset("héllo".encode(), 6) == 5
    assert mirror.highlights == [(0, 7, 10)]
    assert status_text("visual_line", mirror).startswith("VISUAL LINE  1:8  2 rows")


def test_render_empty_document_shows_cursor_cell() -> None:
    rendered = render_mirror(ViewerSession().mirror(5))

    assert rendered.plain == " "
