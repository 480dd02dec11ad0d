"""Literal search: submitting queries and cycling through hits."""

from __future__ import annotations

from file_viewer.keymaps import ResolutionMatch
from file_viewer.modes.base_mode import ModeContext, ModeResult
from file_viewer.modes.keymap_helpers import prompt_state


def submit_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = prompt_state(context, "search_state")
    query = str(state["text"])
    state["text"] = ""
    if not query:
        context.session.clear_search()
        context.bus.emit("search.clear", None)
        return ModeResult(consumed=True, switch_to="normal", status="search_empty")

    hit = context.session.set_search_query(query, context.height)
    hits = len(context.session.search.hits)
    context.bus.emit("search.submit", {"query": query, "hits": hits, "hit": hit})
    if hit is None:
        return ModeResult(
            consumed=True, switch_to="normal", status="search_miss", message=query
        )
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="search_hit",
        message=f"{query} ({hits} matches)",
    )


def clear_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    prompt_state(context, "search_state")["text"] = ""
    context.session.clear_search()
    context.bus.emit("search.clear", None)
    return ModeResult(consumed=True, switch_to="normal", status="search_clear")


def next_hit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _cycle(context, forward=True)


def prev_hit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _cycle(context, forward=False)


def _cycle(context: ModeContext, *, forward: bool) -> ModeResult:
    session = context.session
    if not session.search.hits:
        return ModeResult(consumed=True, status="search_inactive")
    before = session.cursor
    if forward:
        hit = session.next_hit(context.height)
    else:
        hit = session.prev_hit(context.height)
    context.bus.emit("cursor.move", {"from": before, "to": session.cursor})
    context.bus.emit("search.hit", {"hit": hit, "index": session.search.current})
    return ModeResult(consumed=True, status="search_hit")


__all__ = ["clear_search", "next_hit", "prev_hit", "submit_search"]
