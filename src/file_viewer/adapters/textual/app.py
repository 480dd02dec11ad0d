"""Executable Textual app hosting the file viewer."""

from __future__ import annotations

import argparse
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.widgets import Static

from file_viewer.commands import CommandSpecError, ResolvedCommand
from file_viewer.document import (
    AnnotationParseError,
    Document,
    apply_annotations,
    parse_annotations,
    records_for_path,
)
from file_viewer.engine import engine_from_config
from file_viewer.modes.mode_manager import ModeManager
from file_viewer.runtime import telemetry
from file_viewer.runtime.config import ViewerConfig
from file_viewer.session import ViewerMirror, ViewerSession

from .controller import TextualUIHooks, TextualViewerAdapter
from .render import render_mirror, status_text

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
}


@dataclass
class UIState:
    status_text: str = ""
    prompt_text: str = ""
    help_lines: Optional[List[str]] = None


class FileViewerApp(App[None]):
    """Full-screen viewer: document pane, status line, prompt line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#prompt-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [Binding("ctrl+q", "quit", "Quit", priority=True)]
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: ViewerSession, config: ViewerConfig) -> None:
        super().__init__()
        self.session = session
        self.config = config
        self.logger = telemetry.get_logger("file_viewer.app")
        self._ui_state = UIState()
        self.manager: ModeManager | None = None
        self.adapter: TextualViewerAdapter | None = None
        self._view_widget: Static | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._view_widget = Static("", id="document-view")
        self._status_widget = Static("", id="status-line")
        self._prompt_widget = Static("", id="prompt-line")
        yield self._view_widget
        yield self._status_widget
        yield self._prompt_widget

    def on_mount(self) -> None:
        self.manager = engine_from_config(self.session, self.config)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_prompt=self._show_prompt,
            show_help=self._show_help,
            run_command=self._run_command,
            quit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualViewerAdapter(self.manager, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter and self._view_widget:
            self.adapter.resize(max(1, self._view_widget.size.height))

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text, modifiers = normalize_key(event.key, event.character)
        height = self._view_widget.size.height if self._view_widget else None
        self.adapter.handle_textual_key(
            key, text=text, modifiers=modifiers, height=height or None
        )
        event.prevent_default()
        event.stop()

    def _active_mode_name(self) -> str:
        if self.manager and self.manager.active_name:
            return self.manager.active_name
        return "normal"

    def _update_view(self, mirror: ViewerMirror) -> None:
        if self._view_widget and self._ui_state.help_lines is None:
            self._view_widget.update(render_mirror(mirror))
        if self._status_widget:
            self._status_widget.update(
                status_text(self._active_mode_name(), mirror, self._ui_state.status_text)
            )

    def _update_status(self, status: str) -> None:
        self._ui_state.status_text = status

    def _show_prompt(self, prompt: str) -> None:
        self._ui_state.prompt_text = prompt
        if self._prompt_widget:
            self._prompt_widget.update(prompt)

    def _show_help(self, lines: Optional[List[str]]) -> None:
        self._ui_state.help_lines = lines
        if self._view_widget and lines is not None:
            self._view_widget.update("\n".join(lines))

    def _run_command(self, command: ResolvedCommand) -> None:
        # Spawn once the key that submitted the line has been handled.
        self.call_later(self._spawn_command, command)

    def _spawn_command(self, command: ResolvedCommand) -> None:
        self.logger.info(f"running {command.argv!r}")
        try:
            with self.suspend():
                completed = subprocess.run(command.argv, check=False)
        except SuspendNotSupported:
            self.logger.error(f"cannot suspend to run {command.program!r}")
            self._ui_state.status_text = f"{command.program}: cannot suspend the terminal"
        except OSError as exc:
            self.logger.error(f"failed to run {command.program!r}: {exc}")
            self._ui_state.status_text = f"{command.program}: {exc.strerror or exc}"
        else:
            self._ui_state.status_text = f"{command.program} exited {completed.returncode}"
        if self.adapter:
            self.adapter.refresh()

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def normalize_key(
    key: str, character: Optional[str]
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Map a Textual key name onto the viewer's ``(key, text, modifiers)``."""

    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key], None, ()
    parts = key.split("+") if len(key) > 1 else [key]
    modifiers, base = tuple(part for part in parts[:-1] if part), parts[-1]
    # Shifted printable keys arrive as e.g. ``shift+g`` with character ``G``.
    if character and character.isprintable() and set(modifiers) <= {"shift"}:
        return character, character, ()
    if modifiers:
        return base, None, modifiers
    return key.upper(), None, ()


def load_session(
    path: Path, *, annotations: Optional[Path] = None, name: Optional[str] = None
) -> ViewerSession:
    """Read ``path`` and optional annotation overlays into a fresh session."""

    document = Document.from_text(path.read_bytes())
    if annotations is not None:
        records = parse_annotations(annotations.read_bytes())
        apply_annotations(document, records_for_path(records, path))
    return ViewerSession(name=name or path.name, document=document)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-viewer",
        description="Modal read-only file viewer with search and user commands.",
    )
    parser.add_argument("path", type=Path, help="Path to the file to view")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the file to stdout and exit",
    )
    parser.add_argument(
        "--command",
        action="append",
        default=[],
        metavar="NAME:TEMPLATE",
        help="Register a user command (repeatable)",
    )
    parser.add_argument(
        "--annotations",
        type=Path,
        metavar="FILE",
        help="Overlay annotation records from FILE onto the document",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Viewport height used before the terminal reports its size",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.headless:
        telemetry.configure()
        try:
            content = args.path.read_bytes()
        except OSError as exc:
            parser.exit(1, f"file-viewer: {args.path}: {exc.strerror or exc}\n")
        sys.stdout.write(content.decode("utf-8", errors="replace") + "\n")
        return 0

    telemetry.configure(preset="quiet")
    try:
        config = ViewerConfig.from_env()
        config.add_commands(args.command)
    except CommandSpecError as exc:
        parser.error(str(exc))
    if args.height is not None:
        config.height = max(1, args.height)

    try:
        session = load_session(args.path, annotations=args.annotations)
    except OSError as exc:
        parser.exit(1, f"file-viewer: {exc.filename or args.path}: {exc.strerror or exc}\n")
    except AnnotationParseError as exc:
        parser.exit(1, f"file-viewer: {args.annotations}: {exc}\n")

    FileViewerApp(session, config).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())


__all__ = ["FileViewerApp", "load_session", "main", "normalize_key"]
