"""Textual host for the file viewer.

Only the UI-agnostic controller is imported here; the Textual application
lives in :mod:`file_viewer.adapters.textual.app`.
"""

from .controller import TextualUIHooks, TextualViewerAdapter

__all__ = ["TextualUIHooks", "TextualViewerAdapter"]
