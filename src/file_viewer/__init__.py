"""Modal, read-only file viewer with overlays, search, and user commands."""

__all__ = [
    "actions",
    "adapters",
    "commands",
    "document",
    "engine",
    "keymaps",
    "modes",
    "navigation",
    "runtime",
    "session",
]

__version__ = "0.1.0"
