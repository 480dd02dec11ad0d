"""Session façade and host snapshots."""

from .mirror import ViewerMirror, VisibleRow
from .session import ViewerSession

__all__ = ["ViewerMirror", "ViewerSession", "VisibleRow"]
