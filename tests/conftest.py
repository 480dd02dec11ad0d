from __future__ import annotations

import os

# Keep telelog off the console while pytest captures output.
os.environ.setdefault("FILE_VIEWER_DISABLE_CONSOLE", "1")
os.environ.setdefault("FILE_VIEWER_LOG_LEVEL", "WARNING")
