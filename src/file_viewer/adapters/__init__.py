"""Host adapters that drive a :class:`~file_viewer.modes.mode_manager.ModeManager`."""
