class TodotuiError(Exception):
    pass


class TerminalInitError(TodotuiError):
    """The terminal could not be put into UI mode."""


class SyncError(TodotuiError):
    """Fetching data from the task service failed."""


class ConfigError(TodotuiError):
    pass


class ForcedShutdown(TodotuiError):
    """Raised on the main thread by a repeated interrupt signal."""
