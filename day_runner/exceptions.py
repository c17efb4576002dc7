"""Exceptions for day-runner.

A failing test command is not an exception; it is reported through
``RunResult``. These cover the startup errors that stop a run before
any item is attempted.
"""


class DayRunnerError(Exception):
    """Base exception for day-runner errors."""

    pass


class ConfigError(DayRunnerError, ValueError):
    """Raised when configuration is missing, malformed or invalid."""

    def __init__(self, message, source=None):
        self.source = source
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class DiscoveryError(DayRunnerError, OSError):
    """Raised when the base directory cannot be listed."""

    def __init__(self, base_dir, reason):
        self.base_dir = base_dir
        self.reason = reason
        super().__init__(f"Cannot list {base_dir}: {reason}")
