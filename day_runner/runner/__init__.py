"""Runner module - sequential, fail-fast test execution."""

from .executor import (
    DEFAULT_COMMAND,
    ItemResult,
    RunResult,
    SuiteExecutor,
    run,
    shell_status,
)

__all__ = [
    "DEFAULT_COMMAND",
    "ItemResult",
    "RunResult",
    "SuiteExecutor",
    "run",
    "shell_status",
]
