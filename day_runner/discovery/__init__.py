"""Discovery module - finding ``Day <N>`` project directories."""

from .scanner import DAY_PATTERN, WorkItem, compile_pattern, discover

__all__ = [
    "DAY_PATTERN",
    "WorkItem",
    "compile_pattern",
    "discover",
]
