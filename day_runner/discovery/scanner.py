"""Directory scanner for day-runner.

Finds the immediate child directories of a base directory whose names
follow the ``Day <N>`` convention and orders them for execution.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Pattern, Union

from ..exceptions import ConfigError, DiscoveryError

logger = logging.getLogger(__name__)

# "Day " followed by at least one ASCII digit, anchored at the start of the name.
DAY_PATTERN = r"Day [0-9]+"


@dataclass(frozen=True)
class WorkItem:
    """A discovered project directory slated for one test run."""
    path: Path
    label: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "WorkItem":
        path = Path(path)
        return cls(path=path, label=path.name)

    def __str__(self) -> str:
        return self.label


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    """Compile a directory-name pattern.

    Raises:
        ConfigError: If the pattern is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Invalid directory pattern {pattern!r}: {e}") from e


def discover(
    base_dir: Union[str, Path],
    pattern: Union[str, Pattern[str]] = DAY_PATTERN,
) -> list[WorkItem]:
    """Discover work items under a base directory.

    Only immediate children are considered. A child is kept when it is a
    real directory (symlinks are not followed) and its name matches
    ``pattern`` from the first character. Files and other names are
    skipped without complaint.

    Args:
        base_dir: Directory to scan.
        pattern: Regular expression matched against each child's name.

    Returns:
        Work items sorted lexicographically by path string, so ``Day 10``
        comes before ``Day 2``.

    Raises:
        DiscoveryError: If ``base_dir`` cannot be listed.
        ConfigError: If ``pattern`` is not a valid regular expression.
    """
    base_dir = Path(base_dir)
    regex = compile_pattern(pattern)

    try:
        with os.scandir(base_dir) as entries:
            names = [
                entry.name
                for entry in entries
                if entry.is_dir(follow_symlinks=False) and regex.match(entry.name)
            ]
    except OSError as e:
        raise DiscoveryError(base_dir, e.strerror or str(e)) from e

    items = sorted(
        (WorkItem.from_path(base_dir / name) for name in names),
        key=lambda item: str(item.path),
    )

    logger.debug(
        "Discovered %d item(s) in %s: %s",
        len(items), base_dir, ", ".join(item.label for item in items) or "-",
    )
    return items
