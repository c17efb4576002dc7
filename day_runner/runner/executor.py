"""Suite executor - runs each work item's test command in turn.

Coordinates one pass over the discovered items:
1. Print the item's banner
2. Run the test command inside the item's directory
3. Stop at the first failure, skipping everything after it
"""

import logging
import os
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from ..discovery.scanner import WorkItem

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("cargo", "test", "--verbose")
BANNER_PREFIX = "===>"

# Statuses a POSIX shell reports when it cannot get a command going.
CD_FAILED_STATUS = 1
NOT_EXECUTABLE_STATUS = 126
NOT_FOUND_STATUS = 127


@dataclass
class ItemResult:
    """Outcome of one item's test command."""
    item: WorkItem
    returncode: int
    duration_ms: int = 0
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.returncode == 0


@dataclass
class RunResult:
    """Complete result of a run over all discovered items."""
    results: list[ItemResult] = field(default_factory=list)
    skipped: list[WorkItem] = field(default_factory=list)
    exit_status: int = 0
    duration_ms: int = 0

    @property
    def all_passed(self) -> bool:
        return self.exit_status == 0

    @property
    def attempted_count(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> Optional[ItemResult]:
        """The item that stopped the run, if any."""
        for r in self.results:
            if not r.passed:
                return r
        return None


def shell_status(returncode: int) -> int:
    """Map a subprocess return code to the status a shell would report.

    A child killed by signal N has a negative return code; shells report
    it as 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class SuiteExecutor:
    """Runs a test command in each work item's directory, fail-fast.

    The command runs with the item's path as its working directory. The
    executor never changes its own process's working directory.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        stream: Optional[TextIO] = None,
    ):
        """Initialize suite executor.

        Args:
            command: Test command argv, run once per item.
            stream: Where banners go. None = sys.stdout at the time of writing.
        """
        self.command = list(command)
        self.stream = stream

    def execute(self, work_items: Iterable[WorkItem]) -> RunResult:
        """Run every item in order until one fails.

        Returns:
            RunResult holding attempted items, skipped items and the
            overall exit status.
        """
        items = list(work_items)
        start_time = time.time()
        result = RunResult()

        for index, item in enumerate(items):
            self._print_banner(item)
            item_result = self._run_item(item)
            result.results.append(item_result)

            if not item_result.passed:
                result.exit_status = item_result.returncode
                result.skipped = items[index + 1:]
                logger.debug(
                    "%s failed with status %d, skipping %d item(s)",
                    item.label, item_result.returncode, len(result.skipped),
                )
                break

        result.duration_ms = int((time.time() - start_time) * 1000)
        return result

    def _print_banner(self, item: WorkItem) -> None:
        # Flushed so the banner lands before the child's own output.
        print(f"{BANNER_PREFIX} {item.label}", file=self.stream, flush=True)

    def _run_item(self, item: WorkItem) -> ItemResult:
        start_time = time.time()
        error = None
        path = Path(item.path)

        if not path.is_dir() or not os.access(path, os.X_OK):
            error = f"cannot enter directory {path}"
            returncode = CD_FAILED_STATUS
        else:
            logger.debug("Running %s in %s", " ".join(self.command), path)
            try:
                completed = subprocess.run(self.command, cwd=path)
                returncode = shell_status(completed.returncode)
            except FileNotFoundError:
                error = f"{self.command[0]}: command not found"
                returncode = NOT_FOUND_STATUS
            except PermissionError:
                error = f"{self.command[0]}: permission denied"
                returncode = NOT_EXECUTABLE_STATUS
            except OSError as e:
                error = f"{self.command[0]}: cannot execute: {e.strerror or e}"
                returncode = NOT_EXECUTABLE_STATUS

        if error:
            logger.error("%s: %s", item.label, error)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug("%s finished with status %d in %dms", item.label, returncode, duration_ms)
        return ItemResult(
            item=item,
            returncode=returncode,
            duration_ms=duration_ms,
            error=error,
        )


def run(
    work_items: Iterable[WorkItem],
    command: Sequence[str] = DEFAULT_COMMAND,
) -> int:
    """Run the test command for each item and return the overall status.

    0 if every item passed (or there were none), otherwise the status of
    the first failing item.
    """
    return SuiteExecutor(command=command).execute(work_items).exit_status
