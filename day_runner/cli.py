"""CLI entry point for day-runner.

Invoked with no arguments from a launcher sitting next to the
``Day <N>`` directories:
    python test-all.py

The base directory is always the invoked program's own directory.
Settings come from ``day-runner.yaml`` there and ``DAY_RUNNER_*``
environment variables, never from the command line.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from .config import resolve_config
from .config.schema import ENV_VERBOSE
from .discovery import discover
from .exceptions import DayRunnerError
from .runner import RunResult, SuiteExecutor

logger = logging.getLogger(__name__)

INTERRUPTED_STATUS = 130

TRUTHY = {"1", "true", "yes", "on"}


@click.command(add_help_option=False)
def main():
    """Run the test command in every Day <N> directory, stopping at the first failure."""
    setup_logging(os.environ.get(ENV_VERBOSE, "").strip().lower() in TRUTHY)

    try:
        try:
            config = resolve_config()
            items = discover(config.base_dir, config.pattern)
        except DayRunnerError as e:
            output_error(str(e))
            sys.exit(1)

        result = SuiteExecutor(command=config.command).execute(items)
    except KeyboardInterrupt:
        output_error("Interrupted")
        sys.exit(INTERRUPTED_STATUS)

    if config.report_path:
        save_report(result, config.command, config.report_path)

    sys.exit(result.exit_status)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr; stdout is reserved for banners."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("day_runner").setLevel(level)


def save_report(result: RunResult, command: list[str], path: Path) -> Optional[Path]:
    """Write the JSON report. Failure is logged and leaves the exit status alone."""
    from .reporting import write_report

    try:
        saved = write_report(result, command, path)
    except OSError as e:
        logger.warning("Failed to save report to %s: %s", path, e)
        return None

    logger.debug("Report saved: %s", saved)
    return saved


def output_error(message: str) -> None:
    click.echo(f"day-runner: {message}", err=True)


if __name__ == "__main__":
    main()
