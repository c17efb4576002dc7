"""Configuration model for day-runner."""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..discovery.scanner import DAY_PATTERN
from ..runner.executor import DEFAULT_COMMAND

CONFIG_FILENAME = "day-runner.yaml"

ENV_VERBOSE = "DAY_RUNNER_VERBOSE"
ENV_CONFIG = "DAY_RUNNER_CONFIG"
ENV_COMMAND = "DAY_RUNNER_COMMAND"
ENV_PATTERN = "DAY_RUNNER_PATTERN"
ENV_REPORT = "DAY_RUNNER_REPORT"

VALID_FILE_KEYS = {"pattern", "command", "report"}


def default_base_dir() -> Path:
    """Directory holding the invoked program, like ``dirname "$0"``."""
    return Path(sys.argv[0]).parent


@dataclass
class RunnerConfig:
    """Resolved settings for one run."""
    base_dir: Path = field(default_factory=default_base_dir)
    pattern: str = DAY_PATTERN
    command: list[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    report_path: Optional[Path] = None
    source: Optional[Path] = None  # config file that was loaded, if any

    def __post_init__(self):
        self.base_dir = Path(self.base_dir)
        if self.report_path is not None:
            self.report_path = Path(self.report_path)
