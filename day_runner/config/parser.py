"""Configuration loading for day-runner.

Settings are layered, later layers winning:
defaults, ``day-runner.yaml`` in the base directory (or the file named
by ``DAY_RUNNER_CONFIG``), then ``DAY_RUNNER_*`` environment variables.
The base directory itself is not configurable.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ..discovery.scanner import compile_pattern
from ..exceptions import ConfigError
from .schema import (
    CONFIG_FILENAME,
    ENV_COMMAND,
    ENV_CONFIG,
    ENV_PATTERN,
    ENV_REPORT,
    VALID_FILE_KEYS,
    RunnerConfig,
    default_base_dir,
)

logger = logging.getLogger(__name__)


def load_config_file(file_path: Union[str, Path]) -> dict:
    """Load a YAML config file into a dictionary.

    An empty file is treated as an empty mapping.

    Raises:
        ConfigError: If the file is missing, unreadable or not a YAML mapping.
    """
    file_path = Path(file_path)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError("Config file not found", source=str(file_path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", source=str(file_path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML: {e}", source=str(file_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config must be a YAML mapping, got {type(data).__name__}",
            source=str(file_path),
        )
    return data


def parse_command(value: Any, source: str = "<inline>") -> list[str]:
    """Turn a command given as a list or a shell-style string into argv."""
    if isinstance(value, str):
        try:
            argv = shlex.split(value)
        except ValueError as e:
            raise ConfigError(f"Cannot parse command {value!r}: {e}", source=source) from e
    elif isinstance(value, list) and all(isinstance(a, str) for a in value):
        argv = list(value)
    else:
        raise ConfigError("'command' must be a string or a list of strings", source=source)

    if not argv:
        raise ConfigError("'command' must not be empty", source=source)
    return argv


def apply_config_data(
    config: RunnerConfig, data: Mapping[str, Any], source: str = "<inline>"
) -> RunnerConfig:
    """Apply settings from an already loaded config mapping.

    A relative ``report`` path is taken relative to the base directory.
    """
    unknown = sorted(set(data) - VALID_FILE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}", source=source)

    if "pattern" in data:
        if not isinstance(data["pattern"], str):
            raise ConfigError("'pattern' must be a string", source=source)
        config.pattern = data["pattern"]

    if "command" in data:
        config.command = parse_command(data["command"], source=source)

    if "report" in data:
        report = data["report"]
        if not isinstance(report, str) or not report:
            raise ConfigError("'report' must be a non-empty path string", source=source)
        config.report_path = config.base_dir / report

    return config


def resolve_config(
    base_dir: Optional[Union[str, Path]] = None,
    config_file: Optional[Union[str, Path]] = None,
    report_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RunnerConfig:
    """Build the effective configuration for a run.

    Args:
        base_dir: Directory to scan. None = the invoked program's directory.
        config_file: Explicit config file; must exist. Falls back to
            ``DAY_RUNNER_CONFIG``, then an optional ``day-runner.yaml`` in
            the base directory.
        report_path: Report path overriding every other layer.
        environ: Environment mapping. None = ``os.environ``.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    env = os.environ if environ is None else environ

    if base_dir is None:
        base_dir = default_base_dir()
    config = RunnerConfig(base_dir=Path(base_dir))

    if config_file is None and env.get(ENV_CONFIG):
        config_file = env[ENV_CONFIG]
    if config_file is None:
        candidate = config.base_dir / CONFIG_FILENAME
        if candidate.is_file():
            config_file = candidate

    if config_file is not None:
        config_file = Path(config_file)
        apply_config_data(config, load_config_file(config_file), source=str(config_file))
        config.source = config_file
        logger.debug("Loaded config from %s", config_file)

    if env.get(ENV_PATTERN):
        config.pattern = env[ENV_PATTERN]
    if env.get(ENV_COMMAND):
        config.command = parse_command(env[ENV_COMMAND], source=ENV_COMMAND)
    if env.get(ENV_REPORT):
        config.report_path = Path(env[ENV_REPORT])

    if report_path is not None:
        config.report_path = Path(report_path)

    # Surface a bad pattern now rather than at discovery time.
    compile_pattern(config.pattern)

    logger.debug(
        "Config: base_dir=%s pattern=%r command=%s report=%s",
        config.base_dir, config.pattern, config.command, config.report_path,
    )
    return config
