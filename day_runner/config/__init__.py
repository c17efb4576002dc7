"""Config module - defaults, YAML file and environment settings."""

from .schema import CONFIG_FILENAME, RunnerConfig, default_base_dir
from .parser import apply_config_data, load_config_file, parse_command, resolve_config

__all__ = [
    "CONFIG_FILENAME",
    "RunnerConfig",
    "default_base_dir",
    "apply_config_data",
    "load_config_file",
    "parse_command",
    "resolve_config",
]
