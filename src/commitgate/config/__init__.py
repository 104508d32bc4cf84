"""Configuration loading, schema, and defaults."""

from commitgate.config.loader import (
    ConfigError,
    get_env_bool,
    get_env_int,
    load_config,
    read_env_list,
)
from commitgate.config.schema import CommitGateConfig, LintConfig

__all__ = [
    "CommitGateConfig",
    "ConfigError",
    "LintConfig",
    "get_env_bool",
    "get_env_int",
    "load_config",
    "read_env_list",
]
