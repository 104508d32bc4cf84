"""Load and merge configuration from .commitgate.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from commitgate.config.schema import (
    DEFAULT_MAX_SUBJECT_LENGTH,
    CIConfig,
    CommitGateConfig,
    LintConfig,
    OutputConfig,
    RulesConfig,
)

CONFIG_FILENAME = ".commitgate.toml"

_TRUTHY = ("1", "true", "yes", "on")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


# ---- environment helpers ----


def parse_list(raw: str) -> Optional[List[str]]:
    """Split a comma-separated value, trimming and dropping empty tokens.

    Returns ``None`` when no tokens remain, meaning "no restriction".
    """
    tokens = [part.strip() for part in raw.split(",")]
    tokens = [t for t in tokens if t]
    return tokens or None


def read_env_list(name: str, default: str = "") -> Optional[List[str]]:
    """Read a comma-separated list from *name*, falling back to *default*.

    An unset or all-whitespace variable behaves as unset.
    """
    raw = os.environ.get(name, "")
    if not raw.strip():
        raw = default
    return parse_list(raw)


def get_env_bool(name: str, default: bool) -> bool:
    val = os.environ.get(name, "").lower()
    if val == "":
        return default
    return val in _TRUTHY


def get_env_int(name: str, default: int) -> int:
    """Positive integer from *name*; anything else recovers to *default*."""
    try:
        val = int(os.environ.get(name, ""))
    except ValueError:
        return default
    return val if val > 0 else default


# ---- file loading ----


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _to_tuple(value: Any, key: str) -> Optional[Tuple[str, ...]]:
    if isinstance(value, str):
        tokens = parse_list(value)
    elif isinstance(value, list):
        tokens = [str(v).strip() for v in value if str(v).strip()]
    else:
        raise ConfigError(f"[lint] {key} must be a list or a comma-separated string")
    return tuple(tokens) if tokens else None


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in _TRUTHY
    raise ConfigError(f"[lint] {key} must be a boolean")


def _to_length(value: Any) -> int:
    try:
        length = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_SUBJECT_LENGTH
    return length if length > 0 else DEFAULT_MAX_SUBJECT_LENGTH


def _build_lint(data: Dict[str, Any]) -> LintConfig:
    section = data.get("lint", {})
    values: Dict[str, Any] = {}
    for key in ("allowed_types", "allowed_scopes", "require_scope_except_types"):
        if key in section:
            values[key] = _to_tuple(section[key], key)
    for key in ("require_scope", "allow_capital_subject"):
        if key in section:
            values[key] = _to_bool(section[key], key)
    if "max_subject_length" in section:
        values["max_subject_length"] = _to_length(section["max_subject_length"])
    return LintConfig(**values)


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


# ---- env overrides ----


def _env_list_override(name: str, current: Optional[Tuple[str, ...]]) -> Optional[Tuple[str, ...]]:
    if not os.environ.get(name, "").strip():
        return current
    tokens = read_env_list(name)
    return tuple(tokens) if tokens else None


def _merge_env_overrides(cfg: CommitGateConfig) -> None:
    """Apply the workflow environment variables on top of file values."""
    lint = cfg.lint
    cfg.lint = LintConfig(
        allowed_types=_env_list_override("TYPES", lint.allowed_types),
        allowed_scopes=_env_list_override("SCOPES", lint.allowed_scopes),
        require_scope=get_env_bool("REQUIRE_SCOPE", lint.require_scope),
        require_scope_except_types=_env_list_override(
            "REQUIRE_SCOPE_EXCEPT_TYPES", lint.require_scope_except_types
        ),
        allow_capital_subject=get_env_bool("ALLOW_CAPITAL_SUBJECT", lint.allow_capital_subject),
        max_subject_length=get_env_int("MAX_SUBJECT", lint.max_subject_length),
    )
    cfg.ci.skip_for_bot = get_env_bool("SKIP_FOR_BOT", cfg.ci.skip_for_bot)

    if val := os.environ.get("CI_COMMITGATE_FORMAT"):
        if val in ("terminal", "json", "github"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CI_COMMITGATE_DISABLE_RULES"):
        cfg.rules.disable.extend(parse_list(val) or [])
    cfg.ci.commit_limit = get_env_int("CI_COMMITGATE_LIMIT", cfg.ci.commit_limit)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> CommitGateConfig:
    """Load, validate, and return a CommitGateConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = CommitGateConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = CommitGateConfig(
            version=raw.get("version", "1.0"),
            lint=_build_lint(raw),
            rules=_build_section(raw, RulesConfig, "rules"),
            output=_build_section(raw, OutputConfig, "output"),
            ci=_build_section(raw, CIConfig, "ci"),
        )

    _merge_env_overrides(cfg)
    return cfg
