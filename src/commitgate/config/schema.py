"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

OutputFormat = Literal["terminal", "json", "github"]

DEFAULT_TYPES: Tuple[str, ...] = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

DEFAULT_MAX_SUBJECT_LENGTH = 72
DEFAULT_COMMIT_LIMIT = 200


@dataclass(frozen=True)
class LintConfig:
    """Rule inputs. ``None`` allow-lists mean "no restriction"."""

    allowed_types: Optional[Tuple[str, ...]] = DEFAULT_TYPES
    allowed_scopes: Optional[Tuple[str, ...]] = None
    require_scope: bool = False
    require_scope_except_types: Optional[Tuple[str, ...]] = ("revert",)
    allow_capital_subject: bool = False
    max_subject_length: int = DEFAULT_MAX_SUBJECT_LENGTH


@dataclass
class RulesConfig:
    disable: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class CIConfig:
    annotation_format: Literal["github", "none"] = "github"
    skip_for_bot: bool = True
    bot_actors: List[str] = field(default_factory=lambda: ["release-please[bot]"])
    commit_limit: int = DEFAULT_COMMIT_LIMIT


@dataclass
class CommitGateConfig:
    version: str = "1.0"
    lint: LintConfig = field(default_factory=LintConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ci: CIConfig = field(default_factory=CIConfig)
