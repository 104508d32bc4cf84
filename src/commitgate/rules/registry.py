"""Rule registry — loads built-in and custom rules, applies config filters."""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from commitgate.config.schema import CommitGateConfig
from commitgate.rules.models import Rule

CUSTOM_RULES_DIRNAME = ".commitgate-rules"


class RuleLoadError(Exception):
    """Raised when a custom rule file cannot be read or is malformed."""


class RuleRegistry:
    """Ordered store for subject rules. Insertion order is evaluation order."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    def custom_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.is_custom]

    # ---- config filtering ----

    def apply_config(self, config: CommitGateConfig) -> None:
        """Disable rules listed in config.rules.disable."""
        for rule in self._rules.values():
            if rule.id in config.rules.disable:
                rule.enabled = False

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleLoadError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry or "pattern" not in entry:
                raise RuleLoadError(f"{path}: each rule needs an 'id' and a 'pattern'")
            rule = Rule(
                id=entry["id"],
                name=entry.get("name", entry["id"]),
                description=entry.get("description", ""),
                pattern=entry["pattern"],
                message=entry.get("message"),
            )
            self.register(rule)
            count += 1
        return count


def build_registry(config: CommitGateConfig, repo_root: Optional[Path] = None) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from commitgate.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    # Copies, so that disabling never leaks into the module-level rules
    registry.register_many([dataclasses.replace(r) for r in ALL_BUILTIN_RULES])

    if repo_root is not None:
        registry.load_custom_rules(repo_root / CUSTOM_RULES_DIRNAME)

    registry.apply_config(config)

    # Force-compile patterns now (not inside the per-commit loop)
    for rule in registry.enabled_rules():
        try:
            _ = rule.compiled_pattern
        except re.error as exc:
            raise RuleLoadError(f"Invalid pattern in rule {rule.id}: {exc}") from exc

    return registry
