"""Tests for the rule engine, built-in rules, and the registry."""

from pathlib import Path

import pytest

from commitgate.config.schema import CommitGateConfig, LintConfig, RulesConfig
from commitgate.git.models import Commit
from commitgate.linter.engine import lint_commits, lint_subject
from commitgate.rules.builtin import ALL_BUILTIN_RULES
from commitgate.rules.models import Rule
from commitgate.rules.parser import FORMAT_MESSAGE, parse_subject
from commitgate.rules.registry import RuleLoadError, RuleRegistry, build_registry


class TestValidSubjects:
    @pytest.mark.parametrize(
        "subject, config",
        [
            ("feat: add new feature", LintConfig(allowed_types=("feat",), max_subject_length=50)),
            ("fix(api): correct a bug", LintConfig(allowed_types=("fix",), max_subject_length=50)),
            ("refactor(parser)!: simplify the logic", LintConfig(allowed_types=("refactor",))),
            ("docs: Add documentation for API", LintConfig(allow_capital_subject=True)),
            ("test(auth): add more tests", LintConfig(require_scope=True)),
            ("revert: undo the last change", LintConfig(require_scope=True)),
            ("feat(ui): new button", LintConfig(allowed_scopes=("api", "ui"))),
            ("anything: goes", LintConfig(allowed_types=None)),
        ],
    )
    def test_no_violations(self, subject, config):
        assert lint_subject(subject, config) == []

    @pytest.mark.parametrize(
        "subject",
        [
            "Merge pull request #123 from feature/branch",
            "Merge branch 'feature/foo'",
            "Merge 9d7b7c932575348d7a2768fc781960128d9b16f2 into 15a00c61be9c996611064f3cb94a388cbe40c3a2",
        ],
    )
    def test_merge_subjects_ignore_config(self, subject):
        strict = LintConfig(
            allowed_types=("feat",),
            allowed_scopes=("api",),
            require_scope=True,
            require_scope_except_types=None,
            max_subject_length=1,
        )
        assert lint_subject(subject, strict) == []
        assert lint_subject(subject, LintConfig()) == []


class TestViolations:
    def test_wrong_format_short_circuits(self):
        strict = LintConfig(allowed_types=("feat",), require_scope=True, max_subject_length=1)
        assert lint_subject("missing colon", strict) == [FORMAT_MESSAGE]

    def test_unknown_type(self):
        cfg = LintConfig(allowed_types=("feat", "fix"))
        assert lint_subject("unknown: some message", cfg) == [
            "type 'unknown' is not allowed. Allowed: feat, fix"
        ]

    def test_empty_type_list_rejects_every_type(self):
        assert lint_subject("feat: add x", LintConfig(allowed_types=())) == [
            "type 'feat' is not allowed. Allowed: "
        ]

    def test_empty_scope_list_rejects_every_scope(self):
        cfg = LintConfig(allowed_scopes=())
        assert lint_subject("feat(api): add x", cfg) == [
            "scope 'api' is not in allowed list: "
        ]
        assert lint_subject("feat: add x", cfg) == []

    def test_scope_required_but_missing(self):
        cfg = LintConfig(require_scope=True, require_scope_except_types=None)
        assert lint_subject("feat: missing scope", cfg) == ["scope is required but missing"]

    def test_scope_not_in_allowed_list(self):
        cfg = LintConfig(allowed_scopes=("api", "ui"))
        assert lint_subject("feat(invalid): scope not allowed", cfg) == [
            "scope 'invalid' is not in allowed list: api, ui"
        ]

    def test_subject_too_long(self):
        cfg = LintConfig(max_subject_length=20)
        subject = "fix: this subject is definitely way too long for the linter to accept"
        assert lint_subject(subject, cfg) == ["subject too long (64 > 20)"]

    def test_length_at_limit_passes(self):
        cfg = LintConfig(max_subject_length=5)
        assert lint_subject("fix: abcde", cfg) == []

    def test_trailing_period(self):
        assert lint_subject("docs: add some documentation.", LintConfig()) == [
            "subject must not end with a period"
        ]

    def test_capital_subject(self):
        assert lint_subject("style: Format the code", LintConfig()) == [
            "subject should start lowercase (imperative mood)"
        ]

    def test_non_ascii_capital_allowed(self):
        assert lint_subject("docs: Éclaircir le guide", LintConfig()) == []

    def test_empty_subject(self):
        assert lint_subject("chore: ", LintConfig()) == ["subject must not be empty"]

    def test_whitespace_only_subject_uses_raw_length(self):
        cfg = LintConfig(max_subject_length=2)
        assert lint_subject("chore:    ", cfg) == [
            "subject must not be empty",
            "subject too long (3 > 2)",
        ]

    def test_leading_space_hides_capital(self):
        assert lint_subject("feat:  Leading space", LintConfig()) == []

    def test_all_violations_in_order(self):
        cfg = LintConfig(
            allowed_types=("feat",),
            allowed_scopes=("api",),
            max_subject_length=10,
        )
        assert lint_subject("wip(db): Rewrite everything here.", cfg) == [
            "type 'wip' is not allowed. Allowed: feat",
            "scope 'db' is not in allowed list: api",
            "subject too long (24 > 10)",
            "subject must not end with a period",
            "subject should start lowercase (imperative mood)",
        ]

    def test_scope_required_reported_before_length(self):
        cfg = LintConfig(require_scope=True, require_scope_except_types=None, max_subject_length=3)
        assert lint_subject("feat: abcd", cfg) == [
            "scope is required but missing",
            "subject too long (4 > 3)",
        ]

    def test_idempotent(self):
        cfg = LintConfig(allowed_types=("feat",), max_subject_length=10)
        subject = "fix: Something rather long."
        first = lint_subject(subject, cfg)
        assert first == lint_subject(subject, cfg)
        assert first == lint_subject(subject, cfg)


class TestRuleModel:
    def test_builtin_order(self):
        assert [r.id for r in ALL_BUILTIN_RULES] == [
            "TYPE_ENUM",
            "SCOPE_REQUIRED",
            "SCOPE_ENUM",
            "SUBJECT_EMPTY",
            "SUBJECT_MAX_LENGTH",
            "SUBJECT_FULL_STOP",
            "SUBJECT_CASE",
        ]

    def test_compiled_pattern_cached(self):
        rule = Rule(id="NO_WIP", name="No WIP", description="", pattern=r"(?i)\bwip\b")
        p1 = rule.compiled_pattern
        assert p1 is rule.compiled_pattern
        assert rule.is_custom is True

    def test_custom_rule_message(self):
        rule = Rule(
            id="NO_WIP", name="No WIP", description="",
            pattern=r"(?i)\bwip\b", message="subject contains '{match}'",
        )
        parsed = parse_subject("feat: WIP on login")
        assert rule.evaluate(parsed, LintConfig()) == "subject contains 'WIP'"

    def test_custom_rule_default_message(self):
        rule = Rule(id="NO_TODO", name="No TODO", description="", pattern=r"TODO")
        parsed = parse_subject("feat: TODO later")
        assert rule.evaluate(parsed, LintConfig()) == "subject matches forbidden pattern 'TODO'"

    def test_custom_rule_no_match(self):
        rule = Rule(id="NO_TODO", name="No TODO", description="", pattern=r"TODO")
        assert rule.evaluate(parse_subject("feat: done"), LintConfig()) is None


class TestRuleRegistry:
    def test_register_and_query(self):
        reg = RuleRegistry()
        rule = Rule(id="R1", name="R1", description="", pattern="x")
        reg.register(rule)
        assert reg.get("R1") is rule
        assert len(reg.all_rules) == 1

    def test_disable(self):
        cfg = CommitGateConfig(rules=RulesConfig(disable=["SUBJECT_CASE"]))
        reg = build_registry(cfg)
        assert "SUBJECT_CASE" not in [r.id for r in reg.enabled_rules()]
        assert lint_subject("style: Format the code", cfg.lint, reg) == []

    def test_disable_does_not_leak(self):
        build_registry(CommitGateConfig(rules=RulesConfig(disable=["SUBJECT_CASE"])))
        assert all(r.enabled for r in ALL_BUILTIN_RULES)
        assert lint_subject("style: Format the code", LintConfig()) == [
            "subject should start lowercase (imperative mood)"
        ]

    def test_load_custom_yaml(self, tmp_path: Path):
        rules_dir = tmp_path / ".commitgate-rules"
        rules_dir.mkdir()
        (rules_dir / "wip.yaml").write_text(
            "- id: NO_WIP\n"
            "  pattern: '(?i)\\bwip\\b'\n"
            "  message: \"subject must not contain '{match}'\"\n"
        )
        reg = build_registry(CommitGateConfig(), tmp_path)
        assert len(reg.custom_rules()) == 1
        assert reg.enabled_rules()[-1].id == "NO_WIP"
        assert lint_subject("feat: Wip login.", LintConfig(), reg) == [
            "subject must not end with a period",
            "subject should start lowercase (imperative mood)",
            "subject must not contain 'Wip'",
        ]

    def test_custom_rule_missing_pattern(self, tmp_path: Path):
        rules_dir = tmp_path / ".commitgate-rules"
        rules_dir.mkdir()
        (rules_dir / "bad.yml").write_text("id: BROKEN\n")
        with pytest.raises(RuleLoadError):
            build_registry(CommitGateConfig(), tmp_path)

    def test_custom_rule_invalid_regex(self, tmp_path: Path):
        rules_dir = tmp_path / ".commitgate-rules"
        rules_dir.mkdir()
        (rules_dir / "bad.yaml").write_text("id: BROKEN\npattern: '(unclosed'\n")
        with pytest.raises(RuleLoadError):
            build_registry(CommitGateConfig(), tmp_path)

    def test_no_rules_dir(self, tmp_path: Path):
        reg = build_registry(CommitGateConfig(), tmp_path)
        assert len(reg.all_rules) == len(ALL_BUILTIN_RULES)


class TestLintCommits:
    def test_collects_per_commit(self):
        commits = [
            Commit(sha="a" * 40, subject="feat: fine"),
            Commit(sha="b" * 40, subject="Bad subject"),
            Commit(sha="c" * 40, subject="fix: Trailing."),
            Commit(sha="d" * 40, subject="Merge branch 'main'"),
        ]
        cfg = LintConfig()
        result = lint_commits(commits, cfg, build_registry(CommitGateConfig(lint=cfg)))
        assert result.commits_checked == 4
        assert result.merges_skipped == 1
        assert result.total_violations == 3
        assert result.failing_commits == 2
        assert result.failed is True
        assert [v.short_sha for v in result.violations] == ["bbbbbbb", "ccccccc", "ccccccc"]

    def test_clean(self):
        cfg = LintConfig()
        result = lint_commits(
            [Commit(sha="a" * 40, subject="feat: fine")],
            cfg,
            build_registry(CommitGateConfig(lint=cfg)),
        )
        assert result.failed is False
        assert result.violations == []
