"""Starter .commitgate.toml template."""

DEFAULT_TOML = """\
# commitgate configuration
# Environment variables (TYPES, SCOPES, REQUIRE_SCOPE, ...) override this file.
version = "1.0"

[lint]
allowed_types = ["feat", "fix", "docs", "style", "refactor", "perf", "test", "build", "ci", "chore", "revert"]
# allowed_scopes = ["api", "ui"]     # empty = any scope
require_scope = false
require_scope_except_types = ["revert"]
allow_capital_subject = false
max_subject_length = 72

[rules]
# disable = ["SUBJECT_CASE"]

[output]
format = "terminal"       # terminal | json | github
show_summary = true

[ci]
# annotation_format = "github"   # github | none
# skip_for_bot = true
# bot_actors = ["release-please[bot]"]
# commit_limit = 200
"""
