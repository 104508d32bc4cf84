"""Rule engine — parser, models, registry, built-in rules."""

from commitgate.rules.models import Rule
from commitgate.rules.parser import (
    ParsedSubject,
    SubjectFormatError,
    is_merge_subject,
    parse_subject,
)
from commitgate.rules.registry import RuleLoadError, RuleRegistry, build_registry

__all__ = [
    "ParsedSubject",
    "Rule",
    "RuleLoadError",
    "RuleRegistry",
    "SubjectFormatError",
    "build_registry",
    "is_merge_subject",
    "parse_subject",
]
