"""Header rules — type and scope checks."""

from __future__ import annotations

from typing import Optional

from commitgate.config.schema import LintConfig
from commitgate.rules.models import Rule
from commitgate.rules.parser import ParsedSubject


def _check_type(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    allowed = config.allowed_types
    if allowed is not None and parsed.type not in allowed:
        return f"type '{parsed.type}' is not allowed. Allowed: {', '.join(allowed)}"
    return None


def _check_scope_required(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    if not config.require_scope or parsed.scope:
        return None
    if parsed.type in (config.require_scope_except_types or ()):
        return None
    return "scope is required but missing"


def _check_scope(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    allowed = config.allowed_scopes
    if parsed.scope and allowed is not None and parsed.scope not in allowed:
        return f"scope '{parsed.scope}' is not in allowed list: {', '.join(allowed)}"
    return None


TYPE_ENUM = Rule(
    id="TYPE_ENUM",
    name="Allowed Type",
    description="Type must be one of the configured types.",
    check=_check_type,
)

SCOPE_REQUIRED = Rule(
    id="SCOPE_REQUIRED",
    name="Scope Required",
    description="Scope must be present unless the type is exempted.",
    check=_check_scope_required,
)

SCOPE_ENUM = Rule(
    id="SCOPE_ENUM",
    name="Allowed Scope",
    description="Scope, when present, must be one of the configured scopes.",
    check=_check_scope,
)

ALL_HEADER_RULES = [TYPE_ENUM, SCOPE_REQUIRED, SCOPE_ENUM]
