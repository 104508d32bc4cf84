"""Subject rules — emptiness, length, full stop, casing."""

from __future__ import annotations

from typing import Optional

from commitgate.config.schema import LintConfig
from commitgate.rules.models import Rule
from commitgate.rules.parser import ParsedSubject


def _check_empty(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    if not parsed.description:
        return "subject must not be empty"
    return None


def _check_length(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    length = len(parsed.raw_description)
    if length > config.max_subject_length:
        return f"subject too long ({length} > {config.max_subject_length})"
    return None


def _check_full_stop(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    if parsed.raw_description.endswith("."):
        return "subject must not end with a period"
    return None


def _check_case(parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
    raw = parsed.raw_description
    # ASCII capitals only
    if not config.allow_capital_subject and raw and "A" <= raw[0] <= "Z":
        return "subject should start lowercase (imperative mood)"
    return None


SUBJECT_EMPTY = Rule(
    id="SUBJECT_EMPTY",
    name="Subject Not Empty",
    description="Description after the colon must not be blank.",
    check=_check_empty,
)

SUBJECT_MAX_LENGTH = Rule(
    id="SUBJECT_MAX_LENGTH",
    name="Subject Length",
    description="Description must not exceed max_subject_length characters.",
    check=_check_length,
)

SUBJECT_FULL_STOP = Rule(
    id="SUBJECT_FULL_STOP",
    name="No Trailing Period",
    description="Description must not end with a period.",
    check=_check_full_stop,
)

SUBJECT_CASE = Rule(
    id="SUBJECT_CASE",
    name="Lowercase Subject",
    description="Description must start lowercase unless capitals are allowed.",
    check=_check_case,
)

ALL_SUBJECT_RULES = [SUBJECT_EMPTY, SUBJECT_MAX_LENGTH, SUBJECT_FULL_STOP, SUBJECT_CASE]
