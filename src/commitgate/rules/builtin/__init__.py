"""Built-in rules — in evaluation order."""

from commitgate.rules.builtin.header import ALL_HEADER_RULES
from commitgate.rules.builtin.subject import ALL_SUBJECT_RULES
from commitgate.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_HEADER_RULES,
    *ALL_SUBJECT_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
