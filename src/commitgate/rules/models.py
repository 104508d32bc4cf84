"""Rule data model — a built-in check function or a custom regex pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from commitgate.config.schema import LintConfig
from commitgate.rules.parser import ParsedSubject

CheckFn = Callable[[ParsedSubject, LintConfig], Optional[str]]


@dataclass
class Rule:
    """A single subject rule.

    Built-in rules carry a ``check`` callable. Custom rules carry a
    ``pattern`` searched in the raw description; the compiled regex is built
    lazily on first access via ``compiled_pattern``. ``{match}`` in
    ``message`` is replaced by the matched text.
    """

    id: str
    name: str
    description: str
    check: Optional[CheckFn] = field(default=None, repr=False, compare=False)
    pattern: Optional[str] = None
    message: Optional[str] = None
    enabled: bool = True

    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> Optional[re.Pattern[str]]:
        if self.pattern is None:
            return None
        if self._compiled_pattern is None:
            self._compiled_pattern = re.compile(self.pattern)
        return self._compiled_pattern

    @property
    def is_custom(self) -> bool:
        return self.check is None

    def evaluate(self, parsed: ParsedSubject, config: LintConfig) -> Optional[str]:
        """Return a violation message, or None when the subject passes."""
        if self.check is not None:
            return self.check(parsed, config)
        cp = self.compiled_pattern
        if cp is None:
            return None
        m = cp.search(parsed.raw_description)
        if m is None:
            return None
        template = self.message or f"subject matches forbidden pattern '{self.pattern}'"
        return template.replace("{match}", m.group(0))
