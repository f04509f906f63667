"""Legacy color/format escape normalization.

Responsibilities:
- Recognize `&<code>` escape candidates with a rule compiled once per process.
- Rewrite candidates into the canonical `§<code>` form without re-escaping
  sequences that are already canonical.

Key types:
- `PatternRule`: compiled leftmost, non-overlapping candidate matcher.
- `EscapeNormalizer`: per-line transform built on a `PatternRule`.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from ..errors import PatternRuleError

TRIGGER = "&"
CANONICAL_MARKER = "§"
CODE_ALPHABET = "0123456789abcdefklmnor&"


@dataclass(frozen=True, slots=True)
class EscapeCandidate:
    """One `<trigger><code>` occurrence found in a line.

    Attributes:
        start: 0-based offset of the trigger character.
        code: Matched code character with its original case.
    """

    start: int
    code: str


class PatternRule:
    """Match legacy escape candidates left to right, case-insensitively."""

    def __init__(self, trigger: str = TRIGGER, codes: str = CODE_ALPHABET) -> None:
        """Compile the candidate pattern for `trigger` followed by one of `codes`."""

        if len(trigger) != 1:
            raise PatternRuleError(f"Trigger must be a single character, got {trigger!r}.")
        if not codes:
            raise PatternRuleError("Code alphabet must not be empty.")

        self.trigger = trigger
        self.codes = codes
        code_class = "".join(re.escape(code) for code in codes)
        try:
            self._pattern = re.compile(f"{re.escape(trigger)}([{code_class}])", re.IGNORECASE)
        except re.error as exc:
            raise PatternRuleError(f"Invalid escape pattern definition: {exc}") from exc

    def find_candidates(self, line: str) -> list[EscapeCandidate]:
        """Return every candidate in `line` in left-to-right order."""

        return [
            EscapeCandidate(start=match.start(), code=match.group(1))
            for match in self._pattern.finditer(line)
        ]

    def substitute(self, line: str, marker: str) -> str:
        """Replace each candidate's trigger with `marker`, keeping its code."""

        return self._pattern.sub(lambda match: marker + match.group(1), line)


LEGACY_ESCAPE_RULE = PatternRule()


class EscapeNormalizer:
    """Rewrite legacy escapes in one line into canonical marker form."""

    def __init__(
        self,
        rule: PatternRule = LEGACY_ESCAPE_RULE,
        canonical_marker: str = CANONICAL_MARKER,
    ) -> None:
        """Initialize with a compiled rule and the display layer's marker."""

        self.rule = rule
        self.canonical_marker = canonical_marker
        self._escaped_trigger = canonical_marker + rule.trigger

    def normalize(self, line: str) -> str:
        """Return `line` with candidates canonicalized and escaped triggers collapsed.

        `&&r` becomes `&r`: the first pair is an escaped literal trigger, so the
        trailing `r` is plain text. `§a` stays as it is because only trigger-led
        pairs are candidates.
        """

        if not line:
            return line

        marked = self.rule.substitute(line, self.canonical_marker)
        return marked.replace(self._escaped_trigger, self.rule.trigger)
