"""Core datatypes shared across signwash modules.

Key types:
- `LineOutcome`: terminal state of one line after a sanitizer pass.
- `SanitizeReport`: ordered outcomes for one line collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field

STATUS_NULL = "null"
STATUS_EMPTY = "empty"
STATUS_UNCHANGED = "unchanged"
STATUS_MALFORMED = "malformed"
STATUS_REWRITTEN = "rewritten"


@dataclass(frozen=True, slots=True)
class LineOutcome:
    """Terminal state of one collection entry.

    Attributes:
        index: 0-based position in the line collection.
        status: One of `null`, `empty`, `unchanged`, `malformed`, or `rewritten`.
        original_length: Character count of the decoded input, or `0` when unreadable.
        rewritten_length: Character count of the installed text, equal to the
            original length unless the line was rewritten.
    """

    index: int
    status: str
    original_length: int = 0
    rewritten_length: int = 0

    @property
    def replaced(self) -> bool:
        """Return whether a new buffer was installed for this entry."""

        return self.status == STATUS_REWRITTEN


@dataclass(frozen=True, slots=True)
class SanitizeReport:
    """Per-line outcomes of one sanitizer invocation, in collection order."""

    outcomes: tuple[LineOutcome, ...] = field(default_factory=tuple)

    @property
    def rewritten_count(self) -> int:
        """Return number of lines whose buffer was replaced."""

        return sum(1 for outcome in self.outcomes if outcome.replaced)

    @property
    def malformed_count(self) -> int:
        """Return number of lines skipped because they could not be decoded."""

        return sum(1 for outcome in self.outcomes if outcome.status == STATUS_MALFORMED)
