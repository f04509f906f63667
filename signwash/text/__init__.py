"""Escape-sequence recognition and normalization for sign text."""

from .escapes import (
    CANONICAL_MARKER,
    CODE_ALPHABET,
    LEGACY_ESCAPE_RULE,
    TRIGGER,
    EscapeCandidate,
    EscapeNormalizer,
    PatternRule,
)

__all__ = [
    "CANONICAL_MARKER",
    "CODE_ALPHABET",
    "LEGACY_ESCAPE_RULE",
    "TRIGGER",
    "EscapeCandidate",
    "EscapeNormalizer",
    "PatternRule",
]
