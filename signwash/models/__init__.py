"""Data model package exports."""

from .datatypes import LineOutcome, SanitizeReport

__all__ = ["LineOutcome", "SanitizeReport"]
