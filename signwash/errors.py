"""Domain exceptions for sanitizer and CLI diagnostics."""

from __future__ import annotations


class SanitizerStageError(RuntimeError):
    """Raised when a specific sanitizer stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped sanitizer error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class PatternRuleError(SanitizerStageError):
    """Raised when an escape pattern rule cannot be compiled."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            stage="pattern",
            detail=detail,
            hint="Trigger must be one character and codes a non-empty character set.",
        )


class MalformedLineError(SanitizerStageError):
    """Raised when a line buffer cannot be decoded as text."""

    def __init__(self, index: int, encoding: str) -> None:
        super().__init__(
            stage="decode",
            detail=f"Line {index} is not valid `{encoding}` text.",
            hint="Use `malformed_line_policy: skip` to leave undecodable lines untouched.",
        )
        self.index = index
        self.encoding = encoding


class BufferAllocationError(SanitizerStageError):
    """Raised when the host store cannot allocate a replacement buffer."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(
            stage="allocate",
            detail=f"Failed to allocate replacement buffer for line {index}: {reason}",
        )
        self.index = index


class ConfigError(SanitizerStageError):
    """Raised when sanitizer configuration values are invalid."""

    def __init__(self, detail: str, hint: str | None = None) -> None:
        super().__init__(stage="config", detail=detail, hint=hint)


class BufferReadError(SanitizerStageError):
    """Raised when the host store cannot return the bytes of a line buffer."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(
            stage="read",
            detail=f"Failed to read buffer for line {index}: {reason}",
        )
        self.index = index


class BufferReleaseError(SanitizerStageError):
    """Raised when the host store cannot release a replaced line buffer."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(
            stage="release",
            detail=f"Failed to release buffer for line {index}: {reason}",
        )
        self.index = index
