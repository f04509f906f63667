"""Structured sanitizer logging utilities.

Responsibilities:
- Emit concise, deterministic key=value lines for sanitizer activity via `loguru`.
- Never log sign text itself, only indices, lengths, and counts.
"""

from __future__ import annotations

import itertools
import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_SINK_TOKENS = itertools.count(1)


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class SanitizerLogger:
    """Emit deterministic sign-sanitizer events.

    Each instance writes through its own loguru handler and only its own
    records reach that handler. Handlers installed by the embedding host are
    left alone unless `exclusive` is set.
    """

    def __init__(
        self,
        sink: TextIO | None = None,
        level: str = "INFO",
        exclusive: bool = False,
    ) -> None:
        """Initialize logger sink and configure deterministic formatting.

        Args:
            sink: Text stream for log lines, defaulting to stderr.
            level: Minimum loguru level written to `sink`.
            exclusive: Remove every other loguru handler first, for CLI use.
        """

        self._sink = sink or sys.stderr
        if exclusive:
            _loguru_logger.remove()
        token = next(_SINK_TOKENS)
        self._logger = _loguru_logger.bind(signwash_sink=token)
        self._handler_id: int | None = _loguru_logger.add(
            self._sink,
            format="{message}",
            level=level,
            colorize=False,
            filter=lambda record: record["extra"].get("signwash_sink") == token,
        )

    def close(self) -> None:
        """Remove the handler this logger installed."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured log line."""

        self._logger.log(level, f"[sign] level={level} event={event}{_format_context(context)}")

    def log_start(self, line_count: int, player: str | None = None) -> None:
        """Emit an invocation-start event."""

        self._emit("DEBUG", "start", lines=line_count, player=player or "")

    def log_rewrite(self, index: int, original_length: int, rewritten_length: int) -> None:
        """Emit a per-line buffer replacement event."""

        self._emit(
            "DEBUG",
            "rewrite",
            index=index,
            original_length=original_length,
            rewritten_length=rewritten_length,
        )

    def log_malformed(self, index: int, encoding: str) -> None:
        """Emit a warning for a line skipped because it did not decode."""

        self._emit("WARNING", "malformed", index=index, encoding=encoding)

    def log_complete(self, line_count: int, rewritten: int, malformed: int) -> None:
        """Emit an invocation-complete summary."""

        self._emit("INFO", "complete", lines=line_count, malformed=malformed, rewritten=rewritten)

    def log_failure(self, stage: str, error_type: str, index: int | None = None) -> None:
        """Emit an invocation-failure event without sensitive payload details."""

        context: dict[str, object] = {"stage": stage, "error_type": error_type}
        if index is not None:
            context["index"] = index
        self._emit("ERROR", "failure", **context)
