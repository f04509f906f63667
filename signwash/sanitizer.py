"""Sign-text sanitizer orchestration.

Responsibilities:
- Walk a host line collection and normalize each entry through `BufferReplacer`.
- Apply the configured malformed-line policy and log per-invocation activity.
- Expose `handle_event` as the host callback and `init_plugin` as its one-time
  registration.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from typing import Any

from .config import MALFORMED_SKIP, SanitizerConfig
from .errors import MalformedLineError, SanitizerStageError
from .host.buffers import BufferReplacer, ExternalBufferStore
from .host.events import EventRegistry, SignChangeEvent
from .models.datatypes import STATUS_MALFORMED, LineOutcome, SanitizeReport
from .telemetry.logger import SanitizerLogger
from .text.escapes import LEGACY_ESCAPE_RULE, EscapeNormalizer


class SignTextSanitizer:
    """Normalize legacy escapes in host-owned sign lines in place."""

    def __init__(
        self,
        store: ExternalBufferStore,
        config: SanitizerConfig | None = None,
        logger: SanitizerLogger | None = None,
        report_callback: Callable[[SanitizeReport], None] | None = None,
    ) -> None:
        """Initialize with the host store, validated config, logger, and optional report hook."""

        self.config = config or SanitizerConfig()
        self.config.validate()
        self.normalizer = EscapeNormalizer(
            rule=LEGACY_ESCAPE_RULE,
            canonical_marker=self.config.canonical_marker,
        )
        self.replacer = BufferReplacer(
            store,
            encoding=self.config.text_encoding,
            serialize=self.config.serialize_replacements,
        )
        self.logger = logger or SanitizerLogger(level=self.config.log_level)
        self._report_callback = report_callback

    def process(self, lines: MutableSequence[Any], player: str | None = None) -> SanitizeReport:
        """Normalize every entry of `lines` and return per-line outcomes.

        Raises:
            BufferAllocationError: If a replacement buffer cannot be allocated.
            MalformedLineError: If a line does not decode and the policy is `raise`.
        """

        self.logger.log_start(len(lines), player=player)
        outcomes: list[LineOutcome] = []
        for index in range(len(lines)):
            try:
                outcome = self.replacer.rewrite(lines, index, self.normalizer.normalize)
            except MalformedLineError as exc:
                if self.config.malformed_line_policy != MALFORMED_SKIP:
                    self.logger.log_failure(exc.stage, type(exc).__name__, index=index)
                    raise
                self.logger.log_malformed(index, self.config.text_encoding)
                outcome = LineOutcome(index=index, status=STATUS_MALFORMED)
            except SanitizerStageError as exc:
                self.logger.log_failure(exc.stage, type(exc).__name__, index=index)
                raise
            if outcome.replaced:
                self.logger.log_rewrite(index, outcome.original_length, outcome.rewritten_length)
            outcomes.append(outcome)

        report = SanitizeReport(outcomes=tuple(outcomes))
        self.logger.log_complete(len(lines), report.rewritten_count, report.malformed_count)
        return report

    def handle_event(self, event: SignChangeEvent) -> None:
        """Host callback: sanitize the event's lines in place."""

        report = self.process(event.lines, player=event.player)
        if self._report_callback is not None:
            self._report_callback(report)


def init_plugin(
    registry: EventRegistry,
    store: ExternalBufferStore,
    config: SanitizerConfig | None = None,
    logger: SanitizerLogger | None = None,
    report_callback: Callable[[SanitizeReport], None] | None = None,
) -> SignTextSanitizer:
    """Build a sanitizer and register its handler with the host, once per process."""

    sanitizer = SignTextSanitizer(
        store,
        config=config,
        logger=logger,
        report_callback=report_callback,
    )
    registry.register_sign_change_callback(sanitizer.handle_event)
    return sanitizer
