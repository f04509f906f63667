"""Sign-change event delivery.

Responsibilities:
- Define the inbound `SignChangeEvent` carrying a host-owned line collection.
- Describe the host's one-time callback registration as `EventRegistry`.
- Provide `InMemoryEventBus` as a synchronous registry for tests and simulations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(slots=True)
class SignChangeEvent:
    """One sign-text update delivered by the host.

    Attributes:
        lines: Fixed-length collection of buffer handles. Handlers may overwrite
            entries but never resize or reorder it.
        player: Optional name of the player who edited the sign.
        cancel: Host cancellation flag, carried through untouched.
    """

    lines: list[Any] = field(default_factory=list)
    player: str | None = None
    cancel: bool = False


SignChangeCallback = Callable[[SignChangeEvent], None]


class EventRegistry(Protocol):
    """Host registration entry point for sign-change handlers."""

    def register_sign_change_callback(self, callback: SignChangeCallback) -> None:
        """Install `callback` as a handler for sign-change events."""


class InMemoryEventBus:
    """Dispatch sign-change events synchronously to registered callbacks."""

    def __init__(self) -> None:
        self._callbacks: list[SignChangeCallback] = []

    def register_sign_change_callback(self, callback: SignChangeCallback) -> None:
        self._callbacks.append(callback)

    @property
    def callback_count(self) -> int:
        """Return number of registered sign-change handlers."""

        return len(self._callbacks)

    def dispatch(self, event: SignChangeEvent) -> SignChangeEvent:
        """Deliver `event` to every handler in registration order and return it."""

        for callback in self._callbacks:
            callback(event)
        return event
