"""Host-side collaborators: string buffer store and sign-change events."""

from .buffers import BufferReplacer, BufferStoreError, ExternalBufferStore, InMemoryBufferStore
from .events import EventRegistry, InMemoryEventBus, SignChangeCallback, SignChangeEvent

__all__ = [
    "BufferReplacer",
    "BufferStoreError",
    "EventRegistry",
    "ExternalBufferStore",
    "InMemoryBufferStore",
    "InMemoryEventBus",
    "SignChangeCallback",
    "SignChangeEvent",
]
