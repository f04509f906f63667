"""Externally owned string buffers and the in-place replacement protocol.

Responsibilities:
- Describe the host's allocate/release entry points as `ExternalBufferStore`.
- Replace one entry of a line collection in strict order: hold the old handle,
  compute the new text, release the old handle, allocate, then install.
- Provide `InMemoryBufferStore` for tests, simulations, and Python hosts.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
import threading
from typing import Any, Protocol

from ..errors import (
    BufferAllocationError,
    BufferReadError,
    BufferReleaseError,
    MalformedLineError,
)
from ..models.datatypes import (
    STATUS_EMPTY,
    STATUS_NULL,
    STATUS_REWRITTEN,
    STATUS_UNCHANGED,
    LineOutcome,
)


class BufferStoreError(RuntimeError):
    """Raised by a buffer store when an allocation or handle lookup fails."""


class ExternalBufferStore(Protocol):
    """Host string allocator/deallocator pair."""

    def read(self, handle: Any) -> bytes:
        """Return the raw bytes held by a live handle."""

    def allocate(self, text: str) -> Any:
        """Return a new host-owned handle holding `text`."""

    def release(self, handle: Any) -> None:
        """Release `handle`; it must not be used afterwards."""


class InMemoryBufferStore:
    """Dictionary-backed buffer store with C-string semantics.

    Handles are positive integers. Text is stored encoded, and text containing
    NUL cannot be allocated. `max_live_buffers` simulates allocator exhaustion.
    Every allocate/release call is appended to `calls` in order.
    """

    def __init__(self, encoding: str = "utf-8", max_live_buffers: int | None = None) -> None:
        self.encoding = encoding
        self.max_live_buffers = max_live_buffers
        self.calls: list[tuple[str, int]] = []
        self._buffers: dict[int, bytes] = {}
        self._next_handle = 1
        self._lock = threading.Lock()

    def put_bytes(self, data: bytes) -> int:
        """Store raw bytes as a host-created buffer without recording a call."""

        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._buffers[handle] = data
            return handle

    def put(self, text: str) -> int:
        """Store host-created text without recording an allocation call."""

        return self.put_bytes(text.encode(self.encoding))

    def read(self, handle: int) -> bytes:
        with self._lock:
            data = self._buffers.get(handle)
        if data is None:
            raise BufferStoreError(f"Handle {handle} is not live.")
        return data

    def text(self, handle: int) -> str:
        """Decode a live handle with the store encoding."""

        return self.read(handle).decode(self.encoding)

    def allocate(self, text: str) -> int:
        if "\x00" in text:
            raise BufferStoreError("Text contains an interior NUL character.")
        with self._lock:
            if self.max_live_buffers is not None and len(self._buffers) >= self.max_live_buffers:
                raise BufferStoreError("Buffer store is exhausted.")
            handle = self._next_handle
            self._next_handle += 1
            self._buffers[handle] = text.encode(self.encoding)
            self.calls.append(("allocate", handle))
            return handle

    def release(self, handle: int) -> None:
        with self._lock:
            if self._buffers.pop(handle, None) is None:
                raise BufferStoreError(f"Handle {handle} is not live.")
            self.calls.append(("release", handle))

    def is_live(self, handle: int) -> bool:
        """Return whether `handle` still refers to a buffer."""

        with self._lock:
            return handle in self._buffers

    @property
    def live_count(self) -> int:
        """Return number of buffers currently held by the store."""

        return len(self._buffers)


class BufferReplacer:
    """Rewrite collection entries in place against an external store."""

    def __init__(
        self,
        store: ExternalBufferStore,
        *,
        encoding: str = "utf-8",
        serialize: bool = True,
    ) -> None:
        """Initialize with the host store and decoding settings.

        Args:
            store: Host allocate/release collaborator.
            encoding: Codec used to decode buffer bytes.
            serialize: Whether release/allocate/install runs under a lock shared
                by all invocations using this replacer.
        """

        self.store = store
        self.encoding = encoding
        self._lock: threading.Lock | None = threading.Lock() if serialize else None

    def rewrite(
        self,
        lines: MutableSequence[Any],
        index: int,
        transform: Callable[[str], str],
    ) -> LineOutcome:
        """Apply `transform` to entry `index`, replacing its buffer when the text changes.

        Raises:
            BufferReadError: If the store cannot return the buffer bytes.
            MalformedLineError: If the buffer bytes do not decode.
            BufferReleaseError: If the store fails to release the old buffer.
            BufferAllocationError: If the store cannot allocate the new buffer.
                On release or allocation failure the entry is left as `None`.
        """

        old_handle = lines[index]
        if old_handle is None:
            return LineOutcome(index=index, status=STATUS_NULL)

        try:
            raw = self.store.read(old_handle)
        except Exception as exc:
            raise BufferReadError(index, str(exc) or type(exc).__name__) from exc
        try:
            original = raw.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise MalformedLineError(index, self.encoding) from exc
        if not original:
            return LineOutcome(index=index, status=STATUS_EMPTY)

        rewritten = transform(original)
        if rewritten == original:
            return LineOutcome(
                index=index,
                status=STATUS_UNCHANGED,
                original_length=len(original),
                rewritten_length=len(original),
            )

        if self._lock is None:
            self._install(lines, index, old_handle, rewritten)
        else:
            with self._lock:
                self._install(lines, index, old_handle, rewritten)

        return LineOutcome(
            index=index,
            status=STATUS_REWRITTEN,
            original_length=len(original),
            rewritten_length=len(rewritten),
        )

    def _install(
        self,
        lines: MutableSequence[Any],
        index: int,
        old_handle: Any,
        rewritten: str,
    ) -> None:
        """Release the old handle, allocate the new text, and install it.

        The entry is cleared as soon as release is attempted, so any failure
        from here on leaves `None` rather than a handle the store may have freed.
        """

        try:
            self.store.release(old_handle)
        except Exception as exc:
            lines[index] = None
            raise BufferReleaseError(index, str(exc) or type(exc).__name__) from exc
        lines[index] = None

        try:
            new_handle = self.store.allocate(rewritten)
        except Exception as exc:
            raise BufferAllocationError(index, str(exc) or type(exc).__name__) from exc
        if new_handle is None:
            raise BufferAllocationError(index, "store returned no handle")
        lines[index] = new_handle
