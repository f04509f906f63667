"""Shared pytest fixtures for the full signwash test suite."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from signwash.host.buffers import InMemoryBufferStore
from signwash.telemetry.logger import SanitizerLogger


@pytest.fixture
def buffer_store() -> InMemoryBufferStore:
    """Provide an empty in-memory host buffer store."""

    return InMemoryBufferStore()


@pytest.fixture
def log_stream() -> io.StringIO:
    """Provide a text sink that captures sanitizer log lines."""

    return io.StringIO()


@pytest.fixture
def sanitizer_logger(log_stream: io.StringIO) -> Iterator[SanitizerLogger]:
    """Provide a debug-level logger writing into `log_stream`."""

    logger = SanitizerLogger(sink=log_stream, level="DEBUG")
    yield logger
    logger.close()
