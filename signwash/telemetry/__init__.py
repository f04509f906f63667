"""Telemetry and observability helpers."""

from .logger import SanitizerLogger

__all__ = ["SanitizerLogger"]
