"""Error types for the section dashboard."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for section dashboard errors."""


class ConfigurationError(DashboardError):
    """Invalid registry or configuration. Raised before any regeneration."""


class ProducerError(DashboardError):
    """A section producer failed or returned something other than text."""

    def __init__(self, producer: str, detail: str) -> None:
        super().__init__(f"{producer}: {detail}")
        self.producer = producer
        self.detail = detail

    def marker(self) -> str:
        return f"[error] {self.producer}: {self.detail}"


class HostIOError(DashboardError):
    """The host document surface could not be read or written."""
