"""Custom exception hierarchy for parkmap."""

from __future__ import annotations


class ParkmapError(Exception):
    """Base exception for all parkmap errors."""


class ParkmapConfigError(ParkmapError):
    """Invalid or missing configuration."""


class ParkmapTransportError(ParkmapError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ParkmapLayoutError(ParkmapError):
    """The layout document could not be read or is not a feature collection.

    A layout is required for any rendering, so callers surface this as a
    visible error state rather than falling back.
    """


class ParkmapFeedError(ParkmapError):
    """The live status feed payload has an unexpected shape."""
