"""Typed success/failure results returned by fetch operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FetchResult(Generic[T]):
    """Outcome of a fetch: a value, or the reason it could not be produced.

    Fetch operations return this instead of raising so the caller decides
    how to surface a failure.
    """

    value: T | None = None
    reason: str = ""
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.reason

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str, error: Exception | None = None) -> FetchResult[T]:
        return cls(reason=reason or "unknown error", error=error)
