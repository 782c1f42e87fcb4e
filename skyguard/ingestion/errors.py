"""
Error taxonomy and tagged fetch outcomes.

Only ValidationError is ever surfaced to a dashboard client. Upstream
failures are converted into a FetchResult by the service layer, which
branches on it explicitly into the fallback path.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class SkyGuardError(Exception):
    """Base class for SkyGuard errors."""


class ValidationError(SkyGuardError):
    """Malformed caller input (bad request)."""


class UpstreamError(SkyGuardError):
    """Network/HTTP failure or malformed body from a third-party feed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResult(UpstreamError):
    """Upstream answered but yielded nothing usable."""


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of an upstream fetch: either data or the error that prevented it."""
    data: Optional[T] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> 'FetchResult[T]':
        return cls(data=data)

    @classmethod
    def failure(cls, error: UpstreamError) -> 'FetchResult[T]':
        return cls(error=error)
