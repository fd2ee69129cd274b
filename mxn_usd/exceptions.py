"""Failure taxonomy shared by the provider adapters and the rate service."""

from __future__ import annotations

from typing import Optional


class RateError(RuntimeError):
    """Base class for every failure that ends a rate request."""


class TransportError(RateError):
    """Raised when the provider could not be reached at all."""


class UpstreamError(RateError):
    """Raised when the provider answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseFailure(RateError):
    """Raised when a fetched payload cannot be interpreted as a valid rate."""


__all__ = [
    "ParseFailure",
    "RateError",
    "TransportError",
    "UpstreamError",
]
