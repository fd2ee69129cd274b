"""Service layer for orchestrating providers and response building."""

from .rate_service import RateService, UnknownProviderError

__all__ = [
    "RateService",
    "UnknownProviderError",
]
