"""Configuration models with Pydantic validation."""

from fetch_retry.domain.config.options import FetchOptions
from fetch_retry.domain.config.retry import RetryPolicy

__all__ = [
    "FetchOptions",
    "RetryPolicy",
]
