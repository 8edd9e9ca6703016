"""fetch-retry: retry failed attempts of an asynchronous fetch."""

from fetch_retry.domain.config import FetchOptions, RetryPolicy
from fetch_retry.infrastructure.options import ConfigurationError
from fetch_retry.infrastructure.retry import RetryingFetch, retrying_fetch

__all__ = [
    "ConfigurationError",
    "FetchOptions",
    "RetryPolicy",
    "RetryingFetch",
    "retrying_fetch",
]
