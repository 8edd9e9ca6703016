"""Parsing of the options bag handed to a retrying fetch."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from fetch_retry.domain.config import FetchOptions, RetryPolicy

logger = logging.getLogger(__name__)

Options = Union[FetchOptions, Mapping[str, Any]]


class ConfigurationError(Exception):
    """Options validation error."""

    pass


def _format_validation_error(e: ValidationError) -> str:
    errors = []
    for error in e.errors():
        field = ".".join(str(x) for x in error["loc"])
        msg = error["msg"]
        errors.append(f"  - {field}: {msg}")
    return "Fetch options validation failed:\n" + "\n".join(errors)


def retry_policy_from_options(options: Optional[Options]) -> RetryPolicy:
    """Extract the retry policy from an options bag.

    Args:
        options: None, a FetchOptions instance or a plain mapping

    Returns:
        RetryPolicy (retries defaults to 3 when absent)

    Raises:
        ConfigurationError: If options has an unsupported type or retries is invalid
    """
    if options is None:
        return RetryPolicy()
    if isinstance(options, FetchOptions):
        return options.retry_policy()
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Fetch options must be a mapping or FetchOptions, got {type(options).__name__}"
        )

    retries = options.get("retries")
    if retries is None:
        return RetryPolicy()
    try:
        return RetryPolicy(retries=retries)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


def passthrough_options(options: Optional[Options]) -> Dict[str, Any]:
    """Return every option except the ones consumed by the retry layer."""
    if options is None:
        return {}
    if isinstance(options, FetchOptions):
        return options.passthrough()
    return {key: value for key, value in options.items() if key != "retries"}
